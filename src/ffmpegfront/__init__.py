"""ffmpegfront: build and run ffmpeg invocations from JSON settings documents."""

__version__ = "0.1.0"
