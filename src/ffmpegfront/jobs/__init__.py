"""Job orchestration: settings in, one ffmpeg run out."""

from ffmpegfront.jobs.runner import JobRequest, JobResult, format_args, run_job

__all__ = [
    "JobRequest",
    "JobResult",
    "format_args",
    "run_job",
]
