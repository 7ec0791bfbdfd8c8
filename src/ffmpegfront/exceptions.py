"""Exceptions raised by ffmpegfront components.

Components never terminate the process themselves. They raise one of these
errors and the CLI maps it to an exit code.
"""


class FfmpegFrontError(Exception):
    """Base class for all ffmpegfront errors."""

    pass


class ConfigurationError(FfmpegFrontError):
    """Invalid user input: flags, settings documents, or config files."""

    pass


class MissingArgumentsError(ConfigurationError):
    """Raised when required command-line flags were not supplied."""

    def __init__(self, missing: list[str]) -> None:
        self.missing = missing
        super().__init__(
            "Need the following flags to be used: "
            + ", ".join(f"-{name}" for name in missing)
            + ". Or call with -make-template to write a template settings file."
        )


class SettingsValidationError(ConfigurationError):
    """Error while reading or validating a settings document."""

    def __init__(self, message: str, field: str | None = None) -> None:
        self.message = message
        self.field = field
        super().__init__(message)


class ResolutionError(ConfigurationError):
    """Raised when a resolution is neither a preset name nor a w:h string."""

    def __init__(self, resolution: str) -> None:
        self.resolution = resolution
        super().__init__(
            f"{resolution} is not a preprogrammed resolution. "
            "Please enter it as w:h in the 'resolution' field, "
            "e.g. 'resolution': '1280:720'"
        )


class ToolNotFoundError(FfmpegFrontError):
    """Raised when the ffmpeg executable cannot be located."""

    def __init__(self, tool: str, hint: str | None = None) -> None:
        self.tool = tool
        message = f"Required tool not found: {tool}"
        if hint:
            message = f"{message}. {hint}"
        super().__init__(message)


class MeasurementError(FfmpegFrontError):
    """Raised when the loudness analysis pass fails or cannot be parsed.

    Attributes:
        diagnostics: Raw diagnostic text captured from the analysis pass.
        returncode: Exit code of the analysis process, if it ran.
    """

    def __init__(
        self,
        message: str,
        diagnostics: str = "",
        returncode: int | None = None,
    ) -> None:
        self.diagnostics = diagnostics
        self.returncode = returncode
        super().__init__(message)
