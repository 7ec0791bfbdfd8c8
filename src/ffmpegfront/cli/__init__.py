"""Command-line entry point for ffmpegfront."""

from __future__ import annotations

import dataclasses
import logging
from pathlib import Path

import click

from ffmpegfront.cli.exit_codes import ExitCode
from ffmpegfront.cli.output import error_exit
from ffmpegfront.config import FrontConfig, get_config
from ffmpegfront.encode.loudnorm import LoudnormSinglePass
from ffmpegfront.exceptions import (
    ConfigurationError,
    FfmpegFrontError,
    MeasurementError,
    MissingArgumentsError,
    ToolNotFoundError,
)
from ffmpegfront.jobs import JobRequest, format_args, run_job
from ffmpegfront.logging import configure_logging, resolve_log_path
from ffmpegfront.settings import TEMPLATE_NAMES, make_template, write_settings

logger = logging.getLogger(__name__)

JOB_LOGGER = "ffmpegfront.job"
DEFAULT_TEMPLATE_FILE = Path("template.json")


def _exit_code_for(error: FfmpegFrontError) -> ExitCode:
    """Map an ffmpegfront error to the CLI exit code."""
    if isinstance(error, ConfigurationError):
        return ExitCode.CONFIG_ERROR
    if isinstance(error, ToolNotFoundError):
        return ExitCode.TOOL_NOT_AVAILABLE
    if isinstance(error, MeasurementError):
        return ExitCode.ANALYSIS_ERROR
    return ExitCode.GENERAL_ERROR


def _write_template(name: str, destination: Path) -> None:
    settings = make_template(name)
    try:
        path = write_settings(settings, destination)
    except OSError as e:
        error_exit(f"Failed to write template {destination}: {e}", ExitCode.CONFIG_ERROR)
    click.echo(f"Wrote {name if name in TEMPLATE_NAMES else 'template'} to {path}")


def _setup_job_logging(config: FrontConfig, output_path: Path) -> logging.Logger:
    """Point logging at the job log file and return the job logger."""
    log_path = resolve_log_path(config.logging.file, output_path)
    configure_logging(dataclasses.replace(config.logging, file=log_path))
    return logging.getLogger(JOB_LOGGER)


@click.command(context_settings={"help_option_names": ["-h", "-help", "--help"]})
@click.version_option(package_name="ffmpegfront")
@click.option(
    "-make-template",
    "--make-template",
    "template_name",
    metavar="NAME",
    help=f"Write a template settings file and exit: {', '.join(TEMPLATE_NAMES)}.",
)
@click.option(
    "--template-out",
    type=click.Path(dir_okay=False, path_type=Path),
    default=DEFAULT_TEMPLATE_FILE,
    show_default=True,
    help="Where -make-template writes the template.",
)
@click.option(
    "-args-only",
    "--args-only",
    is_flag=True,
    help="Print the ffmpeg arguments instead of executing ffmpeg with them.",
)
@click.option(
    "-infile",
    "--infile",
    type=click.Path(path_type=Path),
    help="File to process with ffmpeg.",
)
@click.option(
    "-outfile",
    "--outfile",
    type=click.Path(path_type=Path),
    help="File to write output to.",
)
@click.option(
    "-settings",
    "--settings",
    "settings_path",
    type=click.Path(path_type=Path),
    help="Settings JSON file to read.",
)
@click.option(
    "-logfile",
    "--logfile",
    type=click.Path(path_type=Path),
    help="Log file to write to. Defaults to <outfile>.log.",
)
@click.option(
    "--config",
    "config_path",
    type=click.Path(exists=True, dir_okay=False, path_type=Path),
    help="Config file (default: ~/.config/ffmpegfront/config.toml).",
)
@click.option(
    "--ffmpeg",
    "ffmpeg_path",
    type=click.Path(path_type=Path),
    help="Path to the ffmpeg executable.",
)
@click.option(
    "--log-level",
    type=click.Choice(["debug", "info", "warning", "error"], case_sensitive=False),
    help="Log level.",
)
@click.option("--log-json", is_flag=True, help="Write the log as JSON lines.")
@click.option(
    "--loudnorm-single-pass",
    type=click.Choice([mode.value for mode in LoudnormSinglePass]),
    help="How to handle audioFilter 'loudnorm' without loudnorm2Pass.",
)
@click.option(
    "--propagate-encoder-status/--ignore-encoder-status",
    default=None,
    help="Exit non-zero when ffmpeg fails (default: on).",
)
def main(
    template_name: str | None,
    template_out: Path,
    args_only: bool,
    infile: Path | None,
    outfile: Path | None,
    settings_path: Path | None,
    logfile: Path | None,
    config_path: Path | None,
    ffmpeg_path: Path | None,
    log_level: str | None,
    log_json: bool,
    loudnorm_single_pass: str | None,
    propagate_encoder_status: bool | None,
) -> None:
    """Translate a JSON settings file into an ffmpeg run.

    Examples:

        # Write a settings file to start from
        ffmpegfront -make-template tv-normal

        # Show the ffmpeg arguments without running ffmpeg
        ffmpegfront -infile in.mkv -outfile out.mp4 -settings tv.json -args-only
    """
    if template_name is not None:
        _write_template(template_name, template_out)
        return

    missing = [
        name
        for name, value in (
            ("infile", infile),
            ("outfile", outfile),
            ("settings", settings_path),
        )
        if value is None
    ]
    if missing:
        error_exit(str(MissingArgumentsError(missing)), ExitCode.CONFIG_ERROR)

    try:
        config = get_config(
            config_path=config_path,
            ffmpeg_path=ffmpeg_path,
            log_level=log_level,
            log_file=logfile,
            log_format="json" if log_json else None,
            loudnorm_single_pass=loudnorm_single_pass,
            propagate_encoder_status=propagate_encoder_status,
        )
    except ConfigurationError as e:
        error_exit(str(e), ExitCode.CONFIG_ERROR)

    log = _setup_job_logging(config, outfile)
    request = JobRequest(
        input_path=infile,
        output_path=outfile,
        settings_path=settings_path,
        args_only=args_only,
    )

    try:
        result = run_job(request, config=config, log=log)
    except FfmpegFrontError as e:
        log.error("%s", e)
        error_exit(str(e), _exit_code_for(e))

    if args_only:
        click.echo(format_args(result.args))
        return

    if not result.success and config.behavior.propagate_encoder_status:
        error_exit(
            f"ffmpeg exited with status {result.returncode}; see the log for output",
            ExitCode.OPERATION_FAILED,
        )
