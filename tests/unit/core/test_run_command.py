"""Tests for the subprocess wrapper."""

import subprocess
import sys
from pathlib import Path
from unittest.mock import MagicMock, patch

import pytest

from ffmpegfront.core.subprocess_utils import CommandResult, run_command


class TestRunCommand:
    """Tests for run_command function."""

    def test_successful_command(self):
        """run_command captures stdout and the exit status."""
        result = run_command([sys.executable, "-c", "print('hello')"])

        assert result.stdout.strip() == "hello"
        assert result.returncode == 0
        assert result.success
        assert result.elapsed >= 0

    def test_command_with_path_args(self, tmp_path: Path):
        """Path arguments are converted to strings."""
        result = run_command([sys.executable, "-c", "pass", tmp_path])

        assert result.args[-1] == str(tmp_path)
        assert result.returncode == 0

    def test_failure_returns_non_zero(self):
        result = run_command(
            [sys.executable, "-c", "import sys; sys.stderr.write('boom'); sys.exit(3)"]
        )

        assert result.returncode == 3
        assert not result.success
        assert result.stderr == "boom"

    def test_merge_stderr(self):
        """Merged output arrives on stdout in write order."""
        script = (
            "import sys; print('out', flush=True); "
            "sys.stderr.write('err\\n'); sys.stderr.flush()"
        )
        result = run_command([sys.executable, "-c", script], merge_stderr=True)

        assert result.stdout.splitlines() == ["out", "err"]
        assert result.stderr == ""

    def test_timeout_raises_exception(self):
        with pytest.raises(subprocess.TimeoutExpired):
            run_command(
                [sys.executable, "-c", "import time; time.sleep(10)"], timeout=1
            )

    def test_missing_executable(self, tmp_path: Path):
        with pytest.raises(FileNotFoundError):
            run_command([tmp_path / "no-such-ffmpeg", "-version"])

    @patch("ffmpegfront.core.subprocess_utils.subprocess.run")
    def test_passes_kwargs_to_subprocess(self, mock_run: MagicMock):
        mock_run.return_value = MagicMock(stdout="output", stderr=None, returncode=0)

        result = run_command(["ffmpeg", "-version"], cwd="/tmp")

        call_kwargs = mock_run.call_args[1]
        assert call_kwargs["cwd"] == "/tmp"
        assert call_kwargs["encoding"] == "utf-8"
        assert call_kwargs["errors"] == "replace"
        assert call_kwargs["stderr"] == subprocess.PIPE
        assert result.stderr == ""


class TestCommandResult:
    def test_output_combines_streams(self):
        result = CommandResult(("ffmpeg",), 0, "out", "err", 0.1)
        assert result.output == "out\nerr"

    def test_output_single_stream(self):
        result = CommandResult(("ffmpeg",), 1, "", "err", 0.1)
        assert result.output == "err"
