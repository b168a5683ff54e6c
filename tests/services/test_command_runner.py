import sys

import pytest

from renix.errors import RenixError
from renix.services.command_runner import CommandRunner


class DummyLogger:
    def debug(self, *_args, **_kwargs):
        return None


class RecordingConsole:
    def __init__(self):
        self.lines = []

    def print(self, text, **_kwargs):
        self.lines.append(text)


def test_command_runner_raises_with_stderr():
    runner = CommandRunner(logger=DummyLogger())

    with pytest.raises(RenixError, match="boom"):
        runner.run(
            [sys.executable, "-c", "import sys; sys.stderr.write('boom'); sys.exit(1)"],
            check=True,
            capture_output=True,
        )


def test_command_runner_returns_when_check_disabled():
    runner = CommandRunner(logger=DummyLogger())

    result = runner.run(
        [sys.executable, "-c", "import sys; sys.exit(1)"],
        check=False,
        capture_output=True,
    )

    assert result.returncode == 1


def test_command_runner_reports_missing_command():
    runner = CommandRunner(logger=DummyLogger())

    with pytest.raises(RenixError, match="Required command not found"):
        runner.run(["renix-definitely-not-installed"])


def test_stream_writes_log_and_echoes_lines(tmp_path):
    console = RecordingConsole()
    runner = CommandRunner(logger=DummyLogger(), console=console)
    log_path = tmp_path / "rebuild.log"
    log_path.write_text("stale content from the last run\n", encoding="utf-8")

    returncode = runner.stream(
        [
            sys.executable,
            "-c",
            "import sys; print('building'); sys.stderr.write('error: oops\\n'); sys.exit(3)",
        ],
        str(log_path),
    )

    assert returncode == 3
    content = log_path.read_text(encoding="utf-8")
    assert "building" in content
    assert "error: oops" in content
    assert "stale content" not in content
    assert "building" in console.lines


def test_stream_keeps_undecodable_output_and_waits_for_the_command(tmp_path):
    runner = CommandRunner(logger=DummyLogger(), console=RecordingConsole())
    log_path = tmp_path / "rebuild.log"
    marker = tmp_path / "finished"

    returncode = runner.stream(
        [
            sys.executable,
            "-c",
            (
                "import sys, time;"
                "sys.stdout.buffer.write(b'copying path \\xff\\xfe\\n');"
                "sys.stdout.flush();"
                "time.sleep(0.5);"
                f"open({str(marker)!r}, 'w').close();"
                "print('done')"
            ),
        ],
        str(log_path),
    )

    assert returncode == 0
    assert marker.exists()
    content = log_path.read_text(encoding="utf-8")
    assert "copying path \ufffd\ufffd" in content
    assert "done" in content


def test_stream_terminates_the_command_when_echo_fails(tmp_path):
    class BrokenConsole:
        def print(self, *_args, **_kwargs):
            raise RuntimeError("terminal went away")

    runner = CommandRunner(logger=DummyLogger(), console=BrokenConsole())
    marker = tmp_path / "finished"

    with pytest.raises(RuntimeError, match="terminal went away"):
        runner.stream(
            [
                sys.executable,
                "-c",
                (
                    "import sys, time;"
                    "print('building', flush=True);"
                    "time.sleep(5);"
                    f"open({str(marker)!r}, 'w').close()"
                ),
            ],
            str(tmp_path / "rebuild.log"),
        )

    assert not marker.exists()


def test_stream_fails_before_starting_when_log_is_unwritable(tmp_path):
    runner = CommandRunner(logger=DummyLogger())
    marker = tmp_path / "started"

    with pytest.raises(RenixError, match="Could not write log file"):
        runner.stream(
            [sys.executable, "-c", f"open({str(marker)!r}, 'w').close()"],
            str(tmp_path / "missing-dir" / "rebuild.log"),
        )

    assert not marker.exists()
