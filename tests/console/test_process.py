"""Tests for cmdkit/console/process.py and command.py -- running commands.

Covers: verbosity flag parsing, option parsing, the Command helpers, and
the driver translating a failed pid file into exit status 1.
"""

import io
import logging

import pytest

from cmdkit.console import Command, CommandAborted, parse_invocation, run_command
from cmdkit.output import LeveledOutput, Verbosity
from cmdkit.pidfile import PidFileManager


class RecordingCommand(Command):
    name = "record"

    def __init__(self, body=None, **kwargs):
        super().__init__(**kwargs)
        self.body = body or (lambda command: None)
        self.received = None

    def handle_input(self, arguments, output):
        self.received = arguments
        return self.body(self)


# =========================================================================
# parse_invocation
# =========================================================================


class TestParseInvocation:
    @pytest.mark.parametrize("flag, expected", [
        ("-q", Verbosity.QUIET),
        ("--quiet", Verbosity.QUIET),
        ("-v", Verbosity.VERBOSE),
        ("-vv", Verbosity.VERY_VERBOSE),
        ("-vvv", Verbosity.DEBUG),
        ("--verbose", Verbosity.VERBOSE),
        ("--verbose=2", Verbosity.VERY_VERBOSE),
        ("--verbose=3", Verbosity.DEBUG),
        ("--verbose=1", Verbosity.VERBOSE),
        ("--verbose=0", Verbosity.VERBOSE),
        ("--verbose=-1", Verbosity.VERBOSE),
        ("--verbose=loud", Verbosity.VERBOSE),
    ])
    def test_verbosity_flags(self, flag, expected):
        verbosity, _ = parse_invocation([flag])
        assert verbosity is expected

    def test_default_is_normal(self):
        verbosity, arguments = parse_invocation([])
        assert verbosity is Verbosity.NORMAL
        assert arguments == {"args": []}

    def test_options_and_positionals(self):
        _, arguments = parse_invocation(["one", "--dir=/tmp/x/", "--dry-run", "two"])
        assert arguments == {"args": ["one", "two"], "dir": "/tmp/x/", "dry_run": True}

    def test_double_dash_ends_options(self):
        _, arguments = parse_invocation(["--", "-v", "--dir=x"])
        assert arguments == {"args": ["-v", "--dir=x"]}

    def test_invalid_default_verbosity(self, monkeypatch):
        from cmdkit.config import effective_settings
        monkeypatch.setattr(effective_settings, "DEFAULT_VERBOSITY", "loud")
        with pytest.raises(ValueError):
            parse_invocation([])


# =========================================================================
# Command helpers
# =========================================================================


class TestCommandHelpers:
    def test_execute_stores_collaborators(self, output):
        command = RecordingCommand()
        command.execute({"args": ["x"]}, output)
        assert command.arguments == {"args": ["x"]}
        assert command.output is output

    def test_writes_are_chained_through_output(self, output, sink):
        command = RecordingCommand(lambda c: c.writeln("a").writeln_v("b").writeln_vv("c").writeln_vvv("d"))
        command.execute({}, output)
        assert [level for _, level in sink.records] == [
            Verbosity.NORMAL, Verbosity.VERBOSE, Verbosity.VERY_VERBOSE, Verbosity.DEBUG,
        ]

    def test_is_quiet_before_execute_is_false(self):
        assert RecordingCommand().is_quiet() is False

    def test_create_pid_file_returns_path(self, output, pid_dir):
        manager = PidFileManager(pid_provider=lambda: 4242)
        command = RecordingCommand(lambda c: c.create_pid_file(pid_dir, "myjob_"), pid_manager=manager)

        path = command.execute({}, output)

        assert path == f"{pid_dir}myjob_pid_4242.pid"
        # The injected manager writes through the command's output
        assert manager.output is output

    def test_create_pid_file_uses_configured_defaults(self, output, pid_dir, monkeypatch):
        from cmdkit.config import effective_settings
        monkeypatch.setattr(effective_settings, "PIDFILES_DIR", pid_dir)
        monkeypatch.setattr(effective_settings, "PIDFILE_PREFIX", "cfg_")

        command = RecordingCommand(lambda c: c.create_pid_file(),
                                   pid_manager=PidFileManager(pid_provider=lambda: 7))

        assert command.execute({}, output) == f"{pid_dir}cfg_pid_7.pid"

    def test_create_pid_file_failure_aborts(self, output, tmp_path):
        blocker = tmp_path / "blocker"
        blocker.write_text("")
        command = RecordingCommand(lambda c: c.create_pid_file(f"{blocker}/", ""))

        with pytest.raises(CommandAborted) as excinfo:
            command.execute({}, output)

        assert excinfo.value.exit_code == 1
        assert excinfo.value.lines[-1] == "Command stopped!"


# =========================================================================
# run_command
# =========================================================================


class TestRunCommand:
    def test_passes_arguments_and_returns_result(self):
        command = RecordingCommand(lambda c: 3)
        assert run_command(command, ["a", "--flag"], io.StringIO()) == 3
        assert command.received == {"args": ["a"], "flag": True}

    def test_none_result_means_success(self):
        assert run_command(RecordingCommand(), [], io.StringIO()) == 0

    def test_verbosity_reaches_output(self):
        stream = io.StringIO()
        command = RecordingCommand(lambda c: c.writeln("n").writeln_v("v").writeln_vvv("d"))

        assert run_command(command, ["-v"], stream) == 0

        assert stream.getvalue() == "n\nv\n"

    def test_quiet_hides_normal_output(self):
        stream = io.StringIO()
        command = RecordingCommand(lambda c: c.writeln("hello") and None)
        run_command(command, ["-q"], stream)
        assert stream.getvalue() == ""

    def test_pid_file_failure_exits_with_status_one(self, tmp_path):
        blocker = tmp_path / "blocker"
        blocker.write_text("")
        directory = f"{blocker}/"
        stream = io.StringIO()
        reached = []

        def _body(command):
            command.create_pid_file(directory, "myjob_")
            reached.append(True)

        command = RecordingCommand(_body, pid_manager=PidFileManager(pid_provider=lambda: 4242))
        assert run_command(command, [], stream) == 1

        assert stream.getvalue().splitlines() == [
            f"Unable to create pid file {directory}myjob_pid_4242.pid",
            "Please be sure pid file can be created in this location.",
            "Command stopped!",
        ]
        assert reached == []

    def test_custom_abort_exit_code(self):
        def _body(command):
            raise CommandAborted(["Nothing to do."], exit_code=4)

        stream = io.StringIO()
        assert run_command(RecordingCommand(_body), [], stream) == 4
        assert stream.getvalue() == "Nothing to do.\n"

    def test_non_integer_result_means_success(self):
        assert run_command(RecordingCommand(lambda c: "done"), [], io.StringIO()) == 0
        assert run_command(RecordingCommand(lambda c: True), [], io.StringIO()) == 0

    def test_invalid_invocation_returns_two(self, monkeypatch):
        from cmdkit.config import effective_settings
        monkeypatch.setattr(effective_settings, "DEFAULT_VERBOSITY", "loud")
        assert run_command(RecordingCommand(), [], io.StringIO()) == 2

    def test_console_log_level_follows_verbosity(self):
        run_command(RecordingCommand(), ["-vvv"], io.StringIO())
        [handler] = logging.getLogger().handlers
        assert handler.level == logging.DEBUG

    def test_sets_process_title(self, monkeypatch):
        titles = []
        monkeypatch.setattr("setproctitle.setproctitle", titles.append)
        run_command(RecordingCommand(), [], io.StringIO())
        assert titles == ["cmdkit - record"]


class TestLeveledOutputInCommands:
    def test_is_quiet_with_override(self, output):
        from cmdkit.output import ConsoleOutput
        command = RecordingCommand()
        command.execute({}, output)
        assert command.is_quiet(ConsoleOutput(Verbosity.QUIET)) is True
        assert command.is_quiet() is False

    def test_commands_can_share_an_output(self):
        out = LeveledOutput()
        command = RecordingCommand()
        command.execute({}, out)
        assert command.output is out
