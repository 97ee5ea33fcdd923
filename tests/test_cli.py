"""Tests for command-line interface."""

import io
import signal
import pytest
from morsetype import cli
from morsetype.cli import create_parser, echo_disabled, main


class TestParser:
    """Test CLI argument parsing."""

    def test_defaults(self):
        """Test default arguments."""
        args = create_parser().parse_args([])
        assert args.speed == 5
        assert args.space_after_unrecognized is False
        assert args.verbose is False

    def test_options(self):
        """Test all options together."""
        args = create_parser().parse_args(
            ["--speed", "9", "--space-after-unrecognized", "-v"]
        )
        assert args.speed == 9
        assert args.space_after_unrecognized is True
        assert args.verbose is True

    @pytest.mark.parametrize("level", ["0", "10", "fast"])
    def test_invalid_speed(self, level):
        """Test speeds outside 1-9 are rejected."""
        with pytest.raises(SystemExit):
            create_parser().parse_args(["--speed", level])


class FakeStream:
    """Stands in for DecodeStream so no keyboard hook is installed."""

    def __init__(self, config=None, sink=None, running=False, on_enter=None):
        self.config = config
        self.sink = sink
        self.running = running
        self.on_enter = on_enter
        self.stopped = False

    def __enter__(self):
        if self.on_enter:
            self.on_enter()
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.stopped = True

    def is_running(self):
        return self.running


@pytest.fixture
def handlers(monkeypatch):
    """Record signal handlers main() installs instead of installing them."""
    installed = {}

    def record(signum, handler):
        installed[signum] = handler

    monkeypatch.setattr(cli.signal, "signal", record)
    monkeypatch.setattr(cli.sys, "stdin", io.StringIO())
    return installed


class TestMain:
    """Test the CLI entry point."""

    def test_runs_stream_with_options(self, monkeypatch, handlers, capsys):
        """Test options reach the stream's configuration."""
        streams = []

        def make_stream(**kwargs):
            streams.append(FakeStream(**kwargs))
            return streams[-1]

        monkeypatch.setattr(cli, "DecodeStream", make_stream)

        assert main(["--speed", "8", "--space-after-unrecognized"]) == 0
        assert streams[0].config.speed_level == 8
        assert streams[0].config.space_after_unrecognized is True
        assert streams[0].stopped is True
        assert signal.SIGINT in handlers
        assert "Speed level: 8" in capsys.readouterr().err

    def test_interrupt_stops_stream(self, monkeypatch, handlers):
        """Test Ctrl+C ends the run and releases the stream."""
        streams = []

        def interrupt():
            handlers[signal.SIGINT](signal.SIGINT, None)

        def make_stream(**kwargs):
            streams.append(FakeStream(running=True, on_enter=interrupt, **kwargs))
            return streams[-1]

        monkeypatch.setattr(cli, "DecodeStream", make_stream)

        assert main([]) == 0
        assert streams[0].stopped is True

    def test_start_failure(self, monkeypatch, handlers, capsys):
        """Test a stream that cannot start gives exit code 1."""

        def fail():
            raise OSError("no keyboard hook")

        monkeypatch.setattr(
            cli, "DecodeStream", lambda **kwargs: FakeStream(on_enter=fail, **kwargs)
        )

        assert main([]) == 1
        assert "Error: no keyboard hook" in capsys.readouterr().err


class TestEchoDisabled:
    """Test terminal echo handling."""

    def test_not_a_terminal(self):
        """Test streams that are not terminals are left alone."""
        stream = io.StringIO()
        with echo_disabled(stream):
            pass
        assert not stream.closed

    def test_no_stream(self):
        """Test a missing stdin is tolerated."""
        with echo_disabled(None):
            pass
