"""End to end tests of the regmsg command."""

from unittest.mock import AsyncMock

import pytest

from regmsg import command
from regmsg.models import DecodingError, ExitCode, ReplyTimeoutError, TransportError
from testtools import hang


def test_round_trip(isolated_env, ipc_address, zmq_socket, capsys):
    zmq_socket.recv_multipart.return_value = [b"1920x1080@60"]

    code = command.run(["--address", ipc_address, "-s", "HDMI1", "currentMode", "--", "--verbose", "2"])

    assert code == ExitCode.SUCCESS
    assert zmq_socket.sent() == [b"currentMode --screen HDMI1 --verbose 2"]
    assert capsys.readouterr().out == "1920x1080@60\n"


def test_daemon_error_text_is_still_success(isolated_env, ipc_address, zmq_socket, capsys):
    zmq_socket.recv_multipart.return_value = [b"error: unknown mode"]

    assert command.run(["--address", ipc_address, "setMode", "foo"]) == ExitCode.SUCCESS
    assert capsys.readouterr().out == "error: unknown mode\n"


def test_empty_reply(isolated_env, ipc_address, zmq_socket, capsys):
    zmq_socket.recv_multipart.return_value = []

    assert command.run(["--address", ipc_address, "mapTouchScreen"]) == ExitCode.SUCCESS
    assert capsys.readouterr().out == "\n"


def test_invalid_reply(isolated_env, ipc_address, zmq_socket, capsys):
    zmq_socket.recv_multipart.return_value = [b"\xc3\x28"]

    assert command.run(["--address", ipc_address, "listModes"]) == ExitCode.DECODING_ERROR
    captured = capsys.readouterr()
    assert captured.out == ""
    assert "Error: invalid UTF-8" in captured.err


def test_daemon_not_running(isolated_env, capsys):
    code = command.run(["--address", f"ipc://{isolated_env}/regmsgd.sock", "listModes"])

    assert code == ExitCode.TRANSPORT_ERROR
    assert "could not connect" in capsys.readouterr().err
    assert "listModes failed" in (isolated_env / "regmsg.log").read_text()


def test_timeout(isolated_env, ipc_address, zmq_socket, capsys):
    zmq_socket.recv_multipart = hang

    assert command.run(["--address", ipc_address, "--timeout", "0.05", "currentRotation"]) == ExitCode.TIMEOUT_ERROR
    assert "no reply" in capsys.readouterr().err


@pytest.mark.parametrize(
    ("error", "expected"),
    [
        (TransportError("reset"), ExitCode.TRANSPORT_ERROR),
        (ReplyTimeoutError("late"), ExitCode.TIMEOUT_ERROR),
        (DecodingError("bad"), ExitCode.DECODING_ERROR),
        (RuntimeError("boom"), ExitCode.FAILURE),
    ],
)
def test_error_exit_codes(isolated_env, mocker, capsys, error, expected):
    mocker.patch("regmsg.command.run_client", new=AsyncMock(side_effect=error))

    assert command.run(["currentRefresh"]) == expected
    assert capsys.readouterr().err.startswith("Error: ")


def test_console_logging_reports_once(isolated_env, mocker, capsys):
    mocker.patch("regmsg.command.run_client", new=AsyncMock(side_effect=TransportError("connection reset")))

    assert command.run(["--log", "currentOutput"]) == ExitCode.TRANSPORT_ERROR
    err = capsys.readouterr().err
    assert err.count("connection reset") == 1


def test_logging_init_failure(isolated_env, mocker, capsys):
    run_client = mocker.patch("regmsg.command.run_client")

    code = command.run(["--log-file", str(isolated_env / "no" / "such" / "dir.log"), "listModes"])

    assert code == ExitCode.LOGGING_ERROR
    assert "cannot open log file" in capsys.readouterr().err
    run_client.assert_not_called()


def test_config_error(isolated_env, monkeypatch, capsys):
    monkeypatch.setenv("REGMSG_TIMEOUT", "later")

    assert command.run(["listModes"]) == ExitCode.CONFIG_ERROR
    assert "invalid timeout" in capsys.readouterr().err


def test_usage_error():
    with pytest.raises(SystemExit) as err:
        command.run(["setRotation", "12"])
    assert err.value.code == ExitCode.USAGE_ERROR


def test_main_exits_with_code(isolated_env, mocker):
    mocker.patch("sys.argv", ["regmsg", "listModes"])
    mocker.patch("regmsg.command.run", return_value=ExitCode.TRANSPORT_ERROR)

    with pytest.raises(SystemExit) as err:
        command.main()
    assert err.value.code == ExitCode.TRANSPORT_ERROR
