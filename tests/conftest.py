" generic fixtures "
import pytest

from testtools import MockContext, MockSocket


def pytest_configure():
    "Runs once before all"
    from regmsg.logging_setup import init_logger

    init_logger("/dev/null", force_debug=True)


@pytest.fixture
def ipc_address(tmp_path):
    "An ipc:// address whose socket file exists"
    path = tmp_path / "regmsgd.sock"
    path.touch()
    return f"ipc://{path}"


@pytest.fixture
def zmq_socket(mocker):
    "Replaces the ZeroMQ context, returns the socket handed to sessions"
    socket = MockSocket()
    mocker.patch("zmq.asyncio.Context.instance", return_value=MockContext(socket))
    return socket


@pytest.fixture
def isolated_env(monkeypatch, tmp_path):
    "No configuration file, no REGMSG_* variable, logs in tmp_path"
    for name in ("REGMSG_ADDRESS", "REGMSG_TIMEOUT", "REGMSG_LOG_FILE", "FORCE_COLOR"):
        monkeypatch.delenv(name, raising=False)
    monkeypatch.setenv("REGMSG_CONFIG", str(tmp_path / "absent.toml"))
    monkeypatch.setenv("REGMSG_LOG_FILE", str(tmp_path / "regmsg.log"))
    yield tmp_path
    from regmsg.logging_setup import init_logger

    init_logger("/dev/null")
