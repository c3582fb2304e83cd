import socket
import time
from typing import Generator

import pytest

from . import app as archive_app
from . import localhost, runwsgi


def _get_free_port() -> int:
    with socket.socket() as s:
        s.bind((localhost, 0))
        return s.getsockname()[1]


def wait_listening(host: str, port: int, timeout: float = 5.0) -> None:
    deadline = time.monotonic() + timeout

    while time.monotonic() < deadline:
        try:
            socket.create_connection((host, port), timeout=0.2).close()
            return
        except OSError:
            time.sleep(0.05)

    raise RuntimeError(f"App did not start listening on {host}:{port}")


@pytest.fixture
def free_port() -> int:
    return _get_free_port()


@pytest.fixture(scope="session")
def app() -> Generator[str, None, None]:
    port = _get_free_port()
    setup, teardown = runwsgi.app_runner_setup((archive_app.app, port))

    # app_runner_setup() stores server state on the object passed to setup/teardown.
    # At session scope we don't have a module object, so use a tiny holder.
    class _AppState:
        pass

    state = _AppState()
    setup(state)
    wait_listening(localhost, port, timeout=10.0)
    yield f"http://{localhost}:{port}"
    teardown(state)


@pytest.fixture
def served_archives():
    """Registers archive bytes with the test app and forgets them afterwards."""
    names = []

    def serve(name, data):
        archive_app.archives[name] = data
        archive_app.hits.pop(name, None)
        names.append(name)
        return "/archives/%s" % name

    yield serve
    for name in names:
        archive_app.archives.pop(name, None)
        archive_app.hits.pop(name, None)
