import itertools
import signal
import subprocess

import pytest
from fastapi.testclient import TestClient

from app.main import create_app
from app.services.forwards import (
    EventLog,
    ForwardSupervisor,
    Liveness,
    LivenessChecker,
    ProcessManager,
)


class FakeProcess:
    """Stands in for subprocess.Popen; never touches a real process."""

    _pids = itertools.count(40000)

    def __init__(self, argv, **kwargs):
        self.argv = list(argv)
        self.kwargs = kwargs
        self.pid = next(FakeProcess._pids)
        self.returncode = None
        self.signals = []
        self.wait_calls = 0
        self.poll_calls = 0
        self.terminate_error = None
        self.kill_error = None
        self.wait_error = None
        self.exits_on_term = True

    def terminate(self):
        if self.terminate_error:
            raise self.terminate_error
        self.signals.append(signal.SIGTERM)
        if self.exits_on_term:
            self.returncode = -signal.SIGTERM

    def kill(self):
        if self.kill_error:
            raise self.kill_error
        self.signals.append(signal.SIGKILL)
        self.returncode = -signal.SIGKILL

    def wait(self, timeout=None):
        self.wait_calls += 1
        if self.wait_error:
            raise self.wait_error
        if self.returncode is None:
            raise subprocess.TimeoutExpired(self.argv, timeout)
        return self.returncode

    def poll(self):
        self.poll_calls += 1
        return self.returncode


class FakeLauncher:
    """Popen replacement that records every spawn."""

    def __init__(self):
        self.processes = []
        self.error = None

    def __call__(self, argv, **kwargs):
        if self.error:
            raise self.error
        process = FakeProcess(argv, **kwargs)
        self.processes.append(process)
        return process


class FakeLivenessChecker(LivenessChecker):
    name = "fake"

    def __init__(self):
        self.states = {}
        self.checked = []

    def check(self, pid):
        self.checked.append(pid)
        return self.states.get(pid, Liveness.ALIVE)


@pytest.fixture
def launcher():
    return FakeLauncher()


@pytest.fixture
def checker():
    return FakeLivenessChecker()


@pytest.fixture
def supervisor(launcher, checker):
    return ForwardSupervisor(
        process_manager=ProcessManager(popen=launcher, stop_wait_timeout=1.0),
        liveness_checker=checker,
        event_log=EventLog(max_entries=100),
    )


@pytest.fixture
def client(supervisor):
    app = create_app(supervisor)
    with TestClient(app) as c:
        yield c
