import os
import signal
import sys
from pathlib import Path
import pytest

# Tests never talk to the real backend or auth provider.
os.environ.setdefault("CLIENTS_API_URL", "http://api.test/api/clients")
os.environ.setdefault("AUTH_URL", "http://auth.test/auth/v1")
os.environ.setdefault("QT_QPA_PLATFORM", "offscreen")

# ensure project root is on sys.path when running tests
sys.path.append(str(Path(__file__).resolve().parent))

_TEST_TIMEOUT = int(os.environ.get("PYTEST_TIMEOUT", "60"))


@pytest.fixture(autouse=True)
def watchdog():
    """Fail a test if it hangs longer than the timeout."""
    if not hasattr(signal, "SIGALRM"):
        yield
        return

    def handler(signum, frame):  # pragma: no cover - timeout handler
        pytest.fail("Test timeout exceeded", pytrace=False)

    signal.signal(signal.SIGALRM, handler)
    signal.alarm(_TEST_TIMEOUT)
    try:
        yield
    finally:
        signal.alarm(0)


def pytest_runtest_logstart(nodeid, location):
    print(f"-- START {nodeid}")


def pytest_runtest_logfinish(nodeid, location):
    print(f"-- FINISH {nodeid}")
