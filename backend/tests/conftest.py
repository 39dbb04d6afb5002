import os
import sys
import pytest

# Ensure the backend root (containing the `tracker` package) is on sys.path
CURRENT_DIR = os.path.dirname(__file__)
BACKEND_ROOT = os.path.abspath(os.path.join(CURRENT_DIR, '..'))
if BACKEND_ROOT not in sys.path:
    sys.path.insert(0, BACKEND_ROOT)

from tracker import create_app, socketio


class TestConfig:
    TESTING = True
    SECRET_KEY = os.environ.get('SECRET_KEY', 'test-secret')
    TIMER_STATE_FILE = 'timer.json'
    LOG_LEVEL = 'DEBUG'
    CORS_ORIGINS = ['http://localhost:5173']


class FakeClock:
    """Manually advanced stand-in for time.time."""

    def __init__(self, now=1_700_000_000):
        self.now = now

    def __call__(self):
        return self.now

    def advance(self, seconds):
        self.now += seconds


@pytest.fixture()
def clock():
    return FakeClock()


@pytest.fixture()
def state_file(tmp_path):
    return tmp_path / 'timer.json'


@pytest.fixture()
def flask_app(state_file, clock):
    config = type('Config', (TestConfig,), {'TIMER_STATE_FILE': str(state_file)})
    application = create_app(config)
    application.extensions['timer_store'].clock = clock
    with application.app_context():
        yield application


@pytest.fixture()
def store(flask_app):
    return flask_app.extensions['timer_store']


@pytest.fixture()
def client(flask_app):
    return flask_app.test_client()


@pytest.fixture()
def sio_client(flask_app):
    test_client = socketio.test_client(
        flask_app,
        flask_test_client=flask_app.test_client(),
        namespace='/ws'
    )
    yield test_client
    try:
        test_client.disconnect(namespace='/ws')
    except Exception:
        pass
