import os
import tempfile

# Keep test logs out of the working tree; must happen before wordgame is imported
os.environ.setdefault('LOG_DIR', tempfile.mkdtemp(prefix='wordgame-logs-'))

import pytest

from wordgame import create_app
from wordgame.config import TestingConfig
from wordgame.services.game_service import initialize_game_service
from wordgame.services.timer_service import TimerRegistry

WORDS = ["CRANE", "REACT", "SLATE", "TRAIN", "HOUSE", "PLANT", "BRAIN", "CHAIR"]


class CyclingChoice:
    """Stand-in for random.Random that hands out candidates in order."""

    def __init__(self):
        self.calls = 0

    def choice(self, seq):
        item = seq[self.calls % len(seq)]
        self.calls += 1
        return item


class TaskRecorder:
    """Collects background tasks so tests decide when timers fire."""

    def __init__(self):
        self.tasks = []

    def spawn(self, target, *args):
        self.tasks.append((target, args))

    def run_all(self):
        while self.tasks:
            target, args = self.tasks.pop(0)
            target(*args)


def type_word(session, word):
    for letter in word:
        session.input_letter(letter)


@pytest.fixture
def recorder():
    return TaskRecorder()


@pytest.fixture
def timers(recorder):
    return TimerRegistry(spawn=recorder.spawn, sleep=lambda seconds: None)


@pytest.fixture
def game_service(timers):
    return initialize_game_service(
        word_list=WORDS, timers=timers, message_timeout=0, rng=CyclingChoice()
    )


@pytest.fixture
def app(game_service):
    app, _ = create_app(TestingConfig)
    return app


@pytest.fixture
def client(app):
    return app.test_client()


@pytest.fixture
def socket_client(app, client):
    socket_client = app.socketio.test_client(app, flask_test_client=client)
    yield socket_client
    if socket_client.is_connected():
        socket_client.disconnect()
