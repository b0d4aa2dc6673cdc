import random

import pytest
from fastapi.testclient import TestClient

from vocabquiz.app import create_app
from vocabquiz.catalog import WordCatalog
from vocabquiz.config import settings
from vocabquiz.engine import QuizEngine

HAPPY_ONLY = {
    "happy": {"synonyms": {"choices": ["joyful", "sad", "angry"], "correct": "joyful"}},
}

WORDS = {
    "happy": {
        "synonyms": {"choices": ["joyful", "sad", "angry"], "correct": "joyful"},
        "antonyms": {"choices": ["miserable", "cheerful", "glad"], "correct": "miserable"},
        "odd_one_out": {"choices": ["joyful", "cheerful", "sad", "merry"], "correct": "sad"},
    },
    "ancient": {
        "synonyms": {"choices": ["old", "modern", "recent"], "correct": "old"},
        "antonyms": {"choices": ["modern", "antique", "aged"], "correct": "modern"},
        "analogies": {
            "first": "up",
            "second": "down",
            "relation": "opposite",
            "choices": ["modern", "old", "stone"],
            "correct": "modern",
        },
    },
    "brave": {
        "synonyms": {"choices": ["courageous", "timid", "lazy"], "correct": "courageous"},
        "odd_one_out": {"choices": ["bold", "daring", "heroic", "cowardly"], "correct": "cowardly"},
    },
    "fragile": {
        "antonyms": {"choices": ["robust", "brittle", "frail"], "correct": "robust"},
    },
    "diligent": {
        "synonyms": {"choices": ["hardworking", "idle", "careless"], "correct": "hardworking"},
        "antonyms": {"choices": ["lazy", "careful", "thorough"], "correct": "lazy"},
    },
}


class ScriptedRandom:
    """Scripted ``random()`` coin flips with seeded ``randrange()`` draws."""

    def __init__(self, coins=(), default_coin=0.9, seed=0):
        self._coins = iter(coins)
        self._default_coin = default_coin
        self._rng = random.Random(seed)

    def random(self):
        return next(self._coins, self._default_coin)

    def randrange(self, *args):
        return self._rng.randrange(*args)


@pytest.fixture
def words_data():
    return WORDS


@pytest.fixture
def happy_catalog():
    return WordCatalog.from_records(HAPPY_ONLY)


@pytest.fixture
def catalog():
    return WordCatalog.from_records(WORDS)


@pytest.fixture
def engine(catalog):
    return QuizEngine(catalog, rng=random.Random(42))


@pytest.fixture
def happy_engine(happy_catalog):
    return QuizEngine(happy_catalog, rng=random.Random(42))


@pytest.fixture
def scripted_random():
    return ScriptedRandom


@pytest.fixture
def make_client(tmp_path, monkeypatch):
    monkeypatch.setattr(settings, "LOG_DIR", str(tmp_path / "log"))
    clients = []

    def _make(catalog):
        client = TestClient(create_app(catalog=catalog))
        client.__enter__()
        clients.append(client)
        return client

    yield _make
    for client in clients:
        client.__exit__(None, None, None)
