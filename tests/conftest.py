import pytest

from src.engine import GameSession, GameConfig


@pytest.fixture()
def session():
    return GameSession.create(config=GameConfig(seed=2024))


@pytest.fixture()
def snapshots(session):
    received = []
    session.subscribe(received.append)
    return received
