"""
Pytest configuration and shared fixtures.
"""

import random
import time

import pytest

from parceltracker.database import Parcel, init_database, get_session
from parceltracker.logger import get_logger, reset_logger
from parceltracker.service import ParcelService, created_at_now
from parceltracker.status import ParcelStatus
from parceltracker.store import ParcelStore


@pytest.fixture(autouse=True)
def quiet_logger(tmp_path):
    """Route the global logger to a temporary directory, no console output."""
    reset_logger()
    logger = get_logger(log_dir=tmp_path / "logs", enable_console=False)
    yield logger
    reset_logger()


@pytest.fixture
def db_path(tmp_path):
    """Path of an initialized temporary database."""
    path = tmp_path / "tracker.db"
    init_database(path)
    return path


@pytest.fixture
def db_session(db_path):
    """Create a temporary database and return a session."""
    session = get_session(db_path)
    yield session
    session.close()


@pytest.fixture
def store(db_session, quiet_logger):
    return ParcelStore(db_session, logger=quiet_logger)


@pytest.fixture
def service(store, quiet_logger):
    return ParcelService(store, logger=quiet_logger)


@pytest.fixture
def rng():
    """Random source seeded with the current time, one per test."""
    return random.Random(time.time_ns())


@pytest.fixture
def make_parcel():
    """Factory for unsaved test parcels."""

    def _make(**overrides) -> Parcel:
        fields = {
            "client": 1000,
            "status": ParcelStatus.REGISTERED.value,
            "address": "test",
            "created_at": created_at_now(),
        }
        fields.update(overrides)
        return Parcel(**fields)

    return _make
