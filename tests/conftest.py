"""Shared fixtures for registration tests."""
from datetime import datetime, timedelta, timezone

import pytest

from src.models.participant import Participant
from src.services.participant_registry import ParticipantRegistry
from src.services.storage_service import MemoryStore


@pytest.fixture
def fixed_clock():
    """Clock that advances one minute per call, starting 2024-01-01 10:00 UTC."""
    state = {"now": datetime(2024, 1, 1, 10, 0, tzinfo=timezone.utc)}

    def clock():
        current = state["now"]
        state["now"] = current + timedelta(minutes=1)
        return current

    return clock


@pytest.fixture
def memory_store():
    """Empty in-memory store."""
    return MemoryStore()


@pytest.fixture
def registry(memory_store, fixed_clock):
    """Empty registry on an in-memory store with a deterministic clock."""
    return ParticipantRegistry(memory_store, clock=fixed_clock)


@pytest.fixture
def make_participant():
    """Factory for participants with sensible defaults."""
    def _make(id=1, name="Alice Smith", email="alice@example.com", contact="555-0100",
              event="Tech Conference 2024", notes="", minute=0):
        moment = datetime(2024, 1, 1, 10, minute, tzinfo=timezone.utc)
        return Participant(
            id=id,
            name=name,
            email=email,
            contact=contact,
            event=event,
            notes=notes,
            registration_date=f"Jan 1, 2024, 10:{minute:02d} AM",
            timestamp=moment.isoformat(timespec="milliseconds").replace("+00:00", "Z"),
        )

    return _make
