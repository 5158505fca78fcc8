"""Pytest configuration and shared fixtures."""

import pytest

from workforce.domain.db import get_session
from workforce.domain.types import EmployeeContract, RoomType


def pytest_configure(config):
    """Configure pytest."""
    # Add custom markers
    config.addinivalue_line(
        "markers", "integration: marks tests as integration tests (deselect with '-m \"not integration\"')"
    )
    config.addinivalue_line(
        "markers", "slow: marks tests as slow (deselect with '-m \"not slow\"')"
    )


@pytest.fixture
def db_session():
    """In-memory SQLite session with all tables created."""
    session = get_session("sqlite:///:memory:")
    yield session
    session.close()


@pytest.fixture
def hotel_rooms():
    """The default 44-room housekeeping inventory."""
    return [
        RoomType(label="Suite", count=2, cleaning_minutes=45),
        RoomType(label="Double", count=30, cleaning_minutes=25),
        RoomType(label="Family", count=12, cleaning_minutes=35),
    ]


@pytest.fixture
def full_time_contract():
    """35h over Monday-Friday, starting at 10:00."""
    return EmployeeContract(
        employee_id=1,
        name="Marie Dupont",
        weekly_hours_target=35.0,
        working_days=frozenset({1, 2, 3, 4, 5}),
        day_start="10:00",
    )
