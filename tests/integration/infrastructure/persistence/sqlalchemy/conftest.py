"""Pytest fixtures for SQLAlchemy integration tests.

engine / session_factory / transaction_manager / user_repository come from
tests/conftest.py.
"""

from datetime import datetime, timezone
from uuid import uuid4

import pytest

from user_service.domain.users.entities import CreateUser


@pytest.fixture
def make_create_user():
    """Factory для CreateUser payloads (unique id/email per call)."""

    def _make(**overrides) -> CreateUser:
        now = datetime.now(timezone.utc)
        user_id = str(uuid4())
        data = {
            "id": user_id,
            "email": f"{user_id[:8]}@example.com",
            "name": "Jane",
            "age": 30,
            "created_at": now,
            "updated_at": now,
        }
        data.update(overrides)
        return CreateUser(**data)

    return _make
