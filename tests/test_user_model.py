from __future__ import annotations

import dataclasses
from datetime import datetime

import pytest

from models.user import User


def test_new_user_is_unsaved_with_whole_second_timestamp() -> None:
    before = datetime.now().replace(microsecond=0)
    user = User("John Doe", "john.doe@example.com")

    assert user.id == 0
    assert not user.is_persisted()
    assert user.created_at.microsecond == 0
    assert user.created_at >= before


def test_user_is_immutable() -> None:
    user = User("John Doe", "john.doe@example.com", id=1)

    assert user.is_persisted()
    with pytest.raises(dataclasses.FrozenInstanceError):
        user.id = 2  # type: ignore[misc]


def test_str() -> None:
    user = User("Ann", "ann@example.com", id=7, created_at=datetime(2024, 1, 2, 3, 4, 5))
    assert str(user) == "#7 Ann <ann@example.com> (2024-01-02 03:04:05)"
