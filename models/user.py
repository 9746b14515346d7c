"""
models/user.py
--------------
Domain model for a stored user.
"""

from dataclasses import dataclass, field
from datetime import datetime


def _now() -> datetime:
    return datetime.now().replace(microsecond=0)


@dataclass(frozen=True)
class User:
    """
    Represents one row of the users table.

    Attributes:
        name: Display name.
        email: Contact address.
        id: Database primary key (0 for records not yet saved).
        created_at: Creation time, whole seconds; defaults to now.
    """
    name: str
    email: str
    id: int = 0
    created_at: datetime = field(default_factory=_now)

    def is_persisted(self) -> bool:
        """Returns True once the store has assigned an id."""
        return self.id != 0

    def __str__(self) -> str:
        return f"#{self.id} {self.name} <{self.email}> ({self.created_at:%Y-%m-%d %H:%M:%S})"
