"""
db/errors.py
------------
Exceptions raised by the data access layer.

Repositories in strict mode raise these so callers can tell
"row absent" apart from "database unreachable" or "insert failed".
"""


class RepositoryError(Exception):
    """Base class for every store-access failure."""


class ConnectionAcquisitionError(RepositoryError):
    """The connection provider could not hand out a connection."""


class StatementError(RepositoryError):
    """The driver failed while executing or committing a statement."""


class NoRowsAffectedError(RepositoryError):
    """A mutating statement completed but touched zero rows."""


class MissingGeneratedKeyError(RepositoryError):
    """An INSERT completed but the store returned no generated key."""
