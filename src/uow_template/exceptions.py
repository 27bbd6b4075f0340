"""Unit of Work exceptions and helpers for backend adapters."""

from __future__ import annotations

from contextlib import contextmanager
from dataclasses import dataclass
from typing import Iterator, Literal

from sqlalchemy import exc as sa_exc

__all__ = [
    "UnitOfWorkError",
    "BackendConnectionError",
    "PersistenceError",
    "NotFoundError",
    "IntegrityConstraintViolation",
    "CommitError",
    "RollbackError",
    "ReleaseError",
    "SessionStateError",
    "SessionAlreadyOpenError",
    "NoActiveSessionError",
    "ensure_matched",
    "handle_sqlalchemy_errors",
]

Stage = Literal["begin", "persist", "commit", "rollback", "release"]


class UnitOfWorkError(Exception):
    """Base class for unit of work failures."""


class BackendConnectionError(UnitOfWorkError, ConnectionError):
    """Raised when the backend cannot supply a transaction handle."""


class PersistenceError(UnitOfWorkError):
    """Raised when a create/update/delete is rejected by the store."""


class NotFoundError(PersistenceError):
    """Raised when an update targets a record that does not exist."""


class IntegrityConstraintViolation(PersistenceError):
    """Raised when a database constraint is violated."""


class CommitError(UnitOfWorkError):
    """Raised when the store rejects the commit itself."""


class RollbackError(UnitOfWorkError):
    """Raised when a rollback could not be completed."""


class ReleaseError(UnitOfWorkError):
    """Raised when a transaction handle could not be released."""


class SessionStateError(UnitOfWorkError):
    """Base class for out-of-order ``begin_work``/``commit_work`` calls."""


class SessionAlreadyOpenError(SessionStateError):
    """Raised by ``begin_work`` while a session is already open."""


class NoActiveSessionError(SessionStateError):
    """Raised by ``commit_work``/``rollback_work`` when no session is open."""


@dataclass(slots=True)
class _EntityContext:
    """Internal helper describing the entity for error messages."""

    entity: str | None = None

    def format(self, message: str) -> str:
        if self.entity:
            return f"{self.entity}: {message}"
        return message


def ensure_matched(rowcount: int, *, entity: str, identifier: str) -> None:
    """Raise :class:`NotFoundError` when a keyed write touched no rows."""

    if rowcount == 0:
        raise NotFoundError(f"{entity} '{identifier}' not found")


def _translate_sqlalchemy_error(
    exc: Exception, *, stage: Stage, context: _EntityContext
) -> UnitOfWorkError:
    if stage == "begin":
        return BackendConnectionError(context.format("could not open a transaction"))
    if stage == "commit":
        return CommitError(context.format("commit rejected by the store"))
    if stage == "rollback":
        return RollbackError(context.format("rollback failed"))
    if stage == "release":
        return ReleaseError(context.format("release failed"))
    if isinstance(exc, sa_exc.IntegrityError):
        return IntegrityConstraintViolation(context.format("integrity constraint violated"))
    if isinstance(exc, sa_exc.DBAPIError):
        return PersistenceError(context.format("database operation failed"))
    return PersistenceError(context.format(str(exc)))


@contextmanager
def handle_sqlalchemy_errors(
    *, stage: Stage = "persist", entity: str | None = None
) -> Iterator[None]:
    """Translate SQLAlchemy errors raised during ``stage`` into unit of work ones."""

    context = _EntityContext(entity)
    try:
        yield
    except sa_exc.SQLAlchemyError as exc:
        raise _translate_sqlalchemy_error(exc, stage=stage, context=context) from exc
