"""Unit of Work coordination for async transactional stores.

The package exposes the backend-agnostic :class:`UnitOfWork` coordinator, the
contracts it consumes and a SQLAlchemy adapter under :mod:`uow_template.sqlalchemy`.
"""

from .config import UnitOfWorkSettings
from .coordinator import StepOutcome, UnitOfWork
from .exceptions import (
    BackendConnectionError,
    CommitError,
    IntegrityConstraintViolation,
    NoActiveSessionError,
    NotFoundError,
    PersistenceError,
    ReleaseError,
    RollbackError,
    SessionAlreadyOpenError,
    SessionStateError,
    UnitOfWorkError,
)
from .interfaces import IdentityKey, TransactionBackend, TransactionalObject
from .logging import configure_logging

__all__ = [
    "BackendConnectionError",
    "CommitError",
    "IdentityKey",
    "IntegrityConstraintViolation",
    "NoActiveSessionError",
    "NotFoundError",
    "PersistenceError",
    "ReleaseError",
    "RollbackError",
    "SessionAlreadyOpenError",
    "SessionStateError",
    "StepOutcome",
    "TransactionBackend",
    "TransactionalObject",
    "UnitOfWork",
    "UnitOfWorkError",
    "UnitOfWorkSettings",
    "configure_logging",
]
