"""SQLAlchemy-backed unit of work implementation."""

from .backend import SQLAlchemyTransactionBackend
from .entity import SQLAlchemyTransactionalObject
from .unit_of_work import SQLAlchemyUnitOfWork

__all__ = [
    "SQLAlchemyTransactionBackend",
    "SQLAlchemyTransactionalObject",
    "SQLAlchemyUnitOfWork",
]
