"""Capability contracts consumed by :class:`~uow_template.coordinator.UnitOfWork`."""

from __future__ import annotations

from typing import Any, Protocol, TypeVar

TxT = TypeVar("TxT")
TxT_contra = TypeVar("TxT_contra", contravariant=True)

IdentityKey = tuple[tuple[str, Any], ...]


class TransactionalObject(Protocol[TxT_contra]):
    """An entity that knows how to persist itself inside a transaction.

    Implementations use the entity only as a source of key and values; they
    must not change its in-memory fields.
    """

    async def create_by_tx(self, tx: TxT_contra) -> None:
        """Insert the entity's current values as a new record."""

    async def update_by_tx(self, tx: TxT_contra) -> None:
        """Overwrite the record identified by :meth:`identity_key`."""

    async def delete_by_tx(self, tx: TxT_contra) -> None:
        """Remove the identified record; a missing record is not an error."""

    def identity_key(self) -> IdentityKey:
        """Return the ordered ``(field, value)`` pairs identifying the record."""


class TransactionBackend(Protocol[TxT]):
    """Source of transaction handles for a single data store."""

    async def begin(self) -> TxT:
        """Open a transaction, raising ``BackendConnectionError`` when unavailable."""

    async def commit(self, tx: TxT) -> None:
        """Commit ``tx``, raising ``CommitError`` when the store rejects it."""

    async def rollback(self, tx: TxT) -> None:
        """Discard everything done through ``tx``."""

    async def release(self, tx: TxT) -> None:
        """Free resources held by ``tx``; safe after commit or rollback."""


__all__ = ["IdentityKey", "TransactionBackend", "TransactionalObject", "TxT"]
