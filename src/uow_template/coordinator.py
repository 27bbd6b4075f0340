"""Unit of Work coordinator.

A :class:`UnitOfWork` runs create/update/delete steps of
:class:`~uow_template.interfaces.TransactionalObject` entities against a
:class:`~uow_template.interfaces.TransactionBackend`.

Outside a session every ``mark_*`` call is its own transaction::

    await uow.mark_create(entity)

Between :meth:`UnitOfWork.begin_work` and :meth:`UnitOfWork.commit_work` all
steps share one transaction handle and become durable together::

    await uow.begin_work()
    await uow.mark_create(first)
    await uow.mark_delete(second)
    await uow.commit_work()  # rolls everything back and raises if a step failed

Every backend call and entity step is captured as a :class:`StepOutcome`; the
coordinator inspects outcomes to choose between commit and rollback and raises
the deciding outcome's error only after the handle has been released.
"""

from __future__ import annotations

from contextlib import asynccontextmanager
from dataclasses import dataclass
from typing import Any, AsyncIterator, Awaitable, Callable, Generic

import structlog

from .exceptions import NoActiveSessionError, SessionAlreadyOpenError
from .interfaces import TransactionBackend, TransactionalObject, TxT

logger = structlog.get_logger(__name__)

Step = Callable[[Any], Awaitable[None]]


@dataclass(frozen=True, slots=True)
class StepOutcome:
    """Result of one entity step or backend call."""

    operation: str
    entity: str | None = None
    error: BaseException | None = None

    @property
    def ok(self) -> bool:
        return self.error is None

    def raise_for_error(self) -> None:
        if self.error is not None:
            raise self.error


async def _attempt(operation: str, call: Step, tx: Any, *, entity: str | None = None) -> StepOutcome:
    try:
        await call(tx)
    except Exception as exc:
        return StepOutcome(operation, entity, exc)
    return StepOutcome(operation, entity)


def _describe(entity: TransactionalObject[Any]) -> str:
    key = ", ".join(f"{field}={value!r}" for field, value in entity.identity_key())
    return f"{type(entity).__name__}({key})"


class UnitOfWork(Generic[TxT]):
    """Coordinate entity mutations inside auto-commit or session transactions.

    One instance models one logical caller; it holds no locks and must not be
    shared between concurrently running tasks.
    """

    def __init__(self, backend: TransactionBackend[TxT]) -> None:
        self._backend = backend
        self._active_transaction: TxT | None = None
        self._journal: list[StepOutcome] = []

    @property
    def backend(self) -> TransactionBackend[TxT]:
        return self._backend

    @property
    def in_session(self) -> bool:
        """``True`` between :meth:`begin_work` and the matching commit/rollback."""

        return self._active_transaction is not None

    @property
    def journal(self) -> tuple[StepOutcome, ...]:
        """Steps issued in the current session, in call order."""

        return tuple(self._journal)

    # Session lifecycle --------------------------------------------------

    async def begin_work(self) -> None:
        """Open a session; subsequent ``mark_*`` calls share its transaction."""

        if self._active_transaction is not None:
            raise SessionAlreadyOpenError("a unit of work session is already open")
        self._active_transaction = await self._backend.begin()
        self._journal = []
        logger.debug("uow.session.begin")

    async def commit_work(self) -> None:
        """Commit the open session, or roll it back if any step failed.

        The coordinator is idle again when this returns or raises.
        """

        failure = self._session_failure()
        operations = len(self._journal)
        tx = self._take_session()
        outcome: StepOutcome | None = None
        try:
            outcome = failure or await _attempt("commit", self._backend.commit, tx)
        finally:
            await self._finish(tx, outcome)

        if outcome.ok:
            logger.info("uow.commit.success", operations=operations)
        else:
            logger.warning(
                "uow.commit.failure",
                operations=operations,
                failed_operation=outcome.operation,
                entity=outcome.entity,
                error=repr(outcome.error),
            )
        outcome.raise_for_error()

    async def rollback_work(self) -> None:
        """Abandon the open session without committing anything."""

        tx = self._take_session()
        operations = len(self._journal)
        self._journal = []
        outcome: StepOutcome | None = None
        try:
            outcome = await _attempt("rollback", self._backend.rollback, tx)
        finally:
            cause = None if outcome is None else outcome.error
            await self._cleanup("release", self._backend.release, tx, cause=cause)
        logger.info("uow.session.rollback", operations=operations)
        outcome.raise_for_error()

    @asynccontextmanager
    async def work(self) -> AsyncIterator[UnitOfWork[TxT]]:
        """Run the ``async with`` body as one session.

        Commits on a clean exit; on an exception rolls back and re-raises it.
        """

        await self.begin_work()
        try:
            yield self
        except BaseException as exc:
            if self.in_session:
                tx = self._take_session()
                await self._finish(tx, StepOutcome("abort", error=exc))
            raise
        if self.in_session:
            await self.commit_work()

    # Entity operations --------------------------------------------------

    async def mark_create(self, entity: TransactionalObject[TxT]) -> None:
        await self._mark("create", entity, entity.create_by_tx)

    async def mark_update(self, entity: TransactionalObject[TxT]) -> None:
        await self._mark("update", entity, entity.update_by_tx)

    async def mark_delete(self, entity: TransactionalObject[TxT]) -> None:
        await self._mark("delete", entity, entity.delete_by_tx)

    async def _mark(self, operation: str, entity: TransactionalObject[TxT], step: Step) -> None:
        description = _describe(entity)
        if self._active_transaction is not None:
            if not self._session_already_failed(operation, description):
                await self._run_in_session(operation, description, step)
            return

        tx = await self._backend.begin()
        outcome: StepOutcome | None = None
        try:
            outcome = await _attempt(operation, step, tx, entity=description)
            if outcome.ok:
                outcome = await _attempt("commit", self._backend.commit, tx, entity=description)
        finally:
            await self._finish(tx, outcome)

        if not outcome.ok:
            logger.warning(
                "uow.autocommit.failure",
                operation=outcome.operation,
                entity=description,
                error=repr(outcome.error),
            )
        outcome.raise_for_error()

    def _session_already_failed(self, operation: str, description: str) -> bool:
        failure = self._session_failure()
        if failure is None:
            return False
        # The session can only roll back now; later steps are not issued.
        logger.info(
            "uow.mark.skipped",
            operation=operation,
            entity=description,
            failed_operation=failure.operation,
            failed_entity=failure.entity,
        )
        return True

    async def _run_in_session(self, operation: str, description: str, step: Step) -> None:
        try:
            outcome = await _attempt(operation, step, self._active_transaction, entity=description)
        except BaseException as exc:
            # Cancelled mid-step; the step may have written part of its work.
            self._journal.append(StepOutcome(operation, description, exc))
            logger.warning(
                "uow.mark.interrupted",
                operation=operation,
                entity=description,
                error=repr(exc),
            )
            raise
        self._journal.append(outcome)
        if not outcome.ok:
            logger.warning(
                "uow.mark.failure",
                operation=operation,
                entity=description,
                error=repr(outcome.error),
            )

    # Helpers ------------------------------------------------------------

    def _session_failure(self) -> StepOutcome | None:
        return next((outcome for outcome in self._journal if not outcome.ok), None)

    def _take_session(self) -> TxT:
        tx = self._active_transaction
        if tx is None:
            raise NoActiveSessionError("no unit of work session is open")
        self._active_transaction = None
        return tx

    async def _finish(self, tx: TxT, outcome: StepOutcome | None) -> None:
        """Roll back unless ``outcome`` succeeded, then release ``tx`` once.

        ``outcome`` is ``None`` when the deciding step was interrupted.
        """

        cause = None if outcome is None else outcome.error
        if outcome is None or not outcome.ok:
            await self._cleanup("rollback", self._backend.rollback, tx, cause=cause)
        await self._cleanup("release", self._backend.release, tx, cause=cause)
        self._journal = []

    async def _cleanup(
        self, operation: str, call: Step, tx: TxT, *, cause: BaseException | None
    ) -> None:
        outcome = await _attempt(operation, call, tx)
        if outcome.ok:
            return
        logger.error(
            "uow.cleanup.failure",
            operation=operation,
            error=repr(outcome.error),
            cause=repr(cause) if cause is not None else None,
        )
        if cause is not None:
            cause.add_note(f"{operation} failed while handling this error: {outcome.error!r}")


__all__ = ["StepOutcome", "UnitOfWork"]
