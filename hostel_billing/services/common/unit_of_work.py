# hostel_billing/services/common/unit_of_work.py
"""
Unit of Work pattern implementation.

Provides transaction management and repository coordination
for the service layer with SQLAlchemy.
"""
from __future__ import annotations

from contextlib import AbstractContextManager
from typing import Any, Callable, List, Optional, Type, TypeVar

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from hostel_billing.core.exceptions import TransactionError
from hostel_billing.core.logging import get_logger
from hostel_billing.repositories.base import BaseRepository

logger = get_logger(__name__)

TRepository = TypeVar("TRepository", bound=BaseRepository)


class UnitOfWork(AbstractContextManager["UnitOfWork"]):
    """
    Unit of Work pattern for managing database transactions.

    Coordinates repositories and ensures atomic commits/rollbacks.

    Usage:
        >>> with UnitOfWork(session_factory) as uow:
        ...     ledger_repo = uow.get_repo(LedgerEntryRepository)
        ...     ledger_repo.append(entry)
        ...     # Auto-commits on __exit__ if no exception

    Post-commit callbacks:
        >>> with UnitOfWork(session_factory) as uow:
        ...     ...
        ...     uow.on_commit(lambda: notifier.dispatch(...))
        ...     # Runs only once the commit succeeded; failures are logged
    """

    def __init__(
        self,
        session_factory: Callable[[], Session],
        *,
        auto_commit: bool = True,
        auto_flush: bool = True,
    ) -> None:
        """
        Initialize Unit of Work.

        Args:
            session_factory: Factory function that returns a new Session
            auto_commit: Whether to auto-commit on successful context exit
            auto_flush: Whether to auto-flush changes before queries
        """
        self._session_factory = session_factory
        self._auto_commit = auto_commit
        self._auto_flush = auto_flush

        self.session: Optional[Session] = None
        self._committed: bool = False
        self._rolled_back: bool = False
        self._repo_cache: dict[Type[BaseRepository], BaseRepository] = {}
        self._after_commit: List[Callable[[], Any]] = []

    # ------------------------------------------------------------------ #
    # Context manager protocol
    # ------------------------------------------------------------------ #

    def __enter__(self) -> "UnitOfWork":
        """Enter the context and initialize session."""
        if self.session is not None:
            raise RuntimeError("UnitOfWork context already entered")

        self.session = self._session_factory()
        self.session.autoflush = self._auto_flush
        self._committed = False
        self._rolled_back = False
        self._repo_cache.clear()
        self._after_commit.clear()

        logger.debug("UnitOfWork session started")
        return self

    def __exit__(self, exc_type: Any, exc_val: Any, exc_tb: Any) -> bool:
        """Exit the context and handle transaction completion."""
        if self.session is None:
            return False

        run_callbacks = False
        try:
            if exc_type is None:
                if self._auto_commit and not self._committed and not self._rolled_back:
                    try:
                        self.session.commit()
                        self._committed = True
                        run_callbacks = True
                        logger.debug("UnitOfWork auto-committed")
                    except SQLAlchemyError as exc:
                        logger.error(f"Auto-commit failed: {exc}")
                        self.session.rollback()
                        self._rolled_back = True
                        raise TransactionError("Failed to commit transaction", exc) from exc
                elif not self._committed and not self._rolled_back:
                    # Read-only unit of work: nothing to keep
                    self.session.rollback()
            else:
                if not self._rolled_back:
                    self.session.rollback()
                    self._rolled_back = True
                    logger.warning(f"UnitOfWork rolled back due to {exc_type.__name__}")

        finally:
            self.session.close()
            self.session = None
            self._repo_cache.clear()
            logger.debug("UnitOfWork session closed")

        if run_callbacks:
            self._run_after_commit()
        self._after_commit.clear()

        return False

    # ------------------------------------------------------------------ #
    # Transaction control
    # ------------------------------------------------------------------ #

    def commit(self) -> None:
        """
        Explicitly commit the current transaction.

        Registered post-commit callbacks run after a successful commit.

        Raises:
            RuntimeError: If called outside of context
            TransactionError: If commit fails
        """
        if self.session is None:
            raise RuntimeError("UnitOfWork.commit() called outside of context")

        if self._committed:
            logger.warning("commit() called on already-committed transaction")
            return

        if self._rolled_back:
            raise RuntimeError("Cannot commit a rolled-back transaction")

        try:
            self.session.commit()
            self._committed = True
            logger.debug("UnitOfWork explicitly committed")
        except SQLAlchemyError as exc:
            logger.error(f"Commit failed: {exc}")
            self.session.rollback()
            self._rolled_back = True
            raise TransactionError("Failed to commit transaction", exc) from exc

        self._run_after_commit()

    def rollback(self) -> None:
        """
        Explicitly roll back the current transaction.

        Pending post-commit callbacks are discarded.

        Raises:
            RuntimeError: If called outside of context
        """
        if self.session is None:
            raise RuntimeError("UnitOfWork.rollback() called outside of context")

        if self._rolled_back:
            logger.warning("rollback() called on already-rolled-back transaction")
            return

        try:
            self.session.rollback()
            self._rolled_back = True
            self._committed = False
            self._after_commit.clear()
            logger.debug("UnitOfWork explicitly rolled back")
        except SQLAlchemyError as exc:
            logger.error(f"Rollback failed: {exc}")
            raise TransactionError("Failed to rollback transaction", exc) from exc

    def flush(self) -> None:
        """
        Flush pending changes to the database without committing.

        Raises:
            RuntimeError: If called outside of context
            TransactionError: If flush fails
        """
        if self.session is None:
            raise RuntimeError("UnitOfWork.flush() called outside of context")

        try:
            self.session.flush()
            logger.debug("UnitOfWork flushed")
        except SQLAlchemyError as exc:
            logger.error(f"Flush failed: {exc}")
            raise TransactionError("Failed to flush changes", exc) from exc

    # ------------------------------------------------------------------ #
    # Post-commit callbacks
    # ------------------------------------------------------------------ #

    def on_commit(self, callback: Callable[[], Any]) -> None:
        """
        Register a callable to run after this unit of work commits.

        Callbacks never run when the transaction rolls back, and an error
        raised by one is logged without affecting the committed data.
        """
        if self.session is None:
            raise RuntimeError("UnitOfWork.on_commit() called outside of context")
        self._after_commit.append(callback)

    def _run_after_commit(self) -> None:
        callbacks, self._after_commit = self._after_commit, []
        for callback in callbacks:
            try:
                callback()
            except Exception as exc:
                logger.error(
                    f"Post-commit callback failed: {exc}",
                    exc_info=True,
                    extra={"callback": getattr(callback, "__name__", repr(callback))},
                )

    # ------------------------------------------------------------------ #
    # Repository factory
    # ------------------------------------------------------------------ #

    def get_repo(self, repo_cls: Type[TRepository]) -> TRepository:
        """
        Get or create a repository instance bound to this UnitOfWork's session.

        Repositories are cached per UnitOfWork instance for consistency.

        Raises:
            RuntimeError: If called outside of context
        """
        if self.session is None:
            raise RuntimeError("UnitOfWork.get_repo() called outside of context")

        if repo_cls in self._repo_cache:
            return self._repo_cache[repo_cls]  # type: ignore

        repo_instance = repo_cls(self.session)
        self._repo_cache[repo_cls] = repo_instance

        logger.debug(f"Created repository: {repo_cls.__name__}")
        return repo_instance  # type: ignore

    # ------------------------------------------------------------------ #
    # Utility properties
    # ------------------------------------------------------------------ #

    @property
    def is_active(self) -> bool:
        """Check if the UnitOfWork is active (has an open session)."""
        return self.session is not None

    @property
    def is_committed(self) -> bool:
        """Check if the transaction has been committed."""
        return self._committed

    @property
    def is_rolled_back(self) -> bool:
        """Check if the transaction has been rolled back."""
        return self._rolled_back
