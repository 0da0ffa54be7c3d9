"""
Base Service.

Base class for all services providing common patterns for business logic.
Services orchestrate repositories and implement business rules.

Usage:
    from notevault.backend.services.base import BaseService

    class NoteService(BaseService):
        async def remove_note(self, note_id: str) -> bool:
            await self._execute_db_operation(
                "remove_note",
                self.repo.persist_all(remaining),
            )
"""

from collections.abc import Awaitable
from typing import Any, TypeVar

from sqlalchemy.exc import SQLAlchemyError

from notevault.backend.core.exceptions import PersistenceError
from notevault.backend.core.logging import get_logger

T = TypeVar("T")


class BaseService:
    """
    Base class for all services.

    Provides:
    - Logging context
    - Error wrapping for storage operations
    """

    def __init__(self) -> None:
        self._logger = get_logger(self.__class__.__module__)

    async def _execute_db_operation(
        self,
        operation: str,
        coro: Awaitable[T],
    ) -> T:
        """
        Execute a storage operation with error handling.

        Wraps storage operations to convert SQLAlchemy and OS exceptions
        to PersistenceError.

        Args:
            operation: Description of the operation for logging
            coro: Awaitable to execute

        Returns:
            Result of the awaitable

        Raises:
            PersistenceError: If the backing store fails
        """
        try:
            return await coro
        except (SQLAlchemyError, OSError) as e:
            self._logger.error(
                "Storage error",
                extra={"operation": operation, "error": str(e)},
            )
            raise PersistenceError(f"Storage operation failed: {operation}") from e

    def _log_operation(
        self,
        operation: str,
        **context: Any,
    ) -> None:
        """
        Log a service operation with context.

        Args:
            operation: Description of the operation
            **context: Additional context to include in log
        """
        self._logger.info(
            operation,
            extra={"service": self.__class__.__name__, **context},
        )

    def _log_debug(
        self,
        message: str,
        **context: Any,
    ) -> None:
        """
        Log debug information.

        Args:
            message: Debug message
            **context: Additional context to include in log
        """
        self._logger.debug(
            message,
            extra={"service": self.__class__.__name__, **context},
        )
