"""
Unit Tests for Base Service.

Tests the BaseService class methods and error handling.
"""

import pytest
from unittest.mock import patch

from sqlalchemy.exc import OperationalError, SQLAlchemyError

from notevault.backend.core.exceptions import NotFoundError, PersistenceError
from notevault.backend.services.base import BaseService


class TestBaseServiceInit:
    """Tests for BaseService initialization."""

    def test_init_creates_logger(self):
        """Should create a logger for the service."""
        service = BaseService()

        assert service._logger is not None


class TestExecuteDbOperation:
    """Tests for _execute_db_operation method."""

    @pytest.fixture
    def service(self):
        """Create a BaseService instance."""
        return BaseService()

    @pytest.mark.asyncio
    async def test_returns_result_on_success(self, service):
        """Should return the coroutine result on success."""
        async def successful_operation():
            return ["note-1", "note-2"]

        result = await service._execute_db_operation(
            "load_all",
            successful_operation(),
        )

        assert result == ["note-1", "note-2"]

    @pytest.mark.asyncio
    async def test_wraps_sqlalchemy_error(self, service):
        """Should raise PersistenceError on SQLAlchemy errors."""
        async def failing_operation():
            raise SQLAlchemyError("Connection lost")

        with pytest.raises(PersistenceError) as exc_info:
            await service._execute_db_operation(
                "persist_all",
                failing_operation(),
            )

        assert "persist_all" in exc_info.value.message
        assert exc_info.value.code == "SYS_PERSISTENCE_ERROR"
        assert isinstance(exc_info.value.__cause__, SQLAlchemyError)

    @pytest.mark.asyncio
    async def test_wraps_operational_error(self, service):
        """Should raise PersistenceError when the database file is unusable."""
        async def failing_operation():
            raise OperationalError("SELECT", {}, Exception("database is locked"))

        with pytest.raises(PersistenceError):
            await service._execute_db_operation("load_all", failing_operation())

    @pytest.mark.asyncio
    async def test_wraps_os_error(self, service):
        """Should raise PersistenceError on filesystem errors."""
        async def failing_operation():
            raise PermissionError("read-only file system")

        with pytest.raises(PersistenceError):
            await service._execute_db_operation("persist_all", failing_operation())

    @pytest.mark.asyncio
    async def test_application_errors_pass_through(self, service):
        """Should not rewrap errors that are already typed."""
        async def failing_operation():
            raise NotFoundError("Note x not found")

        with pytest.raises(NotFoundError):
            await service._execute_db_operation("get_note", failing_operation())

    @pytest.mark.asyncio
    async def test_logs_failed_operation(self, service):
        """Should log the operation name on failure."""
        async def failing_operation():
            raise SQLAlchemyError("boom")

        with patch.object(service._logger, "error") as mock_error:
            with pytest.raises(PersistenceError):
                await service._execute_db_operation("persist_all", failing_operation())

            extra = mock_error.call_args[1]["extra"]
            assert extra["operation"] == "persist_all"


class TestLoggingMethods:
    """Tests for logging helper methods."""

    @pytest.fixture
    def service(self):
        """Create a BaseService instance."""
        return BaseService()

    def test_log_operation_includes_service_name(self, service):
        """Should include service class name in log context."""
        with patch.object(service._logger, "info") as mock_info:
            service._log_operation("Note created", note_id="123")

            mock_info.assert_called_once()
            extra = mock_info.call_args[1]["extra"]
            assert extra["service"] == "BaseService"
            assert extra["note_id"] == "123"

    def test_log_debug_includes_service_name(self, service):
        """Should include service class name in debug log context."""
        with patch.object(service._logger, "debug") as mock_debug:
            service._log_debug("Note collection loaded", count=1)

            mock_debug.assert_called_once()
            extra = mock_debug.call_args[1]["extra"]
            assert extra["service"] == "BaseService"
            assert extra["count"] == 1

    def test_subclass_name_in_log_context(self):
        """Subclass logs should carry the subclass name."""
        class MyService(BaseService):
            pass

        service = MyService()

        with patch.object(service._logger, "info") as mock_info:
            service._log_operation("Did something")

            assert mock_info.call_args[1]["extra"]["service"] == "MyService"
