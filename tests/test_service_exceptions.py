"""
Tests for service layer exceptions
"""
from unittest.mock import Mock

import pytest

from shajara.services.exceptions import (
    NotFoundError,
    ServiceError,
    ValidationError,
    handle_service_exceptions,
)


class TestServiceExceptions:
    """Test service exception classes"""

    def test_service_error_inheritance(self):
        """Test that all exceptions inherit from ServiceError"""
        assert isinstance(ValidationError("bad"), ServiceError)
        assert isinstance(NotFoundError("missing"), ServiceError)


class TestHandleServiceExceptions:
    """Test handle_service_exceptions decorator"""

    def raising(self, error, logger=None):
        @handle_service_exceptions(logger)
        def operation():
            raise error
        return operation

    def test_passes_through_return_value(self):
        @handle_service_exceptions()
        def operation(value):
            return value * 2

        assert operation(21) == 42

    def test_reraises_service_errors(self):
        with pytest.raises(NotFoundError, match="gone"):
            self.raising(NotFoundError("gone"))()

    def test_value_error_becomes_validation_error(self):
        with pytest.raises(ValidationError, match="Invalid input: bad number"):
            self.raising(ValueError("bad number"))()

    def test_key_error_becomes_validation_error(self):
        with pytest.raises(ValidationError, match="Missing required field: 'id'"):
            self.raising(KeyError('id'))()

    def test_unicode_error_becomes_validation_error(self):
        error = UnicodeDecodeError('utf-8', b'\xff', 0, 1, 'invalid start byte')
        with pytest.raises(ValidationError, match="not valid UTF-8"):
            self.raising(error)()

    def test_missing_file_becomes_not_found(self):
        error = FileNotFoundError(2, 'No such file', 'tree.json')
        with pytest.raises(NotFoundError, match="tree.json"):
            self.raising(error)()

    def test_os_error_becomes_service_error(self):
        with pytest.raises(ServiceError, match="File operation failed"):
            self.raising(PermissionError("denied"))()

    def test_unexpected_error_is_logged(self):
        logger = Mock()
        with pytest.raises(ServiceError, match="Unexpected service error"):
            self.raising(RuntimeError("boom"), logger)()
        logger.error.assert_called_once()
