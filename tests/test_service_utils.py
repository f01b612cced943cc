"""
Tests for service utility functions
"""

from unittest.mock import Mock

import pytest

from shajara.services.exceptions import ValidationError
from shajara.shared.service_utils import execute_with_progress


class TestExecuteWithProgress:
    """Test execute_with_progress"""

    def test_success(self):
        operation = Mock(return_value={'persons': 3})

        result = execute_with_progress("GEDCOM import", operation, None, input_file='a.ged')

        operation.assert_called_once_with(input_file='a.ged')
        assert result == {
            "success": True,
            "message": "GEDCOM import completed",
            "results": {'persons': 3},
        }

    def test_progress_callback(self):
        operation = Mock(return_value=None)
        callback = Mock()

        execute_with_progress("GEDCOM export", operation, callback)

        statuses = [call.args[0]['status'] for call in callback.call_args_list]
        assert statuses == ['starting', 'completed']

    def test_service_error(self):
        operation = Mock(side_effect=ValidationError("bad file"))
        callback = Mock()

        result = execute_with_progress("GEDCOM import", operation, callback)

        assert result == {
            "success": False,
            "error": "GEDCOM import failed: bad file",
            "error_type": "ValidationError",
        }
        assert callback.call_args_list[-1].args[0]['status'] == 'failed'

    def test_unexpected_errors_propagate(self):
        operation = Mock(side_effect=RuntimeError("bug"))

        with pytest.raises(RuntimeError):
            execute_with_progress("GEDCOM import", operation)
