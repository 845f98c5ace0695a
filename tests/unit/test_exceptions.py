"""Unit tests for custom exception classes.

Tests the exception hierarchy, default error codes, message handling,
and details propagation.
"""

import pytest

from umltools.exceptions import (
    UmlToolsError,
    DiagramParseError,
    UnsupportedImporterError,
    JobParseError,
    MissingFieldError,
    GenerationError,
    StorageError,
    InputValidationError,
)


class TestUmlToolsError:
    def test_base_error_attributes(self):
        err = UmlToolsError("Something failed", error_code="ERR_TEST", details={"key": "value"})
        assert err.message == "Something failed"
        assert err.error_code == "ERR_TEST"
        assert err.details == {"key": "value"}
        assert str(err) == "Something failed"

    def test_base_error_defaults(self):
        err = UmlToolsError("Minimal error")
        assert err.error_code == "ERR_UNKNOWN"
        assert err.details is None


class TestSubclassErrorCodes:
    """Each subclass must carry its own default error_code."""

    @pytest.mark.parametrize(
        "error_class, code",
        [
            (DiagramParseError, "ERR_IMPORT_001"),
            (UnsupportedImporterError, "ERR_IMPORT_002"),
            (JobParseError, "ERR_JOB_001"),
            (MissingFieldError, "ERR_EXPORT_001"),
            (GenerationError, "ERR_EXPORT_002"),
            (StorageError, "ERR_STORE_001"),
            (InputValidationError, "ERR_INPUT_001"),
        ],
    )
    def test_error_code(self, error_class, code):
        err = error_class("failed", details={"step": "s1"})
        assert err.error_code == code
        assert err.message == "failed"
        assert err.details == {"step": "s1"}
        assert isinstance(err, UmlToolsError)

    def test_catchable_as_base(self):
        with pytest.raises(UmlToolsError):
            raise JobParseError("bad job")
