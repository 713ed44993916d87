import pytest
from werkzeug.exceptions import NotFound

from querycoder.constants import ErrorCategory, ErrorMessages, ErrorSeverity
from querycoder.errors import AppError, SchemaError, ValidationError, map_exception_to_status


@pytest.mark.unit
def test_app_error_derives_message_from_message_key() -> None:
    error = SchemaError(message_key="SCHEMA_CONDITION_CYCLE", extra={"query_keys": ["a"]})

    assert error.message == ErrorMessages.SCHEMA_CONDITION_CYCLE
    assert str(error) == ErrorMessages.SCHEMA_CONDITION_CYCLE
    assert error.extra == {"query_keys": ["a"]}
    assert error.category is ErrorCategory.SCHEMA
    assert error.severity is ErrorSeverity.HIGH


@pytest.mark.unit
def test_unknown_message_key_falls_back_to_internal_error() -> None:
    error = AppError(message_key="NOT_A_KEY")

    assert error.message == ErrorMessages.INTERNAL_ERROR


@pytest.mark.unit
def test_validation_error_is_recoverable() -> None:
    error = ValidationError("bad")

    assert error.recoverable is True
    assert error.status_code == 400
    assert error.message_key == "VALIDATION_ERROR"


@pytest.mark.unit
def test_map_exception_to_status() -> None:
    assert map_exception_to_status(ValidationError()) == 400
    assert map_exception_to_status(SchemaError()) == 500
    assert map_exception_to_status(NotFound()) == 404
    assert map_exception_to_status(RuntimeError("boom")) == 500
    assert map_exception_to_status(RuntimeError("boom"), default=503) == 503
