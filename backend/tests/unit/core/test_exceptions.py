"""
Unit Tests for the platform exception hierarchy
"""
import pytest

from app.core.exceptions import (
    AuthenticationError,
    InvalidCredentialsError,
    InvalidTokenError,
    MethodNotAllowedError,
    NotFoundError,
    PersistenceError,
    ResearchAnalysisError,
    TokenExpiredError,
    UserExistsError,
    UserNotFoundError,
    ValidationError,
    error_response,
)


@pytest.mark.parametrize("error,status,code", [
    (ValidationError("x"), 400, "VALIDATION_ERROR"),
    (UserExistsError(), 400, "USER_EXISTS"),
    (AuthenticationError(), 401, "UNAUTHORIZED"),
    (InvalidTokenError(), 401, "INVALID_TOKEN"),
    (TokenExpiredError(), 401, "TOKEN_EXPIRED"),
    (InvalidCredentialsError(), 401, "INVALID_CREDENTIALS"),
    (NotFoundError(), 404, "NOT_FOUND"),
    (UserNotFoundError("u-1"), 404, "USER_NOT_FOUND"),
    (MethodNotAllowedError(), 405, "METHOD_NOT_ALLOWED"),
    (PersistenceError("create t failed: boom"), 500, "PERSISTENCE_ERROR"),
])
def test_status_and_code(error, status, code):
    assert isinstance(error, ResearchAnalysisError)
    assert error.status_code == status
    assert error.code == code


def test_error_response_envelope():
    error = NotFoundError("Proyek tidak ditemukan", resource_id="p-1")

    assert error_response(error) == {
        "error": {"code": "NOT_FOUND", "message": "Proyek tidak ditemukan"}
    }
    assert error.details == {"resource_id": "p-1"}


def test_persistence_error_details():
    error = PersistenceError("update research_projects failed: timeout", table="research_projects", upstream_status=503)

    assert error.details == {"table": "research_projects", "upstream_status": 503}
    assert str(error) == "update research_projects failed: timeout"


def test_default_messages():
    assert AuthenticationError().message == "Token tidak ditemukan"
    assert InvalidCredentialsError().message == "Email atau password salah"
    assert UserExistsError().message == "Email sudah terdaftar"
