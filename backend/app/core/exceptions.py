"""
Custom Exceptions for the Research Analysis Platform
=====================================================

Every error that reaches a client is one of these. Each class carries the
machine-readable code and the HTTP status it maps to, so the API layer can
render the ``{"error": {"code", "message"}}`` envelope without guessing.

Usage:
    from app.core.exceptions import NotFoundError, PersistenceError

    if not rows:
        raise NotFoundError("Analisis tidak ditemukan")
"""

from typing import Optional, Any, Dict


class ResearchAnalysisError(Exception):
    """Base exception for all platform errors"""

    status_code: int = 500

    def __init__(
        self,
        message: str,
        code: str = "INTERNAL_ERROR",
        details: Optional[Dict[str, Any]] = None
    ):
        self.message = message
        self.code = code
        self.details = details or {}
        super().__init__(self.message)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "code": self.code,
            "message": self.message,
        }


# ============================================
# Validation Errors (400-type)
# ============================================

class ValidationError(ResearchAnalysisError):
    """Input validation failed"""

    status_code = 400

    def __init__(self, message: str, field: Optional[str] = None):
        details = {"field": field} if field else {}
        super().__init__(message, code="VALIDATION_ERROR", details=details)


class UserExistsError(ResearchAnalysisError):
    """Email already registered"""

    status_code = 400

    def __init__(self, message: str = "Email sudah terdaftar"):
        super().__init__(message, code="USER_EXISTS")


# ============================================
# Authentication Errors (401-type)
# ============================================

class AuthenticationError(ResearchAnalysisError):
    """Request carries no usable credentials"""

    status_code = 401

    def __init__(self, message: str = "Token tidak ditemukan"):
        super().__init__(message, code="UNAUTHORIZED")


class InvalidTokenError(AuthenticationError):
    """Token cannot be decoded or its signature does not match"""

    def __init__(self, message: str = "Token tidak valid"):
        super().__init__(message)
        self.code = "INVALID_TOKEN"


class TokenExpiredError(AuthenticationError):
    """Token expiry lies in the past"""

    def __init__(self, message: str = "Token sudah kadaluarsa"):
        super().__init__(message)
        self.code = "TOKEN_EXPIRED"


class InvalidCredentialsError(AuthenticationError):
    """Email/password pair rejected"""

    def __init__(self, message: str = "Email atau password salah"):
        super().__init__(message)
        self.code = "INVALID_CREDENTIALS"


# ============================================
# Resource Errors (404-type)
# ============================================

class NotFoundError(ResearchAnalysisError):
    """Requested record does not exist (or is not visible to the caller)"""

    status_code = 404

    def __init__(self, message: str = "Data tidak ditemukan", resource_id: Optional[str] = None):
        details = {"resource_id": resource_id} if resource_id else {}
        super().__init__(message, code="NOT_FOUND", details=details)


class UserNotFoundError(NotFoundError):
    """User not found"""

    def __init__(self, user_id: Optional[str] = None):
        super().__init__("User tidak ditemukan", resource_id=user_id)
        self.code = "USER_NOT_FOUND"


# ============================================
# Routing Errors
# ============================================

class MethodNotAllowedError(ResearchAnalysisError):
    """HTTP method / action combination is not supported"""

    status_code = 405

    def __init__(self, message: str = "Method not allowed"):
        super().__init__(message, code="METHOD_NOT_ALLOWED")


# ============================================
# Persistence Errors
# ============================================

class PersistenceError(ResearchAnalysisError):
    """The data store rejected a request or could not be reached"""

    status_code = 500

    def __init__(self, message: str, table: Optional[str] = None, upstream_status: Optional[int] = None):
        details: Dict[str, Any] = {}
        if table:
            details["table"] = table
        if upstream_status is not None:
            details["upstream_status"] = upstream_status
        super().__init__(message, code="PERSISTENCE_ERROR", details=details)


# ============================================
# Helper function for API responses
# ============================================

def error_response(error: ResearchAnalysisError) -> Dict[str, Any]:
    """Convert exception to API error response format"""
    return {
        "error": error.to_dict()
    }
