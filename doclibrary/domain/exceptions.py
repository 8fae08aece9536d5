"""Domain exceptions for the document library.

Defines domain-level exceptions that represent business rule violations
and remote failures surfaced at the repository boundary. Presentation
layer maps them to HTTP responses in exception handlers.
"""

from typing import Any


class DocLibraryException(Exception):
    """Base exception for all document library errors.

    All custom exceptions should inherit from this class to allow
    consistent error handling and logging. Presentation layer maps
    these to HTTP responses using message, error_code, and details.

    Attributes:
        message: Human-readable error description.
        error_code: Machine-readable error code.
        details: Additional error context (e.g. field, resource_id).
    """

    def __init__(
        self,
        message: str,
        error_code: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        """Initialize the exception.

        Args:
            message: Human-readable error description.
            error_code: Optional machine-readable code; defaults to class name.
            details: Optional dict of extra context.
        """
        self.message = message
        self.error_code = error_code or self.__class__.__name__
        self.details = details or {}
        super().__init__(self.message)

    def to_dict(self) -> dict[str, Any]:
        """Return a JSON-serializable error body."""
        return {
            "error": self.error_code,
            "message": self.message,
            "details": self.details,
        }


class ValidationException(DocLibraryException):
    """Raised when input validation fails (e.g. malformed phone number, missing selection)."""

    def __init__(self, message: str, field: str | None = None) -> None:
        """Initialize with message and optional field name.

        Args:
            message: Description of the validation failure.
            field: Optional field or attribute that failed validation.
        """
        details = {"field": field} if field else {}
        super().__init__(message, "VALIDATION_ERROR", details)


class UnsupportedTypeException(ValidationException):
    """Raised when an uploaded file's extension is not on the document allow-list."""

    def __init__(self, filename: str, mime_type: str) -> None:
        super().__init__(
            "Invalid document type. Supported formats: PDF, DOC, DOCX, TXT, RTF, XLS, XLSX",
            field="file",
        )
        self.error_code = "UNSUPPORTED_TYPE"
        self.details.update({"filename": filename, "mime_type": mime_type})


class UnknownCategoryException(ValidationException):
    """Raised when a category has no storage bucket mapping."""

    def __init__(self, category: str) -> None:
        super().__init__(f"Invalid document category: {category}", field="category")
        self.error_code = "UNKNOWN_CATEGORY"
        self.details["category"] = category


class AuthenticationException(DocLibraryException):
    """Raised when there is no signed-in user (missing, invalid or expired token)."""

    def __init__(self, message: str = "User not authenticated") -> None:
        """Initialize with optional message.

        Args:
            message: Description of the authentication failure.
        """
        super().__init__(message, "AUTHENTICATION_ERROR")


class AuthorizationException(DocLibraryException):
    """Raised when a signed-in user lacks the role required for the operation."""

    def __init__(
        self,
        resource: str | None = None,
        action: str | None = None,
        message: str = "Permission denied",
    ) -> None:
        """Initialize with optional resource, action, and message.

        Args:
            resource: Optional resource type (e.g. 'document', 'payment').
            action: Optional action that was attempted (e.g. 'delete', 'update').
            message: Human-readable message; default used when resource/action omitted.
        """
        if resource and action:
            message = f"Only administrators can {action} {resource}s"
        details: dict[str, Any] = {}
        if resource:
            details["resource"] = resource
        if action:
            details["action"] = action
        super().__init__(message, "PERMISSION_DENIED", details)


class ResourceNotFoundException(DocLibraryException):
    """Raised when a requested resource is not found."""

    def __init__(self, resource_type: str, resource_id: str) -> None:
        """Initialize with resource type and id.

        Args:
            resource_type: Type of resource (e.g. 'document', 'user').
            resource_id: The ID that was not found.
        """
        super().__init__(
            f"{resource_type} not found: {resource_id}",
            "RESOURCE_NOT_FOUND",
            {"resource_type": resource_type, "resource_id": resource_id},
        )


class InvalidURLException(DocLibraryException):
    """Raised when a document file_url does not contain a bucket and an object path."""

    def __init__(self, url: str) -> None:
        super().__init__("Invalid file URL", "INVALID_URL", {"url": url})


class UploadException(DocLibraryException):
    """Raised when the storage upload fails (including an object path collision)."""

    def __init__(self, message: str, path: str | None = None) -> None:
        details = {"path": path} if path else {}
        super().__init__(f"Upload failed: {message}", "UPLOAD_ERROR", details)


class RemoteException(DocLibraryException):
    """Opaque passthrough of a failure from the backing store or payment gateway."""

    def __init__(
        self,
        message: str,
        status_code: int | None = None,
        service: str = "supabase",
    ) -> None:
        details: dict[str, Any] = {"service": service}
        if status_code is not None:
            details["status_code"] = status_code
        super().__init__(message, "REMOTE_ERROR", details)
        self.status_code = status_code


class PaymentException(DocLibraryException):
    """Raised when a payment cannot be initiated or confirmed."""

    def __init__(self, message: str, method: str | None = None) -> None:
        details = {"payment_method": method} if method else {}
        super().__init__(message, "PAYMENT_ERROR", details)


class CompensationFailedException(DocLibraryException):
    """Raised when a two-step write failed and its compensating action also failed.

    Carries both the original error and the compensation error so neither is lost.
    """

    def __init__(
        self,
        operation: str,
        original: BaseException,
        compensation_error: BaseException | None = None,
    ) -> None:
        details: dict[str, Any] = {
            "operation": operation,
            "original_error": str(original),
        }
        if compensation_error is not None:
            details["compensation_error"] = str(compensation_error)
        super().__init__(
            f"{operation} failed and could not be rolled back: {original}",
            "COMPENSATION_FAILED",
            details,
        )
        self.original = original
        self.compensation_error = compensation_error
