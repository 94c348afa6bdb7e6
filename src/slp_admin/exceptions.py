"""Custom exceptions for the admin service."""


class AdminError(Exception):
    """Base class for errors reported back to the admin UI."""

    def __init__(self, message: str):
        self.message = message
        super().__init__(message)


# ──────────────────────────────────────────────
# Rejected before any network call
# ──────────────────────────────────────────────
class ValidationError(AdminError):
    """Raised when user input is rejected locally."""


class FileTooLarge(ValidationError):
    """Raised when a file exceeds the configured size limit."""

    def __init__(self, size: int, max_size_mb: float):
        self.size = size
        self.max_size_mb = max_size_mb
        super().__init__(f"File is too large. Maximum size is {max_size_mb:g}MB.")


class UnsupportedType(ValidationError):
    """Raised when a file's declared MIME type is not accepted."""

    def __init__(self, content_type: str, allowed_types: tuple[str, ...]):
        self.content_type = content_type
        self.allowed_types = allowed_types
        formats = ", ".join(format_name(t) for t in allowed_types)
        super().__init__(f"Invalid file type. Please upload one of these formats: {formats}")


def format_name(content_type: str) -> str:
    """``image/jpeg`` → ``JPEG``; ``*/*`` wildcards read as ``All files``."""
    subtype = content_type.split("/")[-1]
    return "All files" if subtype == "*" else subtype.upper()


# ──────────────────────────────────────────────
# Rejected by the remote API
# ──────────────────────────────────────────────
class BackendError(AdminError):
    """Raised when the Supabase API rejects a call."""

    def __init__(self, message: str, status_code: int | None = None):
        self.status_code = status_code
        super().__init__(message)


class BucketMissing(BackendError):
    """Raised when the storage bucket has not been provisioned."""

    def __init__(self, bucket: str, status_code: int | None = None):
        self.bucket = bucket
        super().__init__(
            "Storage bucket not found. Please check your Supabase configuration.",
            status_code,
        )


class PermissionDenied(BackendError):
    """Raised when storage ACLs reject a write."""

    def __init__(self, status_code: int | None = None):
        super().__init__(
            "Permission denied when uploading. Check Supabase storage permissions.",
            status_code,
        )


class UploadFailed(BackendError):
    """Raised for any other storage failure; carries the backend's text."""

    def __init__(self, backend_message: str, status_code: int | None = None):
        self.backend_message = backend_message
        super().__init__(f"Error: {backend_message}", status_code)


class NetworkError(AdminError):
    """Raised when a call to Supabase could not complete."""

    def __init__(self, operation: str, cause: Exception | None = None):
        self.operation = operation
        self.cause = cause
        super().__init__(f"Could not reach Supabase while trying to {operation}")
