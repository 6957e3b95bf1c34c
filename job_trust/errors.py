"""Error taxonomy for feedback ingestion and trust scoring."""


class TrustError(Exception):
    """Base exception for trust-engine errors."""

    status_code = 500


class ValidationError(TrustError):
    """Raised when a submission is missing identifying fields or is malformed."""

    status_code = 400


class NotFoundError(TrustError):
    """Raised when a referenced job or application does not exist."""

    status_code = 404


class ConflictError(TrustError):
    """Raised when a user has already left feedback for a job."""

    status_code = 409


class InternalError(TrustError):
    """Raised on unexpected resolution or persistence failures."""

    status_code = 500
