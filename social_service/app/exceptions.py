from __future__ import annotations


class SocialServiceError(Exception):
    """Base exception for all social-service errors.

    status_code / code are used by the HTTP layer to build the error response.
    """

    status_code: int = 500
    code: str = "internal_error"

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message


class NotFoundError(SocialServiceError):
    """Missing user, profile, agency, group or store entity."""

    status_code = 404
    code = "not_found"


class ConflictError(SocialServiceError):
    """Unique constraint violations (e.g., email already registered)."""

    status_code = 409
    code = "conflict"


class ValidationError(SocialServiceError):
    """Malformed input that passed schema parsing (e.g., weak password, blank search query)."""

    status_code = 400
    code = "validation_error"


class InsufficientFundsError(SocialServiceError):
    """Credit deduction larger than the current balance."""

    status_code = 402
    code = "insufficient_credits"


class RelationshipUpdateError(SocialServiceError):
    """Second half of a two-document relationship update failed (first half compensated)."""

    status_code = 500
    code = "relationship_update_failed"


class IdGenerationExhaustedError(SocialServiceError):
    """No acceptable public user id could be produced within the attempt budget."""

    status_code = 503
    code = "user_id_exhausted"
