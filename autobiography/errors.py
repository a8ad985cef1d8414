"""
Error Taxonomy

Every failure the authoring layer surfaces to a user is one of these.
The HTTP layer maps each kind to a status code; nothing else converts them.
"""


class AutobiographyError(Exception):
    """Base class for user-visible failures."""

    kind = "error"

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class ValidationError(AutobiographyError):
    """A required field is missing (empty event title/year, empty story at share time)."""

    kind = "validation_error"


class AuthorizationError(AutobiographyError):
    """The caller lacks the identity or capability the operation needs."""

    kind = "authorization_error"


class NotFoundError(AutobiographyError):
    """A share identifier is unknown or has been revoked."""

    kind = "not_found"


class ExternalServiceError(AutobiographyError):
    """The record store or another external collaborator failed."""

    kind = "external_service_error"


class GenerationError(ExternalServiceError):
    """The text-generation call failed. Carries no partial result."""

    kind = "generation_error"


class AuthenticationRequired(AuthorizationError):
    """No signed-in identity at all."""

    kind = "authentication_required"
