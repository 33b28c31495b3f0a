# storefront/domain/errors.py


class StorefrontError(Exception):
    """Blad domenowy z kodem HTTP, renderowany przez handler w api/errors.py."""

    status_code = 500
    default_message = "Internal server error"

    def __init__(self, message: str | None = None, errors: list[str] | None = None):
        self.message = message or self.default_message
        self.errors = errors or []
        super().__init__(self.message)


class Unauthorized(StorefrontError):
    status_code = 401
    default_message = "Invalid token or no token provided"


class Forbidden(StorefrontError):
    status_code = 403
    default_message = "Access denied"


class NotFound(StorefrontError):
    status_code = 404
    default_message = "Not found"


class ValidationError(StorefrontError):
    status_code = 400
    default_message = "Validation error"


class Conflict(StorefrontError):
    #zgodnie z kontraktem API duplikat zwraca 400, nie 409
    status_code = 400
    default_message = "Resource already exists"


class Internal(StorefrontError):
    status_code = 500
