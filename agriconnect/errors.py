"""Application errors mapped to JSON responses."""


class AgriConnectError(Exception):
    """Base error carrying a user-facing (French) message and HTTP status."""
    status_code = 400

    def __init__(self, message, status_code=None, errors=None):
        super().__init__(message)
        self.message = message
        self.errors = errors
        if status_code is not None:
            self.status_code = status_code

    def to_dict(self):
        body = {'message': self.message}
        if self.errors:
            body['errors'] = self.errors
        return body


class ValidationFailed(AgriConnectError):
    """Payload rejected by its schema or by a business rule."""
    status_code = 400


class AuthenticationFailed(AgriConnectError):
    status_code = 401


class NotFoundError(AgriConnectError):
    status_code = 404


class InsufficientStockError(AgriConnectError):
    """Order quantity exceeds what the product has left."""
    status_code = 400

    def __init__(self, message='Quantité insuffisante disponible'):
        super().__init__(message)
