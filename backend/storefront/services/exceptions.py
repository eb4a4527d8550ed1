class StorefrontException(Exception):
    pass


class ValidationError(StorefrontException):
    """Raised when required input is missing or malformed; nothing is written."""
    pass


class NotFoundError(StorefrontException):
    pass


class CheckoutInProgressError(StorefrontException):
    """Raised when a second checkout is started for a cart that is still being checked out."""
    pass


class AuthenticationError(StorefrontException):
    pass


class PermissionDeniedError(StorefrontException):
    pass
