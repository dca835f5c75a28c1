"""
Error taxonomy for the marketplace services.

Services raise these; the handlers in ``marketplace.exception_handlers``
translate them to ``{"error": message}`` JSON bodies with the mapped status.
"""


class MarketplaceError(Exception):
    status_code = 500
    default_message = "An unexpected error occurred."

    def __init__(self, message: str = None):
        self.message = message or self.default_message
        super().__init__(self.message)


class Unauthenticated(MarketplaceError):
    status_code = 401
    default_message = "Not authenticated"


class Forbidden(MarketplaceError):
    status_code = 403
    default_message = "Forbidden"


class NotFound(MarketplaceError):
    status_code = 404
    default_message = "Not found"


class InvalidRequest(MarketplaceError):
    status_code = 400
    default_message = "Invalid request"


class IntegrityFault(MarketplaceError):
    """A matched record is missing fields that a healthy row always has."""
    status_code = 400
    default_message = "Record is missing required data."


class Conflict(MarketplaceError):
    status_code = 409
    default_message = "Conflict"


class InternalError(MarketplaceError):
    status_code = 500
