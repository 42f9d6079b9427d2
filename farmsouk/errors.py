# farmsouk/errors.py
# Domain error taxonomy. Services raise these; the app factory renders them as JSON.


class MarketplaceError(Exception):
    status_code = 500
    default_message = "Internal server error"

    def __init__(self, message=None):
        super().__init__(message or self.default_message)
        self.message = message or self.default_message

    def to_dict(self):
        return {"error": self.message, "success": False}


class InvalidInput(MarketplaceError):
    status_code = 400
    default_message = "Invalid fields"

class EmptyCart(MarketplaceError):
    status_code = 400
    default_message = "Empty cart"

class NoValidItems(MarketplaceError):
    status_code = 400
    default_message = "No valid items"

class Unauthorized(MarketplaceError):
    status_code = 401
    default_message = "Unauthorized"

class Forbidden(MarketplaceError):
    status_code = 403
    default_message = "Forbidden"

class NotFound(MarketplaceError):
    status_code = 404
    default_message = "Not found"

class Conflict(MarketplaceError):
    status_code = 409
    default_message = "Conflict"

class InvalidTransition(Conflict):
    default_message = "Transition not allowed from the current status"
