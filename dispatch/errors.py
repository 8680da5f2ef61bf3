class ConfigurationError(Exception):
    """Raised at startup when the service must not serve traffic."""


class DispatchError(Exception):
    status_code = 500
    message = "Internal error"

    def __init__(self, message: str | None = None):
        super().__init__(message or self.message)
        if message:
            self.message = message


class Unauthenticated(DispatchError):
    status_code = 401
    message = "Authorization not configured"


class InvalidInput(DispatchError):
    status_code = 400
    message = "Invalid ride request"


class PersistenceFailure(DispatchError):
    status_code = 500
    message = "Could not record ride"
