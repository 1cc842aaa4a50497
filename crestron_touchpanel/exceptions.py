from typing import List, Optional


class CrestronTouchPanelError(Exception):
    """Base exception for Crestron touch panel adapter errors."""

    pass


class AuthenticationError(CrestronTouchPanelError):
    """Raised when the touch panel rejects the login or an authenticated request."""

    pass


class CredentialError(AuthenticationError):
    """Raised when login or password is blank. No request is sent."""

    pass


class ConnectivityError(CrestronTouchPanelError):
    """Raised when the touch panel cannot be reached at the network level."""

    pass


class CrestronAPIError(CrestronTouchPanelError):
    """Raised when an API call to the touch panel fails with a non-auth HTTP error."""

    pass


class CrestronDataError(CrestronTouchPanelError):
    """Raised when a response body cannot be parsed or mapped to a model."""

    pass


class EndpointFetchError(CrestronTouchPanelError):
    """
    Failure of a single endpoint during a polling cycle.

    Recorded by the request state handler and never raised to the caller on its own.
    """

    def __init__(self, endpoint: str, cause: Optional[BaseException] = None):
        self.endpoint = endpoint
        self.cause = cause
        super().__init__(str(cause) if cause is not None else f"Request to {endpoint} failed")


class AggregateFetchError(CrestronTouchPanelError):
    """Raised when every endpoint requested during a polling cycle failed."""

    def __init__(self, endpoints: List[str], message: str):
        self.endpoints = list(endpoints)
        self.message = message
        super().__init__(
            f"Unable to process requested API sections: [{','.join(self.endpoints)}], "
            f"error reported: [{message}]"
        )


class ValidationError(CrestronTouchPanelError):
    """Raised when a control command is malformed or not supported."""

    pass
