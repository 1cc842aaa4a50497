"""
Polling and control adapter for Crestron touch panels.

This package logs in to the panel's embedded HTTP/JSON API, fetches device
information, capabilities, firmware versions, network settings and display state,
flattens them into a key/value statistics map and translates control commands
into partial updates of the display settings.
"""

from .api_client import CrestronTouchPanelClient
from .communicator import CrestronTouchPanelCommunicator
from .exceptions import (
    CrestronTouchPanelError,
    AuthenticationError,
    CredentialError,
    ConnectivityError,
    CrestronAPIError,
    CrestronDataError,
    EndpointFetchError,
    AggregateFetchError,
    ValidationError,
)
from .groups import PropertyGroupSelection
from .models import ControllableProperty, ControlCommand, ExtendedStatistics
from .request_state import FetchResult, RequestStateHandler

__version__ = "1.0.0"

__all__ = [
    "CrestronTouchPanelClient",
    "CrestronTouchPanelCommunicator",
    "PropertyGroupSelection",
    "FetchResult",
    "RequestStateHandler",
    "ControllableProperty",
    "ControlCommand",
    "ExtendedStatistics",
    "CrestronTouchPanelError",
    "AuthenticationError",
    "CredentialError",
    "ConnectivityError",
    "CrestronAPIError",
    "CrestronDataError",
    "EndpointFetchError",
    "AggregateFetchError",
    "ValidationError",
]
