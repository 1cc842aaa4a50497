"""
Bookkeeping of endpoint requests and failures within one polling cycle.
"""

from dataclasses import dataclass
from typing import Any, Collection, Dict, List, Mapping, Optional

from . import const
from .exceptions import AggregateFetchError
from .logging import get_logger

logger = get_logger(__name__)


@dataclass
class FetchResult:
    """Outcome of fetching one endpoint: either a value (possibly None) or an error."""
    endpoint: str
    value: Any = None
    error: Optional[BaseException] = None

    @property
    def ok(self) -> bool:
        return self.error is None


def failing_sent_requests(sent: Collection[str], errors: Mapping[str, Any]) -> List[str]:
    """Endpoints sent this cycle that have a recorded error, in the order the errors were recorded."""
    return [endpoint for endpoint in errors if endpoint in sent]


def all_requests_failed(sent: Collection[str], errors: Mapping[str, Any]) -> bool:
    """True when at least one endpoint was sent this cycle and every one of them has an error."""
    failing = failing_sent_requests(sent, errors)
    return bool(failing) and len(failing) == len(sent)


class RequestStateHandler:
    """
    Records which endpoints were requested during a polling cycle and which of them failed.

    Call :meth:`push_request` before each request, :meth:`push` when it fails and
    :meth:`resolve` when it succeeds. After all requests of the cycle,
    :meth:`verify` raises if every one of them failed; partial failures are tolerated.
    """

    def __init__(self):
        self.sent_requests = set()
        self.api_errors: Dict[str, BaseException] = {}

    def push_request(self, endpoint: str) -> None:
        self.sent_requests.add(endpoint)

    def push(self, endpoint: str, error: BaseException) -> None:
        """Record the last error for ``endpoint``, moving it behind errors recorded earlier."""
        self.api_errors.pop(endpoint, None)
        self.api_errors[endpoint] = error

    def resolve(self, endpoint: str) -> None:
        self.api_errors.pop(endpoint, None)

    def clear(self) -> None:
        """Reset the sent requests for a new cycle. Recorded errors are kept."""
        self.sent_requests.clear()

    def reset(self) -> None:
        """Forget sent requests and recorded errors."""
        self.sent_requests.clear()
        self.api_errors.clear()

    def failed_endpoints(self) -> List[str]:
        return list(self.api_errors)

    def verify(self) -> None:
        """
        Check the cycle outcome.

        Raises:
            AggregateFetchError: If every endpoint requested this cycle failed. Errors kept
                from earlier cycles count only for endpoints requested again.
        """
        if not all_requests_failed(self.sent_requests, self.api_errors):
            return

        endpoints = failing_sent_requests(self.sent_requests, self.api_errors)
        error = self.api_errors[endpoints[0]]
        message = str(error) if error is not None else const.NOT_AVAILABLE
        logger.error(f"All requested endpoints failed: {', '.join(endpoints)}")
        raise AggregateFetchError(endpoints, message)
