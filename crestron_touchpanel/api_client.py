from typing import Any, Dict, List, Optional

import requests
import urllib3

from . import const
from .exceptions import (
    AuthenticationError,
    ConnectivityError,
    CredentialError,
    CrestronAPIError,
    CrestronDataError,
    CrestronTouchPanelError,
    EndpointFetchError,
)
from .logging import get_logger, log_api_response
from .models.auth import AuthCookie
from .properties import ResponseType
from .request_state import FetchResult, RequestStateHandler
from .utils import build_model, build_model_list

logger = get_logger(__name__)

AUTH_REJECTED_STATUS_CODES = (401, 403)


class CrestronTouchPanelClient:
    """
    Client for the embedded HTTP/JSON API of a Crestron touch panel.

    The panel uses a two-step cookie login: an unauthenticated GET of the login
    page yields a tracking cookie, and a form POST to the same page yields the
    session cookie together with a CSRF token that has to be echoed on every
    POST request.

    Note:
        The client holds at most one session. Once the tracking id and the session
        cookie are known, :meth:`authenticate` does nothing until
        :meth:`reset_session` is called, unless ``auth_retry_enabled`` is set, in
        which case a rejected request renews the session once and is retried.
    """

    def __init__(
        self,
        host: str,
        login: Optional[str],
        password: Optional[str],
        port: int = 443,
        protocol: str = "https",
        trust_all_certificates: bool = True,
        timeout: Optional[float] = None,
        auth_retry_enabled: bool = False,
    ):
        """
        Initialize the client. No request is sent until :meth:`authenticate`.

        Args:
            host: Host name or IP address of the panel.
            login: Username of a local panel account.
            password: Password of that account.
            port: HTTP(S) port. Defaults to 443.
            protocol: ``https`` or ``http``. Defaults to ``https``.
            trust_all_certificates: Accept any TLS certificate. Panels ship with
                                    self-signed certificates, so this defaults to True.
            timeout: Optional request timeout in seconds, passed to ``requests``.
            auth_retry_enabled: Renew the session once and retry when an authenticated
                                request is rejected with 401/403. Defaults to False.
        """
        if not host:
            raise ValueError("host must not be empty")
        if protocol not in ("http", "https"):
            raise ValueError(f"Unsupported protocol: {protocol}")
        if not 0 < int(port) < 65536:
            raise ValueError(f"Invalid port: {port}")

        logger.debug(f"Initializing CrestronTouchPanelClient for {protocol}://{host}:{port}")
        self.host = host
        self.port = int(port)
        self.protocol = protocol
        self.login = login
        self.password = password
        self.base_url = f"{protocol}://{host}:{self.port}"
        self.session = requests.Session()
        self.verify_ssl = not trust_all_certificates
        self.timeout = timeout
        self.auth_retry_enabled = auth_retry_enabled

        self.auth_cookie = AuthCookie()
        self.request_state = RequestStateHandler()

        if trust_all_certificates:
            logger.warning(
                "SSL certificate verification is disabled. All panel certificates are trusted."
            )
            urllib3.disable_warnings(urllib3.exceptions.InsecureRequestWarning)

    def _url(self, path: str) -> str:
        return f"{self.base_url}{path}"

    def _has_credentials(self) -> bool:
        return bool(self.login and self.login.strip()) and bool(self.password and self.password.strip())

    @staticmethod
    def _get_set_cookies(response: requests.Response) -> List[str]:
        """
        Return every ``Set-Cookie`` header value of a response, in order.

        ``response.headers`` folds repeated headers into one string, so the raw
        urllib3 headers are read when they are available.
        """
        raw_headers = getattr(response.raw, "headers", None)
        if raw_headers is not None and hasattr(raw_headers, "getlist"):
            values = raw_headers.getlist("Set-Cookie")
            if values:
                return list(values)
        value = response.headers.get("Set-Cookie")
        return [value] if value else []

    def _send(self, method: str, url: str, **kwargs) -> requests.Response:
        """
        Send one request, mapping transport failures to package exceptions.

        Raises:
            ConnectivityError: If the panel cannot be reached or does not answer in time.
            CrestronAPIError: For any other transport failure.
        """
        try:
            return self.session.request(
                method, url, verify=self.verify_ssl, timeout=self.timeout, **kwargs)
        except (requests.exceptions.ConnectionError, requests.exceptions.Timeout) as e:
            error_msg = f"Unable to reach {url}: {e}"
            logger.error(error_msg)
            raise ConnectivityError(error_msg) from e
        except requests.exceptions.RequestException as e:
            error_msg = f"API {method} request to {url} failed: {e}"
            logger.error(error_msg)
            raise CrestronAPIError(error_msg) from e

    @staticmethod
    def _raise_for_status(method: str, url: str, response: requests.Response) -> None:
        """
        Raises:
            AuthenticationError: On 401/403, carrying the response body.
            CrestronAPIError: On any other HTTP error status.
        """
        if response.status_code in AUTH_REJECTED_STATUS_CODES:
            logger.error(f"API {method} request to {url} was rejected (Status: {response.status_code})")
            raise AuthenticationError(response.text)
        try:
            response.raise_for_status()
        except requests.exceptions.HTTPError as e:
            error_msg = f"API {method} request to {url} failed: {e}"
            logger.error(error_msg)
            raise CrestronAPIError(error_msg) from e

    def authenticate(self) -> None:
        """
        Log in to the panel, performing only the steps whose results are missing.

        1. Without a tracking id, GET the login page and keep its first ``Set-Cookie``.
        2. Without a session cookie, GET the logout page to drop any server-side
           session, then POST the credentials. All returned ``Set-Cookie`` values
           become the session cookie and the ``CREST-XSRF-TOKEN`` header the CSRF token.

        Raises:
            CredentialError: If login or password is blank. Nothing is sent.
            AuthenticationError: If the panel answers 401/403.
            ConnectivityError: If the panel cannot be reached.
            CrestronAPIError: For any other HTTP failure.
        """
        if not self._has_credentials():
            logger.error(const.LOGIN_FAILED)
            raise CredentialError(const.LOGIN_FAILED)

        login_url = self._url(const.LOGIN)

        if self.auth_cookie.track_id is None:
            logger.debug(f"Requesting tracking cookie from {login_url}")
            response = self._send("GET", login_url)
            self._raise_for_status("GET", login_url, response)
            cookies = self._get_set_cookies(response)
            if cookies:
                self.auth_cookie.track_id = cookies[0]
                self.auth_cookie.origin = self.host
                self.auth_cookie.login_referer = self.host + const.LOGIN
            else:
                logger.warning(f"No tracking cookie returned by {login_url}")

        if self.auth_cookie.cookie is None:
            self._logout()
            logger.debug(f"Attempting authentication with username: {self.login}")
            response = self._send(
                "POST",
                login_url,
                data=AuthCookie.login_form(self.login, self.password),
                headers=self.auth_cookie.login_headers(),
            )
            self._raise_for_status("POST", login_url, response)
            cookies = self._get_set_cookies(response)
            if cookies:
                self.auth_cookie.cookie = ",".join(cookies)
                self.auth_cookie.refresh_token = response.headers.get(const.CREST_XSRF_TOKEN_HEADER)
                logger.info(f"Successfully logged in to Crestron touch panel {self.host}.")
            else:
                logger.warning(f"Login to {self.host} returned no session cookie")

    def _logout(self) -> None:
        logout_url = self._url(const.LOGOUT)
        try:
            response = self._send("GET", logout_url)
            logger.debug(f"Logout returned status {response.status_code}")
        except CrestronTouchPanelError as e:
            logger.debug(f"Ignoring logout failure: {e}")

    def _auth_headers(self, method: str) -> Dict[str, str]:
        headers = {}
        if self.auth_cookie.cookie is not None:
            headers["Cookie"] = self.auth_cookie.cookie
        if method.upper() == "POST" and self.auth_cookie.refresh_token is not None:
            headers[const.X_CREST_XSRF_TOKEN_HEADER] = self.auth_cookie.refresh_token
        return headers

    def _invoke_api_call(
        self,
        method: str,
        path: str,
        json_payload: Optional[Dict[str, Any]] = None,
    ) -> requests.Response:
        """
        Make an authenticated API request.

        Args:
            method: HTTP method, ``GET`` or ``POST``.
            path: Endpoint path below the base URL.
            json_payload: Optional dictionary to send as JSON body.

        Returns:
            requests.Response: The response object from the requests library.

        Raises:
            AuthenticationError: If the session is rejected (after one renewal when enabled).
            ConnectivityError: If the panel cannot be reached.
            CrestronAPIError: For any other HTTP error.
            ValueError: If an unsupported HTTP method is given.
        """
        method = method.upper()
        if method not in ("GET", "POST"):
            raise ValueError(f"Unsupported HTTP method: {method}")

        url = self._url(path)
        request_kwargs = {}
        if json_payload is not None:
            request_kwargs["json"] = json_payload

        response = self._send(method, url, headers=self._auth_headers(method), **request_kwargs)

        if response.status_code in AUTH_REJECTED_STATUS_CODES and self.auth_retry_enabled:
            logger.warning(
                f"Received {response.status_code} from {url}. Renewing session and retrying once..."
            )
            self.reset_session()
            self.authenticate()
            response = self._send(method, url, headers=self._auth_headers(method), **request_kwargs)

        self._raise_for_status(method, url, response)
        log_api_response(logger, method, url, response.text, response.status_code)
        return response

    def invoke_get(self, path: str) -> Any:
        """
        GET an endpoint and decode its JSON body.

        Raises:
            CrestronDataError: If the body is not valid JSON.
        """
        response = self._invoke_api_call("GET", path)
        try:
            return response.json()
        except ValueError as e:
            raise CrestronDataError(f"Invalid JSON returned by {path}: {e}") from e

    def invoke_post(self, path: str, body: Dict[str, Any]) -> requests.Response:
        logger.info(f"Sending POST request to {path}")
        logger.debug(f"POST body for {path}: {body}")
        return self._invoke_api_call("POST", path, json_payload=body)

    def fetch_result(self, endpoint: str, response_type: ResponseType) -> FetchResult:
        """
        Fetch one endpoint and map its payload to the model of ``response_type``.

        The request is recorded in :attr:`request_state`. A missing node is a valid
        ``None`` value. Data and non-auth HTTP failures are recorded as an
        :class:`EndpointFetchError` and returned in the result instead of being raised.

        Raises:
            AuthenticationError: If the panel rejects the session.
            ConnectivityError: If the panel cannot be reached.
        """
        model_name = response_type.model_class.__name__
        self.request_state.push_request(endpoint)
        try:
            payload = self.invoke_get(endpoint)
            node = response_type.extract_node(payload)
            if node is None:
                value = None
            elif response_type.is_collection:
                value = build_model_list(node, response_type.model_class, ".".join(response_type.path))
            else:
                value = build_model(node, response_type.model_class, ".".join(response_type.path))

            if value is None:
                logger.warning(f"Fetched data from {endpoint} is null for {model_name}")
            self.request_state.resolve(endpoint)
            return FetchResult(endpoint, value)
        except (AuthenticationError, ConnectivityError):
            raise
        except CrestronTouchPanelError as e:
            error = EndpointFetchError(endpoint, e)
            error.__cause__ = e
            self.request_state.push(endpoint, error)
            logger.error(f"Failed to fetch {model_name} from {endpoint}: {e}")
            return FetchResult(endpoint, error=error)

    def fetch_data(self, endpoint: str, response_type: ResponseType) -> Any:
        """Like :meth:`fetch_result` but returns only the value (``None`` on failure)."""
        return self.fetch_result(endpoint, response_type).value

    def reset_session(self) -> None:
        """Forget the session so the next :meth:`authenticate` performs a full login."""
        logger.debug("Clearing session state")
        self.auth_cookie.clear()

    def close(self) -> None:
        self.reset_session()
        self.session.close()
