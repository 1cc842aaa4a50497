"""
Session artifacts for the touch panel's two-step cookie login.
"""

from dataclasses import dataclass
from typing import Dict, Optional


@dataclass
class AuthCookie:
    """
    Authentication state of one panel connection.

    ``track_id`` is obtained by the unauthenticated GET of the login page.
    ``cookie`` and ``refresh_token`` (the CSRF token echoed on POST requests)
    are written together by the POST login.
    """
    track_id: Optional[str] = None
    cookie: Optional[str] = None
    origin: Optional[str] = None
    login_referer: Optional[str] = None
    refresh_token: Optional[str] = None

    @property
    def is_authenticated(self) -> bool:
        return self.track_id is not None and self.cookie is not None

    def login_headers(self) -> Dict[str, str]:
        """Headers for the POST login request."""
        headers = {}
        if self.track_id is not None:
            headers["Cookie"] = self.track_id
        if self.origin is not None:
            headers["Origin"] = self.origin
        if self.login_referer is not None:
            headers["Referer"] = self.login_referer
        return headers

    @staticmethod
    def login_form(username: str, password: str) -> Dict[str, str]:
        """Form-encoded body for the POST login request."""
        return {"login": username, "passwd": password}

    def clear(self) -> None:
        """Forget all session artifacts, forcing a full login on the next cycle."""
        self.track_id = None
        self.cookie = None
        self.origin = None
        self.login_referer = None
        self.refresh_token = None
