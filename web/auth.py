"""Authentication utilities for the admin panel.

The admin session is a stateless signed token ``"<issuedAtMillis>.<hexsig>"``
where the signature is an HMAC-SHA256, keyed with the session secret, over
``"<adminCode>:<issuedAtMillis>"``. The token lives in an HTTP-only cookie and
expires on its own once the TTL has elapsed; nothing is stored server side, so
logging out only clears the caller's cookie.
"""

from __future__ import annotations

import hashlib
import hmac
import re
from dataclasses import dataclass
from typing import Any, Callable, Optional

from flask import Flask, Request, Response, current_app, jsonify, render_template, request
from flask_login import LoginManager, UserMixin

from core import MS_PER_HOUR, SessionDefaults, get_logger
from core.exceptions import InvalidCredentialsError, UnauthorizedError
from utils.clock import now_ms

logger = get_logger(__name__)

ADMIN_PATH_PREFIX = "/admin"

# ASCII only; str.isdigit() also accepts other scripts' digits
ISSUED_AT_RE = re.compile(r"[0-9]+")


@dataclass(frozen=True)
class AdminSettings:
    """Admin code and signing material, loaded once at startup."""
    code: str
    secret: str
    ttl_hours: int = SessionDefaults.TTL_HOURS
    secure_cookie: bool = False

    @classmethod
    def from_config(cls, config) -> "AdminSettings":
        return cls(
            code=config.admin_code,
            secret=config.admin_session_secret,
            ttl_hours=config.admin_session_ttl_hours,
            secure_cookie=config.is_production,
        )

    @property
    def ttl_ms(self) -> int:
        return self.ttl_hours * MS_PER_HOUR

    @property
    def ttl_seconds(self) -> int:
        return self.ttl_hours * 3600


class SessionAuthenticator:
    """Issues, verifies and clears admin session tokens."""

    def __init__(self, settings: AdminSettings, clock: Callable[[], int] = now_ms) -> None:
        self.settings = settings
        self.clock = clock

    def _sign(self, issued_at: int) -> str:
        message = f"{self.settings.code}:{issued_at}".encode("utf-8")
        return hmac.new(self.settings.secret.encode("utf-8"), message, hashlib.sha256).hexdigest()

    def issue_token(self, supplied_code: Any) -> str:
        """Return a fresh token when ``supplied_code`` matches the admin code.

        Raises:
            InvalidCredentialsError: the code does not match
        """
        if not isinstance(supplied_code, str) or not hmac.compare_digest(
            supplied_code.encode("utf-8"), self.settings.code.encode("utf-8")
        ):
            raise InvalidCredentialsError()
        issued_at = self.clock()
        return f"{issued_at}.{self._sign(issued_at)}"

    def verify_token(self, token: Optional[str]) -> bool:
        """True only for a well-formed, unexpired token with a valid signature."""
        if not token or not isinstance(token, str):
            return False
        issued_str, _, signature = token.partition(".")
        if not ISSUED_AT_RE.fullmatch(issued_str) or not signature:
            return False
        try:
            issued_at = int(issued_str)
            if issued_at <= 0:
                return False
            if self.clock() - issued_at > self.settings.ttl_ms:
                return False
            # compare_digest rejects non-ASCII str with TypeError
            return hmac.compare_digest(signature, self._sign(issued_at))
        except (TypeError, ValueError):
            return False

    def is_authenticated(self, req: Request) -> bool:
        return self.verify_token(req.cookies.get(SessionDefaults.COOKIE_NAME))

    def set_cookie(self, response: Response, token: str) -> Response:
        response.set_cookie(
            SessionDefaults.COOKIE_NAME,
            token,
            max_age=self.settings.ttl_seconds,
            path="/",
            httponly=True,
            samesite=SessionDefaults.SAMESITE,
            secure=self.settings.secure_cookie,
        )
        return response

    def clear_cookie(self, response: Response) -> Response:
        """Expire the caller's cookie; other issued tokens stay valid until their TTL."""
        response.set_cookie(
            SessionDefaults.COOKIE_NAME,
            "",
            max_age=0,
            path="/",
            httponly=True,
            samesite=SessionDefaults.SAMESITE,
            secure=self.settings.secure_cookie,
        )
        return response


login_manager = LoginManager()
login_manager.session_protection = None


class AdminUser(UserMixin):
    """Represents the authenticated administrator."""
    def __init__(self) -> None:
        self.id = "admin"


def get_authenticator() -> SessionAuthenticator:
    return current_app.config["SESSION_AUTHENTICATOR"]


@login_manager.request_loader
def load_user_from_request(req: Request) -> Optional[AdminUser]:
    if get_authenticator().is_authenticated(req):
        return AdminUser()
    return None


def is_admin_path(path: str) -> bool:
    return path == ADMIN_PATH_PREFIX or path.startswith(ADMIN_PATH_PREFIX + "/")


@login_manager.unauthorized_handler
def admin_gate():
    """Login page for browser GETs into the admin tree, 401 JSON otherwise."""
    if request.method == "GET" and is_admin_path(request.path):
        return render_template("admin_login.html"), 200
    logger.info("Unauthorized %s %s", request.method, request.path)
    error = UnauthorizedError()
    return jsonify(error.to_dict()), error.status_code


def init_login_manager(app: Flask, settings: AdminSettings) -> SessionAuthenticator:
    """Attach the authenticator and Flask-Login to ``app``.

    Args:
        app: Flask application instance
        settings: Admin code, secret and TTL

    Returns:
        The authenticator stored in ``app.config["SESSION_AUTHENTICATOR"]``
    """
    authenticator = SessionAuthenticator(settings)
    login_manager.init_app(app)
    app.config["SESSION_AUTHENTICATOR"] = authenticator
    logger.info(
        "Admin sessions enabled: ttl=%dh secure_cookie=%s",
        settings.ttl_hours,
        settings.secure_cookie,
    )
    return authenticator
