"""Admin login/logout endpoints and the protected admin static tree."""

from __future__ import annotations

from pathlib import Path

from flask import Blueprint, abort, current_app, jsonify, request, send_from_directory
from flask_login import current_user, login_required

from core import get_logger
from core.exceptions import InvalidCredentialsError
from web.auth import get_authenticator
from web.routes.api import request_payload

logger = get_logger(__name__)

admin_bp = Blueprint("admin", __name__)

# Kept outside the public static folder so only the gated routes below reach it
ADMIN_PANEL_DIR = Path(__file__).resolve().parent.parent / "admin_panel"

ALL_METHODS = ["GET", "POST", "PUT", "PATCH", "DELETE", "OPTIONS"]


@admin_bp.route("/api/admin/login", methods=["POST"])
def login():
    """Exchange the admin code for a session cookie."""
    authenticator = get_authenticator()
    try:
        token = authenticator.issue_token(request_payload().get("code", ""))
    except InvalidCredentialsError:
        logger.warning("Failed admin login from %s", request.remote_addr)
        raise
    logger.info("Admin logged in from %s", request.remote_addr)
    return authenticator.set_cookie(jsonify({"ok": True}), token)


@admin_bp.route("/api/admin/logout", methods=["POST"])
def logout():
    return get_authenticator().clear_cookie(jsonify({"ok": True}))


@admin_bp.route("/admin", methods=ALL_METHODS, provide_automatic_options=False)
@admin_bp.route("/admin/", methods=ALL_METHODS, provide_automatic_options=False)
@admin_bp.route("/admin/<path:filename>", methods=ALL_METHODS, provide_automatic_options=False)
@login_required
def admin_files(filename: str = "index.html"):
    """Serve ``admin_panel/`` to authenticated admins only."""
    if request.method not in ("GET", "HEAD"):
        # login_required lets OPTIONS through unchecked
        if not current_user.is_authenticated:
            return current_app.login_manager.unauthorized()
        abort(405)
    return send_from_directory(ADMIN_PANEL_DIR, filename)
