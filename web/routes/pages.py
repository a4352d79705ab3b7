"""Public pages: wheel home and per-DNI result page."""

from __future__ import annotations

from flask import Blueprint, current_app

pages_bp = Blueprint("pages", __name__)


@pages_bp.route("/")
def home():
    return current_app.send_static_file("index.html")


@pages_bp.route("/premio/<dni>")
def prize_page(dni: str):
    # The page fetches /api/last-prize/<dni> itself
    return current_app.send_static_file("premio.html")
