"""JSON API: configuration, prize catalog, spins."""

from __future__ import annotations

from typing import Any, Dict

from flask import Blueprint, current_app, jsonify, request
from flask_login import login_required

from core import get_logger
from core.exceptions import ApplicationError
from services import BusinessConfigService, PrizeCatalog, SpinEngine, run_async
from web.config_middleware import SPIN_OUTCOMES

logger = get_logger(__name__)

api_bp = Blueprint("api", __name__, url_prefix="/api")


def request_payload() -> Dict[str, Any]:
    """JSON body, falling back to form fields."""
    data = request.get_json(silent=True)
    if isinstance(data, dict):
        return data
    return request.form.to_dict()


def _config_service() -> BusinessConfigService:
    return current_app.config["BUSINESS_CONFIG_SERVICE"]


def _catalog() -> PrizeCatalog:
    return current_app.config["PRIZE_CATALOG"]


def _spin_engine() -> SpinEngine:
    return current_app.config["SPIN_ENGINE"]


# ------- CONFIG -------

@api_bp.route("/config", methods=["GET"])
@login_required
def get_config():
    config = run_async(_config_service().get_or_create())
    return jsonify(config.to_dict())


@api_bp.route("/config", methods=["PUT"])
@login_required
def update_config():
    config = run_async(_config_service().update(request_payload()))
    return jsonify({"ok": True, "config": config.to_dict()})


# ------- PRIZES -------

@api_bp.route("/prizes", methods=["GET"])
def list_prizes():
    prizes = run_async(_catalog().list_prizes())
    return jsonify([prize.to_dict() for prize in prizes])


@api_bp.route("/prizes", methods=["POST"])
@login_required
def create_prize():
    prize = run_async(_catalog().create(request_payload()))
    return jsonify(prize.to_dict()), 201


@api_bp.route("/prizes/<prize_id>", methods=["PUT"])
@login_required
def update_prize(prize_id: str):
    prize = run_async(_catalog().update(prize_id, request_payload()))
    return jsonify(prize.to_dict())


@api_bp.route("/prizes/<prize_id>", methods=["DELETE"])
@login_required
def delete_prize(prize_id: str):
    run_async(_catalog().delete(prize_id))
    return jsonify({"ok": True})


# ------- SPIN -------

@api_bp.route("/spin", methods=["POST"])
def spin():
    dni = request_payload().get("dni")
    try:
        result = run_async(_spin_engine().spin(dni))
    except ApplicationError as error:
        SPIN_OUTCOMES.labels(outcome=type(error).__name__).inc()
        raise
    SPIN_OUTCOMES.labels(outcome="won").inc()
    return jsonify(result.to_dict())


@api_bp.route("/last-prize/<dni>", methods=["GET"])
def last_prize(dni: str):
    return jsonify(run_async(_spin_engine().last_prize(dni)))
