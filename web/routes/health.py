"""Health check blueprint."""

from __future__ import annotations

from flask import Blueprint, jsonify

from core.exceptions import StoreError
from database.repositories import PrizeRepository
from services import run_async


health_bp = Blueprint("health", __name__)


@health_bp.route("/health")
def health_check():
    try:
        prizes = run_async(PrizeRepository.count())
    except StoreError:
        return jsonify({"status": "degraded", "database": "unreachable"}), 503
    return jsonify({"status": "ok", "database": "ok", "prizes": prizes})
