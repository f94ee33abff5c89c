"""
routes/health.py — liveness and readiness probes

GET /health/live   — 200 while the process runs
GET /health/ready  — 200 when a TTS provider is configured, else 503
"""

from flask import Blueprint, current_app, jsonify

health_bp = Blueprint('health', __name__)


def _as_json(result):
    return {'healthy': result.healthy, 'message': result.message, 'details': result.details}


@health_bp.get('/health/live')
def health_live():
    result = current_app.extensions['health_checker'].liveness()
    return jsonify(_as_json(result)), 200


@health_bp.get('/health/ready')
def health_ready():
    result = current_app.extensions['health_checker'].readiness()
    return jsonify(_as_json(result)), 200 if result.healthy else 503
