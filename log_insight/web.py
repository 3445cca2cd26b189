"""Flask HTTP surface — log ingestion, query, delete, and stats endpoints."""

import logging
from datetime import datetime, timezone

from flask import Flask, jsonify, request

from log_insight.config import Config
from log_insight.errors import InvalidRequest, IOFailure
from log_insight.parser import format_time
from log_insight.service import LogService

logger = logging.getLogger(__name__)

TOKEN_FIELDS = (
    "model", "promptTokens", "completionTokens", "totalTokens",
    "requestId", "userId", "endpoint", "duration",
)


def create_app(service: LogService, config: Config | None = None) -> Flask:
    """Flask application factory."""
    config = config or Config()
    app = Flask(__name__)
    app.config["LOG_SERVICE"] = service

    def audit(level: str, msg: str, **fields):
        """Best-effort write to the app category. Never fails the request."""
        try:
            service.writer("app").write(level, msg, **fields)
        except IOFailure as exc:
            logger.warning("Could not record '%s' in app log: %s", msg, exc)

    @app.before_request
    def audit_request():
        if config.audit_requests:
            audit(
                "info",
                "Request received",
                method=request.method,
                url=request.full_path.rstrip("?"),
                ip=request.remote_addr,
                userAgent=request.headers.get("User-Agent"),
            )

    @app.errorhandler(InvalidRequest)
    def handle_invalid_request(error):
        logger.warning("Rejected %s %s: %s", request.method, request.path, error)
        audit("warn", "Request rejected", method=request.method, url=request.path, error=str(error))
        return jsonify(error=str(error)), 400

    @app.errorhandler(IOFailure)
    def handle_io_failure(error):
        logger.error("I/O failure on %s: %s", error.path, error)
        audit("error", "I/O failure", method=request.method, url=request.path, error=str(error))
        return jsonify(error=str(error)), 500

    @app.errorhandler(404)
    def handle_not_found(_error):
        return jsonify(error="Route not found"), 404

    def json_body() -> dict:
        body = request.get_json(silent=True)
        return body if isinstance(body, dict) else {}

    @app.route("/health")
    def health():
        return jsonify(status="OK", timestamp=format_time(datetime.now(timezone.utc)))

    @app.route("/api/logs/general", methods=["POST"])
    def record_general():
        body = json_body()
        message = body.get("message")
        if not message:
            return jsonify(error="Message is required"), 400

        service.writer("general").write(
            body.get("level", "info"),
            message,
            message=message,
            data=body.get("data", {}),
            ip=request.remote_addr,
            userAgent=request.headers.get("User-Agent"),
        )
        return jsonify(success=True, message="Log recorded")

    @app.route("/api/logs/tokens", methods=["POST"])
    def record_tokens():
        body = json_body()
        if not body.get("model") or body.get("totalTokens") is None:
            return jsonify(error="Model and totalTokens are required"), 400

        usage = {name: body.get(name) for name in TOKEN_FIELDS}
        service.writer("tokens").info("Token usage recorded", ip=request.remote_addr, **usage)
        return jsonify(success=True, message="Token usage recorded")

    @app.route("/api/logs/<category>", methods=["GET"])
    def get_logs(category):
        result = service.query(
            category,
            page=request.args.get("page"),
            limit=request.args.get("limit"),
            search=request.args.get("search", ""),
            start_date=request.args.get("startDate"),
            end_date=request.args.get("endDate"),
        )
        return jsonify(result.to_dict())

    @app.route("/api/logs/<category>", methods=["DELETE"])
    def delete_logs(category):
        conditions = request.get_json(silent=True) or {}
        result = service.delete_where(category, conditions)
        audit(
            "info",
            "Logs deleted",
            type=category,
            conditions=conditions,
            deletedCount=result.deleted_count,
        )
        return jsonify(result.to_dict())

    @app.route("/api/logs-stats")
    def log_stats():
        return jsonify({name: s.to_dict() for name, s in service.stats().items()})

    return app
