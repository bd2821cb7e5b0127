"""Safety Service HTTP handler - edge glue around the text-safety core.

Endpoints accept {"text": "..."} JSON. The core functions are pure; this
module only validates input, shapes responses, and logs.

Raw text is never logged; only its fingerprint and length.
"""
import logging
import os

from flask import Flask, jsonify, request

from mannmitra.shared.utils import configure_pii_salt, hash_text_for_audit
from .config import SafetyConfig
from .crisis_resources import get_crisis_resources
from .moderator import ModerationPolicy
from .redactor import get_redactor
from .self_harm import CrisisDetector

logger = logging.getLogger(__name__)

app = Flask(__name__)

pii_salt = os.getenv("PII_HASH_SALT", "default_dev_salt_change_in_production_32chars")
configure_pii_salt(pii_salt)

config = SafetyConfig(
    crisis_normalization_enabled=os.getenv("CRISIS_NORMALIZATION_ENABLED", "true").lower() == "true",
    max_text_length=int(os.getenv("MAX_TEXT_LENGTH", "1000")),
    lexicon_version=os.getenv("LEXICON_VERSION", SafetyConfig.lexicon_version),
)
policy = ModerationPolicy()
redactor = get_redactor()
crisis_detector = CrisisDetector(config=config)


class InvalidRequest(Exception):
    """Request body failed validation; maps to HTTP 400."""


def _read_text() -> str:
    """Pull a non-blank, bounded "text" field out of the JSON body."""
    data = request.get_json(silent=True)
    if not data:
        raise InvalidRequest("Request body required")
    if not isinstance(data, dict):
        raise InvalidRequest("Request body must be a JSON object")

    text = data.get("text")
    if not isinstance(text, str) or not text.strip():
        raise InvalidRequest("Text is required")
    if len(text) > config.max_text_length:
        raise InvalidRequest(f"Text exceeds {config.max_text_length} characters")
    return text


@app.errorhandler(InvalidRequest)
def handle_invalid_request(error):
    logger.warning("SAFETY_REQUEST_INVALID", extra={"reason": str(error), "path": request.path})
    return jsonify({"error": str(error)}), 400


@app.route("/health", methods=["GET"])
def health():
    """Health check endpoint."""
    return jsonify({
        "status": "healthy",
        "service": "safety-service",
        "lexicon_version": config.lexicon_version,
    }), 200


@app.route("/ready", methods=["GET"])
def ready():
    if policy is None or crisis_detector is None:
        return jsonify({"status": "not_ready", "reason": "policy_not_initialized"}), 503
    return jsonify({"status": "ready"}), 200


@app.route("/api/moderate", methods=["POST"])
def moderate_text():
    """Moderate text for community posts and chat.

    Request Body:
        {"text": "..."}

    Response:
        {"toxicity": 0.0-1.0, "self_harm": 0.0-1.0,
         "action": "allow" | "hold" | "crisis"}

    Error Handling:
        On an unexpected error the response is "hold" - content is never
        published unreviewed because the scorer broke.
    """
    text = _read_text()
    try:
        verdict = policy.moderate(text)
    except Exception as e:
        logger.error(
            "MODERATE_ERROR",
            extra={
                "error": str(e),
                "error_type": type(e).__name__,
                "action": "DEFAULTING_TO_HOLD",
            }
        )
        return jsonify({
            "toxicity": 0.0,
            "self_harm": 0.0,
            "action": "hold",
            "error": "Moderation error - defaulting to hold",
        }), 200

    logger.info(
        "MODERATE_REQUEST_COMPLETED",
        extra={
            "text_hash": hash_text_for_audit(text),
            "text_length": len(text),
            "action": verdict.action.value,
        }
    )
    payload = verdict.to_edge_payload()
    if verdict.is_crisis:
        payload["crisis_ui"] = get_crisis_resources()
    return jsonify(payload), 200


@app.route("/api/redact", methods=["POST"])
def redact_text():
    """Redact PII before a caller stores or echoes text."""
    text = _read_text()
    try:
        report = redactor.redact_with_report(text)
    except Exception as e:
        logger.error("REDACT_ERROR", extra={"error": str(e), "error_type": type(e).__name__})
        return jsonify({"error": "Redaction failed"}), 500

    return jsonify({"text": report.text, "redactions": report.total_hits}), 200


@app.route("/api/crisis-check", methods=["POST"])
def crisis_check():
    """Decide whether the chat should show the crisis-resources banner."""
    text = _read_text()
    try:
        crisis = crisis_detector.detect(text)
    except Exception as e:
        # Fail towards showing help
        logger.error(
            "CRISIS_CHECK_ERROR",
            extra={"error": str(e), "error_type": type(e).__name__, "action": "SHOWING_BANNER"}
        )
        crisis = True

    response = {"crisis": crisis}
    if crisis:
        response["crisis_ui"] = get_crisis_resources()
    return jsonify(response), 200


if __name__ == "__main__":
    logging.basicConfig(
        level=logging.INFO,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )

    port = int(os.getenv("PORT", "8001"))
    app.run(host="0.0.0.0", port=port, debug=False)
