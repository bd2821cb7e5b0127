"""Community Service HTTP handler - peer support posts.

Posts are stored redacted under a pseudonym. Held posts are kept out of
the public listing; crisis posts are not stored at all.
"""
import logging
import os

from flask import Flask, jsonify, request

from mannmitra.shared.utils import configure_pii_salt
from .composer import InMemoryPostStore, PostComposer

logger = logging.getLogger(__name__)

app = Flask(__name__)

pii_salt = os.getenv("PII_HASH_SALT", "default_dev_salt_change_in_production_32chars")
configure_pii_salt(pii_salt)

MAX_POST_LENGTH = int(os.getenv("MAX_POST_LENGTH", "500"))

post_store = InMemoryPostStore()
composer = PostComposer(store=post_store)


def _bad_request(reason: str):
    logger.warning("POST_REQUEST_INVALID", extra={"reason": reason, "path": request.path})
    return jsonify({"error": reason}), 400


@app.route("/health", methods=["GET"])
def health():
    return jsonify({"status": "healthy", "service": "community-service"}), 200


@app.route("/api/posts", methods=["GET"])
def list_posts():
    """Public feed: published posts only, newest first."""
    return jsonify({"posts": [p.to_dict() for p in post_store.list_published()]}), 200


@app.route("/api/posts/review", methods=["POST"])
def review_post():
    """Pre-submission check with an optional kinder-phrasing suggestion.

    Request Body:
        {"text": "..."}
    """
    data = request.get_json(silent=True) or {}
    if not isinstance(data, dict):
        return _bad_request("Request body must be a JSON object")
    text = data.get("text")
    if not isinstance(text, str) or not text.strip():
        return _bad_request("Text is required")
    if len(text) > MAX_POST_LENGTH:
        return _bad_request(f"Text exceeds {MAX_POST_LENGTH} characters")

    return jsonify(composer.review(text).to_dict()), 200


@app.route("/api/posts", methods=["POST"])
def create_post():
    """Create a post.

    Request Body:
        {"uid": "...", "topicId": "exam_stress", "text": "..."}

    Response:
        201 with the stored post (published or held), or 200 with
        action "crisis" and crisis resources when the post was blocked.
    """
    data = request.get_json(silent=True) or {}
    if not isinstance(data, dict):
        return _bad_request("Request body must be a JSON object")
    uid = data.get("uid")
    topic_id = data.get("topicId", "general")
    text = data.get("text")

    if not isinstance(uid, str) or not uid:
        return _bad_request("Missing required field: uid")
    if not isinstance(topic_id, str):
        return _bad_request("topicId must be a string")
    if not isinstance(text, str) or not text.strip():
        return _bad_request("Missing required field: text")
    if len(text) > MAX_POST_LENGTH:
        return _bad_request(f"Text exceeds {MAX_POST_LENGTH} characters")

    try:
        result = composer.submit(uid=uid, topic_id=topic_id, text=text)
    except ValueError as e:
        return _bad_request(str(e))
    except Exception as e:
        logger.error("POST_CREATE_ERROR", extra={"error": str(e), "error_type": type(e).__name__})
        return jsonify({"error": "Failed to create post"}), 500

    return jsonify(result.to_dict()), (200 if result.blocked else 201)


if __name__ == "__main__":
    logging.basicConfig(
        level=logging.INFO,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )

    port = int(os.getenv("PORT", "8002"))
    app.run(host="0.0.0.0", port=port, debug=False)
