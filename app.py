import os
import logging
from urllib.parse import urlparse

from flask import Flask, request, jsonify
from werkzeug.exceptions import HTTPException
from dotenv import load_dotenv

from page_fetcher import fetch_page_text
from pipeline import ErrorKind, run_extraction

# Load env
load_dotenv()

logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)

app = Flask(__name__)
app.config["FETCH_TIMEOUT"] = float(os.getenv("FETCH_TIMEOUT", "10"))
app.config["HOST"] = os.getenv("HOST", "127.0.0.1")
app.config["PORT"] = int(os.getenv("PORT", "5000"))
app.config["DEBUG"] = os.getenv("FLASK_DEBUG", "0").lower() in ("1", "true", "yes")


# ---------------- ERROR MESSAGES ----------------
INVALID_URL_MESSAGE = "Please enter a valid URL"
GENERIC_ERROR_MESSAGE = "An error occurred while processing the job posting. Please try again."

ERROR_RESPONSES = {
    ErrorKind.INVALID_INPUT: (400, INVALID_URL_MESSAGE),
    ErrorKind.FETCH_FAILURE: (
        400, "Unable to access the provided URL. Please check the URL and try again."
    ),
    ErrorKind.INSUFFICIENT_CONTENT: (
        400, "Could not find a job description on this page. Please try a different URL."
    ),
    ErrorKind.UNEXPECTED_FAILURE: (500, GENERIC_ERROR_MESSAGE),
}


# ---------------- VALIDATION ----------------
def is_valid_url(url):
    if not isinstance(url, str) or not url or any(c.isspace() for c in url):
        return False
    try:
        parsed = urlparse(url)
    except ValueError:
        return False
    return parsed.scheme in ("http", "https") and bool(parsed.netloc)


# ---------------- ROUTES ----------------
@app.route("/api/health")
def health():
    return jsonify({"status": "ok"})


@app.route("/api/extract-keywords", methods=["POST"])
def extract_keywords_route():
    body = request.get_json(silent=True) or {}
    url = body.get("url") if isinstance(body, dict) else None

    if not is_valid_url(url):
        status, message = ERROR_RESPONSES[ErrorKind.INVALID_INPUT]
        return jsonify({"message": message}), status

    outcome = run_extraction(url, fetcher=fetch_page_text, timeout=app.config["FETCH_TIMEOUT"])
    if outcome.ok:
        return jsonify(outcome.result.to_dict())

    status, message = ERROR_RESPONSES[outcome.error]
    return jsonify({"message": message}), status


@app.errorhandler(Exception)
def handle_unexpected(e):
    if isinstance(e, HTTPException):
        return jsonify({"message": e.description}), e.code
    app.logger.exception("unhandled error on %s", request.path)
    return jsonify({"message": GENERIC_ERROR_MESSAGE}), 500


if __name__ == "__main__":
    app.run(host=app.config["HOST"], port=app.config["PORT"], debug=app.config["DEBUG"])
