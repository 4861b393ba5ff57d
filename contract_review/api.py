"""
API Blueprint - contract upload, review and summary export

Every response under /api/ is JSON (or the exported PDF) and carries CORS
headers so the UI can also be hosted on another origin.
"""
import io

from flask import Blueprint, current_app, jsonify, make_response, request, send_file
from werkzeug.exceptions import HTTPException, RequestEntityTooLarge

from contract_review.normalize import normalize_result
from contract_review.services.extraction_service import (
    allowed_filename,
    clamp_text,
    extract_text_from_upload,
    text_is_readable,
)
from contract_review.services.openai_service import review_contract
from contract_review.services.report_service import build_summary_pdf

api_bp = Blueprint('api', __name__)

NO_FILE_ERROR = "No file provided"
UNSUPPORTED_TYPE_ERROR = "Unsupported file type. Please upload a PDF or Word document."
UNREADABLE_ERROR = "We couldn't extract readable text. Please export to PDF or DOCX and re-upload."
ANALYSIS_ERROR = "Contract analysis failed. Please try again."
UNEXPECTED_ERROR = "Unexpected error"
PDF_EXPORT_ERROR = "PDF export failed."

SUMMARY_PDF_NAME = "Contract_Summary.pdf"


def too_large_message() -> str:
    mb = current_app.config["MAX_UPLOAD_BYTES"] // (1024 * 1024)
    return f"File too large (max {mb}MB)."


def error_response(message: str, status: int):
    current_app.logger.warning("%s %s -> %d: %s", request.method, request.path, status, message)
    return jsonify({"error": message}), status


def preflight_response():
    return make_response("", 204)


# ============ CORS ============

@api_bp.after_request
def add_cors_headers(resp):
    resp.headers["Access-Control-Allow-Origin"] = current_app.config.get("CORS_ALLOW_ORIGIN", "*")
    resp.headers["Access-Control-Allow-Methods"] = "POST, OPTIONS"
    resp.headers["Access-Control-Allow-Headers"] = "Content-Type"
    return resp


# ============ Error handlers ============

# Routing errors (404/405) happen before a blueprint is picked, so the
# blueprint handlers and after_request above never see them.
@api_bp.app_errorhandler(HTTPException)
def handle_routing_error(error):
    if not request.path.startswith("/api/"):
        return error
    resp, status = error_response(error.description or error.name, error.code or 500)
    resp.status_code = status
    return add_cors_headers(resp)


@api_bp.errorhandler(RequestEntityTooLarge)
def handle_too_large(error):
    return error_response(too_large_message(), 413)


@api_bp.errorhandler(HTTPException)
def handle_http_error(error):
    return error_response(error.description or error.name, error.code or 500)


@api_bp.errorhandler(Exception)
def handle_unexpected(error):
    current_app.logger.exception("%s error", request.path)
    return jsonify({"error": UNEXPECTED_ERROR}), 500


# ============ API Routes ============

@api_bp.route("/api/review", methods=["POST", "OPTIONS"])
def review():
    if request.method == "OPTIONS":
        return preflight_response()

    file = request.files.get("file")
    if file is None:
        return error_response(NO_FILE_ERROR, 400)

    filename = file.filename or ""
    mime = file.mimetype or ""
    data = file.read()
    size = len(data)
    # Browsers send an empty, nameless part when nothing was picked.
    if not filename and not size:
        return error_response(NO_FILE_ERROR, 400)
    current_app.logger.info("Review upload: name=%r mime=%r size=%d", filename, mime, size)

    if size > current_app.config["MAX_UPLOAD_BYTES"]:
        return error_response(too_large_message(), 413)

    if filename and not allowed_filename(filename):
        return error_response(UNSUPPORTED_TYPE_ERROR, 415)

    text, err = extract_text_from_upload(data, filename, mime)
    if err:
        return error_response(err, 422)

    if not text_is_readable(text, current_app.config["MIN_TEXT_CHARS"]):
        return error_response(UNREADABLE_ERROR, 422)

    trimmed = clamp_text(text, current_app.config["TEXT_LIMIT"])
    current_app.logger.info("Extracted %d chars from %r, sending %d", len(text), filename, len(trimmed))

    reply, err = review_contract(trimmed)
    if err:
        current_app.logger.error("Contract analysis failed for %r: %s", filename, err)
        return error_response(ANALYSIS_ERROR, 500)

    out = normalize_result(reply)
    out["rawText"] = trimmed
    current_app.logger.info(
        "Review complete for %r: %d risks, %d counters",
        filename, len(out["risks"]), len(out["counters"]),
    )
    return jsonify(out), 200


@api_bp.route("/api/review/pdf", methods=["POST", "OPTIONS"])
def review_pdf():
    if request.method == "OPTIONS":
        return preflight_response()

    payload = request.get_json(silent=True)
    if not isinstance(payload, dict) or not payload:
        return error_response("No review result provided", 400)

    result = normalize_result(payload)
    try:
        pdf = build_summary_pdf(result)
    except Exception:
        current_app.logger.exception("PDF export failed")
        return jsonify({"error": PDF_EXPORT_ERROR}), 500

    return send_file(
        io.BytesIO(pdf),
        as_attachment=True,
        download_name=SUMMARY_PDF_NAME,
        mimetype="application/pdf",
    )
