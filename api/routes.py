"""
API routes for the business card extraction API.

Flask REST API endpoints for OCR, field extraction and the spreadsheet
row hand-off.
"""

import logging
import os
from typing import Optional
from pathlib import Path

from flask import Blueprint, request, jsonify, current_app
from werkzeug.utils import secure_filename

from config import Config
from namecard.export import SHEET_HEADER, find_duplicate, to_sheet_row
from namecard.parser import RECORD_FIELDS
from namecard.pipeline import CardPipeline

logger = logging.getLogger(__name__)

# Create Blueprint
api_bp = Blueprint("api", __name__, url_prefix="/api")

# Pipeline instance (lazy initialization)
_pipeline: Optional[CardPipeline] = None


def get_pipeline() -> CardPipeline:
    """Get or create pipeline instance.

    Returns:
        CardPipeline instance
    """
    global _pipeline

    if _pipeline is None:
        settings = current_app.config
        _pipeline = CardPipeline(
            google_api_key=settings.get("GOOGLE_API_KEY"),
            vision_timeout=settings.get("VISION_TIMEOUT", 30.0),
            use_local_ocr=settings.get("USE_LOCAL_OCR", True),
            ocr_languages=settings.get("OCR_LANGUAGES"),
            ocr_gpu=settings.get("OCR_GPU", False),
            ocr_max_dimension=settings.get("OCR_MAX_DIMENSION", 2400),
        )
        logger.info(f"Pipeline initialized with engines: {_pipeline.get_status()['ocr_engines']}")

    return _pipeline


def allowed_file(filename: str) -> bool:
    return Config.is_allowed_file(filename)


def _bad_request(message: str):
    return jsonify({
        "success": False,
        "error": message
    }), 400


def _record_from_json(data) -> Optional[dict]:
    """Pick the record fields out of a JSON object; None if it is not one."""
    if not isinstance(data, dict):
        return None
    return {field: str(data.get(field) or "") for field in RECORD_FIELDS}


@api_bp.route("/health", methods=["GET"])
def health_check():
    """Health check endpoint.

    Returns:
        JSON with health status
    """
    return jsonify({
        "success": True,
        "status": "healthy",
        "message": "Business card extraction API is running",
        "version": "1.0.0"
    }), 200


@api_bp.route("/status", methods=["GET"])
def get_status():
    """Get API and pipeline status.

    Returns:
        JSON with status information
    """
    try:
        pipeline = get_pipeline()
        status = pipeline.get_status()

        return jsonify({
            "success": True,
            "data": {
                "api_status": "running",
                "pipeline_status": status,
                "ocr_configured": Config.get_api_status()
            }
        }), 200

    except Exception as e:
        logger.error(f"Error getting status: {str(e)}")
        return jsonify({
            "success": False,
            "error": str(e)
        }), 500


@api_bp.route("/process", methods=["POST"])
def process_single():
    """Process a single business card image.

    Expects:
        - multipart/form-data with 'file' field

    Returns:
        JSON with extracted contact data
    """
    if "file" not in request.files:
        return _bad_request("No file provided. Use 'file' field in form-data.")

    file = request.files["file"]

    if file.filename == "":
        return _bad_request("No file selected")

    if not allowed_file(file.filename):
        return _bad_request(f"File type not allowed. Allowed: {', '.join(sorted(Config.ALLOWED_EXTENSIONS))}")

    try:
        filename = secure_filename(file.filename)
        upload_folder = Path(current_app.config.get("UPLOAD_FOLDER", Config.UPLOAD_FOLDER))
        upload_folder.mkdir(parents=True, exist_ok=True)
        upload_path = upload_folder / filename
        file.save(str(upload_path))

        logger.info(f"Processing uploaded file: {filename}")

        pipeline = get_pipeline()
        result = pipeline.process_image(upload_path)

        try:
            os.remove(upload_path)
        except OSError as e:
            logger.warning(f"Failed to clean up file: {str(e)}")

        return jsonify(result), 200 if result.get("success") else 500

    except Exception as e:
        logger.error(f"Error processing file: {str(e)}")
        return jsonify({
            "success": False,
            "error": str(e)
        }), 500


@api_bp.route("/parse-text", methods=["POST"])
def parse_text():
    """Parse raw OCR text (skip OCR).

    Expects:
        - JSON body with 'text' field

    Returns:
        JSON with parsed contact data
    """
    data = request.get_json(silent=True)

    if not isinstance(data, dict) or "text" not in data:
        return _bad_request("No text provided. Send JSON with 'text' field.")

    if not isinstance(data["text"], str):
        return _bad_request("'text' must be a string")

    try:
        pipeline = get_pipeline()
        result = pipeline.process_text(data["text"])

        return jsonify({
            "success": result["success"],
            "data": result
        }), 200

    except Exception as e:
        logger.error(f"Error parsing text: {str(e)}")
        return jsonify({
            "success": False,
            "error": str(e)
        }), 500


@api_bp.route("/sheet-row", methods=["POST"])
def sheet_row():
    """Build the spreadsheet row for a (possibly user-corrected) record.

    Expects:
        - JSON body with the record fields

    Returns:
        JSON with the sheet header and the row values
    """
    record = _record_from_json(request.get_json(silent=True))
    if record is None:
        return _bad_request("Send the record as a JSON object.")

    return jsonify({
        "success": True,
        "data": {
            "header": SHEET_HEADER,
            "row": to_sheet_row(record)
        }
    }), 200


@api_bp.route("/check-duplicate", methods=["POST"])
def check_duplicate():
    """Check a record against rows already stored in the sheet.

    Expects:
        - JSON body {"record": {...}, "rows": [[...], ...]} with the header row first

    Returns:
        JSON with the duplicate row, if any
    """
    data = request.get_json(silent=True)
    if not isinstance(data, dict):
        return _bad_request("Send JSON with 'record' and 'rows'.")

    record = _record_from_json(data.get("record"))
    rows = data.get("rows", [])

    if record is None:
        return _bad_request("No record provided. Send JSON with 'record' object.")

    if not isinstance(rows, list) or not all(isinstance(row, list) for row in rows):
        return _bad_request("'rows' must be a list of rows")

    duplicate = find_duplicate(record, rows)

    return jsonify({
        "success": True,
        "data": {
            "is_duplicate": duplicate is not None,
            "duplicate": duplicate
        }
    }), 200


# Error handlers
@api_bp.errorhandler(400)
def bad_request(error):
    """Handle 400 errors."""
    return jsonify({
        "success": False,
        "error": "Bad request"
    }), 400


@api_bp.errorhandler(500)
def internal_error(error):
    """Handle 500 errors."""
    return jsonify({
        "success": False,
        "error": "Internal server error"
    }), 500
