"""
Resume Routes Blueprint - upload, score and browse resumes

Endpoints:
- POST   /api/resume/analyze   Upload a PDF/DOCX (form field 'resume') and score it
- GET    /api/resume/history   Newest analyses, without stored text
- GET    /api/resume/<id>      One analysis with stored text
- DELETE /api/resume/<id>      Delete an analysis
"""

import logging

from flask import Blueprint, current_app, jsonify, request
from werkzeug.utils import secure_filename

from hireboard.repositories import (
    delete_resume,
    find_resume_by_id,
    find_resumes,
    save_resume_analysis,
)
from hireboard.routes.helpers import db_connection, error_response
from hireboard.scoring import analyze_resume, get_score_tier
from hireboard.text_extraction import ResumeUploadError, extract_resume_text, file_type_for

logger = logging.getLogger(__name__)

resume_bp = Blueprint("resume", __name__, url_prefix="/api/resume")

PREVIEW_LENGTH = 1000


@resume_bp.route("/analyze", methods=["POST"])
def analyze():
    """
    Upload and analyze a resume.

    Form Data:
        resume: PDF or DOCX file (max 5MB by default)
        username: Optional uploader name

    Returns:
        JSON: {success, id, fileName, score, tier, strengths, improvements,
               sectionsFound, keywordsFound, wordCount, extractedText}
    """
    upload = request.files.get("resume")
    if upload is None or not upload.filename:
        return error_response("No file uploaded", 400)

    filename = secure_filename(upload.filename) or "resume"
    hireboard_config = current_app.config["HIREBOARD_CONFIG"]
    data = upload.read()

    try:
        text = extract_resume_text(
            data,
            upload.mimetype,
            max_bytes=hireboard_config.max_upload_bytes,
            min_length=hireboard_config.min_text_length,
        )
    except ResumeUploadError as e:
        logger.warning(f"Rejected resume upload '{filename}': {e}")
        return error_response(str(e), 400)

    analysis = analyze_resume(text)

    try:
        with db_connection() as conn:
            saved = save_resume_analysis(
                conn,
                file_name=filename,
                file_type=file_type_for(upload.mimetype),
                extracted_text=text,
                analysis=analysis,
                uploaded_by=request.form.get("username") or "User",
            )
    except Exception as e:
        logger.error(f"Resume analysis error: {e}", exc_info=True)
        return error_response("Failed to analyze resume", 500)

    logger.info(f"Scored resume '{filename}': {analysis.score}")

    return jsonify({
        "success": True,
        "id": saved["id"],
        "fileName": filename,
        "tier": get_score_tier(analysis.score),
        **analysis.to_dict(),
        "extractedText": text[:PREVIEW_LENGTH],
    })


@resume_bp.route("/history", methods=["GET"])
def history():
    with db_connection() as conn:
        resumes = find_resumes(conn)
    return jsonify({"success": True, "resumes": resumes})


@resume_bp.route("/<int:resume_id>", methods=["GET"])
def get_resume(resume_id):
    with db_connection() as conn:
        resume = find_resume_by_id(conn, resume_id)

    if resume is None:
        return error_response("Resume not found", 404)

    return jsonify({"success": True, "resume": resume})


@resume_bp.route("/<int:resume_id>", methods=["DELETE"])
def remove_resume(resume_id):
    with db_connection() as conn:
        deleted = delete_resume(conn, resume_id)

    if not deleted:
        return error_response("Resume not found", 404)

    return jsonify({"success": True, "message": "Resume deleted successfully"})
