from flask import Blueprint, current_app, jsonify, send_from_directory

from app.extensions.file_store import UPLOAD_URL_PREFIX

main_bp = Blueprint("main", __name__)


@main_bp.route("/health", methods=["GET"])
def health():
    return jsonify({"status": "healthy"}), 200


@main_bp.route(f"/{UPLOAD_URL_PREFIX}/<path:filename>", methods=["GET", "HEAD"])
def get_upload(filename: str):
    cache_max_age = max(
        int(current_app.config.get("MEDIA_CACHE_MAX_AGE_SECONDS", 7 * 24 * 60 * 60)),
        0,
    )
    # send_from_directory rejects paths escaping the root and handles
    # ETag / If-Modified-Since itself.
    return send_from_directory(
        current_app.config["UPLOAD_ROOT"],
        filename,
        max_age=cache_max_age,
        conditional=True,
    )
