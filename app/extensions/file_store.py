"""Local disk storage for uploaded blog media.

Stored files are referenced by a relative path such as
``uploads/blog/<uuid>.png``; the first segment maps onto the configured
``UPLOAD_ROOT`` directory, which is also served statically.
"""
import logging
import os
import uuid

from flask import current_app

from app.exceptions import InvalidRequestError, MediaStorageError


logger = logging.getLogger(__name__)

UPLOAD_URL_PREFIX = "uploads"
BLOG_MEDIA_FOLDER = "blog"

# mimetype -> extension used for the stored file
ALLOWED_MEDIA_MIME_TYPES = {
    "image/jpeg": "jpg",
    "image/jpg": "jpg",
    "image/png": "png",
    "image/gif": "gif",
    "video/mp4": "mp4",
    "video/avi": "avi",
    "video/x-msvideo": "avi",
    "video/x-matroska": "mkv",
    "video/quicktime": "mov",
}


def _upload_root() -> str:
    return current_app.config["UPLOAD_ROOT"]


def absolute_path(relative_path: str) -> str:
    parts = relative_path.replace("\\", "/").split("/")
    if parts and parts[0] == UPLOAD_URL_PREFIX:
        parts = parts[1:]
    if not parts or any(part in ("", ".", "..") for part in parts):
        raise InvalidRequestError(f"Invalid media path: {relative_path}")
    return os.path.join(_upload_root(), *parts)


def validate_upload(file_storage):
    if not getattr(file_storage, "filename", ""):
        raise InvalidRequestError("Media file is required")

    mimetype = (getattr(file_storage, "mimetype", None) or "").lower()
    extension = ALLOWED_MEDIA_MIME_TYPES.get(mimetype)
    if extension is None:
        raise InvalidRequestError("Only image and video files are allowed")
    return extension


def save_upload(file_storage, folder: str = BLOG_MEDIA_FOLDER) -> str:
    extension = validate_upload(file_storage)
    filename = f"{uuid.uuid4()}.{extension}"
    relative_parts = [UPLOAD_URL_PREFIX, folder, filename]
    target = os.path.join(_upload_root(), folder, filename)
    os.makedirs(os.path.dirname(target), exist_ok=True)

    try:
        file_storage.stream.seek(0)
    except Exception:
        pass

    try:
        file_storage.save(target)
    except OSError as e:
        raise MediaStorageError() from e

    return "/".join(relative_parts)


def delete_file(relative_path: str) -> bool:
    """Remove one stored file. A file that is already gone counts as deleted."""
    try:
        os.remove(absolute_path(relative_path))
    except FileNotFoundError:
        return True
    except (OSError, InvalidRequestError):
        logger.warning("Could not delete media file %s", relative_path, exc_info=True)
        return False
    return True


def delete_files(relative_paths) -> list[str]:
    """Delete every path; returns the ones that could not be removed."""
    failed = []
    for relative_path in relative_paths:
        if relative_path and not delete_file(relative_path):
            failed.append(relative_path)
    return failed
