from flask import current_app, request
from flask_jwt_extended import get_jwt_identity

from app.exceptions import InvalidRequestError
from app.services import auth_service


def parse_pagination():
    page = request.args.get("page", default=1, type=int)
    limit = request.args.get(
        "limit",
        default=current_app.config["DEFAULT_PAGE_SIZE"],
        type=int,
    )

    if page is None or page < 1:
        page = 1
    if limit is None or limit < 1:
        limit = current_app.config["DEFAULT_PAGE_SIZE"]
    if limit > current_app.config["MAX_PAGE_SIZE"]:
        limit = current_app.config["MAX_PAGE_SIZE"]
    return page, limit


def json_body():
    data = request.get_json(silent=True)
    if not isinstance(data, dict):
        raise InvalidRequestError("Invalid JSON body")
    return data


def request_payload():
    """Body fields from a multipart form or a JSON object.

    Blank form values are treated as absent, so an edit form that posts every
    field leaves untouched ones alone.
    """
    content_type = (request.content_type or "").lower()
    if "multipart/form-data" in content_type or (
        "application/x-www-form-urlencoded" in content_type
    ):
        return {
            key: value
            for key, value in request.form.items()
            if value is not None and value.strip() != ""
        }
    return json_body()


def current_admin():
    return auth_service.get_admin(get_jwt_identity())
