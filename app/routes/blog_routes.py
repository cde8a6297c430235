from flask import Blueprint, jsonify, request
from flask_jwt_extended import jwt_required

from app.routes.helpers import (
    current_admin,
    json_body,
    parse_pagination,
    request_payload,
)
from app.services import blog_service


blog_bp = Blueprint("blog", __name__)

_TRUE_VALUES = {"1", "true", "yes", "on"}


def _uploaded(field_name):
    return [
        file for file in request.files.getlist(field_name)
        if getattr(file, "filename", "")
    ]


@blog_bp.route("", methods=["GET"])
@blog_bp.route("/", methods=["GET"])
def list_blogs():
    page, limit = parse_pagination()
    sort = request.args.get("sort", default=blog_service.SORT_BY_VIEW)
    randomize = request.args.get("random", "").strip().lower() in _TRUE_VALUES

    data = blog_service.filter_and_sort_blogs(
        sort=sort,
        limit=limit,
        page=page,
        randomize=randomize,
    )
    return jsonify({"data": data}), 200


@blog_bp.route("/search", methods=["GET"])
def search_blogs():
    page, limit = parse_pagination()
    term = request.args.get("term") or request.args.get("q") or ""
    return jsonify({"data": blog_service.filter_by_name(term, page, limit)}), 200


@blog_bp.route("/add", methods=["POST"])
@jwt_required()
def create_blog():
    admin = current_admin()
    payload = request_payload()

    blog = blog_service.create_blog(
        admin,
        payload,
        files=_uploaded("medias"),
        main_media_index=payload.get("main_media_index"),
    )
    return jsonify({
        "message": "Success",
        "data": blog_service.serialize_blog(blog),
    }), 201


@blog_bp.route("/<int:blog_id>", methods=["GET"])
def blog_detail(blog_id):
    blog = blog_service.blog_detail(blog_id)
    return jsonify({"data": blog_service.serialize_blog(blog)}), 200


@blog_bp.route("/<int:blog_id>", methods=["PATCH", "POST"])
@jwt_required()
def update_blog(blog_id):
    current_admin()
    payload = request_payload()

    blog = blog_service.update_blog(
        blog_id,
        payload,
        replacement_files=_uploaded("medias"),
        new_files=_uploaded("new_medias"),
        medias_indices=payload.get("mediasIndices"),
        medias_to_remove=payload.get("medias_to_remove"),
        main_media_index=payload.get("main_media_index"),
    )
    return jsonify({"data": blog_service.serialize_blog(blog)}), 200


@blog_bp.route("/<int:blog_id>/set-rank", methods=["PATCH"])
@jwt_required()
def set_rank(blog_id):
    blog = blog_service.set_rank(blog_id, json_body())
    return jsonify({"data": blog_service.serialize_blog(blog)}), 200


@blog_bp.route("/<int:blog_id>/set-main-media", methods=["PATCH"])
@jwt_required()
def set_main_media(blog_id):
    blog = blog_service.set_main_media(blog_id, json_body())
    return jsonify({"data": blog_service.serialize_blog(blog)}), 200


@blog_bp.route("/<int:blog_id>", methods=["DELETE"])
@jwt_required()
def delete_blog(blog_id):
    blog_service.delete_blog(blog_id, current_admin())
    return jsonify({"message": "Blog has been deleted"}), 200
