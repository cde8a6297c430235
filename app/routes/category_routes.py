from flask import Blueprint, jsonify
from flask_jwt_extended import jwt_required

from app.routes.helpers import json_body, parse_pagination
from app.services import category_service


category_bp = Blueprint("category", __name__)


@category_bp.route("/add", methods=["POST"])
@jwt_required()
def create_category():
    category = category_service.create_category(json_body())
    return jsonify({
        "message": "Success",
        "data": category_service.serialize_category(category),
    }), 201


@category_bp.route("", methods=["GET"])
@category_bp.route("/", methods=["GET"])
def list_categories():
    return jsonify({"data": category_service.find_all()}), 200


@category_bp.route("/parent", methods=["GET"])
def list_parent_categories():
    return jsonify({"data": category_service.find_parent_categories()}), 200


@category_bp.route("/sub-category", methods=["GET"])
def list_sub_categories():
    return jsonify({"data": category_service.find_sub_categories()}), 200


@category_bp.route("/sub-category", methods=["POST"])
@jwt_required()
def create_sub_category():
    category = category_service.create_subcategory(json_body())
    return jsonify({
        "message": "Success",
        "data": category_service.serialize_category(category),
    }), 201


@category_bp.route("/<int:category_id>", methods=["GET"])
def get_category(category_id):
    page, limit = parse_pagination()
    data = category_service.find_category_detail(category_id, page, limit)
    return jsonify({"data": data}), 200


@category_bp.route("/<int:category_id>", methods=["PATCH"])
@jwt_required()
def update_category(category_id):
    category = category_service.update_category(category_id, json_body())
    return jsonify({"data": category_service.serialize_category(category)}), 200


@category_bp.route("/<int:category_id>", methods=["DELETE"])
@jwt_required()
def delete_category(category_id):
    result = category_service.remove_category(category_id)
    return jsonify({
        "message": "Category and related sub-categories and blogs have been deleted",
        "data": result,
    }), 200
