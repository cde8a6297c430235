from flask import Blueprint, jsonify
from flask_jwt_extended import jwt_required

from app.routes.helpers import json_body, parse_pagination
from app.services import feedback_service


feedback_bp = Blueprint("feedback", __name__)


@feedback_bp.route("", methods=["GET"])
@feedback_bp.route("/", methods=["GET"])
@jwt_required()
def list_feedback():
    page, limit = parse_pagination()
    return jsonify({"data": feedback_service.list_feedback(page, limit)}), 200


@feedback_bp.route("/add", methods=["POST"])
def add_feedback():
    feedback = feedback_service.create_feedback(json_body())
    return jsonify({
        "message": "Success",
        "data": feedback_service.serialize_feedback(feedback),
    }), 201


@feedback_bp.route("/<int:feedback_id>", methods=["DELETE"])
@jwt_required()
def delete_feedback(feedback_id):
    feedback_service.delete_feedback(feedback_id)
    return jsonify({"message": "Feedback has been deleted"}), 200
