from flask import Blueprint, jsonify
from flask_jwt_extended import jwt_required, get_jwt_identity

from app.routes.helpers import current_admin, json_body
from app.services import auth_service


auth_bp = Blueprint("auth", __name__)


@auth_bp.route("/login", methods=["POST"])
def login():
    tokens = auth_service.login(json_body())
    return jsonify(tokens), 200


@auth_bp.route("/refresh", methods=["POST"])
@jwt_required(refresh=True)
def refresh_token():
    username = get_jwt_identity()
    return jsonify(auth_service.refresh_access_token(username)), 200


@auth_bp.route("/me", methods=["GET"])
@jwt_required()
def me():
    return jsonify({"data": current_admin().to_dict()}), 200


@auth_bp.route("/admins", methods=["POST"])
@jwt_required()
def create_admin():
    admin = auth_service.create_admin(current_admin(), json_body())
    return jsonify({"message": "Admin created", "data": admin.to_dict()}), 201
