import logging

from werkzeug.security import generate_password_hash, check_password_hash
from flask_jwt_extended import create_access_token, create_refresh_token

from app.exceptions import (
    AuthenticationError,
    InvalidRequestError,
    NotFoundError,
    PermissionDeniedError,
)
from app.models.admin_model import ROLE_SUPER_ADMIN
from app.repositories import admin_repository
from app.schemas.auth_schema import AdminCreateSchema, LoginSchema


logger = logging.getLogger(__name__)


def _tokens_for(admin):
    claims = {"role": admin.role}
    return {
        "access_token": create_access_token(
            identity=admin.username, additional_claims=claims
        ),
        "refresh_token": create_refresh_token(
            identity=admin.username, additional_claims=claims
        ),
    }


def get_admin(username):
    admin = admin_repository.get_by_username(username)
    if not admin:
        raise NotFoundError("Admin")
    return admin


def login(payload):
    fields = LoginSchema().load(payload)
    username = fields["username"].strip()

    admin = admin_repository.get_by_username(username)
    if not admin or not check_password_hash(admin.password_hash, fields["password"]):
        raise AuthenticationError()

    return _tokens_for(admin)


def refresh_access_token(username):
    admin = get_admin(username)
    return {
        "access_token": create_access_token(
            identity=admin.username, additional_claims={"role": admin.role}
        )
    }


def create_admin(requester, payload):
    if not requester.is_super_admin:
        raise PermissionDeniedError("Only the super admin can create admins")

    fields = AdminCreateSchema().load(payload)
    username = fields["username"].strip()
    if admin_repository.get_by_username(username):
        raise InvalidRequestError("Username already exists")

    admin = admin_repository.create_admin(
        username=username,
        password_hash=generate_password_hash(fields["password"]),
        role=fields["role"],
    )
    logger.info("Admin %s created with role %s", admin.username, admin.role)
    return admin


def ensure_super_admin(username, password):
    if not username or not password:
        return None

    admin = admin_repository.get_by_username(username)
    if admin:
        return admin

    admin = admin_repository.create_admin(
        username=username,
        password_hash=generate_password_hash(password),
        role=ROLE_SUPER_ADMIN,
    )
    logger.info("Seeded super admin %s", username)
    return admin
