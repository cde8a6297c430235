from marshmallow import EXCLUDE, validate

from app.extensions.extensions import ma
from app.models.admin_model import ADMIN_ROLES, ROLE_ADMIN


class LoginSchema(ma.Schema):
    class Meta:
        unknown = EXCLUDE

    username = ma.Str(required=True, validate=validate.Length(min=1))
    password = ma.Str(required=True, validate=validate.Length(min=1))


class AdminCreateSchema(LoginSchema):
    role = ma.Str(load_default=ROLE_ADMIN, validate=validate.OneOf(ADMIN_ROLES))
