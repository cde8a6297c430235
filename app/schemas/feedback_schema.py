from marshmallow import EXCLUDE, validate

from app.extensions.extensions import ma


class FeedbackCreateSchema(ma.Schema):
    class Meta:
        unknown = EXCLUDE

    name = ma.Str(allow_none=True, validate=validate.Length(max=120))
    email = ma.Email(allow_none=True)
    subject = ma.Str(allow_none=True, validate=validate.Length(max=255))
    message = ma.Str(required=True, validate=validate.Length(min=1))


class FeedbackResponseSchema(ma.Schema):
    id = ma.Int()
    name = ma.Str(allow_none=True)
    email = ma.Str(allow_none=True)
    subject = ma.Str(allow_none=True)
    message = ma.Str()
    created_at = ma.DateTime()
    updated_at = ma.DateTime()
