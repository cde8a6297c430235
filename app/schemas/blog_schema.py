from marshmallow import EXCLUDE, validate

from app.extensions.extensions import ma


def _required_text():
    return ma.Str(required=True, validate=validate.Length(min=1))


class BlogCreateSchema(ma.Schema):
    class Meta:
        unknown = EXCLUDE

    title = _required_text()
    content = _required_text()
    external_link = _required_text()
    message_link = _required_text()
    category_id = ma.Int(required=True)
    rank = ma.Int(load_default=0)


class BlogUpdateSchema(ma.Schema):
    class Meta:
        unknown = EXCLUDE

    title = ma.Str(validate=validate.Length(min=1))
    content = ma.Str(validate=validate.Length(min=1))
    external_link = ma.Str(validate=validate.Length(min=1))
    message_link = ma.Str(validate=validate.Length(min=1))
    category_id = ma.Int()
    rank = ma.Int()


class SetRankSchema(ma.Schema):
    class Meta:
        unknown = EXCLUDE

    rank = ma.Int(required=True)


class SetMainMediaSchema(ma.Schema):
    class Meta:
        unknown = EXCLUDE

    main_media_index = ma.Int(required=True)


class MediaResponseSchema(ma.Schema):
    id = ma.Int()
    path = ma.Str()
    position = ma.Int()


class BlogResponseSchema(ma.Schema):
    id = ma.Int()
    title = ma.Str()
    content = ma.Str()
    external_link = ma.Str()
    message_link = ma.Str()
    rank = ma.Int()
    view = ma.Int()
    category_id = ma.Int()
    admin_id = ma.Int()
    main_media = ma.Str(allow_none=True)
    media = ma.List(ma.Nested(MediaResponseSchema))
    created_at = ma.DateTime()
    updated_at = ma.DateTime()
