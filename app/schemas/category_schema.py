from marshmallow import EXCLUDE, validate

from app.extensions.extensions import ma


class CategoryCreateSchema(ma.Schema):
    class Meta:
        unknown = EXCLUDE

    name = ma.Str(required=True, validate=validate.Length(min=1, max=255))
    description = ma.Str(allow_none=True, load_default=None)
    parent_category_id = ma.Int(allow_none=True, load_default=None)


class CategoryUpdateSchema(ma.Schema):
    class Meta:
        unknown = EXCLUDE

    name = ma.Str(validate=validate.Length(min=1, max=255))
    description = ma.Str(allow_none=True)
    parent_category_id = ma.Int(allow_none=True)


class CategoryResponseSchema(ma.Schema):
    id = ma.Int()
    name = ma.Str()
    description = ma.Str(allow_none=True)
    parent_category_id = ma.Int(allow_none=True)
    created_at = ma.DateTime()
    updated_at = ma.DateTime()
