from app.db import db
from app.models.category_model import Category


def get_by_id(category_id):
    if category_id is None:
        return None
    return db.session.get(Category, category_id)


def create_category(name, description=None, parent_category_id=None):
    category = Category(
        name=name,
        description=description,
        parent_category_id=parent_category_id,
    )
    db.session.add(category)
    db.session.commit()
    return category


def get_all():
    return Category.query.order_by(Category.id.asc()).all()


def get_children(parent_category_id):
    return (
        Category.query
        .filter(Category.parent_category_id == parent_category_id)
        .order_by(Category.id.asc())
        .all()
    )


def get_roots():
    return get_children(None)


def get_non_roots():
    return (
        Category.query
        .filter(Category.parent_category_id.isnot(None))
        .order_by(Category.id.asc())
        .all()
    )
