from sqlalchemy import update

from app.db import db
from app.models.blog_model import Blog


def get_by_id(blog_id):
    return db.session.get(Blog, blog_id)


def add_blog(**fields):
    blog = Blog(**fields)
    db.session.add(blog)
    db.session.flush()
    return blog


def increment_view(blog_id) -> bool:
    result = db.session.execute(
        update(Blog)
        .where(Blog.id == blog_id)
        .values(view=Blog.view + 1)
    )
    db.session.commit()
    return result.rowcount > 0


def count_all() -> int:
    return Blog.query.count()


def get_sorted_page(order_by, page: int, limit: int):
    return (
        Blog.query
        .order_by(*order_by)
        .offset((page - 1) * limit)
        .limit(limit)
        .all()
    )


def get_at_offset(offset: int):
    return Blog.query.order_by(Blog.id.asc()).offset(offset).limit(1).first()


def search_by_title(term: str, page: int, limit: int):
    query = (
        Blog.query
        .filter(Blog.title.icontains(term, autoescape=True))
        .order_by(Blog.created_at.desc(), Blog.id.desc())
    )
    total = query.count()
    blogs = query.offset((page - 1) * limit).limit(limit).all()
    return blogs, total


def get_by_category(category_id, page: int, limit: int):
    query = (
        Blog.query
        .filter(Blog.category_id == category_id)
        .order_by(Blog.created_at.desc(), Blog.id.desc())
    )
    total = query.count()
    blogs = query.offset((page - 1) * limit).limit(limit).all()
    return blogs, total


def get_all_by_category(category_id):
    return Blog.query.filter(Blog.category_id == category_id).all()
