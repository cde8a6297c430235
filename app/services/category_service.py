import logging

from app.db import db
from app.exceptions import InvalidRequestError, NotFoundError
from app.extensions import file_store
from app.repositories import blog_repository, category_repository
from app.schemas.category_schema import (
    CategoryCreateSchema,
    CategoryResponseSchema,
    CategoryUpdateSchema,
)
from app.services.blog_service import find_blogs_by_category


logger = logging.getLogger(__name__)

_category_schema = CategoryResponseSchema()


def serialize_category(category):
    return _category_schema.dump(category)


def serialize_categories(categories):
    return _category_schema.dump(categories, many=True)


def get_category(category_id):
    category = category_repository.get_by_id(category_id)
    if not category:
        raise NotFoundError("Category")
    return category


def create_category(payload):
    fields = CategoryCreateSchema().load(payload)
    if fields["parent_category_id"] is not None:
        if not category_repository.get_by_id(fields["parent_category_id"]):
            raise NotFoundError("Parent category")

    return category_repository.create_category(**fields)


def create_subcategory(payload):
    fields = CategoryCreateSchema().load(payload)
    parent_id = fields["parent_category_id"]
    if parent_id is None or not category_repository.get_by_id(parent_id):
        raise NotFoundError("Parent category")

    return category_repository.create_category(**fields)


def build_category_tree(categories):
    """Nest categories under their parents, starting from the roots.

    A node is emitted at most once, so a corrupted parent graph containing a
    cycle cannot recurse forever; nodes only reachable through a cycle are
    left out.
    """
    children_by_parent = {}
    for category in categories:
        children_by_parent.setdefault(category.parent_category_id, []).append(category)

    visited = set()

    def build(parent_id):
        nodes = []
        for category in children_by_parent.get(parent_id, []):
            if category.id in visited:
                logger.warning("Category %s reached twice; cycle in tree", category.id)
                continue
            visited.add(category.id)
            node = serialize_category(category)
            node["sub_categories"] = build(category.id)
            nodes.append(node)
        return nodes

    return build(None)


def find_all():
    return build_category_tree(category_repository.get_all())


def find_parent_categories():
    return serialize_categories(category_repository.get_roots())


def find_sub_categories():
    return serialize_categories(category_repository.get_non_roots())


def find_category_detail(category_id, page=1, limit=20):
    category = get_category(category_id)
    blogs, total = find_blogs_by_category(category.id, page, limit)
    return {
        "category": serialize_category(category),
        "blogs": blogs,
        "page": page,
        "limit": limit,
        "total_count": total,
    }


def collect_subtree(root):
    """Return ``root`` and all its descendants, deepest first, root last."""
    visited = {root.id}
    ordered = []
    stack = [(root, False)]

    while stack:
        category, expanded = stack.pop()
        if expanded:
            ordered.append(category)
            continue

        stack.append((category, True))
        for child in reversed(category_repository.get_children(category.id)):
            if child.id in visited:
                logger.warning("Category %s reached twice; cycle in tree", child.id)
                continue
            visited.add(child.id)
            stack.append((child, False))

    return ordered


def update_category(category_id, payload):
    fields = CategoryUpdateSchema().load(payload)
    category = get_category(category_id)

    new_parent_id = fields.get("parent_category_id")
    if new_parent_id is not None and new_parent_id != category.parent_category_id:
        if new_parent_id == category.id:
            raise InvalidRequestError("A category cannot be its own parent")
        if not category_repository.get_by_id(new_parent_id):
            raise NotFoundError("Parent category")
        descendant_ids = {node.id for node in collect_subtree(category)}
        if new_parent_id in descendant_ids:
            raise InvalidRequestError(
                "A category cannot be moved under one of its sub-categories"
            )

    for key, value in fields.items():
        setattr(category, key, value)

    db.session.commit()
    return category


def remove_category(category_id):
    """Delete a category, every descendant, their blogs and the blogs' media.

    Nodes go bottom-up: for each one its blogs (and their media rows) are
    deleted before the category row itself. All rows are removed in one
    transaction; stored files are deleted after it commits.
    """
    root = get_category(category_id)
    deleted = serialize_category(root)
    subtree = collect_subtree(root)

    file_paths = []
    blog_count = 0
    try:
        for category in subtree:
            for blog in blog_repository.get_all_by_category(category.id):
                file_paths.extend(media.path for media in blog.media)
                db.session.delete(blog)
                blog_count += 1
            db.session.flush()

            db.session.delete(category)
            db.session.flush()

        db.session.commit()
    except Exception:
        db.session.rollback()
        raise

    orphaned = file_store.delete_files(file_paths)
    if orphaned:
        logger.warning(
            "Category %s deleted but %d media file(s) could not be removed: %s",
            category_id,
            len(orphaned),
            orphaned,
        )

    logger.info(
        "Category %s deleted with %d sub-categories and %d blogs",
        category_id,
        len(subtree) - 1,
        blog_count,
    )
    return {
        "category": deleted,
        "deleted_categories": len(subtree),
        "deleted_blogs": blog_count,
        "deleted_files": len(file_paths) - len(orphaned),
        "orphaned_files": orphaned,
    }
