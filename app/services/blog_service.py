import logging
import random

from flask import current_app

from app.db import db
from app.exceptions import InvalidRequestError, NotFoundError, PermissionDeniedError
from app.extensions import file_store
from app.models.blog_model import Blog
from app.models.media_model import Media
from app.repositories import blog_repository, category_repository
from app.repositories.media_repository import add_media
from app.schemas.blog_schema import (
    BlogCreateSchema,
    BlogResponseSchema,
    BlogUpdateSchema,
    SetMainMediaSchema,
    SetRankSchema,
)
from app.services.media_reconciliation import parse_index_list, reconcile_media


logger = logging.getLogger(__name__)

SORT_BY_RANK = "rank"
SORT_BY_VIEW = "view"

_blog_schema = BlogResponseSchema()


def serialize_blog(blog):
    return _blog_schema.dump(blog)


def serialize_blogs(blogs):
    return _blog_schema.dump(blogs, many=True)


def _parse_optional_index(raw, field_name: str):
    if raw is None or (isinstance(raw, str) and not raw.strip()):
        return None
    try:
        return int(raw)
    except (TypeError, ValueError) as e:
        raise InvalidRequestError(f"{field_name} must be an integer") from e


def _validate_uploads(files):
    files = files or []
    max_files = current_app.config["MAX_BLOG_MEDIA_FILES"]
    if len(files) > max_files:
        raise InvalidRequestError(f"Maximum {max_files} media files allowed")
    for file in files:
        file_store.validate_upload(file)
    return files


def _store_uploads(files, stored: list):
    """Save each upload, recording its path in ``stored`` as soon as it lands."""
    paths = []
    for file in files:
        path = file_store.save_upload(file)
        stored.append(path)
        paths.append(path)
    return paths


def _pick_main_media(paths, main_media_index):
    if not paths:
        return None
    if main_media_index is not None and 0 <= main_media_index < len(paths):
        return paths[main_media_index]
    return paths[0]


def _delete_committed_files(paths, blog_id):
    orphaned = file_store.delete_files(paths)
    if orphaned:
        logger.warning(
            "Blog %s committed but %d media file(s) could not be deleted: %s",
            blog_id,
            len(orphaned),
            orphaned,
        )
    return orphaned


def _require_category(category_id):
    category = category_repository.get_by_id(category_id)
    if not category:
        raise NotFoundError("Category")
    return category


def get_blog(blog_id):
    blog = blog_repository.get_by_id(blog_id)
    if not blog:
        raise NotFoundError("Blog")
    return blog


def create_blog(admin, payload, files=None, main_media_index=None):
    files = _validate_uploads(files)
    fields = BlogCreateSchema().load(payload)
    main_index = _parse_optional_index(main_media_index, "main_media_index")

    stored = []
    try:
        _require_category(fields["category_id"])

        blog = blog_repository.add_blog(admin_id=admin.id, **fields)
        paths = _store_uploads(files, stored)
        for position, path in enumerate(paths):
            add_media(blog_id=blog.id, path=path, position=position)
        blog.main_media = _pick_main_media(paths, main_index)

        db.session.commit()
    except Exception:
        db.session.rollback()
        file_store.delete_files(stored)
        raise

    logger.info(
        "Blog %s created by admin %s with %d media", blog.id, admin.id, len(stored)
    )
    return blog


def blog_detail(blog_id):
    if not blog_repository.increment_view(blog_id):
        raise NotFoundError("Blog")
    return get_blog(blog_id)


def filter_and_sort_blogs(sort=None, limit=20, page=1, randomize=False):
    total = blog_repository.count_all()

    if randomize:
        offsets = random.sample(range(total), min(limit, total))
        blogs = [blog_repository.get_at_offset(offset) for offset in offsets]
        blogs = [blog for blog in blogs if blog is not None]
    elif sort == SORT_BY_RANK:
        blogs = blog_repository.get_sorted_page(
            (Blog.rank.asc(), Blog.id.asc()), page, limit
        )
    else:
        blogs = blog_repository.get_sorted_page(
            (Blog.view.desc(), Blog.id.asc()), page, limit
        )

    return {
        "blogs": serialize_blogs(blogs),
        "page": page,
        "limit": limit,
        "total_count": total,
    }


def filter_by_name(term, page=1, limit=20):
    if not isinstance(term, str) or not term.strip():
        return {"blogs": [], "page": page, "limit": limit, "total_count": 0}

    blogs, total = blog_repository.search_by_title(term.strip(), page, limit)
    return {
        "blogs": serialize_blogs(blogs),
        "page": page,
        "limit": limit,
        "total_count": total,
    }


def find_blogs_by_category(category_id, page=1, limit=20):
    blogs, total = blog_repository.get_by_category(category_id, page, limit)
    return serialize_blogs(blogs), total


def _apply_media_paths(blog, paths):
    existing = {media.path: media for media in blog.media}
    ordered = []
    for position, path in enumerate(paths):
        media = existing.pop(path, None)
        if media is None:
            media = Media(path=path)
        media.position = position
        ordered.append(media)
    # rows left in ``existing`` are orphaned and deleted on flush
    blog.media = ordered


def update_blog(
    blog_id,
    payload,
    replacement_files=None,
    new_files=None,
    medias_indices=None,
    medias_to_remove=None,
    main_media_index=None,
):
    """Update scalar fields and reconcile the media list in one commit.

    Files uploaded for this request are removed again if anything fails;
    files that the edit replaces or removes are deleted only after the
    commit succeeds.
    """
    replacement_files = _validate_uploads(replacement_files)
    new_files = _validate_uploads(new_files)

    blog = get_blog(blog_id)
    fields = BlogUpdateSchema().load(payload)

    replace_indices = parse_index_list(medias_indices, "mediasIndices")
    remove_indices = parse_index_list(medias_to_remove, "medias_to_remove")
    main_index = _parse_optional_index(main_media_index, "main_media_index")

    if replacement_files and replace_indices is None:
        logger.info(
            "Blog %s: ignoring %d replacement media sent without indices",
            blog_id,
            len(replacement_files),
        )
        replacement_files = []

    if "category_id" in fields and fields["category_id"] != blog.category_id:
        _require_category(fields["category_id"])

    stored = []
    try:
        for key, value in fields.items():
            setattr(blog, key, value)

        replacements = _store_uploads(replacement_files, stored)
        additions = _store_uploads(new_files, stored)

        result = reconcile_media(
            [media.path for media in blog.media],
            replacements=replacements,
            replace_indices=replace_indices,
            remove_indices=remove_indices,
            additions=additions,
        )
        _apply_media_paths(blog, result.items)

        main_media = result.replaced.get(blog.main_media, blog.main_media)
        if main_media not in result.items:
            main_media = result.items[0] if result.items else None
        if additions:
            main_media = _pick_main_media(additions, main_index)
        blog.main_media = main_media

        db.session.commit()
    except Exception:
        db.session.rollback()
        file_store.delete_files(stored)
        raise

    logger.info(
        "Blog %s updated: %d replaced, %d removed, %d added",
        blog_id,
        len(result.replaced),
        len(result.removed),
        len(additions),
    )
    _delete_committed_files(result.discarded, blog_id)
    return get_blog(blog_id)


def set_rank(blog_id, payload):
    blog = get_blog(blog_id)
    fields = SetRankSchema().load(payload)
    blog.rank = fields["rank"]
    db.session.commit()
    return blog


def set_main_media(blog_id, payload):
    blog = get_blog(blog_id)
    index = SetMainMediaSchema().load(payload)["main_media_index"]
    if index < 0 or index >= len(blog.media):
        raise InvalidRequestError(f"Invalid media index: {index}.")

    blog.main_media = blog.media[index].path
    db.session.commit()
    return blog


def delete_blog(blog_id, admin):
    if not admin.is_super_admin:
        raise PermissionDeniedError("Only the super admin can delete blogs")

    blog = get_blog(blog_id)
    paths = [media.path for media in blog.media]

    db.session.delete(blog)
    db.session.commit()

    logger.info("Blog %s deleted by admin %s", blog_id, admin.id)
    _delete_committed_files(paths, blog_id)
    return blog_id
