from app.db import db
from app.models.media_model import Media


def add_media(blog_id, path, position):
    media = Media(
        blog_id=blog_id,
        path=path,
        position=position,
    )
    db.session.add(media)
    return media
