from datetime import datetime

from app.db import db
from app.models.media_model import Media


class Blog(db.Model):
    __tablename__ = "blogs"

    id = db.Column(db.Integer, primary_key=True)
    title = db.Column(db.String(255), nullable=False)
    content = db.Column(db.Text, nullable=False)
    external_link = db.Column(db.String(2048), nullable=False)
    message_link = db.Column(db.String(2048), nullable=False)

    rank = db.Column(db.Integer, nullable=False, default=0)
    view = db.Column(db.Integer, nullable=False, default=0)

    category_id = db.Column(
        db.Integer,
        db.ForeignKey("categories.id"),
        nullable=False,
        index=True,
    )
    admin_id = db.Column(db.Integer, db.ForeignKey("admins.id"), nullable=False)

    # relative path of the primary image, one of media[*].path
    main_media = db.Column(db.String(255), nullable=True)

    created_at = db.Column(db.DateTime, default=datetime.utcnow, nullable=False)
    updated_at = db.Column(
        db.DateTime,
        default=datetime.utcnow,
        onupdate=datetime.utcnow,
        nullable=False,
    )

    media = db.relationship(
        "Media",
        backref="blog",
        lazy="select",
        order_by=Media.position,
        cascade="all, delete-orphan",
    )
