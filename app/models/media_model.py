from datetime import datetime

from app.db import db


class Media(db.Model):
    __tablename__ = "media"

    id = db.Column(db.Integer, primary_key=True)
    blog_id = db.Column(
        db.Integer,
        db.ForeignKey("blogs.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    path = db.Column(db.String(255), nullable=False)
    position = db.Column(db.Integer, nullable=False, default=0)
    created_at = db.Column(db.DateTime, default=datetime.utcnow)
