from app.db import db
from app.models.feedback_model import Feedback


def create_feedback(**fields):
    feedback = Feedback(**fields)
    db.session.add(feedback)
    db.session.commit()
    return feedback


def get_by_id(feedback_id):
    return db.session.get(Feedback, feedback_id)


def get_page(page: int, limit: int):
    query = Feedback.query.order_by(Feedback.created_at.desc(), Feedback.id.desc())
    total = query.count()
    feedbacks = query.offset((page - 1) * limit).limit(limit).all()
    return feedbacks, total


def delete_feedback(feedback):
    db.session.delete(feedback)
    db.session.commit()
