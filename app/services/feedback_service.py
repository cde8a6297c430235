from app.exceptions import NotFoundError
from app.repositories import feedback_repository
from app.schemas.feedback_schema import FeedbackCreateSchema, FeedbackResponseSchema


_feedback_schema = FeedbackResponseSchema()


def serialize_feedback(feedback):
    return _feedback_schema.dump(feedback)


def create_feedback(payload):
    fields = FeedbackCreateSchema().load(payload)
    return feedback_repository.create_feedback(**fields)


def list_feedback(page: int, limit: int):
    feedbacks, total = feedback_repository.get_page(page, limit)
    return {
        "feedbacks": _feedback_schema.dump(feedbacks, many=True),
        "page": page,
        "limit": limit,
        "total_count": total,
    }


def delete_feedback(feedback_id):
    feedback = feedback_repository.get_by_id(feedback_id)
    if not feedback:
        raise NotFoundError("Feedback")

    feedback_repository.delete_feedback(feedback)
