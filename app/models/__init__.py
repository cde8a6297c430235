from app.models.admin_model import Admin
from app.models.blog_model import Blog
from app.models.category_model import Category
from app.models.feedback_model import Feedback
from app.models.media_model import Media

__all__ = ["Admin", "Blog", "Category", "Feedback", "Media"]
