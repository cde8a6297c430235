from app.db import db
from app.models.admin_model import Admin


def get_by_username(username: str):
    return Admin.query.filter_by(username=username).first()


def create_admin(username, password_hash, role):
    admin = Admin(
        username=username,
        password_hash=password_hash,
        role=role,
    )
    db.session.add(admin)
    db.session.commit()
    return admin
