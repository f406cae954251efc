from extensions import db
from flask_login import UserMixin

ROLES = ("admin", "faculty", "student")


class User(UserMixin, db.Model):
    __tablename__ = "users"

    user_id = db.Column(db.Integer, primary_key=True)
    name = db.Column(db.String(100), nullable=False)
    username = db.Column(db.String(50), unique=True, nullable=False)
    password_hash = db.Column(db.String(255), nullable=False)

    role = db.Column(db.Enum(*ROLES, name="user_role"), nullable=False)
    department = db.Column(db.String(100))

    # Student-only fields
    semester = db.Column(db.Integer, nullable=True)
    section = db.Column(db.String(10), nullable=True)
    batch = db.Column(db.String(10), nullable=True)  # Batch-1 | Batch-2 | NULL = all

    is_active = db.Column(db.Boolean, default=True)
    created_at = db.Column(db.DateTime, server_default=db.func.now())

    # Flask-Login looks for "id", but the column is "user_id".
    def get_id(self):
        return str(self.user_id)

    def to_dict(self):
        return {
            "user_id": self.user_id,
            "name": self.name,
            "username": self.username,
            "role": self.role,
            "department": self.department,
            "semester": self.semester,
            "section": self.section,
            "batch": self.batch,
            "is_active": self.is_active,
        }

    def __repr__(self):
        return f"<User {self.username}>"
