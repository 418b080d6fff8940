"""User model.

Only ``id`` and ``username`` are read by the card core (comment authors).
Registration and credential checks live outside this package.
Flask-Login integration via UserMixin.
"""

from flask_login import UserMixin

from cardwall.extensions import db
from cardwall.ids import generate_id


class User(UserMixin, db.Model):
    __tablename__ = "users"

    id = db.Column(db.String(36), primary_key=True, default=generate_id)
    username = db.Column(db.String(20), unique=True, nullable=False)
    email = db.Column(db.String(255), unique=True, nullable=False)
    password_hash = db.Column(db.String(255), nullable=False)
    created_at = db.Column(
        db.DateTime(timezone=True), server_default=db.func.now()
    )

    def __repr__(self):
        return f"<User {self.username}>"
