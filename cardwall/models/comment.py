"""Comment model.

A comment is tied to its card and to its author through the
``cards_comments`` and ``users_comments`` membership tables.
"""

from cardwall.extensions import db
from cardwall.ids import generate_id
from cardwall.models.mixins import SoftDeleteMixin


cards_comments = db.Table(
    "cards_comments",
    db.Column(
        "card_id",
        db.String(36),
        db.ForeignKey("cards.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    ),
    db.Column(
        "comment_id",
        db.String(36),
        db.ForeignKey("comments.id", ondelete="CASCADE"),
        primary_key=True,
    ),
)

users_comments = db.Table(
    "users_comments",
    db.Column(
        "user_id",
        db.String(36),
        db.ForeignKey("users.id"),
        nullable=False,
    ),
    db.Column(
        "comment_id",
        db.String(36),
        db.ForeignKey("comments.id", ondelete="CASCADE"),
        primary_key=True,
    ),
)


class Comment(SoftDeleteMixin, db.Model):
    __tablename__ = "comments"

    id = db.Column(db.String(36), primary_key=True, default=generate_id)
    text = db.Column(db.Text, nullable=False)
    created_at = db.Column(
        db.DateTime(timezone=True), server_default=db.func.now()
    )

    card = db.relationship("Card", secondary=cards_comments, uselist=False)
    author = db.relationship("User", secondary=users_comments, uselist=False)

    def __repr__(self):
        return f"<Comment {self.id}>"
