"""Card models.

- Card: the card row itself (text, color set, soft-delete marker).
- ListCard: membership placing a card at ``card_index`` within a list.

Position lives on the membership rather than the card, so reordering
rewrites ``lists_cards`` only and never touches ``cards``.
"""

from cardwall.extensions import db
from cardwall.ids import generate_id
from cardwall.models.mixins import SoftDeleteMixin
from cardwall.models.types import IntegerSet


class Card(SoftDeleteMixin, db.Model):
    __tablename__ = "cards"

    id = db.Column(db.String(36), primary_key=True, default=generate_id)
    text = db.Column(db.Text, nullable=False)
    colors = db.Column(IntegerSet, nullable=False, default=lambda: set())
    created_at = db.Column(
        db.DateTime(timezone=True), server_default=db.func.now()
    )
    updated_at = db.Column(
        db.DateTime(timezone=True),
        server_default=db.func.now(),
        onupdate=db.func.now(),
    )

    membership = db.relationship(
        "ListCard", back_populates="card", uselist=False
    )

    def __repr__(self):
        return f"<Card {self.id} {self.text[:40]}>"


class ListCard(db.Model):
    __tablename__ = "lists_cards"
    __table_args__ = (
        db.UniqueConstraint("list_id", "card_index", name="uq_lists_cards_position"),
    )

    # One row per card: a card sits in exactly one list at a time.
    card_id = db.Column(
        db.String(36),
        db.ForeignKey("cards.id", ondelete="CASCADE"),
        primary_key=True,
    )
    list_id = db.Column(
        db.String(36),
        db.ForeignKey("lists.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    card_index = db.Column(db.Integer, nullable=False)

    card = db.relationship("Card", back_populates="membership")
    list = db.relationship("BoardList", back_populates="memberships")

    def __repr__(self):
        return f"<ListCard list={self.list_id} card={self.card_id} at={self.card_index}>"
