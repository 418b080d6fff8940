"""Board and list models.

Boards and lists are created elsewhere; the card core only reads them to
check a list exists and to resolve the board a card's link points at.
A list belongs to a board through the ``boards_lists`` membership table.
"""

from cardwall.extensions import db
from cardwall.ids import generate_id


boards_lists = db.Table(
    "boards_lists",
    db.Column(
        "board_id",
        db.String(36),
        db.ForeignKey("boards.id", ondelete="CASCADE"),
        nullable=False,
    ),
    db.Column(
        "list_id",
        db.String(36),
        db.ForeignKey("lists.id", ondelete="CASCADE"),
        primary_key=True,
    ),
)


class Board(db.Model):
    __tablename__ = "boards"

    id = db.Column(db.String(36), primary_key=True, default=generate_id)
    title = db.Column(db.String(255), nullable=False)
    created_at = db.Column(
        db.DateTime(timezone=True), server_default=db.func.now()
    )

    lists = db.relationship(
        "BoardList", secondary=boards_lists, back_populates="board"
    )

    def __repr__(self):
        return f"<Board {self.title}>"


class BoardList(db.Model):
    __tablename__ = "lists"

    id = db.Column(db.String(36), primary_key=True, default=generate_id)
    title = db.Column(db.String(255), nullable=False)
    created_at = db.Column(
        db.DateTime(timezone=True), server_default=db.func.now()
    )

    board = db.relationship(
        "Board", secondary=boards_lists, back_populates="lists", uselist=False
    )
    memberships = db.relationship(
        "ListCard",
        back_populates="list",
        order_by="ListCard.card_index",
        passive_deletes=True,
    )

    def __repr__(self):
        return f"<BoardList {self.title}>"
