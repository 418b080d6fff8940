"""Card detail view.

Assembles a card with its board link and its comment thread:

    card (live) -> lists_cards -> boards_lists -> board
    card -> cards_comments -> comment (live) -> users_comments -> user

A dropped card raises the same NotFound as a card that never existed.
"""

from cardwall.errors import NotFound
from cardwall.extensions import db
from cardwall.models.board import Board, boards_lists
from cardwall.models.card import Card, ListCard
from cardwall.models.comment import Comment, cards_comments, users_comments
from cardwall.models.user import User


def card_link(board_id, card_id):
    return f"/boards/{board_id}/cards/{card_id}"


def _isoformat(value):
    return value.isoformat() if value else None


def _card_row(card_id):
    row = (
        db.session.query(Card.id, Card.text, Board.id.label("board_id"))
        .join(ListCard, ListCard.card_id == Card.id)
        .join(boards_lists, boards_lists.c.list_id == ListCard.list_id)
        .join(Board, Board.id == boards_lists.c.board_id)
        .filter(Card.id == card_id, Card.live())
        .first()
    )
    if row is None:
        raise NotFound(f"Card {card_id} not found.")
    return row


def card_comments(card_id):
    """Live comments on a card, oldest first, each with its author."""
    rows = (
        db.session.query(Comment, User.id.label("user_id"), User.username)
        .join(cards_comments, cards_comments.c.comment_id == Comment.id)
        .join(users_comments, users_comments.c.comment_id == Comment.id)
        .join(User, User.id == users_comments.c.user_id)
        .filter(cards_comments.c.card_id == card_id, Comment.live())
        .order_by(Comment.created_at, Comment.id)
        .all()
    )
    return [
        {
            "id": comment.id,
            "text": comment.text,
            "created_at": _isoformat(comment.created_at),
            "user": {"id": user_id, "username": username},
        }
        for comment, user_id, username in rows
    ]


def find_card(card_id):
    """Return {"id", "text", "link", "board_id", "comments"} for a live card."""
    row = _card_row(card_id)
    return {
        "id": row.id,
        "text": row.text,
        "link": card_link(row.board_id, row.id),
        "board_id": row.board_id,
        "comments": card_comments(row.id),
    }
