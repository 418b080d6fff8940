"""Comment service — add and drop comments on a card.

Functions flush but do NOT commit — the caller commits.
"""

import logging
from datetime import datetime, timezone

from cardwall.errors import NotFound
from cardwall.extensions import db
from cardwall.models.comment import Comment
from cardwall.models.user import User
from cardwall.services.card_service import get_live_card

logger = logging.getLogger(__name__)


def add_comment(card_id, user_id, text):
    """Add a comment by ``user_id`` to a live card.

    Returns:
        {"id", "text", "created_at", "user": {"id", "username"}}

    Raises:
        NotFound: If the card is missing/dropped or the user does not exist.
    """
    card = get_live_card(card_id)
    author = db.session.get(User, user_id)
    if author is None:
        raise NotFound(f"User {user_id} not found.")

    comment = Comment(
        text=text,
        created_at=datetime.now(timezone.utc),
        card=card,
        author=author,
    )
    db.session.add(comment)
    db.session.flush()

    logger.info(f"User {author.username} commented on card {card_id}")
    return {
        "id": comment.id,
        "text": comment.text,
        "created_at": comment.created_at.isoformat(),
        "user": {"id": author.id, "username": author.username},
    }


def drop_comment(comment_id):
    comment = Comment.live_query().filter_by(id=comment_id).first()
    if comment is None:
        raise NotFound(f"Comment {comment_id} not found.")
    comment.soft_delete()
    db.session.flush()
    logger.info(f"Dropped comment {comment_id}")
    return {"id": comment_id}
