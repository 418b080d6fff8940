"""Card service — create, update, drop, and look up single cards.

Input is expected to have passed cardwall.validation already. Reads only
ever see live cards; a dropped card behaves exactly like a missing one.

Functions flush but do NOT commit — the caller commits.
"""

import logging

from sqlalchemy.exc import SQLAlchemyError

from cardwall.errors import NotFound, TransactionFailure
from cardwall.extensions import db
from cardwall.models.card import Card, ListCard
from cardwall.services import aggregate_service, ordering_service
from cardwall.services.aggregate_service import card_link

logger = logging.getLogger(__name__)

UPDATABLE_FIELDS = ("text",)


def get_live_card(card_id):
    card = Card.live_query().filter_by(id=card_id).first()
    if card is None:
        raise NotFound(f"Card {card_id} not found.")
    return card


def create_card(list_id, props):
    """Create a card at the end of a list.

    Args:
        list_id: Id of the owning list.
        props: {"text": str}

    Returns:
        {"id", "text", "link"}

    Raises:
        NotFound: If the list does not exist or is not on a board.
        TransactionFailure: If the card or its membership could not be
            written; the session is rolled back.
    """
    board_list = ordering_service.get_list(list_id)
    board = board_list.board
    if board is None:
        raise NotFound(f"List {list_id} is not on a board.")

    max_pos = (
        db.session.query(db.func.max(ListCard.card_index))
        .filter(ListCard.list_id == list_id)
        .scalar()
    )
    max_pos = max_pos if max_pos is not None else -1

    card = Card(text=props["text"])
    try:
        db.session.add(card)
        db.session.flush()

        db.session.add(ListCard(list_id=list_id, card_id=card.id, card_index=max_pos + 1))
        db.session.flush()
    except SQLAlchemyError as e:
        db.session.rollback()
        logger.error(f"Card create failed in list {list_id}: {e}", exc_info=True)
        raise TransactionFailure("Could not create card; no changes were applied.") from e

    logger.info(f"Created card {card.id} in list {list_id} at position {max_pos + 1}")
    return {
        "id": card.id,
        "text": card.text,
        "link": card_link(board.id, card.id),
    }


def update_card(card_id, props):
    """Apply the recognized fields of ``props`` to a live card.

    Returns only the id and the fields that were applied.
    """
    card = get_live_card(card_id)
    applied = {}
    for field in UPDATABLE_FIELDS:
        if field in props:
            setattr(card, field, props[field])
            applied[field] = props[field]
    db.session.flush()
    return {"id": card.id, **applied}


def drop_card(card_id):
    """Soft-delete a card and take it out of its list.

    The card row keeps its comments for history. Its membership row is
    removed and the rest of the list is re-packed so positions stay
    contiguous.
    """
    card = get_live_card(card_id)
    card.soft_delete()
    membership = db.session.get(ListCard, card_id)
    list_id = membership.list_id if membership is not None else None
    db.session.flush()

    if list_id is not None:
        ordering_service.rewrite_list(list_id, ordering_service.list_card_ids(list_id))

    logger.info(f"Dropped card {card_id}")
    return {"id": card_id}


def find_card(card_id):
    return aggregate_service.find_card(card_id)
