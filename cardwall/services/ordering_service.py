"""Ordering engine — positional state of cards within lists.

Moves are full-replace: the caller sends the complete final ordering of
both lists and every membership row for those lists is deleted and
re-inserted with positions 0..n-1 in array order. Passing the same list
as source and target rewrites that one list.

The new orderings must name every live card the lists hold now, and
only live cards, so no live card ever loses its membership.

The delete and the inserts run in the caller's transaction. Any database
error rolls the session back and surfaces as TransactionFailure, so no
half-rewritten list is ever committed.
"""

import logging

from sqlalchemy import delete, insert
from sqlalchemy.exc import SQLAlchemyError

from cardwall.errors import NotFound, TransactionFailure, ValidationFailure
from cardwall.extensions import db
from cardwall.models.board import BoardList
from cardwall.models.card import Card, ListCard

logger = logging.getLogger(__name__)


def get_list(list_id):
    board_list = db.session.get(BoardList, list_id)
    if board_list is None:
        raise NotFound(f"List {list_id} not found.")
    return board_list


def list_card_ids(list_id):
    """Return the live card ids of a list in display order."""
    get_list(list_id)
    rows = (
        db.session.query(ListCard.card_id)
        .join(Card, Card.id == ListCard.card_id)
        .filter(ListCard.list_id == list_id, Card.live())
        .order_by(ListCard.card_index)
        .all()
    )
    return [row.card_id for row in rows]


def _check_orderings(orderings):
    """Reject orderings that would orphan a live card or place an unknown one.

    Every live card currently in one of the lists must appear in the new
    orderings, and every card named there must exist and be live.
    """
    supplied = {card_id for card_ids in orderings.values() for card_id in card_ids}

    current = {
        row.card_id
        for row in db.session.query(ListCard.card_id)
        .join(Card, Card.id == ListCard.card_id)
        .filter(ListCard.list_id.in_(list(orderings)), Card.live())
        .all()
    }
    left_out = current - supplied
    if left_out:
        raise ValidationFailure([{
            "field": "cards",
            "message": f"Orderings leave out cards: {', '.join(sorted(left_out))}",
        }])

    if not supplied:
        return
    known = {
        row.id
        for row in db.session.query(Card.id)
        .filter(Card.id.in_(supplied), Card.live())
        .all()
    }
    unknown = supplied - known
    if unknown:
        raise NotFound(f"Cards not found: {', '.join(sorted(unknown))}.")


def _rewrite(orderings):
    """Replace all memberships of the given lists.

    ``orderings`` maps list id -> ordered card ids. Deletes happen before
    any insert so a card can change lists within the same call.
    """
    db.session.execute(
        delete(ListCard)
        .where(ListCard.list_id.in_(list(orderings)))
        .execution_options(synchronize_session=False)
    )
    rows = [
        {"list_id": list_id, "card_id": card_id, "card_index": index}
        for list_id, card_ids in orderings.items()
        for index, card_id in enumerate(card_ids)
    ]
    if rows:
        db.session.execute(insert(ListCard), rows)
    db.session.flush()
    # Memberships loaded before the rewrite are stale now.
    db.session.expire_all()


def rewrite_list(list_id, card_ids):
    """Full-replace the ordering of a single list."""
    return move_cards(
        {"id": list_id, "cards": card_ids},
        {"id": list_id, "cards": card_ids},
    )[0]


def move_cards(source_list, target_list):
    """Apply the final orderings of ``source_list`` and ``target_list``.

    Args:
        source_list: {"id": list id, "cards": [card id, ...]}
        target_list: {"id": list id, "cards": [card id, ...]}

    Returns:
        [source_list, target_list], as given.

    Raises:
        NotFound: If either list does not exist, or a card id is unknown
            or dropped.
        ValidationFailure: If a live card now in either list is left out.
        TransactionFailure: If the rewrite failed; the session is rolled back.
    """
    get_list(source_list["id"])
    get_list(target_list["id"])

    if source_list["id"] == target_list["id"]:
        orderings = {target_list["id"]: list(target_list["cards"])}
    else:
        orderings = {
            source_list["id"]: list(source_list["cards"]),
            target_list["id"]: list(target_list["cards"]),
        }

    _check_orderings(orderings)

    try:
        _rewrite(orderings)
    except SQLAlchemyError as e:
        db.session.rollback()
        logger.error(
            f"Card move failed for lists {', '.join(orderings)}: {e}", exc_info=True
        )
        raise TransactionFailure("Could not reorder cards; no changes were applied.") from e

    logger.info(
        "Reordered lists "
        + ", ".join(f"{list_id} ({len(ids)} cards)" for list_id, ids in orderings.items())
    )
    return [source_list, target_list]
