"""Color tags on cards.

A card stores only the palette ids it has switched on (an IntegerSet
column). The palette itself is fixed configuration, expanded against the
card's set when colors are read.

Palette bounds are checked by the validation stage, not here.
Functions flush but do NOT commit — the caller commits.
"""

import logging

from flask import current_app

from cardwall.extensions import db
from cardwall.services.card_service import get_live_card

logger = logging.getLogger(__name__)


def get_palette():
    """The ordered ((id, color), ...) palette loaded at startup."""
    return current_app.config["CARD_COLORS"]


def get_colors(card_id):
    """Return one {"id", "color", "active"} entry per palette color."""
    card = get_live_card(card_id)
    active = card.colors
    return [
        {"id": color_id, "color": color, "active": color_id in active}
        for color_id, color in get_palette()
    ]


def add_color(card_id, color_id):
    card = get_live_card(card_id)
    if color_id in card.colors:
        return
    card.colors = card.colors | {color_id}
    db.session.flush()
    logger.info(f"Added color {color_id} to card {card_id}")


def remove_color(card_id, color_id):
    card = get_live_card(card_id)
    if color_id not in card.colors:
        return
    card.colors = card.colors - {color_id}
    db.session.flush()
    logger.info(f"Removed color {color_id} from card {card_id}")
