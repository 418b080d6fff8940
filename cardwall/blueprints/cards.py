"""Cards API blueprint — /api/*

Thin JSON layer over the card services. Every write validates its payload
first (cardwall.validation), calls one service, then commits. Service
errors are mapped to status codes by the handlers at the bottom.
Routes accept Bearer token auth via CARDWALL_API_KEY or a login session.

Route Map:
  POST   /api/lists/<list_id>/cards          — Create card at end of list
  GET    /api/lists/<list_id>/cards          — Live card ids in order
  GET    /api/cards/<id>                     — Card with comments
  PUT    /api/cards/<id>                     — Update card text
  DELETE /api/cards/<id>                     — Drop card
  PUT    /api/cards/move                     — Rewrite two list orderings
  GET    /api/cards/<id>/colors              — Palette with active flags
  POST   /api/cards/<id>/colors              — Add color
  DELETE /api/cards/<id>/colors/<color_id>   — Remove color
  POST   /api/cards/<id>/comments            — Add comment
  DELETE /api/comments/<id>                  — Drop comment
"""

import logging

from flask import Blueprint, current_app, jsonify, request
from flask_login import current_user

from cardwall import validation
from cardwall.decorators import api_auth_required
from cardwall.errors import NotFound, TransactionFailure, ValidationFailure
from cardwall.extensions import db, limiter
from cardwall.services import (
    card_service,
    color_service,
    comment_service,
    ordering_service,
)

logger = logging.getLogger(__name__)

cards_bp = Blueprint("cards", __name__, url_prefix="/api")


def _payload():
    return request.get_json(silent=True)


def _text_limit():
    return current_app.config["CARD_TEXT_MAX_LENGTH"]


def _create_rate_limit():
    return current_app.config["CARD_CREATE_RATE_LIMIT"]


# ─── Lists ───────────────────────────────────────────────────────

@cards_bp.route("/lists/<list_id>/cards", methods=["POST"])
@api_auth_required
@limiter.limit(_create_rate_limit)
def api_create_card(list_id):
    props = validation.validate_card(_payload(), _text_limit())
    card = card_service.create_card(list_id, props)
    db.session.commit()
    return jsonify(card), 201


@cards_bp.route("/lists/<list_id>/cards", methods=["GET"])
@api_auth_required
def api_list_cards(list_id):
    return jsonify({"id": list_id, "cards": ordering_service.list_card_ids(list_id)})


# ─── Cards ───────────────────────────────────────────────────────

@cards_bp.route("/cards/move", methods=["PUT"])
@api_auth_required
def api_move_cards():
    source, target = validation.validate_move(_payload())
    result = ordering_service.move_cards(source, target)
    db.session.commit()
    return jsonify(result)


@cards_bp.route("/cards/<card_id>", methods=["GET"])
@api_auth_required
def api_get_card(card_id):
    return jsonify(card_service.find_card(card_id))


@cards_bp.route("/cards/<card_id>", methods=["PUT"])
@api_auth_required
def api_update_card(card_id):
    props = validation.validate_card(_payload(), _text_limit(), partial=True)
    card = card_service.update_card(card_id, props)
    db.session.commit()
    return jsonify(card)


@cards_bp.route("/cards/<card_id>", methods=["DELETE"])
@api_auth_required
def api_drop_card(card_id):
    result = card_service.drop_card(card_id)
    db.session.commit()
    return jsonify(result)


# ─── Colors ──────────────────────────────────────────────────────

@cards_bp.route("/cards/<card_id>/colors", methods=["GET"])
@api_auth_required
def api_get_colors(card_id):
    return jsonify(color_service.get_colors(card_id))


@cards_bp.route("/cards/<card_id>/colors", methods=["POST"])
@api_auth_required
def api_add_color(card_id):
    color_id = validation.validate_color(_payload(), color_service.get_palette())
    color_service.add_color(card_id, color_id)
    db.session.commit()
    return jsonify(color_service.get_colors(card_id))


@cards_bp.route("/cards/<card_id>/colors/<int:color_id>", methods=["DELETE"])
@api_auth_required
def api_remove_color(card_id, color_id):
    color_service.remove_color(card_id, color_id)
    db.session.commit()
    return jsonify(color_service.get_colors(card_id))


# ─── Comments ────────────────────────────────────────────────────

@cards_bp.route("/cards/<card_id>/comments", methods=["POST"])
@api_auth_required
def api_add_comment(card_id):
    data = _payload() or {}
    text = validation.validate_comment(data, _text_limit())
    if current_user.is_authenticated:
        user_id = current_user.id
    else:
        # Token clients act on behalf of a named user.
        user_id = data.get("user_id")
        if not user_id:
            raise ValidationFailure([{"field": "user_id", "message": "User id is required"}])
    comment = comment_service.add_comment(card_id, user_id, text)
    db.session.commit()
    return jsonify(comment), 201


@cards_bp.route("/comments/<comment_id>", methods=["DELETE"])
@api_auth_required
def api_drop_comment(comment_id):
    result = comment_service.drop_comment(comment_id)
    db.session.commit()
    return jsonify(result)


# ─── Error handlers ──────────────────────────────────────────────

@cards_bp.errorhandler(NotFound)
def handle_not_found(e):
    db.session.rollback()
    return jsonify({"error": str(e)}), 404


@cards_bp.errorhandler(ValidationFailure)
def handle_validation_failure(e):
    db.session.rollback()
    return jsonify({"error": str(e), "fields": e.errors}), 400


@cards_bp.errorhandler(TransactionFailure)
def handle_transaction_failure(e):
    logger.error(f"{request.method} {request.path} failed: {e}")
    return jsonify({"error": str(e)}), 500
