"""Shared test fixtures for the cardwall test suite.

Provides:
- app: Flask app configured for testing (in-memory SQLite, rate limits off)
- client: Flask test client
- db_session: clean database per test (tables created/dropped)
- seed_data: a user, a board with one list, three cards (one dropped),
  and two comments (one dropped) on the second card
- move_data: two bare lists '1' and '2' holding cards '1', '2' / '3'
- auth_headers: Bearer token header accepted by the API
"""

from datetime import datetime, timedelta, timezone

import pytest
from werkzeug.security import generate_password_hash

from cardwall import create_app
from cardwall.extensions import db as _db
from cardwall.models.board import Board, BoardList
from cardwall.models.card import Card, ListCard
from cardwall.models.comment import Comment
from cardwall.models.user import User


@pytest.fixture(scope="session")
def app():
    """Create the Flask application configured for testing."""
    app = create_app("testing")
    yield app


@pytest.fixture(autouse=True)
def db_session(app):
    """Create all tables before each test, drop after."""
    with app.app_context():
        _db.create_all()
        yield _db.session
        _db.session.rollback()
        _db.drop_all()


@pytest.fixture
def client(app):
    """Flask test client."""
    return app.test_client()


@pytest.fixture
def auth_headers(app):
    return {"Authorization": f"Bearer {app.config['CARDWALL_API_KEY']}"}


@pytest.fixture
def seed_data(db_session):
    """Seed a board, a list, three cards and two comments.

    Returns a dict of plain ids so tests don't depend on attached objects.
    """
    # --- User ---
    user = User(
        username="testuser",
        email="testuser@test.com",
        password_hash=generate_password_hash("secret123"),
    )
    db_session.add(user)

    # --- Board + list ---
    board_list = BoardList(title="test list")
    board = Board(title="test board", lists=[board_list])
    db_session.add(board)
    db_session.flush()

    # --- Cards: two live, one dropped ---
    card1 = Card(text="test card 1")
    card2 = Card(text="test card 2")
    card3 = Card(text="test card 3", deleted=1)
    db_session.add_all([card1, card2, card3])
    db_session.flush()

    for index, card in enumerate([card1, card2, card3]):
        db_session.add(ListCard(list_id=board_list.id, card_id=card.id, card_index=index))

    # --- Comments on card 2: one dropped, one live ---
    now = datetime.now(timezone.utc)
    comment1 = Comment(
        text="test comment 1",
        deleted=1,
        created_at=now - timedelta(minutes=5),
        card=card2,
        author=user,
    )
    comment2 = Comment(
        text="test comment 2",
        created_at=now,
        card=card2,
        author=user,
    )
    db_session.add_all([comment1, comment2])
    db_session.commit()

    return {
        "user_id": user.id,
        "board_id": board.id,
        "list_id": board_list.id,
        "card_id": card1.id,
        "card2_id": card2.id,
        "card3_id": card3.id,
        "comment_id": comment1.id,
        "comment2_id": comment2.id,
    }


@pytest.fixture
def move_data(db_session):
    """Lists '1' and '2'; list '1' holds cards '1', '2' and list '2' holds '3'."""
    db_session.add_all([
        BoardList(id="1", title="list 1"),
        BoardList(id="2", title="list 2"),
        Card(id="1", text="card 1"),
        Card(id="2", text="card 2"),
        Card(id="3", text="card 3"),
    ])
    db_session.flush()
    db_session.add_all([
        ListCard(list_id="1", card_id="1", card_index=0),
        ListCard(list_id="1", card_id="2", card_index=1),
        ListCard(list_id="2", card_id="3", card_index=0),
    ])
    db_session.commit()
