# Models package — import all models here so Alembic can discover them.

from cardwall.models.user import User  # noqa: F401
from cardwall.models.board import Board, BoardList, boards_lists  # noqa: F401
from cardwall.models.card import Card, ListCard  # noqa: F401
from cardwall.models.comment import (  # noqa: F401
    Comment,
    cards_comments,
    users_comments,
)
