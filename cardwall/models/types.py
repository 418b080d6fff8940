"""Column types."""

import json

from sqlalchemy.types import Text, TypeDecorator


class IntegerSet(TypeDecorator):
    """A set of small integers stored compactly in one text column.

    Persisted as a sorted JSON array (``"[1,3]"``); loaded as a Python
    ``set``. Order of the stored array carries no meaning.
    """

    impl = Text
    cache_ok = True

    def process_bind_param(self, value, dialect):
        return json.dumps(sorted({int(v) for v in (value or ())}), separators=(",", ":"))

    def process_result_value(self, value, dialect):
        if not value:
            return set()
        return {int(v) for v in json.loads(value)}
