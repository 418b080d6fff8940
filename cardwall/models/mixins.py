"""Soft-delete support shared by Card and Comment.

Rows are never physically removed; ``deleted`` holds the epoch-millisecond
timestamp of the drop. Every read path composes ``Model.live()`` into its
query so deleted rows never surface.
"""

import time

from cardwall.extensions import db


def now_millis():
    return int(time.time() * 1000)


class SoftDeleteMixin:
    deleted = db.Column(db.BigInteger, nullable=True)

    @classmethod
    def live(cls):
        """SQL predicate matching rows that have not been dropped."""
        return cls.deleted.is_(None)

    @classmethod
    def live_query(cls):
        return cls.query.filter(cls.live())

    @property
    def is_deleted(self):
        return self.deleted is not None

    def soft_delete(self):
        self.deleted = now_millis()
