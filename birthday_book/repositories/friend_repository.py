"""Data access for friend records."""
import logging
from datetime import date
from typing import NoReturn

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from birthday_book.models import Friend
from birthday_book.schemas.friend import FriendRecord


logger = logging.getLogger(__name__)


class StorageError(RuntimeError):
    """The backing store could not complete an operation."""


def _to_record(friend: Friend) -> FriendRecord:
    return FriendRecord(
        id=friend.id,
        first_name=friend.first_name,
        last_name=friend.last_name,
        email_address=friend.email_address,
        birthday=friend.birthday.isoformat() if friend.birthday else None,
    )


def _to_columns(record: FriendRecord) -> dict:
    return {
        "first_name": record.first_name,
        "last_name": record.last_name,
        "email_address": record.email_address,
        "birthday": date.fromisoformat(record.birthday) if record.birthday else None,
    }


class FriendRepository:
    def __init__(self, db: Session):
        self._db = db

    # ── Read ───────────────────────────────────────────────────────────

    def fetch_page(self, limit: int, offset: int) -> list[FriendRecord]:
        try:
            friends = (
                self._db.query(Friend)
                .populate_existing()
                .order_by(Friend.id.asc())
                .limit(limit)
                .offset(offset)
                .all()
            )
        except SQLAlchemyError as exc:
            self._fail("fetch_page", exc)
        return [_to_record(friend) for friend in friends]

    def fetch_by_id(self, friend_id: int) -> FriendRecord | None:
        try:
            friend = (
                self._db.query(Friend)
                .populate_existing()
                .filter(Friend.id == friend_id)
                .first()
            )
        except SQLAlchemyError as exc:
            self._fail("fetch_by_id", exc)
        if not friend:
            return None
        return _to_record(friend)

    def count(self) -> int:
        try:
            return self._db.query(Friend).count()
        except SQLAlchemyError as exc:
            self._fail("count", exc)

    # ── Write ──────────────────────────────────────────────────────────

    def insert(self, record: FriendRecord) -> int:
        try:
            friend = Friend(**_to_columns(record))
            self._db.add(friend)
            self._db.commit()
            self._db.refresh(friend)
        except ValueError as exc:
            self._fail("insert", exc)
        except SQLAlchemyError as exc:
            self._db.rollback()
            self._fail("insert", exc)
        return friend.id

    def update(self, friend_id: int, record: FriendRecord) -> None:
        try:
            self._db.query(Friend).filter(Friend.id == friend_id).update(_to_columns(record))
            self._db.commit()
        except ValueError as exc:
            self._fail("update", exc)
        except SQLAlchemyError as exc:
            self._db.rollback()
            self._fail("update", exc)

    def delete_by_id(self, friend_id: int) -> None:
        try:
            self._db.query(Friend).filter(Friend.id == friend_id).delete()
            self._db.commit()
        except SQLAlchemyError as exc:
            self._db.rollback()
            self._fail("delete_by_id", exc)

    def _fail(self, operation: str, exc: Exception) -> NoReturn:
        logger.error("Storage failure during %s: %s", operation, exc)
        raise StorageError(f"{operation} failed") from exc
