from typing import Annotated

from fastapi import Depends, Request
from sqlalchemy.orm import Session

from birthday_book.core.config import settings
from birthday_book.db.session import get_db
from birthday_book.repositories.friend_repository import FriendRepository
from birthday_book.services.pagination import PageSizePreference


PER_PAGE_SESSION_KEY = "selected_per_page"
FLASH_SESSION_KEY = "flashdata"


def get_friend_repository(db: Annotated[Session, Depends(get_db)]) -> FriendRepository:
    return FriendRepository(db)


def get_page_size_preference(request: Request) -> PageSizePreference:
    selected = request.session.get(PER_PAGE_SESSION_KEY)
    if not isinstance(selected, int) or not 0 <= selected < len(settings.per_page_options):
        return PageSizePreference()
    return PageSizePreference(selected_index=selected)


def store_page_size_preference(request: Request, preference: PageSizePreference) -> None:
    request.session[PER_PAGE_SESSION_KEY] = preference.selected_index


def set_flashdata(request: Request, message: str) -> None:
    request.session[FLASH_SESSION_KEY] = message


def pop_flashdata(request: Request) -> str | None:
    return request.session.pop(FLASH_SESSION_KEY, None)
