"""Conversions between stored, displayed and submitted friend records."""
from collections.abc import Mapping
from datetime import date

from birthday_book.schemas.friend import FriendDisplay, FriendForm, FriendRecord


FORM_FIELDS = ("first_name", "last_name", "email_address", "birthday")


def format_birthday(value: str | None) -> tuple[str, str]:
    """Return the long ("December 27, 2025") and short ("Dec 27") forms."""
    if not value:
        return "Not specified", "N/A"
    try:
        parsed = date.fromisoformat(value)
    except ValueError:
        return "Invalid Date", "N/A"
    return f"{parsed:%B} {parsed.day}, {parsed.year}", f"{parsed:%b} {parsed.day}"


def to_display(record: FriendRecord) -> FriendDisplay:
    birthday_formatted, birthday_short = format_birthday(record.birthday)
    full_name = None
    if record.first_name is not None and record.last_name is not None:
        full_name = f"{record.first_name} {record.last_name}".strip()
    return FriendDisplay(
        **record.model_dump(),
        birthday_formatted=birthday_formatted,
        birthday_short=birthday_short,
        full_name=full_name,
    )


def to_storage(form_input: Mapping[str, str | None]) -> FriendRecord:
    return FriendRecord(**{field: form_input.get(field) for field in FORM_FIELDS})


def to_form_defaults(form_input: Mapping[str, str | None]) -> FriendForm:
    return FriendForm(**{field: form_input.get(field) or "" for field in FORM_FIELDS})


def record_to_form(record: FriendRecord) -> FriendForm:
    return to_form_defaults(record.model_dump(include=set(FORM_FIELDS)))
