import re
from datetime import date

from email_validator import EmailNotValidError, validate_email
from pydantic import BaseModel, ConfigDict, Field, field_validator


ISO_DATE_PATTERN = re.compile(r"^\d{4}-\d{2}-\d{2}$")


class FriendRecord(BaseModel):
    """A friend's fields exactly as stored, birthday in YYYY-MM-DD form."""

    id: int | None = None
    first_name: str | None = None
    last_name: str | None = None
    email_address: str | None = None
    birthday: str | None = None


class FriendDisplay(FriendRecord):
    birthday_formatted: str
    birthday_short: str
    full_name: str | None = None


class FriendForm(BaseModel):
    model_config = ConfigDict(str_strip_whitespace=True)

    first_name: str = ""
    last_name: str = ""
    email_address: str = ""
    birthday: str = ""


class FriendSubmission(BaseModel):
    model_config = ConfigDict(str_strip_whitespace=True)

    first_name: str = Field(min_length=2, max_length=50)
    last_name: str = Field(min_length=2, max_length=50)
    email_address: str = Field(max_length=100)
    birthday: date

    @field_validator("email_address")
    @classmethod
    def validate_email_address(cls, value: str) -> str:
        try:
            validate_email(value, check_deliverability=False)
        except EmailNotValidError as exc:
            raise ValueError("invalid email address") from exc
        return value

    @field_validator("birthday", mode="before")
    @classmethod
    def validate_birthday(cls, value: object) -> object:
        if isinstance(value, str) and not ISO_DATE_PATTERN.match(value):
            raise ValueError("birthday must be in YYYY-MM-DD form")
        return value
