from pydantic import ValidationError

from birthday_book.schemas.friend import FriendForm, FriendSubmission


FIELD_LABELS = {
    "first_name": "first name",
    "last_name": "last name",
    "email_address": "email address",
    "birthday": "birthday",
}

_FORMAT_MESSAGES = {
    "email_address": "The {label} field must contain a valid email address.",
    "birthday": "The {label} field must contain a valid date.",
}


def _message_for(field: str, value: str, error: dict) -> str:
    label = FIELD_LABELS[field]
    if not value.strip():
        return f"The {label} field is required."
    if error["type"] == "string_too_short":
        return f"The {label} field must be at least {error['ctx']['min_length']} characters in length."
    if error["type"] == "string_too_long":
        return f"The {label} field cannot exceed {error['ctx']['max_length']} characters in length."
    return _FORMAT_MESSAGES.get(field, "The {label} field is invalid.").format(label=label)


def validate_form(form: FriendForm) -> dict[str, str]:
    """Run the submission rules and return one message per failing field."""
    try:
        FriendSubmission.model_validate(form.model_dump())
    except ValidationError as exc:
        errors: dict[str, str] = {}
        for error in exc.errors():
            field = str(error["loc"][0])
            if field not in errors:
                errors[field] = _message_for(field, getattr(form, field), error)
        return errors
    return {}
