from collections.abc import Sequence
from html import escape


def out(value: object) -> str:
    return escape("" if value is None else str(value))


def _attributes(attrs: dict[str, str] | None) -> str:
    if not attrs:
        return ""
    return "".join(f' {name}="{out(value)}"' for name, value in attrs.items())


def anchor(href: str, text: str, attrs: dict[str, str] | None = None) -> str:
    return f'<a href="{out(href)}"{_attributes(attrs)}>{out(text)}</a>'


def form_open(action: str) -> str:
    return f'<form action="{out(action)}" method="post">'


def form_close() -> str:
    return "</form>"


def form_label(text: str, for_field: str) -> str:
    return f'<label for="{out(for_field)}">{out(text)}</label>'


def form_input(name: str, value: str, attrs: dict[str, str] | None = None) -> str:
    merged = {"type": "text", **(attrs or {})}
    return (
        f'<input name="{out(name)}" id="{out(name)}" value="{out(value)}"'
        f"{_attributes(merged)}>"
    )


def form_date(name: str, value: str) -> str:
    return form_input(name, value, {"type": "date"})


def form_submit(name: str, value: str, attrs: dict[str, str] | None = None) -> str:
    return f'<button type="submit" name="{out(name)}" value="{out(value)}"{_attributes(attrs)}>{out(value)}</button>'


def form_dropdown(
    name: str,
    options: Sequence[object],
    selected: int,
    attrs: dict[str, str] | None = None,
) -> str:
    rendered = []
    for index, label in enumerate(options):
        marker = " selected" if index == selected else ""
        rendered.append(f'<option value="{index}"{marker}>{out(label)}</option>')
    return f'<select name="{out(name)}"{_attributes(attrs)}>{"".join(rendered)}</select>'


def field_error(message: str | None) -> str:
    if not message:
        return ""
    return f'<div class="validation-error">{out(message)}</div>'
