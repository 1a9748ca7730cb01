from collections.abc import Sequence

from birthday_book.schemas.friend import FriendDisplay, FriendForm
from birthday_book.services.pagination import PaginationData
from birthday_book.views.helpers import (
    anchor,
    field_error,
    form_close,
    form_date,
    form_dropdown,
    form_input,
    form_label,
    form_open,
    form_submit,
    out,
)
from birthday_book.views.layout import flash_block, render_page
from birthday_book.views.pagination import render_pagination


def render_manage(
    rows: Sequence[FriendDisplay],
    pagination: PaginationData,
    per_page_options: Sequence[int],
    selected_per_page: int,
    flash: str | None,
) -> str:
    parts = [
        "<h1>Manage Friends</h1>",
        flash_block(flash),
        f"<p>{anchor('/friends/create', 'Create New Friend Record', {'class': 'button alt'})}</p>",
    ]
    if not rows:
        parts.append("<p>There are currently no records to display.</p>")
        return render_page("Manage Friends", "".join(parts))

    parts.append(render_pagination(pagination))
    dropdown = form_dropdown(
        "per_page", per_page_options, selected_per_page, {"onchange": "setPerPage()"}
    )
    body_rows = "".join(
        "<tr>"
        f"<td>{out(row.first_name)}</td>"
        f"<td>{out(row.last_name)}</td>"
        f"<td>{out(row.email_address)}</td>"
        f"<td>{out(row.birthday_formatted)}</td>"
        f"<td>{anchor(f'/friends/show/{row.id}', 'View', {'class': 'button alt'})}</td>"
        "</tr>"
        for row in rows
    )
    parts.append(
        '<table class="records-table"><thead>'
        f'<tr><th colspan="5">Records Per Page: {dropdown}</th></tr>'
        "<tr><th>First Name</th><th>Last Name</th><th>Email Address</th>"
        '<th>Birthday</th><th style="width: 20px;">Action</th></tr>'
        f"</thead><tbody>{body_rows}</tbody></table>"
    )
    if len(rows) > 9:
        parts.append(
            render_pagination(
                PaginationData(
                    total_rows=pagination.total_rows,
                    limit=pagination.limit,
                    current_page=pagination.current_page,
                    pagination_root=pagination.pagination_root,
                    record_name_plural=pagination.record_name_plural,
                    include_showing_statement=False,
                )
            )
        )
    parts.append(
        "<script>"
        "function setPerPage() {"
        " const selectedIndex = document.querySelector('select[name=\"per_page\"]').value;"
        " window.location.href = '/friends/set_per_page/' + selectedIndex;"
        "}"
        "</script>"
    )
    return render_page("Manage Friends", "".join(parts))


def render_form(
    headline: str,
    form: FriendForm,
    errors: dict[str, str],
    form_location: str,
    cancel_url: str,
) -> str:
    fields = [
        form_label("First Name", "first_name"),
        form_input("first_name", form.first_name, {"placeholder": "Enter First Name"}),
        field_error(errors.get("first_name")),
        form_label("Last Name", "last_name"),
        form_input("last_name", form.last_name, {"placeholder": "Enter Last Name"}),
        field_error(errors.get("last_name")),
        form_label("Email Address", "email_address"),
        form_input(
            "email_address",
            form.email_address,
            {"placeholder": "Enter Email Address", "type": "email"},
        ),
        field_error(errors.get("email_address")),
        form_label("Birthday", "birthday"),
        form_date("birthday", form.birthday),
        field_error(errors.get("birthday")),
    ]
    summary = ""
    if errors:
        summary = '<div class="validation-error">Please correct the errors below.</div>'
    body = (
        f"<h1>{out(headline)}</h1>"
        f"{summary}"
        '<div class="card"><div class="card-heading">Friend Details</div><div class="card-body">'
        f"{form_open(form_location)}"
        f"{''.join(fields)}"
        '<div class="text-center">'
        f"{anchor(cancel_url, 'Cancel', {'class': 'button alt'})}"
        f"{form_submit('submit', 'Submit', {'class': 'button'})}"
        "</div>"
        f"{form_close()}"
        "</div></div>"
    )
    return render_page(headline, body)


def _detail_grid(friend: FriendDisplay) -> str:
    rows = (
        ("First Name", friend.first_name),
        ("Last Name", friend.last_name),
        ("Email Address", friend.email_address),
        ("Birthday", friend.birthday_formatted),
    )
    return '<div class="detail-grid">' + "".join(
        f'<div class="detail-row"><div class="detail-label">{label}</div>'
        f'<div class="detail-value">{out(value)}</div></div>'
        for label, value in rows
    ) + "</div>"


def render_show(friend: FriendDisplay, back_url: str, flash: str | None) -> str:
    buttons = (
        f"{anchor(back_url, 'Back', {'class': 'button alt'})} "
        f"{anchor(f'/friends/create/{friend.id}', 'Edit', {'class': 'button'})} "
        f"{anchor(f'/friends/delete_conf/{friend.id}', 'Delete', {'class': 'button danger'})}"
    )
    body = (
        "<h1>Friend Details</h1>"
        f"{flash_block(flash)}"
        '<div class="card"><div class="card-heading">Friend Details</div><div class="card-body">'
        f'<div class="text-right mb-3">{buttons}</div>'
        f"{_detail_grid(friend)}"
        "</div></div>"
    )
    return render_page("Friend Details", body)


def render_delete_conf(friend: FriendDisplay, form_location: str, cancel_url: str) -> str:
    body = (
        "<h1>Delete Friend Record</h1>"
        '<div class="card"><div class="card-heading">Are You Sure?</div><div class="card-body">'
        f"<p>You are about to delete the record for <strong>{out(friend.full_name)}</strong>"
        f" (birthday: {out(friend.birthday_short)}). This cannot be undone.</p>"
        f"{form_open(form_location)}"
        f"{anchor(cancel_url, 'Cancel', {'class': 'button alt'})} "
        f"{form_submit('submit', 'Yes - Delete Now', {'class': 'button danger'})}"
        f"{form_close()}"
        "</div></div>"
    )
    return render_page("Delete Friend Record", body)


def render_not_found(back_url: str) -> str:
    body = (
        "<h1>Friend Not Found</h1>"
        "<p>The friend you're looking for doesn't exist or has been deleted.</p>"
        f"<p>{anchor(back_url, 'Go Back', {'class': 'button alt'})}</p>"
    )
    return render_page("Friend Not Found", body)
