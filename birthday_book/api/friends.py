import logging
from typing import Annotated

from fastapi import APIRouter, Depends, Form, Request, Response, status
from fastapi.responses import HTMLResponse, RedirectResponse

from birthday_book.api.deps import (
    get_friend_repository,
    get_page_size_preference,
    pop_flashdata,
    set_flashdata,
    store_page_size_preference,
)
from birthday_book.core.config import settings
from birthday_book.core.identifiers import MAX_IDENTIFIER, InvalidIdentifier, parse_identifier
from birthday_book.core.security import require_admin
from birthday_book.repositories.friend_repository import FriendRepository
from birthday_book.schemas.friend import FriendForm
from birthday_book.services.formatter import record_to_form, to_display, to_form_defaults, to_storage
from birthday_book.services.pagination import (
    PageSizePreference,
    PaginationData,
    compute_offset,
    normalize_option_index,
)
from birthday_book.services.validation import validate_form
from birthday_book.views import friends as views


router = APIRouter(prefix="/friends", tags=["friends"], dependencies=[Depends(require_admin)])
index_router = APIRouter(prefix="/friends", tags=["friends"])
logger = logging.getLogger(__name__)

MANAGE_PATH = "/friends/manage"
SUBMIT_MARKER = "Submit"
DELETE_MARKER = "Yes - Delete Now"

Repository = Annotated[FriendRepository, Depends(get_friend_repository)]
Preference = Annotated[PageSizePreference, Depends(get_page_size_preference)]


def _redirect(path: str) -> RedirectResponse:
    return RedirectResponse(path, status_code=status.HTTP_303_SEE_OTHER)


def _back_url(request: Request) -> str:
    previous_url = request.headers.get("referer", "")
    manage_url = str(request.base_url).rstrip("/") + MANAGE_PATH
    if previous_url and previous_url.startswith(manage_url):
        return previous_url
    return MANAGE_PATH


def _not_found(request: Request) -> HTMLResponse:
    return HTMLResponse(
        views.render_not_found(_back_url(request)),
        status_code=status.HTTP_404_NOT_FOUND,
    )


def _render_form(
    update_id: int,
    form: FriendForm,
    errors: dict[str, str] | None = None,
) -> HTMLResponse:
    if update_id > 0:
        headline = "Update Friend Record"
        cancel_url = f"/friends/show/{update_id}"
    else:
        headline = "Create New Friend Record"
        cancel_url = MANAGE_PATH
    return HTMLResponse(
        views.render_form(
            headline=headline,
            form=form,
            errors=errors or {},
            form_location=f"/friends/submit/{update_id}",
            cancel_url=cancel_url,
        )
    )


@index_router.get("", include_in_schema=False)
@index_router.get("/", include_in_schema=False)
def index() -> RedirectResponse:
    return _redirect(MANAGE_PATH)


@router.get("/manage", response_class=HTMLResponse)
@router.get("/manage/{page}", response_class=HTMLResponse)
def manage(
    request: Request,
    repository: Repository,
    preference: Preference,
    page: str | None = None,
) -> Response:
    try:
        page_num = parse_identifier(page)
    except InvalidIdentifier:
        return _redirect(MANAGE_PATH)

    limit = preference.limit
    offset = compute_offset(page_num, limit)
    if offset > MAX_IDENTIFIER:
        return _redirect(MANAGE_PATH)
    rows = [to_display(record) for record in repository.fetch_page(limit, offset)]
    pagination = PaginationData(
        total_rows=repository.count(),
        limit=limit,
        current_page=max(page_num, 1),
        pagination_root=MANAGE_PATH,
    )
    return HTMLResponse(
        views.render_manage(
            rows=rows,
            pagination=pagination,
            per_page_options=settings.per_page_options,
            selected_per_page=preference.effective_index,
            flash=pop_flashdata(request),
        )
    )


@router.get("/create", response_class=HTMLResponse)
@router.get("/create/{update_id}", response_class=HTMLResponse)
def create(
    request: Request,
    repository: Repository,
    update_id: str | None = None,
) -> HTMLResponse:
    try:
        friend_id = parse_identifier(update_id)
    except InvalidIdentifier:
        return _not_found(request)

    if friend_id > 0:
        record = repository.fetch_by_id(friend_id)
        if record is None:
            return _not_found(request)
        return _render_form(friend_id, record_to_form(record))
    return _render_form(friend_id, FriendForm())


@router.post("/submit/{update_id}", response_class=HTMLResponse)
def submit(
    request: Request,
    update_id: str,
    repository: Repository,
    submit_marker: Annotated[str | None, Form(alias="submit")] = None,
    first_name: Annotated[str | None, Form()] = None,
    last_name: Annotated[str | None, Form()] = None,
    email_address: Annotated[str | None, Form()] = None,
    birthday: Annotated[str | None, Form()] = None,
) -> Response:
    if submit_marker != SUBMIT_MARKER:
        return _redirect(MANAGE_PATH)

    try:
        friend_id = parse_identifier(update_id)
    except InvalidIdentifier:
        return _not_found(request)
    if friend_id > 0 and repository.fetch_by_id(friend_id) is None:
        return _not_found(request)

    submitted = {
        "first_name": first_name,
        "last_name": last_name,
        "email_address": email_address,
        "birthday": birthday,
    }
    form = to_form_defaults(submitted)
    errors = validate_form(form)
    if errors:
        logger.info("Friend form rejected", extra={"friend_id": friend_id})
        return _render_form(friend_id, form, errors)

    record = to_storage(form.model_dump())
    if friend_id > 0:
        repository.update(friend_id, record)
        flash_msg = "Friend record updated successfully"
        logger.info("Friend record updated", extra={"friend_id": friend_id})
    else:
        friend_id = repository.insert(record)
        flash_msg = "Friend record created successfully"
        logger.info("Friend record created", extra={"friend_id": friend_id})

    set_flashdata(request, flash_msg)
    return _redirect(f"/friends/show/{friend_id}")


@router.get("/show/{update_id}", response_class=HTMLResponse)
def show(
    request: Request,
    update_id: str,
    repository: Repository,
) -> HTMLResponse:
    try:
        friend_id = parse_identifier(update_id)
    except InvalidIdentifier:
        return _not_found(request)
    if friend_id == 0:
        return _not_found(request)

    record = repository.fetch_by_id(friend_id)
    if record is None:
        return _not_found(request)

    return HTMLResponse(
        views.render_show(to_display(record), _back_url(request), pop_flashdata(request))
    )


@router.get("/delete_conf/{update_id}", response_class=HTMLResponse)
def delete_conf(
    request: Request,
    update_id: str,
    repository: Repository,
) -> HTMLResponse:
    try:
        friend_id = parse_identifier(update_id)
    except InvalidIdentifier:
        return _not_found(request)
    if friend_id == 0:
        return _not_found(request)

    record = repository.fetch_by_id(friend_id)
    if record is None:
        return _not_found(request)

    return HTMLResponse(
        views.render_delete_conf(
            to_display(record),
            form_location=f"/friends/submit_delete/{friend_id}",
            cancel_url=f"/friends/show/{friend_id}",
        )
    )


@router.post("/submit_delete/{update_id}")
def submit_delete(
    request: Request,
    update_id: str,
    repository: Repository,
    submit_marker: Annotated[str | None, Form(alias="submit")] = None,
) -> RedirectResponse:
    if submit_marker != DELETE_MARKER:
        return _redirect(MANAGE_PATH)

    try:
        friend_id = parse_identifier(update_id)
    except InvalidIdentifier:
        return _redirect(MANAGE_PATH)
    if friend_id == 0 or repository.fetch_by_id(friend_id) is None:
        return _redirect(MANAGE_PATH)

    repository.delete_by_id(friend_id)
    logger.info("Friend record deleted", extra={"friend_id": friend_id})
    set_flashdata(request, "The record was successfully deleted")
    return _redirect(MANAGE_PATH)


@router.get("/set_per_page/{option_index}")
def set_per_page(
    request: Request,
    option_index: str,
) -> RedirectResponse:
    try:
        selected = normalize_option_index(parse_identifier(option_index))
    except InvalidIdentifier:
        selected = settings.default_per_page_index

    store_page_size_preference(request, PageSizePreference(selected_index=selected))
    logger.info("Page size set to %s", settings.per_page_options[selected])
    return _redirect(MANAGE_PATH)
