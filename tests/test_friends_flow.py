import importlib
from unittest.mock import MagicMock

import pytest
from fastapi.testclient import TestClient
from sqlalchemy.exc import OperationalError

from birthday_book.api.deps import get_friend_repository
from birthday_book.main import app
from birthday_book.repositories.friend_repository import FriendRepository
from birthday_book.schemas.friend import FriendRecord
from tests.conftest import basic_auth


ADA_FORM = {
    "first_name": "Ada",
    "last_name": "Lovelace",
    "email_address": "ada@example.com",
    "birthday": "1815-12-10",
    "submit": "Submit",
}


def _seed(repository: FriendRepository, count: int) -> list[int]:
    return [
        repository.insert(
            FriendRecord(
                first_name=f"First{index:03d}",
                last_name=f"Last{index:03d}",
                email_address=f"friend{index}@example.com",
                birthday="1990-06-15",
            )
        )
        for index in range(count)
    ]


def test_health() -> None:
    response = TestClient(app).get("/health")
    assert response.status_code == 200
    assert response.json() == {"status": "ok"}


def test_index_redirects_to_manage(client: TestClient) -> None:
    response = client.get("/friends", follow_redirects=False)
    assert response.status_code == 303
    assert response.headers["location"] == "/friends/manage"


def test_actions_require_credentials() -> None:
    anonymous = TestClient(app)
    assert anonymous.get("/friends/manage").status_code == 401
    assert anonymous.post("/friends/submit/0", data=ADA_FORM).status_code == 401

    wrong = TestClient(app, headers=basic_auth("admin", "wrong"))
    assert wrong.get("/friends/show/1").status_code == 401


def test_manage_without_records(client: TestClient) -> None:
    response = client.get("/friends/manage")
    assert response.status_code == 200
    assert "There are currently no records to display." in response.text


def test_manage_lists_formatted_records(client: TestClient, repository: FriendRepository) -> None:
    repository.insert(FriendRecord(**{k: v for k, v in ADA_FORM.items() if k != "submit"}))

    response = client.get("/friends/manage")
    assert response.status_code == 200
    assert "Lovelace" in response.text
    assert "December 10, 1815" in response.text
    assert "Showing 1 to 1 of 1 friends." in response.text


def test_manage_pages_with_default_page_size(client: TestClient, repository: FriendRepository) -> None:
    _seed(repository, 25)

    first = client.get("/friends/manage")
    assert "First000" in first.text
    assert "First019" in first.text
    assert "First020" not in first.text
    assert "Showing 1 to 20 of 25 friends." in first.text

    second = client.get("/friends/manage/2")
    assert "First019" not in second.text
    assert "First020" in second.text
    assert "First024" in second.text
    assert "Showing 21 to 25 of 25 friends." in second.text


def test_manage_with_invalid_page_redirects(client: TestClient) -> None:
    response = client.get("/friends/manage/abc", follow_redirects=False)
    assert response.status_code == 303
    assert response.headers["location"] == "/friends/manage"


def test_set_per_page_is_remembered_for_the_session(
    client: TestClient, repository: FriendRepository
) -> None:
    _seed(repository, 15)

    response = client.get("/friends/set_per_page/0", follow_redirects=False)
    assert response.status_code == 303
    assert response.headers["location"] == "/friends/manage"

    listing = client.get("/friends/manage")
    assert "First009" in listing.text
    assert "First010" not in listing.text
    assert '<option value="0" selected>10</option>' in listing.text

    other_session = TestClient(app, headers=basic_auth("admin", "admin"))
    assert "First010" in other_session.get("/friends/manage").text


def test_set_per_page_out_of_range_falls_back_to_default(
    client: TestClient, repository: FriendRepository
) -> None:
    _seed(repository, 25)
    client.get("/friends/set_per_page/0")
    client.get("/friends/set_per_page/9")

    listing = client.get("/friends/manage")
    assert '<option value="1" selected>20</option>' in listing.text
    assert "First019" in listing.text
    assert "First020" not in listing.text


def test_create_form_is_blank(client: TestClient) -> None:
    response = client.get("/friends/create")
    assert response.status_code == 200
    assert "Create New Friend Record" in response.text
    assert 'action="/friends/submit/0"' in response.text
    assert 'href="/friends/manage"' in response.text


def test_submit_creates_record_and_redirects(client: TestClient, repository: FriendRepository) -> None:
    response = client.post("/friends/submit/0", data=ADA_FORM, follow_redirects=False)
    assert response.status_code == 303
    assert repository.count() == 1

    created = repository.fetch_page(limit=10, offset=0)[0]
    assert response.headers["location"] == f"/friends/show/{created.id}"
    assert created.email_address == "ada@example.com"
    assert created.birthday == "1815-12-10"

    detail = client.get(response.headers["location"])
    assert "Friend record created successfully" in detail.text
    assert "December 10, 1815" in detail.text

    again = client.get(response.headers["location"])
    assert "Friend record created successfully" not in again.text


def test_submit_with_invalid_email_redisplays_form(
    client: TestClient, repository: FriendRepository
) -> None:
    response = client.post(
        "/friends/submit/0",
        data={**ADA_FORM, "email_address": "ada-at-example"},
        follow_redirects=False,
    )
    assert response.status_code == 200
    assert repository.count() == 0
    assert 'value="ada-at-example"' in response.text
    assert 'value="Lovelace"' in response.text
    assert "The email address field must contain a valid email address." in response.text


def test_submit_without_marker_redirects_to_list(
    client: TestClient, repository: FriendRepository
) -> None:
    data = {k: v for k, v in ADA_FORM.items() if k != "submit"}
    response = client.post("/friends/submit/0", data=data, follow_redirects=False)
    assert response.status_code == 303
    assert response.headers["location"] == "/friends/manage"
    assert repository.count() == 0


def test_edit_form_loads_existing_record(client: TestClient, repository: FriendRepository) -> None:
    friend_id = _seed(repository, 1)[0]

    response = client.get(f"/friends/create/{friend_id}")
    assert response.status_code == 200
    assert "Update Friend Record" in response.text
    assert 'value="First000"' in response.text
    assert 'value="1990-06-15"' in response.text
    assert f'action="/friends/submit/{friend_id}"' in response.text
    assert f'href="/friends/show/{friend_id}"' in response.text


def test_edit_form_for_missing_record_is_not_found(client: TestClient) -> None:
    response = client.get("/friends/create/42")
    assert response.status_code == 404
    assert "Friend Not Found" in response.text


def test_submit_updates_existing_record(client: TestClient, repository: FriendRepository) -> None:
    friend_id = _seed(repository, 1)[0]

    response = client.post(
        f"/friends/submit/{friend_id}",
        data={**ADA_FORM, "email_address": "countess@example.com"},
        follow_redirects=False,
    )
    assert response.status_code == 303
    assert response.headers["location"] == f"/friends/show/{friend_id}"
    assert repository.count() == 1

    updated = repository.fetch_by_id(friend_id)
    assert updated is not None
    assert updated.email_address == "countess@example.com"
    assert updated.first_name == "Ada"

    detail = client.get(f"/friends/show/{friend_id}")
    assert "Friend record updated successfully" in detail.text


def test_failed_edit_keeps_submitted_values(client: TestClient, repository: FriendRepository) -> None:
    friend_id = _seed(repository, 1)[0]

    response = client.post(
        f"/friends/submit/{friend_id}",
        data={**ADA_FORM, "first_name": "A"},
    )
    assert response.status_code == 200
    assert "Update Friend Record" in response.text
    assert 'value="A"' in response.text
    assert "The first name field must be at least 2 characters in length." in response.text
    assert repository.fetch_by_id(friend_id).first_name == "First000"


def test_show_missing_record(client: TestClient) -> None:
    for path in ("/friends/show/0", "/friends/show/999", "/friends/show/abc"):
        response = client.get(path)
        assert response.status_code == 404
        assert "Friend Not Found" in response.text
        assert 'href="/friends/manage"' in response.text


def test_not_found_goes_back_to_previous_list_page(client: TestClient) -> None:
    referer = "http://testserver/friends/manage/3"
    response = client.get("/friends/show/999", headers={"Referer": referer})
    assert f'href="{referer}"' in response.text

    response = client.get("/friends/show/999", headers={"Referer": "http://elsewhere/"})
    assert 'href="/friends/manage"' in response.text


def test_delete_confirmation_and_submit(client: TestClient, repository: FriendRepository) -> None:
    friend_id = _seed(repository, 2)[0]

    confirm = client.get(f"/friends/delete_conf/{friend_id}")
    assert confirm.status_code == 200
    assert "First000 Last000" in confirm.text
    assert f'action="/friends/submit_delete/{friend_id}"' in confirm.text

    response = client.post(
        f"/friends/submit_delete/{friend_id}",
        data={"submit": "Yes - Delete Now"},
        follow_redirects=False,
    )
    assert response.status_code == 303
    assert response.headers["location"] == "/friends/manage"
    assert repository.fetch_by_id(friend_id) is None
    assert repository.count() == 1

    listing = client.get("/friends/manage")
    assert "The record was successfully deleted" in listing.text


def test_delete_confirmation_for_missing_record(client: TestClient) -> None:
    assert client.get("/friends/delete_conf/0").status_code == 404
    assert client.get("/friends/delete_conf/5").status_code == 404


def test_delete_submit_without_confirmation_keeps_record(
    client: TestClient, repository: FriendRepository
) -> None:
    friend_id = _seed(repository, 1)[0]
    response = client.post(
        f"/friends/submit_delete/{friend_id}",
        data={"submit": "No"},
        follow_redirects=False,
    )
    assert response.status_code == 303
    assert repository.fetch_by_id(friend_id) is not None


def test_delete_submit_for_missing_record_redirects_quietly(client: TestClient) -> None:
    response = client.post(
        "/friends/submit_delete/77",
        data={"submit": "Yes - Delete Now"},
        follow_redirects=False,
    )
    assert response.status_code == 303
    assert response.headers["location"] == "/friends/manage"
    assert "successfully deleted" not in client.get("/friends/manage").text


def test_app_module_imports_with_friend_routes() -> None:
    module = importlib.import_module("birthday_book.main")
    paths = {route.path for route in module.app.routes}
    assert {
        "/friends",
        "/friends/manage",
        "/friends/manage/{page}",
        "/friends/submit/{update_id}",
        "/friends/set_per_page/{option_index}",
    } <= paths


def test_submit_with_blank_names_creates_nothing(
    client: TestClient, repository: FriendRepository
) -> None:
    response = client.post(
        "/friends/submit/0",
        data={**ADA_FORM, "first_name": "   ", "last_name": "  "},
        follow_redirects=False,
    )
    assert response.status_code == 200
    assert repository.count() == 0
    assert "The first name field is required." in response.text
    assert "The last name field is required." in response.text


def test_submit_stores_trimmed_values(client: TestClient, repository: FriendRepository) -> None:
    response = client.post(
        "/friends/submit/0",
        data={**ADA_FORM, "first_name": "  Ada ", "email_address": " ada@example.com "},
        follow_redirects=False,
    )
    assert response.status_code == 303
    created = repository.fetch_page(limit=10, offset=0)[0]
    assert created.first_name == "Ada"
    assert created.email_address == "ada@example.com"


def test_oversized_ids_are_not_found(client: TestClient) -> None:
    huge = "99999999999999999999"
    for path in (f"/friends/show/{huge}", f"/friends/delete_conf/{huge}", f"/friends/create/{huge}"):
        response = client.get(path)
        assert response.status_code == 404
        assert "Friend Not Found" in response.text


@pytest.mark.parametrize("page", ["99999999999999999999", str(2**63 - 1)])
def test_oversized_page_redirects_to_first_page(client: TestClient, page: str) -> None:
    response = client.get(f"/friends/manage/{page}", follow_redirects=False)
    assert response.status_code == 303
    assert response.headers["location"] == "/friends/manage"


def test_storage_failure_renders_error_page(client: TestClient) -> None:
    session = MagicMock()
    session.query.side_effect = OperationalError("SELECT", {}, Exception("database is locked"))
    app.dependency_overrides[get_friend_repository] = lambda: FriendRepository(session)
    try:
        response = client.get("/friends/show/1")
    finally:
        del app.dependency_overrides[get_friend_repository]
    assert response.status_code == 500
    assert "Something went wrong" in response.text
