"""Integration tests for the notification REST endpoints."""

from __future__ import annotations

import pytest

pytest.importorskip("fastapi")
from fastapi.testclient import TestClient

from bookyoon_notifications.main import create_app

BASE_URL = "/api/notifications"
ALERT = "X-bookyoonnotificationservice-alert"
PARAMS = "X-bookyoonnotificationservice-params"
ERROR = "X-bookyoonnotificationservice-error"


@pytest.fixture()
def client():
    """Return a test client bound to a clean application instance."""

    with TestClient(create_app()) as test_client:
        yield test_client


def _create(client: TestClient, **overrides) -> dict:
    payload = {"message": "Booking confirmed", "userLogin": "alice", "reservationId": 42}
    payload.update(overrides)
    response = client.post(BASE_URL, json=payload)
    assert response.status_code == 201, response.text
    return response.json()


def test_create_and_fetch_notification(client: TestClient) -> None:
    response = client.post(
        BASE_URL, json={"message": "Booking confirmed", "userLogin": "alice", "reservationId": 42}
    )

    assert response.status_code == 201
    body = response.json()
    assert body == {
        "id": body["id"],
        "message": "Booking confirmed",
        "reservationId": 42,
        "userLogin": "alice",
        "deleted": False,
        "read": False,
    }
    assert response.headers["Location"] == f"{BASE_URL}/{body['id']}"
    assert response.headers[ALERT] == "bookyoonnotificationservice.notification.created"
    assert response.headers[PARAMS] == str(body["id"])

    fetched = client.get(f"{BASE_URL}/{body['id']}")
    assert fetched.status_code == 200
    assert fetched.json() == body


@pytest.mark.parametrize(
    ("payload", "error_key"),
    [
        ({"id": 3, "message": "m", "userLogin": "alice"}, "idexists"),
        ({"userLogin": "alice"}, "messagenull"),
        ({"message": "m"}, "userloginnull"),
    ],
)
def test_create_rejects_invalid_payload(client: TestClient, payload, error_key) -> None:
    response = client.post(BASE_URL, json=payload)

    assert response.status_code == 400
    assert response.json()["detail"]["errorKey"] == error_key
    assert response.headers[ERROR] == f"error.{error_key}"
    assert client.get(f"{BASE_URL}/count").json() == 0


def test_get_unknown_notification_returns_404(client: TestClient) -> None:
    response = client.get(f"{BASE_URL}/999")

    assert response.status_code == 404
    assert response.json()["detail"]["errorKey"] == "idnotfound"


def test_put_replaces_notification(client: TestClient) -> None:
    created = _create(client)

    response = client.put(
        f"{BASE_URL}/{created['id']}",
        json={**created, "message": "Booking moved", "read": True},
    )

    assert response.status_code == 200
    assert response.json()["message"] == "Booking moved"
    assert response.json()["read"] is True
    assert response.headers[ALERT] == "bookyoonnotificationservice.notification.updated"


def test_put_validates_identifiers(client: TestClient) -> None:
    created = _create(client)
    url = f"{BASE_URL}/{created['id']}"

    missing_id = client.put(url, json={**created, "id": None})
    assert missing_id.status_code == 400
    assert missing_id.json()["detail"]["errorKey"] == "idnull"

    mismatch = client.put(url, json={**created, "id": created["id"] + 1})
    assert mismatch.status_code == 400
    assert mismatch.json()["detail"]["errorKey"] == "idinvalid"

    unknown = client.put(f"{BASE_URL}/999", json={**created, "id": 999})
    assert unknown.status_code == 404

    new_owner = client.put(url, json={**created, "userLogin": "mallory"})
    assert new_owner.status_code == 400
    assert new_owner.json()["detail"]["errorKey"] == "userloginimmutable"


def test_patch_merges_supplied_fields(client: TestClient) -> None:
    created = _create(client)

    response = client.patch(
        f"{BASE_URL}/{created['id']}",
        content=f'{{"id": {created["id"]}, "read": true}}',
        headers={"Content-Type": "application/merge-patch+json"},
    )

    assert response.status_code == 200
    body = response.json()
    assert body["read"] is True
    assert body["message"] == "Booking confirmed"
    assert body["reservationId"] == 42


def test_patch_unknown_notification_returns_404(client: TestClient) -> None:
    response = client.patch(f"{BASE_URL}/999", json={"id": 999, "read": True})

    assert response.status_code == 404


def test_mark_single_notification_read(client: TestClient) -> None:
    created = _create(client)

    assert client.patch(f"{BASE_URL}/{created['id']}/read").status_code == 204
    assert client.patch(f"{BASE_URL}/{created['id']}/read").status_code == 204
    assert client.get(f"{BASE_URL}/{created['id']}").json()["read"] is True
    assert client.patch(f"{BASE_URL}/999/read").status_code == 404


def test_hard_delete_removes_notification(client: TestClient) -> None:
    created = _create(client)

    response = client.delete(f"{BASE_URL}/{created['id']}")

    assert response.status_code == 204
    assert response.headers[ALERT] == "bookyoonnotificationservice.notification.deleted"
    assert client.get(f"{BASE_URL}/{created['id']}").status_code == 404
    assert client.delete(f"{BASE_URL}/{created['id']}").status_code == 204


def test_bulk_soft_delete_for_user(client: TestClient) -> None:
    first = _create(client)
    _create(client, message="Booking cancelled")
    other = _create(client, userLogin="bob")

    response = client.delete(f"{BASE_URL}/user/ALICE")

    assert response.status_code == 204
    assert client.get(f"{BASE_URL}/{first['id']}").json()["deleted"] is True
    assert client.get(f"{BASE_URL}/{other['id']}").json()["deleted"] is False
    assert client.get(f"{BASE_URL}/non-lue", params={"userLogin": "alice"}).json() == 0


def test_welcome_notification_is_stored(client: TestClient) -> None:
    response = client.post(
        f"{BASE_URL}/welcome", json={"id": 77, "message": "Welcome!", "userLogin": "carol"}
    )

    assert response.status_code == 200
    assert response.content == b""
    assert client.get(f"{BASE_URL}/non-lue", params={"userLogin": "carol"}).json() == 1


def test_unread_count_requires_user_login(client: TestClient) -> None:
    assert client.get(f"{BASE_URL}/non-lue").status_code == 422


def test_history_endpoints_follow_the_bearer_token(client: TestClient, auth_headers) -> None:
    read = _create(client, read=True)
    unread = _create(client, message="Booking reminder")
    deleted = _create(client, message="Old", deleted=True)
    _create(client, userLogin="bob")

    history = client.get(f"{BASE_URL}/history", headers=auth_headers("alice"))
    assert history.status_code == 200
    assert [item["id"] for item in history.json()] == [deleted["id"], unread["id"], read["id"]]

    unread_history = client.get(f"{BASE_URL}/history/non-lue", headers=auth_headers("alice"))
    assert [item["id"] for item in unread_history.json()] == [unread["id"]]


def test_history_without_identity_is_empty(client: TestClient) -> None:
    _create(client)

    assert client.get(f"{BASE_URL}/history").json() == []
    assert client.get(f"{BASE_URL}/history/non-lue").json() == []
    invalid = {"Authorization": "Bearer not-a-token"}
    assert client.get(f"{BASE_URL}/history", headers=invalid).json() == []


def test_read_all_marks_only_the_current_user(client: TestClient, auth_headers) -> None:
    mine = _create(client)
    tombstone = _create(client, deleted=True)
    other = _create(client, userLogin="bob")

    response = client.patch(f"{BASE_URL}/read-all", headers=auth_headers("alice"))

    assert response.status_code == 204
    assert client.get(f"{BASE_URL}/{mine['id']}").json()["read"] is True
    assert client.get(f"{BASE_URL}/{tombstone['id']}").json()["read"] is True
    assert client.get(f"{BASE_URL}/{other['id']}").json()["read"] is False


def test_read_all_without_identity_is_a_no_op(client: TestClient) -> None:
    created = _create(client)

    assert client.patch(f"{BASE_URL}/read-all").status_code == 204
    assert client.get(f"{BASE_URL}/{created['id']}").json()["read"] is False


def test_listing_filters_paginates_and_counts(client: TestClient) -> None:
    for index in range(3):
        _create(client, message=f"Booking {index}", reservationId=index)
    _create(client, message="Payment received", userLogin="bob", reservationId=None)

    response = client.get(
        BASE_URL,
        params={
            "userLogin.equals": "alice",
            "page": 0,
            "size": 2,
            "sort": "reservationId,desc",
        },
    )

    assert response.status_code == 200
    assert [item["reservationId"] for item in response.json()] == [2, 1]
    assert response.headers["X-Total-Count"] == "3"
    assert 'rel="next"' in response.headers["Link"]
    assert 'rel="prev"' not in response.headers["Link"]

    count = client.get(f"{BASE_URL}/count", params={"message.contains": "booking"})
    assert count.json() == 3
    unspecified = client.get(f"{BASE_URL}/count", params={"reservationId.specified": "false"})
    assert unspecified.json() == 1
    in_list = client.get(BASE_URL, params={"reservationId.in": "0,2"})
    assert sorted(item["reservationId"] for item in in_list.json()) == [0, 2]


def test_listing_rejects_unknown_criteria(client: TestClient) -> None:
    unknown_field = client.get(BASE_URL, params={"colour.equals": "red"})
    assert unknown_field.status_code == 400
    assert unknown_field.json()["detail"]["errorKey"] == "criteriainvalid"

    bad_value = client.get(f"{BASE_URL}/count", params={"reservationId.equals": "abc"})
    assert bad_value.status_code == 400

    bad_sort = client.get(BASE_URL, params={"sort": "createdAt,asc"})
    assert bad_sort.status_code == 400


def test_identifiers_beyond_storage_range_are_not_found(client: TestClient) -> None:
    huge = 99999999999999999999

    assert client.get(f"{BASE_URL}/{huge}").status_code == 404
    assert client.patch(f"{BASE_URL}/{huge}/read").status_code == 404
    assert client.delete(f"{BASE_URL}/{huge}").status_code == 204
    assert client.put(
        f"{BASE_URL}/{huge}", json={"id": huge, "message": "m", "userLogin": "alice"}
    ).status_code == 404


def test_numeric_criteria_beyond_storage_range_are_rejected(client: TestClient) -> None:
    response = client.get(BASE_URL, params={"id.equals": "99999999999999999999"})

    assert response.status_code == 400
    assert response.json()["detail"]["errorKey"] == "criteriainvalid"
    count = client.get(f"{BASE_URL}/count", params={"reservationId.in": "1,99999999999999999999"})
    assert count.status_code == 400


def test_reservation_identifier_beyond_storage_range_is_rejected(client: TestClient) -> None:
    response = client.post(
        BASE_URL,
        json={"message": "m", "userLogin": "alice", "reservationId": 99999999999999999999},
    )

    assert response.status_code == 422
    assert client.get(f"{BASE_URL}/count").json() == 0


def test_history_matches_non_ascii_logins(client: TestClient, auth_headers) -> None:
    created = _create(client, userLogin="Élodie")

    history = client.get(f"{BASE_URL}/history", headers=auth_headers("élodie"))
    assert [item["id"] for item in history.json()] == [created["id"]]
    assert client.get(f"{BASE_URL}/non-lue", params={"userLogin": "ÉLODIE"}).json() == 1
