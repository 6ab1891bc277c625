"""
사용자 CRUD API 통합 테스트.
- 목록 / 단건 조회, 조건 검색(우선순위, 재활성화), 생성(중복 409),
  주소 수정, 삭제(마지막 관리자 보호)까지 검증한다.
"""

import datetime

from sqlalchemy import func, select

from app.models.user import User
from app.services.users import UserService

from tests.helpers import create_admin_in_db, create_user_in_db


def _payload(username, **overrides):
    body = {
        "username": username,
        "password": "UserPassw0rd!",
        "email": f"{username}@example.com",
        "birthday": "2005-09-20",
        "address": "1 Main St",
    }
    body.update(overrides)
    return body


def test_list_all_users_empty_is_no_content(client):
    r = client.get("/user/all")
    assert r.status_code == 204
    assert r.content == b""


def test_list_all_users(client, db_session):
    create_user_in_db(db_session, username="alice")
    create_user_in_db(db_session, username="bob")

    r = client.get("/user/all")
    assert r.status_code == 200, r.text
    assert [u["username"] for u in r.json()] == ["alice", "bob"]
    assert "password_hash" not in r.json()[0]


def test_create_user_and_fetch_by_location(client):
    r = client.post("/user/", json=_payload("alice"))
    assert r.status_code == 201, r.text
    location = r.headers["location"]
    assert location.endswith("/user/1")

    fetched = client.get("/user/1")
    assert fetched.status_code == 200, fetched.text
    body = fetched.json()
    assert body["username"] == "alice"
    assert body["email"] == "alice@example.com"
    assert body["birthday"] == "2005-09-20"
    assert body["is_active"] is True
    assert body["authorities"] == ["ROLE_USER"]


def test_create_duplicate_user_is_conflict(client):
    assert client.post("/user/", json=_payload("alice")).status_code == 201

    same_name = client.post("/user/", json=_payload("alice", email="other@example.com"))
    assert same_name.status_code == 409

    same_email = client.post("/user/", json=_payload("alice2", email="alice@example.com"))
    assert same_email.status_code == 409


def test_create_user_validation_error(client):
    r = client.post("/user/", json=_payload("alice", email="not-an-email"))
    assert r.status_code == 422


def test_get_user_not_found(client):
    r = client.get("/user/999")
    assert r.status_code == 404


def test_search_by_username_returns_all_matches(client, db_session):
    create_admin_in_db(db_session, username="admin")
    create_user_in_db(db_session, username="adm2")
    create_user_in_db(db_session, username="bob")

    r = client.get("/user", params={"username": "adm"})
    assert r.status_code == 200, r.text
    assert [u["username"] for u in r.json()] == ["admin", "adm2"]


def test_search_by_username_reactivates_after_fetch(client, db_session):
    admin = create_admin_in_db(db_session, username="admin")
    user = create_user_in_db(db_session, username="adm2")

    r = client.get("/user", params={"username": "adm", "reactive": "false"})
    assert r.status_code == 200, r.text
    # 응답은 조회 시점 값
    assert [u["is_active"] for u in r.json()] == [True, True]

    assert client.get(f"/user/{admin.id}").json()["is_active"] is False
    assert client.get(f"/user/{user.id}").json()["is_active"] is False

    r = client.get("/user", params={"username": "adm", "reactive": "true"})
    assert [u["is_active"] for u in r.json()] == [False, False]
    assert client.get(f"/user/{admin.id}").json()["is_active"] is True


def test_search_username_takes_priority_over_birthday(client, db_session):
    create_user_in_db(db_session, username="alice")

    r = client.get("/user", params={"username": "zzz", "birthday": "2005-09-20"})
    assert r.status_code == 404
    assert r.json()["detail"] == "User with username zzz NOT_FOUND"


def test_search_by_birthday(client, db_session):
    create_user_in_db(db_session, username="alice", birthday=datetime.date(1990, 1, 1))
    create_user_in_db(db_session, username="bob")

    r = client.get("/user", params={"birthday": "1990-01-01"})
    assert r.status_code == 200, r.text
    assert [u["username"] for u in r.json()] == ["alice"]

    missing = client.get("/user", params={"birthday": "2000-02-29"})
    assert missing.status_code == 404
    assert missing.json()["detail"] == "User with birthday 2000-02-29 NOT_FOUND"


def test_search_by_email(client, db_session):
    create_user_in_db(db_session, username="alice")

    r = client.get("/user", params={"email": "alice@example.com"})
    assert r.status_code == 200, r.text
    assert [u["username"] for u in r.json()] == ["alice"]

    missing = client.get("/user", params={"email": "x@example.com"})
    assert missing.status_code == 404
    assert missing.json()["detail"] == "User with email x@example.com NOT_FOUND"


def test_search_without_filter_is_bad_request(client):
    r = client.get("/user")
    assert r.status_code == 400
    assert r.json()["detail"] == "no recognized filter parameter supplied"


def test_update_changes_only_address(client, db_session):
    user = create_user_in_db(db_session, username="alice", address="old")

    r = client.put(
        f"/user/{user.id}",
        json={"address": "new", "username": "mallory", "email": "mallory@example.com"},
    )
    assert r.status_code == 200, r.text
    body = r.json()
    assert body["address"] == "new"
    assert body["username"] == "alice"
    assert body["email"] == "alice@example.com"

    assert client.get(f"/user/{user.id}").json()["address"] == "new"


def test_update_missing_user_is_not_found(client):
    r = client.put("/user/999", json={"address": "new"})
    assert r.status_code == 404


def test_delete_user(client, db_session):
    create_admin_in_db(db_session, username="root")
    user = create_user_in_db(db_session, username="alice")

    r = client.delete(f"/user/{user.id}")
    assert r.status_code == 204
    assert client.get(f"/user/{user.id}").status_code == 404


def test_delete_missing_user_is_not_found(client):
    r = client.delete("/user/999")
    assert r.status_code == 404


def test_delete_last_admin_is_blocked(client, db_session):
    admin = create_admin_in_db(db_session, username="root")

    r = client.delete(f"/user/{admin.id}")
    assert r.status_code == 404
    assert r.json()["detail"] == "Unable to delete the last admin"
    assert client.get(f"/user/{admin.id}").status_code == 200


def test_delete_admin_when_another_admin_remains(client, db_session):
    admin = create_admin_in_db(db_session, username="root")
    create_admin_in_db(db_session, username="root2")

    r = client.delete(f"/user/{admin.id}")
    assert r.status_code == 204

    # 남은 관리자는 이제 마지막 관리자
    remaining = client.get("/user", params={"username": "root2"}).json()[0]
    assert client.delete(f"/user/{remaining['id']}").status_code == 404


def test_search_by_username_ignores_case(client, db_session):
    create_user_in_db(db_session, username="Admin")
    create_user_in_db(db_session, username="bob")

    r = client.get("/user", params={"username": "aDM"})
    assert r.status_code == 200, r.text
    assert [u["username"] for u in r.json()] == ["Admin"]


def test_search_by_email_as_submitted_on_create(client):
    # 도메인은 저장 시 소문자로 정규화됨
    r = client.post("/user/", json=_payload("bob", email="Bob@Example.COM"))
    assert r.status_code == 201, r.text

    found = client.get("/user", params={"email": "Bob@Example.COM"})
    assert found.status_code == 200, found.text
    assert [u["username"] for u in found.json()] == ["bob"]
    assert found.json()[0]["email"] == "Bob@example.com"


def test_create_duplicate_caught_by_unique_constraint(client, monkeypatch):
    assert client.post("/user/", json=_payload("alice")).status_code == 201

    # 중복 확인을 통과한 동시 요청 상황
    monkeypatch.setattr(UserService, "is_user_exist", lambda self, data: False)

    r = client.post("/user/", json=_payload("alice"))
    assert r.status_code == 409
    assert r.json()["detail"] == "A User with name alice already exist"
    assert len(client.get("/user/all").json()) == 1


def test_create_user_database_error(failing_commit_client, db_session):
    r = failing_commit_client.post("/user/", json=_payload("alice"))
    assert r.status_code == 500
    assert r.json()["detail"] == "Database error: OperationalError"

    assert db_session.scalar(select(func.count()).select_from(User)) == 0


def test_update_user_database_error(failing_commit_client, db_session):
    user = create_user_in_db(db_session, username="alice", address="old")
    user_id = user.id

    r = failing_commit_client.put(f"/user/{user_id}", json={"address": "new"})
    assert r.status_code == 500
    assert r.json()["detail"] == "Database error: OperationalError"

    db_session.expire_all()
    assert db_session.get(User, user_id).address == "old"
