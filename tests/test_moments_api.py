"""
기록 API 테스트 (상세 조회 시 조회수 증가)
"""

import pytest


@pytest.fixture
def moment_payload():
    return {
        "placeId": 10,
        "placeName": "한강공원",
        "title": "산책",
        "content": "날씨가 좋았다",
    }


def test_create_requires_login(client, moment_payload):
    response = client.post("/api/v1/moments", json=moment_payload)

    assert response.status_code == 401


def test_view_increments_count(client, login, moment_payload):
    login()
    created = client.post("/api/v1/moments", json=moment_payload)
    assert created.status_code == 201
    moment_id = created.json()["id"]
    assert created.json()["viewCount"] == 0

    first = client.get(f"/api/v1/moments/{moment_id}")
    second = client.get(f"/api/v1/moments/{moment_id}")

    assert first.json()["viewCount"] == 1
    assert second.json()["viewCount"] == 2


def test_anonymous_view_of_public_moment(client, login, moment_payload):
    login()
    moment_id = client.post("/api/v1/moments", json=moment_payload).json()["id"]
    client.cookies.clear()

    response = client.get(f"/api/v1/moments/{moment_id}")

    assert response.status_code == 200
    assert response.json()["viewCount"] == 1


def test_private_moment_is_hidden_from_others(client, login, moment_payload):
    login()
    moment_id = client.post("/api/v1/moments", json={**moment_payload, "isPublic": False}).json()["id"]

    assert client.get(f"/api/v1/moments/{moment_id}").status_code == 200

    login(code="g-code", provider="google")
    response = client.get(f"/api/v1/moments/{moment_id}")

    assert response.status_code == 403
    assert response.json()["code"] == "FORBIDDEN"


def test_missing_moment(client):
    response = client.get("/api/v1/moments/9999")

    assert response.status_code == 404
    assert response.json()["code"] == "MOMENT_NOT_FOUND"
