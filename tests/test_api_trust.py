"""
End-to-end API tests for /api/trust.
"""
import pytest
import pytest_asyncio
from httpx import AsyncClient

ALICE = "alice-http"
BOB = "bob-http"


@pytest_asyncio.fixture
async def profiles(client: AsyncClient, auth):
    for actor_id, name in ((ALICE, "Alice Rao"), (BOB, "Bob Mehta")):
        response = await client.get("/api/users/me", headers=auth(actor_id, metadata={"name": name}))
        assert response.status_code == 200


@pytest.mark.asyncio
async def test_endorse_success(client: AsyncClient, auth, profiles) -> None:
    response = await client.post(
        "/api/trust/endorse",
        json={"targetUserId": BOB, "rating": 4, "comment": "Great demo day pitch"},
        headers=auth(ALICE),
    )
    assert response.status_code == 201, response.text
    body = response.json()
    assert body["from_user_id"] == ALICE
    assert body["target_user_id"] == BOB
    assert body["rating"] == 4
    assert body["comment"] == "Great demo day pitch"

    listed = await client.get(f"/api/trust/endorsements/{BOB}", headers=auth(ALICE))
    assert listed.status_code == 200
    items = listed.json()
    assert len(items) == 1
    assert items[0]["from_user_name"] == "Alice Rao"
    assert items[0]["percentage"] == 80

    score = await client.get(f"/api/trust/score/{BOB}", headers=auth(ALICE))
    assert score.json() == {"user_id": BOB, "trust_score": 80, "endorsement_count": 1}

    bob = await client.get(f"/api/users/profile/{BOB}", headers=auth(ALICE))
    assert bob.json()["trust_score"] == 80


@pytest.mark.asyncio
@pytest.mark.parametrize("rating", [0, 6, "five", None, 3.5])
async def test_endorse_invalid_rating_is_400(client: AsyncClient, auth, profiles, rating) -> None:
    response = await client.post(
        "/api/trust/endorse",
        json={"targetUserId": BOB, "rating": rating, "comment": ""},
        headers=auth(ALICE),
    )
    assert response.status_code == 400
    assert "message" in response.json()


@pytest.mark.asyncio
async def test_endorse_unknown_target_is_404(client: AsyncClient, auth, profiles) -> None:
    response = await client.post(
        "/api/trust/endorse",
        json={"targetUserId": "ghost", "rating": 3},
        headers=auth(ALICE),
    )
    assert response.status_code == 404
    assert response.json() == {"message": "Target user not found"}


@pytest.mark.asyncio
async def test_endorse_self_is_400(client: AsyncClient, auth, profiles) -> None:
    response = await client.post(
        "/api/trust/endorse",
        json={"targetUserId": ALICE, "rating": 5},
        headers=auth(ALICE),
    )
    assert response.status_code == 400


@pytest.mark.asyncio
async def test_endorse_requires_auth(client: AsyncClient, profiles) -> None:
    response = await client.post("/api/trust/endorse", json={"targetUserId": BOB, "rating": 5})
    assert response.status_code == 401


@pytest.mark.asyncio
async def test_endorse_non_string_comment_is_400(client: AsyncClient, auth, profiles) -> None:
    response = await client.post(
        "/api/trust/endorse",
        json={"targetUserId": BOB, "rating": 5, "comment": {"text": "nested"}},
        headers=auth(ALICE),
    )
    assert response.status_code == 400


@pytest.mark.asyncio
async def test_unknown_profile_trust_lookups_are_404(client: AsyncClient, auth, profiles) -> None:
    assert (await client.get("/api/trust/score/ghost", headers=auth(ALICE))).status_code == 404
    assert (await client.get("/api/trust/endorsements/ghost", headers=auth(ALICE))).status_code == 404


@pytest.mark.asyncio
async def test_endorsements_are_embedded_in_profile_payloads(client: AsyncClient, auth, profiles) -> None:
    empty = await client.get("/api/users/me", headers=auth(BOB))
    assert empty.json()["endorsements"] == []

    first = await client.post(
        "/api/trust/endorse",
        json={"targetUserId": BOB, "rating": 4, "comment": "Shipped the MVP"},
        headers=auth(ALICE),
    )
    assert first.status_code == 201

    me = await client.get("/api/users/me", headers=auth(BOB))
    assert me.status_code == 200
    body = me.json()
    assert body["trust_score"] == 80
    assert len(body["endorsements"]) == 1
    item = body["endorsements"][0]
    assert item["id"] == first.json()["id"]
    assert item["from_user_id"] == ALICE
    assert item["from_user_name"] == "Alice Rao"
    assert item["rating"] == 4
    assert item["percentage"] == 80
    assert item["comment"] == "Shipped the MVP"

    public = await client.get(f"/api/users/profile/{BOB}", headers=auth(ALICE))
    assert public.json()["endorsements"] == body["endorsements"]

    edited = await client.put("/api/users/profile", json={"bio": "Builder"}, headers=auth(BOB))
    assert edited.json()["endorsements"] == body["endorsements"]


@pytest.mark.asyncio
async def test_health_needs_no_auth(client: AsyncClient) -> None:
    response = await client.get("/api/health")
    assert response.status_code == 200
    assert response.json()["status"] == "ok"
