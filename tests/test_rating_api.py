from conftest import VALID_PROMPT, register_and_login


async def _setup(client):
    alice = await register_and_login(client, "alice")
    bob = await register_and_login(client, "bob")
    response = await client.post("/api/prompts", json=VALID_PROMPT, headers=alice["headers"])
    return alice, bob, response.json()["id"]


async def test_rate_prompt(client):
    alice, bob, prompt_id = await _setup(client)

    response = await client.post(
        f"/api/prompts/{prompt_id}/ratings", json={"rating": 4, "comment": "  Handy  "}, headers=bob["headers"]
    )

    assert response.status_code == 201
    body = response.json()
    assert body["rating"] == 4
    assert body["averageRating"] == 4.0
    assert body["ratingCount"] == 1

    mine = await client.get(f"/api/prompts/{prompt_id}/ratings/user", headers=bob["headers"])
    assert mine.status_code == 200
    assert mine.json()["comment"] == "Handy"

    prompt = await client.get(f"/api/prompts/{prompt_id}", headers=bob["headers"])
    assert prompt.json()["userRating"] == 4
    assert prompt.json()["averageRating"] == 4.0


async def test_own_rating_is_no_content_before_rating(client):
    alice, bob, prompt_id = await _setup(client)

    response = await client.get(f"/api/prompts/{prompt_id}/ratings/user", headers=bob["headers"])

    assert response.status_code == 204


async def test_rating_out_of_range(client):
    alice, bob, prompt_id = await _setup(client)

    response = await client.post(f"/api/prompts/{prompt_id}/ratings", json={"rating": 6}, headers=bob["headers"])

    assert response.status_code == 400
    assert response.json()["error"] == "VAL001"
    assert "rating" in response.json()["message"]


async def test_author_cannot_rate_own_prompt(client):
    alice, bob, prompt_id = await _setup(client)

    response = await client.post(f"/api/prompts/{prompt_id}/ratings", json={"rating": 5}, headers=alice["headers"])

    assert response.status_code == 403


async def test_duplicate_rating_conflicts(client):
    alice, bob, prompt_id = await _setup(client)
    await client.post(f"/api/prompts/{prompt_id}/ratings", json={"rating": 3}, headers=bob["headers"])

    response = await client.post(f"/api/prompts/{prompt_id}/ratings", json={"rating": 5}, headers=bob["headers"])

    assert response.status_code == 409
    assert response.json()["error"] == "RATING001"


async def test_stats_and_delete(client):
    alice, bob, prompt_id = await _setup(client)
    carol = await register_and_login(client, "carol")
    await client.post(f"/api/prompts/{prompt_id}/ratings", json={"rating": 5}, headers=bob["headers"])
    await client.post(f"/api/prompts/{prompt_id}/ratings", json={"rating": 2}, headers=carol["headers"])

    stats = await client.get(f"/api/prompts/{prompt_id}/ratings/stats", headers=bob["headers"])
    body = stats.json()
    assert body["averageRating"] == 3.5
    assert body["ratingCount"] == 2
    assert body["userRating"] == 5
    assert body["distribution"] == {"1": 0, "2": 1, "3": 0, "4": 0, "5": 1}

    deleted = await client.delete(f"/api/prompts/{prompt_id}/ratings", headers=bob["headers"])
    assert deleted.json()["averageRating"] == 2.0
    assert deleted.json()["ratingCount"] == 1

    deleted = await client.delete(f"/api/prompts/{prompt_id}/ratings", headers=carol["headers"])
    assert deleted.json()["averageRating"] is None
    assert deleted.json()["ratingCount"] == 0


async def test_user_ratings_listing(client):
    alice, bob, prompt_id = await _setup(client)
    await client.post(f"/api/prompts/{prompt_id}/ratings", json={"rating": 5}, headers=bob["headers"])

    response = await client.get(f"/api/users/{bob['id']}/ratings")

    assert response.json()["totalElements"] == 1
    assert response.json()["content"][0]["promptId"] == prompt_id
    assert response.json()["content"][0]["userNickname"] == "bob"
