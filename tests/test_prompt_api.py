from conftest import VALID_PROMPT, register_and_login


async def _create_prompt(client, user, **overrides):
    response = await client.post("/api/prompts", json={**VALID_PROMPT, **overrides}, headers=user["headers"])
    assert response.status_code == 201, response.text
    return response.json()


async def test_create_prompt(client):
    alice = await register_and_login(client, "alice")

    prompt = await _create_prompt(client, alice)

    assert prompt["author"] == {"id": alice["id"], "nickname": "alice"}
    assert prompt["tags"] == ["review", "python"]
    assert prompt["averageRating"] is None
    assert prompt["ratingCount"] == 0
    assert prompt["isPublic"] is True


async def test_create_prompt_rejects_unknown_category(client):
    alice = await register_and_login(client, "alice")

    response = await client.post(
        "/api/prompts", json={**VALID_PROMPT, "category": "astrology"}, headers=alice["headers"]
    )

    assert response.status_code == 400
    assert response.json()["error"] == "PROMPT002"


async def test_create_prompt_requires_auth(client):
    response = await client.post("/api/prompts", json=VALID_PROMPT)

    assert response.status_code == 401


async def test_list_prompts_page_envelope(client):
    alice = await register_and_login(client, "alice")
    for index in range(3):
        await _create_prompt(client, alice, title=f"Prompt number {index}")
    await _create_prompt(client, alice, title="Hidden prompt", isPublic=False)

    response = await client.get("/api/prompts", params={"page": 0, "size": 2, "sort": "createdAt,desc"})

    assert response.status_code == 200
    body = response.json()
    assert body["totalElements"] == 3
    assert body["totalPages"] == 2
    assert body["first"] is True
    assert body["last"] is False
    assert [item["title"] for item in body["content"]] == ["Prompt number 2", "Prompt number 1"]


async def test_search_and_category_filter(client):
    alice = await register_and_login(client, "alice")
    await _create_prompt(client, alice, title="Blog post outline", category="writing")
    await _create_prompt(client, alice, title="SQL tuning helper")

    by_search = await client.get("/api/prompts", params={"search": "blog"})
    by_category = await client.get("/api/prompts", params={"category": "coding"})

    assert [item["title"] for item in by_search.json()["content"]] == ["Blog post outline"]
    assert [item["title"] for item in by_category.json()["content"]] == ["SQL tuning helper"]


async def test_private_prompt_visible_only_to_author(client):
    alice = await register_and_login(client, "alice")
    bob = await register_and_login(client, "bob")
    prompt = await _create_prompt(client, alice, isPublic=False)

    forbidden = await client.get(f"/api/prompts/{prompt['id']}", headers=bob["headers"])
    anonymous = await client.get(f"/api/prompts/{prompt['id']}")
    own = await client.get(f"/api/prompts/{prompt['id']}", headers=alice["headers"])

    assert forbidden.status_code == 403
    assert anonymous.status_code == 403
    assert own.status_code == 200


async def test_viewing_counts_views(client):
    alice = await register_and_login(client, "alice")
    prompt = await _create_prompt(client, alice)

    await client.get(f"/api/prompts/{prompt['id']}")
    response = await client.get(f"/api/prompts/{prompt['id']}")

    assert response.json()["viewCount"] == 2


async def test_missing_prompt(client):
    response = await client.get("/api/prompts/9999")

    assert response.status_code == 404
    assert response.json()["error"] == "PROMPT001"


async def test_like_toggle_and_personal_flags(client):
    alice = await register_and_login(client, "alice")
    bob = await register_and_login(client, "bob")
    prompt = await _create_prompt(client, alice)

    liked = await client.post(f"/api/prompts/{prompt['id']}/like", headers=bob["headers"])
    assert liked.json() == {"liked": True, "likeCount": 1}

    detail = await client.get(f"/api/prompts/{prompt['id']}", headers=bob["headers"])
    assert detail.json()["isLiked"] is True
    assert detail.json()["isBookmarked"] is False
    assert detail.json()["likeCount"] == 1

    unliked = await client.post(f"/api/prompts/{prompt['id']}/like", headers=bob["headers"])
    assert unliked.json() == {"liked": False, "likeCount": 0}


async def test_only_author_can_update_or_delete(client):
    alice = await register_and_login(client, "alice")
    bob = await register_and_login(client, "bob")
    prompt = await _create_prompt(client, alice)

    update = await client.put(
        f"/api/prompts/{prompt['id']}", json={**VALID_PROMPT, "title": "Hijacked title"}, headers=bob["headers"]
    )
    delete = await client.delete(f"/api/prompts/{prompt['id']}", headers=bob["headers"])
    assert update.status_code == 403
    assert delete.status_code == 403

    own_update = await client.put(
        f"/api/prompts/{prompt['id']}", json={**VALID_PROMPT, "title": "Better review helper"}, headers=alice["headers"]
    )
    assert own_update.json()["title"] == "Better review helper"

    own_delete = await client.delete(f"/api/prompts/{prompt['id']}", headers=alice["headers"])
    assert own_delete.status_code == 204
    assert (await client.get(f"/api/prompts/{prompt['id']}")).status_code == 404


async def test_categories(client):
    response = await client.get("/api/v1/categories")

    assert response.status_code == 200
    ids = [category["id"] for category in response.json()]
    assert "coding" in ids
    assert len(ids) == 8


async def test_bookmark_endpoints(client):
    alice = await register_and_login(client, "alice")
    bob = await register_and_login(client, "bob")
    prompt = await _create_prompt(client, alice)

    folder = await client.post("/api/users/me/bookmark-folders", json={"name": "Work"}, headers=bob["headers"])
    assert folder.status_code == 201

    toggled = await client.post(f"/api/prompts/{prompt['id']}/bookmark", headers=bob["headers"])
    assert toggled.json()["bookmarked"] is True

    status = await client.get(f"/api/prompts/{prompt['id']}/bookmark/status", headers=bob["headers"])
    assert status.json()["bookmarked"] is True

    popular = await client.get("/api/prompts/popular-bookmarks", params={"timeframe": "week"})
    assert popular.status_code == 200
    assert popular.json()["content"][0]["id"] == prompt["id"]

    bookmarks = await client.get("/api/users/me/bookmarks", headers=bob["headers"])
    bookmark_id = bookmarks.json()["content"][0]["id"]
    moved = await client.put(
        f"/api/users/me/bookmarks/{bookmark_id}/folder",
        json={"folderId": folder.json()["id"]},
        headers=bob["headers"],
    )
    assert moved.status_code == 200

    folders = await client.get("/api/users/me/bookmark-folders", headers=bob["headers"])
    assert folders.json()[0]["bookmarkCount"] == 1

    own = await client.post(f"/api/prompts/{prompt['id']}/bookmark", headers=alice["headers"])
    assert own.status_code == 403
    assert own.json()["error"] == "BOOKMARK005"
