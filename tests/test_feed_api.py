async def _create_feed(client, headers, content="hello", files=None):
    resp = await client.post("/api/feeds", headers=headers, data={"content": content}, files=files)
    assert resp.status_code == 201, resp.text
    return resp.json()


async def test_create_feed_with_multiple_files(client, signup):
    user_id, headers = await signup("budi")
    files = [
        ("file", ("one.jpg", b"1", "image/jpeg")),
        ("file", ("two.jpg", b"2", "image/jpeg")),
    ]
    feed = await _create_feed(client, headers, "with pics", files)

    assert feed["user"]["id"] == user_id
    assert feed["content"] == "with pics"
    assert len(feed["attachments"]) == 2
    assert feed["attachments"][0].endswith("_one.jpg")
    assert feed["attachments"][1].endswith("_two.jpg")
    assert feed["comments"] == [] and feed["reactions"] == []


async def test_create_feed_without_content_is_400(client, signup):
    _, headers = await signup("budi")
    resp = await client.post("/api/feeds", headers=headers, data={"content": ""})
    assert resp.status_code == 400


async def test_feed_update_delete_permissions(client, signup):
    _, owner = await signup("owner")
    _, other = await signup("other")
    feed = await _create_feed(client, owner)

    resp = await client.put(f"/api/feeds/{feed['id']}", headers=other, data={"content": "nope"})
    assert resp.status_code == 403
    resp = await client.delete(f"/api/feeds/{feed['id']}", headers=other)
    assert resp.status_code == 403

    resp = await client.put(f"/api/feeds/{feed['id']}", headers=owner, data={"content": "edited"})
    assert resp.status_code == 200
    assert resp.json()["content"] == "edited"

    resp = await client.delete(f"/api/feeds/{feed['id']}", headers=owner)
    assert resp.status_code == 200

    for headers in (owner, other):
        resp = await client.put(f"/api/feeds/{feed['id']}", headers=headers, data={"content": "again"})
        assert resp.status_code == 404

    listing = await client.get("/api/feeds", headers=owner)
    assert listing.json() == []


async def test_comments_and_reactions_nested_in_feed_list(client, signup):
    _, u1 = await signup("u1")
    u2_id, u2 = await signup("u2")
    feed = await _create_feed(client, u1, "hello")

    resp = await client.post(
        f"/api/feeds/{feed['id']}/comments",
        headers=u2,
        data={"content": "nice"},
        files={"file": ("note.txt", b"hi", "text/plain")},
    )
    assert resp.status_code == 201
    comment = resp.json()
    assert comment["file"].endswith("_note.txt")

    resp = await client.post(f"/api/feeds/{feed['id']}/like", headers=u2)
    assert resp.status_code == 200
    assert resp.json()["reaction"] == "like"
    assert resp.json()["like_count"] == 1

    listing = (await client.get("/api/feeds", headers=u1)).json()
    assert len(listing) == 1
    assert [c["id"] for c in listing[0]["comments"]] == [comment["id"]]
    assert listing[0]["reactions"][0]["user_id"] == u2_id
    assert listing[0]["like_count"] == 1 and listing[0]["dislike_count"] == 0


async def test_comment_delete_by_feed_owner_forbidden(client, signup):
    _, owner = await signup("owner")
    _, commenter = await signup("commenter")
    feed = await _create_feed(client, owner)
    comment = (await client.post(
        f"/api/feeds/{feed['id']}/comments", headers=commenter, data={"content": "mine"}
    )).json()

    resp = await client.delete(f"/api/comments/{comment['id']}", headers=owner)
    assert resp.status_code == 403

    resp = await client.put(f"/api/comments/{comment['id']}", headers=commenter, data={"content": "edited"})
    assert resp.status_code == 200
    assert resp.json()["content"] == "edited"

    resp = await client.delete(f"/api/comments/{comment['id']}", headers=commenter)
    assert resp.status_code == 200


async def test_hello_scenario_over_http(client, signup):
    _, u1 = await signup("u1")
    _, u2 = await signup("u2")
    feed = await _create_feed(client, u1, "hello")
    url = f"/api/feeds/{feed['id']}"

    resp = await client.post(f"{url}/like", headers=u2)
    assert resp.json()["reaction"] == "like"

    resp = await client.post(f"{url}/dislike", headers=u2)
    body = resp.json()
    assert body["reaction"] == "dislike"
    assert (body["like_count"], body["dislike_count"]) == (0, 1)

    resp = await client.post(f"{url}/dislike", headers=u2)
    body = resp.json()
    assert body["reaction"] is None
    assert (body["like_count"], body["dislike_count"]) == (0, 0)


async def test_react_to_missing_feed(client, signup):
    _, headers = await signup("budi")
    resp = await client.post("/api/feeds/999/like", headers=headers)
    assert resp.status_code == 404
