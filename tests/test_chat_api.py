async def test_direct_chat_cardinality(client, signup):
    me_id, me = await signup("me")
    you_id, _ = await signup("you")
    other_id, _ = await signup("other")

    resp = await client.post("/api/chatrooms", headers=me, json={"is_group": False, "user_ids": []})
    assert resp.status_code == 400
    resp = await client.post(
        "/api/chatrooms", headers=me, json={"is_group": False, "user_ids": [you_id, other_id]}
    )
    assert resp.status_code == 400

    resp = await client.post("/api/chatrooms", headers=me, json={"is_group": False, "user_ids": [you_id]})
    assert resp.status_code == 201
    assert sorted(resp.json()["member_ids"]) == sorted([me_id, you_id])


async def test_group_chat_reports_skipped_ids(client, signup):
    me_id, me = await signup("me")
    a_id, _ = await signup("a")

    resp = await client.post(
        "/api/chatrooms",
        headers=me,
        json={"is_group": True, "name": "team", "user_ids": [a_id, 777]},
    )
    assert resp.status_code == 201
    body = resp.json()
    assert body["member_ids"] == [me_id, a_id]
    assert body["skipped_user_ids"] == [777]

    resp = await client.post("/api/chatrooms", headers=me, json={"is_group": True, "user_ids": [a_id]})
    assert resp.status_code == 400


async def test_group_chat_delete_owner_vs_member(client, signup):
    _, owner = await signup("owner")
    member_id, member = await signup("member")
    room = (await client.post(
        "/api/chatrooms", headers=owner, json={"is_group": True, "name": "team", "user_ids": [member_id]}
    )).json()

    resp = await client.delete(f"/api/chatrooms/{room['id']}", headers=member)
    assert resp.status_code == 403

    resp = await client.delete(f"/api/chatrooms/{room['id']}", headers=owner)
    assert resp.status_code == 200

    rooms = await client.get("/api/chatrooms", headers=owner)
    assert rooms.json() == []


async def test_messages_flow(client, signup):
    me_id, me = await signup("me")
    you_id, you = await signup("you")
    _, outsider = await signup("outsider")
    room = (await client.post(
        "/api/chatrooms", headers=me, json={"is_group": False, "user_ids": [you_id]}
    )).json()
    url = f"/api/chatrooms/{room['id']}/messages"

    resp = await client.post(url, headers=me, data={"content": "hello"}, files={"file": ("a.txt", b"a", "text/plain")})
    assert resp.status_code == 201
    message = resp.json()
    assert message["user"]["id"] == me_id
    assert message["file"].endswith("_a.txt")

    assert (await client.post(url, headers=outsider, data={"content": "hey"})).status_code == 403
    assert (await client.get(url, headers=outsider)).status_code == 403

    listing = await client.get(url, headers=you)
    assert [m["id"] for m in listing.json()] == [message["id"]]

    assert (await client.delete(f"/api/messages/{message['id']}", headers=you)).status_code == 403
    assert (await client.delete(f"/api/messages/{message['id']}", headers=me)).status_code == 200
    assert (await client.delete(f"/api/messages/{message['id']}", headers=me)).status_code == 404

    listing = await client.get(url, headers=you)
    assert listing.json() == []
