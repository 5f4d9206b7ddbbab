def test_tag_crud(client, alice_headers):
    res = client.post("/api/tags", json={"name": "home"}, headers=alice_headers)
    assert res.status_code == 201
    tag = res.json()["data"]
    assert tag["color"] == "#CCCCCC"
    assert tag["userId"]

    res = client.put(f"/api/tags/{tag['id']}", json={"color": "#00FF00"}, headers=alice_headers)
    assert res.json()["data"]["color"] == "#00FF00"

    res = client.get("/api/tags", headers=alice_headers)
    assert [t["name"] for t in res.json()["data"]] == ["home"]

    res = client.delete(f"/api/tags/{tag['id']}", headers=alice_headers)
    assert res.json() == {"status": "success", "data": {"id": tag["id"]}}
    assert client.get(f"/api/tags/{tag['id']}", headers=alice_headers).status_code == 404


def test_duplicate_tag_is_409(client, alice_headers):
    client.post("/api/tags", json={"name": "home"}, headers=alice_headers)

    res = client.post("/api/tags", json={"name": "home"}, headers=alice_headers)

    assert res.status_code == 409
    assert res.json() == {"status": "error", "message": "Tag name already in use"}


def test_invalid_color_is_400(client, alice_headers):
    res = client.post("/api/tags", json={"name": "x", "color": "red"}, headers=alice_headers)

    assert res.status_code == 400
    assert res.json()["errors"][0]["path"] == "color"


def test_other_users_tag_is_forbidden(client, alice_headers, bob_headers):
    tag = client.post("/api/tags", json={"name": "home"}, headers=alice_headers).json()["data"]

    assert client.get(f"/api/tags/{tag['id']}", headers=bob_headers).status_code == 403
    assert client.delete(f"/api/tags/{tag['id']}", headers=bob_headers).status_code == 403


def test_deleting_tag_keeps_task(client, alice_headers):
    tag = client.post("/api/tags", json={"name": "home"}, headers=alice_headers).json()["data"]
    task = client.post(
        "/api/tasks", json={"title": "T", "tagIds": [tag["id"]]}, headers=alice_headers,
    ).json()["data"]

    client.delete(f"/api/tags/{tag['id']}", headers=alice_headers)

    res = client.get(f"/api/tasks/{task['id']}", headers=alice_headers)
    assert res.status_code == 200
    assert res.json()["data"]["tags"] == []


def test_out_of_range_tag_id_is_404(client, alice_headers):
    url = f"/api/tags/{2**63}"

    assert client.get(url, headers=alice_headers).status_code == 404
    assert client.put(url, json={"name": "x"}, headers=alice_headers).status_code == 404
    res = client.delete(url, headers=alice_headers)
    assert res.status_code == 404
    assert res.json() == {"status": "error", "message": "Tag not found"}
