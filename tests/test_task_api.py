def _create(client, headers, **body):
    res = client.post("/api/tasks", json=body, headers=headers)
    assert res.status_code == 201, res.text
    return res.json()["data"]


def _create_tag(client, headers, name):
    res = client.post("/api/tags", json={"name": name}, headers=headers)
    assert res.status_code == 201, res.text
    return res.json()["data"]


def test_buy_milk_toggle_round_trip(client, alice_headers):
    task = _create(client, alice_headers, title="Buy milk", priority="HIGH")
    assert task["completed"] is False
    assert task["priority"] == "HIGH"

    res = client.patch(f"/api/tasks/{task['id']}/toggle", headers=alice_headers)
    assert res.status_code == 200
    assert res.json()["data"]["completed"] is True

    res = client.patch(f"/api/tasks/{task['id']}/toggle", headers=alice_headers)
    assert res.json()["data"]["completed"] is False


def test_response_uses_camel_case(client, alice_headers):
    task = _create(client, alice_headers, title="T", dueDate="2030-05-01T10:00:00Z")

    assert {"id", "title", "description", "completed", "priority", "dueDate",
            "userId", "createdAt", "updatedAt", "tags"} <= set(task)
    assert task["dueDate"].startswith("2030-05-01")


def test_list_completed_sorted_by_priority_ascending(client, alice_headers):
    low = _create(client, alice_headers, title="low", priority="LOW")
    high = _create(client, alice_headers, title="high", priority="HIGH")
    _create(client, alice_headers, title="medium", priority="MEDIUM")
    for t in (low, high):
        client.patch(f"/api/tasks/{t['id']}/toggle", headers=alice_headers)

    res = client.get(
        "/api/tasks?status=completed&sortBy=priority&sortOrder=asc", headers=alice_headers,
    )

    assert res.status_code == 200
    data = res.json()["data"]
    assert [t["priority"] for t in data["tasks"]] == ["LOW", "HIGH"]
    assert data["total"] == 2


def test_list_filters_by_comma_separated_tag_ids(client, alice_headers):
    work = _create_tag(client, alice_headers, "work")
    home = _create_tag(client, alice_headers, "home")
    _create(client, alice_headers, title="w", tagIds=[work["id"]])
    _create(client, alice_headers, title="h", tagIds=[home["id"]])
    _create(client, alice_headers, title="none")

    res = client.get(
        f"/api/tasks?tagIds={work['id']},{home['id']}&sortOrder=asc", headers=alice_headers,
    )

    data = res.json()["data"]
    assert [t["title"] for t in data["tasks"]] == ["w", "h"]
    assert data["tasks"][0]["tags"][0]["name"] == "work"


def test_list_rejects_bad_query_values(client, alice_headers):
    assert client.get("/api/tasks?status=done", headers=alice_headers).status_code == 400
    assert client.get("/api/tasks?sortBy=title", headers=alice_headers).status_code == 400

    res = client.get("/api/tasks?tagIds=1,abc", headers=alice_headers)
    assert res.status_code == 400
    assert res.json()["errors"][0]["path"] == "tagIds"


def test_create_validates_before_persisting(client, alice_headers):
    res = client.post("/api/tasks", json={"title": "", "priority": "URGENT"}, headers=alice_headers)

    assert res.status_code == 400
    paths = {e["path"] for e in res.json()["errors"]}
    assert {"title", "priority"} <= paths

    listing = client.get("/api/tasks", headers=alice_headers).json()["data"]
    assert listing["total"] == 0


def test_create_drops_foreign_tag_ids(client, alice_headers, bob_headers):
    mine = _create_tag(client, alice_headers, "mine")
    theirs = _create_tag(client, bob_headers, "theirs")

    task = _create(client, alice_headers, title="T", tagIds=[mine["id"], theirs["id"], 777])

    assert [t["id"] for t in task["tags"]] == [mine["id"]]


def test_update_with_empty_tag_ids_clears(client, alice_headers):
    tag = _create_tag(client, alice_headers, "x")
    task = _create(client, alice_headers, title="T", tagIds=[tag["id"]])

    res = client.put(f"/api/tasks/{task['id']}", json={"tagIds": []}, headers=alice_headers)

    assert res.status_code == 200
    assert res.json()["data"]["tags"] == []
    assert res.json()["data"]["title"] == "T"


def test_update_rejects_null_title(client, alice_headers):
    task = _create(client, alice_headers, title="T")

    res = client.put(f"/api/tasks/{task['id']}", json={"title": None}, headers=alice_headers)

    assert res.status_code == 400


def test_other_users_task_is_forbidden_everywhere(client, alice_headers, bob_headers):
    task = _create(client, alice_headers, title="secret")
    url = f"/api/tasks/{task['id']}"

    assert client.get(url, headers=bob_headers).status_code == 403
    assert client.put(url, json={"title": "x"}, headers=bob_headers).status_code == 403
    assert client.patch(f"{url}/toggle", headers=bob_headers).status_code == 403
    assert client.delete(url, headers=bob_headers).status_code == 403

    body = client.get(url, headers=bob_headers).json()
    assert body["status"] == "error"
    assert "data" not in body


def test_missing_task_is_404(client, alice_headers):
    res = client.get("/api/tasks/999", headers=alice_headers)

    assert res.status_code == 404
    assert res.json() == {"status": "error", "message": "Task not found"}


def test_delete_returns_id(client, alice_headers):
    task = _create(client, alice_headers, title="T")

    res = client.delete(f"/api/tasks/{task['id']}", headers=alice_headers)

    assert res.status_code == 200
    assert res.json() == {"status": "success", "data": {"id": task["id"]}}
    assert client.get(f"/api/tasks/{task['id']}", headers=alice_headers).status_code == 404


def test_routes_require_auth(client):
    assert client.get("/api/tasks").status_code == 401
    assert client.post("/api/tasks", json={"title": "x"}).status_code == 401
    assert client.get("/api/tags").status_code == 401


OUT_OF_RANGE_ID = 2**63


def test_out_of_range_task_id_is_404(client, alice_headers):
    url = f"/api/tasks/{OUT_OF_RANGE_ID}"

    assert client.get(url, headers=alice_headers).status_code == 404
    assert client.put(url, json={"title": "x"}, headers=alice_headers).status_code == 404
    assert client.patch(f"{url}/toggle", headers=alice_headers).status_code == 404
    assert client.delete(url, headers=alice_headers).status_code == 404


def test_create_drops_out_of_range_tag_ids(client, alice_headers):
    tag = _create_tag(client, alice_headers, "x")

    task = _create(client, alice_headers, title="T", tagIds=[tag["id"], OUT_OF_RANGE_ID])

    assert [t["id"] for t in task["tags"]] == [tag["id"]]
    listing = client.get("/api/tasks", headers=alice_headers).json()["data"]
    assert listing["total"] == 1


def test_update_drops_out_of_range_tag_ids(client, alice_headers):
    task = _create(client, alice_headers, title="T")

    res = client.put(
        f"/api/tasks/{task['id']}", json={"tagIds": [OUT_OF_RANGE_ID]}, headers=alice_headers,
    )

    assert res.status_code == 200
    assert res.json()["data"]["tags"] == []


def test_list_with_out_of_range_tag_id_matches_nothing(client, alice_headers):
    _create(client, alice_headers, title="T")

    res = client.get(f"/api/tasks?tagIds={OUT_OF_RANGE_ID}", headers=alice_headers)

    assert res.status_code == 200
    assert res.json()["data"] == {"tasks": [], "total": 0}


def test_list_defaults_to_newest_first(client, alice_headers):
    for title in ("first", "second", "third"):
        _create(client, alice_headers, title=title)

    res = client.get("/api/tasks", headers=alice_headers)

    assert [t["title"] for t in res.json()["data"]["tasks"]] == ["third", "second", "first"]


def test_list_sorted_by_priority_descending(client, alice_headers):
    for priority in ("MEDIUM", "LOW", "HIGH"):
        _create(client, alice_headers, title=priority.lower(), priority=priority)

    res = client.get("/api/tasks?sortBy=priority&sortOrder=desc", headers=alice_headers)

    assert [t["priority"] for t in res.json()["data"]["tasks"]] == ["HIGH", "MEDIUM", "LOW"]
