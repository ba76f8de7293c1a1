import pytest

from defect_tracker.db.models.comment import Comment


@pytest.fixture
def defect(client, engineer_headers, site):
    r = client.post("/defects", json={"title": "Leaking pipe", "siteId": site["id"]}, headers=engineer_headers)
    assert r.status_code == 200
    return r.json()


def test_create_and_list_by_site(client, manager_headers, site):
    r = client.post(
        "/defects",
        json={"title": "D1", "siteId": site["id"], "priority": "HIGH"},
        headers=manager_headers,
    )
    assert r.status_code == 200

    listed = client.get("/defects", params={"siteId": site["id"]}, headers=manager_headers).json()
    assert len(listed) == 1
    assert listed[0]["title"] == "D1"
    assert listed[0]["priority"] == "HIGH"
    assert listed[0]["status"] == "NEW"
    assert listed[0]["site"]["project"]["name"] == "P1"
    assert listed[0]["creator"]["email"] == "manager@example.com"


def test_create_defaults(client, engineer, engineer_headers, site):
    d = client.post(
        "/defects",
        json={"title": "  Chipped tile ", "siteId": site["id"], "description": "   "},
        headers=engineer_headers,
    ).json()
    assert d["title"] == "Chipped tile"
    assert d["priority"] == "MEDIUM"
    assert d["status"] == "NEW"
    assert d["description"] is None
    assert d["assigneeId"] is None
    assert d["deadline"] is None
    assert d["creatorId"] == engineer.id


def test_create_requires_title_and_site(client, manager_headers, site):
    assert client.post("/defects", json={"siteId": site["id"]}, headers=manager_headers).status_code == 400
    assert client.post("/defects", json={"title": "x"}, headers=manager_headers).status_code == 400
    assert client.post("/defects", json={"title": "x", "siteId": 999}, headers=manager_headers).status_code == 404


def test_create_rejects_unknown_priority_and_assignee(client, manager_headers, site):
    bad_priority = {"title": "x", "siteId": site["id"], "priority": "URGENT"}
    assert client.post("/defects", json=bad_priority, headers=manager_headers).status_code == 400
    bad_assignee = {"title": "x", "siteId": site["id"], "assigneeId": 12345}
    assert client.post("/defects", json=bad_assignee, headers=manager_headers).status_code == 404


def test_observer_cannot_create_or_delete(client, observer_headers, site, defect):
    assert client.post("/defects", json={"title": "x", "siteId": site["id"]}, headers=observer_headers).status_code == 403
    assert client.delete(f"/defects/{defect['id']}", headers=observer_headers).status_code == 403


@pytest.mark.parametrize("status", ["CLOSED", "CANCELLED", "UNDER_REVIEW", "IN_PROGRESS"])
def test_status_can_jump_directly(client, manager_headers, defect, status):
    r = client.patch(f"/defects/{defect['id']}", json={"status": status}, headers=manager_headers)
    assert r.status_code == 200
    assert r.json()["status"] == status


def test_closed_defect_can_be_reopened(client, engineer_headers, defect):
    client.patch(f"/defects/{defect['id']}", json={"status": "CLOSED"}, headers=engineer_headers)
    r = client.patch(f"/defects/{defect['id']}", json={"status": "NEW"}, headers=engineer_headers)
    assert r.json()["status"] == "NEW"


def test_invalid_status_is_rejected(client, manager_headers, defect):
    r = client.patch(f"/defects/{defect['id']}", json={"status": "DONE"}, headers=manager_headers)
    assert r.status_code == 400


def test_non_assignee_observer_cannot_update(client, observer_headers, defect):
    r = client.patch(f"/defects/{defect['id']}", json={"status": "CLOSED"}, headers=observer_headers)
    assert r.status_code == 403


def test_assignee_observer_can_update(client, manager_headers, observer, observer_headers, defect):
    r = client.patch(f"/defects/{defect['id']}", json={"assigneeId": observer.id}, headers=manager_headers)
    assert r.json()["assignee"]["email"] == "observer@example.com"

    r = client.patch(f"/defects/{defect['id']}", json={"status": "CLOSED"}, headers=observer_headers)
    assert r.status_code == 200
    assert r.json()["status"] == "CLOSED"

    # still cannot delete
    assert client.delete(f"/defects/{defect['id']}", headers=observer_headers).status_code == 403


def test_partial_update_keeps_and_clears_fields(client, manager_headers, engineer, defect):
    r = client.patch(
        f"/defects/{defect['id']}",
        json={"description": "Under sink", "deadline": "2026-11-01", "assigneeId": engineer.id, "priority": "CRITICAL"},
        headers=manager_headers,
    )
    body = r.json()
    assert body["description"] == "Under sink"
    assert body["deadline"] == "2026-11-01"
    assert body["assigneeId"] == engineer.id

    # title/status left out, empty title ignored
    r = client.patch(f"/defects/{defect['id']}", json={"title": None}, headers=manager_headers)
    assert r.json()["title"] == "Leaking pipe"
    assert r.json()["priority"] == "CRITICAL"
    assert r.json()["description"] == "Under sink"

    r = client.patch(
        f"/defects/{defect['id']}",
        json={"description": None, "deadline": None, "assigneeId": None},
        headers=manager_headers,
    )
    body = r.json()
    assert body["description"] is None
    assert body["deadline"] is None
    assert body["assigneeId"] is None
    assert body["assignee"] is None


def test_update_missing_defect_is_404(client, manager_headers):
    assert client.patch("/defects/999", json={"status": "CLOSED"}, headers=manager_headers).status_code == 404


def test_filters(client, manager_headers, engineer, site):
    pid = site["projectId"]
    other = client.post(f"/projects/{pid}/sites", json={"name": "S2"}, headers=manager_headers).json()
    client.post("/defects", json={"title": "a", "siteId": site["id"], "priority": "LOW"}, headers=manager_headers)
    b = client.post(
        "/defects",
        json={"title": "b", "siteId": other["id"], "priority": "HIGH", "assigneeId": engineer.id},
        headers=manager_headers,
    ).json()
    client.patch(f"/defects/{b['id']}", json={"status": "IN_PROGRESS"}, headers=manager_headers)

    def titles(**params):
        return sorted(d["title"] for d in client.get("/defects", params=params, headers=manager_headers).json())

    assert titles() == ["a", "b"]
    assert titles(projectId=pid) == ["a", "b"]
    assert titles(siteId=other["id"]) == ["b"]
    assert titles(priority="LOW") == ["a"]
    assert titles(status="IN_PROGRESS") == ["b"]
    assert titles(assigneeId=engineer.id) == ["b"]
    assert titles(projectId=pid + 100) == []
    assert client.get("/defects", params={"status": "WHATEVER"}, headers=manager_headers).status_code == 400


def test_comments(client, observer_headers, engineer_headers, defect):
    r = client.post(f"/defects/{defect['id']}/comments", json={"content": " first "}, headers=observer_headers)
    assert r.status_code == 200
    assert r.json()["content"] == "first"
    assert r.json()["author"]["email"] == "observer@example.com"
    client.post(f"/defects/{defect['id']}/comments", json={"content": "second"}, headers=engineer_headers)

    comments = client.get(f"/defects/{defect['id']}/comments", headers=observer_headers).json()
    assert [c["content"] for c in comments] == ["first", "second"]

    detail = client.get(f"/defects/{defect['id']}", headers=observer_headers).json()
    assert [c["content"] for c in detail["comments"]] == ["first", "second"]
    assert detail["commentCount"] == 2
    assert detail["attachments"] == []

    assert client.post(f"/defects/{defect['id']}/comments", json={"content": ""}, headers=observer_headers).status_code == 400
    assert client.post("/defects/999/comments", json={"content": "x"}, headers=observer_headers).status_code == 404
    assert client.get("/defects/999/comments", headers=observer_headers).status_code == 404


def test_delete_defect_removes_comments(client, db, engineer_headers, defect):
    client.post(f"/defects/{defect['id']}/comments", json={"content": "note"}, headers=engineer_headers)
    assert client.delete(f"/defects/{defect['id']}", headers=engineer_headers).status_code == 200
    assert client.get(f"/defects/{defect['id']}", headers=engineer_headers).status_code == 404
    db.expire_all()
    assert db.query(Comment).filter(Comment.defect_id == defect["id"]).count() == 0


def test_attachments_listed_and_counted(client, db, engineer_headers, defect):
    from defect_tracker.db.models.attachment import Attachment

    db.add(Attachment(defect_id=defect["id"], file_name="crack.jpg", content_type="image/jpeg"))
    db.commit()

    detail = client.get(f"/defects/{defect['id']}", headers=engineer_headers).json()
    assert [a["fileName"] for a in detail["attachments"]] == ["crack.jpg"]
    assert detail["attachmentCount"] == 1
    listed = client.get("/defects", headers=engineer_headers).json()
    assert listed[0]["attachmentCount"] == 1


def test_search_matches_title_and_description(client, manager_headers, site):
    client.post("/defects", json={"title": "Crack in wall", "siteId": site["id"]}, headers=manager_headers)
    client.post("/defects", json={"title": "Leak", "siteId": site["id"]}, headers=manager_headers)
    client.post(
        "/defects",
        json={"title": "Tile", "description": "hairline CRACK near the door", "siteId": site["id"]},
        headers=manager_headers,
    )

    def titles(q):
        return sorted(d["title"] for d in client.get("/defects", params={"q": q}, headers=manager_headers).json())

    assert titles("crack") == ["Crack in wall", "Tile"]
    assert titles("LEAK") == ["Leak"]
    assert titles("   ") == ["Crack in wall", "Leak", "Tile"]
    assert titles("nothing like this") == []


def test_update_with_unknown_assignee_is_404(client, manager_headers, defect):
    r = client.patch(f"/defects/{defect['id']}", json={"assigneeId": 999}, headers=manager_headers)
    assert r.status_code == 404
    assert client.get(f"/defects/{defect['id']}", headers=manager_headers).json()["assigneeId"] is None


def test_blank_description_clears_it(client, manager_headers, defect):
    client.patch(f"/defects/{defect['id']}", json={"description": "Under sink"}, headers=manager_headers)
    r = client.patch(f"/defects/{defect['id']}", json={"description": "   "}, headers=manager_headers)
    assert r.status_code == 200
    assert r.json()["description"] is None
