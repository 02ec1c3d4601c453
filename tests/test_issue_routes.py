"""HTTP tests for the issue routes."""


def _create(client, summary="Bug A", description="desc", creator_name="Tanaka"):
    return client.post(
        "/issues",
        json={"summary": summary, "description": description, "creatorName": creator_name},
    )


def test_index_redirects_to_issue_list(client):
    resp = client.get("/", follow_redirects=False)
    assert resp.status_code in (302, 307)
    assert resp.headers["location"] == "/issues"


def test_creation_form_is_blank(client):
    resp = client.get("/issues/creationForm")
    assert resp.status_code == 200
    assert resp.json() == {"summary": "", "description": "", "creatorName": ""}


def test_create_and_show_detail(client):
    resp = _create(client)
    assert resp.status_code == 201, resp.text
    created = resp.json()
    assert created["summary"] == "Bug A"
    assert created["creatorName"] == "Tanaka"

    resp = client.get(f"/issues/{created['id']}")
    assert resp.status_code == 200
    detail = resp.json()
    assert detail["summary"] == "Bug A"
    assert detail["description"] == "desc"
    assert detail["creatorName"] == "Tanaka"


def test_create_duplicate_summary_is_conflict(client):
    assert _create(client).status_code == 201

    resp = _create(client, description="again", creator_name="Sato")
    assert resp.status_code == 409
    assert len(client.get("/issues").json()) == 1


def test_create_with_blank_summary_is_rejected(client):
    resp = _create(client, summary="   ")
    assert resp.status_code == 422


def test_create_with_missing_field_is_rejected(client):
    resp = client.post("/issues", json={"summary": "Bug A", "description": "desc"})
    assert resp.status_code == 422


def test_list_and_search(client):
    _create(client, summary="Login broken", description="cannot sign in")
    _create(client, summary="Slow page", description="report is slow")

    resp = client.get("/issues")
    assert resp.status_code == 200
    assert [issue["summary"] for issue in resp.json()] == ["Login broken", "Slow page"]

    resp = client.get("/issues", params={"keyword": "slow"})
    assert [issue["summary"] for issue in resp.json()] == ["Slow page"]

    resp = client.get("/issues", params={"keyword": "   "})
    assert len(resp.json()) == 2


def test_search_keyword_too_long(client):
    resp = client.get("/issues", params={"keyword": "k" * 257})
    assert resp.status_code == 422


def test_detail_of_unknown_issue_is_404(client):
    assert client.get("/issues/999").status_code == 404


def test_detail_with_negative_id_is_rejected(client):
    assert client.get("/issues/-1").status_code == 422


def test_update_issue(client):
    issue_id = _create(client).json()["id"]

    resp = client.post(
        f"/issues/{issue_id}/update",
        json={"summary": "Bug A2", "description": "new desc", "creatorName": "Sato"},
    )
    assert resp.status_code == 200
    assert resp.json()["success"] is True

    detail = client.get(f"/issues/{issue_id}").json()
    assert detail["summary"] == "Bug A2"
    assert detail["creatorName"] == "Sato"


def test_update_without_changes_reports_no_change(client):
    issue_id = _create(client).json()["id"]

    resp = client.post(
        f"/issues/{issue_id}/update",
        json={"summary": "Bug A", "description": "desc", "creatorName": "Tanaka"},
    )
    assert resp.status_code == 200
    assert resp.json()["success"] is False


def test_update_to_taken_summary_is_conflict(client):
    _create(client, summary="Bug A")
    other_id = _create(client, summary="Bug B").json()["id"]

    resp = client.post(
        f"/issues/{other_id}/update",
        json={"summary": "Bug A", "description": "desc", "creatorName": "Tanaka"},
    )
    assert resp.status_code == 409
    assert client.get(f"/issues/{other_id}").json()["summary"] == "Bug B"


def test_update_unknown_issue_is_404(client):
    resp = client.post(
        "/issues/777/update",
        json={"summary": "Bug A", "description": "desc", "creatorName": "Tanaka"},
    )
    assert resp.status_code == 404


def test_update_deleted_issue_is_conflict(client):
    issue_id = _create(client).json()["id"]
    client.post(f"/issues/{issue_id}/delete")

    resp = client.post(
        f"/issues/{issue_id}/update",
        json={"summary": "Bug Z", "description": "desc", "creatorName": "Tanaka"},
    )
    assert resp.status_code == 409


def test_delete_issue(client):
    issue_id = _create(client).json()["id"]

    resp = client.post(f"/issues/{issue_id}/delete")
    assert resp.status_code == 200
    assert resp.json()["success"] is True

    assert client.get(f"/issues/{issue_id}").status_code == 404
    assert client.get("/issues").json() == []

    resp = client.post(f"/issues/{issue_id}/delete")
    assert resp.status_code == 200
    assert resp.json()["success"] is False


def test_responses_carry_request_id_and_timing(client):
    resp = client.get("/issues", headers={"X-Request-ID": "req-123"})
    assert resp.headers["X-Request-ID"] == "req-123"
    assert resp.headers["X-Process-Time"].endswith("ms")
