def _create_lecture(client, auth, course_id: int, title: str) -> dict:
    r = client.post(
        "/lectures",
        headers=auth("educator"),
        json={
            "course_id": course_id,
            "title": title,
            "description": f"{title} description",
            "video_url": f"https://video.example.com/{title}",
            "duration": 300,
        },
    )
    assert r.status_code == 201, r.text
    return r.json()


def _create_document(client, auth, course_id: int, title: str) -> dict:
    r = client.post(
        "/documents",
        headers=auth("educator"),
        json={
            "course_id": course_id,
            "title": title,
            "file_url": f"https://files.example.com/{title}.pdf",
            "file_type": "pdf",
            "file_size": 1024,
        },
    )
    assert r.status_code == 201, r.text
    return r.json()


def test_lectures_get_sequential_order(client, auth, seed):
    orders = [_create_lecture(client, auth, seed["course"], t)["order"] for t in "ABC"]
    assert orders == [1, 2, 3]


def test_reorder_lectures(client, auth, seed):
    course_id = seed["course"]
    a, b, c = (_create_lecture(client, auth, course_id, t) for t in "ABC")

    r = client.patch(
        f"/lectures/course/{course_id}/reorder",
        headers=auth("educator"),
        json={"lecture_ids": [c["id"], a["id"], b["id"]]},
    )
    assert r.status_code == 200, r.text
    assert r.json()["skipped_ids"] == []

    r = client.get(f"/lectures/course/{course_id}/all", headers=auth("educator"))
    by_title = {lec["title"]: lec["order"] for lec in r.json()}
    assert by_title == {"A": 2, "B": 3, "C": 1}
    assert [lec["title"] for lec in r.json()] == ["C", "A", "B"]


def test_reorder_reports_foreign_ids(client, auth, seed):
    course_id = seed["course"]
    a = _create_lecture(client, auth, course_id, "A")

    r = client.patch(
        f"/lectures/course/{course_id}/reorder",
        headers=auth("educator"),
        json={"lecture_ids": [424242, a["id"]]},
    )
    assert r.status_code == 200
    assert r.json()["skipped_ids"] == [424242]

    r = client.get(f"/lectures/course/{course_id}/all", headers=auth("educator"))
    assert r.json()[0]["order"] == 2


def test_only_owner_adds_or_reorders(client, auth, seed):
    r = client.post(
        "/lectures",
        headers=auth("other_educator"),
        json={
            "course_id": seed["course"],
            "title": "Nope",
            "description": "x",
            "video_url": "https://v",
            "duration": 1,
        },
    )
    assert r.status_code == 403

    r = client.patch(
        f"/lectures/course/{seed['course']}/reorder",
        headers=auth("student"),
        json={"lecture_ids": []},
    )
    assert r.status_code == 403


def test_unpublished_lecture_hidden_from_non_owner(client, auth, seed):
    course_id = seed["course"]
    lecture = _create_lecture(client, auth, course_id, "Draft")

    assert client.get(f"/lectures/course/{course_id}").json() == []
    assert client.get(f"/lectures/{lecture['id']}").status_code == 404
    assert client.get(f"/lectures/{lecture['id']}", headers=auth("student")).status_code == 404
    assert client.get(f"/lectures/{lecture['id']}", headers=auth("educator")).status_code == 200

    r = client.patch(f"/lectures/{lecture['id']}/publish", headers=auth("educator"))
    assert r.json()["is_published"] is True

    listed = client.get(f"/lectures/course/{course_id}").json()
    assert [lec["id"] for lec in listed] == [lecture["id"]]
    assert client.get(f"/lectures/{lecture['id']}").status_code == 200


def test_all_lectures_requires_owner(client, auth, seed):
    r = client.get(f"/lectures/course/{seed['course']}/all", headers=auth("student"))
    assert r.status_code == 403


def test_update_and_delete_lecture(client, auth, seed):
    lecture = _create_lecture(client, auth, seed["course"], "A")

    r = client.put(
        f"/lectures/{lecture['id']}",
        headers=auth("educator"),
        json={"title": "A, revised", "duration": 420},
    )
    assert r.status_code == 200
    assert r.json()["title"] == "A, revised"
    assert r.json()["duration"] == 420

    r = client.delete(f"/lectures/{lecture['id']}", headers=auth("other_educator"))
    assert r.status_code == 403

    r = client.delete(f"/lectures/{lecture['id']}", headers=auth("educator"))
    assert r.status_code == 200
    assert client.get(f"/lectures/{lecture['id']}", headers=auth("educator")).status_code == 404


def test_documents_publish_and_reorder(client, auth, seed):
    course_id = seed["course"]
    first = _create_document(client, auth, course_id, "slides")
    second = _create_document(client, auth, course_id, "notes")
    assert (first["order"], second["order"]) == (1, 2)

    client.patch(f"/documents/{first['id']}/publish", headers=auth("educator"))
    listed = client.get(f"/documents/course/{course_id}").json()
    assert [d["title"] for d in listed] == ["slides"]

    r = client.patch(
        f"/documents/course/{course_id}/reorder",
        headers=auth("educator"),
        json={"document_ids": [second["id"], first["id"]]},
    )
    assert r.status_code == 200

    all_docs = client.get(f"/documents/course/{course_id}/all", headers=auth("educator")).json()
    assert [d["title"] for d in all_docs] == ["notes", "slides"]


def test_document_rejects_unknown_file_type(client, auth, seed):
    r = client.post(
        "/documents",
        headers=auth("educator"),
        json={
            "course_id": seed["course"],
            "title": "binary",
            "file_url": "https://files/x.exe",
            "file_type": "exe",
            "file_size": 10,
        },
    )
    assert r.status_code == 422
