from datetime import timedelta

from app.core.timeutil import utcnow
from app.models.submission import Submission

FILES = [{"file_name": "hw1.py", "file_url": "https://files.example.com/hw1.py"}]


def submit(client, auth, assignment_id: int, who: str = "student", files=FILES):
    return client.post(
        f"/assignments/{assignment_id}/submit",
        headers=auth(who),
        json={"files": files},
    )


def grade(client, auth, assignment_id: int, student_id: int, marks, who: str = "educator"):
    return client.post(
        f"/assignments/{assignment_id}/grade",
        headers=auth(who),
        json={"student_id": student_id, "marks": marks, "feedback": "ok"},
    )


def test_educator_creates_assignment_unpublished(client, auth, seed):
    r = client.post(
        "/assignments",
        headers=auth("educator"),
        json={
            "course_id": seed["course"],
            "title": "Project",
            "description": "Build a CLI",
            "due_date": (utcnow() + timedelta(days=3)).isoformat(),
            "max_marks": 50,
        },
    )
    assert r.status_code == 201, r.text
    assert r.json()["is_published"] is False

    r = client.post(
        "/assignments",
        headers=auth("student"),
        json={
            "course_id": seed["course"],
            "title": "x",
            "description": "x",
            "due_date": utcnow().isoformat(),
            "max_marks": 1,
        },
    )
    assert r.status_code == 403


def test_submit_then_resubmit_overwrites(client, auth, make_assignment):
    assignment_id = make_assignment()

    r1 = submit(client, auth, assignment_id)
    assert r1.status_code == 201, r1.text

    new_files = [{"file_name": "hw1_v2.py", "file_url": "https://files.example.com/hw1_v2.py"}]
    r2 = submit(client, auth, assignment_id, files=new_files)
    assert r2.status_code == 201
    assert r2.json()["id"] == r1.json()["id"]
    assert r2.json()["files"][0]["file_name"] == "hw1_v2.py"


def test_submit_requires_enrolled_student(client, auth, make_assignment):
    assignment_id = make_assignment()

    assert submit(client, auth, assignment_id, who="other_student").status_code == 403
    r = submit(client, auth, assignment_id, who="educator")
    assert r.status_code == 403
    assert r.json()["detail"] == "Only students can submit assignments"


def test_unpublished_assignment_rejects_submission(client, auth, make_assignment):
    assignment_id = make_assignment(published=False)
    r = submit(client, auth, assignment_id)
    assert r.status_code == 400
    assert r.json()["detail"] == "Assignment is not published yet"


def test_past_due_submission_rejected_but_grading_allowed(client, auth, db, seed, make_assignment):
    assignment_id = make_assignment(due_in=timedelta(days=-1))

    r = submit(client, auth, assignment_id)
    assert r.status_code == 400
    assert r.json()["detail"] == "Assignment submission deadline has passed"

    # a submission made before the deadline can still be graded afterwards
    db.add(
        Submission(
            assignment_id=assignment_id,
            student_id=seed["student"],
            files=FILES,
            submitted_at=utcnow() - timedelta(days=2),
        )
    )
    db.commit()

    r = grade(client, auth, assignment_id, seed["student"], 88)
    assert r.status_code == 200, r.text
    assert r.json()["marks"] == 88
    assert r.json()["graded_by_id"] == seed["educator"]


def test_grading_range_and_regrade(client, auth, seed, make_assignment):
    assignment_id = make_assignment(max_marks=100)
    submit(client, auth, assignment_id)

    assert grade(client, auth, assignment_id, seed["student"], 101).status_code == 400
    assert grade(client, auth, assignment_id, seed["student"], -1).status_code == 400

    r = grade(client, auth, assignment_id, seed["student"], 70)
    assert r.status_code == 200
    r = grade(client, auth, assignment_id, seed["student"], 95)
    assert r.status_code == 200
    assert r.json()["marks"] == 95


def test_grading_is_owner_only_and_needs_submission(client, auth, seed, make_assignment):
    assignment_id = make_assignment()

    r = grade(client, auth, assignment_id, seed["student"], 10)
    assert r.status_code == 404

    submit(client, auth, assignment_id)
    r = grade(client, auth, assignment_id, seed["student"], 10, who="other_educator")
    assert r.status_code == 403


def test_resubmission_after_grading_rejected(client, auth, seed, make_assignment):
    assignment_id = make_assignment()
    submit(client, auth, assignment_id)
    grade(client, auth, assignment_id, seed["student"], 60)

    r = submit(client, auth, assignment_id)
    assert r.status_code == 400
    assert "graded" in r.json()["detail"]


def test_student_course_listing_shows_own_submission(client, auth, seed, make_assignment):
    published = make_assignment()
    make_assignment(published=False)
    submit(client, auth, published)

    r = client.get(f"/assignments/course/{seed['course']}", headers=auth("student"))
    assert r.status_code == 200
    rows = r.json()
    assert len(rows) == 1
    assert rows[0]["has_submitted"] is True
    assert rows[0]["submission_status"] == "submitted"
    assert rows[0]["submission"]["student_id"] == seed["student"]

    r = client.get(f"/assignments/course/{seed['course']}", headers=auth("educator"))
    assert len(r.json()) == 2

    r = client.get(f"/assignments/course/{seed['course']}", headers=auth("other_student"))
    assert r.status_code == 403


def test_submissions_list_owner_only(client, auth, make_assignment):
    assignment_id = make_assignment()
    submit(client, auth, assignment_id)

    r = client.get(f"/assignments/{assignment_id}/submissions", headers=auth("educator"))
    assert r.status_code == 200
    assert len(r.json()["submissions"]) == 1

    r = client.get(f"/assignments/{assignment_id}/submissions", headers=auth("student"))
    assert r.status_code == 403


def test_student_detail_hides_other_submissions(client, auth, db, seed, make_assignment):
    assignment_id = make_assignment()
    submit(client, auth, assignment_id)

    r = client.get(f"/assignments/{assignment_id}", headers=auth("student"))
    assert r.status_code == 200
    assert [s["student_id"] for s in r.json()["submissions"]] == [seed["student"]]

    r = client.get(f"/assignments/{assignment_id}", headers=auth("other_student"))
    assert r.status_code == 403
