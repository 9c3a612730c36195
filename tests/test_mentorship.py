from datetime import timedelta

import pytest

from app.core.timeutil import utcnow


@pytest.fixture()
def assigned_ta(client, auth, seed):
    r = client.post(
        f"/courses/{seed['course']}/assign-ta",
        headers=auth("educator"),
        json={"ta_id": seed["ta"], "student_ids": [seed["student"]]},
    )
    assert r.status_code == 200, r.text
    return seed["ta"]


def _session_payload(seed, when=None, **overrides) -> dict:
    when = when or utcnow() + timedelta(days=1)
    payload = {
        "ta_id": seed["ta"],
        "student_id": seed["student"],
        "course_id": seed["course"],
        "title": "Doubt clearing: loops",
        "session_type": "doubt-clearing",
        "scheduled_at": when.isoformat(),
        "duration": 30,
    }
    payload.update(overrides)
    return payload


@pytest.fixture()
def session_id(client, auth, seed, assigned_ta):
    r = client.post("/mentorship", headers=auth("student"), json=_session_payload(seed))
    assert r.status_code == 201, r.text
    assert r.json()["status"] == "scheduled"
    return r.json()["id"]


def test_rating_requires_completed_session(client, auth, session_id):
    url = f"/mentorship/{session_id}/rate"

    r = client.patch(url, headers=auth("student"), json={"rating": 5})
    assert r.status_code == 400
    assert r.json()["detail"] == "Can only rate completed sessions"

    r = client.patch(f"/mentorship/{session_id}/complete", headers=auth("ta"), json={"notes": "Went well"})
    assert r.status_code == 200
    assert r.json()["status"] == "completed"
    assert r.json()["notes"] == "Went well"

    r = client.patch(url, headers=auth("student"), json={"rating": 6})
    assert r.status_code == 400

    r = client.patch(url, headers=auth("student"), json={"rating": 4, "feedback": "Helpful"})
    assert r.status_code == 200
    assert r.json()["rating"] == 4
    assert r.json()["rating_feedback"] == "Helpful"


def test_only_ta_starts_and_completes(client, auth, session_id):
    assert client.patch(f"/mentorship/{session_id}/start", headers=auth("student")).status_code == 403
    assert client.patch(f"/mentorship/{session_id}/complete", headers=auth("student")).status_code == 403

    r = client.patch(f"/mentorship/{session_id}/start", headers=auth("ta"))
    assert r.status_code == 200
    assert r.json()["status"] == "ongoing"

    r = client.patch(f"/mentorship/{session_id}/start", headers=auth("ta"))
    assert r.status_code == 400


def test_terminal_states_reject_transitions(client, auth, session_id):
    r = client.patch(f"/mentorship/{session_id}/cancel", headers=auth("student"))
    assert r.status_code == 200
    assert r.json()["status"] == "cancelled"

    r = client.patch(f"/mentorship/{session_id}/complete", headers=auth("ta"))
    assert r.status_code == 400
    assert r.json()["detail"] == "Cannot move session from 'cancelled' to 'completed'"

    r = client.put(
        f"/mentorship/{session_id}",
        headers=auth("student"),
        json={"scheduled_at": "2030-01-01T10:00:00Z"},
    )
    assert r.status_code == 400
    assert r.json()["detail"] == "Cannot edit a cancelled session"


def test_non_participant_is_forbidden(client, auth, session_id):
    assert client.get(f"/mentorship/{session_id}", headers=auth("other_student")).status_code == 403
    assert client.patch(f"/mentorship/{session_id}/cancel", headers=auth("educator")).status_code == 403
    assert client.get(f"/mentorship/{session_id}", headers=auth("ta")).status_code == 200


def test_update_session_cannot_change_status(client, auth, session_id):
    r = client.put(
        f"/mentorship/{session_id}",
        headers=auth("ta"),
        json={"title": "Loops and recursion", "meeting_link": "https://meet.example.com/x", "status": "completed"},
    )
    assert r.status_code == 200
    assert r.json()["title"] == "Loops and recursion"
    assert r.json()["status"] == "scheduled"


def test_create_requires_assigned_ta_and_enrolled_student(client, auth, seed):
    # ta exists but is not assigned to the course yet
    r = client.post("/mentorship", headers=auth("student"), json=_session_payload(seed))
    assert r.status_code == 400
    assert r.json()["detail"] == "Invalid TA for this course"


def test_create_rejects_unenrolled_student(client, auth, seed, assigned_ta):
    r = client.post(
        "/mentorship",
        headers=auth("ta"),
        json=_session_payload(seed, student_id=seed["other_student"]),
    )
    assert r.status_code == 400
    assert r.json()["detail"] == "Invalid student for this course"


def test_create_only_for_yourself(client, auth, seed, assigned_ta):
    r = client.post("/mentorship", headers=auth("other_student"), json=_session_payload(seed))
    assert r.status_code == 403


def test_my_sessions_filters(client, auth, seed, session_id):
    r = client.get("/mentorship/my-sessions", headers=auth("ta"))
    assert r.status_code == 200
    assert [s["id"] for s in r.json()] == [session_id]

    r = client.get("/mentorship/my-sessions", headers=auth("student"), params={"status": "completed"})
    assert r.json() == []

    r = client.get("/mentorship/my-sessions", headers=auth("student"), params={"upcoming": "true"})
    assert [s["id"] for s in r.json()] == [session_id]

    assert client.get("/mentorship/my-sessions", headers=auth("educator")).status_code == 403


def test_course_sessions_visibility(client, auth, seed, session_id):
    r = client.get(f"/mentorship/course/{seed['course']}", headers=auth("educator"))
    assert r.status_code == 200
    assert len(r.json()) == 1

    r = client.get(f"/mentorship/course/{seed['course']}", headers=auth("other_student"))
    assert r.status_code == 403


def test_ta_availability(client, auth, seed, assigned_ta):
    when = utcnow() + timedelta(days=2)
    r = client.post("/mentorship", headers=auth("student"), json=_session_payload(seed, when=when))
    booked_id = r.json()["id"]

    r = client.get(f"/mentorship/ta/{seed['ta']}/availability")
    assert r.status_code == 400
    assert r.json()["detail"] == "Date parameter is required"

    day = when.date().isoformat()
    r = client.get(f"/mentorship/ta/{seed['ta']}/availability", params={"date": day})
    assert r.status_code == 200
    assert r.json()["day"] == day
    assert [s["id"] for s in r.json()["booked_sessions"]] == [booked_id]

    client.patch(f"/mentorship/{booked_id}/cancel", headers=auth("ta"))
    r = client.get(f"/mentorship/ta/{seed['ta']}/availability", params={"date": day})
    assert r.json()["booked_sessions"] == []

    r = client.get(f"/mentorship/ta/{seed['ta']}/availability", params={"date": "tomorrow"})
    assert r.status_code == 400
