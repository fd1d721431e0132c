import pytest
from sqlalchemy.exc import OperationalError

from campusnav.services.schedule_service import (
    COURSES_MUST_BE_LIST, TITLE_REQUIRED, ScheduleService, decode_days, normalize_days,
)
from campusnav.core.errors import PersistenceError


def _strip_ids(courses):
    return [
        {
            "title": c["title"],
            "buildingId": c["buildingId"],
            "meetings": [
                {k: m[k] for k in ("days", "startTime", "endTime", "room")}
                for m in c["meetings"]
            ],
        }
        for c in courses
    ]


SCHEDULE = [
    {
        "title": "CSCI 301",
        "buildingId": None,
        "meetings": [
            {"days": ["Mon", "Wed"], "startTime": "09:00", "endTime": "09:50", "room": "ECC 120"},
            {"days": ["Fri"], "startTime": "13:00", "endTime": "14:50", "room": None},
        ],
    },
    {
        "title": "HIST 140",
        "buildingId": None,
        "meetings": [{"days": ["Tue", "Thu"], "startTime": "11:00", "endTime": "12:15", "room": None}],
    },
]


def test_new_user_has_empty_schedule(client, auth_headers):
    response = client.get("/api/schedule", headers=auth_headers)
    assert response.status_code == 200
    assert response.json() == {"courses": []}


def test_replace_then_fetch_round_trip(client, auth_headers):
    response = client.post("/api/schedule", json={"courses": SCHEDULE}, headers=auth_headers)
    assert response.status_code == 200
    assert response.json() == {"success": True}

    courses = client.get("/api/schedule", headers=auth_headers).json()["courses"]
    assert _strip_ids(courses) == SCHEDULE
    assert all(isinstance(c["id"], int) for c in courses)


def test_courses_and_meetings_keep_creation_order(client, auth_headers):
    titles = [f"Course {i}" for i in range(5)]
    payload = [
        {"title": t, "meetings": [
            {"days": ["Mon"], "startTime": f"{8 + j}:00".zfill(5), "endTime": f"{8 + j}:50".zfill(5)}
            for j in range(3)
        ]}
        for t in titles
    ]
    client.post("/api/schedule", json={"courses": payload}, headers=auth_headers)
    courses = client.get("/api/schedule", headers=auth_headers).json()["courses"]
    assert [c["title"] for c in courses] == titles
    assert [m["startTime"] for m in courses[0]["meetings"]] == ["08:00", "09:00", "10:00"]
    ids = [c["id"] for c in courses]
    assert ids == sorted(ids)


def test_meetings_without_times_are_skipped(client, auth_headers):
    payload = [{
        "title": "MATH 221",
        "meetings": [
            {"days": ["Mon"], "startTime": "08:00", "endTime": "08:50"},
            {"days": ["Tue"], "startTime": "", "endTime": "08:50"},
            {"days": ["Wed"], "startTime": "08:00"},
            {"days": ["Thu"], "startTime": 800, "endTime": 850},
        ],
    }]
    response = client.post("/api/schedule", json={"courses": payload}, headers=auth_headers)
    assert response.status_code == 200

    course = client.get("/api/schedule", headers=auth_headers).json()["courses"][0]
    assert [m["days"] for m in course["meetings"]] == [["Mon"]]


def test_second_replace_discards_previous_schedule(client, auth_headers):
    client.post("/api/schedule", json={"courses": SCHEDULE}, headers=auth_headers)
    client.post("/api/schedule", json={"courses": [{"title": "ONLY ONE", "meetings": []}]}, headers=auth_headers)

    courses = client.get("/api/schedule", headers=auth_headers).json()["courses"]
    assert [c["title"] for c in courses] == ["ONLY ONE"]
    assert courses[0]["meetings"] == []


def test_replace_with_empty_list_clears_schedule(client, auth_headers):
    client.post("/api/schedule", json={"courses": SCHEDULE}, headers=auth_headers)
    response = client.post("/api/schedule", json={"courses": []}, headers=auth_headers)
    assert response.status_code == 200
    assert client.get("/api/schedule", headers=auth_headers).json() == {"courses": []}


@pytest.mark.parametrize("bad_course", [
    {"title": "", "meetings": []},
    {"title": None, "meetings": []},
    {"title": 42, "meetings": []},
    {"meetings": []},
    "not an object",
])
def test_bad_title_rolls_back_everything(client, auth_headers, bad_course):
    client.post("/api/schedule", json={"courses": SCHEDULE}, headers=auth_headers)
    before = client.get("/api/schedule", headers=auth_headers).json()

    payload = [{"title": "Would be inserted first", "meetings": []}, bad_course]
    response = client.post("/api/schedule", json={"courses": payload}, headers=auth_headers)
    assert response.status_code == 400
    assert response.json() == {"error": TITLE_REQUIRED}

    assert client.get("/api/schedule", headers=auth_headers).json() == before


@pytest.mark.parametrize("body", [
    {"courses": {"title": "x"}},
    {"courses": "CSCI 301"},
    {"courses": None},
    {},
])
def test_courses_must_be_a_list(client, auth_headers, body):
    response = client.post("/api/schedule", json=body, headers=auth_headers)
    assert response.status_code == 400
    assert response.json() == {"error": COURSES_MUST_BE_LIST}


def test_schedule_requires_token(client):
    assert client.get("/api/schedule").status_code == 401
    assert client.post("/api/schedule", json={"courses": []}).status_code == 401


def test_users_do_not_see_each_other(client, register_user):
    _, token_a = register_user("a@go.minnstate.edu")
    _, token_b = register_user("b@go.minnstate.edu")
    headers_a = {"Authorization": f"Bearer {token_a}"}
    headers_b = {"Authorization": f"Bearer {token_b}"}

    client.post("/api/schedule", json={"courses": SCHEDULE}, headers=headers_a)
    client.post("/api/schedule", json={"courses": [{"title": "B only"}]}, headers=headers_b)

    assert len(client.get("/api/schedule", headers=headers_a).json()["courses"]) == 2
    assert [c["title"] for c in client.get("/api/schedule", headers=headers_b).json()["courses"]] == ["B only"]

    # B replacing again leaves A alone
    client.post("/api/schedule", json={"courses": []}, headers=headers_b)
    assert _strip_ids(client.get("/api/schedule", headers=headers_a).json()["courses"]) == SCHEDULE


def test_building_id_and_code(client, auth_headers, seed_buildings):
    buildings = seed_buildings()
    ecc = next(b for b in buildings if b["building_code"] == "ECC")
    payload = [
        {"title": "With building", "buildingId": ecc["id"]},
        {"title": "String id", "buildingId": str(ecc["id"])},
        {"title": "Bool id", "buildingId": True},
    ]
    client.post("/api/schedule", json={"courses": payload}, headers=auth_headers)
    courses = client.get("/api/schedule", headers=auth_headers).json()["courses"]

    assert courses[0]["buildingId"] == ecc["id"]
    assert courses[0]["buildingCode"] == "ECC"
    assert courses[1]["buildingId"] is None
    assert courses[1]["buildingCode"] is None
    assert courses[2]["buildingId"] is None


def test_days_are_deduplicated_and_filtered(client, auth_headers):
    payload = [{"title": "Lab", "meetings": [
        {"days": ["Wed", "Mon", "Wed", "Funday", 3], "startTime": "10:00", "endTime": "11:00"},
        {"days": "Mon", "startTime": "12:00", "endTime": "13:00"},
    ]}]
    client.post("/api/schedule", json={"courses": payload}, headers=auth_headers)
    meetings = client.get("/api/schedule", headers=auth_headers).json()["courses"][0]["meetings"]
    assert meetings[0]["days"] == ["Wed", "Mon"]
    assert meetings[1]["days"] == []


def test_database_failure_mid_replace_keeps_old_schedule(client, register_user, monkeypatch):
    user, token = register_user()
    headers = {"Authorization": f"Bearer {token}"}
    client.post("/api/schedule", json={"courses": SCHEDULE}, headers=headers)

    def _boom(self, db, course_id, meeting):
        raise OperationalError("INSERT INTO meetings", {}, Exception("disk I/O error"))

    monkeypatch.setattr(ScheduleService, "_insert_meeting", _boom)

    with pytest.raises(PersistenceError):
        ScheduleService().replace_schedule(user["id"], [{"title": "New", "meetings": [
            {"days": ["Mon"], "startTime": "08:00", "endTime": "09:00"},
        ]}])

    response = client.post("/api/schedule", json={"courses": SCHEDULE}, headers=headers)
    assert response.status_code == 500
    assert response.json() == {"error": "Failed to save schedule"}

    monkeypatch.undo()
    assert _strip_ids(ScheduleService().fetch_schedule(user["id"])) == SCHEDULE


def test_replace_reports_counts(register_user):
    user, _ = register_user()
    stats = ScheduleService().replace_schedule(user["id"], [{"title": "A", "meetings": [
        {"days": ["Mon"], "startTime": "08:00", "endTime": "09:00"},
        {"days": ["Tue"]},
    ]}])
    assert stats == {"courses": 1, "meetings": 1, "skipped_meetings": 1}


def test_day_helpers():
    assert normalize_days(["Sat", "Sun", "Sat"]) == ["Sat", "Sun"]
    assert normalize_days(None) == []
    assert decode_days("") == []
    assert decode_days("Mon,Fri") == ["Mon", "Fri"]


def test_times_with_seconds_are_stored_as_hh_mm(client, auth_headers):
    payload = [{"title": "Seminar", "meetings": [
        {"days": ["Thu"], "startTime": "09:00:00", "endTime": " 10:15:30 "},
    ]}]
    response = client.post("/api/schedule", json={"courses": payload}, headers=auth_headers)
    assert response.status_code == 200

    meeting = client.get("/api/schedule", headers=auth_headers).json()["courses"][0]["meetings"][0]
    assert (meeting["startTime"], meeting["endTime"]) == ("09:00", "10:15")
