"""Add exercise route - validation, date defaulting and the unknown-user regression."""

from datetime import timedelta
from uuid import uuid4

import pytest
from sqlalchemy import select

from exercise_tracker.core.exercise_log import format_calendar_date, utc_now
from exercise_tracker.models.exercise import Exercise


async def test_add_exercise_returns_projection(create_user, add_exercise):
    user = await create_user("alice")
    res = await add_exercise(user["id"], description="swim", duration=45, date="2020-01-15")
    assert res.status_code == 200
    assert res.json() == {
        "_id": user["id"],
        "username": "alice",
        "description": "swim",
        "duration": 45,
        "date": "Wed Jan 15 2020",
    }


@pytest.mark.parametrize("duration", [45, 0, "45"])
async def test_integer_durations_are_echoed(create_user, add_exercise, duration):
    user = await create_user("alice")
    res = await add_exercise(user["id"], duration=duration)
    assert res.status_code == 200
    assert res.json()["duration"] == int(duration)


@pytest.mark.parametrize("duration", [3.5, "abc"])
async def test_non_integer_duration_is_400(create_user, add_exercise, duration):
    user = await create_user("alice")
    res = await add_exercise(user["id"], duration=duration)
    assert res.status_code == 400
    assert "duration" in res.text


async def test_missing_date_defaults_to_now(create_user, add_exercise, test_db):
    user = await create_user("alice")
    before = utc_now()
    res = await add_exercise(user["id"])
    after = utc_now()
    assert res.status_code == 200
    assert res.json()["date"] in {format_calendar_date(before), format_calendar_date(after)}

    stored = (await test_db.execute(select(Exercise))).scalars().one()
    assert before - timedelta(seconds=1) <= stored.date <= after + timedelta(seconds=1)


async def test_form_encoded_exercise(client, create_user):
    user = await create_user("alice")
    res = await client.post("/api/exercise/add", data={
        "userId": user["id"], "description": "row", "duration": "20", "date": "2021-03-04",
    })
    assert res.status_code == 200
    assert res.json()["date"] == "Thu Mar 04 2021"


async def test_unknown_user_is_404_and_nothing_saved(add_exercise, test_db):
    res = await add_exercise(str(uuid4()))
    assert res.status_code == 404
    assert "not found" in res.text
    assert "description" not in res.text
    assert (await test_db.execute(select(Exercise))).scalars().all() == []


async def test_malformed_user_id_is_404(add_exercise):
    res = await add_exercise("12345")
    assert res.status_code == 404


async def test_missing_description_is_400(client, create_user):
    user = await create_user("alice")
    res = await client.post(
        "/api/exercise/add", json={"userId": user["id"], "duration": 10},
    )
    assert res.status_code == 400
    assert res.text == "description is required"


async def test_malformed_json_is_400(client):
    res = await client.post(
        "/api/exercise/add", content="{nope",
        headers={"content-type": "application/json"},
    )
    assert res.status_code == 400


async def test_duration_beyond_integer_range_is_400(create_user, add_exercise):
    user = await create_user("alice")
    res = await add_exercise(user["id"], duration=10 ** 20)
    assert res.status_code == 400
    assert res.text.startswith("duration:")


async def test_unknown_user_wins_over_invalid_fields(add_exercise):
    res = await add_exercise(str(uuid4()), duration="abc")
    assert res.status_code == 404


async def test_missing_user_id_is_400(client):
    res = await client.post(
        "/api/exercise/add", json={"description": "run", "duration": 10},
    )
    assert res.status_code == 400
    assert res.text == "userId is required"


async def test_year_only_date_is_first_of_january(create_user, add_exercise):
    user = await create_user("alice")
    res = await add_exercise(user["id"], date="2020")
    assert res.status_code == 200
    assert res.json()["date"] == "Wed Jan 01 2020"
