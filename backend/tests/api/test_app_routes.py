"""Unmatched routes and health checks."""

import pytest


@pytest.mark.parametrize("method, path", [
    ("GET", "/nowhere"),
    ("GET", "/api/exercise"),
    ("POST", "/api/exercise/log"),
    ("GET", "/api/exercise/add"),
])
async def test_undefined_route_is_404_not_found(client, method, path):
    res = await client.request(method, path)
    assert res.status_code == 404
    assert res.text == "not found"


async def test_liveness_check(client):
    res = await client.get("/api/v1/health/")
    assert res.status_code == 200
    assert res.json()["status"] == "healthy"


async def test_readiness_check_with_database(client):
    res = await client.get("/api/v1/health/ready")
    assert res.status_code == 200
    assert res.json()["checks"] == {"database": "healthy"}


def test_error_handlers_cover_domain_http_and_unexpected_failures():
    from starlette.exceptions import HTTPException as StarletteHTTPException

    from exercise_tracker.core.errors import ExerciseTrackerError
    from exercise_tracker.main import app

    for exc_type in (ExerciseTrackerError, StarletteHTTPException, Exception):
        assert exc_type in app.exception_handlers
