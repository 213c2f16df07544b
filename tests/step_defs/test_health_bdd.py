"""
BDD step definitions for health feature (pytest-bdd).
Challenge: Express requirements in Gherkin; map to HTTP calls.
"""

import pytest
from fastapi.testclient import TestClient
from pytest_bdd import parsers, scenarios, then, when

from nexar.main import app

# Load all scenarios from the feature file
scenarios("../features/health.feature")


@pytest.fixture
def response():
    """Store last response for then steps."""
    return {}


@when(parsers.parse('I request "GET" "{path}"'))
def request_path(response, path):
    with TestClient(app) as client:
        r = client.get(path)
        response["status"] = r.status_code
        response["body"] = r.json()


@then(parsers.parse("the response status should be {status:d}"))
def status_is(response, status):
    assert response["status"] == status


@then(parsers.parse('the response body should have "{key}" equals "{value}"'))
def body_field_equals(response, key, value):
    assert response["body"].get(key) == value
