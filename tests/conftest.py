"""Shared fixtures for greeter tests."""

import pytest

from greeter.main import create_app


@pytest.fixture
def app():
    return create_app({"TESTING": True})


@pytest.fixture
def client(app):
    return app.test_client()
