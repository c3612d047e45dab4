"""
Pytest configuration and shared fixtures.
"""

import os

import pytest

from fleakr import method_call
from fleakr.method_call import parse_response

FIXTURES = os.path.join(os.path.dirname(__file__), "fixtures")


def read_fixture(name):
    with open(os.path.join(FIXTURES, name + ".xml"), "rb") as f:
        return f.read()


class FakeApi:
    """Stands in for method_call.call_api and answers from the XML fixtures.

    By default a call to 'people.getInfo' is answered with
    fixtures/people.getInfo.xml; respond() maps a method to another
    fixture and fail() makes it raise.
    """

    def __init__(self):
        self.calls = []
        self.fixtures = {}
        self.errors = {}

    def respond(self, method, fixture):
        self.fixtures[method] = fixture

    def fail(self, method, error):
        self.errors[method] = error

    def methods(self):
        return [method for method, _ in self.calls]

    def __call__(self, method, **params):
        self.calls.append((method, params))
        if method in self.errors:
            raise self.errors[method]
        return parse_response(read_fixture(self.fixtures.get(method, method)))


@pytest.fixture
def api(monkeypatch):
    """Replace the remote call with a FakeApi."""
    fake = FakeApi()
    monkeypatch.setattr(method_call, "call_api", fake)
    return fake


@pytest.fixture
def document():
    """Load a fixture as a parsed response document."""
    def load(name):
        return parse_response(read_fixture(name))
    return load


@pytest.fixture
def keys(monkeypatch):
    """Configure an API key without a shared secret or token."""
    monkeypatch.setattr(method_call, "API_KEY", "key")
    monkeypatch.setattr(method_call, "SHARED_SECRET", None)
    monkeypatch.setattr(method_call, "AUTH_TOKEN", None)
