"""Shared pytest fixtures for funcdoc tests."""

import textwrap

import pytest

from funcdoc.extractors import extract_functions


@pytest.fixture
def extract_one():
    """
    Extract exactly one function from (dedented) source text.

    Example:
        def test_something(extract_one):
            func = extract_one('''
                def add(a, b):
                    return a + b
            ''')
    """

    def _extract(source: str, file_name: str = "example.py"):
        functions = extract_functions(textwrap.dedent(source).strip("\n") + "\n", file_name)
        assert len(functions) == 1, [f.name for f in functions]
        return functions[0]

    return _extract


class FakeResponse:
    """Minimal stand-in for requests.Response."""

    def __init__(self, status_code=200, payload=None, text=""):
        self.status_code = status_code
        self._payload = payload
        self.text = text

    @property
    def ok(self):
        return self.status_code < 400

    def json(self):
        if self._payload is None:
            raise ValueError("No JSON body")
        return self._payload


class FakeSession:
    """Records POST calls and replays a canned response or error."""

    def __init__(self, response=None, error=None):
        self.response = response
        self.error = error
        self.calls = []

    def post(self, url, **kwargs):
        self.calls.append((url, kwargs))
        if self.error is not None:
            raise self.error
        return self.response


def chat_reply(content: str) -> dict:
    """Chat completions response body carrying ``content``."""
    return {"choices": [{"message": {"role": "assistant", "content": content}}]}


@pytest.fixture
def fake_session():
    """
    Factory for FakeSession objects.

    Example:
        session = fake_session(content='{"title": ...}')
        session = fake_session(status_code=500, text="boom")
        session = fake_session(error=requests.ConnectionError("down"))
    """

    def _make(content=None, status_code=200, text="", payload=None, error=None):
        if content is not None:
            payload = chat_reply(content)
        return FakeSession(FakeResponse(status_code, payload, text), error=error)

    return _make
