import json
import sys

import pytest
import requests

from ksense_assessment.config import Settings


def _make_response(status=200, body=None, url="https://api.test/patients"):
    r = requests.Response()
    r.status_code = status
    r.url = url
    r.encoding = "utf-8"
    r._content = json.dumps(body if body is not None else {}).encode("utf-8")
    return r


class FakeSession:
    """Stands in for requests.Session, replaying queued outcomes in order.

    Each outcome is a requests.Response or an exception instance to raise.
    """

    def __init__(self, outcomes=None):
        self.headers = {}
        self.outcomes = list(outcomes or [])
        self.calls = []
        self.closed = False

    def _next(self, method, url, params=None, json=None, timeout=None):
        self.calls.append({"method": method, "url": url, "params": params, "json": json, "timeout": timeout})
        if not self.outcomes:
            raise AssertionError(f"unexpected {method} {url} {params}")
        outcome = self.outcomes.pop(0)
        if isinstance(outcome, Exception):
            raise outcome
        return outcome

    def get(self, url, params=None, timeout=None):
        return self._next("GET", url, params=params, timeout=timeout)

    def post(self, url, json=None, timeout=None):
        return self._next("POST", url, json=json, timeout=timeout)

    def close(self):
        self.closed = True


@pytest.fixture
def make_response():
    """Build a real requests.Response with a JSON body."""
    return _make_response


@pytest.fixture
def fake_session():
    return FakeSession


@pytest.fixture
def int_digit_limit():
    if not hasattr(sys, "set_int_max_str_digits"):
        pytest.skip("no int string conversion limit before Python 3.11")
    previous = sys.get_int_max_str_digits()
    sys.set_int_max_str_digits(4300)
    yield
    sys.set_int_max_str_digits(previous)


@pytest.fixture
def settings():
    return Settings(api_key="test-key", base_url="https://api.test")


@pytest.fixture
def sleeps():
    return []


@pytest.fixture
def fake_sleep(sleeps):
    return sleeps.append
