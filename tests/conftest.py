"""Configuration for pytest."""

import itertools
import json
import sys
from pathlib import Path
from typing import Any, Callable, Dict, List, Optional, Tuple
from urllib.parse import urlsplit

import pytest
import requests

# Add the src directory to the Python path automatically for all tests
project_root = Path(__file__).parent.parent
src_dir = project_root / "src"
sys.path.insert(0, str(src_dir))

from vilkas_harness.client import VilkasClient  # noqa: E402

BASE_URL = "http://vilkas.test:3000"


def make_response(status_code: int, payload: Any = None, url: str = "") -> requests.Response:
    """Build a real ``requests.Response`` carrying ``payload`` as JSON."""
    response = requests.Response()
    response.status_code = status_code
    response.url = url
    response.encoding = "utf-8"
    if payload is None:
        response._content = b""
    else:
        response._content = json.dumps(payload).encode("utf-8")
        response.headers["Content-Type"] = "application/json"
    return response


class RecordedCall:
    """A request seen by :class:`FakeVilkasSession`."""

    def __init__(self, method: str, path: str, params: Optional[Dict[str, str]],
                 body: Optional[Dict[str, Any]], headers: Optional[Dict[str, str]],
                 timeout: Optional[float]) -> None:
        self.method = method
        self.path = path
        self.params = params or {}
        self.body = body
        self.headers = headers or {}
        self.timeout = timeout

    @property
    def key(self) -> Tuple[str, str]:
        return self.method, self.path

    def __repr__(self) -> str:
        return f"RecordedCall({self.method} {self.path})"


class FakeVilkasSession:
    """In-memory stand-in for the ``requests.Session`` talking to Vilkas.

    Items are stored per partition; recommendations list the other items of
    the partition in creation order. Every request is recorded in ``calls``.
    """

    def __init__(self) -> None:
        self.calls: List[RecordedCall] = []
        self.items: Dict[Tuple[str, str], Dict[str, Any]] = {}
        self.model_weights: Dict[str, float] = {"near": 1.5, "views": 0.25, "bias": -0.5}
        self.recommend_items: Optional[Callable[[Dict[str, Any]], List[Tuple[str, float]]]] = None
        self.closed = False
        self._failures: Dict[Tuple[str, str, int], int] = {}
        self._overrides: Dict[Tuple[str, str], Tuple[int, Any]] = {}
        self._rec_ids = itertools.count(1)

    # -- test controls -------------------------------------------------------

    def fail_on(self, method: str, path: str, occurrence: int = 1, status_code: int = 500) -> None:
        """Answer the ``occurrence``-th ``method path`` request with ``status_code``."""
        self._failures[(method, path, occurrence)] = status_code

    def respond(self, method: str, path: str, status_code: int, payload: Any = None) -> None:
        """Answer every ``method path`` request with a fixed response."""
        self._overrides[(method, path)] = (status_code, payload)

    def calls_to(self, method: str, path: str) -> List[RecordedCall]:
        return [call for call in self.calls if call.key == (method, path)]

    # -- requests.Session surface -------------------------------------------

    def request(self, method: str, url: str, params: Optional[Dict[str, str]] = None,
                json: Optional[Dict[str, Any]] = None, headers: Optional[Dict[str, str]] = None,
                timeout: Optional[float] = None) -> requests.Response:
        path = urlsplit(url).path
        call = RecordedCall(method, path, params, json, headers, timeout)
        self.calls.append(call)

        occurrence = len(self.calls_to(method, path))
        status_code = self._failures.get((method, path, occurrence))
        if status_code is not None:
            return make_response(status_code, {"_err": True}, url)
        if (method, path) in self._overrides:
            status_code, payload = self._overrides[(method, path)]
            return make_response(status_code, payload, url)
        return self._handle(call, url)

    def close(self) -> None:
        self.closed = True

    # -- endpoints -----------------------------------------------------------

    def _handle(self, call: RecordedCall, url: str) -> requests.Response:
        if call.key == ("POST", "/api/items"):
            body = dict(call.body or {})
            self.items[(body["part"], body["id"])] = body
            return make_response(204, url=url)
        if call.key == ("GET", "/api/items"):
            stored = self.items.get((call.params["part"], call.params["id"]))
            if stored is None:
                return make_response(200, {"result": None}, url)
            return make_response(200, {"result": dict(stored, popularity=0.0)}, url)
        if call.key == ("DELETE", "/api/items"):
            self.items.pop((call.body["part"], call.body["id"]), None)
            return make_response(204, url=url)
        if call.key == ("GET", "/api/view"):
            return make_response(204, url=url)
        if call.key == ("POST", "/api/recommend"):
            return make_response(200, {"result": self._recommend(call.body or {})}, url)
        if call.method == "POST" and call.path.endswith("/train"):
            return make_response(204, url=url)
        if call.method == "GET" and call.path.startswith("/api/model/"):
            return make_response(200, {"result": self.model_weights}, url)
        return make_response(404, url=url)

    def _recommend(self, body: Dict[str, Any]) -> Dict[str, Any]:
        if self.recommend_items is not None:
            items = self.recommend_items(body)
        else:
            ids = [
                item_id
                for (part, item_id) in self.items
                if part == body["part"] and item_id != body["current"]
            ]
            if body.get("whitelist") is not None:
                ids = [item_id for item_id in ids if item_id in body["whitelist"]]
            ids = ids[: body["count"]]
            items = [(item_id, 1.0 - i / 100.0) for i, item_id in enumerate(ids)]
        return {"id": f"rec-{next(self._rec_ids)}", "items": [list(pair) for pair in items]}


@pytest.fixture
def fake_session() -> FakeVilkasSession:
    """Fresh in-memory Vilkas service."""
    return FakeVilkasSession()


@pytest.fixture
def client(fake_session: FakeVilkasSession) -> VilkasClient:
    """Client wired to the fake service."""
    return VilkasClient(BASE_URL, session=fake_session)


@pytest.fixture
def sequential_ids() -> Callable[[], str]:
    """Deterministic id factory producing item-0, item-1, ..."""
    counter = itertools.count()
    return lambda: f"item-{next(counter)}"
