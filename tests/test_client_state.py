"""
Tests for the client state manager against a fake counter API.
"""
import json

import httpx
import pytest

from app.client.api_invoker import ApiInvoker, build_url
from app.client.state import CounterState, NotLoggedInError, login
from app.client.storage import LocalStore


class FakeCounterServer:
    """Minimal stand-in for the API: counts calls and keeps a server count."""

    def __init__(self, server_count=0, fail_paths=()):
        self.server_count = server_count
        self.fail_paths = set(fail_paths)
        self.calls = []

    def __call__(self, request: httpx.Request) -> httpx.Response:
        path = request.url.path
        self.calls.append((request.method, path, request.headers.get("x-user-id")))

        if path in self.fail_paths:
            raise httpx.ConnectError("connection refused", request=request)

        if path == "/login":
            body = json.loads(request.content)
            if body == {"email": "a@example.com", "password": "secret"}:
                return httpx.Response(200, json={"userId": 1, "access_token": "t", "token_type": "bearer"})
            return httpx.Response(401, json={"detail": "Invalid credentials"})
        if path == "/counter" and request.method == "GET":
            return httpx.Response(200, json={"count": self.server_count})
        if path == "/counter" and request.method == "POST":
            self.server_count += 1
            return httpx.Response(200, json={"count": self.server_count})
        if path == "/counter/reset":
            self.server_count = 0
            return httpx.Response(200, json={"message": "Counter reset successfully"})
        if path == "/logout":
            return httpx.Response(200, json={"message": "Logged out"})
        return httpx.Response(404, json={"detail": "Not Found"})

    def count_calls(self, method, path):
        return sum(1 for m, p, _ in self.calls if (m, p) == (method, path))


def make_state(server, store=None):
    api = ApiInvoker("http://counter.test", transport=httpx.MockTransport(server))
    store = store or LocalStore(path=None)
    return CounterState(api, store), store


@pytest.fixture
def server():
    return FakeCounterServer()


@pytest.fixture
def logged_in_store():
    store = LocalStore(path=None)
    store.set_item("userId", 1)
    return store


def test_build_url_avoids_double_slashes():
    assert build_url("http://h:5050/", "/counter") == "http://h:5050/counter"
    assert build_url("http://h:5050", "counter/reset") == "http://h:5050/counter/reset"


def test_login_stores_user_id(server):
    state, store = make_state(server)

    error = login(state.api, store, "a@example.com", "secret")

    assert error is None
    assert store.get_item("userId") == "1"


@pytest.mark.parametrize("email,password", [
    ("a@example.com", "wrong"),
    ("", "secret"),
    ("a@example.com", ""),
])
def test_login_failure_is_undifferentiated(server, email, password):
    state, store = make_state(server)

    error = login(state.api, store, email, password)

    assert error == "Login failed. Check your email and password."
    assert store.get_item("userId") is None


def test_login_network_error():
    server = FakeCounterServer(fail_paths={"/login"})
    state, store = make_state(server, LocalStore(path=None))

    assert login(state.api, store, "a@example.com", "secret") is not None


def test_load_keeps_local_when_ahead(logged_in_store):
    server = FakeCounterServer(server_count=1)
    logged_in_store.set_item("localCount", 215)
    state, _ = make_state(server, logged_in_store)

    assert state.load() == 215
    assert logged_in_store.get_item("localCount") == "215"


def test_load_takes_server_when_ahead(logged_in_store):
    server = FakeCounterServer(server_count=3)
    logged_in_store.set_item("localCount", 2)
    state, _ = make_state(server, logged_in_store)

    assert state.load() == 3


def test_load_failure_keeps_local(logged_in_store):
    server = FakeCounterServer(fail_paths={"/counter"})
    logged_in_store.set_item("localCount", 40)
    state, _ = make_state(server, logged_in_store)

    assert state.load() == 40
    assert state.loading is False


def test_requires_login(server):
    state, _ = make_state(server)

    with pytest.raises(NotLoggedInError):
        state.load()
    with pytest.raises(NotLoggedInError):
        state.increment()


def test_increment_is_local_until_batch_completes(server, logged_in_store):
    state, _ = make_state(server, logged_in_store)

    for _ in range(107):
        state.increment()

    assert state.local_count == 107
    assert server.count_calls("POST", "/counter") == 0


def test_one_server_increment_per_batch(server, logged_in_store):
    state, _ = make_state(server, logged_in_store)

    for _ in range(108):
        state.increment()

    assert state.local_count == 108
    assert server.count_calls("POST", "/counter") == 1
    assert server.server_count == 1
    assert logged_in_store.get_item("lastSyncedCount") == "108"
    assert state.syncing is False

    for _ in range(108):
        state.increment()

    assert server.count_calls("POST", "/counter") == 2
    # Server tracks batches, client tracks clicks
    assert server.server_count == 2
    assert state.local_count == 216


def test_sync_sends_identity_header(server, logged_in_store):
    state, _ = make_state(server, logged_in_store)
    logged_in_store.set_item("localCount", 107)

    state.increment()

    assert ("POST", "/counter", "1") in server.calls


def test_failed_sync_keeps_local_count(logged_in_store):
    server = FakeCounterServer(fail_paths={"/counter"})
    state, _ = make_state(server, logged_in_store)
    logged_in_store.set_item("localCount", 107)

    assert state.increment() == 108
    assert logged_in_store.get_item("lastSyncedCount") is None
    assert state.syncing is False


def test_reset_zeroes_local_and_server(server, logged_in_store):
    server.server_count = 2
    logged_in_store.set_item("localCount", 250)
    state, _ = make_state(server, logged_in_store)

    state.reset()

    assert state.local_count == 0
    assert server.server_count == 0


def test_reset_failure_is_not_rolled_back(logged_in_store):
    server = FakeCounterServer(fail_paths={"/counter/reset"})
    logged_in_store.set_item("localCount", 250)
    state, _ = make_state(server, logged_in_store)

    state.reset()

    assert state.local_count == 0
    assert server.count_calls("POST", "/counter/reset") == 1


@pytest.mark.parametrize("fail_paths", [(), ("/logout",)])
def test_logout_always_clears_session(logged_in_store, fail_paths):
    server = FakeCounterServer(fail_paths=fail_paths)
    logged_in_store.set_item("localCount", 12)
    logged_in_store.set_item("lastSyncedCount", 0)
    state, _ = make_state(server, logged_in_store)

    state.logout()

    assert server.count_calls("POST", "/logout") == 1
    for key in ("userId", "localCount", "lastSyncedCount"):
        assert logged_in_store.get_item(key) is None


def test_stats(server, logged_in_store):
    logged_in_store.set_item("localCount", 215)
    state, _ = make_state(server, logged_in_store)

    stats = state.stats()

    assert stats.count == 215
    assert stats.completed_batches == 1
    assert stats.batch_progress == 107
    assert stats.batch_size == 108


def test_local_store_persists_to_file(tmp_path):
    path = tmp_path / "state.json"
    store = LocalStore(path)
    store.set_item("localCount", 5)
    store.set_item("userId", 1)
    store.remove_item("userId")

    reopened = LocalStore(path)

    assert reopened.get_int("localCount") == 5
    assert reopened.get_item("userId") is None


def test_local_store_ignores_corrupt_file(tmp_path):
    path = tmp_path / "state.json"
    path.write_text("{not json", encoding="utf-8")

    assert LocalStore(path).get_int("localCount") == 0


@pytest.mark.parametrize("content", ["[]", "null", '"x"', "42"])
def test_local_store_ignores_non_object_json(tmp_path, content):
    path = tmp_path / "state.json"
    path.write_text(content, encoding="utf-8")

    store = LocalStore(path)

    assert store.get_item("userId") is None
    store.set_item("localCount", 3)
    assert LocalStore(path).get_int("localCount") == 3


def test_local_store_ignores_unreadable_path(tmp_path):
    # A directory where the file should be cannot be read as text
    path = tmp_path / "state.json"
    path.mkdir()

    assert LocalStore(path).get_item("userId") is None


def test_sync_start_hook_runs_before_request(server, logged_in_store):
    seen = []

    def on_sync_start(state):
        seen.append((state.syncing, server.count_calls("POST", "/counter"), state.local_count))

    state, _ = make_state(server, logged_in_store)
    state.on_sync_start = on_sync_start
    logged_in_store.set_item("localCount", 106)

    state.increment()
    assert seen == []

    state.increment()
    assert seen == [(True, 0, 108)]
    assert state.syncing is False
