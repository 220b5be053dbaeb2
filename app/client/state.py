"""
Client-side counter state.

The local count is raw clicks; the server count is completed batches. They
are expected to differ: every time the local count reaches a multiple of
BATCH_SIZE the client asks the server for one ``+1``, it never sends its own
total. On load the larger of the two wins.
"""
import logging
from dataclasses import dataclass
from typing import Callable, Optional

from app.client.api_invoker import ApiInvoker
from app.client.storage import (
    LAST_SYNCED_COUNT_KEY,
    LOCAL_COUNT_KEY,
    SESSION_KEYS,
    USER_ID_KEY,
    LocalStore,
)
from app.core import config

logger = logging.getLogger(__name__)

COUNTER_ENDPOINT = "/counter"
RESET_ENDPOINT = "/counter/reset"
LOGIN_ENDPOINT = "/login"
LOGOUT_ENDPOINT = "/logout"

LOGIN_FAILED_MESSAGE = "Login failed. Check your email and password."


class NotLoggedInError(Exception):
    """No userId in local storage; the login view must run first."""


@dataclass
class CounterStats:
    count: int
    completed_batches: int
    batch_progress: int
    batch_size: int

    @property
    def progress_percent(self) -> float:
        return min(self.batch_progress / self.batch_size * 100, 100.0)


def login(api: ApiInvoker, store: LocalStore, email: str, password: str) -> Optional[str]:
    """
    Submit credentials and remember the returned userId.

    Returns:
        None on success, otherwise a message for the user. Missing fields,
        bad credentials and network failures all read the same.
    """
    if not email or not password:
        return LOGIN_FAILED_MESSAGE

    data = api.post(LOGIN_ENDPOINT, {"email": email, "password": password})
    if not data or "userId" not in data:
        return LOGIN_FAILED_MESSAGE

    store.set_item(USER_ID_KEY, data["userId"])
    logger.info(f"Logged in as user {data['userId']}")
    return None


class CounterState:
    def __init__(
        self,
        api: ApiInvoker,
        store: LocalStore,
        batch_size: int = config.BATCH_SIZE,
        on_sync_start: Optional[Callable[["CounterState"], None]] = None,
    ):
        self.api = api
        self.store = store
        self.batch_size = batch_size
        # Called with syncing=True, before the batch request goes out
        self.on_sync_start = on_sync_start
        self.syncing = False
        self.loading = True

    @property
    def user_id(self) -> Optional[str]:
        return self.store.get_item(USER_ID_KEY)

    @property
    def local_count(self) -> int:
        return self.store.get_int(LOCAL_COUNT_KEY)

    def _headers(self) -> dict:
        user_id = self.user_id
        if not user_id:
            raise NotLoggedInError("Not logged in")
        return {"x-user-id": user_id}

    def load(self) -> int:
        """
        Reconcile with the server: keep whichever of local and server count is larger.

        A failed request leaves the stored local count in place.
        """
        headers = self._headers()

        def on_success(data):
            local = self.local_count
            synced = data.get("count") or 0
            final = local if local >= synced else synced
            self.store.set_item(LOCAL_COUNT_KEY, final)

        def on_error(err):
            logger.error(f"Error loading counter: {err}")

        self.api.get(COUNTER_ENDPOINT, on_success, on_error, headers)
        self.loading = False
        return self.local_count

    def increment(self) -> int:
        """Add one click locally; push one server increment per completed batch."""
        headers = self._headers()
        current = self.local_count + 1
        self.store.set_item(LOCAL_COUNT_KEY, current)

        if current % self.batch_size == 0:
            self.syncing = True
            if self.on_sync_start:
                self.on_sync_start(self)

            def on_success(_data):
                # The server reply is its batch count; the local count stays as is
                self.store.set_item(LAST_SYNCED_COUNT_KEY, current)
                logger.info(f"Synced {self.batch_size} counts")
                self.syncing = False

            def on_error(err):
                logger.error(f"Error syncing: {err}")
                self.syncing = False

            self.api.post(COUNTER_ENDPOINT, {}, on_success, on_error, headers)

        return current

    def reset(self) -> None:
        """Zero the local count, then tell the server. A failed call is not rolled back."""
        headers = self._headers()
        self.store.set_item(LOCAL_COUNT_KEY, 0)
        self.api.post(
            RESET_ENDPOINT,
            {},
            lambda _data: logger.info("Counter reset"),
            lambda err: logger.error(f"Error resetting counter: {err}"),
            headers,
        )

    def logout(self) -> None:
        """Notify the server if possible, then always forget the local session."""
        user_id = self.user_id
        try:
            self.api.post(
                LOGOUT_ENDPOINT,
                {},
                lambda _data: logger.info("Logout successful"),
                lambda err: logger.error(f"Logout failed: {err}"),
                {"x-user-id": user_id} if user_id else None,
            )
        finally:
            for key in SESSION_KEYS:
                self.store.remove_item(key)

    def stats(self) -> CounterStats:
        count = self.local_count
        return CounterStats(
            count=count,
            completed_batches=count // self.batch_size,
            batch_progress=count % self.batch_size,
            batch_size=self.batch_size,
        )
