"""
Client for the Daily Counter API.

Keeps an optimistic local count on disk and pushes one server increment per
completed batch of local clicks.
"""
from app.client.api_invoker import ApiInvoker
from app.client.state import CounterState, NotLoggedInError, login
from app.client.storage import LocalStore

__all__ = [
    "ApiInvoker",
    "CounterState",
    "LocalStore",
    "NotLoggedInError",
    "login",
]
