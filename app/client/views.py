"""
Terminal views: login prompt and counter dashboard.
"""
import getpass
import logging
from typing import Callable

from app.client.api_invoker import ApiInvoker
from app.client.state import CounterState, CounterStats, login
from app.client.storage import LocalStore

logger = logging.getLogger(__name__)

PROGRESS_WIDTH = 30

HELP_LINE = "[Enter/+] count   [r] reset   [q] log out"


def render_dashboard(stats: CounterStats, syncing: bool = False) -> str:
    filled = int(PROGRESS_WIDTH * stats.batch_progress / stats.batch_size)
    bar = "#" * filled + "-" * (PROGRESS_WIDTH - filled)
    lines = [
        "Today's Count",
        f"  {stats.count:,}",
        f"Synced sets of {stats.batch_size}: {stats.completed_batches}",
        f"Sync progress:   {stats.batch_progress}/{stats.batch_size} [{bar}]",
    ]
    if syncing:
        lines.append("Syncing to server...")
    return "\n".join(lines)


def login_view(
    api: ApiInvoker,
    store: LocalStore,
    input_fn: Callable[[str], str] = input,
    password_fn: Callable[[str], str] = getpass.getpass,
    output: Callable[[str], None] = print,
) -> bool:
    email = input_fn("Email: ").strip()
    password = password_fn("Password: ")
    error = login(api, store, email, password)
    if error:
        output(f"! {error}")
        return False
    return True


def dashboard_view(
    state: CounterState,
    input_fn: Callable[[str], str] = input,
    output: Callable[[str], None] = print,
) -> None:
    # The batch request blocks, so show the syncing line before it is sent
    state.on_sync_start = lambda s: output(render_dashboard(s.stats(), syncing=True))
    state.load()
    output(render_dashboard(state.stats()))
    output(HELP_LINE)

    while True:
        try:
            command = input_fn("> ").strip().lower()
        except EOFError:
            return

        if command in ("", "+"):
            state.increment()
        elif command == "r":
            answer = input_fn("Reset counter to 0? [y/N] ").strip().lower()
            if answer != "y":
                continue
            state.reset()
        elif command == "q":
            state.logout()
            output("Logged out.")
            return
        else:
            output(HELP_LINE)
            continue

        output(render_dashboard(state.stats(), state.syncing))


def run(api: ApiInvoker, store: LocalStore, input_fn=input, password_fn=getpass.getpass, output=print) -> None:
    """Show the login view until it succeeds, then the dashboard."""
    state = CounterState(api, store)
    while not state.user_id:
        try:
            login_view(api, store, input_fn, password_fn, output)
        except EOFError:
            return
    dashboard_view(state, input_fn, output)
