"""
Run the terminal client: python -m app.client [--api-url URL] [--storage PATH]
"""
import argparse

from app.client.api_invoker import ApiInvoker
from app.client.storage import DEFAULT_STORAGE_PATH, LocalStore
from app.client.views import run
from app.core import config
from app.core.logging_config import setup_logging


def main(argv=None):
    parser = argparse.ArgumentParser(description="Daily counter terminal client")
    parser.add_argument("--api-url", default=config.COUNTER_API_URL, help="Counter API base URL")
    parser.add_argument("--storage", default=str(DEFAULT_STORAGE_PATH), help="Local state file")
    parser.add_argument("--log-level", default="WARNING")
    args = parser.parse_args(argv)

    setup_logging(args.log_level, log_dir=None)
    with ApiInvoker(args.api_url) as api:
        run(api, LocalStore(args.storage))


if __name__ == "__main__":
    main()
