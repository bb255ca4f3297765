"""
CLI entry point

Operational commands around the API and the notification worker.
"""

from __future__ import annotations

import argparse
import asyncio
import sys
from typing import Optional

from hiretrack import __version__
from hiretrack.config.logging import configure_logging
from hiretrack.config.settings import Settings, get_settings
from hiretrack.domain.application import Role


def create_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="hiretrack",
        description="HireTrack - job application pipeline backend",
    )
    parser.add_argument("--version", "-v", action="store_true", help="Show version")

    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    subparsers.add_parser("init-db", help="Create database tables")

    subparsers.add_parser("worker", help="Run the notification worker")

    serve_parser = subparsers.add_parser("serve", help="Run the HTTP API")
    serve_parser.add_argument("--host", default="0.0.0.0")
    serve_parser.add_argument("--port", type=int, default=8000)

    email_parser = subparsers.add_parser("send-test-email", help="Queue a test notification")
    email_parser.add_argument("to", help="Recipient address")
    email_parser.add_argument("--subject", default="Test email")
    email_parser.add_argument("--body", default="This is a test email")

    token_parser = subparsers.add_parser("token", help="Issue a development access token")
    token_parser.add_argument("user_id", type=int)
    token_parser.add_argument("--role", default=Role.CANDIDATE.value, choices=[r.value for r in Role])
    token_parser.add_argument("--email")

    return parser


def run_cli(args: Optional[list] = None, settings: Optional[Settings] = None) -> int:
    """
    Run the CLI.

    Returns:
        Process exit code
    """
    parser = create_parser()
    parsed = parser.parse_args(args)

    if parsed.version:
        print(f"HireTrack v{__version__}")
        return 0

    if not parsed.command:
        parser.print_help()
        return 0

    settings = settings or get_settings()
    configure_logging(settings.logging)

    try:
        if parsed.command == "init-db":
            from hiretrack.infrastructure.stores.application_store import SqlAlchemyApplicationStore

            store = SqlAlchemyApplicationStore(settings.database.url or None, auto_create_schema=True)
            print(f"Database ready: {store.db_url}")
            store.close()

        elif parsed.command == "worker":
            from arq.worker import run_worker
            from hiretrack.infrastructure.queue.arq_worker import WorkerSettings

            run_worker(WorkerSettings)

        elif parsed.command == "serve":
            import uvicorn

            uvicorn.run("hiretrack.api.main:app", host=parsed.host, port=parsed.port)

        elif parsed.command == "send-test-email":
            job_id = asyncio.run(_send_test_email(settings, parsed.to, parsed.subject, parsed.body))
            print(f"Test job added to queue: {job_id}")

        elif parsed.command == "token":
            from hiretrack.infrastructure.auth import TokenService

            tokens = TokenService.from_config(settings.auth)
            print(tokens.issue_for(parsed.user_id, Role(parsed.role), parsed.email))

        return 0

    except Exception as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1


async def _send_test_email(settings: Settings, to: str, subject: str, body: str) -> str:
    from hiretrack.application.services import NotificationDispatcher
    from hiretrack.infrastructure.queue.arq_queue import ArqNotificationQueue, redis_settings_from

    queue = ArqNotificationQueue(redis_settings_from(settings.redis), queue_name=settings.queue.queue_name)
    try:
        return await NotificationDispatcher(queue).enqueue(to, subject, body)
    finally:
        await queue.close()


def main() -> None:
    sys.exit(run_cli())


if __name__ == "__main__":
    main()
