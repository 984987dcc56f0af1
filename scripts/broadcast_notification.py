"""Utility script to broadcast a notification to every registered user."""

from __future__ import annotations

import argparse

from app.application.use_cases.notifications import (
    InvalidNotificationError,
    NotificationStoreError,
    ResourceNotFoundError,
    announce_event,
    broadcast_notification,
)
from app.config import setup_logging
from app.infrastructure.database import SessionLocal, initialize_database


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    """Parse command line arguments for the broadcast."""

    parser = argparse.ArgumentParser(
        description="Broadcast a notification to every registered user.",
    )
    parser.add_argument("--title", help="Notification title")
    parser.add_argument("--message", help="Notification body")
    parser.add_argument(
        "--link",
        default=None,
        help="Optional deep link, for example /events/42",
    )
    parser.add_argument(
        "--event-id",
        type=int,
        default=None,
        help="Announce this event instead of sending a custom title and message",
    )
    args = parser.parse_args(argv)
    if args.event_id is None and (not args.title or not args.message):
        parser.error("--title and --message are required unless --event-id is given")
    return args


def main(argv: list[str] | None = None) -> None:
    """Broadcast using the provided command line arguments."""

    args = parse_args(argv)
    setup_logging()
    initialize_database()

    session = SessionLocal()
    try:
        if args.event_id is not None:
            notification = announce_event(session, event_id=args.event_id)
        else:
            notification = broadcast_notification(
                session,
                title=args.title,
                message=args.message,
                link=args.link,
            )
    except (InvalidNotificationError, ResourceNotFoundError) as exc:
        raise SystemExit(f"Notification not sent: {exc}") from exc
    except NotificationStoreError as exc:
        raise SystemExit(f"Notification not sent, database error: {exc}") from exc
    else:
        print(
            "Notification sent:\n"
            f"  ID: {notification.id}\n"
            f"  Title: {notification.title}\n"
            f"  Link: {notification.link or '-'}"
        )
    finally:
        session.close()


if __name__ == "__main__":
    main()
