"""
Administrative CLI. Run from project root:
  python -m pushups.cli COMMAND [ARGS]
Examples:
  python -m pushups.cli add-user mait mait3242
  python -m pushups.cli set-challenge 2025-03-01 2025-03-31
  python -m pushups.cli set-rabbit bunny 3000

Every invocation applies pending schema migrations first.
"""
import argparse
import logging
import sys
from collections.abc import Sequence

from sqlalchemy.engine import Engine
from sqlalchemy.orm import Session

from pushups.core.config import get_settings
from pushups.core.database import create_session_factory, get_engine
from pushups.core.migrations import MigrationError, read_schema_version
from pushups.migrations import migrate
from pushups.services import challenge as challenge_service
from pushups.services import users as user_service
from pushups.services.errors import PushupError

logger = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="pushups",
        description="Pushup tracker administration (users, challenge, rabbits).",
    )
    sub = parser.add_subparsers(dest="command", metavar="COMMAND")

    p = sub.add_parser("add-user", help="Add a new user")
    p.add_argument("name")
    p.add_argument("secret")
    sub.add_parser("list-users", help="List all users")
    p = sub.add_parser("remove-user", help="Remove a user (keeps pushup history)")
    p.add_argument("name")

    p = sub.add_parser("set-challenge", help="Set challenge dates (YYYY-MM-DD, start < end)")
    p.add_argument("start")
    p.add_argument("end")
    sub.add_parser("clear-challenge", help="Unset challenge dates")
    p = sub.add_parser("set-title", help="Set challenge title (no title clears it)")
    p.add_argument("title", nargs="*")
    p = sub.add_parser("set-goal", help="Set the shared challenge goal (positive integer)")
    p.add_argument("goal")
    sub.add_parser("clear-goal", help="Unset the challenge goal")
    sub.add_parser("show-challenge", help="Show challenge settings and rabbits")

    p = sub.add_parser("set-rabbit", help="Make a user a rabbit pacer with a target")
    p.add_argument("name")
    p.add_argument("target")
    p = sub.add_parser("unset-rabbit", help="Turn a rabbit back into a regular user")
    p.add_argument("name")

    sub.add_parser("migrate", help="Apply pending schema migrations and show the version")
    sub.add_parser("help", help="Show this help")
    return parser


def _show_challenge(db: Session) -> None:
    challenge = challenge_service.get_challenge(db)
    print(f"Start: {challenge.start or '(unset)'}")
    print(f"End:   {challenge.end or '(unset)'}")
    print(f"Title: {challenge.title or '(unset)'}")
    print(f"Goal:  {challenge.goal if challenge.goal is not None else '(unset)'}")
    rabbits = [u for u in user_service.list_users(db) if u.is_rabbit]
    for rabbit in rabbits:
        print(f"Rabbit: {rabbit.name} (target {rabbit.rabbit_target})")


def _run_command(args: argparse.Namespace, db: Session) -> None:
    command = args.command
    if command == "add-user":
        user = user_service.add_user(db, args.name, args.secret)
        print(f"User {user.name} added.")
    elif command == "list-users":
        users = user_service.list_users(db)
        if not users:
            print("No users.")
        for user in users:
            suffix = f" (rabbit, target {user.rabbit_target})" if user.is_rabbit else ""
            print(f"{user.name}{suffix}")
    elif command == "remove-user":
        user_service.remove_user(db, args.name)
        print(f"User {user_service.normalize_name(args.name)} removed. Pushup history kept.")
    elif command == "set-challenge":
        window = challenge_service.set_challenge(db, args.start, args.end)
        print(f"Challenge set: {window.start} to {window.end}.")
    elif command == "clear-challenge":
        challenge_service.clear_challenge(db)
        print("Challenge dates cleared.")
    elif command == "set-title":
        title = " ".join(args.title).strip()
        challenge_service.set_title(db, title or None)
        print(f"Title set: {title}." if title else "Title cleared.")
    elif command == "set-goal":
        goal = challenge_service.set_goal(db, args.goal)
        print(f"Goal set: {goal}.")
    elif command == "clear-goal":
        challenge_service.clear_goal(db)
        print("Goal cleared.")
    elif command == "show-challenge":
        _show_challenge(db)
    elif command == "set-rabbit":
        user = user_service.set_rabbit(db, args.name, args.target)
        print(f"User {user.name} is now a rabbit with target {user.rabbit_target}.")
    elif command == "unset-rabbit":
        user = user_service.unset_rabbit(db, args.name)
        print(f"User {user.name} is no longer a rabbit.")


def configure_logging() -> None:
    logging.basicConfig(
        level=get_settings().LOG_LEVEL,
        format="%(asctime)s %(levelname)s %(name)s %(message)s",
        datefmt="%Y-%m-%dT%H:%M:%SZ",
    )


def main(argv: Sequence[str] | None = None, engine: Engine | None = None) -> int:
    configure_logging()
    parser = build_parser()
    args = parser.parse_args(argv)
    if args.command in (None, "help"):
        parser.print_help()
        return 0

    engine = engine if engine is not None else get_engine()
    try:
        migrate(engine)
    except MigrationError as e:
        logger.error("Cannot open database: %s", e.message)
        return 1
    if args.command == "migrate":
        print(f"Schema version: {read_schema_version(engine)}")
        return 0

    db = create_session_factory(engine)()
    try:
        _run_command(args, db)
        return 0
    except PushupError as e:
        print(f"Error: {e.message}", file=sys.stderr)
        return 1
    finally:
        db.close()


if __name__ == "__main__":
    sys.exit(main())
