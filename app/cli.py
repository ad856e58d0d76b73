"""Operator commands for the PathX jobs and users collections.

Examples:
    python -m app.cli seed
    python -m app.cli seed --clear-first
    python -m app.cli clear --seeded-only --yes
    python -m app.cli promote-admin --email me@example.com
    python -m app.cli set-role --uid abc123 --role admin --email me@example.com
    python -m app.cli promote-user --target-email new@example.com --email me@example.com
    python -m app.cli list-admins --email me@example.com
    python -m app.cli show-sample
"""
import argparse
import asyncio
import getpass
import json
import logging
import os
import sys

from admin.promote import promote_current_user_to_super_admin
from admin.roles import is_admin, list_admins, promote_user_by_email, set_user_role
from clients.auth_client import AuthClient, Session
from clients.firestore_client import FirestoreClient
from logging_config import setup_logging
from seeding.sample_jobs import SAMPLE_JOBS
from seeding.service import clear_jobs, seed_jobs
from seeding.stats import summarize_jobs
from utils.constants import ALLOWED_ROLES, ALLOWED_WRITE_MODES
from utils.sentry import init_sentry

logger = logging.getLogger(__name__)


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    p = argparse.ArgumentParser(prog="pathx-admin", description="Seed jobs and manage admin roles.")
    sub = p.add_subparsers(dest="command", required=True)

    seed = sub.add_parser("seed", help="Insert the sample jobs.")
    seed.add_argument("--clear-first", action="store_true", help="Clear the jobs collection before seeding.")
    seed.add_argument("--write-mode", choices=sorted(ALLOWED_WRITE_MODES), default=None)

    clear = sub.add_parser("clear", help="Delete jobs from the jobs collection.")
    clear.add_argument("--seeded-only", action="store_true", help="Only delete jobs carrying the seed marker.")
    clear.add_argument("--yes", action="store_true", help="Skip the interactive confirmation.")
    clear.add_argument("--write-mode", choices=sorted(ALLOWED_WRITE_MODES), default=None)

    for name, help_text in (
        ("promote-admin", "Make the signed-in user a Super Admin."),
        ("set-role", "Set another user's role (Super Admins only)."),
        ("promote-user", "Make the user with the given email a Super Admin (Super Admins only)."),
        ("list-admins", "List users with an admin role (admins only)."),
    ):
        cmd = sub.add_parser(name, help=help_text)
        cmd.add_argument("--email", default=os.getenv("FIREBASE_ADMIN_EMAIL"))
        cmd.add_argument("--password", default=os.getenv("FIREBASE_ADMIN_PASSWORD"))
        cmd.add_argument("--id-token", default=os.getenv("FIREBASE_ID_TOKEN"))
        if name == "set-role":
            cmd.add_argument("--uid", required=True, help="Target user id.")
            cmd.add_argument("--role", required=True, choices=sorted(ALLOWED_ROLES))
        if name == "promote-user":
            cmd.add_argument("--target-email", required=True, help="Email stored on the target user's profile.")

    sub.add_parser("show-sample", help="Print the sample jobs and their summary.")

    return p.parse_args(argv)


def open_store(token: str | None = None) -> FirestoreClient:
    return FirestoreClient.from_env(token=token)


async def resolve_session(args: argparse.Namespace) -> Session | None:
    password = args.password
    if args.email and not password and not args.id_token and sys.stdin.isatty():
        password = getpass.getpass(f"Password for {args.email}: ")
    return await AuthClient().current_session(id_token=args.id_token, email=args.email, password=password)


def confirm_clear(seeded_only: bool) -> bool:
    scope = "all seeded jobs" if seeded_only else "ALL jobs"
    answer = input(f"Are you sure you want to delete {scope} from Firestore? [y/N] ")
    return answer.strip().lower() in {"y", "yes"}


async def run_seed(args: argparse.Namespace) -> int:
    async with open_store() as store:
        result = await seed_jobs(store, clear_first=args.clear_first, write_mode=args.write_mode)
    if result.success:
        logger.info("Successfully seeded %s jobs!", result.count)
        return 0
    logger.error("Error: %s", result.error)
    return 1


async def run_clear(args: argparse.Namespace) -> int:
    if not args.yes and not confirm_clear(args.seeded_only):
        logger.info("Clear cancelled")
        return 1
    async with open_store() as store:
        result = await clear_jobs(store, seeded_only=args.seeded_only, write_mode=args.write_mode)
    if result.success:
        logger.info("Cleared %s jobs!", result.count)
        return 0
    logger.error("Error: %s", result.error)
    return 1


async def run_promote(args: argparse.Namespace) -> int:
    session = await resolve_session(args)
    async with open_store(token=session.id_token if session else None) as store:
        result = await promote_current_user_to_super_admin(store, session)
    return 0 if result.success else 1


async def run_set_role(args: argparse.Namespace) -> int:
    session = await resolve_session(args)
    async with open_store(token=session.id_token if session else None) as store:
        result = await set_user_role(store, session, args.uid, args.role)
    if not result.success:
        logger.error("Error: %s", result.message)
        return 1
    return 0


async def run_promote_user(args: argparse.Namespace) -> int:
    session = await resolve_session(args)
    async with open_store(token=session.id_token if session else None) as store:
        result = await promote_user_by_email(store, session, args.target_email)
    if not result.success:
        logger.error("Error: %s", result.message)
        return 1
    return 0


async def run_list_admins(args: argparse.Namespace) -> int:
    session = await resolve_session(args)
    async with open_store(token=session.id_token if session else None) as store:
        if not await is_admin(store, session):
            logger.error("Error: only admins can list admins")
            return 1
        admins = await list_admins(store)
    print(json.dumps(admins, indent=2))
    return 0


def run_show_sample(args: argparse.Namespace) -> int:  # noqa: ARG001
    print(json.dumps({"jobs": SAMPLE_JOBS, "summary": summarize_jobs(SAMPLE_JOBS)}, indent=2))
    return 0


COMMANDS = {
    "seed": run_seed,
    "clear": run_clear,
    "promote-admin": run_promote,
    "set-role": run_set_role,
    "promote-user": run_promote_user,
    "list-admins": run_list_admins,
}


def main(argv: list[str] | None = None) -> int:
    args = parse_args(argv)
    setup_logging()
    init_sentry()

    if args.command == "show-sample":
        return run_show_sample(args)

    try:
        return asyncio.run(COMMANDS[args.command](args))
    except KeyboardInterrupt:
        logger.warning("Interrupted")
        return 130
    except Exception:
        logger.exception("Command %s failed", args.command)
        return 1


if __name__ == "__main__":
    sys.exit(main())
