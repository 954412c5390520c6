"""
Taskboard CLI — Bootstrap and management commands.

Commands:
- taskboard init         — Create DB tables, optionally seed a demo user
- taskboard run          — Start the Reflex dev server
- taskboard create-user  — Create an account from the command line
"""

from __future__ import annotations

import argparse
import getpass
import logging
from typing import Optional

logger = logging.getLogger("taskboard.cli")

DEMO_EMAIL = "demo@example.com"
DEMO_NAME = "Demo User"


def main(argv: Optional[list] = None) -> int:
    """Main CLI entry point."""
    parser = argparse.ArgumentParser(
        prog="taskboard",
        description="Taskboard — team task management",
    )
    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    # taskboard init
    init_parser = subparsers.add_parser("init", help="Create the database tables")
    init_parser.add_argument(
        "--config", default=None, help="Path to taskboard.yaml (default: auto-discover)"
    )
    init_parser.add_argument(
        "--demo", action="store_true", help=f"Also create {DEMO_EMAIL}"
    )
    init_parser.add_argument(
        "--demo-password", help="Demo user password (prompted if not provided)"
    )

    # taskboard run
    run_parser = subparsers.add_parser("run", help="Start the Reflex dev server")
    run_parser.add_argument("--host", default="0.0.0.0", help="Backend host to bind (default: 0.0.0.0)")
    run_parser.add_argument("--port", type=int, default=3000, help="Frontend port (default: 3000)")
    run_parser.add_argument("--backend-port", type=int, default=8000, help="Backend port (default: 8000)")
    run_parser.add_argument("--env", choices=["dev", "prod"], default="dev", help="Environment (default: dev)")

    # taskboard create-user
    user_parser = subparsers.add_parser("create-user", help="Create a user account")
    user_parser.add_argument("email", help="Login email")
    user_parser.add_argument("--name", help="Display name")
    user_parser.add_argument("--password", help="Password (prompted if not provided)")
    user_parser.add_argument(
        "--config", default=None, help="Path to taskboard.yaml (default: auto-discover)"
    )

    args = parser.parse_args(argv)

    if args.command == "init":
        return cmd_init(args)
    elif args.command == "run":
        return cmd_run(args)
    elif args.command == "create-user":
        return cmd_create_user(args)
    else:
        parser.print_help()
        return 0


def _connect(config_path: Optional[str], create_tables: bool) -> bool:
    """Load config and initialise the database. Prints the outcome."""
    from taskboard.db.session import init_db
    from taskboard.engine.config import load_config
    from taskboard.engine.errors import TaskboardConfigError

    try:
        config = load_config(config_path)
    except TaskboardConfigError as e:
        print(f"[ERROR] Failed to load config: {e.message}")
        return False

    try:
        init_db(config.database.url, create_tables=create_tables, echo=config.database.echo)
    except Exception as e:
        print(f"[ERROR] Database connection failed: {e}")
        return False
    return True


def _prompt_password(provided: Optional[str], label: str) -> Optional[str]:
    if provided:
        return provided
    password = getpass.getpass(f"{label} password: ")
    confirm = getpass.getpass("Confirm password: ")
    if password != confirm:
        print("[ERROR] Passwords do not match")
        return None
    return password


def _create_user(name: Optional[str], email: str, password: str) -> int:
    from taskboard.engine.errors import TaskboardError
    from taskboard.engine.security import get_auth_service

    try:
        user = get_auth_service().sign_up(name, email, password)
    except TaskboardError as e:
        print(f"[ERROR] {e.message}")
        return 1
    print(f"[OK] Created user {user.email} (id={user.id})")
    return 0


def cmd_init(args: argparse.Namespace) -> int:
    """
    Bootstrap the database:
    1. Load config from taskboard.yaml
    2. Create all tables (SQLAlchemy metadata.create_all)
    3. Optionally create the demo user
    """
    print("=" * 60)
    print("  Taskboard Initialization")
    print("=" * 60)

    if not _connect(args.config, create_tables=True):
        return 1
    print("[OK] Database tables created")

    if args.demo:
        password = _prompt_password(args.demo_password, "Demo user")
        if password is None:
            return 1
        return _create_user(DEMO_NAME, DEMO_EMAIL, password)
    return 0


def cmd_run(args: argparse.Namespace) -> int:
    """Start the Reflex dev server."""
    import subprocess

    print("Starting Taskboard (Reflex) server...")
    try:
        cmd = [
            "reflex", "run",
            "--backend-host", args.host,
            "--frontend-port", str(args.port),
            "--backend-port", str(args.backend_port),
            "--env", args.env,
        ]
        result = subprocess.run(cmd, check=True)
        return result.returncode
    except FileNotFoundError:
        print("[ERROR] 'reflex' command not found. Install: pip install reflex")
        return 1
    except subprocess.CalledProcessError as e:
        return e.returncode
    except KeyboardInterrupt:
        print("\nServer stopped.")
        return 0


def cmd_create_user(args: argparse.Namespace) -> int:
    if not _connect(args.config, create_tables=False):
        return 1
    password = _prompt_password(args.password, args.email)
    if password is None:
        return 1
    return _create_user(args.name, args.email, password)


if __name__ == "__main__":
    raise SystemExit(main())
