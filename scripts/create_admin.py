"""Register an administrator account from the command line."""

from __future__ import annotations

import argparse
import getpass
import sys

from restcase.auth import AdminAuthService, AdminConflictError, AdminValidationError
from restcase.config import load_config
from restcase.exceptions import InfrastructureError
from restcase.logging import configure_logging


def create_admin(username: str, password: str) -> str:
    """Register ``username`` and return the stored username."""
    config = load_config()
    configure_logging(config.log_level)
    service = AdminAuthService.from_config(config)
    return service.register(username, password).username


def parse_args(argv: list[str]) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Create an administrator account.")
    parser.add_argument("--username", required=True, help="Login name of the new admin.")
    parser.add_argument(
        "--password",
        help="Password for the new admin; prompted for when omitted.",
    )
    return parser.parse_args(argv)


def main(argv: list[str] | None = None) -> int:
    args = parse_args(sys.argv[1:] if argv is None else argv)
    password = args.password or getpass.getpass("Password: ")
    try:
        username = create_admin(args.username, password)
    except (AdminValidationError, AdminConflictError) as exc:
        print(f"cannot create admin: {exc}", file=sys.stderr)
        return 1
    except InfrastructureError as exc:
        print(f"create admin failed: {exc}", file=sys.stderr)
        return 2
    except ValueError as exc:
        print(f"invalid configuration: {exc}", file=sys.stderr)
        return 2
    print(f"Admin '{username}' created.")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
