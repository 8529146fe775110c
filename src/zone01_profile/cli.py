"""
CLI entry point for Zone01 Profile Dashboard.

PURPOSE: Command-line interface for the dashboard and terminal sign-in.

USAGE:
    # Run dashboard (default)
    python -m zone01_profile

    # Or via CLI command (after install)
    zone01-profile

    # Run with subcommands
    zone01-profile dashboard  # Launch web dashboard
    zone01-profile login      # Sign in and store the credential
    zone01-profile logout     # Remove the stored credential
    zone01-profile report     # Print profile report
"""

from __future__ import annotations

import argparse
import asyncio
import getpass
import logging
import sys
from collections.abc import Callable
from functools import lru_cache
from typing import TYPE_CHECKING

import httpx

from .config import Config
from .errors import InvalidCredentials, ProfileError

if TYPE_CHECKING:
    from .presenters import ProfileViewModel
    from .session import SessionStore

# Constants
PROG_NAME = "zone01-profile"
DEFAULT_HOST = "127.0.0.1"
DEFAULT_PORT = 8000
REPORT_WIDTH = 50

ClientFactory = Callable[[], httpx.AsyncClient]


@lru_cache(maxsize=1)
def _get_logger() -> logging.Logger:
    """Get module logger (cached for thread safety)."""
    logging.basicConfig(level=logging.INFO)
    return logging.getLogger(__name__)


def _log(message: str, *, emoji: str = "") -> None:
    """Log message with optional emoji prefix for CLI output.

    Args:
        message: The message to log.
        emoji: Optional emoji prefix for visual CLI feedback.
    """
    prefix = f"{emoji} " if emoji else ""
    _get_logger().info(f"{prefix}{message}")


def _default_client() -> httpx.AsyncClient:
    return httpx.AsyncClient(timeout=Config.REQUEST_TIMEOUT)


def run_dashboard(host: str = DEFAULT_HOST, port: int = DEFAULT_PORT) -> None:
    """
    Launch the web dashboard.

    Starts the FastAPI server hosting the login and profile views.

    Business context: The dashboard is the main way to look at profile
    statistics. It shares the credential file with the `login` command,
    so signing in from the terminal also signs in the dashboard.

    Args:
        host: Network interface to bind to. Default '127.0.0.1' for
            local-only access.
        port: TCP port for the HTTP server. Default 8000.

    Returns:
        None. Blocks until server shutdown (Ctrl+C).

    Raises:
        OSError: If port is already in use.

    Example:
        >>> # From command line:
        >>> # zone01-profile dashboard --port 3000
        >>> run_dashboard(port=3000)
        🚀 Starting dashboard at http://127.0.0.1:3000
    """
    from .web import run_dashboard as start_web

    _log(f"Starting dashboard at http://{host}:{port}", emoji="🚀")
    _log("Press Ctrl+C to stop")
    start_web(host=host, port=port)


async def _sign_in(
    store: SessionStore,
    username: str,
    password: str,
    client_factory: ClientFactory,
) -> None:
    from .auth import AuthClient

    async with client_factory() as client:
        payload = await AuthClient(client).login(username, password)
    if not store.set(payload):
        raise OSError(f"Could not write {store.session_file}")


def run_login(
    username: str | None = None,
    *,
    store: SessionStore | None = None,
    client_factory: ClientFactory | None = None,
    prompt: Callable[[str], str] = input,
    password_prompt: Callable[[str], str] = getpass.getpass,
) -> int:
    """
    Sign in from the terminal and store the credential.

    Prompts for whatever is missing (login, then password without echo),
    signs in against the authentication endpoint and writes the
    credential to the session file.

    Args:
        username: Login; prompted for when omitted.
        store: Optional SessionStore for testability.
        client_factory: Optional factory returning an httpx.AsyncClient.
        prompt: Line input function for the login.
        password_prompt: Hidden input function for the password.

    Returns:
        0 on success, 1 if the sign-in failed.

    Example:
        >>> # From command line:
        >>> # zone01-profile login --username jdoe
        >>> run_login("jdoe")
        Password:
        ✅ Signed in as jdoe
    """
    from .session import SessionStore as Store

    store = store or Store()
    username = (username or prompt("Login: ")).strip()
    password = password_prompt("Password: ")

    if not username or not password:
        _log(Config.MISSING_FIELDS_MESSAGE, emoji="⚠️")
        return 1

    try:
        asyncio.run(_sign_in(store, username, password, client_factory or _default_client))
    except InvalidCredentials as e:
        _log(str(e), emoji="❌")
        return 1
    except (ProfileError, ValueError, OSError) as e:
        _log(f"Sign-in failed: {e}", emoji="❌")
        return 1

    _log(f"Signed in as {username}", emoji="✅")
    return 0


def run_logout(store: SessionStore | None = None) -> int:
    """
    Remove the stored credential.

    Args:
        store: Optional SessionStore for testability.

    Returns:
        0 if no credential remains, 1 if the file could not be removed.
    """
    from .session import SessionStore as Store

    store = store or Store()
    if not store.clear():
        _log(f"Could not remove {store.session_file}", emoji="❌")
        return 1
    _log("Logged out", emoji="👋")
    return 0


def format_report(profile: ProfileViewModel) -> str:
    """
    Format a profile as a plain-text report.

    Args:
        profile: Loaded profile view model.

    Returns:
        Multi-line report: summary, audits, monthly XP and skills.

    Example:
        >>> print(format_report(profile))
        ==================================================
        ZONE01 PROFILE - jdoe
        ...
    """
    summary = profile.summary
    audit = profile.audit
    lines = [
        "=" * REPORT_WIDTH,
        f"ZONE01 PROFILE - {summary.login}",
        "=" * REPORT_WIDTH,
        "",
        f"Name:          {summary.display_name}",
        f"Level:         {summary.level}",
        f"Total XP:      {summary.total_xp}",
        "",
        "AUDITS",
        "-" * REPORT_WIDTH,
        f"Done:          {audit.done_display}",
        f"Received:      {audit.received_display}",
        f"Ratio:         {audit.ratio}",
        "",
        "MONTHLY XP",
        "-" * REPORT_WIDTH,
    ]

    if profile.has_history:
        for bucket in profile.buckets:
            lines.append(
                f"{bucket.label:<6} {bucket.year}  "
                f"+{bucket.total_amount:<10} {bucket.cumulative_amount}"
            )
    else:
        lines.append("No data available")

    lines.extend(["", "SKILLS", "-" * REPORT_WIDTH])
    if profile.skills:
        lines.extend(f"{skill.name:<24} {skill.grade:g}" for skill in profile.skills)
    else:
        lines.append("No skills completed yet")

    return "\n".join(lines)


async def _load_profile(store: SessionStore, client_factory: ClientFactory) -> ProfileViewModel:
    from .accessors import StatisticsAccessors
    from .gateway import QueryGateway
    from .presenters import ProfilePresenter

    async with client_factory() as client:
        presenter = ProfilePresenter(StatisticsAccessors(QueryGateway(store, client)))
        return await presenter.load()


def run_report(
    store: SessionStore | None = None,
    client_factory: ClientFactory | None = None,
) -> int:
    """
    Print the profile report to stdout.

    Business context: The text report gives the same numbers as the
    dashboard without a browser, and can be redirected to a file.

    Args:
        store: Optional SessionStore for testability.
        client_factory: Optional factory returning an httpx.AsyncClient.

    Returns:
        0 on success, 1 when signed out or the profile cannot be loaded.

    Example:
        >>> # From command line:
        >>> # zone01-profile report > profile.txt
        >>> run_report()
        ==================================================
        ZONE01 PROFILE - jdoe
        ...
    """
    from .session import SessionStore as Store

    store = store or Store()
    try:
        profile = asyncio.run(_load_profile(store, client_factory or _default_client))
    except ProfileError as e:
        _log(f"{Config.PROFILE_ERROR_MESSAGE}: {e}", emoji="❌")
        return 1

    # Note: Using print() intentionally for stdout piping support
    print(format_report(profile))
    return 0


def main() -> int:
    """
    Main CLI entry point for Zone01 Profile.

    Parses command-line arguments and dispatches to the appropriate
    subcommand handler. If no subcommand is specified, defaults to
    launching the dashboard.

    Subcommands:
    - dashboard [--host HOST] [--port PORT]: Launch web dashboard (default)
    - login [--username LOGIN]: Sign in and store the credential
    - logout: Remove the stored credential
    - report: Print profile report

    Returns:
        Exit code 0 for success, 1 when login or report failed.

    Raises:
        SystemExit: On --help or argument parsing errors.

    Example:
        >>> # From command line:
        >>> # zone01-profile dashboard --port 8080
        >>> sys.exit(main())  # Typical usage pattern
    """
    from .__version__ import __version__

    parser = argparse.ArgumentParser(
        prog=PROG_NAME,
        description="Zone01 Profile - View your Zone01 statistics",
    )
    parser.add_argument(
        "--version",
        action="version",
        version=f"%(prog)s {__version__}",
    )

    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    # Dashboard command
    dashboard_parser = subparsers.add_parser(
        "dashboard",
        help="Launch web dashboard",
    )
    dashboard_parser.add_argument(
        "--host",
        default=DEFAULT_HOST,
        help=f"Bind address (default: {DEFAULT_HOST})",
    )
    dashboard_parser.add_argument(
        "--port",
        type=int,
        default=DEFAULT_PORT,
        help=f"Port number (default: {DEFAULT_PORT})",
    )

    # Login command
    login_parser = subparsers.add_parser(
        "login",
        help="Sign in and store the credential",
    )
    login_parser.add_argument(
        "--username",
        default=None,
        help="Zone01 login or email (prompted if omitted)",
    )

    # Logout command
    subparsers.add_parser(
        "logout",
        help="Remove the stored credential",
    )

    # Report command
    subparsers.add_parser(
        "report",
        help="Print profile report to stdout",
    )

    args = parser.parse_args()

    if args.command == "login":
        return run_login(args.username)
    if args.command == "logout":
        return run_logout()
    if args.command == "report":
        return run_report()
    if args.command == "dashboard":
        run_dashboard(host=args.host, port=args.port)
    else:
        # Default: dashboard on the default address
        run_dashboard()

    return 0


if __name__ == "__main__":  # pragma: no cover
    sys.exit(main())
