"""Command line interface for gdrivemover."""

from __future__ import annotations

import argparse
import logging
import sys
from typing import Optional, Sequence

from rich import box
from rich.console import Console
from rich.logging import RichHandler
from rich.table import Table

from gdrivemover.auth.authenticator import Authenticator
from gdrivemover.config import MoverConfig
from gdrivemover.errors import AuthError, GDriveMoverError
from gdrivemover.models import AccountHandle, RemoteFile
from gdrivemover.mover import MOVE_TYPES, MoveService
from gdrivemover.observer import RichProgressObserver
from gdrivemover.server import serve
from gdrivemover.util.size import format_size

logger = logging.getLogger("gdrivemover")

console = Console()


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="gdrivemover",
        description="Move files and folders between two Google Drive accounts.",
    )
    parser.add_argument("--source", default="source", help="Source account name (default: source)")
    parser.add_argument("--target", default="target", help="Target account name (default: target)")
    parser.add_argument(
        "--manual-auth",
        action="store_true",
        help="Print the authorization URL and read the code from the terminal",
    )
    parser.add_argument("-v", "--verbose", action="store_true", help="Enable debug logging")

    sub = parser.add_subparsers(dest="command", required=True)

    sub.add_parser("list-files", help="List files owned by the source account")
    sub.add_parser("list-folders", help="List folders owned by the source account")

    size = sub.add_parser("folder-size", help="Total size of a source folder")
    size.add_argument("folder_id")

    move = sub.add_parser("move", help="Move files or folders to the target account")
    move.add_argument("type", choices=MOVE_TYPES)
    move.add_argument("file_ids", nargs="+", metavar="ID")
    move.add_argument(
        "--no-share-back",
        dest="share_back",
        action="store_false",
        help="Do not share moved items back to their original owner",
    )

    sub.add_parser("serve", help="Start the HTTP server")
    return parser


def setup_logging(verbose: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.INFO,
        format="%(message)s",
        datefmt="[%X]",
        handlers=[RichHandler(console=console, rich_tracebacks=True)],
    )
    # googleapiclient is chatty at INFO.
    logging.getLogger("googleapiclient").setLevel(logging.WARNING)


def display_files(files: list[RemoteFile], title: str) -> None:
    if not files:
        console.print(f"[yellow]No {title.lower()} found[/yellow]")
        return

    table = Table(show_header=True, box=box.SIMPLE, title=title)
    table.add_column("ID", style="dim")
    table.add_column("Name", style="cyan")
    table.add_column("Size", style="yellow", justify="right")
    table.add_column("Quota Used", style="yellow", justify="right")

    for f in files:
        table.add_row(
            f.file_id,
            f.name,
            format_size(f.size or 0),
            format_size(f.quota_bytes_used or 0),
        )
    console.print(table)


def _accounts(args: argparse.Namespace, config: MoverConfig, need_target: bool):
    auth = Authenticator(config, manual=args.manual_auth)
    # The source must be writable: moved files are deleted there.
    source = auth.authenticate(args.source, read_only=False)
    target: Optional[AccountHandle] = None
    if need_target:
        target = auth.authenticate(args.target, read_only=False)
    return source, target


def run(args: argparse.Namespace, config: MoverConfig) -> int:
    need_target = args.command in ("move", "serve")
    try:
        source, target = _accounts(args, config, need_target)
    except AuthError as exc:
        logger.error("Authentication failed: %s", exc)
        return 1

    if args.command == "list-files":
        display_files(source.client.list_owned_files(), "Files")
        return 0

    if args.command == "list-folders":
        display_files(source.client.list_owned_folders(), "Folders")
        return 0

    if args.command == "folder-size":
        size, quota = source.client.folder_size(args.folder_id)
        console.print(f"Size: [bold]{format_size(size)}[/bold]  Quota used: [bold]{format_size(quota)}[/bold]")
        return 0

    if target is None:
        logger.error("Command %s needs a target account", args.command)
        return 1

    service = MoveService(
        source,
        target,
        observer_factory=lambda label: RichProgressObserver(label, console=console),
    )

    if args.command == "serve":
        try:
            serve(service, config.server_host, config.server_port)
        except KeyboardInterrupt:
            logger.info("Server stopped")
        return 0

    outcomes = service.move(args.type, args.file_ids, share_back=args.share_back)
    for outcome in outcomes:
        if outcome.ok:
            console.print(f"[green]Moved[/green] {outcome.file_name} ({outcome.file_id})")
        else:
            console.print(f"[red]Failed[/red] {outcome.file_id}: {outcome.error_message}")
    skipped = len(args.file_ids) - len(outcomes)
    if skipped:
        console.print(f"[yellow]{skipped} item(s) not attempted[/yellow]")
    return 0 if all(o.ok for o in outcomes) else 2


def main(argv: Optional[Sequence[str]] = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    setup_logging(args.verbose)

    try:
        config = MoverConfig.from_env()
        return run(args, config)
    except GDriveMoverError as exc:
        logger.error("%s", exc)
        return 1


if __name__ == "__main__":
    sys.exit(main())
