from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path
from typing import Any, Dict, Optional

from rich.console import Console
from rich.logging import RichHandler

from .api.client import CatalogApiError, CatalogHttpClient
from .catalog.loaders import load_catalog_snapshot
from .catalog.service import MAX_BATCH_SIZE, CatalogService
from .config import ConfigError, load_config
from .reconcile.clone import CloneResult, plan_clone, run_clone
from .reconcile.kinds import KINDS
from .utils.json_utils import write_json

console = Console()


def _configure_logging(verbose: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.INFO,
        format="%(message)s",
        datefmt="[%X]",
        handlers=[RichHandler(console=console, show_path=False)],
    )


def _load_config_or_exit(config_path: Path) -> Dict[str, Any]:
    try:
        return load_config(config_path)
    except FileNotFoundError as e:
        console.print(f"[red]Error:[/red] {e}")
        sys.exit(2)
    except ConfigError as e:
        console.print(f"[red]Config error:[/red] {e}")
        sys.exit(2)
    except Exception as e:  # unexpected
        console.print(f"[red]Unexpected error loading config:[/red] {e}")
        sys.exit(1)


def _resolve_token(cli_value: Optional[str], cfg: Dict[str, Any], key: str, flag: str) -> str:
    token = cli_value or cfg["api"].get(key)
    if not token:
        console.print(f"[red]Config error:[/red] no access token given ({flag} or api.{key})")
        sys.exit(2)
    return str(token)


def _make_service(token: str, cfg: Dict[str, Any]) -> CatalogService:
    api = cfg["api"]
    client = CatalogHttpClient(
        access_token=token,
        base_url=api["base_url"],
        timeout_seconds=float(api["timeout_seconds"]),
        api_version=api.get("version"),
    )
    return CatalogService(client)


def _print_result(result: CloneResult, dry_run: bool) -> None:
    label = "Plan" if dry_run else "Clone"
    console.print(f"[bold green]{label} {result.type_name}:[/bold green] {result.total_processed} source objects")
    console.print(f"  merged:    {result.merged}")
    console.print(f"  created:   {result.created}")
    console.print(f"  unchanged: {result.unchanged}")
    if result.failed:
        console.print(f"  [red]failed:    {result.failed}[/red]")
        for failure in result.failures:
            console.print(f"    [red]{failure['source_id']}[/red]: {failure['error']}")
    if result.skipped_targets:
        console.print(f"  [yellow]skipped targets: {len(result.skipped_targets)}[/yellow]")
        for skipped in result.skipped_targets:
            console.print(f"    [yellow]{skipped['target_id']}[/yellow]: {skipped['error']}")
    if dry_run:
        console.print(f"  [yellow]would upsert: {len(result.to_upsert)}[/yellow]")
    else:
        console.print(f"  upserted:  {result.upserted}")


def cmd_list(args: argparse.Namespace) -> int:
    cfg = _load_config_or_exit(Path(args.config or "config.yml"))
    token = _resolve_token(args.token, cfg, "source_access_token", "--token")
    service = _make_service(token, cfg)

    try:
        objects = service.list_objects(args.types.split(","))
    except CatalogApiError as e:
        console.print(f"[red]API error:[/red] {e}")
        return 1

    for obj in objects:
        if obj.modifier_list_data is not None:
            data = obj.modifier_list_data
            console.print(
                f"[bold]{obj.type}[/bold] {obj.id}: {data.name} "
                f"({data.selection_type}, {len(data.modifiers)} modifiers)"
            )
        else:
            console.print(f"[bold]{obj.type}[/bold] {obj.id}")
    console.print(f"[bold]Total:[/bold] {len(objects)}")
    return 0


def cmd_clone(args: argparse.Namespace) -> int:
    cfg = _load_config_or_exit(Path(args.config or "config.yml"))
    kind = KINDS[args.type]
    batch_size = int(cfg["clone"].get("batch_size") or MAX_BATCH_SIZE)

    if args.source_file or args.target_file:
        if not (args.source_file and args.target_file):
            console.print("[red]Error:[/red] --source-file and --target-file must be given together")
            return 2
        try:
            source_objects = load_catalog_snapshot(Path(args.source_file))
            target_objects = load_catalog_snapshot(Path(args.target_file))
        except (FileNotFoundError, ValueError) as e:
            console.print(f"[red]Error:[/red] {e}")
            return 2
        result = plan_clone(source_objects, target_objects, kind)
        dry_run = True
    else:
        source = _make_service(_resolve_token(args.source_token, cfg, "source_access_token", "--source-token"), cfg)
        target = _make_service(_resolve_token(args.target_token, cfg, "target_access_token", "--target-token"), cfg)
        dry_run = bool(args.dry_run)
        try:
            result = run_clone(source, target, kind, dry_run=dry_run, batch_size=batch_size)
        except CatalogApiError as e:
            console.print(f"[red]API error:[/red] {e}")
            return 1

    _print_result(result, dry_run)

    if args.report:
        report = result.to_report()
        report["dry_run"] = dry_run
        report["objects"] = result.to_upsert
        try:
            write_json(Path(args.report), report)
        except Exception as e:
            console.print(f"[red]Failed to write report:[/red] {e}")
            return 1
        console.print(f"[bold]Report:[/bold] {args.report}")

    return 1 if result.failed else 0


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="catalogdemo",
        description="Clone catalog objects from a source account into a target account.",
    )
    parser.add_argument("-v", "--verbose", action="store_true", help="Enable debug logging")
    sub = parser.add_subparsers(dest="command", required=True)

    # list
    p_list = sub.add_parser("list", help="List catalog objects in an account")
    p_list.add_argument("--config", type=str, default="config.yml", help="Path to config.yml")
    p_list.add_argument("--token", type=str, help="Access token (defaults to api.source_access_token)")
    p_list.add_argument("--types", type=str, default="MODIFIER_LIST", help="Comma-separated object types")
    p_list.set_defaults(func=cmd_list)

    # clone
    p_clone = sub.add_parser("clone", help="Clone objects from the source account into the target account")
    p_clone.add_argument("--config", type=str, default="config.yml", help="Path to config.yml")
    p_clone.add_argument("--type", type=str, default="MODIFIER_LIST", choices=sorted(KINDS), help="Object type")
    p_clone.add_argument("--source-token", type=str, help="Source account access token")
    p_clone.add_argument("--target-token", type=str, help="Target account access token")
    p_clone.add_argument("--dry-run", action="store_true", help="Plan only, do not write to the target")
    p_clone.add_argument("--source-file", type=str, help="Plan offline from a source catalog snapshot")
    p_clone.add_argument("--target-file", type=str, help="Plan offline from a target catalog snapshot")
    p_clone.add_argument("--report", type=str, help="Write a JSON report to this path")
    p_clone.set_defaults(func=cmd_clone)

    return parser


def main(argv: list[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    _configure_logging(args.verbose)
    try:
        return args.func(args)
    except SystemExit:
        raise
    except Exception as e:
        console.print(f"[red]Unexpected error:[/red] {e}")
        return 1


if __name__ == "__main__":
    raise SystemExit(main())
