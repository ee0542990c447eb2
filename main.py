#!/usr/bin/env python
"""CLI for the Hermes misinformation reporting service."""

import argparse
import asyncio
import json
import logging
import sys
from pathlib import Path
from typing import Any, Literal

import yaml
from pydantic import BaseModel, field_validator

from hermes_ai.config import create_from_config, get_default_config_path, load_config
from hermes_ai.errors import (
    AnalysisUnavailable,
    ContentPolicyRejection,
    HermesError,
    NotFound,
    PartialClusterWrite,
    ValidationError,
)
from hermes_ai.service import HermesService
from hermes_ai.views import export_filename

logger = logging.getLogger(__name__)

EXIT_OK = 0
EXIT_USER_ERROR = 1
EXIT_RETRYABLE = 2
EXIT_PARTIAL_WRITE = 3
EXIT_INTERRUPTED = 130


class CLIArgs(BaseModel):
    """Validated CLI arguments."""

    command: Literal["submit", "upvote", "dashboard", "trending", "export", "health"]
    config: Path
    text: str | None = None
    item_id: str | None = None
    category: str | None = None
    period: str | None = None
    sort: str | None = None
    limit: int | None = None
    preset: Literal["app", "standalone"] = "app"
    variant: Literal["report", "legacy"] = "report"
    output: Path | None = None
    log: bool = False
    log_dir: str = "logs"

    @field_validator("config")
    @classmethod
    def config_must_exist(cls, v: Path) -> Path:
        if not v.exists():
            raise ValueError(f"Config file not found: {v}")
        return v


def _print_json(data: Any) -> None:
    print(json.dumps(data, indent=2, ensure_ascii=False))


async def dispatch(service: HermesService, args: CLIArgs) -> None:
    """Run one subcommand against the service and print its result."""
    if args.command == "submit":
        item = await service.submit(args.text)
        _print_json(item.to_dict())
    elif args.command == "upvote":
        upvotes = await service.upvote(args.item_id or "")
        _print_json({"success": True, "upvotes": upvotes})
    elif args.command == "dashboard":
        view = await service.dashboard(category=args.category, limit=args.limit)
        _print_json(view.to_dict())
    elif args.command == "trending":
        view = await service.trending(
            period=args.period,
            sort_by=args.sort,
            limit=args.limit,
            preset=args.preset,
        )
        _print_json(view.to_dict())
    elif args.command == "export":
        csv_text = await service.export(variant=args.variant)
        if args.output is None:
            print(csv_text)
        else:
            target = args.output / export_filename() if args.output.is_dir() else args.output
            target.write_text(csv_text, encoding="utf-8")
            logger.info(f"Report written to: {target}")
    elif args.command == "health":
        _print_json(service.health())


async def run(args: CLIArgs) -> int:
    """Build the service from config, run one command and return the exit code.

    Args:
        args: Validated CLI arguments.
    """
    try:
        config = load_config(args.config)
    except (OSError, ValueError, yaml.YAMLError) as e:
        logger.error(f"Invalid config {args.config}: {e}")
        return EXIT_USER_ERROR

    service, run_logger = create_from_config(
        config,
        log_override=args.log if args.log else None,
        log_dir_override=args.log_dir if args.log_dir != "logs" else None,
    )

    try:
        await dispatch(service, args)
    except (ValidationError, ContentPolicyRejection, NotFound) as e:
        logger.error(str(e))
        return EXIT_USER_ERROR
    except PartialClusterWrite as e:
        logger.error(str(e))
        logger.error(f"Peers not relabelled: {', '.join(e.failed_ids)}")
        return EXIT_PARTIAL_WRITE
    except AnalysisUnavailable as e:
        logger.error(f"{e} (stage: {e.stage})")
        return EXIT_RETRYABLE
    except HermesError as e:
        logger.error(str(e))
        return EXIT_RETRYABLE if e.retryable else EXIT_USER_ERROR
    except ValueError as e:
        logger.error(str(e))
        return EXIT_USER_ERROR
    finally:
        await service.close()

    if run_logger and run_logger.last_log_path:
        logger.info(f"Run log written to: {run_logger.last_log_path}")
    return EXIT_OK


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Report and cluster misinformation claims.")
    parser.add_argument(
        "--config",
        "-c",
        type=Path,
        default=None,
        help="Path to YAML config file (default: configs/default.yaml)",
    )
    parser.add_argument(
        "--log",
        action="store_true",
        default=False,
        help="Write a JSON run log for each submission",
    )
    parser.add_argument(
        "--log-dir",
        type=str,
        default="logs",
        help="Directory for log files (default: logs/)",
    )

    sub = parser.add_subparsers(dest="command", required=True)

    submit = sub.add_parser("submit", help="Analyze and store a claim")
    submit.add_argument("text", help="Claim text")

    upvote = sub.add_parser("upvote", help="Upvote a stored item")
    upvote.add_argument("item_id", help="Item id")

    dash = sub.add_parser("dashboard", help="Recent items and totals")
    dash.add_argument("--category", default=None, help="Category filter ('all' for none)")
    dash.add_argument("--limit", type=int, default=None)

    trend = sub.add_parser("trending", help="Items trending in a time window")
    trend.add_argument("--period", default=None, help="24h, 7d, 30d or all")
    trend.add_argument("--sort", default=None, help="upvotes, recent or confidence")
    trend.add_argument("--limit", type=int, default=None)
    trend.add_argument("--preset", choices=["app", "standalone"], default="app")

    export = sub.add_parser("export", help="CSV report of trending and recent items")
    export.add_argument("--variant", choices=["report", "legacy"], default="report")
    export.add_argument(
        "--output",
        type=Path,
        default=None,
        help="File or directory to write to (default: stdout)",
    )

    sub.add_parser("health", help="Service status")
    return parser


def main() -> None:
    """Entry point for the CLI."""
    parser = build_parser()

    logging.basicConfig(level=logging.INFO, format="%(message)s")

    ns = parser.parse_args()
    config_path: Path = ns.config if ns.config else get_default_config_path()

    try:
        args = CLIArgs(
            command=ns.command,
            config=config_path,
            text=getattr(ns, "text", None),
            item_id=getattr(ns, "item_id", None),
            category=getattr(ns, "category", None),
            period=getattr(ns, "period", None),
            sort=getattr(ns, "sort", None),
            limit=getattr(ns, "limit", None),
            preset=getattr(ns, "preset", "app"),
            variant=getattr(ns, "variant", "report"),
            output=getattr(ns, "output", None),
            log=ns.log,
            log_dir=ns.log_dir,
        )
    except Exception as e:
        logger.error(str(e))
        sys.exit(EXIT_USER_ERROR)

    try:
        sys.exit(asyncio.run(run(args)))
    except KeyboardInterrupt:
        sys.exit(EXIT_INTERRUPTED)


if __name__ == "__main__":
    main()
