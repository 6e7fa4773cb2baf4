"""Application entrypoint for the En Vrac publisher.

Two ways to run it:
1) ``envrac run`` builds today's article once (``--dry-run`` prints it)
2) ``envrac serve`` starts the HTTP trigger surface
"""

from __future__ import annotations

import argparse
import os
from typing import List, Optional

import uvicorn
from dotenv import load_dotenv

from .errors import EnVracError
from .pipeline import run_pipeline
from .utils.logging import configure_logging, get_logger
from .utils.settings import Settings


def parse_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        description="En Vrac – gather open tasks and publish the weekly article"
    )
    parser.add_argument(
        "--log-level",
        default=None,
        choices=["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"],
        help="Logging verbosity (defaults to LOG_LEVEL or INFO)",
    )
    parser.add_argument(
        "--categories",
        default=None,
        help="Path to the section-to-category YAML file (overrides CATEGORIES_CONFIG)",
    )
    sub = parser.add_subparsers(dest="command", required=True)

    run = sub.add_parser("run", help="Build and publish today's article")
    run.add_argument(
        "--dry-run",
        action="store_true",
        help="Print the article instead of committing it",
    )

    serve = sub.add_parser("serve", help="Start the HTTP trigger surface")
    serve.add_argument("--host", default="0.0.0.0")
    serve.add_argument("--port", type=int, default=int(os.getenv("PORT", "8000")))
    return parser.parse_args(argv)


def main(argv: Optional[List[str]] = None) -> int:
    load_dotenv(override=False)
    args = parse_args(argv)
    configure_logging(level=args.log_level)
    logger = get_logger("envrac.main")

    if args.categories:
        os.environ["CATEGORIES_CONFIG"] = args.categories

    if args.command == "serve":
        logger.info("Starting trigger surface on %s:%d", args.host, args.port)
        uvicorn.run("envrac.api.app:app", host=args.host, port=args.port)
        return 0

    try:
        settings = Settings.from_env()
        result = run_pipeline(settings, dry_run=args.dry_run)
    except EnVracError as exc:
        logger.error("Run failed: %s", exc)
        return 1

    if args.dry_run:
        print(result.article.text)
    else:
        logger.info("Committed %s", result.path)
    return 0


if __name__ == "__main__":  # pragma: no cover - script entrypoint
    raise SystemExit(main())
