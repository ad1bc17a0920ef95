# classify.py

import argparse
import asyncio
import json
from pathlib import Path
from typing import Any, Dict, Optional

from api.app import build_services
from soccer_translate.config import AppConfig, get_settings, load_app_config
from soccer_translate.errors import CodingError, RequestValidationError
from soccer_translate.pipeline.coding_pipeline import (
    run_soccer_pipeline,
    run_translation_pipeline,
)
from soccer_translate.utils.logger import setup_logger

logger = setup_logger(__name__)


def parse_args(argv: Optional[list[str]] = None) -> argparse.Namespace:
    """Parse command-line arguments for a one-off coding run."""
    parser = argparse.ArgumentParser(
        description="Code a job title/task with SOCcer, with optional translation.",
    )
    parser.add_argument(
        "--config",
        type=str,
        default=str(get_settings().config_path),
        help="Path to the YAML configuration file.",
    )
    parser.add_argument("--title", type=str, default=None, help="Job title.")
    parser.add_argument("--task", type=str, default=None, help="Job task description.")
    parser.add_argument(
        "--language",
        type=str,
        default=None,
        help="Language of title/task; translated before coding (soccer mode).",
    )
    parser.add_argument(
        "--target",
        type=str,
        default=None,
        help="Translate title/task into this language and code at --url (translation mode).",
    )
    parser.add_argument(
        "--url",
        type=str,
        default=None,
        help="SOCcer endpoint for translation mode.",
    )
    parser.add_argument(
        "--n",
        type=int,
        default=None,
        help="Number of candidate codes (translation mode).",
    )
    return parser.parse_args(argv)


async def run(args: argparse.Namespace, app_cfg: AppConfig) -> Dict[str, Any]:
    """Run the selected coding flow and return the JSON-ready output."""
    services = build_services(app_cfg)

    # Case 1: translation mode, selected by --target
    if args.target is not None:
        translated_results = await run_translation_pipeline(
            services,
            target=args.target,
            url=args.url,
            title=args.title,
            task=args.task,
            n=args.n,
        )
        return {"translatedResults": translated_results}

    # Case 2: soccer mode
    results = await run_soccer_pipeline(
        services,
        title=args.title,
        task=args.task,
        language=args.language,
    )
    return {"results": results}


def main(argv: Optional[list[str]] = None) -> None:
    """CLI entrypoint for coding a single title/task."""
    parser_args = parse_args(argv)
    config_path = Path(parser_args.config)

    logger.info(
        "Loading application configuration",
        extra={"config_path": str(config_path)},
    )
    app_cfg = load_app_config(config_path) if config_path.exists() else AppConfig()

    try:
        output = asyncio.run(run(parser_args, app_cfg))
    except RequestValidationError as exc:
        raise SystemExit(f"error: {exc.message}") from exc
    except CodingError as exc:
        logger.error("Coding failed", extra={"reason": exc.message})
        raise SystemExit(1) from exc

    print(json.dumps(output, indent=2, ensure_ascii=False))


if __name__ == "__main__":
    main()
