"""
Preview questions from Open Trivia DB

Runs the question service the same way a game would, polling the cache
until enough questions have arrived, and prints them.

Usage:
    python -m trivia --kind multiple --count 3 --categories Computers Math
    python -m trivia --list-categories
"""

import argparse
import asyncio
import dataclasses
import sys

import config
from logging_utils import setup_logging
from trivia.categories import get_category_choices
from trivia.providers.opentdb import OpenTDBClient
from trivia.question_cache import CacheKind, TriviaCacheService
from trivia.scheduler import AsyncioScheduler
from trivia.settings import get_config_value, load_open_trivia_settings, resolve_categories

POLL_INTERVAL = 0.5


def parse_args(argv=None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(prog="trivia", description="Preview Open Trivia DB questions")
    parser.add_argument("--kind", choices=[kind.value for kind in CacheKind], default=CacheKind.FREEFORM.value)
    parser.add_argument("--count", type=int, default=3, help="questions to print")
    parser.add_argument("--categories", nargs="*", default=None, help="category ids or names")
    parser.add_argument("--difficulty", choices=["easy", "medium", "hard"], default=None)
    parser.add_argument("--timeout", type=float, default=60.0, help="seconds to wait for questions")
    parser.add_argument("--list-categories", action="store_true")
    return parser.parse_args(argv)


async def preview(args: argparse.Namespace) -> int:
    logger = setup_logging(config)

    settings = load_open_trivia_settings(config)
    overrides = {"enabled": True}
    if args.categories is not None:
        overrides["categories"] = resolve_categories(args.categories)
    if args.difficulty:
        overrides["difficulty"] = args.difficulty
    settings = dataclasses.replace(settings, **overrides)

    client = OpenTDBClient(
        connect_timeout=get_config_value(config, "OPENTDB_CONNECT_TIMEOUT", 10),
        read_timeout=get_config_value(config, "OPENTDB_READ_TIMEOUT", 10),
    )
    scheduler = AsyncioScheduler()
    service = TriviaCacheService(
        client,
        scheduler,
        config_module=config,
        rate_limit_seconds=get_config_value(config, "OPENTDB_RATE_LIMIT_SECONDS", 5.0),
    )

    kind = CacheKind(args.kind)
    printed = 0
    loop = asyncio.get_running_loop()
    deadline = loop.time() + args.timeout

    try:
        await client.initialize()
        while printed < args.count and loop.time() < deadline:
            if kind is CacheKind.FREEFORM:
                question = service.get_freeform_question(settings)
            else:
                question = service.get_multiple_choice_question(settings)

            if question is None:
                await asyncio.sleep(POLL_INTERVAL)
                continue

            printed += 1
            print(f"\n{printed}. {question.question}")
            if kind is CacheKind.FREEFORM:
                print(f"   Answer: {question.answer}")
            else:
                for option in question.answers:
                    print(f"   {option}")
                print(f"   Answer: {question.correct_answer}")
    finally:
        scheduler.cancel_all()
        await client.cleanup()

    if printed < args.count:
        logger.warning(f"Only received {printed}/{args.count} questions before timing out")
        return 1
    logger.info(f"Cache stats: {service.get_cache_stats()}")
    return 0


def main(argv=None) -> int:
    args = parse_args(argv)
    if args.list_categories:
        print("\n".join(get_category_choices()))
        return 0
    return asyncio.run(preview(args))


if __name__ == "__main__":
    sys.exit(main())
