#!/usr/bin/env python
"""
Ask Gemini from the command line and print the parsed answer as JSON.

The answer text is either requested live from the Gemini API or read from a
saved file, then run through one of the response parsers. Reading from a
file is handy for checking a parser against answers captured earlier.

Usage:
    # Live request, raw text
    uv run python scripts/ask_gemini.py --prompt "When should I sow wheat in Punjab?"

    # Live crop recommendations for rendered template variables
    uv run python scripts/ask_gemini.py --template crop_recommendation \
        --var conditions="Season: Rabi" --parser crops

    # Re-parse a saved answer, deterministic synthesis
    uv run python scripts/ask_gemini.py --file answers/prices.txt \
        --parser prices --crop Rice --seed 42

Requirements:
    - GEMINI_API_KEY must be set in .env file for live requests
"""

import argparse
import json
import logging
import random
import sys
from typing import Any

from dotenv import load_dotenv

# Configure logging
logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s - %(levelname)s - %(message)s",
    datefmt="%Y-%m-%d %H:%M:%S",
)
logger = logging.getLogger(__name__)

# Load environment variables
load_dotenv()

PARSER_CHOICES = ["raw", "crops", "pests", "treatments", "alerts", "prices", "trends", "compare"]


def parse_args(argv=None) -> argparse.Namespace:
    """Parse command line arguments."""
    parser = argparse.ArgumentParser(
        description="Send a prompt to Gemini and parse the answer",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=__doc__,
    )
    source = parser.add_mutually_exclusive_group(required=True)
    source.add_argument("--prompt", type=str, help="Prompt text sent as-is")
    source.add_argument("--template", type=str, help="Name of a prompt template to render")
    source.add_argument("--file", type=str, help="Read the answer text from a file instead of calling Gemini")
    parser.add_argument(
        "--var",
        action="append",
        default=[],
        metavar="KEY=VALUE",
        help="Template variable (repeatable)",
    )
    parser.add_argument(
        "--parser",
        choices=PARSER_CHOICES,
        default="raw",
        help="Parser applied to the answer (default: raw)",
    )
    parser.add_argument("--crop", type=str, default=None, help="Crop for prices/trends/compare")
    parser.add_argument("--locations", type=str, default="", help="Comma separated locations for compare")
    parser.add_argument("--days", type=int, default=30, help="Days of history for trends (default: 30)")
    parser.add_argument("--seed", type=int, default=None, help="Seed for synthesized values")
    parser.add_argument(
        "--no-synthesize",
        action="store_true",
        help="Leave missing values empty instead of synthesizing them",
    )
    parser.add_argument(
        "--strict",
        action="store_true",
        help="Fail when the parser extracts nothing",
    )
    return parser.parse_args(argv)


def parse_template_vars(pairs) -> dict:
    """Turn KEY=VALUE pairs into a dict."""
    variables = {}
    for pair in pairs:
        key, sep, value = pair.partition("=")
        if not sep or not key:
            raise ValueError(f"Invalid --var '{pair}', expected KEY=VALUE")
        variables[key.strip()] = value
    return variables


def build_parser(args: argparse.Namespace):
    """Instantiate the parser selected on the command line (None for raw)."""
    from app.core.config import get_settings
    from app.parsers import (
        CropRecommendationParser,
        MarketComparisonParser,
        MarketPriceParser,
        MarketTrendParser,
        PestAlertParser,
        PestInformationParser,
        TreatmentRecommendationParser,
    )

    rng = random.Random(args.seed)
    synthesize = not args.no_synthesize

    if args.parser == "raw":
        return None
    if args.parser == "crops":
        return CropRecommendationParser()
    if args.parser == "pests":
        return PestInformationParser(get_settings().pest_unclassified_control_policy)
    if args.parser == "treatments":
        return TreatmentRecommendationParser()
    if args.parser == "alerts":
        return PestAlertParser()
    if args.parser == "prices":
        return MarketPriceParser(crop_filter=args.crop, rng=rng, synthesize=synthesize)
    if not args.crop:
        raise ValueError(f"--crop is required for the '{args.parser}' parser")
    if args.parser == "trends":
        return MarketTrendParser(args.crop, days=args.days, rng=rng, synthesize=synthesize)
    return MarketComparisonParser(args.crop, args.locations, rng=rng, synthesize=synthesize)


def to_jsonable(result: Any) -> Any:
    if isinstance(result, list):
        return [to_jsonable(item) for item in result]
    if hasattr(result, "model_dump"):
        return result.model_dump(mode="json")
    return result


def read_answer(args: argparse.Namespace) -> str:
    """Answer text from a file, or from a live Gemini call."""
    if args.file:
        with open(args.file, encoding="utf-8") as f:
            return f.read()

    from app.core.templates import render_prompt
    from app.services.gemini_client import get_gemini_client

    if args.template:
        prompt = render_prompt(args.template, **parse_template_vars(args.var))
    else:
        prompt = args.prompt

    logger.info(f"Sending prompt ({len(prompt)} chars) to Gemini...")
    return get_gemini_client().generate_content(prompt)


def main(argv=None) -> int:
    args = parse_args(argv)

    try:
        parser = build_parser(args)
        text = read_answer(args)
    except Exception as e:
        logger.error(f"❌ {str(e)}")
        return 1

    if parser is None:
        print(text)
        return 0

    from app.parsers import ParseError

    try:
        result = parser.parse_strict(text) if args.strict else parser.parse(text)
    except ParseError as e:
        logger.error(f"❌ {str(e)}")
        return 2

    print(json.dumps(to_jsonable(result), indent=2, ensure_ascii=False))
    return 0


if __name__ == "__main__":
    sys.exit(main())
