#!/usr/bin/env python3
"""
Agentic-Board: Multi-Agent Coordination over a Shared Message Board

Entry point for the pipeline in which three agents collaborate on a feature
request through an append-only board:
- UI/UX Design agent drafts the UI/UX spec
- Frontend Engineer agent plans the frontend from the UI/UX spec
- Backend Engineer agent plans the backend from the UI/UX spec

Usage:
    python main.py "Build a weekly dashboard that tracks active users"
    python main.py --file request.txt
    echo "feature request" | python main.py --stdin
    python main.py                      # interactive, type "exit" to quit
    python main.py --offline "..."      # no LLM calls, scripted output
"""

import argparse
import asyncio
import json
import sys
from pathlib import Path
from typing import Optional

from config import settings
from agentic_board.core.engine import Engine
from agentic_board.core.exceptions import ConfigurationError, InvalidRequestError
from agentic_board.core.pacing import pacing_for_interval
from agentic_board.core.state import PipelineResult
from agentic_board.tools.generator import OpenAIGenerator, ScriptedGenerator
from agentic_board.utils.logger import configure_logging, get_logger, LogCategory

logger = get_logger(__name__)


def parse_args(argv: Optional[list[str]] = None) -> argparse.Namespace:
    """Parse command-line arguments for request input and run limits."""
    parser = argparse.ArgumentParser(
        description="Agentic-Board: multi-agent feature planning over a shared message board",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  %(prog)s "Build a weekly dashboard that tracks active users"
  %(prog)s --file requests/dashboard.txt
  %(prog)s --stdin < request.txt
  %(prog)s --offline --interval 0 "Add CSV export to reports"
        """
    )

    input_group = parser.add_mutually_exclusive_group()
    input_group.add_argument(
        "request",
        nargs="?",
        help="Feature request as a string (omit for interactive mode)"
    )
    input_group.add_argument(
        "--file", "-f",
        type=Path,
        help="Path to file containing the feature request"
    )
    input_group.add_argument(
        "--stdin",
        action="store_true",
        help="Read the feature request from stdin"
    )

    parser.add_argument(
        "--max-cycles", "-c",
        type=int,
        default=settings.MAX_GLOBAL_CYCLES,
        help=f"Maximum coordinator cycles (default: {settings.MAX_GLOBAL_CYCLES})"
    )
    parser.add_argument(
        "--iterations", "-i",
        type=int,
        default=settings.MAX_AGENT_ITERATIONS,
        help=f"Iteration budget per agent (default: {settings.MAX_AGENT_ITERATIONS})"
    )
    parser.add_argument(
        "--interval",
        type=float,
        default=settings.POLL_INTERVAL_SECONDS,
        help=f"Seconds between cycles (default: {settings.POLL_INTERVAL_SECONDS})"
    )
    parser.add_argument(
        "--offline",
        action="store_true",
        help="Use scripted output instead of calling the LLM"
    )
    parser.add_argument(
        "--verbose", "-v",
        action="store_true",
        help="Enable debug logging"
    )
    parser.add_argument(
        "--json-output",
        action="store_true",
        help="Print run results as JSON"
    )

    return parser.parse_args(argv)


def load_request(args: argparse.Namespace) -> Optional[str]:
    """
    Load a one-shot feature request from the selected source.

    Returns:
        The request text, or None when no source was given (interactive mode)

    Raises:
        SystemExit: If the request file cannot be read
    """
    if args.request:
        return args.request

    if args.file:
        if not args.file.exists():
            logger.error(f"File not found: {args.file}", category=LogCategory.SYSTEM)
            sys.exit(1)
        try:
            return args.file.read_text(encoding="utf-8").strip()
        except OSError as e:
            logger.error(f"Failed to read file: {e}", category=LogCategory.SYSTEM)
            sys.exit(1)

    if args.stdin:
        return sys.stdin.read().strip()

    return None


def build_engine(args: argparse.Namespace) -> Engine:
    generator = ScriptedGenerator() if args.offline else OpenAIGenerator()
    return Engine(
        generator=generator,
        max_global_cycles=args.max_cycles,
        iteration_budget=args.iterations,
        pacing=pacing_for_interval(args.interval),
    )


def report(result: PipelineResult, json_output: bool) -> None:
    """Print the per-agent summary (or the full result as JSON)."""
    if json_output:
        print(json.dumps(result.to_summary_dict(), indent=2))
        return

    print("\n[agent summaries]")
    for line in result.format_agent_summaries():
        print(line)
    print()


async def interactive_loop(engine: Engine, json_output: bool) -> None:
    """Read requests until the exit sentinel; blank lines are ignored."""
    sentinel = settings.EXIT_SENTINEL.lower()
    while True:
        try:
            raw = await asyncio.to_thread(
                input,
                f'Enter a feature request for the multi-agent environment (or type "{sentinel}" to quit): ',
            )
        except EOFError:
            break

        request = raw.strip()
        if not request:
            continue
        if request.lower() == sentinel:
            break

        result = await engine.run(request)
        report(result, json_output)


async def run(args: argparse.Namespace) -> int:
    try:
        engine = build_engine(args)
    except ConfigurationError as e:
        logger.error(f"Invalid configuration: {e}", category=LogCategory.SYSTEM)
        return 1
    request = load_request(args)

    if request is None:
        await interactive_loop(engine, args.json_output)
        return 0

    try:
        result = await engine.run(request)
    except InvalidRequestError as e:
        logger.error(str(e), category=LogCategory.SYSTEM)
        return 1

    report(result, args.json_output)
    return 0


def main(argv: Optional[list[str]] = None) -> int:
    """
    Main entry point for Agentic-Board.

    Returns:
        Exit code: 0 on a completed run, 1 on an invalid request or limits,
        2 on an unexpected error, 130 when interrupted
    """
    args = parse_args(argv)

    configure_logging(
        json_mode=settings.LOG_JSON_MODE,
        show_agent_thoughts=settings.LOG_SHOW_AGENT_THOUGHTS,
        log_level="DEBUG" if args.verbose else settings.LOG_LEVEL,
    )

    logger.info("=" * 60, category=LogCategory.SYSTEM)
    logger.info("Agentic-Board Multi-Agent Pipeline", category=LogCategory.SYSTEM)
    logger.info("=" * 60, category=LogCategory.SYSTEM)

    try:
        return asyncio.run(run(args))
    except KeyboardInterrupt:
        logger.warning("Interrupted by user", category=LogCategory.SYSTEM)
        return 130
    except Exception as e:
        logger.error(f"Unexpected error: {e}", category=LogCategory.SYSTEM)
        if args.verbose:
            import traceback
            traceback.print_exc()
        return 2


if __name__ == "__main__":
    sys.exit(main())
