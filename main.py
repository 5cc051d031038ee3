#!/usr/bin/env python3
"""Objection Handler CLI."""

import argparse
import json
import sys

from config.logging_config import configure_logging
from config.settings import Settings
from errors import InvalidRequest
from orchestrator import ObjectionHandlerOrchestrator

EXIT_OK = 0
EXIT_FAILED = 1
EXIT_INVALID = 2


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Objection Handler - suggest a reply to what a prospect just said"
    )
    parser.add_argument(
        "--input",
        "-i",
        type=str,
        help="What the other person said"
    )
    parser.add_argument(
        "--strategy",
        "-s",
        type=str,
        help="Steering for the reply, e.g. 'value-focused sales'"
    )
    parser.add_argument(
        "--provider",
        type=str,
        choices=["anthropic", "openai"],
        help="LLM provider (default: anthropic)"
    )
    parser.add_argument(
        "--model",
        type=str,
        help="Override the provider's default model"
    )
    parser.add_argument(
        "--json",
        action="store_true",
        help="Print the full JSON payload instead of just the reply"
    )
    parser.add_argument(
        "--serve",
        action="store_true",
        help="Run the HTTP API instead of processing a single input"
    )
    parser.add_argument("--host", type=str, help="Bind address for --serve")
    parser.add_argument("--port", type=int, help="Port for --serve")
    parser.add_argument(
        "--verbose",
        "-v",
        action="store_true",
        help="Enable verbose output"
    )
    return parser


def serve(settings: Settings):
    """Run the API under uvicorn."""
    import uvicorn
    from api.app import create_app

    uvicorn.run(
        create_app(settings=settings),
        host=settings.host,
        port=settings.port,
        log_level=settings.log_level.lower(),
    )


def main(argv=None) -> int:
    """Main CLI entry point."""
    parser = build_parser()
    args = parser.parse_args(argv)

    settings = Settings.from_env(
        llm_provider=args.provider,
        llm_model=args.model,
        host=args.host,
        port=args.port,
        verbose=args.verbose or None,
    )
    configure_logging(settings.log_level, verbose=settings.verbose)

    if args.serve:
        serve(settings)
        return EXIT_OK

    orchestrator = ObjectionHandlerOrchestrator(settings=settings)

    try:
        result = orchestrator.process(args.input, args.strategy)
    except InvalidRequest as e:
        print(f"Error: {e}", file=sys.stderr)
        return EXIT_INVALID

    if args.json:
        print(json.dumps(result.to_wire(), indent=2))
    elif result.succeeded:
        print("\n" + "="*60)
        print("SUGGESTED REPLY")
        print("="*60 + "\n")
        print(result.response)
        print(f"\nIntent: {result.analysis.intent.value} | "
              f"Tone: {result.analysis.recommended_response_tone.value} | "
              f"Quality: {result.quality.overall_score:g}/10")
        print("\n")
    else:
        print(f"Error processing conversation: {result.details}", file=sys.stderr)
        print(result.fallback_response)

    return EXIT_OK if result.succeeded else EXIT_FAILED


if __name__ == "__main__":
    sys.exit(main())
