"""
SafetyGate CLI

Command-line interface for scanning narratives and printing court-safe
boilerplate.

Usage:
    safetygate scan narrative.txt --mode court_mode --court SC --filing writ
    safetygate scan - --json < narrative.txt
    safetygate phrases --court LHC --filing writ
    safetygate front-matter --mode court_mode --court IHC --filing writ

Exit codes:
    0  success
    1  invalid input or configuration
    2  scan completed but the result is blocked
"""
from __future__ import annotations

import argparse
import json
import sys
from pathlib import Path
from typing import Optional, Sequence

from .config import GateSettings, configure_logging
from .exceptions import InvalidInputError, SafetyGateError
from .models import CourtStyle, DetectionContext, DistributionMode, FilingType
from .phrases import load_phrase_library
from .engine import (
    SafetyGate,
    build_safety_disclaimers,
    build_safety_front_matter,
    render_blocks,
)

EXIT_OK = 0
EXIT_ERROR = 1
EXIT_BLOCKED = 2


def _read_text(source: str) -> str:
    if source == "-":
        return sys.stdin.read()
    try:
        return Path(source).read_text(encoding="utf-8")
    except OSError as e:
        raise InvalidInputError(
            message=f"Cannot read input file: {e}",
            details={"path": source},
        )


def _read_context(path: Optional[str]) -> Optional[DetectionContext]:
    if not path:
        return None
    try:
        data = json.loads(Path(path).read_text(encoding="utf-8"))
    except (OSError, json.JSONDecodeError) as e:
        raise InvalidInputError(
            message=f"Cannot load context file: {e}",
            details={"path": path},
        )
    if not isinstance(data, dict):
        raise InvalidInputError(
            message="Context file must hold a JSON object",
            details={"path": path},
        )
    return DetectionContext.from_dict(data)


# =============================================================================
# Commands
# =============================================================================

def cmd_scan(args: argparse.Namespace, settings: GateSettings) -> int:
    """Run the full gate over a file or stdin."""
    text = _read_text(args.input)
    context = _read_context(args.context)
    library = load_phrase_library(args.phrase_pack or settings.phrase_pack)

    gate = SafetyGate(settings=settings, phrase_library=library)
    result = gate.run(
        text,
        context=context,
        mode=args.mode,
        court_style=args.court,
        filing_type=args.filing,
        is_admin_override=args.admin_override,
    )

    if args.json:
        payload = result.to_dict()
        payload["seal"] = result.seal()
        print(json.dumps(payload, indent=2, ensure_ascii=False))
    else:
        decision = result.decision
        print("=" * 70)
        print("SAFETY GATE REPORT")
        print("=" * 70)
        print(f"  Mode:     {result.mode.value}")
        if result.court_style and result.filing_type:
            print(f"  Court:    {result.court_style.value} / {result.filing_type.value}")
        print(f"  Overall:  {decision.overall.value}")
        print(f"  Signals:  {len(decision.signals)}")
        print(f"  Seal:     {result.seal()}")
        print()

        if result.blockers:
            print("BLOCKERS")
            print("-" * 70)
            for blocker in result.blockers:
                print(f"  [{blocker.code}] {blocker.message}")
            print()

        if result.warnings:
            print("WARNINGS")
            print("-" * 70)
            for warning in result.warnings:
                print(f"  [{warning.code}] {warning.message}")
            print()

        if result.transformations:
            print("TRANSFORMATIONS")
            print("-" * 70)
            for t in result.transformations:
                print(f"  {t.rule_id:<18} {t.from_text!r} -> {t.to_text!r}")
            print()

        print("REWRITTEN TEXT")
        print("-" * 70)
        print(result.rewritten_text)

    return EXIT_BLOCKED if result.is_blocked else EXIT_OK


def cmd_phrases(args: argparse.Namespace, settings: GateSettings) -> int:
    """Print the resolved phrase set for a court pair."""
    library = load_phrase_library(args.phrase_pack or settings.phrase_pack)
    court = args.court or settings.default_court_style.value
    filing = args.filing or settings.default_filing_type.value

    print(f"Phrases for {court} / {filing}")
    print("-" * 60)
    for key, alternatives in library.resolve(court, filing).items():
        print(f"{key.value}:")
        for alternative in alternatives:
            print(f"  - {alternative}")
    return EXIT_OK


def cmd_front_matter(args: argparse.Namespace, settings: GateSettings) -> int:
    """Print the front-matter and disclaimer blocks."""
    library = load_phrase_library(args.phrase_pack or settings.phrase_pack)
    mode = DistributionMode(args.mode) if args.mode else settings.default_mode

    blocks = build_safety_front_matter(
        mode,
        court_style=args.court,
        filing_type=args.filing,
        case_title=args.case_title,
        event_count=args.events,
        source_count=args.sources,
        library=library,
    )
    blocks.append(build_safety_disclaimers(mode))
    print(render_blocks(blocks))
    return EXIT_OK


# =============================================================================
# Parser
# =============================================================================

def _add_court_arguments(parser: argparse.ArgumentParser) -> None:
    parser.add_argument(
        "--court",
        choices=[c.value for c in CourtStyle],
        help="Court style (e.g. IHC, SC)",
    )
    parser.add_argument(
        "--filing",
        choices=[f.value for f in FilingType],
        help="Filing type (e.g. writ, appeal)",
    )
    parser.add_argument(
        "--phrase-pack",
        help="YAML/JSON phrase override pack layered on the built-in phrases",
    )


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="SafetyGate defamation / privacy risk gate",
        prog="safetygate",
    )
    subparsers = parser.add_subparsers(dest="command", help="Commands")
    modes = [m.value for m in DistributionMode]

    # Scan command
    scan_parser = subparsers.add_parser("scan", help="Scan and rewrite a narrative")
    scan_parser.add_argument("input", nargs="?", default="-", help="Input file ('-' for stdin)")
    scan_parser.add_argument("--mode", choices=modes, help="Distribution mode")
    scan_parser.add_argument("--context", help="JSON file with entities / evidence artifacts")
    scan_parser.add_argument(
        "--admin-override", action="store_true", help="Suppress blockers (admin only)"
    )
    scan_parser.add_argument("--json", action="store_true", help="Print the result as JSON")
    _add_court_arguments(scan_parser)
    scan_parser.set_defaults(func=cmd_scan)

    # Phrases command
    phrases_parser = subparsers.add_parser("phrases", help="Print resolved court phrases")
    _add_court_arguments(phrases_parser)
    phrases_parser.set_defaults(func=cmd_phrases)

    # Front-matter command
    fm_parser = subparsers.add_parser("front-matter", help="Print front-matter blocks")
    fm_parser.add_argument("--mode", choices=modes, help="Distribution mode")
    fm_parser.add_argument("--case-title", help="Case title for the methodology block")
    fm_parser.add_argument("--events", type=int, default=0, help="Event count")
    fm_parser.add_argument("--sources", type=int, default=0, help="Evidence source count")
    _add_court_arguments(fm_parser)
    fm_parser.set_defaults(func=cmd_front_matter)

    return parser


def main(argv: Optional[Sequence[str]] = None) -> int:
    """Main entry point."""
    parser = build_parser()
    args = parser.parse_args(argv)

    if not args.command:
        parser.print_help()
        return EXIT_ERROR

    try:
        settings = GateSettings.from_env()
        configure_logging(settings)
        return args.func(args, settings)
    except SafetyGateError as e:
        print(f"error: {e}", file=sys.stderr)
        return EXIT_ERROR


if __name__ == "__main__":
    sys.exit(main())
