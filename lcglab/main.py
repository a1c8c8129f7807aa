"""
LCG Lab - Main Entry Point
Generate an LCG sequence and compare its period and Cesàro π estimate
against an independent reference sequence.
"""

import argparse
import json
import sys
from typing import List, Optional

from .analysis.orchestrator import AnalysisResult, analyze
from .api.lab_one import to_response
from .core_random.lcg import DEFAULT_INCREMENT, DEFAULT_MODULUS, DEFAULT_MULTIPLIER
from .core_random.models import THEORETICAL_PI, CesaroReport, GenerationRequest, PeriodReport
from .core_random.reference import SeededRandomSource
from .errors import LabError
from .files.report_export import export_report, save_sequence_text
from .integration.event_logger import EventLogger


EXIT_INVALID = 2


def _int_arg(value: str) -> int:
    """Accept decimal or 0x-prefixed hex."""
    try:
        return int(value, 0)
    except ValueError:
        raise argparse.ArgumentTypeError(f"Expected an integer, received '{value}'.") from None


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="lcglab",
        description="Linear congruential generator period and Cesàro π analysis",
    )
    parser.add_argument("--m", type=_int_arg, default=DEFAULT_MODULUS, help="Modulus (>= 1)")
    parser.add_argument("--a", type=_int_arg, default=DEFAULT_MULTIPLIER, help="Multiplier (>= 0)")
    parser.add_argument("--c", type=_int_arg, default=DEFAULT_INCREMENT, help="Increment (>= 0)")
    parser.add_argument("--x0", type=_int_arg, default=1, help="Seed, reduced modulo m")
    parser.add_argument("--n", type=_int_arg, default=100, help="Sequence length (>= 2)")
    parser.add_argument(
        "--seed-reference",
        dest="seed_reference",
        type=_int_arg,
        default=None,
        help="Seed the reference generator for a reproducible run (OS entropy if omitted)",
    )
    parser.add_argument("--json", action="store_true", help="Print the LabOne JSON response body")
    parser.add_argument("--save", metavar="PATH", help="Write the sequence text file")
    parser.add_argument("--export", metavar="PATH", help="Write an integrity-checked JSON report")
    parser.add_argument("--password", help="Protect the exported report with a keyed HMAC")
    parser.add_argument("--journal", action="store_true", help="Print the analysis journal")
    return parser


def _format_estimate(report: CesaroReport) -> str:
    if not report.is_defined:
        return "undefined (no coprime pairs)"
    return f"{report.pi_estimate:.15f} ({report.coprime_pair_count}/{report.total_pair_count} coprime)"


def _format_period(report: PeriodReport) -> str:
    if report.cycle_confirmed:
        return f"{report.period} (cycle starts at index {report.cycle_start})"
    return f"{report.period} (no cycle within the sampled window)"


def print_summary(result: AnalysisResult) -> None:
    """Print the analysis in the layout of the lab page."""
    print("=" * 60)
    print("LCG sequence estimation:")
    print(f"  Period = {_format_period(result.period)}")
    print(f"  Actual value: {_format_estimate(result.cesaro)}")
    print(f"  Theoretical value: {THEORETICAL_PI!r}")
    if result.full_period_expected is not None:
        print(f"  Full period by Hull-Dobell: {'Yes' if result.full_period_expected else 'No'}")
    print("\nRandom sequence estimation:")
    print(f"  Period = {_format_period(result.reference_period)}")
    print(f"  Actual value: {_format_estimate(result.reference_cesaro)}")
    print(f"  Theoretical value: {THEORETICAL_PI!r}")
    print("=" * 60)
    print("Generated Sequence:")
    print(", ".join(str(x) for x in result.sequence))


def main(argv: Optional[List[str]] = None) -> int:
    """Main entry point for LCG Lab."""
    parser = build_parser()
    args = parser.parse_args(argv)
    if args.password is not None and not args.export:
        parser.error("--password requires --export")

    request = GenerationRequest(
        modulus=args.m,
        multiplier=args.a,
        increment=args.c,
        seed=args.x0,
        length=args.n,
    )
    source = SeededRandomSource(args.seed_reference) if args.seed_reference is not None else None
    journal = EventLogger()

    try:
        result = analyze(request, source=source, event_logger=journal)
    except LabError as exc:
        print(f"error: {exc}", file=sys.stderr)
        return EXIT_INVALID

    if args.json:
        print(json.dumps(to_response(result)))
    else:
        print_summary(result)

    if args.save:
        written = save_sequence_text(args.save, request, result.sequence)
        print(f"Sequence saved to {written}", file=sys.stderr)

    if args.export:
        written = export_report(args.export, result, password=args.password, event_logger=journal)
        print(f"Report exported to {written}", file=sys.stderr)

    if args.journal:
        journal.print_audit_log()

    return 0


if __name__ == "__main__":
    sys.exit(main())
