"""Command-line rate-of-fire analysis of a recorded WAV file.

Usage::

    python main.py recording.wav --json results.json --min-burst-count 3
"""
from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path
from typing import List, Optional, Sequence

from analysis.export import write_json
from analysis.models import AnalysisResult
from analysis.pipeline import RateOfFireDetector
from analysis.settings import SETTINGS_PARAMETERS, AnalysisSettings
from audio.wav_source import load_wav

logger = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Detect gunshots in a recording and report rate of fire per burst."
    )
    parser.add_argument("input", type=Path, help="PCM WAV file to analyse.")
    parser.add_argument(
        "--json",
        dest="json_path",
        type=Path,
        default=None,
        help="Write the full analysis result as JSON to this path.",
    )
    parser.add_argument("-v", "--verbose", action="store_true", help="Enable debug logging.")
    group = parser.add_argument_group("detection parameters")
    for name, param in SETTINGS_PARAMETERS.items():
        group.add_argument(
            "--" + name.replace("_", "-"),
            dest=name,
            type=int if param.integer else float,
            default=param.default,
            help=f"{param.help} (default: {param.default})",
        )
    return parser


def format_report(result: AnalysisResult) -> str:
    summary = result.summary
    lines: List[str] = [
        f"Input: {result.input_file or '<samples>'} ({result.audio_duration:.2f}s at {result.sample_rate}Hz)",
        f"Shots: {summary.total_shots} in {summary.total_bursts} bursts",
    ]
    if summary.total_bursts == 0:
        lines.append("No bursts detected. Try adjusting the detection parameters.")
        return "\n".join(lines)

    lines.append(f"Overall rate: {summary.overall_rate_rpm:.1f} RPM")
    lines.append(
        "Burst rate: mean {:.1f}, median {:.1f}, min {:.1f}, max {:.1f}, std {:.1f} RPM".format(
            summary.mean_burst_rate_rpm,
            summary.median_burst_rate_rpm,
            summary.min_burst_rate_rpm,
            summary.max_burst_rate_rpm,
            summary.std_burst_rate_rpm,
        )
    )
    for burst in result.bursts:
        lines.append(
            f"  Burst {burst.burst_number}: {burst.num_shots} shots, {burst.rate_rpm:.1f} RPM "
            f"({burst.start_time:.2f}s - {burst.end_time:.2f}s)"
        )
    return "\n".join(lines)


def main(argv: Optional[Sequence[str]] = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    try:
        settings = AnalysisSettings(**{name: getattr(args, name) for name in SETTINGS_PARAMETERS})
    except ValueError as exc:
        parser.error(str(exc))

    try:
        audio = load_wav(args.input)
    except (OSError, ValueError) as exc:
        logger.error("Could not read %s: %s", args.input, exc)
        return 1

    result = RateOfFireDetector(settings).analyze(audio, input_file=args.input.name)
    print(format_report(result))
    if args.json_path is not None:
        write_json(result, args.json_path)
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
