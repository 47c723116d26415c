#!/usr/bin/env python3
# Copyright 2025 Softwell S.r.l. - SPDX-License-Identifier: Apache-2.0

"""Detect, decode and re-encode a DDEX XML document.

Prints the detected family/version/message type and the round-trip
comparison; optionally writes the re-encoded document.

Usage:
    python scripts/ddex_roundtrip.py <file> [--output OUTPUT] [--coverage] [-v]

Arguments:
    file            Path to a DDEX XML document
    --output        Path for the re-encoded document
    --coverage      Also report which element and attribute paths survived
    -v              Debug logging

Example:
    python scripts/ddex_roundtrip.py tests/data/ern/432/audio_album.xml --output out.xml
"""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path


def main():
    """Main entry point."""
    parser = argparse.ArgumentParser(
        description="Detect, decode and re-encode a DDEX XML document"
    )
    parser.add_argument("file", type=Path, help="Path to a DDEX XML document")
    parser.add_argument("--output", type=Path, help="Path for the re-encoded document")
    parser.add_argument(
        "--coverage",
        action="store_true",
        help="Report element and attribute paths lost by the round trip",
    )
    parser.add_argument("-v", "--verbose", action="store_true", help="Debug logging")
    args = parser.parse_args()

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )

    from ddex_xml import DdexError, MessageSniffer, build_registry, validate_round_trip
    from ddex_xml.oracle import field_coverage

    data = args.file.read_bytes()
    print(f"Processing: {args.file.name}\n")

    sniffer = MessageSniffer(build_registry())
    try:
        message, family, version = sniffer.parse_any(data)
        output = message.encode(pretty=True, xml_declaration=True)
    except DdexError as e:
        print(f"Failed ({e.stage or 'unknown'} stage): {e}")
        sys.exit(1)

    print(f"Parsed as {family} {version} {message.ROOT_ELEMENT}")
    for key, value in (message.namespace_attrs or {}).items():
        print(f"  {key} = {value}")

    comparison = validate_round_trip(data, sniffer.round_trip)
    print("\nRound trip:")
    for line in comparison.summary_lines():
        print(f"  {line}")

    if args.coverage:
        report = field_coverage(data, output)
        print(f"\nCoverage: {report.covered}/{report.total} paths ({report.percentage:.1f}%)")
        for path in report.uncovered[:20]:
            print(f"  - {path}")
        if len(report.uncovered) > 20:
            print(f"  ... and {len(report.uncovered) - 20} more")

    if args.output:
        args.output.parent.mkdir(parents=True, exist_ok=True)
        args.output.write_bytes(output)
        print(f"\nWritten to {args.output}")

    if not comparison.success:
        sys.exit(2)


if __name__ == "__main__":
    main()
