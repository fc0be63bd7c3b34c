#!/usr/bin/env python3
"""
APRS Codec - Command Line Interface

Main entry point for the APRS Codec tools.
Parses packets to JSON and verifies lossless re-encoding.
"""

import argparse
import json
import logging
import sys
from typing import Iterator, List, Optional

from . import __version__
from .core.config import CodecConfig
from .core.errors import AprsError
from .protocols.message import Message
from .protocols.position import PositionReport
from .protocols.serialization import message_to_dict
from .utils.conversions import coordinates_to_str

logger = logging.getLogger(__name__)


def _stdin_lines() -> Iterator[str]:
    """Read stdin lines, mapping bytes one-to-one with Latin-1."""
    buffer = getattr(sys.stdin, "buffer", None)
    if buffer is None:
        yield from sys.stdin
        return
    for raw in buffer:
        yield raw.decode("latin-1")


def _iter_packets(args: argparse.Namespace, config: CodecConfig) -> Iterator[str]:
    """Yield packets from the command line, or from stdin when none are given."""
    lines = args.packets if args.packets else _stdin_lines()
    for line in lines:
        if config.parser.strip_whitespace:
            line = line.strip()
        if line:
            yield line


def _summary(message: Message) -> str:
    """One-line description of a parsed message."""
    text = f"{message.source} -> {message.destination}"
    body = message.body
    if isinstance(body, PositionReport):
        where = coordinates_to_str(float(body.latitude), float(body.longitude))
        text += f" position {where} [{body.symbol_table}{body.symbol_code}]"
        if body.altitude is not None:
            text += f" alt {body.altitude} ft"
    elif message.is_status:
        text += f" status {body.comment!r}"
    else:
        text += " unknown"
    return text


def cmd_info(args: argparse.Namespace, config: CodecConfig) -> int:
    """Display module information."""
    print(f"APRS Codec v{__version__}")
    print()
    print("APRS Packet Parser and Encoder")
    print("==============================")
    print()
    print("Supported Reports:")
    print("  - Position (uncompressed and compressed, '/')")
    print("  - Status ('>')")
    print()
    print("Features:")
    print("  - Timestamps, callsigns with SSID, digipeater path")
    print("  - Compressed course/speed, radio range and altitude")
    print("  - Data extensions (CSE/SPD, PHG, RNG, DFS) and altitude")
    print("  - Lossless re-encoding of parsed reports")
    return 0


def cmd_parse(args: argparse.Namespace, config: CodecConfig) -> int:
    """Parse packets and print them."""
    failures = 0

    for packet in _iter_packets(args, config):
        try:
            message = Message.parse(packet)
        except AprsError as e:
            failures += 1
            logger.warning(f"Rejected packet {packet!r}: {e}")
            print(f"Error: {e}", file=sys.stderr)
            if not config.parser.skip_invalid:
                return 1
            continue

        if args.debug:
            print(repr(message))
        elif args.summary:
            print(_summary(message))
        else:
            document = message_to_dict(message)
            if config.output.include_raw:
                document["raw"] = packet
            print(
                json.dumps(
                    document,
                    indent=config.output.json_indent,
                    sort_keys=config.output.sort_keys,
                )
            )

    if failures:
        logger.info(f"{failures} packet(s) rejected")
    return 0


def cmd_roundtrip(args: argparse.Namespace, config: CodecConfig) -> int:
    """Parse and re-encode packets, reporting any that differ."""
    total = 0
    mismatches = 0
    errors = 0

    for packet in _iter_packets(args, config):
        total += 1
        try:
            raw = packet.encode("latin-1")
            encoded = Message.parse(raw).to_bytes()
        except UnicodeEncodeError:
            errors += 1
            print(f"Error: not a Latin-1 packet: {packet!r}", file=sys.stderr)
            continue
        except AprsError as e:
            errors += 1
            print(f"Error: {e}", file=sys.stderr)
            continue

        if encoded != raw:
            mismatches += 1
            print(f"Mismatch: {packet!r} -> {encoded.decode('latin-1')!r}")

    print(f"{total} packet(s), {mismatches} mismatch(es), {errors} error(s)")
    return 1 if mismatches or errors else 0


def create_parser() -> argparse.ArgumentParser:
    """Create argument parser."""
    parser = argparse.ArgumentParser(
        prog="aprs-codec",
        description="APRS Codec - APRS packet parser and encoder",
    )
    parser.add_argument(
        "-V",
        "--version",
        action="version",
        version=f"%(prog)s {__version__}",
    )
    parser.add_argument(
        "-c", "--config", type=str, help="Configuration file (default: user config)"
    )
    parser.add_argument(
        "-v", "--verbose", action="store_true", help="Enable debug logging"
    )

    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    # Info command
    info_parser = subparsers.add_parser("info", help="Display module information")
    info_parser.set_defaults(func=cmd_info)

    # Parse command
    parse_parser = subparsers.add_parser("parse", help="Parse packets to JSON")
    parse_parser.add_argument(
        "packets", nargs="*", help="Packets to parse (reads stdin if not provided)"
    )
    output_group = parse_parser.add_mutually_exclusive_group()
    output_group.add_argument(
        "--debug", action="store_true", help="Print Python representation instead of JSON"
    )
    output_group.add_argument(
        "--summary", action="store_true", help="Print a one-line summary per packet"
    )
    parse_parser.set_defaults(func=cmd_parse)

    # Roundtrip command
    roundtrip_parser = subparsers.add_parser(
        "roundtrip", help="Verify packets re-encode to identical bytes"
    )
    roundtrip_parser.add_argument(
        "packets", nargs="*", help="Packets to check (reads stdin if not provided)"
    )
    roundtrip_parser.set_defaults(func=cmd_roundtrip)

    return parser


def load_config(path: Optional[str]) -> CodecConfig:
    """Load configuration from ``path``, or the default location."""
    if path is None:
        return CodecConfig.load_default()
    config = CodecConfig.load(path)
    if config is None:
        logger.warning("Using default configuration due to load failure")
        return CodecConfig()
    return config


def main(argv: Optional[List[str]] = None) -> int:
    """
    Main entry point.

    Args:
        argv: Command line arguments (uses sys.argv if None)

    Returns:
        Exit code (0 for success)
    """
    parser = create_parser()
    args = parser.parse_args(argv)

    config = load_config(args.config)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else getattr(logging, config.log_level),
        format="%(levelname)s %(name)s: %(message)s",
    )

    if args.command is None:
        # No command specified - show info
        return cmd_info(args, config)

    return args.func(args, config)


if __name__ == "__main__":
    sys.exit(main())
