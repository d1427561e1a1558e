"""Main CLI entry point for lcicodec."""

from __future__ import annotations

import argparse
import logging
import sys

from .. import __version__
from ..codec import decode, encode
from ..config import CodecOptions
from ..exceptions import LciError
from ..models.lci import (
    AltitudeType,
    BssidList,
    Datum,
    FloorField,
    GeodeticField,
    LocationRecord,
    MovementType,
    UsagePolicyField,
)
from .describe import describe_diagnostics, describe_record


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="lcicodec",
        description="lcicodec: IEEE 802.11 Location Configuration Information codec",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  lcicodec --decode 010008001052834d12efd2b08b9b4bf1cc2c0000410406000000000012060101
  lcicodec --lat=-33.8570095 --lon=151.2152005 --alt=11.2 --heightunc=0.0078125
  lcicodec --lat=42.3616375 --lon=-71.09063 --alt=20 --bssid=00:11:22:33:44:55 --check
        """,
    )

    parser.add_argument(
        "--decode", "--lci",
        metavar="HEX",
        dest="decode",
        help="Decode an LCI string (an lci= prefix is accepted)",
    )
    parser.add_argument(
        "-c", "--check",
        action="store_true",
        help="Decode the encoded string again, or re-encode the decoded record",
    )
    parser.add_argument(
        "-v", "--verbose",
        action="count",
        default=0,
        help="Log codec progress (-v for info, -vv for debug)",
    )
    parser.add_argument(
        "--version",
        action="version",
        version=f"lcicodec {__version__}",
    )

    location = parser.add_argument_group("LCI subelement")
    location.add_argument("--lat", "--latitude", type=float, default=0.0,
                          help="Latitude (degrees)")
    location.add_argument("--lon", "--longitude", type=float, default=0.0,
                          help="Longitude (degrees)")
    location.add_argument("--alt", "--altitude", type=float, default=0.0,
                          help="Altitude (unit per --altitude-type, meters by default)")
    location.add_argument("--latunc", type=float, default=0.0,
                          help="Latitude uncertainty (degrees, 0 = unknown)")
    location.add_argument("--lonunc", type=float, default=0.0,
                          help="Longitude uncertainty (degrees, 0 = unknown)")
    location.add_argument("--altunc", type=float, default=0.0,
                          help="Altitude uncertainty (0 = unknown)")
    location.add_argument("--altitude-type", type=int, default=int(AltitudeType.METERS),
                          help="Altitude type code (default %(default)s, meters)")
    location.add_argument("--datum", type=int, default=int(Datum.WGS84),
                          help="Coordinate datum code (default %(default)s, WGS84)")

    floor = parser.add_argument_group("Z subelement")
    floor.add_argument("--floor", type=float, default=0.0, help="Floor number")
    floor.add_argument("--height", type=float, default=0.0,
                       help="Height above floor (m)")
    floor.add_argument("--heightunc", type=float, default=0.0,
                       help="Height above floor uncertainty (m, 0 = unknown)")
    floor.add_argument(
        "--movement",
        choices=[m.name.lower() for m in MovementType],
        default=MovementType.FIXED.name.lower(),
        help="Expected to move (default %(default)s)",
    )

    usage = parser.add_argument_group("Usage Rules/Policy subelement")
    usage.add_argument("--no-retransmission", action="store_true",
                       help="Clear the retransmission allowed flag")
    usage.add_argument("--expiration", type=int, default=None, metavar="HOURS",
                       help="Retention expiration (hours, sets retention expires present)")
    usage.add_argument("--location-policy", action="store_true",
                       help="Set the STA location policy flag")

    colocated = parser.add_argument_group("Colocated BSSID subelement")
    colocated.add_argument(
        "--bssid",
        action="append",
        default=[],
        metavar="MAC[,MAC...]",
        help="Colocated BSSIDs (comma separated, may be repeated)",
    )

    policy = parser.add_argument_group("encoding policy")
    policy.add_argument("--smallest", action="store_true",
                        help="Zero uncertainty means smallest (as opposed to unknown)")
    policy.add_argument("--bssid-indicator", choices=["count", "zero"], default="count",
                        help="Max BSSID indicator to write (default %(default)s)")
    policy.add_argument("--force-location", action="store_true",
                        help="Emit the LCI subelement even at 0/0/0")
    policy.add_argument("--no-location", action="store_true",
                        help="Omit the LCI subelement")
    policy.add_argument("--no-floor", action="store_true", help="Omit the Z subelement")
    policy.add_argument("--no-usage", action="store_true",
                        help="Omit the Usage Rules/Policy subelement")
    policy.add_argument("--no-colocated", action="store_true",
                        help="Omit the colocated BSSID subelement")

    return parser


def options_from_args(args: argparse.Namespace) -> CodecOptions:
    return CodecOptions(
        zero_uncertainty_is_smallest=args.smallest,
        include_location=not args.no_location,
        force_location=args.force_location,
        include_floor=not args.no_floor,
        include_usage=not args.no_usage,
        include_colocated=not args.no_colocated,
        bssid_indicator=args.bssid_indicator,
    )


def record_from_args(args: argparse.Namespace) -> LocationRecord:
    """Build the record described by the encoding flags."""
    bssids = [part.strip() for value in args.bssid for part in value.split(",") if part.strip()]
    return LocationRecord(
        location=GeodeticField(
            latitude=args.lat,
            longitude=args.lon,
            altitude=args.alt,
            latitude_uncertainty=args.latunc,
            longitude_uncertainty=args.lonunc,
            altitude_uncertainty=args.altunc,
            altitude_type=args.altitude_type,
            datum=args.datum,
        ),
        floor=FloorField(
            movement=MovementType[args.movement.upper()],
            floor=args.floor,
            height_above_floor=args.height,
            height_uncertainty=args.heightunc,
        ),
        usage=UsagePolicyField(
            retransmission_allowed=not args.no_retransmission,
            retention_expires_present=args.expiration is not None,
            location_policy=args.location_policy,
            expiration_hours=args.expiration or 0,
        ),
        colocated=BssidList(addresses=bssids) if bssids else None,
    )


def _has_encoding_input(args: argparse.Namespace) -> bool:
    return any((
        args.lat, args.lon, args.alt,
        args.floor, args.height, args.heightunc,
        args.bssid, args.force_location,
    ))


def _print_lines(lines: list[str], stream=None) -> None:
    for line in lines:
        print(line, file=stream)


def run_decode(text: str, options: CodecOptions, check: bool) -> None:
    result = decode(text, options)
    _print_lines(describe_record(result.record))
    _print_lines(describe_diagnostics(result.diagnostics), sys.stderr)
    if check:
        encoded = encode(result.record, options)
        _print_lines(describe_diagnostics(encoded.diagnostics), sys.stderr)
        print()
        print(f"lci={encoded.hex}")


def run_encode(record: LocationRecord, options: CodecOptions, check: bool) -> None:
    result = encode(record, options)
    _print_lines(describe_diagnostics(result.diagnostics), sys.stderr)
    print(f"lci={result.hex}")
    if check:
        decoded = decode(result.hex, options)
        print()
        _print_lines(describe_record(decoded.record))
        _print_lines(describe_diagnostics(decoded.diagnostics), sys.stderr)


def main(argv: list[str] | None = None) -> int:
    """Main entry point for the lcicodec CLI.

    Returns:
        Exit code (0 for success, non-zero for error)
    """
    parser = build_parser()
    args = parser.parse_args(argv)

    # Diagnostics are printed directly, so the logger stays quiet unless asked.
    level = {0: logging.ERROR, 1: logging.INFO}.get(args.verbose, logging.DEBUG)
    logging.basicConfig(level=level, format="%(levelname)s %(name)s: %(message)s")

    try:
        options = options_from_args(args)
        if args.decode is not None:
            run_decode(args.decode, options, args.check)
            return 0
        if _has_encoding_input(args):
            run_encode(record_from_args(args), options, args.check)
            return 0
    except (LciError, ValueError) as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    # Nothing to decode or encode
    parser.print_help(sys.stderr)
    return 1


if __name__ == "__main__":
    sys.exit(main())
