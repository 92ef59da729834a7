"""Command-line interface for the address finder."""

from __future__ import annotations

import argparse
import json
import sys
from pathlib import Path

from .config import Settings, configure_logging
from .errors import AddressFinderError
from .extractor import AddressExtractor
from .normalization import normalize_address
from .service import find_closest


def _read_text_file(path: Path) -> str:
    if str(path) == "-":
        return sys.stdin.read()
    return path.read_text(encoding="utf-8")


def cli() -> None:
    """Console-script entry point.

    Installed as `address-finder`:

        address-finder --text-file pasted.txt --start "1 Main St, Austin, TX"
    """
    raise SystemExit(main())


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(
        description=(
            "Extract US street addresses from pasted text (a plain list or free-form "
            "prose) and optionally rank them by driving distance from a start address."
        )
    )

    text_group = parser.add_mutually_exclusive_group(required=True)
    text_group.add_argument("--text", help="Input text to analyze.")
    text_group.add_argument(
        "--text-file", help="Read input text from a file ('-' for stdin)."
    )

    parser.add_argument(
        "--start",
        default=None,
        help=(
            "Starting address. If provided, extracted addresses are ranked by driving "
            "distance using the Google Distance Matrix API (needs GOOGLE_MAPS_API_KEY)."
        ),
    )
    parser.add_argument(
        "--normalize",
        action="store_true",
        help="Clean up spacing and commas in each extracted address.",
    )
    parser.add_argument(
        "--list-threshold",
        type=float,
        default=None,
        help="Share of address-like lines (0..1) needed to treat input as a list. Default: 0.7.",
    )
    parser.add_argument(
        "--jsonl",
        "--compact-json",
        action="store_true",
        help="Print output as a single-line JSON (JSONL-style).",
    )

    args = parser.parse_args(argv)

    settings = Settings.from_env()
    configure_logging(settings.log_level)

    text = args.text
    if text is None:
        text = _read_text_file(Path(args.text_file))

    if len(text) > settings.max_input_chars:
        raise SystemExit(
            f"Input text is too long ({len(text)} > {settings.max_input_chars} characters)"
        )

    if args.list_threshold is not None:
        if args.list_threshold < 0.0 or args.list_threshold > 1.0:
            raise SystemExit("--list-threshold must be in range [0, 1]")
        extractor = AddressExtractor(list_threshold=args.list_threshold)
    else:
        extractor = AddressExtractor()

    result = extractor.extract_detailed(text)
    addresses = result.addresses
    if args.normalize:
        addresses = [normalize_address(a) for a in addresses]

    out: dict[str, object] = {
        "addresses": addresses,
        "mode": result.mode,
    }

    if args.start is not None:
        try:
            ranked = find_closest(
                args.start,
                addresses,
                client=settings.distance_client(),
                max_addresses=settings.max_addresses,
            )
        except AddressFinderError as e:
            raise SystemExit(f"error: {e}") from e

        out["find_closest"] = ranked.to_dict()

    if args.jsonl:
        print(json.dumps(out, ensure_ascii=False))
    else:
        print(json.dumps(out, ensure_ascii=False, indent=2))

    return 0


if __name__ == "__main__":
    raise SystemExit(main())
