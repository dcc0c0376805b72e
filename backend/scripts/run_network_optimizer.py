#!/usr/bin/env python3
"""Run the facility network optimizer on a JSON payload."""

import argparse
import json
import logging
import sys
from pathlib import Path

root = Path(__file__).resolve().parent.parent
sys.path.insert(0, str(root))

from pydantic import ValidationError

from facility_network.config.profiles import UnknownCountryProfileError
from facility_network.config.settings import (
    get_settings,
    resolve_country_profile,
    resolve_log_level,
)
from facility_network.io_utils import load_payload, write_json
from facility_network.network.optimizer import optimize_network


def main() -> None:
    parser = argparse.ArgumentParser(description=__doc__)
    parser.add_argument("--input", required=True, type=Path, help="JSON with facilities and regions")
    parser.add_argument("--output", type=Path, default=None, help="Where to write the result JSON")
    args = parser.parse_args()

    logging.basicConfig(level=resolve_log_level(), format="%(asctime)s %(levelname)s %(name)s: %(message)s")
    settings = get_settings()

    try:
        facilities, regions = load_payload(args.input)
    except (FileNotFoundError, ValueError, json.JSONDecodeError) as exc:
        print(f"Error: {exc}", file=sys.stderr)
        sys.exit(1)

    try:
        profile = resolve_country_profile(settings)
    except UnknownCountryProfileError as exc:
        print(f"Error: unknown country profile {exc}", file=sys.stderr)
        sys.exit(1)

    try:
        result = optimize_network(facilities, regions, profile=profile)
    except ValidationError as exc:
        print(f"Error: invalid input records\n{exc}", file=sys.stderr)
        sys.exit(1)
    payload = result.model_dump(by_alias=True)

    if args.output:
        write_json(args.output, payload)
        print(f"Saved: {args.output}")
    else:
        print(json.dumps(payload, indent=2, ensure_ascii=False))


if __name__ == "__main__":
    main()
