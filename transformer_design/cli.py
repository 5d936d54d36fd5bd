from __future__ import annotations

import argparse
import json
import logging
import sys
import warnings
from pathlib import Path
from typing import Any, Dict

from pydantic import ValidationError

from .costing import LifecycleOptions, estimate_cost, estimate_lifecycle_cost
from .design import DEFAULT_PROFILE, DesignRequirements, compute_design, design_summary
from .design.bom import bom_frame
from .design.profile import load_profile
from .errors import ImpedanceOutOfTolerance, TransformerDesignError
from .records import listing_record


def load_requirements(path: str) -> Dict[str, Any]:
    p = Path(path)
    if not p.exists():
        raise FileNotFoundError(f"Input JSON not found: {path}")
    return json.loads(p.read_text())


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(
        description="Transformer design and cost estimation (core, windings, losses, impedance, thermal, BOM, cost)."
    )
    parser.add_argument("--input", "-i", required=True, help="Path to design requirements JSON.")
    parser.add_argument("--profile", help="Optional design profile JSON overriding the default constants.")
    parser.add_argument("--output", "-o", default="design.json", help="Path to write the design JSON.")
    parser.add_argument(
        "--cost-output", default="cost.json", help="Path to write the cost and lifecycle cost JSON."
    )
    parser.add_argument("--bom-csv", help="Optional path to write the bill of materials as CSV.")
    parser.add_argument("--listing-output", help="Optional path to write the flat marketplace listing record.")
    parser.add_argument("--oil-type", default="mineral", help="mineral, naturalEster, syntheticEster or silicon.")
    parser.add_argument("--tap-changer", default="noLoad", help="noLoad or onLoad.")
    parser.add_argument("--oltc", action="store_true", help="Include an on-load tap changer.")
    parser.add_argument("--region", default="usa", help="Manufacturing region.")
    parser.add_argument("--electricity-rate", type=float, default=0.10, help="Energy price ($/kWh).")
    parser.add_argument("--years", type=float, default=25.0, help="Operating years for lifecycle cost.")
    parser.add_argument("--load-factor", type=float, default=0.5, help="Average load factor (fraction).")
    parser.add_argument("--verbose", "-v", action="store_true", help="Log design stages.")

    args = parser.parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )

    try:
        requirements = DesignRequirements.model_validate(load_requirements(args.input))
        profile = load_profile(args.profile) if args.profile else DEFAULT_PROFILE
        options = LifecycleOptions(
            oil_type=args.oil_type,
            tap_changer_type=args.tap_changer,
            include_oltc=args.oltc,
            region=args.region,
            electricity_rate=args.electricity_rate,
            operating_years=args.years,
            load_factor=args.load_factor,
        )
    except (FileNotFoundError, json.JSONDecodeError) as e:
        print(f"Input error: {e}", file=sys.stderr)
        return 2
    except ValidationError as e:
        print("Input validation error:", file=sys.stderr)
        print(e, file=sys.stderr)
        return 2

    try:
        with warnings.catch_warnings():
            # reported from design.warnings below
            warnings.simplefilter("ignore", ImpedanceOutOfTolerance)
            design = compute_design(requirements, profile)
        cost = estimate_cost(design, requirements, options)
        lifecycle = estimate_lifecycle_cost(design, requirements, options)
    except TransformerDesignError as e:
        print(f"Design error: {e}", file=sys.stderr)
        return 2

    Path(args.output).write_text(design.model_dump_json(indent=2))
    Path(args.cost_output).write_text(
        json.dumps(
            {"cost": cost.model_dump(mode="json"), "lifecycle": lifecycle.model_dump(mode="json")},
            indent=2,
        )
    )
    if args.bom_csv:
        bom_frame(design.bom).to_csv(args.bom_csv, index=False)
    if args.listing_output:
        Path(args.listing_output).write_text(json.dumps(listing_record(design, cost), indent=2))

    print(design_summary(design))
    print(f"Cost: ${cost.total_cost:,.2f} (${cost.cost_per_kva:,.2f}/kVA), lead time {cost.lead_time_weeks[0]}-{cost.lead_time_weeks[1]} weeks")
    print(
        f"Lifecycle ({lifecycle.operating_years:g} years at ${lifecycle.electricity_rate:g}/kWh): "
        f"${lifecycle.total_lifecycle_cost:,.2f}"
    )
    if design.warnings:
        print("\nWarnings:", file=sys.stderr)
        for w in design.warnings:
            print(f"- {w}", file=sys.stderr)

    return 1 if design.warnings else 0


if __name__ == "__main__":
    raise SystemExit(main())
