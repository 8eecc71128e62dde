"""Command line interface for the seating planner."""
from __future__ import annotations

import argparse
import csv
import logging
import sys
from pathlib import Path
from typing import Sequence

from .csv_loader import load_all
from .report import plan_report
from .solver import SeatingModel

REPORT_FIELDS = [
    "table", "status", "seated", "capacity", "fill_ratio",
    "conflict_pairs", "preference_pairs", "members",
]


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Wedding seating assistant")
    parser.add_argument("--guests", required=True, help="Path to guests.csv")
    parser.add_argument("--tables", required=True, help="Path to tables.csv")
    parser.add_argument("--relationships", required=True, help="Path to relationships.csv")
    parser.add_argument("--strict", action="store_true",
                        help="Leave guests unseated rather than accept a conflict or overflow a table.")
    parser.add_argument("--no-balance", action="store_true",
                        help="Skip the table balancing pass.")
    parser.add_argument("--out-assignments", type=Path,
                        help="Write assignments CSV: guest,table.")
    parser.add_argument("--out-report", type=Path,
                        help="Write per-table report CSV with fill and conflict counts.")
    parser.add_argument("--out-map", type=Path,
                        help="Write the interactive seating map as HTML.")
    parser.add_argument("--log-level", default="WARNING",
                        choices=["DEBUG", "INFO", "WARNING", "ERROR"])
    return parser


def main(argv: Sequence[str] | None = None) -> int:
    """Entry point used by ``seating-planner`` and ``python -m seating_planner.cli``."""
    parser = build_parser()
    args = parser.parse_args(argv)
    logging.basicConfig(level=args.log_level, format="%(levelname)s %(name)s: %(message)s")

    try:
        guests, tables, relationships = load_all(args.guests, args.tables, args.relationships)
    except (OSError, ValueError) as e:
        print(f"error: {e}", file=sys.stderr)
        return 2

    if guests and not tables:
        print("error: no tables to seat guests at", file=sys.stderr)
        return 1

    model = SeatingModel(
        policy="strict" if args.strict else "best_effort",
        balance=not args.no_balance,
    )
    model.build(guests, tables, relationships)
    plan = model.solve()
    assignments = plan.assignments()

    # Print simple assignments, in guest order
    for g in guests:
        if g.id in assignments:
            print(f"{g.id},{assignments[g.id]}")
    for gid in plan.unseated:
        print(f"[UNSEATED] {gid}")

    if args.out_assignments:
        args.out_assignments.parent.mkdir(parents=True, exist_ok=True)
        with args.out_assignments.open("w", newline="") as f:
            w = csv.writer(f)
            w.writerow(["guest", "table"])
            for g in guests:
                w.writerow([g.id, assignments.get(g.id, "")])

    report = plan_report(plan, model.graph)
    for s in report:
        print(f"[REPORT] {s['table']} status={s['status']} seated={s['seated']}/{s['capacity']} "
              f"conflicts={s['conflict_pairs']} preferences={s['preference_pairs']}")

    if args.out_report:
        args.out_report.parent.mkdir(parents=True, exist_ok=True)
        with args.out_report.open("w", newline="") as f:
            w = csv.DictWriter(f, fieldnames=REPORT_FIELDS)
            w.writeheader()
            for s in report:
                row = {k: s[k] for k in REPORT_FIELDS}
                row["fill_ratio"] = f"{s['fill_ratio']:.4f}"
                w.writerow(row)

    if args.out_map:
        from .seating_map import generate_seating_map

        args.out_map.parent.mkdir(parents=True, exist_ok=True)
        args.out_map.write_text(generate_seating_map(plan, guests, relationships), encoding="utf-8")
    return 0


if __name__ == "__main__":  # pragma: no cover - CLI entry point
    sys.exit(main())
