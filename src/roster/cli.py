from __future__ import annotations

import argparse
import json
from typing import Any, Dict

from roster.engine.audit import audit_roster
from roster.engine.generate import generate_roster
from roster.exceptions import RosterError
from roster.io.loader import load_request
from roster.io.results_export import export_result_json
from roster.models.status import OptimizationMode
from roster.utils.logging_setup import get_logger, setup_logging, verbosity_level

logger = get_logger("roster.cli")


def _run_kwargs(request, args: argparse.Namespace) -> Dict[str, Any]:
    kwargs = request.to_kwargs()
    if args.mode:
        kwargs["mode"] = OptimizationMode(args.mode)
    if args.min_staff is not None:
        kwargs["custom_min_staff"] = int(args.min_staff)
    return kwargs


def main(argv: list[str] | None = None) -> int:
    p = argparse.ArgumentParser(description="Roster generator")
    p.add_argument("--input", required=True, help="JSON roster request")
    p.add_argument("--mode", choices=[m.value for m in OptimizationMode], help="Override the request mode")
    p.add_argument("--min-staff", dest="min_staff", type=int, help="Override the minimum daily headcount")
    p.add_argument("--output", help="Write the full result to this JSON file")
    p.add_argument("--json", dest="json_out", action="store_true", help="Print the result as JSON")
    p.add_argument("--matrix", action="store_true", help="Print the person x date matrix")
    p.add_argument("--audit", action="store_true", help="List headcount shortfalls")
    p.add_argument("--log-file", dest="log_file", help="Also log to this file (rotated)")
    p.add_argument("-v", "--verbose", action="count", default=0)
    args = p.parse_args(argv)

    level = verbosity_level(args.verbose)
    setup_logging(level="DEBUG" if args.log_file else level, log_file=args.log_file, console_level=level)

    try:
        request = load_request(args.input)
        result = generate_roster(**_run_kwargs(request, args))
    except RosterError as e:
        logger.error(f"{type(e).__name__}: {e}")
        return 2

    if args.output:
        export_result_json(result, args.output)

    if args.json_out:
        print(json.dumps(result.to_dict(), ensure_ascii=False, indent=2))
    else:
        print("Summary:")
        for k, v in result.summary().items():
            print(f" - {k}: {v}")
        for w in result.warnings:
            print(f" ! {w}")

    if args.matrix:
        print(result.to_matrix().to_string())

    if args.audit:
        issues = audit_roster(result, tasks=request.task_templates())
        print("Audit:" if issues else "Audit: no issues")
        for line in issues:
            print(f" - {line}")

    return 0


if __name__ == "__main__":
    raise SystemExit(main())
