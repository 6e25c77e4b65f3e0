import argparse
import json
import logging
import sys
from dataclasses import replace
from importlib import metadata

from .engine import palletize
from .models import STACK_PATTERNS, Box, Pallet
from .units import format_float
from .validation import validate_inputs


def _get_app_version() -> str:
    try:
        return metadata.version("pallet-stacker")
    except metadata.PackageNotFoundError:
        return "dev"


def _open(path: str):
    if path == "-":
        return sys.stdin
    return open(path, "r", encoding="utf-8")


def _read_json(path: str):
    if path == "-":
        return json.load(sys.stdin)
    with open(path, "r", encoding="utf-8") as f:
        return json.load(f)


def _read_rows(path: str):
    """Decode a JSON-lines file; blank lines are skipped, bad lines kept as errors."""
    stream = _open(path)
    try:
        rows = []
        for line in stream:
            if not line.strip():
                continue
            try:
                rows.append((json.loads(line), None))
            except ValueError as exc:
                rows.append((line.rstrip("\n"), f"invalid JSON: {exc}"))
        return rows
    finally:
        if stream is not sys.stdin:
            stream.close()


def _summary_line(arrangement) -> str:
    return (
        f"{arrangement.total_boxes} boxes in {arrangement.total_layers} layers "
        f"({arrangement.stack_pattern}), weight {format_float(arrangement.total_weight)}"
        f" ({format_float(arrangement.weight_utilization, 1)}%)"
        + (" [weight limited]" if arrangement.weight_limited else "")
    )


def _print_summary(arrangement, stream) -> None:
    print(_summary_line(arrangement), file=stream)
    for layer in arrangement.layers:
        print(f"  layer {layer.layer_number}: {len(layer)} boxes", file=stream)


def _decode_box(data, pattern):
    box = Box.from_dict(data)
    if pattern:
        box = replace(box, stack_pattern=pattern)
    return box


def _run_batch(args, pallet) -> int:
    try:
        rows = _read_rows(args.box)
    except OSError as exc:
        print(f"error: {exc}", file=sys.stderr)
        return 2
    if not rows:
        print("error: batch file is empty", file=sys.stderr)
        return 2

    failed = 0
    for number, (data, error) in enumerate(rows, start=1):
        arrangement = None
        if error is None:
            try:
                box = _decode_box(data, args.pattern)
            except ValueError as exc:
                error = str(exc)
            else:
                problems = validate_inputs(box, pallet)
                if problems:
                    error = " ".join(problems)
                else:
                    arrangement = palletize(box, pallet)
        if error is not None:
            failed += 1

        if args.summary:
            if arrangement is not None:
                print(f"row {number}: {_summary_line(arrangement)}")
            else:
                print(f"row {number}: error: {error}")
            continue
        record = {
            "row": number,
            "input": data,
            "arrangement": arrangement.to_dict() if arrangement is not None else None,
        }
        if error is not None:
            record["error"] = error
        print(json.dumps(record, ensure_ascii=False))
    return 1 if failed else 0


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="pallet-stacker",
        description="Compute how many boxes fit on a pallet and how to stack them.",
    )
    parser.add_argument(
        "box", help="box JSON file, or JSON-lines file with --batch ('-' for stdin)"
    )
    parser.add_argument("pallet", help="pallet JSON file")
    parser.add_argument(
        "--pattern",
        choices=STACK_PATTERNS,
        help="override the box's stack pattern",
    )
    parser.add_argument(
        "--batch",
        action="store_true",
        help="one box per line; print one result per line",
    )
    parser.add_argument(
        "--summary", action="store_true", help="print a short text summary instead of JSON"
    )
    parser.add_argument("-v", "--verbose", action="store_true", help="debug logging")
    parser.add_argument(
        "--version", action="version", version=f"%(prog)s {_get_app_version()}"
    )
    return parser


def main(argv=None) -> int:
    args = build_parser().parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )

    try:
        pallet = Pallet.from_dict(_read_json(args.pallet))
        if args.batch:
            box = None
        else:
            box = _decode_box(_read_json(args.box), args.pattern)
    except (OSError, ValueError) as exc:
        print(f"error: {exc}", file=sys.stderr)
        return 2

    if args.batch:
        return _run_batch(args, pallet)

    errors = validate_inputs(box, pallet)
    if errors:
        for message in errors:
            print(f"error: {message}", file=sys.stderr)
        return 2

    arrangement = palletize(box, pallet)
    if args.summary:
        _print_summary(arrangement, sys.stdout)
    else:
        json.dump(arrangement.to_dict(), sys.stdout, ensure_ascii=False, indent=2)
        sys.stdout.write("\n")
    return 0


if __name__ == "__main__":
    sys.exit(main())
