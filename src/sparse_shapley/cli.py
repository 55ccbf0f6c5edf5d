from __future__ import annotations

import argparse
from pathlib import Path
from typing import Sequence

from .aggregation.run_manager import run_from_config


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="sparse-shapley",
        description="Compute Shapley values from a coalition-worth table.",
    )
    parser.add_argument(
        "command",
        nargs="?",
        help="Subcommand (optional, currently only 'compute').",
    )
    parser.add_argument(
        "-c",
        "--config",
        type=Path,
        required=True,
        help="Path to YAML configuration file.",
    )
    parser.add_argument(
        "-o",
        "--output",
        type=Path,
        help="Output directory (overrides output.path in the config).",
    )
    return parser


def main(argv: Sequence[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(list(argv) if argv is not None else None)

    if args.command not in (None, "compute"):
        parser.error(f"Unknown command: {args.command}")

    try:
        out_dir = run_from_config(args.config, output_dir=args.output)
    except (OSError, ValueError) as exc:
        parser.exit(1, f"sparse-shapley: error: {exc}\n")
    print(out_dir)
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
