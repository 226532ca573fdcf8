import argparse
import os
from functools import lru_cache
from pathlib import Path


@lru_cache
def get_cli_args() -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        prog="ringview",
        description=(
            "Watch a hash ring.\n\n"
            "ringview connects to a topology source, decodes every member's\n"
            "ring position and address, and prints the ring layout each time\n"
            "the topology changes."
        ),
        formatter_class=argparse.RawTextHelpFormatter
    )

    parser.add_argument(
        "-c", "--config",
        type=str,
        help="Path to a ringview configuration file"
    )

    parser.add_argument(
        "-l", "--log-level",
        type=str,
        default="INFO",
        choices=["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"],
        help=(
            "Logging verbosity.\n"
            "DEBUG    → every frame and snapshot swap.\n"
            "INFO     → channel lifecycle, snapshots, Sync/Clean diagnostics (default).\n"
            "WARNING  → skipped ring members and dropped events.\n"
            "ERROR    → channel failures only.\n"
            "CRITICAL → nothing in practice."
        ),
    )

    return parser.parse_args()


@lru_cache
def get_configfile() -> Path:
    args = get_cli_args()

    # Priority: CLI > ENV > default file in current working directory
    raw = args.config or os.getenv("RINGVIEWCONFIG")

    if raw is None:
        file = Path.cwd() / "ringview.yaml"
    else:
        file = Path(raw)

    if not file.is_file():
        raise SystemExit(
            f"[config] Configuration file not found: '{file}'.\n"
            "  - Use --config <file.yaml>\n"
            "  - Or set the RINGVIEWCONFIG environment variable\n"
            "  - Or place a 'ringview.yaml' file in the current working directory."
        )

    return file
