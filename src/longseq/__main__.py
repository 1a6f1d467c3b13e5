"""Entry point for the longseq command line."""

import argparse
import logging
import sys
from collections.abc import Sequence

from longseq.config import GeneratorSettings, load_settings
from longseq.exceptions import LongSequenceError
from longseq.generator import LongSequenceGenerator
from longseq.layout import decode

EXIT_OK = 0
EXIT_FAILURE = 1


def _setup_logging(level: str) -> None:
    handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(logging.Formatter("%(asctime)s - %(name)s - %(levelname)s - %(message)s"))
    logger = logging.getLogger("longseq")
    logger.setLevel(level.upper())
    if not logger.handlers:
        logger.addHandler(handler)


def _identifier(value: str) -> int:
    try:
        return int(value, 0)
    except ValueError:
        raise argparse.ArgumentTypeError(f"not an integer: {value!r}") from None


def cmd_next(args: argparse.Namespace, settings: GeneratorSettings) -> int:
    generator = LongSequenceGenerator.from_settings(settings)
    for _ in range(args.count):
        print(generator.next_id())
    return EXIT_OK


def cmd_decode(args: argparse.Namespace, settings: GeneratorSettings) -> int:
    for identifier in args.ids:
        parts = decode(identifier)
        print(
            f"{identifier}\ttimestamp={parts.timestamp}\tnode={parts.node_id}"
            f"\tsequence={parts.sequence}\t{parts.created_at(settings.custom_epoch_ms).isoformat()}"
        )
    return EXIT_OK


def cmd_node(args: argparse.Namespace, settings: GeneratorSettings) -> int:
    print(LongSequenceGenerator.from_settings(settings).node_id)
    return EXIT_OK


def build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(prog="longseq", description="64-bit identifier generator")
    p.add_argument("--log-level", default=None, help="Logging level (default from LONGSEQ_LOG_LEVEL)")

    sub = p.add_subparsers(dest="cmd", required=True)

    sp = sub.add_parser("next", help="Generate identifiers")
    sp.add_argument("-n", "--count", type=int, default=1, help="How many identifiers to print")
    sp.set_defaults(func=cmd_next)

    sp = sub.add_parser("decode", help="Show the fields of identifiers")
    sp.add_argument("ids", nargs="+", type=_identifier, help="Identifiers (decimal or 0x hex)")
    sp.set_defaults(func=cmd_decode)

    sp = sub.add_parser("node", help="Show the node id this host resolves to")
    sp.set_defaults(func=cmd_node)

    return p


def main(argv: Sequence[str] | None = None) -> int:
    """Run the longseq command line."""
    args = build_parser().parse_args(argv)
    settings = load_settings()
    _setup_logging(args.log_level or settings.log_level)

    try:
        return args.func(args, settings)
    except (LongSequenceError, ValueError) as exc:
        logging.getLogger("longseq").error("%s", exc)
        return EXIT_FAILURE


if __name__ == "__main__":
    sys.exit(main())
