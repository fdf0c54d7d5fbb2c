# excsig/main.py
import argparse
import errno
import logging
import os
import sys

from rich.console import Console
from rich.markup import escape
from rich.table import Table

from excsig.config import SignatureConfig
from excsig.errors import ExcSigConfigError
from excsig.logger import setup_excsig_logger
from excsig.signature import ExceptionSignatureBuilder

console = Console()


def _throw_with_error_code():
    # The message text is localized by the OS; the signature only uses the code
    raise ConnectionRefusedError(errno.ECONNREFUSED, os.strerror(errno.ECONNREFUSED))


def _throw_with_dynamic_message():
    try:
        _throw_with_error_code()
    except OSError as exc:
        raise RuntimeError(
            "You can type anything you want within \"these quotes\" or (these parenthesis) or "
            "[these brackets] or {these braces} or: after the colon without changing the "
            "exception signature."
        ) from exc


def _throw_chained():
    try:
        _throw_with_dynamic_message()
    except RuntimeError as exc:
        raise RuntimeError("Could not complete action, see inner exception") from exc


def build_parser():
    parser = argparse.ArgumentParser(
        description="excsig: raise a demonstration exception chain and print its signature"
    )
    parser.add_argument("--config", default=None,
                        help="Optional path to a JSON config file (defaults are used otherwise).")
    parser.add_argument("--log-level", default=None, choices=["DEBUG", "INFO", "WARNING", "ERROR"],
                        help="Set the logging level for excsig.")
    parser.add_argument("--quiet", action="store_true",
                        help="Minimize console output (overrides log-level to WARNING).")
    parser.add_argument("--no-preprocess", action="store_true",
                        help="Hash raw exception messages instead of normalized ones.")
    parser.add_argument("--origin-only", action="store_true",
                        help="Only use the point of origin of each exception, not the full stack.")
    parser.add_argument("--no-inner", action="store_true",
                        help="Do not traverse inner (causing) exceptions.")
    parser.add_argument("--digest", action="store_true",
                        help="Also print the full 32-character hex digest.")
    return parser


def main(argv=None):
    args = build_parser().parse_args(argv)

    try:
        cfg = SignatureConfig.load(args.config) if args.config else SignatureConfig()
    except ExcSigConfigError as e:
        console.print(f"[red]Error loading config:[/red] {escape(str(e))}")
        return 1

    if args.log_level:
        cfg.log_level = args.log_level
    if args.no_preprocess:
        cfg.preprocess_messages = False
    if args.origin_only:
        cfg.include_full_stack_trace = False
    if args.no_inner:
        cfg.traverse_inner = False

    log_level = logging.getLevelName(str(cfg.log_level).upper())
    if not isinstance(log_level, int):
        log_level = logging.INFO
    if args.quiet:
        log_level = logging.WARNING
    logger = setup_excsig_logger(log_level, log_to_file=cfg.log_to_file, log_file=cfg.log_file)

    try:
        _throw_chained()
    except RuntimeError as exc:
        with ExceptionSignatureBuilder(cfg) as builder:
            builder.add_exception(exc, cfg.traverse_inner)
            signature = builder.signature_string()
            digest = builder.signature_hex_digest()

        logger.info(f"Computed signature {signature} for {type(exc).__name__}")

        table = Table(title="_throw_chained threw exception", show_header=False)
        table.add_column("Field", style="bold cyan")
        table.add_column("Value")
        table.add_row("Message", str(exc))
        table.add_row("Signature", signature)
        if args.digest:
            table.add_row("Digest", digest)
        console.print(table)

    return 0


if __name__ == "__main__":
    sys.exit(main())
