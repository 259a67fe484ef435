# ==============================================
# CLI — Command Line Entry Point
# ==============================================
#
# PURPOSE:
#   Run the pipeline over standard input.
#
# USAGE:
# ------
#   bulk 3 < commands.txt
#   python -m bulk 3 < commands.txt
#
#   bulk 3 --simple                  # no "{" / "}" handling
#   bulk 3 --report-dir reports/     # where bulk<N>.log files go
#   bulk 3 --millis                  # bulk<millis>.log instead of seconds
#   bulk 3 --tee                     # ReportWriter forwards (non-terminal)
#   bulk 3 --flush-open-block        # flush an unterminated block at EOF
#   bulk 3 --on-write-error skip     # keep going after a failed report write
#   bulk 3 --verbose                 # stage summary on stderr at the end
#
# EXIT STATUS:
# ------------
#   1 → bulk size missing, not an integer, zero or negative,
#       or an invalid BULK_* environment value
#   0 → everything else, including report write failures and
#       unexpected errors while running (reported on stderr)
#
# Input is read as UTF-8; bytes that do not decode are passed through
# to stdout and report files unchanged.
#
# Flags override values loaded by get_config() (.env / environment).
#
# ==============================================

import argparse
import io
import sys
from dataclasses import replace
from typing import Optional

from bulk import __version__
from bulk.config import WRITE_ERROR_POLICIES, get_config
from bulk.errors import InvalidConfigurationError
from bulk.pipeline import run_bulk


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="bulk",
        description="Print commands read from stdin in batches and save each batch to bulk<N>.log.",
    )
    # Optional here so a missing size gets our own message and exit status
    parser.add_argument("bulk_size", nargs="?", help="number of commands per batch (positive integer)")
    parser.add_argument("--simple", action="store_true", help="treat '{' and '}' as ordinary commands")
    parser.add_argument("--report-dir", help="directory for report files")
    parser.add_argument("--millis", action="store_true", help="name report files by milliseconds")
    parser.add_argument("--tee", action="store_true", help="forward commands after writing reports")
    parser.add_argument("--flush-open-block", action="store_true",
                        help="flush commands of an unterminated block at end of input")
    parser.add_argument("--on-write-error", choices=WRITE_ERROR_POLICIES,
                        help="stop (abort) or continue (skip) after a failed report write")
    parser.add_argument("--verbose", action="store_true", help="print a summary to stderr at the end")
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    return parser


def parse_bulk_size(raw: Optional[str]) -> int:
    """
    Parse the bulk size argument.

    Raises:
        InvalidConfigurationError: With the message shown to the user.
    """
    if raw is None:
        raise InvalidConfigurationError("Bulk size is not specified.")
    try:
        bulk_size = int(raw.strip())
    except ValueError:
        raise InvalidConfigurationError("Invalid bulk size.") from None
    if bulk_size <= 0:
        raise InvalidConfigurationError("Invalid bulk size.")
    return bulk_size


def _open_stdin():
    """
    Text view of stdin that passes undecodable bytes through.

    Bytes that are not valid UTF-8 become surrogates on the way in and
    are written back unchanged by ConsoleOutput and ReportWriter.
    """
    reconfigure = getattr(sys.stdout, "reconfigure", None)
    if reconfigure is not None:
        reconfigure(encoding="utf-8", errors="surrogateescape")

    buffer = getattr(sys.stdin, "buffer", None)
    if buffer is None:
        return sys.stdin
    return io.TextIOWrapper(buffer, encoding="utf-8", errors="surrogateescape", newline="")


def main(argv: Optional[list] = None) -> int:
    args = build_parser().parse_args(argv)

    try:
        bulk_size = parse_bulk_size(args.bulk_size)
        config = get_config()
        batch = config.batch
        report = config.report

        if args.simple:
            batch = replace(batch, block_aware=False)
        if args.flush_open_block:
            batch = replace(batch, flush_open_block_on_close=True)
        if args.report_dir is not None:
            report = replace(report, report_dir=args.report_dir)
        if args.millis:
            report = replace(report, timestamp_unit="ms")
        if args.tee:
            report = replace(report, terminal=False)

        config = replace(
            config,
            batch=batch,
            report=report,
            on_write_error=args.on_write_error or config.on_write_error,
            verbose=args.verbose or config.verbose,
        )
    except InvalidConfigurationError as e:
        print(e, file=sys.stderr)
        return 1

    try:
        return run_bulk(bulk_size, _open_stdin(), config)
    except Exception as e:
        print(f"✗ {e}", file=sys.stderr)
        return 0


if __name__ == "__main__":
    sys.exit(main())
