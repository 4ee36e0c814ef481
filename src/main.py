# src/main.py — v2
"""CLI entry point — encrypt and decrypt commands.

Usage:
    gpg-sympass encrypt file.txt
    gpg-sympass decrypt file.txt.gpg
    gpg-sympass encrypt -o ../encrypted/ directory/
    gpg-sympass decrypt -r -o ../decrypted/ ../encrypted/
"""

from __future__ import annotations

import argparse
import getpass
import logging
import sys
from typing import BinaryIO, TextIO

from sympass.api.facade import run_command
from sympass.api.request_builder import build_request, parse_bool
from sympass.batch.models import BatchResult
from sympass.cipher.base_cipher_gateway import BaseCipherGateway
from sympass.config.settings import ConfigurationError, Settings, load_settings
from sympass.core.errors import ExitCode, SympassError
from sympass.core.models import ProcessingRequest
from sympass.logging.logger import setup_logging
from sympass.security.keys import derive_key
from sympass.security.password import Prompt, prompt_password
from sympass.version import __version__

logger = logging.getLogger(__name__)

_DESCRIPTION = """\
GPG Symmetric Password Helper
  Use GPG to symmetrically encrypt or decrypt a single file or all files
  from a directory tree with a hash generated from an entered password.

  Note:
    Supplied password is hashed using SHA 512-bit.
    File encryption uses GnuPG with AES 256-bit cipher.
"""

_EPILOG = """\
input:
  If a file, the single file is processed.
  If a directory, all files in the directory are processed.
    With -r, all files in the directory tree are processed.

decrypted filenames (-k true):
  Explicit -o filename if input and output are files.
  Otherwise the filename stored in the GPG packet, if available.
  Otherwise the encrypted filename without .gpg / .enc endings.
    If that name already exists in the output directory, -decrypted is
    inserted before the final suffix.

output (-o):
  A directory that does not exist yet must end with a slash.
  A file is only allowed when the input is a file.
"""


class _Parser(argparse.ArgumentParser):
    """ArgumentParser exiting with code 1 on usage errors."""

    def error(self, message: str) -> None:  # type: ignore[override]
        self.print_usage(sys.stderr)
        print(f"Error: {message}", file=sys.stderr)
        sys.exit(ExitCode.GENERAL)


def main(
    argv: list[str] | None = None,
    *,
    gateway: BaseCipherGateway | None = None,
    prompt: Prompt = getpass.getpass,
    sink: BinaryIO | None = None,
) -> int:
    """Main CLI entry point."""
    parser = _build_parser()
    if argv is None:
        argv = sys.argv[1:]
    if not argv:
        parser.print_help()
        return ExitCode.OK

    args = parser.parse_intermixed_args(argv)

    try:
        settings = load_settings()
        keep = parse_bool(args.keep)
    except ConfigurationError as exc:
        print(f"Error: Invalid configuration: {exc}", file=sys.stderr)
        return ExitCode.GENERAL
    except ValueError as exc:
        print(f"Error: {exc}", file=sys.stderr)
        return ExitCode.GENERAL

    _setup_logging(settings, args.verbose)

    try:
        request = build_request(
            command=args.command,
            input_path=args.input,
            output=args.output,
            keep_decrypted=keep,
            randomize=args.randomize,
            recursive=args.recursive,
        )
        if args.debug:
            _print_debug(request, settings)
            return ExitCode.OK

        password = prompt_password(prompt)
        request = request.model_copy(update={"key": derive_key(password)})
        result = run_command(request, settings=settings, gateway=gateway, sink=sink)
    except KeyboardInterrupt:
        logger.info("Interrupted by user")
        return ExitCode.INTERRUPTED
    except SympassError as exc:
        print(f"Error: {exc}", file=sys.stderr)
        return exc.exit_code

    return _report(request, result)


def _build_parser() -> argparse.ArgumentParser:
    """Build CLI argument parser."""
    parser = _Parser(
        prog="gpg-sympass",
        description=_DESCRIPTION,
        epilog=_EPILOG,
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument(
        "--version", action="version", version=f"%(prog)s {__version__}",
    )
    parser.add_argument("command", metavar="COMMAND", help="encrypt or decrypt")
    parser.add_argument("input", metavar="INPUT", nargs="?", help="File or directory")
    parser.add_argument(
        "-k", dest="keep", default="true", metavar="BOOL",
        help="Keep decrypted file (default true). With false, decrypt to stdout",
    )
    parser.add_argument(
        "-z", dest="randomize", action="store_true",
        help="Randomize output filename(s) to 8 alphanumeric characters (encrypt only)",
    )
    parser.add_argument(
        "-r", dest="recursive", action="store_true",
        help="Process the whole INPUT directory tree",
    )
    parser.add_argument(
        "-o", dest="output", default=None, metavar="OUTPUT",
        help="Output filename or directory (default: current working directory)",
    )
    parser.add_argument(
        "-d", dest="debug", action="store_true",
        help="Show the resolved configuration and exit",
    )
    parser.add_argument(
        "-v", "--verbose", action="store_true",
        help="Enable debug logging",
    )
    return parser


def _print_debug(request: ProcessingRequest, settings: Settings, out: TextIO | None = None) -> None:
    """Print the resolved invocation (no password is asked)."""
    out = out or sys.stdout
    lines = [
        f"COMMAND   {request.command}",
        f"INPUT     {request.input_path}  [{request.input_path.resolve()}]",
        "",
        "FLAGS",
        f"  -k {str(request.keep_decrypted).lower()}",
        f"  -z {str(request.randomize).lower()}",
        f"  -r {str(request.recursive).lower()}",
        f"  -o {request.output_filename or ''}",
        "",
        "INTERNALS",
        f"  output_dir {request.output_dir}  [{request.output_dir.resolve()}]",
        f"  gpg        {settings.gpg_binary} ({settings.cipher_algo})",
    ]
    print("\n".join(lines), file=out)


def _report(request: ProcessingRequest, result: BatchResult) -> int:
    """Print output paths to stdout and the halting error to stderr."""
    for outcome in result.outcomes:
        if outcome.ok:
            if outcome.output is not None:
                print(str(outcome.output))
            continue
        source = str(outcome.source_path)
        message = outcome.error or "unknown error"
        if source not in message:
            message = f"Failed to {request.command} [{source}]: {message}"
        print(f"Error: {message}", file=sys.stderr)

    if result.skipped:
        logger.warning(
            "%d of %d files were not processed", result.skipped, result.total_files_found,
        )
    return ExitCode.OK if result.succeeded else ExitCode.GENERAL


def _setup_logging(settings: Settings, verbose: bool) -> None:
    """Configure logging for CLI usage."""
    setup_logging(
        level="DEBUG" if verbose else settings.log_level,
        log_format=settings.log_format,
        log_file=settings.log_file,
        rotation=settings.log_rotation,
        retention=settings.log_retention,
    )


if __name__ == "__main__":
    sys.exit(main())
