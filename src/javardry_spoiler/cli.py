"""Command-line entry points.

Two console scripts are installed:

- ``javardry-decrypt INPUT OUTPUT`` writes the decrypted plaintext of a
  scenario file.
- ``javardry-spoil INPUT`` prints a spoiler report (text or JSON) of a
  scenario file.

Both exit with status 1 and a message on stderr when the input cannot be
read or decoded.
"""

from __future__ import annotations

import argparse
import sys
from collections.abc import Sequence
from pathlib import Path

from javardry_spoiler import __version__
from javardry_spoiler.core.config import Settings, get_settings
from javardry_spoiler.core.exceptions import SpoilerError
from javardry_spoiler.core.logging import (
    LOG_LEVELS,
    bind_context,
    clear_context,
    configure_logging,
    get_logger,
)
from javardry_spoiler.crypto.cipher import decrypt
from javardry_spoiler.decoding.loader import load_ciphertext, load_plaintext, open_scenario
from javardry_spoiler.models.scenario import Scenario
from javardry_spoiler.presentation.dump import render_scenario


logger = get_logger(__name__)

# Failures reported as a one-line message instead of a traceback.
HANDLED_ERRORS = (SpoilerError, OSError, UnicodeDecodeError)


def _setup(program: str, settings: Settings, log_level: str | None, input_path: Path) -> None:
    configure_logging(
        level=log_level or settings.log_level,
        json_format=settings.json_logs,
        log_file=settings.log_file,
        tool=program,
    )
    clear_context()
    bind_context(source_file=str(input_path))


def _fail(program: str, exc: Exception) -> int:
    logger.error("Command failed", error=str(exc), error_type=type(exc).__name__)
    print(f"{program}: error: {exc}", file=sys.stderr)
    return 1


# =============================================================================
# javardry-decrypt
# =============================================================================


def build_decrypt_parser() -> argparse.ArgumentParser:
    """Build the argument parser of ``javardry-decrypt``."""
    parser = argparse.ArgumentParser(
        prog="javardry-decrypt",
        description="Decrypt a Javardry scenario file (gameData.dat) into plaintext.",
    )
    parser.add_argument("input", type=Path, help="encrypted scenario file")
    parser.add_argument("output", type=Path, help="path of the plaintext to write")
    parser.add_argument(
        "--log-level",
        type=str.upper,
        choices=LOG_LEVELS,
        default=None,
        help="logging level (default: from settings)",
    )
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    return parser


def decrypt_main(argv: Sequence[str] | None = None) -> int:
    """Run ``javardry-decrypt``.

    Args:
        argv: Command-line arguments without the program name.

    Returns:
        Process exit status.
    """
    args = build_decrypt_parser().parse_args(argv)
    # Stderr only until settings load.
    configure_logging(tool="javardry-decrypt")

    try:
        _setup("javardry-decrypt", get_settings(), args.log_level, args.input)
        plaintext = decrypt(args.input.read_bytes())
        args.output.write_bytes(plaintext.encode("utf-8"))
    except HANDLED_ERRORS as exc:
        return _fail("javardry-decrypt", exc)

    logger.info("Wrote plaintext", output=str(args.output), size=len(plaintext))
    return 0


# =============================================================================
# javardry-spoil
# =============================================================================


def build_spoil_parser() -> argparse.ArgumentParser:
    """Build the argument parser of ``javardry-spoil``."""
    parser = argparse.ArgumentParser(
        prog="javardry-spoil",
        description="Print a spoiler report of a Javardry scenario file.",
    )
    parser.add_argument("input", type=Path, help="scenario file (encrypted unless --plaintext)")
    source = parser.add_mutually_exclusive_group()
    source.add_argument(
        "--plaintext",
        action="store_true",
        help="input is already decrypted",
    )
    source.add_argument(
        "--detect",
        action="store_true",
        help="treat UTF-8 input as plaintext and decrypt anything else",
    )
    parser.add_argument(
        "--format",
        choices=("text", "json"),
        default=None,
        help="report format (default: from settings)",
    )
    parser.add_argument(
        "--save-plaintext",
        type=Path,
        default=None,
        metavar="PATH",
        help="also write the decrypted plaintext to PATH",
    )
    parser.add_argument(
        "--log-level",
        type=str.upper,
        choices=LOG_LEVELS,
        default=None,
        help="logging level (default: from settings)",
    )
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    return parser


def _load(args: argparse.Namespace) -> tuple[str | None, Scenario]:
    data = args.input.read_bytes()
    if args.detect:
        return open_scenario(data)
    if args.plaintext:
        plaintext = data.decode("utf-8")
        return plaintext, load_plaintext(plaintext)
    if args.save_plaintext is not None:
        plaintext = decrypt(data)
        return plaintext, load_plaintext(plaintext)
    return None, load_ciphertext(data)


def render(scenario: Scenario, output_format: str, settings: Settings) -> str:
    """Render a scenario in the requested report format.

    Args:
        scenario: Decoded scenario.
        output_format: ``"text"`` or ``"json"``.
        settings: Settings holding the dump options.

    Returns:
        The report, newline-terminated.
    """
    if output_format == "json":
        indent = settings.dump.json_indent or None
        return scenario.model_dump_json(indent=indent) + "\n"
    return render_scenario(scenario, clean_markup=settings.dump.strip_markup)


def spoil_main(argv: Sequence[str] | None = None) -> int:
    """Run ``javardry-spoil``.

    Args:
        argv: Command-line arguments without the program name.

    Returns:
        Process exit status.
    """
    args = build_spoil_parser().parse_args(argv)
    configure_logging(tool="javardry-spoil")

    try:
        settings = get_settings()
        _setup("javardry-spoil", settings, args.log_level, args.input)
        plaintext, scenario = _load(args)
        if args.save_plaintext is not None and plaintext is not None:
            args.save_plaintext.write_bytes(plaintext.encode("utf-8"))
        report = render(scenario, args.format or settings.dump.format, settings)
    except HANDLED_ERRORS as exc:
        return _fail("javardry-spoil", exc)

    sys.stdout.write(report)
    return 0


__all__ = [
    "build_decrypt_parser",
    "build_spoil_parser",
    "decrypt_main",
    "render",
    "spoil_main",
]
