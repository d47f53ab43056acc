#!/usr/bin/env python3
#****************************************************************************************************************************************************
#* BSD 3-Clause License
#*
#* Copyright (c) 2025, Mana Battery
#* All rights reserved.
#*
#* Redistribution and use in source and binary forms, with or without modification, are permitted provided that the following conditions are met:
#*
#* 1. Redistributions of source code must retain the above copyright notice, this list of conditions and the following disclaimer.
#* 2. Redistributions in binary form must reproduce the above copyright notice, this list of conditions and the following disclaimer in the
#*    documentation and/or other materials provided with the distribution.
#* 3. Neither the name of the copyright holder nor the names of its contributors may be used to endorse or promote products derived from this
#*    software without specific prior written permission.
#*
#* THIS SOFTWARE IS PROVIDED BY THE COPYRIGHT HOLDERS AND CONTRIBUTORS "AS IS" AND ANY EXPRESS OR IMPLIED WARRANTIES, INCLUDING, BUT NOT LIMITED TO,
#* THE IMPLIED WARRANTIES OF MERCHANTABILITY AND FITNESS FOR A PARTICULAR PURPOSE ARE DISCLAIMED. IN NO EVENT SHALL THE COPYRIGHT HOLDER OR
#* CONTRIBUTORS BE LIABLE FOR ANY DIRECT, INDIRECT, INCIDENTAL, SPECIAL, EXEMPLARY, OR CONSEQUENTIAL DAMAGES (INCLUDING, BUT NOT LIMITED TO,
#* PROCUREMENT OF SUBSTITUTE GOODS OR SERVICES; LOSS OF USE, DATA, OR PROFITS; OR BUSINESS INTERRUPTION) HOWEVER CAUSED AND ON ANY THEORY OF
#* LIABILITY, WHETHER IN CONTRACT, STRICT LIABILITY, OR TORT (INCLUDING NEGLIGENCE OR OTHERWISE) ARISING IN ANY WAY OUT OF THE USE OF THIS SOFTWARE,
#* EVEN IF ADVISED OF THE POSSIBILITY OF SUCH DAMAGE.
"""Remove entries from a compilation database whose command matches a pattern.

Every record of the input compile_commands.json (comments allowed) whose
command contains a match for the regular expression is dropped; the remaining
records are written, unchanged, to the output database. Typical uses are
pruning generated or third-party targets before handing the database to a
static analyzer.

Requirements:
    - Python 3.8+
    - colorama

Usage:
    compileDbRemoveEntries.py <input.json> <output.json> <pattern> [--list-removed]

Exit Codes:
    0: Success
    1: Invalid arguments, missing input or invalid pattern
    2: Malformed database or write failure
"""

import sys
import signal
import logging
import argparse
from typing import Any, List, Optional

__version__ = "1.0.0"
__author__ = "Mana Battery"

from compdb.color_utils import Colors, print_error, print_warning, print_success, print_info, should_use_color
from compdb.compile_db_filter import remove_entries
from compdb.constants import EXIT_SUCCESS, EXIT_RUNTIME_ERROR, EXIT_KEYBOARD_INTERRUPT, MAX_ENTRIES_DISPLAY, CompileDbError

__all__ = ["EXIT_SUCCESS", "main"]


def signal_handler(signum: int, frame: Any) -> None:
    """Handle interrupt signals gracefully."""
    print_warning("\nInterrupted by user. Exiting...", prefix=False)
    sys.exit(EXIT_KEYBOARD_INTERRUPT)


def main(argv: Optional[List[str]] = None) -> int:
    """Main entry point for the script.

    Args:
        argv: Command line arguments (default: sys.argv[1:])

    Returns:
        Exit code (0 for success, non-zero for failure)
    """
    signal.signal(signal.SIGINT, signal_handler)
    signal.signal(signal.SIGTERM, signal_handler)

    logging.basicConfig(level=logging.INFO, format="%(asctime)s - %(levelname)s - %(message)s", datefmt="%Y-%m-%d %H:%M:%S")

    parser = argparse.ArgumentParser(
        description="Remove compilation database entries whose command matches a regular expression.",
        epilog=f"Version {__version__}\n\nExamples:\n"
        "  %(prog)s build/compile_commands.json build/compile_commands_tidy.json -- '-DUNIT_TEST'\n"
        "  %(prog)s in.json out.json '/third_party/' --list-removed\n",
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    parser.add_argument("input", metavar="INPUT", help="Path to the source compile_commands.json")
    parser.add_argument("output", metavar="OUTPUT", help="Path of the filtered database to write (overwritten)")
    parser.add_argument("pattern", metavar="PATTERN", help="Regular expression searched for in each entry's command")
    parser.add_argument("--list-removed", action="store_true", help="List the files of the removed entries")
    parser.add_argument("--no-color", action="store_true", help="Disable colored output")
    parser.add_argument("--verbose", action="store_true", help="Enable verbose debug logging")

    args = parser.parse_args(argv)

    if args.verbose:
        logging.getLogger().setLevel(logging.DEBUG)
        logging.debug("Verbose logging enabled")

    Colors.set_enabled(should_use_color(args.no_color))

    try:
        result = remove_entries(args.input, args.output, args.pattern)
    except CompileDbError as e:
        logging.debug("Filtering failed", exc_info=True)
        print_error(str(e))
        return e.exit_code
    except OSError as e:
        logging.error("I/O error: %s", e)
        print_error(f"I/O error: {e}")
        return EXIT_RUNTIME_ERROR

    total = len(result.kept) + len(result.removed)
    print_success(f"Kept {len(result.kept)} of {total} entries, removed {len(result.removed)} -> {args.output}")

    if args.list_removed and result.removed:
        print_info("Removed entries:")
        for entry in result.removed[:MAX_ENTRIES_DISPLAY]:
            print(f"  {entry['file']}")
        if len(result.removed) > MAX_ENTRIES_DISPLAY:
            print(f"  {Colors.DIM}... and {len(result.removed) - MAX_ENTRIES_DISPLAY} more{Colors.RESET}")
    elif not result.removed:
        print_warning(f"No entries matched '{args.pattern}'")

    return EXIT_SUCCESS


if __name__ == "__main__":
    try:
        sys.exit(main())
    except KeyboardInterrupt:
        logging.info("Interrupted by user")
        print_warning("\nInterrupted by user", prefix=False)
        sys.exit(EXIT_KEYBOARD_INTERRUPT)
