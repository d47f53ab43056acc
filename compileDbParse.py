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
"""Summarize a compilation database: compilers, include directories and definitions.

This script parses compile_commands.json (comments allowed) and builds a
normalized index of every .c/.cpp translation unit: the include directories
passed with -I (expanded to the headers beneath them), the -D definitions and
the C and C++ compilers used. Documentation and static analysis front ends
consume the index to drive their own invocations.

Requirements:
    - Python 3.8+
    - colorama, networkx, packaging

Usage:
    compileDbParse.py <compile_commands.json> [--disable-definitions] [--disable-includes]
                      [--format=text|json] [--output FILE] [--export-graph FILE]

Exit Codes:
    0: Success
    1: Invalid arguments or missing input
    2: Malformed database or unresolvable path
"""

import os
import sys
import json
import signal
import logging
import argparse
from typing import Any, List, Optional

__version__ = "1.0.0"
__author__ = "Mana Battery"

from compdb.package_verification import require_package

require_package("networkx", "index graph export")

from compdb.color_utils import Colors, print_error, print_warning, print_success, print_highlight, should_use_color
from compdb.compile_db_parser import CompileDbIndex, parse_compile_db
from compdb.export_utils import export_index_graph, export_index_json
from compdb.constants import (
    EXIT_SUCCESS,
    EXIT_RUNTIME_ERROR,
    EXIT_KEYBOARD_INTERRUPT,
    JSON_INDENT,
    MAX_ENTRIES_DISPLAY,
    SPLIT_MODES,
    DEFAULT_SPLIT_MODE,
    COMPILE_COMMANDS_JSON,
    CompileDbError,
)

__all__ = ["EXIT_SUCCESS", "format_text_output", "main"]


def signal_handler(signum: int, frame: Any) -> None:
    """Handle interrupt signals gracefully."""
    print_warning("\nInterrupted by user. Exiting...", prefix=False)
    sys.exit(EXIT_KEYBOARD_INTERRUPT)


def format_text_output(index: CompileDbIndex, verbose: bool = False) -> str:
    """Format the index as a human readable report.

    Args:
        index: Parsed index
        verbose: List every source file with its definitions

    Returns:
        Multi-line report
    """
    lines: List[str] = []
    lines.append(f"{Colors.BRIGHT}Compilers:{Colors.RESET}")
    lines.append(f"  C:   {index.c_compiler or Colors.DIM + 'none' + Colors.RESET}")
    lines.append(f"  C++: {index.cpp_compiler or Colors.DIM + 'none' + Colors.RESET}")
    lines.append("")
    lines.append(
        f"{Colors.BRIGHT}Summary:{Colors.RESET} "
        f"{Colors.CYAN}{index.source_count}{Colors.RESET} source files, "
        f"{Colors.CYAN}{len(index.all_include_dirs)}{Colors.RESET} include directories, "
        f"{Colors.CYAN}{len(index.all_include_files)}{Colors.RESET} headers, "
        f"{Colors.CYAN}{len(index.all_definitions)}{Colors.RESET} definitions"
    )

    if index.all_include_dirs:
        lines.append("")
        lines.append(f"{Colors.BRIGHT}Include directories:{Colors.RESET}")
        for directory in index.all_include_dirs[:MAX_ENTRIES_DISPLAY]:
            lines.append(f"  {directory}")
        if len(index.all_include_dirs) > MAX_ENTRIES_DISPLAY:
            lines.append(f"  {Colors.DIM}... and {len(index.all_include_dirs) - MAX_ENTRIES_DISPLAY} more{Colors.RESET}")

    if index.all_definitions:
        lines.append("")
        lines.append(f"{Colors.BRIGHT}Definitions:{Colors.RESET}")
        for definition in index.all_definitions[:MAX_ENTRIES_DISPLAY]:
            lines.append(f"  {definition}")
        if len(index.all_definitions) > MAX_ENTRIES_DISPLAY:
            lines.append(f"  {Colors.DIM}... and {len(index.all_definitions) - MAX_ENTRIES_DISPLAY} more{Colors.RESET}")

    if verbose and index.source_files:
        lines.append("")
        lines.append(f"{Colors.BRIGHT}Source files:{Colors.RESET}")
        for path, info in index.source_files.items():
            lines.append(f"  {path}")
            lines.append(f"    {Colors.DIM}{len(info.include_dirs)} include dirs, definitions: {' '.join(info.definitions) or '-'}{Colors.RESET}")

    return "\n".join(lines)


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
        description="Summarize the include directories, definitions and compilers of a compilation database.",
        epilog=f"Version {__version__}\n\nExamples:\n"
        f"  %(prog)s build/{COMPILE_COMMANDS_JSON}\n"
        f"  %(prog)s build/{COMPILE_COMMANDS_JSON} --format json --output index.json\n"
        f"  %(prog)s build/{COMPILE_COMMANDS_JSON} --disable-definitions --export-graph includes.graphml\n",
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    parser.add_argument("compile_db", metavar="COMPILE_DB", help="Path to compile_commands.json")
    parser.add_argument("--disable-definitions", action="store_true", help="Do not collect -D definitions")
    parser.add_argument("--disable-includes", action="store_true", help="Do not collect -I include directories and their headers")
    parser.add_argument(
        "--split-mode",
        choices=SPLIT_MODES,
        default=DEFAULT_SPLIT_MODE,
        help=f"How commands are tokenized (default: {DEFAULT_SPLIT_MODE}). "
        "shell: quotes are honored, so -DMSG=\"a b\" is one definition; backslashes stay literal. "
        "whitespace: split on whitespace only.",
    )
    parser.add_argument("--format", choices=["text", "json"], default="text", help="Output format (default: text)")
    parser.add_argument("--output", metavar="FILE", help="Write output to FILE instead of stdout")
    parser.add_argument("--export-graph", metavar="FILE", help="Export source/include/header graph (formats: .graphml, .gexf, .json)")
    parser.add_argument("--no-color", action="store_true", help="Disable colored output")
    parser.add_argument("--verbose", action="store_true", help="Enable verbose debug logging and list every source file")

    args = parser.parse_args(argv)

    if args.verbose:
        logging.getLogger().setLevel(logging.DEBUG)
        logging.debug("Verbose logging enabled")

    Colors.set_enabled(args.format == "text" and not args.output and should_use_color(args.no_color))

    try:
        index = parse_compile_db(
            args.compile_db,
            include_definitions=not args.disable_definitions,
            include_includes=not args.disable_includes,
            split_mode=args.split_mode,
        )
        logging.info("Indexed %d source files from %s", index.source_count, args.compile_db)

        if args.format == "json" and args.output:
            export_index_json(args.output, index)
            print_success(f"Wrote json output to {os.path.abspath(args.output)}")
        else:
            if args.format == "json":
                output = json.dumps(index.to_dict(), indent=JSON_INDENT)
            else:
                output = format_text_output(index, verbose=args.verbose)

            if args.output:
                with open(args.output, "w", encoding="utf-8") as f:
                    f.write(output + "\n")
                print_success(f"Wrote {args.format} output to {os.path.abspath(args.output)}")
            else:
                print(output)

        if args.export_graph:
            export_index_graph(args.export_graph, index)
            print_highlight(f"Exported include graph to {args.export_graph}")

        return EXIT_SUCCESS

    except CompileDbError as e:
        logging.debug("Parse failed", exc_info=True)
        print_error(str(e))
        return e.exit_code

    except OSError as e:
        logging.error("I/O error: %s", e)
        print_error(f"I/O error: {e}")
        return EXIT_RUNTIME_ERROR


if __name__ == "__main__":
    try:
        sys.exit(main())
    except KeyboardInterrupt:
        logging.info("Interrupted by user")
        print_warning("\nInterrupted by user", prefix=False)
        sys.exit(EXIT_KEYBOARD_INTERRUPT)
