#!/usr/bin/env python3
# -*- coding: utf-8 -*-
# ****************************************************************************************************************************************************
# * BSD 3-Clause License
# *
# * Copyright (c) 2025, Mana Battery
# * All rights reserved.
# *
# * Redistribution and use in source and binary forms, with or without modification, are permitted provided that the following conditions are met:
# *
# * 1. Redistributions of source code must retain the above copyright notice, this list of conditions and the following disclaimer.
# * 2. Redistributions in binary form must reproduce the above copyright notice, this list of conditions and the following disclaimer in the
# *    documentation and/or other materials provided with the distribution.
# * 3. Neither the name of the copyright holder nor the names of its contributors may be used to endorse or promote products derived from this
# *    software without specific prior written permission.
# *
# * THIS SOFTWARE IS PROVIDED BY THE COPYRIGHT HOLDERS AND CONTRIBUTORS "AS IS" AND ANY EXPRESS OR IMPLIED WARRANTIES, INCLUDING, BUT NOT LIMITED TO,
# * THE IMPLIED WARRANTIES OF MERCHANTABILITY AND FITNESS FOR A PARTICULAR PURPOSE ARE DISCLAIMED. IN NO EVENT SHALL THE COPYRIGHT HOLDER OR
# * CONTRIBUTORS BE LIABLE FOR ANY DIRECT, INDIRECT, INCIDENTAL, SPECIAL, EXEMPLARY, OR CONSEQUENTIAL DAMAGES (INCLUDING, BUT NOT LIMITED TO,
# * PROCUREMENT OF SUBSTITUTE GOODS OR SERVICES; LOSS OF USE, DATA, OR PROFITS; OR BUSINESS INTERRUPTION) HOWEVER CAUSED AND ON ANY THEORY OF
# * LIABILITY, WHETHER IN CONTRACT, STRICT LIABILITY, OR TORT (INCLUDING NEGLIGENCE OR OTHERWISE) ARISING IN ANY WAY OUT OF THE USE OF THIS SOFTWARE,
# * EVEN IF ADVISED OF THE POSSIBILITY OF SUCH DAMAGE.
"""Loading, validation and tokenization of compilation database records."""

import shlex
import logging
from typing import Any, Dict, List

from compdb.constants import REQUIRED_ENTRY_FIELDS, SPLIT_MODE_SHELL, SPLIT_MODE_WHITESPACE, SPLIT_MODES, MalformedEntryError, ValidationError
from compdb.jsonc_utils import load_jsonc

logger = logging.getLogger(__name__)

__all__ = ["load_compile_db", "validate_entry", "split_command"]


def validate_entry(entry: Any, index: int) -> None:
    """Check that a record is an object carrying every required field.

    An empty string is a valid value; only absence is an error.

    Args:
        entry: Parsed record
        index: Position of the record in the database (for error messages)

    Raises:
        MalformedEntryError: If the record is not an object or lacks 'file' or 'command'
    """
    if not isinstance(entry, dict):
        raise MalformedEntryError(f"Entry {index} is not a JSON object: {entry!r}")

    missing = [name for name in REQUIRED_ENTRY_FIELDS if name not in entry]
    if missing:
        raise MalformedEntryError(f"Entry {index} is missing required field(s) {', '.join(repr(m) for m in missing)}: {entry!r}")

    for name in REQUIRED_ENTRY_FIELDS:
        if not isinstance(entry[name], str):
            raise MalformedEntryError(f"Entry {index} field '{name}' must be a string, got {type(entry[name]).__name__}")


def load_compile_db(path: str) -> List[Dict[str, Any]]:
    """Load and validate all records of a compilation database.

    Every record is validated before the list is returned, so callers never
    start processing a database that is malformed further down.

    Args:
        path: Path to compile_commands.json (comments allowed)

    Returns:
        List of records in file order

    Raises:
        NotFoundError: If path does not exist
        JsonParseError: If the document is not valid JSON
        MalformedEntryError: If the document is not an array or a record is malformed
    """
    data = load_jsonc(path)

    if not isinstance(data, list):
        raise MalformedEntryError(f"Invalid compilation database {path}: expected a JSON array, got {type(data).__name__}")

    for index, entry in enumerate(data):
        validate_entry(entry, index)

    logger.debug("Loaded %d entries from %s", len(data), path)
    return data


def split_command(command: str, mode: str = SPLIT_MODE_SHELL) -> List[str]:
    """Split a compile command into tokens.

    Args:
        command: Full command string from the database
        mode: 'shell' honors quotes and keeps backslashes literal, 'whitespace' is a plain split

    Returns:
        List of tokens (empty for an empty command)

    Raises:
        MalformedEntryError: If the command has unbalanced quotes in shell mode
        ValidationError: If mode is unknown

    Examples:
        >>> split_command('gcc -DMSG="a b" -c x.c')
        ['gcc', '-DMSG=a b', '-c', 'x.c']
        >>> split_command('gcc -DMSG="a b" -c x.c', "whitespace")
        ['gcc', '-DMSG="a', 'b"', '-c', 'x.c']
    """
    if mode == SPLIT_MODE_WHITESPACE:
        return command.split()

    if mode != SPLIT_MODE_SHELL:
        raise ValidationError(f"Unknown split mode '{mode}', expected one of: {', '.join(SPLIT_MODES)}")

    try:
        lexer = shlex.shlex(command, posix=True)
        lexer.whitespace_split = True
        lexer.commenters = ""
        # Backslashes are path separators in Windows databases, keep them literal
        lexer.escape = ""
        return list(lexer)
    except ValueError as e:
        raise MalformedEntryError(f"Cannot tokenize command ({e}): {command}") from e
