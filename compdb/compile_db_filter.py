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
"""Removal of compilation database entries whose command matches a pattern."""

import os
import re
import json
import logging
from typing import Any, Dict, List, Optional, Tuple
from dataclasses import dataclass, field

from compdb.constants import JSON_INDENT, NotFoundError, InvalidPatternError
from compdb.compile_db_utils import load_compile_db

logger = logging.getLogger(__name__)

__all__ = ["FilterResult", "partition_entries", "remove_entries"]


@dataclass
class FilterResult:
    """Outcome of filtering a compilation database.

    Attributes:
        kept: Records whose command did not match, in input order
        removed: Records whose command matched, in input order
    """

    kept: List[Dict[str, Any]] = field(default_factory=list)
    removed: List[Dict[str, Any]] = field(default_factory=list)

    def to_tuple(self) -> Tuple[List[Dict[str, Any]], List[Dict[str, Any]]]:
        """Convert to a (kept, removed) tuple."""
        return (self.kept, self.removed)


def _compile_pattern(pattern: str) -> "re.Pattern[str]":
    try:
        return re.compile(pattern)
    except re.error as e:
        raise InvalidPatternError(f"Invalid pattern '{pattern}': {e}") from e


def partition_entries(entries: List[Dict[str, Any]], pattern: str) -> FilterResult:
    """Split records by whether their command contains a match for pattern.

    The search is unanchored: any match inside the command removes the record.

    Args:
        entries: Validated records
        pattern: Regular expression

    Returns:
        FilterResult with kept and removed records

    Raises:
        InvalidPatternError: If pattern is not a valid regular expression
    """
    regex = _compile_pattern(pattern)
    result = FilterResult()
    for entry in entries:
        if regex.search(entry["command"]):
            result.removed.append(entry)
        else:
            result.kept.append(entry)
    return result


def remove_entries(input_path: str, output_path: str, pattern: str, log: Optional[logging.Logger] = None) -> FilterResult:
    """Write a copy of a compilation database without the records matching pattern.

    Every record is considered; file extensions and paths are not inspected.
    Kept records are written with all their original fields, overwriting any
    existing file at output_path.

    Args:
        input_path: Source compile_commands.json (comments allowed)
        output_path: Destination for the filtered database
        pattern: Regular expression searched for in each record's command
        log: Logger for debug output (default: module logger)

    Returns:
        FilterResult; the removed list is what callers usually report

    Raises:
        NotFoundError: If input_path does not exist
        InvalidPatternError: If pattern is not a valid regular expression
        JsonParseError: If the input is not valid JSON
        MalformedEntryError: If a record lacks 'file' or 'command'
    """
    log = log or logger

    if not os.path.exists(input_path):
        raise NotFoundError(f"Compilation database not found: {input_path}")

    # Fail on a bad pattern before reading the database
    _compile_pattern(pattern)

    entries = load_compile_db(input_path)
    result = partition_entries(entries, pattern)

    output_dir = os.path.dirname(os.path.abspath(output_path))
    os.makedirs(output_dir, exist_ok=True)
    with open(output_path, "w", encoding="utf-8") as f:
        json.dump(result.kept, f, indent=JSON_INDENT, ensure_ascii=False)
        f.write("\n")

    log.debug("Kept %d and removed %d of %d entries matching '%s'", len(result.kept), len(result.removed), len(entries), pattern)
    return result
