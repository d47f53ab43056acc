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
"""Loading of JSON documents that may contain // and /* */ comments."""

import os
import json
import logging
from typing import Any, List

from compdb.constants import NotFoundError, JsonParseError

logger = logging.getLogger(__name__)

__all__ = ["strip_json_comments", "load_jsonc"]


def strip_json_comments(text: str) -> str:
    """Remove line and block comments from a JSON-with-comments document.

    Scans the text once, tracking whether the cursor is inside a string
    literal, so comment markers inside strings (including strings with
    escaped quotes) are left alone.

    Line comments are removed up to, but not including, the newline.
    Block comments are removed up to the first closing marker; newlines
    inside a block comment are kept so parser error positions still point
    at the original line. An unterminated block comment swallows the rest
    of the document.

    Args:
        text: Raw document text

    Returns:
        Text with all comments removed

    Example:
        >>> strip_json_comments('{"url": "http://x" // trailing\\n}')
        '{"url": "http://x" \\n}'
    """
    out: List[str] = []
    i = 0
    length = len(text)
    in_string = False

    while i < length:
        ch = text[i]

        if in_string:
            out.append(ch)
            if ch == "\\" and i + 1 < length:
                # Keep the escaped character verbatim, it can never close the string
                out.append(text[i + 1])
                i += 2
                continue
            if ch == '"':
                in_string = False
            i += 1
            continue

        if ch == '"':
            in_string = True
            out.append(ch)
            i += 1
            continue

        if ch == "/" and i + 1 < length:
            nxt = text[i + 1]
            if nxt == "/":
                end = text.find("\n", i + 2)
                i = length if end == -1 else end
                continue
            if nxt == "*":
                end = text.find("*/", i + 2)
                stop = length if end == -1 else end + 2
                out.append("\n" * text.count("\n", i, stop))
                i = stop
                continue

        out.append(ch)
        i += 1

    return "".join(out)


def load_jsonc(path: str) -> Any:
    """Read a JSON-with-comments file and parse it.

    Args:
        path: Path to the document

    Returns:
        Parsed JSON value (dict, list or scalar)

    Raises:
        NotFoundError: If path does not exist
        JsonParseError: If the file is not UTF-8 or not valid JSON after stripping comments
    """
    if not os.path.exists(path):
        raise NotFoundError(f"File not found: {path}")

    try:
        with open(path, "r", encoding="utf-8-sig") as f:
            text = f.read()
    except UnicodeDecodeError as e:
        raise JsonParseError(f"{path} is not valid UTF-8: {e}") from e

    stripped = strip_json_comments(text)
    logger.debug("Stripped %d comment characters from %s", len(text) - len(stripped), path)

    try:
        return json.loads(stripped)
    except json.JSONDecodeError as e:
        raise JsonParseError(f"Invalid JSON in {path} (line {e.lineno}, column {e.colno}): {e.msg}") from e
