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
"""File and path utilities for resolving compiler, source and include paths."""

import os
import shutil
import logging
from typing import List, Optional, Tuple

from compdb.constants import PARSED_SOURCE_EXTENSIONS, HEADER_EXTENSIONS, PathResolutionError

logger = logging.getLogger(__name__)


def is_valid_source_file(filepath: str) -> bool:
    """Check if a file is a C or C++ source file the parser indexes.

    The match is case-sensitive: 'main.CPP' is not a source file.

    Args:
        filepath: Path to the file

    Returns:
        True if the path ends with .c or .cpp
    """
    return filepath.endswith(PARSED_SOURCE_EXTENSIONS)


def is_valid_header_file(filepath: str) -> bool:
    """Check if a file is a C/C++ header file.

    Args:
        filepath: Path to the file

    Returns:
        True if the path ends with .h or .hpp
    """
    return filepath.endswith(HEADER_EXTENSIONS)


def resolve_file_path(path: str) -> str:
    """Return the absolute, normalized form of path without touching the filesystem."""
    return os.path.abspath(path)


def resolve_directory(path: str) -> str:
    """Resolve an include directory to an absolute, normalized path.

    Args:
        path: Directory path, absolute or relative to the working directory

    Returns:
        Absolute directory path

    Raises:
        PathResolutionError: If the directory does not exist
    """
    resolved = os.path.abspath(path)
    if not os.path.isdir(resolved):
        raise PathResolutionError(f"Include directory does not exist: {path}")
    return resolved


def resolve_executable(name: str, search_path: Optional[str] = None) -> str:
    """Resolve a compiler executable to an absolute path.

    A name containing a directory separator is taken as a path and must
    exist. A bare name (e.g. 'gcc') is looked up on PATH.

    Args:
        name: Executable as written in the compile command
        search_path: Optional PATH override for the lookup

    Returns:
        Absolute path to the executable

    Raises:
        PathResolutionError: If the executable cannot be found
    """
    if os.sep in name or (os.altsep and os.altsep in name):
        resolved = os.path.abspath(name)
        if not os.path.isfile(resolved):
            raise PathResolutionError(f"Compiler not found: {name}")
        return resolved

    found = shutil.which(name, path=search_path)
    if found is None:
        raise PathResolutionError(f"Compiler '{name}' not found on PATH")
    return os.path.abspath(found)


def find_header_files(directory: str) -> Tuple[str, ...]:
    """Recursively enumerate header files under a directory.

    Hidden directories are searched like any other directory. Symlinked
    directories are not followed.

    Args:
        directory: Absolute directory path

    Returns:
        Sorted tuple of absolute header file paths
    """
    headers: List[str] = []
    for root, _dirs, files in os.walk(directory):
        for name in files:
            if is_valid_header_file(name):
                headers.append(os.path.join(root, name))

    headers.sort()
    logger.debug("Found %d headers under %s", len(headers), directory)
    return tuple(headers)
