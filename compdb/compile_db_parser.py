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
"""Parser turning a compilation database into a normalized per-file index.

The index records, for every .c/.cpp translation unit, the include directories
(with the headers found under each) and the preprocessor definitions passed on
its command line, together with the first C and C++ compilers seen and global
first-seen-ordered aggregates. Documentation and static analysis front ends use
it to drive their own invocations.
"""

import os
import logging
from types import MappingProxyType
from typing import Any, Dict, List, Mapping, Optional, Set, Tuple
from dataclasses import dataclass, field

from compdb.constants import (
    C_SOURCE_EXTENSION,
    CPP_SOURCE_EXTENSION,
    INCLUDE_FLAG_PREFIX,
    DEFINITION_FLAG_PREFIX,
    DEFAULT_SPLIT_MODE,
    NotFoundError,
)
from compdb.compile_db_utils import load_compile_db, split_command
from compdb.file_utils import is_valid_source_file, resolve_directory, resolve_executable, resolve_file_path
from compdb.include_cache import IncludeDirCache

logger = logging.getLogger(__name__)

__all__ = ["SourceFileInfo", "CompileDbIndex", "parse_compile_db"]


@dataclass(frozen=True)
class SourceFileInfo:
    """Include directories and definitions of one translation unit.

    Attributes:
        include_dirs: Resolved include directory -> headers found under it, in command order
        definitions: -D tokens (without the prefix) in command order
    """

    include_dirs: Mapping[str, Tuple[str, ...]]
    definitions: Tuple[str, ...]

    def to_dict(self) -> Dict[str, Any]:
        return {"include_dirs": {d: list(h) for d, h in self.include_dirs.items()}, "definitions": list(self.definitions)}


@dataclass(frozen=True)
class CompileDbIndex:
    """Normalized, read-only summary of a compilation database.

    Attributes:
        c_compiler: Absolute path of the first compiler used for a .c file, if any
        cpp_compiler: Absolute path of the first compiler used for a .cpp file, if any
        source_files: Resolved source path -> SourceFileInfo, in first-seen order
        all_include_dirs: Unique include directories across all files, first-seen order
        all_include_files: Unique headers across all include directories, first-seen order
        all_definitions: Unique definitions across all files, first-seen order
    """

    c_compiler: Optional[str]
    cpp_compiler: Optional[str]
    source_files: Mapping[str, SourceFileInfo]
    all_include_dirs: Tuple[str, ...]
    all_include_files: Tuple[str, ...]
    all_definitions: Tuple[str, ...]

    @property
    def source_count(self) -> int:
        return len(self.source_files)

    def to_dict(self) -> Dict[str, Any]:
        """Convert to plain JSON-serializable containers."""
        return {
            "c_compiler": self.c_compiler,
            "cpp_compiler": self.cpp_compiler,
            "source_files": {path: info.to_dict() for path, info in self.source_files.items()},
            "all_include_dirs": list(self.all_include_dirs),
            "all_include_files": list(self.all_include_files),
            "all_definitions": list(self.all_definitions),
        }


@dataclass
class _IndexBuilder:
    """Mutable accumulator folded over the records of one parse."""

    cache: IncludeDirCache = field(default_factory=IncludeDirCache)
    c_compiler: Optional[str] = None
    cpp_compiler: Optional[str] = None
    source_files: Dict[str, SourceFileInfo] = field(default_factory=dict)
    include_dirs: List[str] = field(default_factory=list)
    include_files: List[str] = field(default_factory=list)
    definitions: List[str] = field(default_factory=list)
    _seen_dirs: Set[str] = field(default_factory=set)
    _seen_files: Set[str] = field(default_factory=set)
    _seen_definitions: Set[str] = field(default_factory=set)

    def add_include_dir(self, directory: str, headers: Tuple[str, ...]) -> None:
        if directory in self._seen_dirs:
            return
        self._seen_dirs.add(directory)
        self.include_dirs.append(directory)
        for header in headers:
            if header not in self._seen_files:
                self._seen_files.add(header)
                self.include_files.append(header)

    def add_definition(self, definition: str) -> None:
        if definition not in self._seen_definitions:
            self._seen_definitions.add(definition)
            self.definitions.append(definition)

    def build(self) -> CompileDbIndex:
        return CompileDbIndex(
            c_compiler=self.c_compiler,
            cpp_compiler=self.cpp_compiler,
            source_files=MappingProxyType(dict(self.source_files)),
            all_include_dirs=tuple(self.include_dirs),
            all_include_files=tuple(self.include_files),
            all_definitions=tuple(self.definitions),
        )


def _iter_flag_values(tokens: List[str], prefix: str) -> List[str]:
    """Collect the values of a flag given either joined (-Ifoo) or separate (-I foo).

    Args:
        tokens: Command tokens after the compiler
        prefix: Flag prefix such as '-I' or '-D'

    Returns:
        Flag values in command order
    """
    values: List[str] = []
    i = 0
    while i < len(tokens):
        token = tokens[i]
        if token == prefix:
            # Separate form; a trailing bare flag has no value and is ignored
            if i + 1 < len(tokens):
                values.append(tokens[i + 1])
            i += 2
            continue
        if token.startswith(prefix):
            values.append(token[len(prefix) :])
        i += 1
    return values


def _detect_compiler(builder: _IndexBuilder, source_path: str, compiler_token: str, log: logging.Logger) -> None:
    """Record the compiler for the source's language if none is known yet."""
    if source_path.endswith(C_SOURCE_EXTENSION):
        if builder.c_compiler is None:
            builder.c_compiler = resolve_executable(compiler_token)
            log.debug("C compiler: %s", builder.c_compiler)
    elif source_path.endswith(CPP_SOURCE_EXTENSION):
        if builder.cpp_compiler is None:
            builder.cpp_compiler = resolve_executable(compiler_token)
            log.debug("C++ compiler: %s", builder.cpp_compiler)


def parse_compile_db(
    compile_db_path: str,
    include_definitions: bool = True,
    include_includes: bool = True,
    split_mode: str = DEFAULT_SPLIT_MODE,
    log: Optional[logging.Logger] = None,
) -> CompileDbIndex:
    """Parse a compilation database into a CompileDbIndex.

    Records are processed in file order. Only the first record for a given
    resolved source path is used, and only .c/.cpp sources are indexed. The
    first token of each command is the compiler; the first compiler seen per
    language wins. -I directories are expanded to the .h/.hpp files beneath
    them, each directory scanned at most once per call.

    Args:
        compile_db_path: Path to compile_commands.json (comments allowed)
        include_definitions: Collect -D definitions
        include_includes: Collect -I directories and their headers
        split_mode: Command tokenization, 'shell' (default) or 'whitespace'
        log: Logger for debug output (default: module logger)

    Returns:
        Fully populated, read-only index

    Raises:
        NotFoundError: If compile_db_path does not exist
        JsonParseError: If the database is not valid JSON
        MalformedEntryError: If a record lacks 'file' or 'command'
        PathResolutionError: If a compiler or include directory does not exist
    """
    log = log or logger

    if not os.path.exists(compile_db_path):
        raise NotFoundError(f"Compilation database not found: {compile_db_path}")

    entries = load_compile_db(compile_db_path)
    builder = _IndexBuilder()

    for entry in entries:
        source_path = resolve_file_path(entry["file"])
        if source_path in builder.source_files:
            log.debug("Skipping duplicate entry for %s", source_path)
            continue
        if not is_valid_source_file(source_path):
            continue

        tokens = split_command(entry["command"], split_mode)
        if tokens:
            _detect_compiler(builder, source_path, tokens[0], log)
        args = tokens[1:]

        file_include_dirs: Dict[str, Tuple[str, ...]] = {}
        if include_includes:
            for raw_dir in _iter_flag_values(args, INCLUDE_FLAG_PREFIX):
                directory = resolve_directory(raw_dir)
                headers = builder.cache.get_headers(directory, log)
                file_include_dirs[directory] = headers
                builder.add_include_dir(directory, headers)

        file_definitions: List[str] = []
        if include_definitions:
            for definition in _iter_flag_values(args, DEFINITION_FLAG_PREFIX):
                file_definitions.append(definition)
                builder.add_definition(definition)

        builder.source_files[source_path] = SourceFileInfo(include_dirs=MappingProxyType(file_include_dirs), definitions=tuple(file_definitions))

    log.debug(
        "Parsed %d source files from %d entries (%d include dirs scanned, %d cache hits)",
        len(builder.source_files),
        len(entries),
        builder.cache.misses,
        builder.cache.hits,
    )
    return builder.build()
