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
"""Shared constants and error types for the compdb tools.

This module provides centralized constants used by the compilation database
parser, the entry filter and their command-line front ends.
"""

# =============================================================================
# Exit Codes
# =============================================================================

EXIT_SUCCESS = 0
EXIT_INVALID_ARGS = 1
EXIT_RUNTIME_ERROR = 2
EXIT_KEYBOARD_INTERRUPT = 130

# =============================================================================
# Compilation Database Constants
# =============================================================================

COMPILE_COMMANDS_JSON = "compile_commands.json"  # Standard compilation database filename

# Required fields of every invocation record
REQUIRED_ENTRY_FIELDS = ("file", "command")

# Source files the parser indexes (case-sensitive match on the resolved path)
C_SOURCE_EXTENSION = ".c"
CPP_SOURCE_EXTENSION = ".cpp"
PARSED_SOURCE_EXTENSIONS = (C_SOURCE_EXTENSION, CPP_SOURCE_EXTENSION)

# Files collected when expanding an include directory
HEADER_EXTENSIONS = (".h", ".hpp")

# Compiler flag prefixes
INCLUDE_FLAG_PREFIX = "-I"
DEFINITION_FLAG_PREFIX = "-D"

# Command tokenization modes
SPLIT_MODE_SHELL = "shell"  # POSIX shell lexing (quotes and escapes honored)
SPLIT_MODE_WHITESPACE = "whitespace"  # Plain whitespace split
SPLIT_MODES = (SPLIT_MODE_SHELL, SPLIT_MODE_WHITESPACE)
DEFAULT_SPLIT_MODE = SPLIT_MODE_SHELL

# =============================================================================
# Output Constants
# =============================================================================

JSON_INDENT = 2
SUPPORTED_GRAPH_FORMATS = [".graphml", ".gexf", ".json"]
MAX_ENTRIES_DISPLAY = 50  # Maximum removed entries / include dirs listed in text output

# =============================================================================
# Exception Classes
# =============================================================================


class CompileDbError(Exception):
    """Base exception for all compdb errors.

    Every compdb exception carries an exit_code attribute that tells the
    command-line entry point which exit code to use.
    """

    def __init__(self, message: str, exit_code: int = EXIT_RUNTIME_ERROR):
        super().__init__(message)
        self.exit_code = exit_code


# Validation errors (EXIT_INVALID_ARGS)
class ValidationError(CompileDbError):
    """Raised when input validation fails (arguments, paths, etc)."""

    def __init__(self, message: str):
        super().__init__(message, EXIT_INVALID_ARGS)


class NotFoundError(ValidationError):
    """Raised when a required input path does not exist."""


class InvalidPatternError(ValidationError):
    """Raised when a filter pattern is not a valid regular expression."""


# Input errors (EXIT_RUNTIME_ERROR)
class JsonParseError(CompileDbError):
    """Raised when a document is not valid JSON after comment stripping."""


class MalformedEntryError(CompileDbError):
    """Raised when a compilation database record is missing required fields or has the wrong shape."""


class PathResolutionError(CompileDbError):
    """Raised when a compiler or include directory referenced by a command cannot be resolved."""
