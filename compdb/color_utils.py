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
"""Terminal color handling for the command-line front ends.

Codes come from colorama. ``Colors`` exposes them as class attributes so
report formatting can interpolate them directly; ``Colors.set_enabled``
swaps every attribute between the real code and an empty string, which
lets one process switch color on and off between runs.
"""

import os
import sys
import logging
from typing import Dict, Optional, TextIO

from colorama import Fore, Style, init

logger = logging.getLogger(__name__)

# Keep escape codes when stdout is piped; should_use_color() decides whether to emit them
init(autoreset=False, strip=False)

_PALETTE: Dict[str, str] = {
    "RED": Fore.RED,
    "GREEN": Fore.GREEN,
    "YELLOW": Fore.YELLOW,
    "CYAN": Fore.CYAN,
    "WHITE": Fore.WHITE,
    "RESET": Style.RESET_ALL,
    "BRIGHT": Style.BRIGHT,
    "DIM": Style.DIM,
}


class Colors:
    """Active color codes, empty strings while color is disabled."""

    RED = GREEN = YELLOW = CYAN = WHITE = RESET = BRIGHT = DIM = ""

    @classmethod
    def set_enabled(cls, enabled: bool) -> None:
        for name, code in _PALETTE.items():
            setattr(cls, name, code if enabled else "")
        logger.debug("Color output %s", "enabled" if enabled else "disabled")

    @classmethod
    def enable(cls) -> None:
        cls.set_enabled(True)

    @classmethod
    def disable(cls) -> None:
        cls.set_enabled(False)

    @classmethod
    def is_enabled(cls) -> bool:
        return cls.RESET != ""


Colors.set_enabled(True)


def colored(text: str, color: str = "", style: str = "") -> str:
    """Wrap text in the given codes; returns text unchanged when no code applies."""
    if not color and not style:
        return text
    return f"{style}{color}{text}{Colors.RESET}"


def _emit(text: str, color: str, file: Optional[TextIO], stderr: bool = False, label: str = "", style: str = "") -> None:
    if file is None:
        file = sys.stderr if stderr else sys.stdout
    print(colored(f"{label}{text}", color, style), file=file)


def print_success(text: str, file: Optional[TextIO] = None, prefix: bool = False) -> None:
    """Print a green message to stdout, optionally prefixed with "Success: "."""
    _emit(text, Colors.GREEN, file, label="Success: " if prefix else "")


def print_error(text: str, file: Optional[TextIO] = None, prefix: bool = True) -> None:
    """Print a red message to stderr.

    Args:
        text: Error message to print
        file: Stream to write to (default: sys.stderr)
        prefix: Prepend "Error: " (default: True)
    """
    _emit(text, Colors.RED, file, stderr=True, label="Error: " if prefix else "")


def print_warning(text: str, file: Optional[TextIO] = None, prefix: bool = True) -> None:
    """Print a yellow message to stderr, prefixed with "Warning: " by default."""
    _emit(text, Colors.YELLOW, file, stderr=True, label="Warning: " if prefix else "")


def print_info(text: str, file: Optional[TextIO] = None) -> None:
    _emit(text, Colors.CYAN, file)


def print_highlight(text: str, file: Optional[TextIO] = None) -> None:
    _emit(text, Colors.WHITE, file, style=Colors.BRIGHT)


def should_use_color(no_color: bool = False) -> bool:
    """Decide whether the report should be colored.

    The --no-color flag wins, then the NO_COLOR convention (no-color.org),
    then whether stdout is a terminal.
    """
    if no_color or os.environ.get("NO_COLOR"):
        return False
    return sys.stdout.isatty()
