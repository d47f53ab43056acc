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
"""In-memory cache of header enumerations, keyed by include directory."""

import logging
from typing import Callable, Dict, Optional, Tuple
from dataclasses import dataclass, field

from compdb.file_utils import find_header_files

logger = logging.getLogger(__name__)


@dataclass
class IncludeDirCache:
    """Memoizes the recursive header scan of each include directory.

    One instance lives for a single parse and is then discarded; it is never
    shared between parses or written to disk.

    Attributes:
        scanner: Function enumerating the headers under a directory
        entries: Resolved directory -> sorted header paths
        hits: Lookups answered from the cache
        misses: Lookups that triggered a directory scan
    """

    scanner: Callable[[str], Tuple[str, ...]] = find_header_files
    entries: Dict[str, Tuple[str, ...]] = field(default_factory=dict)
    hits: int = 0
    misses: int = 0

    def __contains__(self, directory: str) -> bool:
        return directory in self.entries

    def __len__(self) -> int:
        return len(self.entries)

    def get_headers(self, directory: str, log: Optional[logging.Logger] = None) -> Tuple[str, ...]:
        """Return the headers under directory, scanning it on first request.

        Args:
            directory: Absolute, already-resolved include directory
            log: Logger for debug output (default: module logger)

        Returns:
            Sorted tuple of header paths
        """
        log = log or logger
        cached = self.entries.get(directory)
        if cached is not None:
            self.hits += 1
            return cached

        self.misses += 1
        headers = self.scanner(directory)
        self.entries[directory] = headers
        log.debug("Scanned include directory %s: %d headers", directory, len(headers))
        return headers
