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
"""Pytest configuration and shared fixtures for compdb tests.

Fixtures build small, real on-disk projects (sources, include trees and a fake
compiler executable) so the parser and filter run against the filesystem the
way they do in production.

Fixture Scopes:
- function: Default, recreated for each test
"""

import os
import sys
import json
import stat
import shutil
import tempfile
from pathlib import Path
from typing import Any, Callable, Dict, Generator, List
import pytest

# Add parent directory to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent))


@pytest.fixture
def temp_dir() -> Generator[str, None, None]:
    """Create a temporary directory for tests.

    Scope: function (default)
    Use for: File I/O operations that need isolation
    """
    tmpdir = tempfile.mkdtemp(prefix="compdb_test_")
    yield os.path.realpath(tmpdir)
    shutil.rmtree(tmpdir, ignore_errors=True)


def _make_executable(path: Path) -> None:
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text("#!/bin/sh\nexit 0\n")
    path.chmod(path.stat().st_mode | stat.S_IXUSR | stat.S_IXGRP | stat.S_IXOTH)


@pytest.fixture
def fake_toolchain(temp_dir: str, monkeypatch: Any) -> Dict[str, str]:
    """Install fake gcc/g++/clang executables and put them first on PATH.

    Scope: function
    Dependencies: temp_dir
    Use for: Compiler resolution without depending on the host toolchain
    """
    bin_dir = Path(temp_dir) / "bin"
    tools = {}
    for name in ("gcc", "g++", "clang", "clang++"):
        _make_executable(bin_dir / name)
        tools[name] = str(bin_dir / name)

    monkeypatch.setenv("PATH", str(bin_dir))
    return tools


@pytest.fixture
def write_compile_db(temp_dir: str) -> Callable[..., str]:
    """Return a helper writing a compilation database into temp_dir.

    Scope: function
    Dependencies: temp_dir
    Use for: Tests that need custom database contents
    """

    def _write(entries: Any, name: str = "compile_commands.json", raw: bool = False) -> str:
        path = os.path.join(temp_dir, name)
        with open(path, "w", encoding="utf-8") as f:
            if raw:
                f.write(entries)
            else:
                json.dump(entries, f, indent=2)
        return path

    return _write


@pytest.fixture
def sample_project(temp_dir: str, fake_toolchain: Dict[str, str], monkeypatch: Any) -> Dict[str, Any]:
    """Create a small C/C++ project with include trees and a compilation database.

    Layout (under temp_dir, which is also made the working directory)::

        src/main.cpp, src/util.c, src/notes.txt
        include/core.h, include/detail/impl.hpp, include/.hidden/secret.h, include/readme.md
        third_party/lib.h

    Scope: function
    Dependencies: temp_dir, fake_toolchain
    Use for: End-to-end parser and CLI tests
    """
    root = Path(temp_dir)
    for rel in ("src/main.cpp", "src/util.c", "src/notes.txt", "include/readme.md"):
        (root / rel).parent.mkdir(parents=True, exist_ok=True)
        (root / rel).write_text("")
    for rel in ("include/core.h", "include/detail/impl.hpp", "include/.hidden/secret.h", "third_party/lib.h"):
        (root / rel).parent.mkdir(parents=True, exist_ok=True)
        (root / rel).write_text("#pragma once\n")

    monkeypatch.chdir(temp_dir)

    entries: List[Dict[str, str]] = [
        {"directory": temp_dir, "file": "src/main.cpp", "command": "g++ -Iinclude -Ithird_party -DAPP -DVERSION=2 -c src/main.cpp"},
        {"directory": temp_dir, "file": "src/util.c", "command": "gcc -Iinclude -DUTIL -DAPP -c src/util.c"},
        {"directory": temp_dir, "file": "src/notes.txt", "command": "cp src/notes.txt out/"},
        {"directory": temp_dir, "file": "src/main.cpp", "command": "clang++ -Iother -DDUPLICATE -c src/main.cpp"},
    ]
    db_path = root / "compile_commands.json"
    db_path.write_text(json.dumps(entries, indent=2))

    return {
        "root": temp_dir,
        "db_path": str(db_path),
        "entries": entries,
        "main_cpp": str(root / "src" / "main.cpp"),
        "util_c": str(root / "src" / "util.c"),
        "include_dir": str(root / "include"),
        "third_party_dir": str(root / "third_party"),
        "tools": fake_toolchain,
    }
