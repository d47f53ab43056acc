#!/usr/bin/env python3
"""Tests for compileDbRemoveEntries.py"""

import os
import json
from typing import Any, Callable, Dict, List

import pytest

import compileDbRemoveEntries
from compdb.constants import EXIT_SUCCESS, EXIT_INVALID_ARGS, EXIT_RUNTIME_ERROR


@pytest.fixture
def records() -> List[Dict[str, str]]:
    return [
        {"directory": "/build", "file": "/src/a.c", "command": "gcc -DDEBUG -c /src/a.c"},
        {"directory": "/build", "file": "/src/b.c", "command": "gcc -c /src/b.c"},
    ]


class TestMain:
    """Tests for main function."""

    def test_removes_matching_entries(self, records: List[Dict[str, str]], write_compile_db: Callable[..., str], temp_dir: str, capsys: Any) -> None:
        input_path = write_compile_db(records)
        output_path = os.path.join(temp_dir, "out.json")

        exit_code = compileDbRemoveEntries.main(["--no-color", "--list-removed", input_path, output_path, "--", "-DDEBUG"])

        assert exit_code == EXIT_SUCCESS
        with open(output_path, "r", encoding="utf-8") as f:
            assert json.load(f) == [records[1]]
        out = capsys.readouterr().out
        assert "Kept 1 of 2 entries, removed 1" in out
        assert "/src/a.c" in out

    def test_no_match_warns(self, records: List[Dict[str, str]], write_compile_db: Callable[..., str], temp_dir: str, capsys: Any) -> None:
        input_path = write_compile_db(records)
        output_path = os.path.join(temp_dir, "out.json")

        exit_code = compileDbRemoveEntries.main([input_path, output_path, "clang"])

        assert exit_code == EXIT_SUCCESS
        assert "No entries matched" in capsys.readouterr().err
        with open(output_path, "r", encoding="utf-8") as f:
            assert json.load(f) == records

    def test_missing_input(self, temp_dir: str, capsys: Any) -> None:
        exit_code = compileDbRemoveEntries.main([os.path.join(temp_dir, "nope.json"), os.path.join(temp_dir, "out.json"), "x"])

        assert exit_code == EXIT_INVALID_ARGS
        assert "not found" in capsys.readouterr().err

    def test_invalid_pattern(self, records: List[Dict[str, str]], write_compile_db: Callable[..., str], temp_dir: str) -> None:
        input_path = write_compile_db(records)

        exit_code = compileDbRemoveEntries.main([input_path, os.path.join(temp_dir, "out.json"), "(oops"])

        assert exit_code == EXIT_INVALID_ARGS

    def test_malformed_input(self, write_compile_db: Callable[..., str], temp_dir: str) -> None:
        input_path = write_compile_db([{"command": "gcc a.c"}])

        exit_code = compileDbRemoveEntries.main([input_path, os.path.join(temp_dir, "out.json"), "x"])

        assert exit_code == EXIT_RUNTIME_ERROR

    def test_non_utf8_input(self, temp_dir: str, capsys: Any) -> None:
        input_path = os.path.join(temp_dir, "compile_commands.json")
        with open(input_path, "wb") as f:
            f.write(b'[{"file": "a.c", "command": "gcc \xff"}]')

        exit_code = compileDbRemoveEntries.main([input_path, os.path.join(temp_dir, "out.json"), "x"])

        assert exit_code == EXIT_RUNTIME_ERROR
        assert "not valid UTF-8" in capsys.readouterr().err
