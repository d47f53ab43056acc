#!/usr/bin/env python3
"""Tests for compdb/package_verification.py."""

import pytest
from typing import Any


@pytest.mark.unit
class TestCheckPackageVersion:
    """Test check_package_version function."""

    def test_check_installed_meets_version(self) -> None:
        """An installed package above the minimum passes."""
        from compdb.package_verification import check_package_version

        is_installed, meets_version, installed_ver = check_package_version("networkx", "2.0.0", raise_on_error=False)

        assert is_installed is True
        assert meets_version is True
        assert installed_ver

    def test_check_installed_below_version(self) -> None:
        from compdb.package_verification import check_package_version

        is_installed, meets_version, installed_ver = check_package_version("networkx", "999.0.0", raise_on_error=False)

        assert is_installed is True
        assert meets_version is False
        assert installed_ver is not None

    def test_check_not_installed(self) -> None:
        from compdb.package_verification import check_package_version

        assert check_package_version("nonexistent_package_xyz123", "1.0.0", raise_on_error=False) == (False, False, None)

    def test_raise_on_missing_package(self) -> None:
        from compdb.package_verification import check_package_version

        with pytest.raises(ImportError, match="is not installed"):
            check_package_version("nonexistent_package_xyz123", "1.0.0")

    def test_raise_on_old_package(self) -> None:
        from compdb.package_verification import check_package_version

        with pytest.raises(ImportError, match="too old"):
            check_package_version("colorama", "999.0.0")

    def test_registry_lookup(self) -> None:
        """Minimum version defaults to PACKAGE_REQUIREMENTS."""
        from compdb.package_verification import check_package_version

        is_installed, meets_version, _ = check_package_version("packaging", raise_on_error=False)

        assert is_installed is True
        assert meets_version is True

    def test_unknown_package_without_version(self) -> None:
        from compdb.package_verification import check_package_version

        with pytest.raises(ValueError, match="No version requirement"):
            check_package_version("nonexistent_package_xyz123")


@pytest.mark.unit
class TestRequirePackage:
    """Test require_package function."""

    def test_require_installed(self) -> None:
        from compdb.package_verification import require_package

        require_package("networkx", "graph export")

    def test_require_missing_exits(self, monkeypatch: Any, capsys: Any) -> None:
        from compdb import package_verification

        monkeypatch.setitem(package_verification.PACKAGE_REQUIREMENTS, "nonexistent_package_xyz123", "1.0")

        with pytest.raises(SystemExit) as exc_info:
            package_verification.require_package("nonexistent_package_xyz123", "testing")

        assert exc_info.value.code == 2
        assert "needed for testing" in capsys.readouterr().err


@pytest.mark.unit
class TestCheckAllPackages:
    """Test check_all_packages function."""

    def test_all_ok(self, capsys: Any) -> None:
        from compdb.package_verification import check_all_packages

        assert check_all_packages() is True
        assert "All required packages are available" in capsys.readouterr().out

    def test_missing_package_reported(self, monkeypatch: Any, capsys: Any) -> None:
        from compdb import package_verification

        monkeypatch.setitem(package_verification.PACKAGE_REQUIREMENTS, "nonexistent_package_xyz123", "1.0")

        assert package_verification.check_all_packages() is False
        assert "nonexistent_package_xyz123 not installed" in capsys.readouterr().err
