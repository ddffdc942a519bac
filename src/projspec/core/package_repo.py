"""
Local package repository.

A NuGet-style packages folder holds one directory per installed package,
named ``<id>.<version>``:

    src/packages/
        Newtonsoft.Json.6.0.3/
        Newtonsoft.Json.6.0.8/
        NLog.3.1.0.0/
"""

from __future__ import annotations

import logging
from pathlib import Path

from .ir import ResolvedPackage
from .semver import SemVer

logger = logging.getLogger(__name__)


class PackageRepository:
    """Finds installed packages in a packages folder."""

    def __init__(self, path: str | Path):
        self.path = Path(path)

    def find_latest(self, package_id: str | None) -> ResolvedPackage | None:
        """Find the highest installed version of a package.

        Args:
            package_id: Package id, matched case-sensitively

        Returns:
            ResolvedPackage, or None if the package is not installed.
        """
        if not package_id or not self.path.is_dir():
            return None

        prefix = f"{package_id}."
        candidates: list[ResolvedPackage] = []
        for entry in self.path.iterdir():
            if not entry.is_dir() or not entry.name.startswith(prefix):
                continue
            version_text = entry.name[len(prefix) :]
            # Guards against "Foo.Bar.1.0" matching a lookup for "Foo"
            if not version_text[:1].isdigit():
                continue
            version = SemVer.parse(version_text, strict=False)
            if version is None:
                continue
            candidates.append(ResolvedPackage(id=package_id, version=version, path=str(entry)))

        if not candidates:
            logger.debug(f"Package '{package_id}' not found in {self.path}")
            return None
        return max(candidates, key=lambda p: p.version.sort_key())

    def __repr__(self) -> str:
        return f"PackageRepository({str(self.path)!r})"
