"""
Best-effort version-control lookups.

Both lookups are last-resort data sources for an application spec. Any
failure (git missing, not a repository, no remotes, no .semver file) becomes
None rather than an exception.
"""

from __future__ import annotations

import logging
import subprocess
from pathlib import Path

from .environment import VERSION_FORMAT
from .errors import SemVerMissingError, SemVerParseError
from .semver import SemVer

logger = logging.getLogger(__name__)


def git_remote_url(cwd: str | Path | None = None) -> str | None:
    """Get the URL of the first git remote.

    ``git remote -v`` prints lines like ``origin\\tgit@host:repo.git (fetch)``;
    the URL is the token between the tab and the first space.

    Args:
        cwd: Directory to run git in (default: current directory)

    Returns:
        The remote URL, or None if it cannot be determined.
    """
    try:
        result = subprocess.run(
            ["git", "remote", "-v"],
            cwd=cwd,
            capture_output=True,
            text=True,
            check=True,
        )
    except (subprocess.CalledProcessError, OSError) as e:
        logger.debug(f"git remote lookup failed: {e}")
        return None

    lines = [line.rstrip("\r") for line in result.stdout.splitlines() if line.strip()]
    if not lines:
        return None
    fields = lines[0].split("\t")
    if len(fields) < 2:
        logger.debug(f"Unexpected git remote output: {lines[0]!r}")
        return None
    url = fields[1].split(" ")[0]
    return url or None


def disk_version(start: str | Path | None = None, fmt: str = VERSION_FORMAT) -> str | None:
    """Get the version from the nearest ``.semver`` file, formatted.

    Returns:
        The formatted version, or None if no usable ``.semver`` file exists.
    """
    try:
        return SemVer.find(start).format(fmt)
    except (SemVerMissingError, SemVerParseError, OSError) as e:
        logger.debug(f"No version on disk: {e}")
        return None
