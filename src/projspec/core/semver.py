"""
Semantic version values.

Versions are formatted with printf-like tokens:

    %M  major
    %m  minor
    %p  patch
    %s  special (pre-release), prefixed with '-' when present
    %d  metadata (build), prefixed with '+' when present

A version can also be discovered on disk from a ``.semver`` file, the YAML
document written by the semver gem family of tools:

    ---
    :major: 1
    :minor: 4
    :patch: 2
    :special: ''
    :metadata: ''
"""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass
from pathlib import Path

import yaml

from .errors import SemVerMissingError, SemVerParseError

logger = logging.getLogger(__name__)

SEMVER_FILE = ".semver"

_TOKEN_PATTERNS = {
    "M": r"(?P<major>\d+)",
    "m": r"(?P<minor>\d+)",
    "p": r"(?P<patch>\d+)",
    "s": r"(?:-(?P<special>[0-9A-Za-z.-]+))?",
    "d": r"(?:\+(?P<metadata>[0-9A-Za-z.-]+))?",
}

# Leading "major[.minor[.patch]]" of anything version-like, e.g. NuGet's
# four-part "4.5.0.0" or a bare "2"
_LENIENT = re.compile(r"^\s*v?(\d+)(?:\.(\d+))?(?:\.(\d+))?")


def _format_regex(fmt: str) -> re.Pattern[str]:
    parts: list[str] = []
    i = 0
    while i < len(fmt):
        if fmt[i] == "%" and i + 1 < len(fmt) and fmt[i + 1] in _TOKEN_PATTERNS:
            parts.append(_TOKEN_PATTERNS[fmt[i + 1]])
            i += 2
        else:
            parts.append(re.escape(fmt[i]))
            i += 1
    return re.compile("^" + "".join(parts) + "$")


@dataclass(frozen=True)
class SemVer:
    """An immutable major.minor.patch version with optional special/metadata."""

    major: int
    minor: int
    patch: int
    special: str = ""
    metadata: str = ""

    def format(self, fmt: str = "%M.%m.%p%s%d") -> str:
        """Render the version with the given token format."""
        out: list[str] = []
        i = 0
        while i < len(fmt):
            if fmt[i] == "%" and i + 1 < len(fmt):
                token = fmt[i + 1]
                if token == "M":
                    out.append(str(self.major))
                elif token == "m":
                    out.append(str(self.minor))
                elif token == "p":
                    out.append(str(self.patch))
                elif token == "s":
                    out.append(f"-{self.special}" if self.special else "")
                elif token == "d":
                    out.append(f"+{self.metadata}" if self.metadata else "")
                else:
                    out.append(fmt[i : i + 2])
                i += 2
            else:
                out.append(fmt[i])
                i += 1
        return "".join(out)

    def sort_key(self) -> tuple[int, int, int, int, str]:
        # A pre-release sorts before the release it precedes
        return (self.major, self.minor, self.patch, 0 if self.special else 1, self.special)

    def __str__(self) -> str:
        return self.format()

    @classmethod
    def parse(cls, text: str | None, fmt: str = "%M.%m.%p", strict: bool = True) -> SemVer | None:
        """Parse a version string.

        Args:
            text: Version string, e.g. "1.2.3"
            fmt: Token format the string is expected to follow
            strict: If True, the string must match ``fmt`` exactly. If False,
                the leading numeric components of anything version-like are
                accepted (missing parts become 0) and unparseable input
                yields None.

        Returns:
            SemVer, or None for unparseable input in non-strict mode.

        Raises:
            SemVerParseError: In strict mode, if the string does not match.
        """
        if text is not None:
            match = _format_regex(fmt).match(text.strip())
            if match:
                groups = match.groupdict()
                return cls(
                    major=int(groups.get("major") or 0),
                    minor=int(groups.get("minor") or 0),
                    patch=int(groups.get("patch") or 0),
                    special=groups.get("special") or "",
                    metadata=groups.get("metadata") or "",
                )

        if strict:
            raise SemVerParseError(f"'{text}' does not match version format '{fmt}'")

        if text is None:
            return None
        lenient = _LENIENT.match(text)
        if not lenient:
            logger.debug(f"Could not parse version '{text}'")
            return None
        major, minor, patch = (int(g) if g else 0 for g in lenient.groups())
        return cls(major=major, minor=minor, patch=patch)

    @classmethod
    def load(cls, path: Path) -> SemVer:
        """Load a version from a ``.semver`` file."""
        try:
            data = yaml.safe_load(path.read_text(encoding="utf-8")) or {}
        except yaml.YAMLError as e:
            raise SemVerParseError(f"Invalid YAML: {e}", path) from e
        if not isinstance(data, dict):
            raise SemVerParseError("Expected a mapping of version parts", path)

        def field(name: str) -> object:
            # Keys are written as Ruby symbols (":major"); accept plain ones too
            return data.get(f":{name}", data.get(name))

        try:
            return cls(
                major=int(field("major") or 0),
                minor=int(field("minor") or 0),
                patch=int(field("patch") or 0),
                special=str(field("special") or ""),
                metadata=str(field("metadata") or ""),
            )
        except (TypeError, ValueError) as e:
            raise SemVerParseError(f"Invalid version data: {e}", path) from e

    @classmethod
    def find(cls, start: str | Path | None = None) -> SemVer:
        """Find the nearest ``.semver`` file from ``start`` upwards.

        Args:
            start: Directory to begin in (default: current directory)

        Raises:
            SemVerMissingError: If no ``.semver`` file exists up to the root.
        """
        here = Path(start or Path.cwd()).resolve()
        for directory in (here, *here.parents):
            candidate = directory / SEMVER_FILE
            if candidate.is_file():
                logger.debug(f"Found {SEMVER_FILE} at {candidate}")
                return cls.load(candidate)
        raise SemVerMissingError(f"no {SEMVER_FILE} file found", here)
