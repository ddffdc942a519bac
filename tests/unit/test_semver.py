"""Tests for SemVer parsing, formatting and .semver discovery."""

from __future__ import annotations

from pathlib import Path

import pytest

from projspec.core.errors import SemVerMissingError, SemVerParseError
from projspec.core.semver import SemVer


class TestParse:
    def test_strict(self) -> None:
        assert SemVer.parse("1.2.3") == SemVer(1, 2, 3)

    def test_strict_rejects_mismatch(self) -> None:
        with pytest.raises(SemVerParseError):
            SemVer.parse("1.2")

    def test_strict_rejects_none(self) -> None:
        with pytest.raises(SemVerParseError):
            SemVer.parse(None)

    def test_special_and_metadata(self) -> None:
        version = SemVer.parse("1.2.3-rc.1+build.5", "%M.%m.%p%s%d")
        assert version == SemVer(1, 2, 3, special="rc.1", metadata="build.5")

    @pytest.mark.parametrize(
        "text,expected",
        [
            ("4.5.0.0", SemVer(4, 5, 0)),
            ("2.1", SemVer(2, 1, 0)),
            ("7", SemVer(7, 0, 0)),
        ],
    )
    def test_lenient(self, text: str, expected: SemVer) -> None:
        assert SemVer.parse(text, strict=False) == expected

    def test_lenient_unparseable_is_none(self) -> None:
        assert SemVer.parse("latest", strict=False) is None
        assert SemVer.parse(None, strict=False) is None


class TestFormat:
    def test_default_format(self) -> None:
        assert SemVer(1, 2, 3, "beta", "abc").format() == "1.2.3-beta+abc"
        assert str(SemVer(1, 2, 3)) == "1.2.3"

    def test_short_format(self) -> None:
        assert SemVer(1, 2, 3, "beta").format("%M.%m.%p") == "1.2.3"
        assert SemVer(1, 2, 3).format("v%M.%m") == "v1.2"

    def test_prerelease_sorts_first(self) -> None:
        versions = [SemVer(1, 0, 0), SemVer(1, 0, 0, "rc"), SemVer(0, 9, 9)]
        ordered = sorted(versions, key=SemVer.sort_key)
        assert ordered == [SemVer(0, 9, 9), SemVer(1, 0, 0, "rc"), SemVer(1, 0, 0)]


class TestFind:
    def test_find_walks_up(self, tmp_path: Path) -> None:
        (tmp_path / ".semver").write_text(
            "---\n:major: 3\n:minor: 1\n:patch: 4\n:special: 'alpha'\n:metadata: ''\n"
        )
        nested = tmp_path / "a" / "b"
        nested.mkdir(parents=True)
        assert SemVer.find(nested) == SemVer(3, 1, 4, special="alpha")

    def test_plain_keys_accepted(self, tmp_path: Path) -> None:
        (tmp_path / ".semver").write_text("major: 1\nminor: 0\npatch: 2\n")
        assert SemVer.find(tmp_path) == SemVer(1, 0, 2)

    def test_missing_raises(self, tmp_path: Path) -> None:
        with pytest.raises(SemVerMissingError):
            SemVer.find(tmp_path)

    def test_garbage_raises_parse_error(self, tmp_path: Path) -> None:
        (tmp_path / ".semver").write_text("just a string\n")
        with pytest.raises(SemVerParseError):
            SemVer.find(tmp_path)
