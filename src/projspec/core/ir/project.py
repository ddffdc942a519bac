"""
Project value types for projspec IR.

These are derived, read-only views over a project file and its companion
``packages.config``:
- Assembly references (with or without a hint path)
- Declared packages from the lock file
- Files included in the build, by item category
- Packages resolved against a local package repository
"""

from __future__ import annotations

from enum import StrEnum

from pydantic import BaseModel, ConfigDict

from ..semver import SemVer


class ItemKind(StrEnum):
    """Item categories a project file can include files under.

    Declaration order is the order ``included_files`` reports categories in.
    """

    COMPILE = "compile"
    CONTENT = "content"
    EMBEDDED_RESOURCE = "embeddedresource"
    NONE = "none"

    @property
    def element_name(self) -> str:
        """XML element name of the item, e.g. 'EmbeddedResource'."""
        return _ELEMENT_NAMES[self]


_ELEMENT_NAMES = {
    ItemKind.COMPILE: "Compile",
    ItemKind.CONTENT: "Content",
    ItemKind.EMBEDDED_RESOURCE: "EmbeddedResource",
    ItemKind.NONE: "None",
}


class AssemblyReference(BaseModel):
    """
    A Reference element of a project file.

    Attributes:
        include: Value of the Include attribute, e.g. "Foo, Version=1.0.0.0"
        hint_path: Text of the HintPath child; None if there is no HintPath
    """

    include: str | None = None
    hint_path: str | None = None

    model_config = ConfigDict(frozen=True)

    @property
    def is_faulty(self) -> bool:
        """True if the reference cannot be resolved to a file on disk."""
        return self.hint_path is None


class DeclaredPackage(BaseModel):
    """
    A package pinned in packages.config.

    Attributes:
        id: Package id
        version: Version string as written
        target_framework: targetFramework attribute, if any
        semver: Parsed version; None if the version string is unparseable
    """

    id: str | None = None
    version: str | None = None
    target_framework: str | None = None
    semver: SemVer | None = None

    model_config = ConfigDict(frozen=True)


class IncludedFile(BaseModel):
    """A file included in the build under one item category."""

    include: str | None = None
    item_name: ItemKind
    link: str | None = None

    model_config = ConfigDict(frozen=True)


class ResolvedPackage(BaseModel):
    """A package folder found in a local package repository."""

    id: str
    version: SemVer
    path: str

    model_config = ConfigDict(frozen=True)
