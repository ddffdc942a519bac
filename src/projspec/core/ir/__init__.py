"""
projspec Internal Representation (IR).

Value types derived from project files and their companion lock files.
"""

from .project import (
    AssemblyReference,
    DeclaredPackage,
    IncludedFile,
    ItemKind,
    ResolvedPackage,
)

__all__ = [
    "AssemblyReference",
    "DeclaredPackage",
    "IncludedFile",
    "ItemKind",
    "ResolvedPackage",
]
