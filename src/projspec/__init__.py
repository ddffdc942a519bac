"""
projspec - metadata resolution for build-project files and application specs.

Reads XML project files, their packages.config lock files and YAML
application specs layered on top, and answers questions about a component:
its name, version, output location, references and included files.
"""

from __future__ import annotations

from importlib.metadata import PackageNotFoundError
from importlib.metadata import version as _metadata_version

# Re-export commonly used types for convenience
from .core import ir
from .core.appspec import ApplicationSpec
from .core.errors import (
    ConfigurationNotFoundError,
    CyclicReferenceError,
    InvalidArgumentError,
    NotFoundError,
    ProjSpecError,
)
from .core.project import ProjectDescriptor

try:
    __version__ = _metadata_version("projspec")
except PackageNotFoundError:
    # Running from a source checkout that was never installed
    __version__ = "0.0.0"

__all__ = [
    "__version__",
    "ir",
    "ApplicationSpec",
    "ProjectDescriptor",
    "ProjSpecError",
    "NotFoundError",
    "InvalidArgumentError",
    "ConfigurationNotFoundError",
    "CyclicReferenceError",
]
