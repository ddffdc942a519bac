"""Core projspec functionality: project descriptors, application specs, versions, packages."""

from . import ir
from .appspec import ApplicationSpec
from .errors import (
    ConfigurationNotFoundError,
    CyclicReferenceError,
    InvalidArgumentError,
    NotFoundError,
    OutputPathNotFoundError,
    ProjectParseError,
    ProjSpecError,
    SemVerMissingError,
    SemVerParseError,
)
from .package_repo import PackageRepository
from .project import ProjectDescriptor
from .semver import SemVer

__all__ = [
    "ir",
    "ApplicationSpec",
    "ProjectDescriptor",
    "PackageRepository",
    "SemVer",
    "ProjSpecError",
    "NotFoundError",
    "InvalidArgumentError",
    "ConfigurationNotFoundError",
    "OutputPathNotFoundError",
    "ProjectParseError",
    "CyclicReferenceError",
    "SemVerMissingError",
    "SemVerParseError",
]
