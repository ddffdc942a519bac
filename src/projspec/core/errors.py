"""
Error types for projspec project and application-spec resolution.
"""

from pathlib import Path


class ProjSpecError(Exception):
    """Base exception for all projspec errors."""

    def __init__(self, message: str, path: str | Path | None = None):
        self.message = message
        self.path = path
        super().__init__(self._format_message())

    def _format_message(self) -> str:
        """Format error message with the offending path if available."""
        if self.path is not None:
            return f"{self.path}: {self.message}"
        return self.message


class NotFoundError(ProjSpecError):
    """
    Raised when a required file does not exist.

    Examples:
    - Project file path handed to ProjectDescriptor is missing
    - Referenced project file is missing
    """

    pass


class InvalidArgumentError(ProjSpecError, ValueError):
    """
    Raised when constructor input is missing or malformed.

    Examples:
    - YAML data is None
    - YAML does not hold a mapping
    - No project file could be resolved for an application spec
    """

    pass


class ConfigurationNotFoundError(ProjSpecError, LookupError):
    """Raised when a required build configuration has no property group."""

    pass


class OutputPathNotFoundError(ProjSpecError, LookupError):
    """Raised when no property group of a project declares an OutputPath."""

    pass


class ProjectParseError(ProjSpecError):
    """Raised when a project or lock file is not well-formed XML."""

    pass


class CyclicReferenceError(ProjSpecError):
    """
    Raised when project references form a cycle.

    Attributes:
        cycle: Project paths making up the cycle, first and last equal
    """

    def __init__(self, cycle: list[str]):
        self.cycle = cycle
        super().__init__("cyclic project reference: " + " -> ".join(cycle))


class SemVerMissingError(ProjSpecError):
    """Raised when no .semver file can be found on disk."""

    pass


class SemVerParseError(ProjSpecError, ValueError):
    """Raised when a version string does not match the expected format."""

    pass
