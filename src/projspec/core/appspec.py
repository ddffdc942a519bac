"""
Application spec: packaging and deployment metadata layered over a project.

An application spec is a YAML file (conventionally ``*.appspec``) next to,
or pointing at, a project file:

    title: my-service
    project_path: ../MyService/MyService.csproj
    port: 8080
    contents:
      - bin
      - views

Every query follows the same priority chain: the YAML value if present,
else what the bound project file declares, else a built-in default. Keys
without a dedicated query are available through ``get_config_value``.
"""

from __future__ import annotations

import glob
import logging
import os
from collections.abc import Callable
from pathlib import Path
from typing import Any, TypeVar

import yaml

from .environment import (
    DEFAULT_CATEGORY,
    DEFAULT_CONF_FOLDER,
    DEFAULT_CONFIGURATION,
    DEFAULT_HOST_HEADER,
    DEFAULT_PORT,
    DEFAULT_PROVIDER,
    DEFAULT_VERSION,
    VERSION_FORMAT,
    get_formal_version,
)
from .errors import InvalidArgumentError
from .project import ProjectDescriptor
from .semver import SemVer
from .vcs import disk_version, git_remote_url

logger = logging.getLogger(__name__)

T = TypeVar("T")


def first_present(*sources: Callable[[], T | None]) -> T | None:
    """Return the first value that is not None, calling each source lazily."""
    for source in sources:
        value = source()
        if value is not None:
            return value
    return None


def _valid_path(path: str | Path | None) -> bool:
    return bool(path) and os.path.isfile(path)  # type: ignore[arg-type]


class ApplicationSpec:
    """
    Packaging metadata for one application, bound to one project file.

    Attributes:
        path: Where the spec was read from
        conf: Parsed YAML mapping
        project: The bound project descriptor
        semver: Externally supplied version, e.g. from a release tag
    """

    def __init__(
        self,
        descriptor_path: str | Path | None,
        data: str | None,
        semver: SemVer | None = None,
    ):
        """
        Create an application spec from YAML data.

        The project file is resolved from ``project_path`` in the YAML,
        relative to the descriptor's directory, or else by looking for the
        first ``*proj`` file next to the descriptor.

        Args:
            descriptor_path: Location of the spec file
            data: YAML text
            semver: Optional version that overrides every other version source

        Raises:
            InvalidArgumentError: If data is None, isn't a YAML mapping, or no
                existing project file can be resolved.
            NotFoundError: If the resolved project file disappears before load.
        """
        if data is None:
            raise InvalidArgumentError("data is None", descriptor_path)
        self.path = str(descriptor_path) if descriptor_path is not None else None

        try:
            conf = yaml.safe_load(data)
        except yaml.YAMLError as e:
            raise InvalidArgumentError(f"Invalid YAML: {e}", descriptor_path) from e
        if conf is None:
            conf = {}
        if not isinstance(conf, dict):
            raise InvalidArgumentError("expected a YAML mapping", descriptor_path)
        self.conf: dict[str, Any] = conf

        project_path = self.resolve_project(self.path, self.conf)
        if not _valid_path(project_path):
            raise InvalidArgumentError(
                f"couldn't find project, descriptor_path: {self.path!r}", project_path
            )

        self.project = ProjectDescriptor(project_path)  # type: ignore[arg-type]
        self.semver = semver

    @property
    def proj(self) -> ProjectDescriptor:
        return self.project

    # -------------------------------------------------------------------------
    # Project resolution
    # -------------------------------------------------------------------------

    def resolve_project(self, descriptor_path: str | None, conf: dict[str, Any]) -> str | None:
        """Resolve the project file for a descriptor path and configuration.

        Priority:
        1. ``project_path`` joined onto the descriptor's directory, if the
           descriptor path exists
        2. ``project_path`` as given
        3. the first ``*proj`` file in the descriptor's directory
        """
        logger.debug(
            f"Trying to resolve project, descriptor_path: {descriptor_path!r}, conf: {conf!r}"
        )
        project_path = conf.get("project_path")
        if project_path and _valid_path(descriptor_path):
            joined = os.path.join(os.path.dirname(str(descriptor_path)), str(project_path))
            return os.path.normpath(os.path.abspath(joined))

        logger.debug("Didn't have both a project_path and a valid descriptor_path")
        if project_path:
            return str(project_path)
        if descriptor_path is None:
            return None
        return self.find_first_project(descriptor_path)

    def find_first_project(self, descriptor_path: str) -> str | None:
        """Find the first ``*proj`` file next to the descriptor, by name."""
        logger.debug(f"No valid project_path, looking for a project next to {descriptor_path!r}")
        directory = os.path.abspath(os.path.dirname(descriptor_path))
        candidates = sorted(
            p for p in glob.glob(os.path.join(glob.escape(directory), "*proj")) if os.path.isfile(p)
        )
        return candidates[0] if candidates else None

    @property
    def dir_path(self) -> str:
        """Absolute directory of the spec file."""
        return os.path.abspath(os.path.dirname(self.path or "."))

    # -------------------------------------------------------------------------
    # Queries
    # -------------------------------------------------------------------------

    def get_config_value(self, key: str, default: Any = None) -> Any:
        """Get any top-level key of the spec, or ``default`` if it's absent."""
        return self.conf.get(key, default)

    def _conf(self, key: str) -> Callable[[], Any]:
        return lambda: self.conf.get(key)

    @property
    def exe(self) -> str:
        """Executable name; defaults to the project's assembly name plus '.exe'."""
        return first_present(self._conf("exe"), lambda: f"{self.project.assembly_name or ''}.exe")

    @property
    def title_raw(self) -> str | None:
        """The title as given, without lowercasing."""
        return first_present(self._conf("title"), lambda: self.project.title)

    # Package and process identifier
    id = title_raw

    @property
    def title(self) -> str | None:
        """Title for the package, the service and the process on the server."""
        raw = self.title_raw
        return str(raw).lower() if raw is not None else None

    @property
    def description(self) -> str | None:
        return first_present(self._conf("description"), lambda: self.project.description)

    @property
    def uri(self) -> str | None:
        """Source location; defaults to the first git remote."""
        return first_present(self._conf("uri"), lambda: git_remote_url(self.dir_path))

    @property
    def category(self) -> str:
        return first_present(self._conf("category"), lambda: DEFAULT_CATEGORY)

    @property
    def license(self) -> str | None:
        return first_present(self._conf("license"), lambda: self.project.license)

    @property
    def version(self) -> str:
        """The version, by priority.

        1. version supplied at construction
        2. FORMAL_VERSION environment variable
        3. the spec's ``version``
        4. the project's Version property
        5. the nearest .semver file on disk
        6. "1.0.0"
        """
        return first_present(
            self._supplied_version,
            get_formal_version,
            self._conf("version"),
            lambda: self.project.version,
            lambda: disk_version(self.dir_path, VERSION_FORMAT),
            lambda: DEFAULT_VERSION,
        )

    def bin_folder(self, configuration: str = DEFAULT_CONFIGURATION) -> str | None:
        """Binary folder from the spec, else the project's output path.

        None if neither the spec nor the project declares one for the
        configuration.
        """
        return first_present(self._conf("bin"), lambda: self.project.output_path(configuration))

    @property
    def conf_folder(self) -> str:
        return first_present(self._conf("conf_folder"), lambda: DEFAULT_CONF_FOLDER)

    @property
    def contents(self) -> list[Any]:
        """Paths that make up the main contents of the package."""
        return first_present(self._conf("contents"), list)

    @property
    def provider(self) -> str:
        """Layout provider used when building the package directory tree."""
        return first_present(self._conf("provider"), lambda: DEFAULT_PROVIDER)

    @property
    def port(self) -> str:
        """Port the site binds to."""
        return first_present(self._conf("port"), lambda: DEFAULT_PORT)

    @property
    def host_header(self) -> str:
        """Host header of the site binding; '*' binds all hosts."""
        return first_present(self._conf("host_header"), lambda: DEFAULT_HOST_HEADER)

    def _supplied_version(self) -> str | None:
        if self.semver is None:
            return None
        return self.semver.format(VERSION_FORMAT)

    # -------------------------------------------------------------------------
    # Loading
    # -------------------------------------------------------------------------

    @classmethod
    def load(cls, descriptor_path: str | Path | None) -> ApplicationSpec:
        """Load an application spec from a file.

        Raises:
            InvalidArgumentError: If the path is None or doesn't exist.
        """
        if descriptor_path is None:
            raise InvalidArgumentError("missing parameter descriptor_path")
        if not os.path.isfile(descriptor_path):
            raise InvalidArgumentError("descriptor_path does not exist", descriptor_path)
        data = Path(descriptor_path).read_text(encoding="utf-8")
        return cls(descriptor_path, data)

    def __str__(self) -> str:
        return f"AppSpec[{self.title}], {len(self.conf)} keys]"

    def __repr__(self) -> str:
        return f"ApplicationSpec({self.path!r}, project={self.project.path!r})"
