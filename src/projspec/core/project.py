"""
Project descriptor: semantic queries over a build-project XML file.

A project file looks like:

    <Project xmlns="http://schemas.microsoft.com/developer/msbuild/2003">
      <PropertyGroup>
        <AssemblyName>Foo</AssemblyName>
      </PropertyGroup>
      <PropertyGroup Condition=" '$(Configuration)|$(Platform)' == 'Debug|AnyCPU' ">
        <OutputPath>bin\\Debug\\</OutputPath>
      </PropertyGroup>
      <ItemGroup>
        <Reference Include="Bar"><HintPath>..\\lib\\Bar.dll</HintPath></Reference>
        <Compile Include="Program.cs" />
        <ProjectReference Include="..\\Baz\\Baz.csproj" />
      </ItemGroup>
    </Project>

PropertyGroup, Reference and ProjectReference queries match on local element
names, so SDK-style project files without the namespace work the same way.
Build configurations are selected by substring containment of
``"<configuration>|"`` in a PropertyGroup's Condition attribute; note that
"Debug" therefore also matches a "DebugFoo|AnyCPU" condition.
"""

from __future__ import annotations

import copy
import logging
import os
import xml.etree.ElementTree as ET
from pathlib import Path
from typing import Any, Protocol

from defusedxml import ElementTree as DefusedET
from defusedxml.common import DefusedXmlException

from . import paths
from .environment import DEFAULT_PACKAGES_DIR, MSBUILD_NAMESPACE, PACKAGES_CONFIG
from .errors import (
    ConfigurationNotFoundError,
    CyclicReferenceError,
    NotFoundError,
    OutputPathNotFoundError,
    ProjectParseError,
)
from .ir import AssemblyReference, DeclaredPackage, IncludedFile, ItemKind
from .package_repo import PackageRepository
from .semver import SemVer

logger = logging.getLogger(__name__)


class PackageFinder(Protocol):
    """Anything that can look up the latest version of a package by id."""

    def find_latest(self, package_id: str | None) -> Any: ...


def _local_name(tag: Any) -> str:
    # Comments and processing instructions carry a factory function as tag
    if not isinstance(tag, str):
        return ""
    return tag.rsplit("}", 1)[-1]


def _descendants(element: ET.Element, name: str) -> list[ET.Element]:
    return [el for el in element.iter() if el is not element and _local_name(el.tag) == name]


def _text(element: ET.Element) -> str:
    return "".join(element.itertext()).strip()


def _parse_xml(path: str) -> ET.ElementTree:
    try:
        # Keep comments so save() writes them back
        parser = DefusedET.DefusedXMLParser(target=ET.TreeBuilder(insert_comments=True))
        return DefusedET.parse(path, parser=parser)
    except (ET.ParseError, DefusedXmlException) as e:
        raise ProjectParseError(f"Malformed XML: {e}", path) from e


def _unqualified(root: ET.Element, namespace: str) -> ET.Element:
    """Copy a tree with ``namespace`` turned into the default xmlns.

    ElementTree otherwise writes the namespace with an ``ns0:`` prefix.
    """
    prefix = f"{{{namespace}}}"
    tree = copy.deepcopy(root)
    for node in tree.iter():
        if isinstance(node.tag, str) and node.tag.startswith(prefix):
            node.tag = node.tag[len(prefix) :]
    tree.set("xmlns", namespace)
    return tree


class ProjectDescriptor:
    """
    Properties, references and included files of one project file.

    The parsed document is owned by the descriptor; ``save`` is the only way
    it is written back.

    Attributes:
        base_path: Directory containing the project file
        file_name: The project file's name
        document: Parsed XML tree
    """

    def __init__(self, path: str | Path):
        path = str(path)
        if not os.path.isfile(path):
            raise NotFoundError("project file does not exist", path)
        self.document: ET.ElementTree = _parse_xml(path)
        self.base_path, self.file_name = os.path.split(path)
        self._sanity_checks()

    # -------------------------------------------------------------------------
    # Scalar properties
    # -------------------------------------------------------------------------

    @property
    def name(self) -> str | None:
        """The Name property, falling back to the assembly name."""
        return self._read_property("Name") or self.assembly_name

    title = name

    @property
    def assembly_name(self) -> str | None:
        return self._read_property("AssemblyName")

    @property
    def version(self) -> str | None:
        return self._read_property("Version")

    @property
    def authors(self) -> str | None:
        return self._read_property("Authors")

    @property
    def description(self) -> str | None:
        return self._read_property("Description")

    @property
    def license(self) -> str | None:
        return self._read_property("License")

    # -------------------------------------------------------------------------
    # Output paths
    # -------------------------------------------------------------------------

    def output_path(self, configuration: str) -> str | None:
        """Get the OutputPath of the given build configuration.

        Returns:
            The output path, or None if no PropertyGroup's Condition selects
            the configuration.
        """
        needle = f"{configuration}|"
        for group in self._property_groups():
            if needle not in (group.get("Condition") or ""):
                continue
            for node in _descendants(group, "OutputPath"):
                logger.debug(f"{self.name}: output path node[{configuration}]: {_text(node)}")
                return _text(node)
        logger.debug(f"{self.name}: output path node[{configuration}]: empty")
        return None

    def require_output_path(self, configuration: str) -> str:
        """Like ``output_path`` but the configuration must exist.

        Raises:
            ConfigurationNotFoundError: If no PropertyGroup selects it.
        """
        found = self.output_path(configuration)
        if found is None:
            raise ConfigurationNotFoundError(
                f"could not find configuration '{configuration}'", self.path
            )
        return found

    def fallback_output_path(self) -> str:
        """Get the first OutputPath in any PropertyGroup.

        For project files that don't condition their PropertyGroups on a
        configuration, as the defaults from some IDEs do.

        Raises:
            OutputPathNotFoundError: If no PropertyGroup has an OutputPath.
        """
        for group in self._property_groups():
            nodes = _descendants(group, "OutputPath")
            if not nodes:
                continue
            condition = group.get("Condition") or "no Condition specified"
            logger.warning(f"Chose an OutputPath in '{self}' for Configuration: <{condition}>")
            return _text(nodes[0])
        raise OutputPathNotFoundError("no PropertyGroup declares an OutputPath", self.path)

    def output_assembly_path(self, configuration: str) -> str:
        """Get the dll location, relative to ``base_path``, for a configuration."""
        output = self.output_path(configuration)
        if output is None:
            output = self.fallback_output_path()
        return paths.join(output, f"{self.assembly_name or ''}.dll")

    # -------------------------------------------------------------------------
    # References
    # -------------------------------------------------------------------------

    def references(self) -> list[AssemblyReference]:
        """All Reference elements of the project."""
        found = []
        for node in self._under_project("Reference"):
            hints = _descendants(node, "HintPath")
            found.append(
                AssemblyReference(
                    include=node.get("Include"),
                    hint_path=_text(hints[0]) if hints else None,
                )
            )
        return found

    def faulty_references(self) -> list[AssemblyReference]:
        """References without a HintPath, which can't be located on disk."""
        return [ref for ref in self.references() if ref.is_faulty]

    @property
    def has_faulty_references(self) -> bool:
        return bool(self.faulty_references())

    def find_reference(self, package_id: str) -> AssemblyReference | None:
        """Find the reference to an assembly shipped by the given package.

        Matches Include attributes of the form "<package_id>, Version=...".
        """
        needle = f"{package_id},"
        for ref in self.references():
            if ref.include and needle in ref.include:
                return ref
        return None

    def declared_project_references(self) -> list[ProjectDescriptor]:
        """Load every project this project references.

        Paths in ProjectReference Include attributes are relative to
        ``base_path``.

        Raises:
            NotFoundError: If a referenced project file is missing.
            CyclicReferenceError: If the project references itself.
        """
        projects = []
        for node in self._under_project("ProjectReference"):
            include = node.get("Include")
            if not include:
                logger.warning(f"{self.name}: ProjectReference without Include in '{self}'")
                continue
            names = _descendants(node, "Name")
            logger.debug(
                f"{self.name}: found project reference: {_text(names[0]) if names else include}"
            )
            ref_path = os.path.join(self.base_path, paths.normalise_slashes(include))
            if os.path.realpath(ref_path) == self._canonical_path():
                raise CyclicReferenceError([self.path, ref_path])
            projects.append(ProjectDescriptor(ref_path))
        return projects

    def transitive_project_references(self) -> list[ProjectDescriptor]:
        """Load every project reachable through project references.

        Each project appears once, in depth-first discovery order.

        Raises:
            CyclicReferenceError: If a reference leads back to a project on
                the path that reached it.
        """
        found: dict[str, ProjectDescriptor] = {}
        self._walk_references([self._canonical_path()], found)
        return list(found.values())

    def _walk_references(self, trail: list[str], found: dict[str, ProjectDescriptor]) -> None:
        for project in self.declared_project_references():
            key = project._canonical_path()
            if key in trail:
                raise CyclicReferenceError([*trail[trail.index(key) :], key])
            if key in found:
                continue
            found[key] = project
            project._walk_references([*trail, key], found)

    # -------------------------------------------------------------------------
    # Packages
    # -------------------------------------------------------------------------

    @property
    def package_lock_path(self) -> str:
        """Path of the sibling packages.config."""
        return os.path.join(self.base_path, PACKAGES_CONFIG)

    @property
    def has_package_lock_file(self) -> bool:
        return os.path.exists(self.package_lock_path)

    def declared_packages(self) -> list[DeclaredPackage]:
        """Packages pinned in packages.config; empty if there is none."""
        if not self.has_package_lock_file:
            return []
        doc = _parse_xml(self.package_lock_path)
        root = doc.getroot()
        containers = [root] if _local_name(root.tag) == "packages" else []
        containers += _descendants(root, "packages")

        declared = []
        for container in containers:
            for node in container:
                if _local_name(node.tag) != "package":
                    continue
                version = node.get("version")
                declared.append(
                    DeclaredPackage(
                        id=node.get("id"),
                        version=version,
                        target_framework=node.get("targetFramework"),
                        semver=SemVer.parse(version, "%M.%m.%p", strict=False),
                    )
                )
        return declared

    def find_packages(self, repository: PackageFinder | None = None) -> list[Any]:
        """Resolve declared packages against a package repository.

        Packages the repository can't find come back as whatever it returns
        for them (None for PackageRepository).
        """
        if repository is None:
            repository = PackageRepository(DEFAULT_PACKAGES_DIR)
        resolved = []
        for package in self.declared_packages():
            guess = repository.find_latest(package.id)
            logger.debug(f"{self.name}: guess: {guess}")
            resolved.append(guess)
        return resolved

    # -------------------------------------------------------------------------
    # Included files
    # -------------------------------------------------------------------------

    def included_files(self) -> list[IncludedFile]:
        """Files included under Compile, Content, EmbeddedResource and None items.

        Only items in the MSBuild namespace directly under
        /Project/ItemGroup are reported, grouped by category in that order.
        """
        root = self.document.getroot()
        ns = f"{{{MSBUILD_NAMESPACE}}}"
        if root.tag != f"{ns}Project":
            return []

        files = []
        for kind in ItemKind:
            for node in root.findall(f"{ns}ItemGroup/{ns}{kind.element_name}"):
                logger.debug(f"{self.name}: included_files looking at '{node.get('Include')}'")
                links = [child for child in node if _local_name(child.tag) == "Link"]
                files.append(
                    IncludedFile(
                        include=node.get("Include"),
                        item_name=kind,
                        link=_text(links[0]) if links else None,
                    )
                )
        return files

    # -------------------------------------------------------------------------
    # Persistence
    # -------------------------------------------------------------------------

    @property
    def path(self) -> str:
        """Path of the project file."""
        return os.path.join(self.base_path, self.file_name)

    def save(self, output_path: str | Path | None = None) -> str:
        """Write the document to ``output_path`` (default: the project file).

        Comments inside the Project element are kept; anything before it
        other than the XML declaration is not.

        Returns:
            The path written to.
        """
        output = str(output_path) if output_path is not None else self.path
        root = self.document.getroot()
        if root.tag.startswith(f"{{{MSBUILD_NAMESPACE}}}"):
            root = _unqualified(root, MSBUILD_NAMESPACE)
        ET.ElementTree(root).write(output, encoding="utf-8", xml_declaration=True)
        return output

    def __str__(self) -> str:
        return self.path

    def __repr__(self) -> str:
        return f"ProjectDescriptor({self.path!r})"

    # -------------------------------------------------------------------------
    # Internals
    # -------------------------------------------------------------------------

    def _sanity_checks(self) -> None:
        if not self.name:
            logger.warning(f"Project '{self.file_name}' has no name")

    def _canonical_path(self) -> str:
        return os.path.realpath(self.path)

    def _projects(self) -> list[ET.Element]:
        root = self.document.getroot()
        if _local_name(root.tag) == "Project":
            return [root]
        return _descendants(root, "Project")

    def _under_project(self, name: str) -> list[ET.Element]:
        return [node for project in self._projects() for node in _descendants(project, name)]

    def _property_groups(self) -> list[ET.Element]:
        return self._under_project("PropertyGroup")

    def _read_property(self, name: str) -> str | None:
        for group in self._property_groups():
            for node in _descendants(group, name):
                text = _text(node)
                if text:
                    return text
        return None
