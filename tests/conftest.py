"""Shared pytest fixtures for projspec tests."""

import textwrap
from collections.abc import Callable
from pathlib import Path

import pytest

MSBUILD_NS = "http://schemas.microsoft.com/developer/msbuild/2003"

CSPROJ = textwrap.dedent(f"""\
    <?xml version="1.0" encoding="utf-8"?>
    <Project ToolsVersion="4.0" DefaultTargets="Build" xmlns="{MSBUILD_NS}">
      <PropertyGroup>
        <Configuration Condition=" '$(Configuration)' == '' ">Debug</Configuration>
        <Name>Sample</Name>
        <AssemblyName>Sample.Service</AssemblyName>
        <Version>2.1.0</Version>
        <Authors>Jane Doe</Authors>
        <Description>A sample service</Description>
        <License>MIT</License>
      </PropertyGroup>
      <PropertyGroup Condition=" '$(Configuration)|$(Platform)' == 'Debug|AnyCPU' ">
        <OutputPath>bin\\Debug\\</OutputPath>
      </PropertyGroup>
      <PropertyGroup Condition=" '$(Configuration)|$(Platform)' == 'Release|AnyCPU' ">
        <OutputPath>bin\\Release\\</OutputPath>
      </PropertyGroup>
      <ItemGroup>
        <Reference Include="System" />
        <Reference Include="Newtonsoft.Json, Version=6.0.0.0, Culture=neutral">
          <HintPath>..\\packages\\Newtonsoft.Json.6.0.3\\lib\\net45\\Newtonsoft.Json.dll</HintPath>
        </Reference>
      </ItemGroup>
      <ItemGroup>
        <Compile Include="Program.cs" />
        <Compile Include="Properties\\AssemblyInfo.cs" />
        <Compile Include="..\\Shared\\Version.cs">
          <Link>Properties\\Version.cs</Link>
        </Compile>
        <Content Include="web.config" />
        <EmbeddedResource Include="Resources\\Strings.resx" />
        <None Include="packages.config" />
      </ItemGroup>
    </Project>
""")

PACKAGES_CONFIG = textwrap.dedent("""\
    <?xml version="1.0" encoding="utf-8"?>
    <packages>
      <package id="Newtonsoft.Json" version="6.0.3" targetFramework="net45" />
      <package id="NLog" version="3.1.0.0" targetFramework="net45" />
      <package id="Broken" version="not-a-version" targetFramework="net40" />
    </packages>
""")


def make_project_xml(body: str, namespaced: bool = True) -> str:
    """Wrap project body XML in a Project root element."""
    xmlns = f' xmlns="{MSBUILD_NS}"' if namespaced else ""
    return f'<?xml version="1.0" encoding="utf-8"?>\n<Project{xmlns}>\n{body}\n</Project>\n'


@pytest.fixture
def write_file(tmp_path: Path) -> Callable[[str, str], Path]:
    """Return a helper writing text to a path relative to tmp_path."""

    def _write(relative: str, content: str) -> Path:
        path = tmp_path / relative
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(content, encoding="utf-8")
        return path

    return _write


@pytest.fixture
def sample_project(write_file: Callable[[str, str], Path]) -> Path:
    """A full project file with a sibling packages.config."""
    write_file("Sample/packages.config", PACKAGES_CONFIG)
    return write_file("Sample/Sample.csproj", CSPROJ)


@pytest.fixture(autouse=True)
def _isolate_environment(
    monkeypatch: pytest.MonkeyPatch, tmp_path_factory: pytest.TempPathFactory
) -> None:
    """Keep FORMAL_VERSION and stray .semver files from leaking into tests."""
    monkeypatch.delenv("FORMAL_VERSION", raising=False)
    monkeypatch.chdir(tmp_path_factory.mktemp("cwd"))
