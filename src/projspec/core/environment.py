"""
Environment and default configuration for projspec.

The FORMAL_VERSION environment variable lets a build server pin the version
reported by an application spec, ahead of anything declared in files:

    FORMAL_VERSION=2.3.1 python -m your_packaging_script

Everything else is a module-level default consulted at the end of a
priority chain.
"""

from __future__ import annotations

import os

# Environment variable consulted by ApplicationSpec.version
FORMAL_VERSION_VAR = "FORMAL_VERSION"

# Build-project XML namespace (MSBuild 2003 schema)
MSBUILD_NAMESPACE = "http://schemas.microsoft.com/developer/msbuild/2003"

# Sibling lock file enumerating pinned packages
PACKAGES_CONFIG = "packages.config"

# Where package folders are looked up when no repository is given
DEFAULT_PACKAGES_DIR = "./src/packages"

VERSION_FORMAT = "%M.%m.%p"

DEFAULT_VERSION = "1.0.0"
DEFAULT_CONFIGURATION = "Release"
DEFAULT_CATEGORY = "apps"
DEFAULT_CONF_FOLDER = "."
DEFAULT_PROVIDER = "defaults"
DEFAULT_PORT = "80"
DEFAULT_HOST_HEADER = "*"


def get_formal_version() -> str | None:
    """Get the formal version from FORMAL_VERSION.

    Returns:
        The stripped value, or None if the variable is unset or blank.

    Examples:
        >>> import os
        >>> os.environ["FORMAL_VERSION"] = "2.0.1"
        >>> get_formal_version()
        '2.0.1'
    """
    value = os.environ.get(FORMAL_VERSION_VAR, "").strip()
    return value or None
