# Copyright 2026 TIER IV, inc.
#
# Licensed under the Apache License, Version 2.0 (the "License");
# you may not use this file except in compliance with the License.
# You may obtain a copy of the License at
#
#     http://www.apache.org/licenses/LICENSE-2.0
#
# Unless required by applicable law or agreed to in writing, software
# distributed under the License is distributed on an "AS IS" BASIS,
# WITHOUT WARRANTIES OR CONDITIONS OF ANY KIND, either express or implied.
# See the License for the specific language governing permissions and
# limitations under the License.

"""Gateway version utilities.

Callers name the target APISIX release in several spellings (``3.11``,
``v3.11``, ``3.11.0``). All of them map onto one :class:`ProxyVersion`
value.

Compatibility rule:
  * **Major** and **minor** must name a supported release line exactly.
  * **Patch** is ignored; every patch of a release line shares one schema.
  * There is no fallback to a nearby release. Unknown releases are an error.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Optional

from ..exceptions import UnsupportedVersionError
from ..models.resource import ProxyVersion


# ---- version string → tuple ------------------------------------------------

_VERSION_RE = re.compile(r"^v?(\d+)\.(\d+)(?:\.(\d+))?$")


@dataclass(frozen=True)
class ReleaseVersion:
    """A parsed release version (major, minor, optional patch)."""

    major: int
    minor: int
    patch: Optional[int] = None

    @property
    def release_line(self) -> str:
        return f"{self.major}.{self.minor}"

    def __str__(self) -> str:
        if self.patch is None:
            return self.release_line
        return f"{self.major}.{self.minor}.{self.patch}"


def parse_release_version(raw: str) -> ReleaseVersion:
    """Parse a version string like ``3.11`` or ``v3.11.2``.

    Raises:
        UnsupportedVersionError: If the string cannot be parsed.
    """
    if not isinstance(raw, str):
        raise UnsupportedVersionError(
            f"Gateway version must be a string, got {type(raw).__name__}: {raw!r}"
        )

    m = _VERSION_RE.match(raw.strip())
    if m is None:
        raise UnsupportedVersionError(
            f"Invalid gateway version string: '{raw}'. "
            "Expected 'MAJOR.MINOR' or 'MAJOR.MINOR.PATCH' (e.g. '3.11')."
        )
    patch = m.group(3)
    return ReleaseVersion(int(m.group(1)), int(m.group(2)), int(patch) if patch is not None else None)


# ---- supported version check ------------------------------------------------


def parse_proxy_version(raw: str) -> str:
    """Map *raw* onto a supported :class:`ProxyVersion` value.

    Raises:
        UnsupportedVersionError: If *raw* is malformed or names an
            unsupported release line.
    """
    if raw in ProxyVersion.get_all_versions():
        return raw

    release = parse_release_version(raw)
    if release.release_line not in ProxyVersion.get_all_versions():
        raise UnsupportedVersionError(
            f"Unsupported gateway version: '{raw}'. "
            f"Supported versions: {ProxyVersion.get_all_versions()}"
        )
    return release.release_line


def is_supported_version(raw: str) -> bool:
    try:
        parse_proxy_version(raw)
    except UnsupportedVersionError:
        return False
    return True
