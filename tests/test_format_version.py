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

import pytest

from apisix_config_validator.exceptions import UnsupportedVersionError
from apisix_config_validator.utils.format_version import (
    ReleaseVersion,
    is_supported_version,
    parse_proxy_version,
    parse_release_version,
)


@pytest.mark.parametrize("raw, expected", [
    ("3.11", ReleaseVersion(3, 11)),
    ("v3.2", ReleaseVersion(3, 2)),
    ("3.13.1", ReleaseVersion(3, 13, 1)),
    (" 3.3.0 ", ReleaseVersion(3, 3, 0)),
])
def test_parse_release_version(raw, expected):
    assert parse_release_version(raw) == expected


@pytest.mark.parametrize("raw", ["", "3", "3.x", "latest", "3.11.0.1"])
def test_parse_release_version_rejects_garbage(raw):
    with pytest.raises(UnsupportedVersionError):
        parse_release_version(raw)


def test_parse_release_version_rejects_non_strings():
    with pytest.raises(UnsupportedVersionError):
        parse_release_version(3.11)


def test_release_version_str():
    assert str(ReleaseVersion(3, 11)) == "3.11"
    assert str(ReleaseVersion(3, 11, 2)) == "3.11.2"


@pytest.mark.parametrize("raw, expected", [
    ("3.13", "3.13"),
    ("v3.11", "3.11"),
    ("3.3.5", "3.3"),
    ("3.2.0", "3.2"),
])
def test_parse_proxy_version(raw, expected):
    assert parse_proxy_version(raw) == expected


@pytest.mark.parametrize("raw", ["3.12", "2.15", "4.0", "invalid_version"])
def test_unsupported_proxy_version(raw):
    with pytest.raises(UnsupportedVersionError):
        parse_proxy_version(raw)
    assert not is_supported_version(raw)


def test_is_supported_version():
    assert is_supported_version("3.11")
    assert is_supported_version("v3.13.0")
