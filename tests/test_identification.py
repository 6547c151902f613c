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

from apisix_config_validator.utils.identification import get_resource_identification


@pytest.mark.parametrize("raw, expected", [
    ('{"id": "test-id"}', "test-id"),
    ('{"name": "test-name"}', "test-name"),
    ('{"username": "test-user"}', "test-user"),
    ('{"username": "u", "name": "n", "id": "i"}', "i"),
    ('{"username": "u", "name": "n"}', "n"),
    ('{"id": "", "name": "fallback"}', "fallback"),
    ('{"id": 42}', "42"),
    ('{"id": true, "name": "n"}', "n"),
    ('{"plugins": {}}', ""),
    ("[1, 2]", ""),
    ("{not json", ""),
    (b'{"name": "from-bytes"}', "from-bytes"),
])
def test_get_resource_identification(raw, expected):
    assert get_resource_identification(raw) == expected


def test_decoded_documents():
    assert get_resource_identification({"username": "consumer1"}) == "consumer1"
    assert get_resource_identification(None) == ""


def test_deeply_nested_document():
    nested = "[" * 100000 + "]" * 100000

    assert get_resource_identification(nested) == ""
    assert get_resource_identification('{"id": ' + nested + "}") == ""
