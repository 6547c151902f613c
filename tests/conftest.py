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

import logging

import pytest

from apisix_config_validator.config import validator_config
from apisix_config_validator.models import json_schema_loader
from apisix_config_validator.utils.logging_utils import PACKAGE_LOGGER_NAME


@pytest.fixture(autouse=True)
def _reset_schema_cache():
    json_schema_loader.clear_cache()
    yield
    json_schema_loader.clear_cache()


@pytest.fixture
def quiet_cli_logging(monkeypatch):
    """Keep the CLI from binding log handlers to pytest's captured streams."""
    monkeypatch.setattr(validator_config, "set_logging", lambda formatter=None: logging.getLogger(PACKAGE_LOGGER_NAME))
