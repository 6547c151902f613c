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

from apisix_config_validator.config import ValidatorConfig
from apisix_config_validator.models.resource import StorageSink


def test_defaults(monkeypatch):
    for name in ("LOG_LEVEL", "PRINT_LEVEL", "CACHE_ENABLED", "SCHEMA_DIR", "DEFAULT_SINK"):
        monkeypatch.delenv(f"APISIX_CONFIG_VALIDATOR_{name}", raising=False)

    config = ValidatorConfig.from_env()

    assert config == ValidatorConfig()
    assert config.default_sink == StorageSink.RUNTIME_STORE
    assert config.cache_enabled is True


def test_from_env(monkeypatch):
    monkeypatch.setenv("APISIX_CONFIG_VALIDATOR_LOG_LEVEL", "DEBUG")
    monkeypatch.setenv("APISIX_CONFIG_VALIDATOR_PRINT_LEVEL", "WARNING")
    monkeypatch.setenv("APISIX_CONFIG_VALIDATOR_CACHE_ENABLED", "False")
    monkeypatch.setenv("APISIX_CONFIG_VALIDATOR_SCHEMA_DIR", "/opt/schemas")
    monkeypatch.setenv("APISIX_CONFIG_VALIDATOR_DEFAULT_SINK", "DATABASE")

    config = ValidatorConfig.from_env()

    assert config.log_level == "DEBUG"
    assert config.print_level == "WARNING"
    assert config.cache_enabled is False
    assert config.schema_dir == "/opt/schemas"
    assert config.default_sink == StorageSink.DRAFT_STORE


def test_unknown_default_sink_falls_back(monkeypatch, caplog):
    monkeypatch.setenv("APISIX_CONFIG_VALIDATOR_DEFAULT_SINK", "redis")

    with caplog.at_level(logging.WARNING, logger="apisix_config_validator.config"):
        config = ValidatorConfig.from_env()

    assert config.default_sink == StorageSink.RUNTIME_STORE
    assert "redis" in caplog.text


def test_set_logging_configures_package_logger():
    logger = ValidatorConfig(log_level="debug", print_level="warning").set_logging()
    try:
        assert logger.name == "apisix_config_validator"
        assert logger.level == logging.DEBUG
        assert logger.propagate is False
        assert [handler.level for handler in logger.handlers] == [logging.DEBUG, logging.WARNING]
    finally:
        for handler in list(logger.handlers):
            logger.removeHandler(handler)
        logger.propagate = True
        logger.setLevel(logging.NOTSET)
