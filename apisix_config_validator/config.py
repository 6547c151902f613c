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

"""Configuration management for the APISIX config validator."""

import os
import logging
from dataclasses import dataclass
from typing import Optional

from .models.resource import StorageSink
from .utils.logging_utils import configure_split_stream_logging


logger = logging.getLogger(__name__)

_ENV_PREFIX = "APISIX_CONFIG_VALIDATOR_"


@dataclass
class ValidatorConfig:
    """Runtime settings of the validator."""
    log_level: str = "INFO"
    print_level: str = "ERROR"
    cache_enabled: bool = True

    # Directory holding <version>/schema.json documents; packaged documents when empty
    schema_dir: str = ""
    # Sink used by the lint CLI when none is given on the command line
    default_sink: str = StorageSink.RUNTIME_STORE

    @classmethod
    def from_env(cls) -> 'ValidatorConfig':
        """Create configuration from environment variables."""
        default_sink = os.getenv(_ENV_PREFIX + 'DEFAULT_SINK', StorageSink.RUNTIME_STORE).lower()
        if default_sink not in StorageSink.get_all_sinks():
            logger.warning(
                f"Ignoring unknown {_ENV_PREFIX}DEFAULT_SINK '{default_sink}'; "
                f"using '{StorageSink.RUNTIME_STORE}'. Valid sinks: {StorageSink.get_all_sinks()}"
            )
            default_sink = StorageSink.RUNTIME_STORE
        return cls(
            log_level=os.getenv(_ENV_PREFIX + 'LOG_LEVEL', 'INFO'),
            print_level=os.getenv(_ENV_PREFIX + 'PRINT_LEVEL', 'ERROR'),
            cache_enabled=os.getenv(_ENV_PREFIX + 'CACHE_ENABLED', 'true').lower() == 'true',
            schema_dir=os.getenv(_ENV_PREFIX + 'SCHEMA_DIR', ''),
            default_sink=default_sink,
        )

    def set_logging(self, formatter: Optional[logging.Formatter] = None) -> logging.Logger:
        """Setup logging based on configuration."""
        level = getattr(logging, self.log_level.upper(), logging.INFO)
        stderr_level = getattr(logging, self.print_level.upper(), logging.ERROR)

        if formatter is None:
            formatter = logging.Formatter('%(name)s - %(levelname)s - %(message)s')
        return configure_split_stream_logging(level=level, stderr_level=stderr_level, formatter=formatter)


# Global configuration instance
validator_config = ValidatorConfig.from_env()
