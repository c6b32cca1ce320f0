#!/usr/bin/env python3
"""
KUBETAGGER ENV PROVIDER
-----------------------
Exposes the custom logs configuration found in the environment as an
integration config. Meant to be collected once at startup.

Author: KubeTagger Team
Date: 2026-10-19
"""

import logging
from dataclasses import dataclass
from typing import List

from kubetagger.core.config import TaggerConfig

logger = logging.getLogger("kubetagger.providers.env")

ENVIRONMENT_VARIABLE = "environment-variable"
CONFIG_NAME = "logs_config_custom_configs"


@dataclass
class IntegrationConfig:
    provider: str
    name: str
    logs_config: bytes = b""


class EnvProvider:
    """Config provider backed by KUBETAGGER_LOGS_CONFIG_CUSTOM_CONFIGS."""

    def __init__(self, config: TaggerConfig):
        self.config = config

    def collect(self) -> List[IntegrationConfig]:
        """
        Returns one IntegrationConfig holding the custom logs configuration,
        or an empty list when none is set.
        """
        custom_configs = self.config.logs_custom_configs.strip()
        if not custom_configs:
            return []

        logger.debug(f"Collected custom logs configuration ({len(custom_configs)} bytes)")
        return [IntegrationConfig(
            provider=ENVIRONMENT_VARIABLE,
            name=CONFIG_NAME,
            logs_config=custom_configs.encode("utf-8"),
        )]

    def is_up_to_date(self) -> bool:
        # The environment is not expected to change, so collect() is never skipped
        return False

    def __str__(self) -> str:
        return ENVIRONMENT_VARIABLE
