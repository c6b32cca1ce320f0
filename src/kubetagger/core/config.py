#!/usr/bin/env python3
"""
KUBETAGGER CONFIGURATION
------------------------
Loads the tagging rules (labels/annotations as tags) and the custom logs
configuration from the environment or from a YAML/JSON file.

Environment variables:
    KUBETAGGER_KUBERNETES_POD_LABELS_AS_TAGS       JSON object, glob pattern -> tag template
    KUBETAGGER_KUBERNETES_POD_ANNOTATIONS_AS_TAGS  JSON object, annotation -> tag name
    KUBETAGGER_LOGS_CONFIG_CUSTOM_CONFIGS          raw logs configuration blob

Author: KubeTagger Team
Date: 2026-10-19
"""

import json
import logging
import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, Mapping, Optional

from ruamel.yaml import YAML
from ruamel.yaml.error import YAMLError

logger = logging.getLogger("kubetagger.config")

ENV_LABELS_AS_TAGS = "KUBETAGGER_KUBERNETES_POD_LABELS_AS_TAGS"
ENV_ANNOTATIONS_AS_TAGS = "KUBETAGGER_KUBERNETES_POD_ANNOTATIONS_AS_TAGS"
ENV_LOGS_CUSTOM_CONFIGS = "KUBETAGGER_LOGS_CONFIG_CUSTOM_CONFIGS"


class ConfigError(ValueError):
    """Raised when a configuration source cannot be parsed."""


@dataclass
class TaggerConfig:
    """
    Read-only snapshot of the tagging configuration.

    Mapping keys are lower-cased on load since the extractor matches them
    against lower-cased label and annotation names.
    """
    labels_as_tags: Dict[str, str] = field(default_factory=dict)
    annotations_as_tags: Dict[str, str] = field(default_factory=dict)
    logs_custom_configs: str = ""

    def __post_init__(self):
        self.labels_as_tags = _lower_keys(self.labels_as_tags)
        self.annotations_as_tags = _lower_keys(self.annotations_as_tags)

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None) -> "TaggerConfig":
        env = os.environ if environ is None else environ
        return cls(
            labels_as_tags=_json_mapping(env.get(ENV_LABELS_AS_TAGS, ""), ENV_LABELS_AS_TAGS),
            annotations_as_tags=_json_mapping(env.get(ENV_ANNOTATIONS_AS_TAGS, ""), ENV_ANNOTATIONS_AS_TAGS),
            logs_custom_configs=env.get(ENV_LOGS_CUSTOM_CONFIGS, ""),
        )

    @classmethod
    def from_file(cls, path: str) -> "TaggerConfig":
        """
        Loads a YAML (or JSON) configuration file:

            kubernetes_pod_labels_as_tags:
              app: kube_app
            kubernetes_pod_annotations_as_tags:
              team: team
            logs_config:
              custom_configs: '[...]'
        """
        config_path = Path(path)
        try:
            raw_text = config_path.read_text(encoding="utf-8-sig")
            data = YAML(typ="safe").load(raw_text)
        except (OSError, YAMLError) as e:
            raise ConfigError(f"Unable to load configuration from {config_path}: {e}")

        if data is None:
            data = {}
        if not isinstance(data, dict):
            raise ConfigError(f"Configuration root in {config_path} must be a mapping")

        logs_config = data.get("logs_config") or {}
        if not isinstance(logs_config, dict):
            raise ConfigError("'logs_config' must be a mapping")

        custom = logs_config.get("custom_configs", "")
        if not isinstance(custom, str):
            # Structured blobs are kept as their JSON text
            custom = json.dumps(custom)

        logger.debug(f"Loaded configuration from {config_path}")
        return cls(
            labels_as_tags=_checked_mapping(data.get("kubernetes_pod_labels_as_tags"),
                                            "kubernetes_pod_labels_as_tags"),
            annotations_as_tags=_checked_mapping(data.get("kubernetes_pod_annotations_as_tags"),
                                                 "kubernetes_pod_annotations_as_tags"),
            logs_custom_configs=custom,
        )

    def merged_with(self, override: "TaggerConfig") -> "TaggerConfig":
        """Returns a new config where non-empty values of `override` win."""
        return TaggerConfig(
            labels_as_tags=override.labels_as_tags or self.labels_as_tags,
            annotations_as_tags=override.annotations_as_tags or self.annotations_as_tags,
            logs_custom_configs=override.logs_custom_configs or self.logs_custom_configs,
        )


def load_config(config_path: Optional[str] = None,
                environ: Optional[Mapping[str, str]] = None) -> TaggerConfig:
    """File configuration (if any) overridden by the environment."""
    env_config = TaggerConfig.from_env(environ)
    if not config_path:
        return env_config
    return TaggerConfig.from_file(config_path).merged_with(env_config)


def _json_mapping(raw: str, source: str) -> Dict[str, str]:
    if not raw.strip():
        return {}
    try:
        value = json.loads(raw)
    except json.JSONDecodeError as e:
        raise ConfigError(f"{source} is not valid JSON: {e}")
    return _checked_mapping(value, source)


def _checked_mapping(value: Any, source: str) -> Dict[str, str]:
    if value is None:
        return {}
    if not isinstance(value, dict):
        raise ConfigError(f"{source} must be a mapping, got {type(value).__name__}")
    return {str(k): str(v) for k, v in value.items()}


def _lower_keys(mapping: Dict[str, str]) -> Dict[str, str]:
    return {k.lower(): v for k, v in mapping.items()}
