"""Framework configuration: governance vocabulary and execution guardrails."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Dict, List

import yaml
from jsonschema import ValidationError, validate

from spec_compiler.artifacts.paths import FRAMEWORK_CONFIG, load_schema
from spec_compiler.errors import ConfigError
from spec_compiler.models import Concept, FrameworkConfig, Synchronization
from spec_compiler.utils.io import read_yaml

logger = logging.getLogger(__name__)

DEFAULT_SECURITY_DEFAULTS = [
    "Local filesystem only; no external service calls or secret material in artifacts.",
    "Deterministic execution; disable automatic retries or unstated fallbacks.",
    "No application-code generation; specifications only.",
]

DEFAULT_ALLOWED_PATHS = [
    "src/**",
    "tests/**",
    "intent/**",
    "clarification/**",
    "specs/**",
    "validation/**",
    "synthesis/**",
]

DEFAULT_DISALLOWED_ACTIONS = [
    "Generate application code.",
    "Invoke LLMs inside the compiler pipeline.",
    "Bypass validation or governance gates.",
]


def default_config() -> FrameworkConfig:
    return FrameworkConfig(
        concepts=[
            Concept(
                id="spec-generation-framework",
                name="Spec Generation Framework",
                description="Deterministic compiler that converts human intent into governed specifications.",
            )
        ],
        synchronizations=[
            Synchronization(
                id="governance-alignment",
                description="Ensure outputs comply with governance contract.",
            ),
            Synchronization(
                id="run-records",
                description="Persist deterministic run receipts for auditability.",
            ),
        ],
        security_defaults=list(DEFAULT_SECURITY_DEFAULTS),
        allowed_paths=list(DEFAULT_ALLOWED_PATHS),
        disallowed_actions=list(DEFAULT_DISALLOWED_ACTIONS),
    )


def load_config(base_dir: Path) -> FrameworkConfig:
    """Load ``config/framework.yaml`` under ``base_dir``, or the built-in defaults.

    A present file must declare at least one concept and one synchronization.
    Missing guardrail lists fall back to the defaults one by one.
    """
    config_path = base_dir / FRAMEWORK_CONFIG
    if not config_path.exists():
        logger.debug("No config at %s; using built-in defaults", config_path)
        return default_config()

    try:
        data = read_yaml(config_path)
    except yaml.YAMLError as exc:
        raise ConfigError(f"{FRAMEWORK_CONFIG} is not valid YAML: {exc}") from exc
    if not isinstance(data, dict):
        raise ConfigError(f"{FRAMEWORK_CONFIG} must be a YAML object.")
    if not data.get("concepts"):
        raise ConfigError("Config must declare at least one concept.")
    if not data.get("synchronizations"):
        raise ConfigError("Config must declare at least one synchronization.")

    try:
        validate(instance=data, schema=load_schema("framework_config.schema.json"))
    except ValidationError as exc:
        location = ".".join(str(part) for part in exc.absolute_path) or "<root>"
        raise ConfigError(f"{FRAMEWORK_CONFIG} invalid at {location}: {exc.message}") from exc

    logger.debug("Loaded config from %s", config_path)
    return _from_dict(data)


def _from_dict(data: Dict) -> FrameworkConfig:
    defaults = default_config()
    return FrameworkConfig(
        concepts=[
            Concept(id=item["id"], name=item["name"], description=item.get("description"))
            for item in data["concepts"]
        ],
        synchronizations=[
            Synchronization(id=item["id"], description=item.get("description"))
            for item in data["synchronizations"]
        ],
        security_defaults=_list_or_default(data, "security_defaults", defaults.security_defaults),
        allowed_paths=_list_or_default(data, "allowed_paths", defaults.allowed_paths),
        disallowed_actions=_list_or_default(data, "disallowed_actions", defaults.disallowed_actions),
    )


def _list_or_default(data: Dict, key: str, fallback: List[str]) -> List[str]:
    value = data.get(key)
    if value is None:
        return fallback
    return list(value)
