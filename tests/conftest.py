"""Shared fixtures: a governed working root with config, intent and responses."""

from pathlib import Path
from typing import Callable

import pytest
import yaml

from spec_compiler.gates.schema import validate_intent_file, validate_responses
from spec_compiler.models import (
    ClarificationResponses,
    Concept,
    FrameworkConfig,
    IntentRecord,
    Synchronization,
)

SECURITY_DEFAULTS = [
    "Local filesystem only; no secret material in artifacts.",
    "Deterministic execution; no automatic retries.",
]


@pytest.fixture
def config_payload() -> dict:
    return {
        "concepts": [{"id": "c1", "name": "Concept One"}],
        "synchronizations": [{"id": "s1", "description": "Primary sync"}],
        "security_defaults": list(SECURITY_DEFAULTS),
        "allowed_paths": ["src/**", "tests/**"],
        "disallowed_actions": ["Generate application code."],
    }


@pytest.fixture
def config() -> FrameworkConfig:
    return FrameworkConfig(
        concepts=[Concept(id="c1", name="Concept One")],
        synchronizations=[Synchronization(id="s1", description="Primary sync")],
        security_defaults=list(SECURITY_DEFAULTS),
        allowed_paths=["src/**", "tests/**"],
        disallowed_actions=["Generate application code."],
    )


@pytest.fixture
def intent_payload() -> dict:
    return {
        "intent": {
            "user_goal": "Compile governed specs from intent.",
            "context": "Internal tooling for the platform team.",
            "stated_constraints": ["Runs offline."],
            "unstated_assumptions": [],
            "uncertainties": [],
            "out_of_scope": ["Code generation."],
        }
    }


@pytest.fixture
def ready_responses_payload() -> dict:
    return {
        "metadata": {
            "spec_id": "spec-001",
            "concept_id": "c1",
            "synchronizations": ["s1"],
            "pdca_phase": "Plan",
        },
        "decisions": {"data_ownership": "team-a", "implicit_behaviors": []},
        "requirements": [
            {
                "id": "r1",
                "description": "Render the spec document.",
                "owner": "team-a",
                "validation": {
                    "tests": ["tests/test_render.py::test_render"],
                    "acceptance_criteria": ["Spec lists every requirement."],
                },
            }
        ],
        "security": {"defaults_applied": True, "additional_constraints": []},
    }


@pytest.fixture
def intent(intent_payload: dict) -> IntentRecord:
    return validate_intent_file(intent_payload)


@pytest.fixture
def ready_responses(ready_responses_payload: dict, intent: IntentRecord) -> ClarificationResponses:
    return validate_responses(ready_responses_payload, intent)


@pytest.fixture
def write_yaml_file() -> Callable[[Path, object], Path]:
    def _write(path: Path, data: object) -> Path:
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(yaml.safe_dump(data, sort_keys=False), encoding="utf-8")
        return path

    return _write


@pytest.fixture
def root(tmp_path: Path, config_payload: dict, write_yaml_file) -> Path:
    """Working root with a config file declaring concept c1 and synchronization s1."""
    write_yaml_file(tmp_path / "config" / "framework.yaml", config_payload)
    return tmp_path


@pytest.fixture
def intent_source(root: Path, intent_payload: dict, write_yaml_file) -> Path:
    return write_yaml_file(root / "input" / "intent.yaml", intent_payload)
