"""Upstream artifact loading shared by the clarify, normalize, validate and synthesize stages."""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any, Optional

import yaml

from spec_compiler.artifacts.paths import ArtifactPaths
from spec_compiler.errors import PreconditionError, SchemaError, SpecIdConflictError
from spec_compiler.gates.schema import validate_intent_file, validate_responses
from spec_compiler.models import ClarificationResponses, IntentRecord
from spec_compiler.utils.io import read_json, read_yaml


def require_file(path: Path, hint: str) -> None:
    if not path.exists():
        raise PreconditionError(f"{path} is missing. {hint}")


def read_document(path: Path) -> Any:
    try:
        if path.suffix == ".json":
            return read_json(path)
        return read_yaml(path)
    except (yaml.YAMLError, json.JSONDecodeError) as exc:
        raise SchemaError(str(path), f"could not be decoded: {exc}") from exc


def load_intent(paths: ArtifactPaths) -> IntentRecord:
    require_file(paths.intent, "Run `spec-compile intent` first.")
    return validate_intent_file(read_document(paths.intent))


def load_responses(paths: ArtifactPaths, intent: IntentRecord) -> ClarificationResponses:
    require_file(paths.responses, "Run `spec-compile clarify` first.")
    return validate_responses(read_document(paths.responses), intent)


def resolve_spec_id(override: Optional[str], responses: ClarificationResponses) -> str:
    """Pick the spec id for this run, rejecting an override that disagrees with the record."""
    recorded = responses.metadata.spec_id
    if override and recorded and override != recorded:
        raise SpecIdConflictError(recorded, override)
    spec_id = override or recorded
    if not spec_id or not spec_id.strip():
        raise PreconditionError(
            "Spec ID is required. Provide --spec-id or populate metadata.spec_id in clarification/responses.yaml."
        )
    if "/" in spec_id or "\\" in spec_id or spec_id in (".", ".."):
        raise PreconditionError(f"Spec ID '{spec_id}' cannot be used as a file name.")
    return spec_id
