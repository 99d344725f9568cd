"""Decoding of untyped YAML documents into the closed intent and responses records.

Type violations raise ``SchemaError`` naming the offending field. Well-typed but
incomplete content (blank ids, missing tests) is left for the clarification
checks to report.
"""

from __future__ import annotations

from typing import Any, Dict, List

from spec_compiler.errors import SchemaError
from spec_compiler.models import (
    DEFAULT_PDCA_PHASE,
    ClarificationResponses,
    Decisions,
    IntentRecord,
    Requirement,
    RequirementValidation,
    ResponsesMetadata,
    SecurityDecisions,
)

INTENT_LIST_FIELDS = ("stated_constraints", "unstated_assumptions", "uncertainties", "out_of_scope")


def is_non_blank(value: object) -> bool:
    return isinstance(value, str) and value.strip() != ""


def _require_object(value: Any, field: str, message: str) -> Dict:
    if not isinstance(value, dict):
        raise SchemaError(field, message)
    return value


def _optional_object(node: Dict, key: str, field: str) -> Dict:
    value = node.get(key)
    if value is None:
        return {}
    return _require_object(value, field, "must be an object")


def _string(node: Dict, key: str, field: str, required: bool = False) -> str:
    if key not in node:
        if required:
            raise SchemaError(field, "must be a non-empty string")
        return ""
    value = node[key]
    if not isinstance(value, str):
        raise SchemaError(field, "must be a string")
    if required and not value.strip():
        raise SchemaError(field, "must be a non-empty string")
    return value


def _string_list(node: Dict, key: str, field: str) -> List[str]:
    if key not in node:
        return []
    value = node[key]
    if not isinstance(value, list) or not all(isinstance(item, str) for item in value):
        raise SchemaError(field, "must be an array of strings")
    return list(value)


def decode_intent(node: Dict, prefix: str = "intent") -> IntentRecord:
    fields = {
        name: _string_list(node, name, f"{prefix}.{name}") for name in INTENT_LIST_FIELDS
    }
    return IntentRecord(
        user_goal=_string(node, "user_goal", f"{prefix}.user_goal", required=True),
        context=_string(node, "context", f"{prefix}.context", required=True),
        **fields,
    )


def validate_intent_file(raw: Any) -> IntentRecord:
    """Decode an intent document of the form ``{intent: {...}}``."""
    document = _require_object(
        raw, "<root>", "intent file must be a YAML object with top-level 'intent'"
    )
    node = _require_object(document.get("intent"), "intent", "must be an object")
    return decode_intent(node)


def _decode_requirement(raw: Any, index: int) -> Requirement:
    prefix = f"requirements[{index}]"
    node = _require_object(raw, prefix, "must be an object")
    validation = _optional_object(node, "validation", f"{prefix}.validation")
    owner = node.get("owner")
    return Requirement(
        id=_string(node, "id", f"{prefix}.id"),
        description=_string(node, "description", f"{prefix}.description"),
        owner=owner if is_non_blank(owner) else None,
        validation=RequirementValidation(
            tests=_string_list(validation, "tests", f"{prefix}.validation.tests"),
            acceptance_criteria=_string_list(
                validation, "acceptance_criteria", f"{prefix}.validation.acceptance_criteria"
            ),
        ),
    )


def _pdca_phase(metadata: Dict) -> str:
    phase = _string(metadata, "pdca_phase", "responses.metadata.pdca_phase")
    return phase if phase.strip() else DEFAULT_PDCA_PHASE


def validate_responses(raw: Any, intent: IntentRecord) -> ClarificationResponses:
    """Decode a responses document; ``intent`` replaces whatever intent it embeds."""
    document = _require_object(raw, "responses", "must be a YAML object")
    metadata = _optional_object(document, "metadata", "responses.metadata")
    decisions = _optional_object(document, "decisions", "responses.decisions")
    security = _optional_object(document, "security", "responses.security")

    requirements_raw = document.get("requirements")
    if requirements_raw is None:
        requirements_raw = []
    if not isinstance(requirements_raw, list):
        raise SchemaError("responses.requirements", "must be an array")

    defaults_applied = security.get("defaults_applied")
    if not isinstance(defaults_applied, bool):
        defaults_applied = True

    return ClarificationResponses(
        metadata=ResponsesMetadata(
            spec_id=_string(metadata, "spec_id", "responses.metadata.spec_id"),
            concept_id=_string(metadata, "concept_id", "responses.metadata.concept_id"),
            synchronizations=_string_list(
                metadata, "synchronizations", "responses.metadata.synchronizations"
            ),
            pdca_phase=_pdca_phase(metadata),
        ),
        intent=intent,
        decisions=Decisions(
            data_ownership=_string(decisions, "data_ownership", "responses.decisions.data_ownership"),
            implicit_behaviors=_string_list(
                decisions, "implicit_behaviors", "responses.decisions.implicit_behaviors"
            ),
        ),
        requirements=[
            _decode_requirement(entry, index) for index, entry in enumerate(requirements_raw)
        ],
        security=SecurityDecisions(
            defaults_applied=defaults_applied,
            additional_constraints=_string_list(
                security, "additional_constraints", "responses.security.additional_constraints"
            ),
        ),
    )
