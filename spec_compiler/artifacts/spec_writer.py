from __future__ import annotations

from typing import Iterable, List

from spec_compiler.models import (
    DEFAULT_PDCA_PHASE,
    SPEC_TEMPLATE_VERSION,
    ClarificationResponses,
    FrameworkConfig,
    Requirement,
)


def _bullets(items: Iterable[str], indent: int = 0, fallback: str = "None recorded.") -> List[str]:
    prefix = " " * indent + "- "
    entries = list(items)
    if not entries:
        return [f"{prefix}{fallback}"]
    return [f"{prefix}{item}" for item in entries]


def security_constraints(config: FrameworkConfig, responses: ClarificationResponses) -> List[str]:
    merged: List[str] = []
    for entry in [*config.security_defaults, *responses.security.additional_constraints]:
        if entry not in merged:
            merged.append(entry)
    return merged


def _per_requirement(requirements: List[Requirement], render) -> List[str]:
    if not requirements:
        return ["- None recorded."]
    lines: List[str] = []
    for requirement in requirements:
        lines.extend(render(requirement))
    return lines


def _requirement_line(requirement: Requirement) -> List[str]:
    owner = f" (Owner: {requirement.owner})" if requirement.owner else ""
    return [f"- [{requirement.id}] {requirement.description}{owner}"]


def _tests_lines(requirement: Requirement) -> List[str]:
    return [
        f"- [{requirement.id}] Tests:",
        *_bullets(requirement.validation.tests, 2, "No tests recorded."),
    ]


def _acceptance_lines(requirement: Requirement) -> List[str]:
    return [
        f"- [{requirement.id}] Acceptance Criteria:",
        *_bullets(requirement.validation.acceptance_criteria, 2, "No acceptance criteria recorded."),
    ]


def _trace_line(requirement: Requirement) -> List[str]:
    tests = "; ".join(requirement.validation.tests) or "No tests"
    acceptance = "; ".join(requirement.validation.acceptance_criteria) or "No acceptance criteria"
    return [f"- {requirement.id}: Tests → {tests}; Acceptance → {acceptance}"]


def render_spec(spec_id: str, responses: ClarificationResponses, config: FrameworkConfig) -> str:
    """Render the governed spec document; output depends only on the arguments."""
    intent = responses.intent
    metadata = responses.metadata
    requirements = responses.requirements
    lines: List[str] = [
        f"# Spec: {spec_id}",
        "",
        "## Metadata",
        f"- Spec ID: {spec_id}",
        f"- Template Version: {SPEC_TEMPLATE_VERSION}",
        f"- Concept: {metadata.concept_id}",
        "- Synchronizations:",
        *_bullets(metadata.synchronizations, 2, "None declared."),
        f"- PDCA Phase: {metadata.pdca_phase or DEFAULT_PDCA_PHASE}",
        f"- Data Ownership: {responses.decisions.data_ownership or 'Unspecified'}",
        "",
        "## Intent Summary",
        f"- User Goal: {intent.user_goal}",
        f"- Context: {intent.context}",
        "- Stated Constraints:",
        *_bullets(intent.stated_constraints, 2),
        "- Unstated Assumptions:",
        *_bullets(intent.unstated_assumptions, 2, "None recorded (must be cleared before execution)."),
        "- Uncertainties:",
        *_bullets(intent.uncertainties, 2, "None recorded (must be cleared before execution)."),
        "- Out of Scope:",
        *_bullets(intent.out_of_scope, 2),
        "",
        "## Implicit Behaviors",
        *_bullets(
            responses.decisions.implicit_behaviors,
            0,
            "None recorded (implicit behavior is not permitted).",
        ),
        "",
        "## Requirements",
        *_per_requirement(requirements, _requirement_line),
        "",
        "## Validation Plan",
        *_per_requirement(requirements, _tests_lines),
        "",
        "## Acceptance Criteria",
        *_per_requirement(requirements, _acceptance_lines),
        "",
        "## Security Constraints",
        *_bullets(security_constraints(config, responses)),
        "",
        "## Traceability",
        *_per_requirement(requirements, _trace_line),
    ]
    return "\n".join(lines) + "\n"
