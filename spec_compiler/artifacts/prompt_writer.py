from __future__ import annotations

from typing import List

from spec_compiler.artifacts.paths import (
    CLARIFICATION_RESPONSES,
    INTENT_RAW,
    VALIDATION_REPORT,
    ArtifactPaths,
)
from spec_compiler.models import DEFAULT_PDCA_PHASE, ClarificationResponses, FrameworkConfig

EXECUTION_RULES = [
    "Derived strictly from governed artifacts; no creative additions or LLM calls.",
    "Refuse to emit artifacts if any guardrail fails or validation status is not passed.",
    "Do not generate application code or bypass governance checkpoints.",
]


def render_prompt(
    spec_id: str,
    responses: ClarificationResponses,
    report_status: str,
    config: FrameworkConfig,
) -> str:
    metadata = responses.metadata
    requirement_ids = ", ".join(requirement.id for requirement in responses.requirements)
    lines: List[str] = [
        "# Codex Execution Prompt",
        "",
        f"Spec ID: {spec_id}",
        f"Concept: {metadata.concept_id}",
        f"PDCA Phase: {metadata.pdca_phase or DEFAULT_PDCA_PHASE}",
        f"Synchronizations: {', '.join(metadata.synchronizations)}",
        "",
        "Source Artifacts",
        f"- {INTENT_RAW}",
        f"- {CLARIFICATION_RESPONSES}",
        f"- {ArtifactPaths.spec_relpath(spec_id)}",
        f"- {VALIDATION_REPORT} (status: {report_status})",
        "",
        "Allowed Paths",
        *[f"- {entry}" for entry in config.allowed_paths],
        "",
        "Disallowed Actions",
        *[f"- {entry}" for entry in config.disallowed_actions],
        "",
        "Required Outputs",
        f"- Tests and evidence covering requirements [{requirement_ids}]",
        f"- Execution and validation logs referencing {VALIDATION_REPORT}",
        "- Updates to handover.md and completed.md reflecting work performed",
        "",
        "Execution Rules",
        *[f"- {rule}" for rule in EXECUTION_RULES],
    ]
    return "\n".join(lines) + "\n"
