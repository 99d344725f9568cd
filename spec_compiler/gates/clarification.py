from __future__ import annotations

from typing import List

from spec_compiler.gates.schema import is_non_blank
from spec_compiler.models import (
    BINARY_OPTIONS,
    ClarificationQuestion,
    ClarificationResponses,
    FrameworkConfig,
    IntentRecord,
)

CLARIFICATION_NOTES = [
    "Update clarification/responses.yaml to resolve blocking questions, then rerun `spec-compile clarify`.",
    "Questions are regenerated deterministically from rule checks; answers are captured in responses.yaml, not here.",
]


class _QuestionList:
    def __init__(self) -> None:
        self.questions: List[ClarificationQuestion] = []

    def add(
        self,
        question_id: str,
        prompt: str,
        options: List[str] | None = None,
        allow_multiple: bool = False,
    ) -> None:
        self.questions.append(
            ClarificationQuestion(
                id=question_id,
                prompt=prompt,
                options=list(options if options is not None else BINARY_OPTIONS),
                allow_multiple=allow_multiple,
                issue=prompt,
            )
        )


def collect_missing_decisions(
    config: FrameworkConfig,
    intent: IntentRecord,
    responses: ClarificationResponses,
) -> List[ClarificationQuestion]:
    """Return the blocking questions still open, in a fixed check order.

    Question ids depend only on the concern (and requirement id or position), so two runs
    over the same inputs yield identical lists.
    """
    found = _QuestionList()
    metadata = responses.metadata

    if not is_non_blank(metadata.spec_id):
        found.add("spec_id", "Set metadata.spec_id in clarification/responses.yaml")

    concept_ids = config.concept_ids
    if not is_non_blank(metadata.concept_id):
        found.add("concept_id", "Select exactly one Concept (metadata.concept_id)", concept_ids)
    elif metadata.concept_id not in concept_ids:
        found.add("concept_id_invalid", "Concept must be one of the configured concepts", concept_ids)

    sync_ids = config.synchronization_ids
    if not metadata.synchronizations:
        found.add(
            "synchronizations",
            "Declare required synchronizations in metadata.synchronizations",
            sync_ids,
            allow_multiple=True,
        )
    elif any(sync not in sync_ids for sync in metadata.synchronizations):
        found.add(
            "synchronizations_invalid",
            "Synchronizations must match configured synchronizations",
            sync_ids,
            allow_multiple=True,
        )

    if not is_non_blank(responses.decisions.data_ownership):
        found.add("data_ownership", "Define data ownership in decisions.data_ownership")

    if not responses.requirements:
        found.add("requirements", "Add at least one requirement with validation coverage")
    for index, requirement in enumerate(responses.requirements):
        # Blank ids are keyed by position so question ids stay unique.
        key = requirement.id if is_non_blank(requirement.id) else f"missing_{index}"
        if not is_non_blank(requirement.id) or not is_non_blank(requirement.description):
            found.add(f"requirement_{key}", "Each requirement needs id and description")
        if not requirement.validation.tests:
            found.add(f"tests_{key}", f"Requirement {key} needs at least one validation test")
        if not requirement.validation.acceptance_criteria:
            found.add(f"acceptance_{key}", f"Requirement {key} needs acceptance criteria")

    if responses.security.defaults_applied is not True:
        found.add("security_defaults", "Default security constraints must be applied")

    # Any recorded implicit behavior is a gap, not an answer.
    if responses.decisions.implicit_behaviors:
        found.add(
            "implicit_behaviors",
            "Resolve or document implicit behaviors so none remain unaddressed",
        )

    if intent.unstated_assumptions:
        found.add(
            "unstated_assumptions",
            "Resolve unstated assumptions or convert them into explicit constraints",
        )

    if intent.uncertainties:
        found.add(
            "uncertainties",
            "Resolve uncertainties before normalization (update intent or clarifications)",
        )

    return found.questions
