from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from typing import Dict, List, Optional, Union

DEFAULT_PDCA_PHASE = "Plan"
SPEC_TEMPLATE_VERSION = "v1"

BINARY_OPTIONS = ["yes", "no"]


@dataclass
class IntentRecord:
    user_goal: str
    context: str
    stated_constraints: List[str] = field(default_factory=list)
    unstated_assumptions: List[str] = field(default_factory=list)
    uncertainties: List[str] = field(default_factory=list)
    out_of_scope: List[str] = field(default_factory=list)

    def to_dict(self) -> Dict:
        return {
            "user_goal": self.user_goal,
            "context": self.context,
            "stated_constraints": list(self.stated_constraints),
            "unstated_assumptions": list(self.unstated_assumptions),
            "uncertainties": list(self.uncertainties),
            "out_of_scope": list(self.out_of_scope),
        }


@dataclass
class ClarificationQuestion:
    id: str
    prompt: str
    options: List[str]
    allow_multiple: bool = False
    answer: Union[str, List[str], None] = None
    blocking: bool = True
    issue: str = ""

    @property
    def type(self) -> str:
        if len(self.options) == 2 and set(self.options) == set(BINARY_OPTIONS):
            return "binary"
        return "multiple-choice"

    def to_dict(self) -> Dict:
        return {
            "id": self.id,
            "prompt": self.prompt,
            "type": self.type,
            "options": list(self.options),
            "allowMultiple": self.allow_multiple,
            "answer": self.answer,
            "blocking": self.blocking,
            "issue": self.issue,
        }


@dataclass
class ClarificationState:
    generated_at: str
    questions: List[ClarificationQuestion]
    notes: List[str] = field(default_factory=list)

    @property
    def status(self) -> str:
        return "ready" if not self.questions else "pending"

    def to_dict(self) -> Dict:
        return {
            "status": self.status,
            "generated_at": self.generated_at,
            "questions": [question.to_dict() for question in self.questions],
            "notes": list(self.notes),
        }


@dataclass
class RequirementValidation:
    tests: List[str] = field(default_factory=list)
    acceptance_criteria: List[str] = field(default_factory=list)


@dataclass
class Requirement:
    id: str
    description: str
    validation: RequirementValidation = field(default_factory=RequirementValidation)
    owner: Optional[str] = None

    def to_dict(self) -> Dict:
        payload: Dict = {"id": self.id, "description": self.description}
        if self.owner:
            payload["owner"] = self.owner
        payload["validation"] = {
            "tests": list(self.validation.tests),
            "acceptance_criteria": list(self.validation.acceptance_criteria),
        }
        return payload


@dataclass
class ResponsesMetadata:
    spec_id: str = ""
    concept_id: str = ""
    synchronizations: List[str] = field(default_factory=list)
    pdca_phase: str = DEFAULT_PDCA_PHASE


@dataclass
class Decisions:
    data_ownership: str = ""
    implicit_behaviors: List[str] = field(default_factory=list)


@dataclass
class SecurityDecisions:
    defaults_applied: bool = True
    additional_constraints: List[str] = field(default_factory=list)


@dataclass
class ClarificationResponses:
    metadata: ResponsesMetadata
    intent: IntentRecord
    decisions: Decisions
    requirements: List[Requirement]
    security: SecurityDecisions

    @classmethod
    def template(cls, intent: IntentRecord) -> "ClarificationResponses":
        return cls(
            metadata=ResponsesMetadata(),
            intent=intent,
            decisions=Decisions(),
            requirements=[],
            security=SecurityDecisions(),
        )

    def to_dict(self) -> Dict:
        return {
            "metadata": {
                "spec_id": self.metadata.spec_id,
                "concept_id": self.metadata.concept_id,
                "synchronizations": list(self.metadata.synchronizations),
                "pdca_phase": self.metadata.pdca_phase,
            },
            "intent": self.intent.to_dict(),
            "decisions": {
                "data_ownership": self.decisions.data_ownership,
                "implicit_behaviors": list(self.decisions.implicit_behaviors),
            },
            "requirements": [requirement.to_dict() for requirement in self.requirements],
            "security": {
                "defaults_applied": self.security.defaults_applied,
                "additional_constraints": list(self.security.additional_constraints),
            },
        }


@dataclass
class ValidationRuleResult:
    id: str
    passed: bool
    message: str
    counterexample: Optional[str] = None

    def to_dict(self) -> Dict:
        payload: Dict = {"id": self.id, "passed": self.passed, "message": self.message}
        if self.counterexample is not None:
            payload["counterexample"] = self.counterexample
        return payload


@dataclass
class ValidationReport:
    generated_at: str
    rules: List[ValidationRuleResult]

    @property
    def errors(self) -> List[ValidationRuleResult]:
        return [rule for rule in self.rules if not rule.passed]

    @property
    def status(self) -> str:
        return "failed" if self.errors else "passed"

    def to_dict(self) -> Dict:
        return {
            "status": self.status,
            "generated_at": self.generated_at,
            "rules": [rule.to_dict() for rule in self.rules],
            "errors": [rule.to_dict() for rule in self.errors],
        }


@dataclass
class Concept:
    id: str
    name: str
    description: Optional[str] = None


@dataclass
class Synchronization:
    id: str
    description: Optional[str] = None


@dataclass
class FrameworkConfig:
    concepts: List[Concept]
    synchronizations: List[Synchronization]
    security_defaults: List[str]
    allowed_paths: List[str]
    disallowed_actions: List[str]

    @property
    def concept_ids(self) -> List[str]:
        return [concept.id for concept in self.concepts]

    @property
    def synchronization_ids(self) -> List[str]:
        return [sync.id for sync in self.synchronizations]


class StageStatus(Enum):
    SUCCESS = "success"
    SOFT_FAILURE = "soft-failure"
    HARD_ERROR = "hard-error"


@dataclass
class StageResult:
    stage: str
    status: StageStatus
    message: str
    artifacts: List[Path] = field(default_factory=list)

    @property
    def exit_code(self) -> int:
        return 0 if self.status is StageStatus.SUCCESS else 1
