"""Governance rules evaluated against a rendered spec document.

Each rule is an independent predicate registered under its id. Rules run in
registration order and never depend on one another.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, Dict, List, Optional

from spec_compiler.gates.clarification import collect_missing_decisions
from spec_compiler.gates.schema import is_non_blank
from spec_compiler.models import (
    ClarificationResponses,
    FrameworkConfig,
    IntentRecord,
    ValidationReport,
    ValidationRuleResult,
)

PLACEHOLDER_TOKENS = ("TBD", "??", "<pending>", "REVISIT")


@dataclass
class RuleContext:
    config: FrameworkConfig
    intent: IntentRecord
    responses: ClarificationResponses
    spec_text: str


Rule = Callable[[RuleContext], ValidationRuleResult]

RULES: Dict[str, Rule] = {}


def register_rule(rule_id: str) -> Callable[[Callable[[RuleContext], tuple]], Rule]:
    """Register a predicate returning ``(passed, message, counterexample)``."""

    def decorator(check: Callable[[RuleContext], tuple]) -> Rule:
        def rule(context: RuleContext) -> ValidationRuleResult:
            passed, message, counterexample = check(context)
            return ValidationRuleResult(
                id=rule_id,
                passed=passed,
                message=message,
                counterexample=None if passed else counterexample,
            )

        rule.__name__ = check.__name__
        rule.__doc__ = check.__doc__
        RULES[rule_id] = rule
        return rule

    return decorator


def detect_placeholder(content: str) -> Optional[str]:
    for token in PLACEHOLDER_TOKENS:
        if token in content:
            return token
    return None


@register_rule("clarification-complete.rule")
def clarification_complete(context: RuleContext) -> tuple:
    unresolved = collect_missing_decisions(context.config, context.intent, context.responses)
    if not unresolved:
        return True, "All clarification checks are resolved.", None
    return (
        False,
        f"{len(unresolved)} clarification decision(s) remain unresolved.",
        unresolved[0].issue,
    )


@register_rule("one-concept.rule")
def one_concept(context: RuleContext) -> tuple:
    concept_id = context.responses.metadata.concept_id
    if is_non_blank(concept_id) and concept_id in context.config.concept_ids:
        return True, "Exactly one concept is referenced.", None
    return (
        False,
        "Concept is missing or not in configured concepts.",
        f"concept_id={concept_id or 'missing'}",
    )


@register_rule("synchronization-required.rule")
def synchronization_required(context: RuleContext) -> tuple:
    declared = context.responses.metadata.synchronizations
    configured = context.config.synchronization_ids
    if declared and all(sync in configured for sync in declared):
        return True, "Synchronizations declared and valid.", None
    return (
        False,
        "Synchronizations missing or invalid.",
        f"synchronizations={', '.join(declared) or 'none'}",
    )


@register_rule("data-ownership.rule")
def data_ownership(context: RuleContext) -> tuple:
    if is_non_blank(context.responses.decisions.data_ownership):
        return True, "Data ownership is explicitly defined.", None
    return False, "Data ownership is missing.", "responses.decisions.data_ownership is empty."


@register_rule("security-scope.rule")
def security_scope(context: RuleContext) -> tuple:
    """Defaults must be applied and every configured default must appear verbatim."""
    failure = "Default security constraints are missing from responses or spec text."
    if context.responses.security.defaults_applied is not True:
        return False, failure, "responses.security.defaults_applied=false"
    for entry in context.config.security_defaults:
        if entry not in context.spec_text:
            return False, failure, f"Missing security default in spec content: {entry}"
    return True, "Security defaults are applied and present in the spec.", None


@register_rule("requirement-to-test.traceability.rule")
def requirement_traceability(context: RuleContext) -> tuple:
    requirements = context.responses.requirements
    if not requirements:
        return (
            False,
            "Some requirements are missing tests or acceptance criteria.",
            "No requirements defined.",
        )
    for requirement in requirements:
        validation = requirement.validation
        if not validation.tests or not validation.acceptance_criteria:
            return (
                False,
                "Some requirements are missing tests or acceptance criteria.",
                f"Requirement {requirement.id} lacks complete validation coverage.",
            )
    return True, "Every requirement has tests and acceptance criteria.", None


@register_rule("no-implicit-behavior.rule")
def no_implicit_behavior(context: RuleContext) -> tuple:
    failure = "Implicit behavior or placeholders detected."
    placeholder = detect_placeholder(context.spec_text)
    if placeholder is not None:
        return False, failure, f"Placeholder '{placeholder}' found in spec content."
    if (
        context.responses.decisions.implicit_behaviors
        or context.intent.unstated_assumptions
        or context.intent.uncertainties
    ):
        return False, failure, "Implicit behaviors, assumptions, or uncertainties remain."
    return True, "No implicit or placeholder behaviors remain.", None


def evaluate_rules(context: RuleContext) -> List[ValidationRuleResult]:
    return [rule(context) for rule in RULES.values()]


def build_report(context: RuleContext, generated_at: str) -> ValidationReport:
    return ValidationReport(generated_at=generated_at, rules=evaluate_rules(context))
