"""Tests for clarification-question derivation."""

from spec_compiler.gates.clarification import collect_missing_decisions
from spec_compiler.gates.schema import validate_intent_file, validate_responses
from spec_compiler.models import ClarificationResponses, ClarificationState


def _ids(questions) -> list:
    return [question.id for question in questions]


class TestReadyInputs:
    def test_ready_responses_have_no_questions(self, config, intent, ready_responses) -> None:
        assert collect_missing_decisions(config, intent, ready_responses) == []


class TestQuestionOrder:
    def test_template_responses_raise_questions_in_fixed_order(self, config) -> None:
        intent = validate_intent_file(
            {
                "intent": {
                    "user_goal": "Goal",
                    "context": "Ctx",
                    "unstated_assumptions": ["Users are admins."],
                    "uncertainties": ["Storage backend."],
                }
            }
        )
        responses = ClarificationResponses.template(intent)
        responses.decisions.implicit_behaviors = ["Silently retries."]
        responses.security.defaults_applied = False

        questions = collect_missing_decisions(config, intent, responses)

        assert _ids(questions) == [
            "spec_id",
            "concept_id",
            "synchronizations",
            "data_ownership",
            "requirements",
            "security_defaults",
            "implicit_behaviors",
            "unstated_assumptions",
            "uncertainties",
        ]

    def test_derivation_is_order_stable(self, config, intent) -> None:
        responses = ClarificationResponses.template(intent)

        first = collect_missing_decisions(config, intent, responses)
        second = collect_missing_decisions(config, intent, responses)

        assert [q.to_dict() for q in first] == [q.to_dict() for q in second]

    def test_requirement_gaps_follow_array_order(self, config, intent, ready_responses_payload) -> None:
        ready_responses_payload["requirements"] = [
            {"id": "r2", "description": "Second", "validation": {"tests": []}},
            {"id": "", "description": "Nameless", "validation": {"tests": ["t"], "acceptance_criteria": ["a"]}},
            {"id": "r3", "description": "Third", "validation": {"tests": ["t"]}},
        ]
        responses = validate_responses(ready_responses_payload, intent)

        questions = collect_missing_decisions(config, intent, responses)

        assert _ids(questions) == [
            "tests_r2",
            "acceptance_r2",
            "requirement_missing_1",
            "acceptance_r3",
        ]


class TestConfiguredMembership:
    def test_unknown_concept_is_flagged_as_invalid(self, config, intent, ready_responses) -> None:
        ready_responses.metadata.concept_id = "c9"

        questions = collect_missing_decisions(config, intent, ready_responses)

        assert _ids(questions) == ["concept_id_invalid"]
        assert questions[0].options == ["c1"]

    def test_unknown_synchronization_is_flagged_as_invalid(self, config, intent, ready_responses) -> None:
        ready_responses.metadata.synchronizations = ["s1", "s2"]

        questions = collect_missing_decisions(config, intent, ready_responses)

        assert _ids(questions) == ["synchronizations_invalid"]
        assert questions[0].allow_multiple is True

    def test_blank_concept_offers_configured_ids(self, config, intent, ready_responses) -> None:
        ready_responses.metadata.concept_id = "  "

        questions = collect_missing_decisions(config, intent, ready_responses)

        assert _ids(questions) == ["concept_id"]
        assert questions[0].type == "multiple-choice"


class TestQuestionShape:
    def test_yes_no_questions_are_binary_and_blocking(self, config, intent, ready_responses) -> None:
        ready_responses.decisions.data_ownership = ""

        question = collect_missing_decisions(config, intent, ready_responses)[0]
        payload = question.to_dict()

        assert payload["type"] == "binary"
        assert payload["options"] == ["yes", "no"]
        assert payload["blocking"] is True
        assert payload["answer"] is None
        assert payload["issue"] == payload["prompt"]

    def test_state_status_follows_question_count(self, config, intent, ready_responses) -> None:
        assert ClarificationState(generated_at="t", questions=[]).status == "ready"

        ready_responses.metadata.spec_id = ""
        questions = collect_missing_decisions(config, intent, ready_responses)

        assert ClarificationState(generated_at="t", questions=questions).status == "pending"


class TestBlankRequirementIds:
    def test_blank_ids_get_distinct_question_ids(self, config, intent, ready_responses_payload) -> None:
        ready_responses_payload["requirements"] = [
            {"id": "", "description": "First", "validation": {}},
            {"id": "  ", "description": "Second", "validation": {}},
        ]
        responses = validate_responses(ready_responses_payload, intent)

        ids = _ids(collect_missing_decisions(config, intent, responses))

        assert ids == [
            "requirement_missing_0",
            "tests_missing_0",
            "acceptance_missing_0",
            "requirement_missing_1",
            "tests_missing_1",
            "acceptance_missing_1",
        ]
        assert len(set(ids)) == len(ids)
