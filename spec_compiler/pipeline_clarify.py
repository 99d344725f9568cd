from __future__ import annotations

import logging
from pathlib import Path

from spec_compiler.artifacts.loaders import load_intent, load_responses
from spec_compiler.artifacts.paths import CLARIFICATION_QUESTIONS, ArtifactPaths
from spec_compiler.config import load_config
from spec_compiler.gates.clarification import CLARIFICATION_NOTES, collect_missing_decisions
from spec_compiler.models import ClarificationResponses, ClarificationState, StageResult, StageStatus
from spec_compiler.utils.io import dump_yaml, write_artifacts
from spec_compiler.utils.time import utc_timestamp

logger = logging.getLogger(__name__)


class ClarifyPipeline:
    def __init__(self, base_dir: Path) -> None:
        self.base_dir = base_dir
        self.paths = ArtifactPaths(base_dir)

    def run(self, force: bool = False) -> StageResult:
        if force:
            # Questions are always rebuilt from scratch; nothing extra to force.
            logger.debug("--force given; clarify always regenerates the question state")

        config = load_config(self.base_dir)
        intent = load_intent(self.paths)

        if self.paths.responses.exists():
            responses = load_responses(self.paths, intent)
        else:
            logger.debug("No responses at %s; starting from template", self.paths.responses)
            responses = ClarificationResponses.template(intent)
        responses.intent = intent

        questions = collect_missing_decisions(config, intent, responses)
        state = ClarificationState(
            generated_at=utc_timestamp(),
            questions=questions,
            notes=list(CLARIFICATION_NOTES),
        )
        write_artifacts(
            {
                self.paths.responses: dump_yaml(responses.to_dict()),
                self.paths.questions: dump_yaml(state.to_dict()),
            }
        )

        if questions:
            message = (
                f"Clarification pending: {len(questions)} blocking decision(s) recorded in "
                f"{CLARIFICATION_QUESTIONS}"
            )
        else:
            message = "Clarification ready: no blocking questions."
        return StageResult(
            stage="clarify",
            status=StageStatus.SUCCESS,
            message=message,
            artifacts=[self.paths.responses, self.paths.questions],
        )
