from __future__ import annotations

import logging
from pathlib import Path
from typing import Optional

from spec_compiler.artifacts.loaders import load_intent, load_responses, read_document, resolve_spec_id
from spec_compiler.artifacts.paths import CLARIFICATION_QUESTIONS, ArtifactPaths
from spec_compiler.artifacts.spec_writer import render_spec
from spec_compiler.config import load_config
from spec_compiler.errors import PreconditionError
from spec_compiler.gates.clarification import collect_missing_decisions
from spec_compiler.models import StageResult, StageStatus
from spec_compiler.utils.io import write_text

logger = logging.getLogger(__name__)


class NormalizePipeline:
    def __init__(self, base_dir: Path) -> None:
        self.base_dir = base_dir
        self.paths = ArtifactPaths(base_dir)

    def run(self, spec_id: Optional[str] = None) -> StageResult:
        intent = load_intent(self.paths)
        if not self.paths.responses.exists() or not self.paths.questions.exists():
            raise PreconditionError(
                "Clarification artifacts are missing. Run `spec-compile clarify` before normalization."
            )

        config = load_config(self.base_dir)
        responses = load_responses(self.paths, intent)
        self._assert_clarification_ready(read_document(self.paths.questions))

        unresolved = collect_missing_decisions(config, intent, responses)
        if unresolved:
            logger.debug("Stale clarification state; open ids: %s", [q.id for q in unresolved])
            raise PreconditionError(
                f"Clarification gaps remain ({len(unresolved)}). "
                "Rerun `spec-compile clarify` after updating responses."
            )

        resolved = resolve_spec_id(spec_id, responses)
        target = self.paths.spec(resolved)
        write_text(target, render_spec(resolved, responses, config))
        return StageResult(
            stage="normalize",
            status=StageStatus.SUCCESS,
            message=f"Normalized spec written to {ArtifactPaths.spec_relpath(resolved)}",
            artifacts=[target],
        )

    def _assert_clarification_ready(self, state: object) -> None:
        if not isinstance(state, dict):
            raise PreconditionError(f"{CLARIFICATION_QUESTIONS} must be a YAML object.")
        questions = state.get("questions") or []
        open_count = len(questions) if isinstance(questions, list) else 1
        if state.get("status") != "ready" or open_count > 0:
            raise PreconditionError(
                f"Clarification is not ready ({open_count} blocking decision(s)). "
                f"Resolve {CLARIFICATION_QUESTIONS} before normalization."
            )
