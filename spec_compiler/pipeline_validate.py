from __future__ import annotations

import logging
from pathlib import Path
from typing import Optional

from spec_compiler.artifacts.loaders import load_intent, load_responses, require_file, resolve_spec_id
from spec_compiler.artifacts.paths import VALIDATION_REPORT, ArtifactPaths
from spec_compiler.config import load_config
from spec_compiler.gates.rules import RuleContext, build_report
from spec_compiler.models import StageResult, StageStatus
from spec_compiler.utils.io import read_text, write_json
from spec_compiler.utils.time import utc_timestamp

logger = logging.getLogger(__name__)


class ValidatePipeline:
    def __init__(self, base_dir: Path) -> None:
        self.base_dir = base_dir
        self.paths = ArtifactPaths(base_dir)

    def run(self, spec_id: Optional[str] = None) -> StageResult:
        intent = load_intent(self.paths)
        responses = load_responses(self.paths, intent)
        resolved = resolve_spec_id(spec_id, responses)

        spec_path = self.paths.spec(resolved)
        require_file(spec_path, "Run `spec-compile normalize` first.")

        config = load_config(self.base_dir)
        context = RuleContext(
            config=config,
            intent=intent,
            responses=responses,
            spec_text=read_text(spec_path),
        )
        report = build_report(context, generated_at=utc_timestamp())
        write_json(self.paths.report, report.to_dict())

        for rule in report.rules:
            logger.debug("%s passed=%s", rule.id, rule.passed)

        if report.errors:
            failed = ", ".join(rule.id for rule in report.errors)
            return StageResult(
                stage="validate",
                status=StageStatus.SOFT_FAILURE,
                message=f"Validation failed ({failed}). See {VALIDATION_REPORT}",
                artifacts=[self.paths.report],
            )
        return StageResult(
            stage="validate",
            status=StageStatus.SUCCESS,
            message=f"Validation passed. Report written to {VALIDATION_REPORT}",
            artifacts=[self.paths.report],
        )
