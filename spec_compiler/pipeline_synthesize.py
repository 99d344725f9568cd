from __future__ import annotations

from pathlib import Path
from typing import Dict, Optional

from jsonschema import ValidationError, validate

from spec_compiler.artifacts.loaders import (
    load_intent,
    load_responses,
    read_document,
    require_file,
    resolve_spec_id,
)
from spec_compiler.artifacts.paths import SYNTHESIS_PROMPT, VALIDATION_REPORT, ArtifactPaths, load_schema
from spec_compiler.artifacts.prompt_writer import render_prompt
from spec_compiler.config import load_config
from spec_compiler.errors import PreconditionError, SchemaError
from spec_compiler.models import StageResult, StageStatus
from spec_compiler.utils.io import read_text, write_text


class SynthesizePipeline:
    def __init__(self, base_dir: Path) -> None:
        self.base_dir = base_dir
        self.paths = ArtifactPaths(base_dir)

    def run(self, spec_id: Optional[str] = None) -> StageResult:
        require_file(self.paths.report, "Run `spec-compile validate` first.")

        intent = load_intent(self.paths)
        responses = load_responses(self.paths, intent)
        resolved = resolve_spec_id(spec_id, responses)

        report = self._load_report()
        if report["status"] != "passed":
            raise PreconditionError(
                "Cannot synthesize prompt while validation is failing. Resolve validation errors first."
            )

        spec_path = self.paths.spec(resolved)
        require_file(spec_path, "Run `spec-compile normalize` before synthesis.")
        read_text(spec_path)

        config = load_config(self.base_dir)
        write_text(self.paths.prompt, render_prompt(resolved, responses, report["status"], config))
        return StageResult(
            stage="synthesize",
            status=StageStatus.SUCCESS,
            message=f"Synthesis prompt written to {SYNTHESIS_PROMPT}",
            artifacts=[self.paths.prompt],
        )

    def _load_report(self) -> Dict:
        report = read_document(self.paths.report)
        try:
            validate(instance=report, schema=load_schema("validation_report.schema.json"))
        except ValidationError as exc:
            raise SchemaError(VALIDATION_REPORT, exc.message) from exc
        return report
