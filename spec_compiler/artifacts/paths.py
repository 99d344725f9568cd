from __future__ import annotations

import json
from dataclasses import dataclass
from pathlib import Path
from typing import Dict

SCHEMAS_DIR = Path(__file__).resolve().parents[1] / "schemas"

INTENT_RAW = "intent/intent.raw.yaml"
CLARIFICATION_QUESTIONS = "clarification/questions.yaml"
CLARIFICATION_RESPONSES = "clarification/responses.yaml"
VALIDATION_REPORT = "validation/report.json"
SYNTHESIS_PROMPT = "synthesis/codex.prompt.md"
FRAMEWORK_CONFIG = "config/framework.yaml"
SPECS_DIR = "specs"


@dataclass(frozen=True)
class ArtifactPaths:
    root: Path

    @property
    def intent(self) -> Path:
        return self.root / INTENT_RAW

    @property
    def questions(self) -> Path:
        return self.root / CLARIFICATION_QUESTIONS

    @property
    def responses(self) -> Path:
        return self.root / CLARIFICATION_RESPONSES

    @property
    def report(self) -> Path:
        return self.root / VALIDATION_REPORT

    @property
    def prompt(self) -> Path:
        return self.root / SYNTHESIS_PROMPT

    @property
    def config(self) -> Path:
        return self.root / FRAMEWORK_CONFIG

    def spec(self, spec_id: str) -> Path:
        return self.root / self.spec_relpath(spec_id)

    @staticmethod
    def spec_relpath(spec_id: str) -> str:
        return f"{SPECS_DIR}/{spec_id}.md"


def load_schema(name: str) -> Dict:
    return json.loads((SCHEMAS_DIR / name).read_text(encoding="utf-8"))
