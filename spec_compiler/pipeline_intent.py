from __future__ import annotations

import logging
from pathlib import Path
from typing import Optional

from spec_compiler.artifacts.loaders import read_document
from spec_compiler.artifacts.paths import INTENT_RAW, ArtifactPaths
from spec_compiler.errors import PreconditionError
from spec_compiler.gates.schema import validate_intent_file
from spec_compiler.models import StageResult, StageStatus
from spec_compiler.utils.io import write_yaml

logger = logging.getLogger(__name__)


class IntentPipeline:
    def __init__(self, base_dir: Path) -> None:
        self.base_dir = base_dir
        self.paths = ArtifactPaths(base_dir)

    def run(self, input_path: Optional[Path]) -> StageResult:
        if input_path is None:
            raise PreconditionError(
                "Intent capture requires --input <path> to a YAML file matching the intent schema."
            )
        source = input_path.resolve()
        if not source.is_file():
            raise PreconditionError(f"Input file not found: {source}")

        intent = validate_intent_file(read_document(source))
        logger.debug("Decoded intent from %s", source)
        write_yaml(self.paths.intent, {"intent": intent.to_dict()})
        return StageResult(
            stage="intent",
            status=StageStatus.SUCCESS,
            message=f"Intent captured at {INTENT_RAW}",
            artifacts=[self.paths.intent],
        )
