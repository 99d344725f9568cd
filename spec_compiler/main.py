from __future__ import annotations

import argparse
import logging
import os
import sys
from pathlib import Path
from typing import Callable, List, Optional

from dotenv import load_dotenv

from spec_compiler.errors import SpecCompilerError
from spec_compiler.models import StageResult, StageStatus
from spec_compiler.pipeline_clarify import ClarifyPipeline
from spec_compiler.pipeline_intent import IntentPipeline
from spec_compiler.pipeline_normalize import NormalizePipeline
from spec_compiler.pipeline_synthesize import SynthesizePipeline
from spec_compiler.pipeline_validate import ValidatePipeline

logger = logging.getLogger(__name__)

LOG_FORMAT = "[%(levelname)s] %(name)s: %(message)s"


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="spec-compile",
        description="Deterministic spec compiler for governed specification artifacts.",
    )
    parser.add_argument(
        "--root",
        help="Working root holding the artifact directories (default: $SPEC_COMPILER_ROOT or cwd).",
    )
    parser.add_argument("--verbose", action="store_true", help="Enable debug logging.")
    commands = parser.add_subparsers(dest="command", required=True)

    intent = commands.add_parser("intent", help="Capture raw human intent into intent/intent.raw.yaml.")
    intent.add_argument("-i", "--input", help="Path to YAML file containing the intent payload.")

    clarify = commands.add_parser(
        "clarify", help="Derive missing decisions and write clarification/questions.yaml."
    )
    clarify.add_argument(
        "--force",
        action="store_true",
        help="Accepted for compatibility; questions are always regenerated.",
    )

    for name, help_text in (
        ("normalize", "Normalize clarified intent into a governed spec document."),
        ("validate", "Validate the spec against hard governance rules."),
        ("synthesize", "Generate the execution prompt from validated artifacts."),
    ):
        stage = commands.add_parser(name, help=help_text)
        stage.add_argument("--spec-id", help="Spec ID (must match metadata.spec_id when recorded).")
    return parser


def _log_level(verbose: bool) -> str:
    if verbose:
        return "DEBUG"
    level = os.getenv("SPEC_COMPILER_LOG_LEVEL", "WARNING").strip().upper()
    if not isinstance(logging.getLevelName(level), int):
        return "WARNING"
    return level


def _configure_logging(verbose: bool) -> None:
    logging.basicConfig(level=_log_level(verbose), format=LOG_FORMAT, stream=sys.stderr)


def _resolve_root(root: Optional[str]) -> Path:
    value = root or os.getenv("SPEC_COMPILER_ROOT") or "."
    return Path(value).resolve()


def run_stage(stage: str, action: Callable[[], StageResult]) -> StageResult:
    """Run one stage, turning hard errors into a HARD_ERROR result."""
    try:
        return action()
    except (SpecCompilerError, OSError) as exc:
        logger.debug("Stage %s aborted", stage, exc_info=True)
        return StageResult(stage=stage, status=StageStatus.HARD_ERROR, message=str(exc))


def dispatch(args: argparse.Namespace, base_dir: Path) -> StageResult:
    if args.command == "intent":
        input_path = Path(args.input) if args.input else None
        return run_stage("intent", lambda: IntentPipeline(base_dir).run(input_path))
    if args.command == "clarify":
        return run_stage("clarify", lambda: ClarifyPipeline(base_dir).run(force=args.force))
    if args.command == "normalize":
        return run_stage("normalize", lambda: NormalizePipeline(base_dir).run(args.spec_id))
    if args.command == "validate":
        return run_stage("validate", lambda: ValidatePipeline(base_dir).run(args.spec_id))
    return run_stage("synthesize", lambda: SynthesizePipeline(base_dir).run(args.spec_id))


def main(argv: Optional[List[str]] = None) -> int:
    load_dotenv(Path.cwd() / ".env")
    args = build_parser().parse_args(argv)
    _configure_logging(args.verbose)
    base_dir = _resolve_root(args.root)

    result = dispatch(args, base_dir)
    if result.status is StageStatus.SUCCESS:
        print(result.message)
    else:
        print(f"ERROR: {result.message}", file=sys.stderr)
    return result.exit_code


if __name__ == "__main__":
    sys.exit(main())
