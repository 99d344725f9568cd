from __future__ import annotations


class SpecCompilerError(Exception):
    """Base for every hard error that aborts a stage."""


class SchemaError(SpecCompilerError):
    def __init__(self, field: str, message: str) -> None:
        super().__init__(f"{field}: {message}")
        self.field = field
        self.detail = message


class ConfigError(SpecCompilerError):
    pass


class StageError(SpecCompilerError):
    pass


class PreconditionError(StageError):
    pass


class SpecIdConflictError(StageError):
    def __init__(self, recorded: str, requested: str) -> None:
        super().__init__(
            f"Spec ID mismatch: responses metadata uses '{recorded}' but '{requested}' was requested."
        )
        self.recorded = recorded
        self.requested = requested
