"""Typed failures raised by the synthesis pipeline.

Only ``SynthesisFailed`` reaches callers of ``SourceConfigSynthesizer``;
the other errors are raised by the stage clients and either recovered
(structural analysis) or wrapped by the orchestrator.
"""

from typing import Literal

FailureStage = Literal["generation", "validation"]


class SynthesisError(Exception):
    """Base class for all synthesis errors."""


class StructuralAnalysisError(SynthesisError):
    """Reaching or reading the target website failed."""

    def __init__(self, url: str, cause: BaseException | None = None) -> None:
        self.url = url
        self.cause = cause
        detail = f": {cause}" if cause is not None else ""
        super().__init__(f"Structural analysis failed for {url}{detail}")


class AIGenerationError(SynthesisError):
    """The generative collaborator produced no usable JSON.

    ``raw_response`` keeps the unparsed text for diagnostics. It is never
    returned to callers as a config.
    """

    def __init__(
        self,
        reason: str,
        cause: BaseException | None = None,
        raw_response: str | None = None,
    ) -> None:
        self.reason = reason
        self.cause = cause
        self.raw_response = raw_response
        detail = f": {cause}" if cause is not None else ""
        super().__init__(f"AI generation failed ({reason}){detail}")


class ValidationError(SynthesisError):
    """Generated JSON does not satisfy the SourceConfig contract."""

    def __init__(self, reason: str, cause: BaseException | None = None) -> None:
        self.reason = reason
        self.cause = cause
        super().__init__(f"Generated config rejected: {reason}")


class SynthesisFailed(SynthesisError):
    """Terminal failure for one identifier, naming the stage that failed."""

    def __init__(
        self,
        identifier: str,
        stage: FailureStage,
        cause: SynthesisError,
    ) -> None:
        self.identifier = identifier
        self.stage = stage
        self.cause = cause
        super().__init__(
            f"Could not synthesize config for {identifier!r} at {stage} stage: {cause}"
        )
