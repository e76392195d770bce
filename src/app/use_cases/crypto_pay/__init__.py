"""Use cases Crypto Pay: pipeline de webhook e registro de handlers."""

from .errors import HandlerError, HandlerFailure, RegistrationClosedError
from .handlers import HandlerFailurePolicy, HandlerRegistry
from .process_update import (
    PipelineOutcome,
    PipelineResult,
    PipelineState,
    WebhookEnvelope,
    WebhookPipeline,
)

__all__ = [
    "HandlerError",
    "HandlerFailure",
    "HandlerFailurePolicy",
    "HandlerRegistry",
    "PipelineOutcome",
    "PipelineResult",
    "PipelineState",
    "RegistrationClosedError",
    "WebhookEnvelope",
    "WebhookPipeline",
]
