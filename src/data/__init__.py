"""Data layer - transient models shared by providers and the lifecycle."""

from .models import (
    Mode,
    OSInfo,
    JoinCredentials,
    CommandResult,
    StepResult,
    RunReport,
)

__all__ = [
    "Mode",
    "OSInfo",
    "JoinCredentials",
    "CommandResult",
    "StepResult",
    "RunReport",
]
