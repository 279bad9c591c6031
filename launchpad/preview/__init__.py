"""Preview Module - before/after snapshot of a simulated launch."""

from .models import Preview, RiskIndicator
from .composer import PreviewComposer, compose

__all__ = [
    "Preview",
    "RiskIndicator",
    "PreviewComposer",
    "compose",
]
