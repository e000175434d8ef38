"""
Core response types for the Grok API.

Each operation has its own record; decoding a payload of the wrong shape
raises MalformedResponseError naming the offending field.
"""

from dataclasses import dataclass, field
from typing import Any

from grok_cli.core.client import MalformedResponseError


def _require_str(data: dict[str, Any], key: str) -> str:
    value = data.get(key)
    if not isinstance(value, str):
        raise MalformedResponseError(key)
    return value


def _is_number(value: Any) -> bool:
    # bool is an int subclass but JSON true/false are not metrics
    return isinstance(value, (int, float)) and not isinstance(value, bool)


# =============================================================================
# Ask Types
# =============================================================================


@dataclass(frozen=True)
class AskResponse:
    """Answer to a question."""

    answer: str

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "AskResponse":
        """Create from API response dict."""
        return cls(answer=_require_str(data, "answer"))


# =============================================================================
# Image Types
# =============================================================================


@dataclass(frozen=True)
class ImageResponse:
    """URL of a generated image."""

    image_url: str

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "ImageResponse":
        """Create from API response dict."""
        return cls(image_url=_require_str(data, "image_url"))


# =============================================================================
# Analysis Types
# =============================================================================


@dataclass(frozen=True)
class AnalysisResult:
    """Metrics computed over a numeric dataset, keyed by metric name."""

    metrics: dict[str, float] = field(default_factory=dict)

    def sorted_items(self) -> list[tuple[str, float]]:
        """Metrics in name order, for reproducible output."""
        return sorted(self.metrics.items())

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "AnalysisResult":
        """
        Create from API response dict.

        Every value must be numeric; the first one that isn't fails the
        whole result.
        """
        metrics = {}
        for key, value in data.items():
            if not _is_number(value):
                raise MalformedResponseError(key)
            try:
                metrics[key] = float(value)
            except OverflowError:
                raise MalformedResponseError(key)
        return cls(metrics=metrics)
