"""
Core layer - Raw types and HTTP client.

This layer provides:
- Typed response records with strict decoding
- Low-level HTTP client with auth and error classification
"""

from grok_cli.core.client import (
    APIClient,
    APIError,
    CLIError,
    ClientConfig,
    ConfigError,
    HTTPStatusError,
    InputFormatError,
    MalformedResponseError,
    NetworkError,
    RequestBuildError,
    ValidationError,
)
from grok_cli.core.types import AnalysisResult, AskResponse, ImageResponse

__all__ = [
    "APIClient",
    "APIError",
    "AnalysisResult",
    "AskResponse",
    "CLIError",
    "ClientConfig",
    "ConfigError",
    "HTTPStatusError",
    "ImageResponse",
    "InputFormatError",
    "MalformedResponseError",
    "NetworkError",
    "RequestBuildError",
    "ValidationError",
]
