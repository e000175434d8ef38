"""
Grok SDK - High-level client with nice ergonomics.

This layer provides a clean, typed interface for the three Grok
operations. Built on top of the core APIClient.
"""

import os
from typing import Any

from grok_cli.core.client import DEFAULT_BASE_URL, APIClient, ClientConfig, MalformedResponseError
from grok_cli.core.types import AnalysisResult, AskResponse, ImageResponse
from grok_cli.logging import get_logger


class GrokClient:
    """
    High-level Grok API client with typed methods.

    Example:
        client = GrokClient()

        answer = client.ask("What is 2 + 2?")
        url = client.generate_image("A fluffy cat")
        metrics = client.analyze("1, 2, 3, 4, 5")

    """

    def __init__(
        self,
        api_key: str | None = None,
        base_url: str | None = None,
        timeout: float | None = None,
        logger: Any = None,
    ):
        """
        Initialize the Grok client.

        Args:
            api_key: Grok API key (or GROK_API_KEY env var)
            base_url: API base URL (or GROK_BASE_URL env var)
            timeout: Request timeout in seconds (or GROK_TIMEOUT env var)
            logger: Diagnostic logger shared with the core client

        Raises:
            ConfigError: If no API key is available

        """
        # only fall back to the environment for values not passed in
        config = ClientConfig(
            api_key=api_key or os.environ.get("GROK_API_KEY"),
            base_url=base_url or os.environ.get("GROK_BASE_URL") or DEFAULT_BASE_URL,
            timeout=timeout if timeout is not None else ClientConfig.timeout_from_env(),
        )
        self._init(config, logger)

    @classmethod
    def from_config(cls, config: ClientConfig, logger: Any = None, **kwargs: Any) -> "GrokClient":
        """Create a client from an explicit config, skipping the environment."""
        client = cls.__new__(cls)
        client._init(config, logger, **kwargs)
        return client

    def _init(self, config: ClientConfig, logger: Any, **kwargs: Any) -> None:
        self.logger = logger or get_logger(__name__)
        self._client = APIClient(config, logger=self.logger, **kwargs)

    def _decode(self, endpoint: str, decoder: Any, payload: dict[str, Any]) -> Any:
        try:
            return decoder(payload)
        except MalformedResponseError as e:
            self.logger.error("unexpected response shape", endpoint=endpoint, field=e.field)
            raise

    def ask(self, question: str) -> str:
        """
        Ask a question.

        Args:
            question: Free-text question

        Returns:
            The answer text

        """
        result = self._client.post("/ask", {"question": question})
        return self._decode("/ask", AskResponse.from_dict, result).answer

    def generate_image(self, prompt: str) -> str:
        """
        Generate an image from a prompt.

        Args:
            prompt: Description of the image

        Returns:
            URL of the generated image

        """
        result = self._client.post("/image", {"prompt": prompt})
        return self._decode("/image", ImageResponse.from_dict, result).image_url

    def analyze(self, raw_numbers: str) -> dict[str, float]:
        """
        Analyze a comma-separated list of numbers.

        The text is forwarded verbatim; the API decides what it accepts.

        Args:
            raw_numbers: Comma-separated numbers, e.g. "1, 2, 3"

        Returns:
            Metric name to value, e.g. {"mean": 2.0, "median": 2.0}

        """
        result = self._client.post("/analyze", {"data": raw_numbers})
        return self._decode("/analyze", AnalysisResult.from_dict, result).metrics
