"""
Tests for the typed response records and the high-level GrokClient.
"""

import json

import pytest
from conftest import make_response

from grok_cli.core.client import ClientConfig, ConfigError, MalformedResponseError
from grok_cli.core.types import AnalysisResult, AskResponse, ImageResponse
from grok_cli.sdk import GrokClient

# =============================================================================
# Response Types
# =============================================================================


class TestResponseTypes:
    def test_ask_response(self):
        assert AskResponse.from_dict({"answer": "4", "extra": 1}).answer == "4"

    @pytest.mark.parametrize("payload", [{}, {"answer": 4}, {"answer": None}, {"text": "4"}])
    def test_ask_response_malformed(self, payload):
        with pytest.raises(MalformedResponseError) as exc_info:
            AskResponse.from_dict(payload)
        assert exc_info.value.field == "answer"

    def test_image_response(self):
        url = "https://example.com/fluffy_cat.jpg"
        assert ImageResponse.from_dict({"image_url": url}).image_url == url

    def test_image_response_malformed(self):
        with pytest.raises(MalformedResponseError) as exc_info:
            ImageResponse.from_dict({"url": "https://example.com/x.jpg"})
        assert exc_info.value.field == "image_url"

    def test_analysis_result_converts_ints(self):
        result = AnalysisResult.from_dict({"mean": 3, "stddev": 1.4142})
        assert result.metrics == {"mean": 3.0, "stddev": 1.4142}
        assert isinstance(result.metrics["mean"], float)

    def test_analysis_result_sorted_items(self):
        result = AnalysisResult.from_dict({"median": 2.0, "max": 5.0, "mean": 3.0})
        assert [name for name, _ in result.sorted_items()] == ["max", "mean", "median"]

    def test_analysis_result_empty(self):
        assert AnalysisResult.from_dict({}).metrics == {}

    @pytest.mark.parametrize("bad", ["3.0", None, True, [1], {"x": 1}])
    def test_analysis_result_rejects_non_numeric(self, bad):
        with pytest.raises(MalformedResponseError) as exc_info:
            AnalysisResult.from_dict({"mean": 3.0, "median": bad})
        assert exc_info.value.field == "median"

    def test_analysis_result_rejects_integer_too_large_for_float(self):
        with pytest.raises(MalformedResponseError) as exc_info:
            AnalysisResult.from_dict({"mean": 3.0, "sum": 10**400})
        assert exc_info.value.field == "sum"


# =============================================================================
# GrokClient
# =============================================================================


@pytest.fixture
def client(config, logger, opener):
    return GrokClient.from_config(config, logger=logger, opener=opener)


def sent_body(opener) -> dict:
    return json.loads(opener.open.call_args.args[0].data)


def sent_url(opener) -> str:
    return opener.open.call_args.args[0].full_url


class TestGrokClient:
    def test_ask(self, client, opener):
        opener.open.return_value = make_response({"answer": "4"})
        assert client.ask("What is 2 + 2?") == "4"
        assert sent_url(opener) == "https://api.example.com/v1/ask"
        assert sent_body(opener) == {"question": "What is 2 + 2?"}

    def test_generate_image(self, client, opener):
        opener.open.return_value = make_response({"image_url": "https://example.com/fluffy_cat.jpg"})
        assert client.generate_image("A fluffy cat") == "https://example.com/fluffy_cat.jpg"
        assert sent_url(opener) == "https://api.example.com/v1/image"
        assert sent_body(opener) == {"prompt": "A fluffy cat"}

    def test_analyze_forwards_raw_text(self, client, opener):
        opener.open.return_value = make_response({"mean": 3.0, "median": 3.0})
        assert client.analyze("1, 2,x, 4,5") == {"mean": 3.0, "median": 3.0}
        assert sent_url(opener) == "https://api.example.com/v1/analyze"
        assert sent_body(opener) == {"data": "1, 2,x, 4,5"}

    def test_analyze_rejects_partial_results(self, client, opener, logger):
        opener.open.return_value = make_response({"mean": 3.0, "mode": "n/a"})
        with pytest.raises(MalformedResponseError) as exc_info:
            client.analyze("1,2,3")
        assert exc_info.value.field == "mode"
        logger.error.assert_called_once_with("unexpected response shape", endpoint="/analyze", field="mode")

    def test_missing_field_logged_with_name(self, client, opener, logger):
        opener.open.return_value = make_response({"result": "4"})
        with pytest.raises(MalformedResponseError):
            client.ask("What is 2 + 2?")
        assert logger.error.call_args.kwargs["field"] == "answer"

    def test_repeated_calls_are_independent(self, client, opener):
        opener.open.return_value = make_response({"answer": "4"})
        assert client.ask("q") == client.ask("q") == "4"

    def test_reads_environment(self, monkeypatch, logger):
        monkeypatch.setenv("GROK_API_KEY", "env-key")
        monkeypatch.setenv("GROK_BASE_URL", "http://localhost:9000/")
        client = GrokClient(logger=logger)
        assert client._client.api_key == "env-key"
        assert client._client.base_url == "http://localhost:9000"

    def test_arguments_override_environment(self, monkeypatch, logger):
        monkeypatch.setenv("GROK_API_KEY", "env-key")
        client = GrokClient(api_key="arg-key", base_url="http://other", timeout=3, logger=logger)
        assert client._client.api_key == "arg-key"
        assert client._client.base_url == "http://other"
        assert client._client.timeout == 3

    def test_missing_key_fails_construction(self, logger):
        with pytest.raises(ConfigError):
            GrokClient(logger=logger)

    def test_from_config_skips_environment(self, monkeypatch, logger):
        monkeypatch.setenv("GROK_API_KEY", "env-key")
        with pytest.raises(ConfigError):
            GrokClient.from_config(ClientConfig(api_key=""), logger=logger)

    def test_explicit_timeout_ignores_bad_environment(self, monkeypatch, logger):
        monkeypatch.setenv("GROK_TIMEOUT", "soon")
        client = GrokClient(api_key="k", timeout=2.0, logger=logger)
        assert client._client.timeout == 2.0

    def test_bad_environment_timeout_still_rejected(self, monkeypatch, logger):
        monkeypatch.setenv("GROK_TIMEOUT", "soon")
        with pytest.raises(ConfigError):
            GrokClient(api_key="k", logger=logger)

    def test_overlong_integer_metric_is_malformed(self, client, opener):
        opener.open.return_value = make_response(body=b'{"sum": ' + b"9" * 5000 + b"}")
        with pytest.raises(MalformedResponseError):
            client.analyze("1,2")
