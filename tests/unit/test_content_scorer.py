import json
from pathlib import Path
from unittest.mock import MagicMock

import pytest

from docscan.content.exceptions import (
    ContentScoringError,
    ContentScoringNetworkError,
    ContentScoringValidationError,
)
from docscan.content.scorer import ContentScorer

_VALID_RESPONSE = json.dumps(
    {
        "score": 70,
        "risks": [{"type": "forged_signature", "confidence": 0.9, "justification": "x"}],
        "recommendation": "reject",
        "analysis": "Signature pasted in.",
    }
)


def _make_client(response: str = _VALID_RESPONSE) -> MagicMock:
    client = MagicMock()
    client.create_chat_completion.return_value = response
    return client


def _make_scorer(client: MagicMock, **kwargs: object) -> ContentScorer:
    return ContentScorer(client=client, model="test-model", **kwargs)  # type: ignore[arg-type]


class TestAssess:
    def test_returns_validated_assessment(self) -> None:
        result = _make_scorer(_make_client()).assess("Signed by the director")
        assert result.score == 70.0
        assert result.recommendation == "reject"
        assert len(result.risks) == 1

    def test_prompt_contains_text_and_schema(self) -> None:
        client = _make_client()
        _make_scorer(client).assess("UNIQUE-DOCUMENT-TEXT")

        kwargs = client.create_chat_completion.call_args.kwargs
        assert "UNIQUE-DOCUMENT-TEXT" in kwargs["user_prompt"]
        assert '"forged_signature"' in kwargs["user_prompt"]
        assert kwargs["json_schema"]["type"] == "object"
        assert kwargs["model"] == "test-model"

    def test_truncates_long_text(self) -> None:
        client = _make_client()
        _make_scorer(client, max_text_chars=10).assess("A" * 10 + "B" * 50)
        prompt = client.create_chat_completion.call_args.kwargs["user_prompt"]
        assert "A" * 10 in prompt
        assert "B" not in prompt

    @pytest.mark.parametrize("requested,expected", [(-1.0, 0.0), (0.1, 0.1), (0.9, 0.2)])
    def test_clamps_temperature(self, requested: float, expected: float) -> None:
        client = _make_client()
        _make_scorer(client, temperature=requested).assess("text")
        assert client.create_chat_completion.call_args.kwargs["temperature"] == expected

    def test_strips_markdown_fences(self) -> None:
        client = _make_client(f"```json\n{_VALID_RESPONSE}\n```")
        assert _make_scorer(client).assess("text").score == 70.0

    def test_custom_prompt_template(self, tmp_path: Path) -> None:
        template = tmp_path / "prompt.txt"
        template.write_text("Doc: {document_text}")
        client = _make_client()
        _make_scorer(client, prompt_template_path=template).assess("hello")
        assert client.create_chat_completion.call_args.kwargs["user_prompt"] == "Doc: hello"


class TestAssessFailures:
    def test_invalid_json(self) -> None:
        with pytest.raises(ContentScoringError, match="Invalid JSON response"):
            _make_scorer(_make_client("not json")).assess("text")

    def test_non_object_json(self) -> None:
        with pytest.raises(ContentScoringError, match="must be an object"):
            _make_scorer(_make_client("[1, 2]")).assess("text")

    def test_validation_error_propagates(self) -> None:
        client = _make_client(json.dumps({"score": 500, "risks": []}))
        with pytest.raises(ContentScoringValidationError):
            _make_scorer(client).assess("text")

    def test_network_error_propagates(self) -> None:
        client = MagicMock()
        client.create_chat_completion.side_effect = ContentScoringNetworkError("down")
        with pytest.raises(ContentScoringNetworkError):
            _make_scorer(client).assess("text")
