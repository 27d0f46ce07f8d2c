import json

from docscan.content.example_client_adapter import ExampleClientAdapter
from docscan.content.scorer import ContentScorer


class TestExampleClientAdapter:
    def test_returns_low_risk_assessment(self) -> None:
        raw = ExampleClientAdapter().create_chat_completion(
            model="example",
            temperature=0.0,
            system_prompt="",
            user_prompt="anything",
            json_schema={},
        )
        data = json.loads(raw)
        assert data["score"] == 0
        assert data["risks"] == []
        assert data["recommendation"] == "accept"

    def test_passes_validation_through_scorer(self) -> None:
        scorer = ContentScorer(client=ExampleClientAdapter(), model="example")
        result = scorer.assess("Invoice 42")
        assert result.score == 0.0
        assert result.risks == []
        assert result.recommendation == "accept"
