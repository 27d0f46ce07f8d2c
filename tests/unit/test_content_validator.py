from typing import Any

import pytest

from docscan.content.exceptions import ContentScoringValidationError
from docscan.content.models import ContentRiskType
from docscan.content.validator import validate_and_build


def _valid_payload(**overrides: Any) -> dict[str, Any]:
    payload: dict[str, Any] = {
        "score": 40,
        "risks": [
            {
                "type": "altered_text",
                "confidence": 0.8,
                "justification": "Totals do not add up",
            }
        ],
        "recommendation": "request_additional_validation",
        "analysis": "Amounts look edited.",
    }
    payload.update(overrides)
    return payload


class TestValidateAndBuild:
    def test_builds_assessment(self) -> None:
        result = validate_and_build(_valid_payload())
        assert result.score == 40.0
        assert result.risks[0].type is ContentRiskType.ALTERED_TEXT
        assert result.risks[0].confidence == 0.8
        assert result.risks[0].justification == "Totals do not add up"
        assert result.recommendation == "request_additional_validation"
        assert result.analysis == "Amounts look edited."

    def test_optional_fields_default_to_empty(self) -> None:
        result = validate_and_build({"score": 0, "risks": []})
        assert result.recommendation == ""
        assert result.analysis == ""

    @pytest.mark.parametrize("key", ["score", "risks"])
    def test_missing_required_field(self, key: str) -> None:
        payload = _valid_payload()
        del payload[key]
        with pytest.raises(ContentScoringValidationError, match=f"Missing required field: {key}"):
            validate_and_build(payload)


class TestScore:
    @pytest.mark.parametrize("score", [-1, 100.5, 1000])
    def test_out_of_range(self, score: float) -> None:
        with pytest.raises(ContentScoringValidationError, match="out of range"):
            validate_and_build(_valid_payload(score=score))

    @pytest.mark.parametrize("score", ["40", True, None])
    def test_not_a_number(self, score: Any) -> None:
        with pytest.raises(ContentScoringValidationError, match="must be a number"):
            validate_and_build(_valid_payload(score=score))

    @pytest.mark.parametrize("score", [0, 100, 55.5])
    def test_bounds_accepted(self, score: float) -> None:
        assert validate_and_build(_valid_payload(score=score)).score == float(score)


class TestRisks:
    def test_not_a_list(self) -> None:
        with pytest.raises(ContentScoringValidationError, match="must be a list"):
            validate_and_build(_valid_payload(risks={"type": "altered_text"}))

    def test_too_many(self) -> None:
        risks = [{"type": "fake_stamp", "confidence": 0.1}] * 21
        with pytest.raises(ContentScoringValidationError, match="Too many risks"):
            validate_and_build(_valid_payload(risks=risks))

    def test_unknown_type(self) -> None:
        risks = [{"type": "bad_vibes", "confidence": 0.5}]
        with pytest.raises(ContentScoringValidationError, match="not a known risk type"):
            validate_and_build(_valid_payload(risks=risks))

    def test_item_not_an_object(self) -> None:
        with pytest.raises(ContentScoringValidationError, match=r"risks\[0\] must be an object"):
            validate_and_build(_valid_payload(risks=["altered_text"]))

    @pytest.mark.parametrize("confidence", [-0.1, 1.5])
    def test_confidence_out_of_range(self, confidence: float) -> None:
        risks = [{"type": "fake_stamp", "confidence": confidence}]
        with pytest.raises(ContentScoringValidationError, match="confidence out of range"):
            validate_and_build(_valid_payload(risks=risks))

    def test_confidence_missing(self) -> None:
        risks = [{"type": "fake_stamp"}]
        with pytest.raises(ContentScoringValidationError, match="confidence must be a number"):
            validate_and_build(_valid_payload(risks=risks))


class TestRecommendation:
    def test_unknown_recommendation(self) -> None:
        with pytest.raises(ContentScoringValidationError, match="not recognised"):
            validate_and_build(_valid_payload(recommendation="shred it"))

    def test_analysis_must_be_string(self) -> None:
        with pytest.raises(ContentScoringValidationError, match="must be a string"):
            validate_and_build(_valid_payload(analysis=["x"]))
