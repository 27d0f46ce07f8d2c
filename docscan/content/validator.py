"""Validates the parsed provider response and builds a ContentAssessment."""

from typing import Any

from docscan.content.exceptions import ContentScoringValidationError
from docscan.content.models import ContentAssessment, ContentRisk, ContentRiskType

_MAX_RISKS = 20
_VALID_RECOMMENDATIONS = frozenset({"accept", "request_additional_validation", "reject"})


def validate_and_build(data: dict[str, Any]) -> ContentAssessment:
    """Validate raw parsed JSON and build a ContentAssessment.

    Raises:
        ContentScoringValidationError: on any validation failure.
    """
    for key in ("score", "risks"):
        if key not in data:
            raise ContentScoringValidationError(f"Missing required field: {key}")
    return ContentAssessment(
        score=_build_score(data["score"]),
        risks=_build_risks(data["risks"]),
        recommendation=_build_recommendation(data.get("recommendation")),
        analysis=_build_text(data.get("analysis"), "analysis"),
    )


def _build_score(raw: Any) -> float:
    if isinstance(raw, bool) or not isinstance(raw, (int, float)):
        raise ContentScoringValidationError("'score' must be a number")
    if not 0 <= raw <= 100:
        raise ContentScoringValidationError(f"'score' out of range 0-100: {raw}")
    return float(raw)


def _build_risks(raw: Any) -> list[ContentRisk]:
    if not isinstance(raw, list):
        raise ContentScoringValidationError("'risks' must be a list")
    if len(raw) > _MAX_RISKS:
        raise ContentScoringValidationError(f"Too many risks: {len(raw)} (max {_MAX_RISKS})")
    return [_build_risk(item, i) for i, item in enumerate(raw)]


def _build_risk(raw: Any, index: int) -> ContentRisk:
    if not isinstance(raw, dict):
        raise ContentScoringValidationError(f"risks[{index}] must be an object")
    try:
        risk_type = ContentRiskType(raw.get("type"))
    except ValueError as exc:
        raise ContentScoringValidationError(
            f"risks[{index}].type is not a known risk type: {raw.get('type')!r}"
        ) from exc
    confidence = raw.get("confidence")
    if isinstance(confidence, bool) or not isinstance(confidence, (int, float)):
        raise ContentScoringValidationError(f"risks[{index}].confidence must be a number")
    if not 0 <= confidence <= 1:
        raise ContentScoringValidationError(
            f"risks[{index}].confidence out of range 0-1: {confidence}"
        )
    return ContentRisk(
        type=risk_type,
        confidence=float(confidence),
        justification=_build_text(raw.get("justification"), f"risks[{index}].justification"),
    )


def _build_recommendation(raw: Any) -> str:
    if raw is None:
        return ""
    if not isinstance(raw, str) or raw not in _VALID_RECOMMENDATIONS:
        raise ContentScoringValidationError(f"'recommendation' is not recognised: {raw!r}")
    return raw


def _build_text(raw: Any, name: str) -> str:
    if raw is None:
        return ""
    if not isinstance(raw, str):
        raise ContentScoringValidationError(f"'{name}' must be a string")
    return raw
