class ContentScoringError(Exception):
    """Raised when the content heuristics pass fails."""


class ContentScoringValidationError(ContentScoringError):
    """Raised when the provider response violates the assessment contract."""


class ContentScoringNetworkError(ContentScoringError):
    """Raised when the AI provider call fails due to network/infrastructure issues."""
