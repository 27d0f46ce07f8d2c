from docscan.content.base import BaseContentScorer
from docscan.content.factory import ContentScorerFactory
from docscan.content.scorer import ContentScorer

__all__ = ["BaseContentScorer", "ContentScorer", "ContentScorerFactory"]
