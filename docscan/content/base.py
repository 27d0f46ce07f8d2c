from abc import ABC, abstractmethod

from docscan.content.models import ContentAssessment


class BaseContentScorer(ABC):
    """Contract for all content scoring adapters."""

    @abstractmethod
    def assess(self, text: str) -> ContentAssessment:
        """Score the extracted document text for signs of manipulation.

        Args:
            text: Full text extracted from the document.

        Returns:
            ContentAssessment with a 0-100 risk score and the detected risks.

        Raises:
            ContentScoringError: on any failure.
        """
