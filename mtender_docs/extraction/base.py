from abc import ABC, abstractmethod


class BaseTextExtractor(ABC):
    """Contract for all document text extraction adapters."""

    @abstractmethod
    def extract(self, data: bytes) -> str:
        """Extract plain text from document bytes.

        Args:
            data: Raw document file content.

        Returns:
            Extracted text, not yet normalized.

        Raises:
            DocumentExtractionError: if extraction fails for any reason.
        """
