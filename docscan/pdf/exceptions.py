class PdfExtractionError(Exception):
    """Raised when a PDF backend cannot parse the document or one of its pages."""
