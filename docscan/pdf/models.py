from dataclasses import dataclass, field


@dataclass(frozen=True)
class ParsedPdf:
    """Structured parse of a PDF as reported by a backend.

    ``info`` holds the document information dictionary under its PDF key names
    (``Producer``, ``Creator``, ``CreationDate``, ``ModDate``). ``text`` is the
    whole-document text with pages separated by form-feed characters.
    """

    num_pages: int
    info: dict[str, str] = field(default_factory=dict)
    text: str = ""
