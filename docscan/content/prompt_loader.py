from pathlib import Path

from docscan.content.exceptions import ContentScoringError

_DEFAULT_PROMPT_DIR = Path(__file__).parent / "prompts"


def load_prompt_template(path: Path | None = None) -> str:
    """Load the integrity prompt template.

    The template must contain the ``{document_text}`` and ``{json_schema}``
    placeholders and no other braces.

    Raises:
        ContentScoringError: if the file cannot be read.
    """
    if path is None:
        path = _DEFAULT_PROMPT_DIR / "integrity_prompt.txt"
    try:
        return path.read_text(encoding="utf-8")
    except OSError as exc:
        raise ContentScoringError(f"Failed to load prompt template: {exc}") from exc


def load_json_schema(path: Path | None = None) -> str:
    """Load the JSON schema the provider response must follow.

    Raises:
        ContentScoringError: if the file cannot be read.
    """
    if path is None:
        path = _DEFAULT_PROMPT_DIR / "integrity_schema.json"
    try:
        return path.read_text(encoding="utf-8")
    except OSError as exc:
        raise ContentScoringError(f"Failed to load JSON schema: {exc}") from exc
