"""AI-powered content heuristics pass over extracted document text."""

import json
from pathlib import Path

from docscan.content.base import BaseContentScorer
from docscan.content.client_base import BaseContentClient
from docscan.content.exceptions import ContentScoringError
from docscan.content.models import ContentAssessment
from docscan.content.prompt_loader import load_json_schema, load_prompt_template
from docscan.content.validator import validate_and_build
from docscan.logging.logger import Log

DEFAULT_MAX_TEXT_CHARS = 20_000


class ContentScorer(BaseContentScorer):
    """Asks an AI provider to score the document text for manipulation."""

    def __init__(
        self,
        *,
        client: BaseContentClient,
        model: str,
        temperature: float = 0.0,
        prompt_template_path: Path | None = None,
        json_schema_path: Path | None = None,
        system_prompt: str = "",
        max_text_chars: int = DEFAULT_MAX_TEXT_CHARS,
    ) -> None:
        self._client = client
        self._model = model
        self._temperature = max(0.0, min(0.2, temperature))
        self._system_prompt = system_prompt
        self._max_text_chars = max_text_chars
        self._prompt_template = load_prompt_template(prompt_template_path)
        schema_str = load_json_schema(json_schema_path)
        self._json_schema = schema_str
        self._json_schema_dict = json.loads(schema_str)

    def assess(self, text: str) -> ContentAssessment:
        prompt = self._build_prompt(text)
        Log.debug(f"Content prompt:\n{prompt}")

        raw_response = self._call_ai(prompt)
        Log.debug(f"AI raw response:\n{raw_response}")

        result = validate_and_build(self._parse_json(raw_response))
        Log.info(
            f"Content assessment complete: score {result.score:.0f}, "
            f"{len(result.risks)} risk(s)"
        )
        return result

    def _build_prompt(self, text: str) -> str:
        if len(text) > self._max_text_chars:
            Log.debug(f"Truncating document text from {len(text)} to {self._max_text_chars} chars")
            text = text[: self._max_text_chars]
        return self._prompt_template.format(
            document_text=text,
            json_schema=self._json_schema,
        )

    def _call_ai(self, prompt: str) -> str:
        return self._client.create_chat_completion(
            model=self._model,
            temperature=self._temperature,
            system_prompt=self._system_prompt,
            user_prompt=prompt,
            json_schema=self._json_schema_dict,
        )

    @staticmethod
    def _parse_json(raw: str) -> dict[str, object]:
        cleaned = raw.strip()
        if cleaned.startswith("```"):
            lines = cleaned.splitlines()
            if lines and lines[0].startswith("```"):
                lines = lines[1:]
            if lines and lines[-1].strip() == "```":
                lines = lines[:-1]
            cleaned = "\n".join(lines)

        try:
            parsed = json.loads(cleaned)
        except json.JSONDecodeError as exc:
            raise ContentScoringError(f"Invalid JSON response: {exc}") from exc

        if not isinstance(parsed, dict):
            raise ContentScoringError("JSON response must be an object")
        return parsed
