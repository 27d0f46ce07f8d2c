import httpx
import openai

from docscan.content.client_base import BaseContentClient
from docscan.content.exceptions import ContentScoringError, ContentScoringNetworkError


class OpenAIClientAdapter(BaseContentClient):
    """Content client built on the OpenAI-compatible chat completions API."""

    def __init__(
        self,
        *,
        api_key: str,
        timeout_seconds: int,
        base_url: str | None = None,
    ) -> None:
        self._client = openai.OpenAI(
            api_key=api_key,
            timeout=timeout_seconds,
            base_url=base_url,
        )

    def create_chat_completion(
        self,
        *,
        model: str,
        temperature: float,
        system_prompt: str,
        user_prompt: str,
        json_schema: dict[str, object],
    ) -> str:
        messages = [{"role": "user", "content": user_prompt}]
        if system_prompt:
            messages.insert(0, {"role": "system", "content": system_prompt})
        try:
            response = self._client.chat.completions.create(
                model=model,
                temperature=temperature,
                response_format={
                    "type": "json_schema",
                    "json_schema": {
                        "name": "integrity_assessment",
                        "strict": True,
                        "schema": json_schema,
                    },
                },
                messages=messages,  # type: ignore[arg-type]
            )
        except (openai.APIConnectionError, httpx.ConnectError, httpx.TimeoutException) as exc:
            raise ContentScoringNetworkError(f"AI provider network error: {exc}") from exc
        except openai.APIError as exc:
            raise ContentScoringNetworkError(f"AI provider API error: {exc}") from exc

        if not response.choices:
            raise ContentScoringError("AI returned no choices")
        content = response.choices[0].message.content
        if content is None:
            raise ContentScoringError("AI returned empty response")
        return content
