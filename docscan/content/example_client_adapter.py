"""Offline content client.

Returns a fixed low-risk assessment without any network call. Used for local
development, tests and deployments that run the structural checks only.
"""

import json
from typing import ClassVar

from docscan.content.client_base import BaseContentClient


class ExampleClientAdapter(BaseContentClient):
    DEFAULT_RESPONSE: ClassVar[dict[str, object]] = {
        "score": 0,
        "risks": [],
        "recommendation": "accept",
        "analysis": "Content analysis disabled; no provider configured.",
    }

    def create_chat_completion(
        self,
        *,
        model: str,
        temperature: float,
        system_prompt: str,
        user_prompt: str,
        json_schema: dict[str, object],
    ) -> str:
        _ = model, temperature, system_prompt, user_prompt, json_schema
        return json.dumps(self.DEFAULT_RESPONSE)
