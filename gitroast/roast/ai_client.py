from typing import Any, Dict, List, Optional
import logging

import httpx
from openai import AsyncOpenAI, OpenAIError

from gitroast.errors import GenerationFailure

logger = logging.getLogger(__name__)


class ChatClient:
    """AI chat client talking to OpenRouter through the OpenAI SDK"""

    ENDPOINT = "https://openrouter.ai/api/v1"

    def __init__(self, options: Dict[str, Any], http_client: Optional[httpx.AsyncClient] = None):
        self.client = AsyncOpenAI(
            api_key=options["api_key"],
            base_url=options.get("base_url") or ChatClient.ENDPOINT,
            timeout=options.get("timeout", 30),
            max_retries=0,
            http_client=http_client,
        )
        self.model = options["model"]

    async def chat(self, messages: List[Dict[str, str]], schema: Dict[str, Any], schema_name: str = "result") -> str:
        """Send messages with a strict JSON-schema output constraint and return the raw text."""
        try:
            response = await self.client.chat.completions.create(
                model=self.model,
                messages=messages,
                response_format={
                    "type": "json_schema",
                    "json_schema": {"name": schema_name, "strict": True, "schema": schema},
                },
            )
        except OpenAIError as e:
            logger.error(f"OpenAI API error: {e}")
            raise GenerationFailure(f"backend request failed: {e}") from e

        if not response.choices:
            raise GenerationFailure("No response from backend")
        output = response.choices[0].message.content
        if not output:
            raise GenerationFailure("No response from backend")
        return output

    async def structured_chat(self, message: str, schema: Dict[str, Any], schema_name: str = "result") -> str:
        """Send a single user message and get the schema-constrained response text."""
        return await self.chat([{"role": "user", "content": message}], schema, schema_name)

    async def close(self):
        await self.client.close()
