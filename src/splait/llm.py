"""
LLM client for turning instructions into candidate split plans.

Talks to an OpenAI-compatible chat-completions endpoint over httpx. The
answer is untrusted: callers must pass the decoded object through
``validator.validate``.
"""

import json
import logging
import re
from typing import Any

import httpx

from ._exceptions import UnparseableResponseError, UpstreamUnavailableError
from .config import SplaitConfig

logger = logging.getLogger(__name__)

SYSTEM_PROMPT = """You convert natural language instructions for splitting cryptocurrency funds into JSON.

Extract:
1. totalAmount: the total amount to split, in ETH, as a string
2. recipients: a list of {"address": ..., "amount": ...}, amounts in ETH as strings
3. splitType: "equal" when the total is divided equally, "custom" when amounts differ
4. confidence: a number from 0 to 1 reflecting how clear the instruction is

Rules:
- Equal splits: divide the total equally between all recipients.
- Custom splits: use the amounts given for each recipient; they must add up to the total.
- Addresses are exactly 42 characters: "0x" followed by 40 hexadecimal characters. Copy them in full, never shorten them.
- Leave out anything that is not a valid address.

Example (equal):
Input: "Split 10 ETH equally among 0xA72505F52928f5255FBb82a031ae2d0980FF6621, 0xeD5C89Ae41516A96875B2c15223F9286C79f11fb"
Output: {"totalAmount": "10", "recipients": [{"address": "0xa72505f52928f5255fbb82a031ae2d0980ff6621", "amount": "5"}, {"address": "0xed5c89ae41516a96875b2c15223f9286c79f11fb", "amount": "5"}], "splitType": "equal", "confidence": 0.95}

Example (custom):
Input: "Send 3 ETH to 0xA72505F52928f5255FBb82a031ae2d0980FF6621 and 7 ETH to 0xeD5C89Ae41516A96875B2c15223F9286C79f11fb"
Output: {"totalAmount": "10", "recipients": [{"address": "0xa72505f52928f5255fbb82a031ae2d0980ff6621", "amount": "3"}, {"address": "0xed5c89ae41516a96875b2c15223f9286c79f11fb", "amount": "7"}], "splitType": "custom", "confidence": 0.9}

Reply with the JSON object only, no other text."""

_FENCE = "```"


def extract_json(content: str) -> dict[str, Any]:
    """
    Decode the JSON object in a model reply.

    Models sometimes wrap JSON in ```json fences or add prose around it.
    Strip fences and take the outermost {...} block.

    Raises:
        UnparseableResponseError: If no JSON object can be decoded
    """
    text = content.strip()

    if text.startswith(_FENCE):
        lines = text.splitlines()[1:]
        if lines and lines[-1].strip().startswith(_FENCE):
            lines = lines[:-1]
        text = "\n".join(lines).strip()

    if not text.startswith("{"):
        match = re.search(r"\{.*\}", text, flags=re.S)
        if match:
            text = match.group(0)

    try:
        decoded = json.loads(text)
    except json.JSONDecodeError as e:
        raise UnparseableResponseError("Invalid JSON response from AI", content=content) from e

    if not isinstance(decoded, dict):
        raise UnparseableResponseError("AI response is not a JSON object", content=content)
    return decoded


class _ChatCompletions:
    """Request building and response handling shared by both clients."""

    def __init__(self, config: SplaitConfig) -> None:
        self.config = config
        self.url = f"{config.base_url.rstrip('/')}/chat/completions"
        self.headers = {
            "Content-Type": "application/json",
            "Authorization": f"Bearer {config.require_api_key()}",
        }

    def build_payload(self, text: str) -> dict[str, Any]:
        return {
            "model": self.config.model,
            "messages": [
                {"role": "system", "content": SYSTEM_PROMPT},
                {"role": "user", "content": text},
            ],
            "max_completion_tokens": self.config.max_completion_tokens,
        }

    @staticmethod
    def read_content(response: httpx.Response) -> str:
        if response.is_error:
            logger.warning(
                "LLM provider error %s: %s", response.status_code, response.text[:500]
            )
            raise UpstreamUnavailableError(
                f"OpenAI API error: {response.reason_phrase or response.status_code}",
                status_code=response.status_code,
            )

        try:
            data = response.json()
            content = data["choices"][0]["message"]["content"]
        except (ValueError, KeyError, IndexError, TypeError) as e:
            raise UnparseableResponseError("Malformed response from AI") from e

        if not isinstance(content, str) or not content.strip():
            raise UnparseableResponseError("Empty response from AI")

        logger.debug("LLM response content: %s", content)
        return content


class OpenAIChatClient(_ChatCompletions):
    """
    Sync chat-completions client.

    Example:
        >>> client = OpenAIChatClient(SplaitConfig(api_key="sk-..."))
        >>> obj = client.complete_json("Split 1 ETH between 0x..., 0x...")
    """

    def __init__(self, config: SplaitConfig, http_client: httpx.Client | None = None) -> None:
        """
        Args:
            config: Provider settings (api_key is required)
            http_client: Optional httpx.Client, e.g. with a mock transport

        Raises:
            ConfigurationError: If no API key is configured
        """
        super().__init__(config)
        self.http = http_client or httpx.Client(timeout=config.timeout)

    def complete(self, text: str) -> str:
        """
        Send one instruction and return the raw reply content.

        Raises:
            UpstreamUnavailableError: Network failure, timeout, non-2xx
            UnparseableResponseError: Malformed or empty reply
        """
        try:
            response = self.http.post(self.url, headers=self.headers, json=self.build_payload(text))
        except httpx.HTTPError as e:
            logger.warning("LLM request failed: %s", e)
            raise UpstreamUnavailableError(f"OpenAI API unreachable: {e}") from e
        return self.read_content(response)

    def complete_json(self, text: str) -> dict[str, Any]:
        """complete() followed by extract_json()."""
        return extract_json(self.complete(text))

    def close(self) -> None:
        self.http.close()


class AsyncOpenAIChatClient(_ChatCompletions):
    """Async chat-completions client."""

    def __init__(
        self, config: SplaitConfig, http_client: httpx.AsyncClient | None = None
    ) -> None:
        super().__init__(config)
        self.http = http_client or httpx.AsyncClient(timeout=config.timeout)

    async def complete(self, text: str) -> str:
        try:
            response = await self.http.post(
                self.url, headers=self.headers, json=self.build_payload(text)
            )
        except httpx.HTTPError as e:
            logger.warning("LLM request failed: %s", e)
            raise UpstreamUnavailableError(f"OpenAI API unreachable: {e}") from e
        return self.read_content(response)

    async def complete_json(self, text: str) -> dict[str, Any]:
        return extract_json(await self.complete(text))

    async def aclose(self) -> None:
        await self.http.aclose()
