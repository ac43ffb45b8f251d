"""
Instruction parsing: one LLM attempt, then the regex fallback.

The flow has two states. The LLM is asked exactly once; on success its
answer is validated and returned. On an upstream failure or an unusable
reply the fallback extractor runs on the raw text and its result is final.
"""

import logging

from ._exceptions import UnparseableResponseError, UpstreamUnavailableError
from .config import SplaitConfig
from .fallback import extract
from .llm import AsyncOpenAIChatClient, OpenAIChatClient
from .types import SplitPlan
from .validator import validate

logger = logging.getLogger(__name__)


class SplitParser:
    """
    Sync parser for scripts and tests.

    Example:
        >>> parser = SplitParser(SplaitConfig.from_env())
        >>> plan = parser.parse("Split 10 ETH equally among 0x..., 0x...")
        >>> plan.usable
        True
    """

    def __init__(self, config: SplaitConfig, client: OpenAIChatClient | None = None) -> None:
        """
        Raises:
            ConfigurationError: If no client is given and no API key is configured
        """
        self.config = config
        self.client = client or OpenAIChatClient(config)

    def parse(self, text: str) -> SplitPlan:
        """
        Parse an instruction into a validated SplitPlan.

        Raises:
            UpstreamUnavailableError: LLM failed and fallback is disabled
            UnparseableResponseError: Unusable reply and fallback is disabled
        """
        try:
            candidate = self.client.complete_json(text)
        except (UpstreamUnavailableError, UnparseableResponseError) as e:
            return _fall_back(self.config, text, e)
        return validate(candidate, self.config.amount_precision)

    def close(self) -> None:
        self.client.close()


class AsyncSplitParser:
    """Async parser used by the HTTP app."""

    def __init__(
        self, config: SplaitConfig, client: AsyncOpenAIChatClient | None = None
    ) -> None:
        self.config = config
        self.client = client or AsyncOpenAIChatClient(config)

    async def parse(self, text: str) -> SplitPlan:
        try:
            candidate = await self.client.complete_json(text)
        except (UpstreamUnavailableError, UnparseableResponseError) as e:
            return _fall_back(self.config, text, e)
        return validate(candidate, self.config.amount_precision)

    async def aclose(self) -> None:
        await self.client.aclose()


def _fall_back(
    config: SplaitConfig,
    text: str,
    error: UpstreamUnavailableError | UnparseableResponseError,
) -> SplitPlan:
    if not config.fallback_enabled:
        raise error
    logger.info("LLM parse failed (%s); using regex fallback", error)
    return extract(text, config.amount_precision, config.currency_symbol)
