"""Model call boundary.

The pipeline only needs text in, text out. ModelClient is that contract;
PydanticAIModelClient fulfils it with a pydantic_ai Agent. Any failure of the
call itself (timeout, network, provider error) surfaces as TransportError.
No retries happen here - retrying is the caller's decision.
"""

import asyncio
from typing import Protocol

from loguru import logger
from pydantic_ai import Agent
from pydantic_ai.settings import ModelSettings

from mealgen.config.settings import settings
from mealgen.planning.errors import TransportError
from mealgen.planning.llm.prompts import SYSTEM_PROMPT
from mealgen.services.llm.model import get_model


class ModelClient(Protocol):
    async def send_prompt(self, prompt: str) -> str: ...


class PydanticAIModelClient:
    """ModelClient backed by a pydantic_ai Agent with plain-text output."""

    def __init__(
        self,
        model=None,
        *,
        system_prompt: str = SYSTEM_PROMPT,
        timeout_seconds: float | None = None,
        max_tokens: int | None = None,
        temperature: float | None = None,
    ):
        self._model = model
        self._system_prompt = system_prompt
        self._timeout_seconds = timeout_seconds or settings.llm_timeout_seconds
        self._model_settings = ModelSettings(
            max_tokens=max_tokens or settings.llm_max_tokens,
            temperature=settings.llm_temperature if temperature is None else temperature,
        )

    def _build_agent(self) -> Agent:
        model = self._model or get_model(settings.llm_provider, settings.llm_model)
        return Agent(
            model=model,
            system_prompt=self._system_prompt,
            output_type=str,
        )

    async def send_prompt(self, prompt: str) -> str:
        """Send a prompt and return the raw response text.

        Args:
            prompt: Rendered user prompt

        Returns:
            Raw model response text

        Raises:
            TransportError: If the model cannot be configured, or the call
                times out or fails
        """
        logger.debug(
            "model_client: Calling LLM",
            prompt_chars=len(prompt),
            timeout_seconds=self._timeout_seconds,
        )

        try:
            agent = self._build_agent()
            result = await asyncio.wait_for(
                agent.run(prompt, model_settings=self._model_settings),
                timeout=self._timeout_seconds,
            )
        except TimeoutError as e:
            raise TransportError([f"Model call timed out after {self._timeout_seconds}s"]) from e
        except Exception as e:
            logger.error(
                "model_client: Model call failed",
                error_type=type(e).__name__,
                error_message=str(e),
            )
            raise TransportError([f"Model call failed: {type(e).__name__}: {e}"]) from e

        text = result.output if isinstance(result.output, str) else str(result.output)
        logger.debug("model_client: Response received", response_chars=len(text))
        return text
