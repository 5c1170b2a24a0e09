"""
Completion Client
=================

Single-shot invocation of the AI completion provider.
Model, temperature and token cap are fixed at construction time. Each call
is one attempt: no retry, no backoff.
"""

from typing import Any, Optional
import asyncio

from openai import AsyncOpenAI, OpenAIError

from homepage_builder.config.logging import get_logger
from homepage_builder.config.settings import Settings, get_settings
from homepage_builder.core.generation.prompt_builder import SYSTEM_INSTRUCTION

logger = get_logger(__name__)


class GenerationFailed(Exception):
    """Exception raised when the completion provider yields no usable markup."""

    def __init__(self, message: str, cause: Optional[BaseException] = None):
        super().__init__(message)
        self.cause = cause


class CompletionClient:
    """Chat completion client with a fixed configuration and a concurrency gate."""

    def __init__(
        self,
        api_key: Optional[str],
        model: str = "gpt-4o-mini",
        temperature: float = 0.3,
        max_tokens: int = 3000,
        base_url: Optional[str] = None,
        timeout: float = 120.0,
        max_concurrency: int = 4,
        client: Optional[Any] = None,
    ):
        self.api_key = api_key
        self.model = model
        self.temperature = temperature
        self.max_tokens = max_tokens
        self.base_url = base_url
        self.timeout = timeout
        self._client = client
        self._semaphore = asyncio.Semaphore(max_concurrency)
        self.logger: Any = logger.bind(component="completion_client")  # structlog.BoundLoggerBase

        self.logger.info(
            "Completion client configured",
            model=self.model,
            base_url=self.base_url,
            max_concurrency=max_concurrency,
        )

    @classmethod
    def from_settings(cls, settings: Optional[Settings] = None) -> "CompletionClient":
        """Create a client from application settings."""
        settings = settings or get_settings()
        return cls(
            api_key=settings.openai_api_key,
            model=settings.openai_model,
            temperature=settings.openai_temperature,
            max_tokens=settings.openai_max_tokens,
            base_url=settings.openai_base_url,
            timeout=settings.completion_timeout,
            max_concurrency=settings.completion_max_concurrency,
        )

    def is_configured(self) -> bool:
        """Check whether the client can reach the provider."""
        return self._client is not None or bool(self.api_key)

    def _get_client(self) -> Any:
        """Get the SDK client, creating it on first use."""
        if self._client is None:
            if not self.api_key:
                raise GenerationFailed("Completion provider API key is not configured")
            self._client = AsyncOpenAI(
                api_key=self.api_key,
                base_url=self.base_url,
                timeout=self.timeout,
                max_retries=0,
            )
        return self._client

    async def complete(self, prompt: str) -> str:
        """
        Generate markup for a prompt.

        Args:
            prompt: User prompt from the prompt builder

        Returns:
            Generated text, stripped of surrounding whitespace

        Raises:
            GenerationFailed: If the provider errors, times out, or returns no content
        """
        client = self._get_client()
        messages = [
            {"role": "system", "content": SYSTEM_INSTRUCTION},
            {"role": "user", "content": prompt},
        ]

        async with self._semaphore:
            try:
                response = await asyncio.wait_for(
                    client.chat.completions.create(
                        model=self.model,
                        messages=messages,
                        temperature=self.temperature,
                        max_tokens=self.max_tokens,
                    ),
                    timeout=self.timeout,
                )
            except asyncio.TimeoutError as e:
                self.logger.error("Completion timed out", model=self.model, timeout=self.timeout)
                raise GenerationFailed(
                    f"Completion timed out after {self.timeout}s", cause=e
                ) from e
            except OpenAIError as e:
                self.logger.error(
                    "Completion provider error",
                    model=self.model,
                    base_url=self.base_url,
                    error=str(e),
                )
                raise GenerationFailed(f"Failed to generate homepage code: {e}", cause=e) from e
            except Exception as e:
                self.logger.error(
                    "Completion transport error",
                    model=self.model,
                    error_type=type(e).__name__,
                    error=str(e),
                )
                raise GenerationFailed(f"Failed to generate homepage code: {e}", cause=e) from e

        content = self._extract_content(response)
        if not content:
            self.logger.error("Completion returned no content", model=self.model)
            raise GenerationFailed("Completion provider returned an empty response")

        self.logger.debug("Completion received", model=self.model, content_length=len(content))
        return content

    @staticmethod
    def _extract_content(response: Any) -> str:
        """Extract the message text of the first choice."""
        choices = getattr(response, "choices", None) or []
        if not choices:
            return ""
        message = getattr(choices[0], "message", None)
        content = getattr(message, "content", None)
        if not isinstance(content, str):
            return ""
        return content.strip()
