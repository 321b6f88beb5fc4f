"""
OpenAI chat-completion service.

Wraps the ``/chat/completions`` endpoint for JSON-only answers and builds
project estimations on top of it, with complexity-based model selection, a
fallback from gpt-4 to gpt-3.5-turbo, and an in-memory result cache.
"""

from __future__ import annotations

import json
from typing import Any, Dict, Optional

import httpx

from sassify.core.logging_config import get_logger
from sassify.core.monitoring import log_llm_call

from . import estimation_prompts as prompts
from .errors import OpenAIServiceError
from .estimation_cache import EstimationCache

logger = get_logger(__name__)

SYSTEM_MESSAGE = "You are an expert in web project estimation. You always answer with valid JSON."

DEFAULT_OPTIONS: Dict[str, Any] = {
    "model": "gpt-4o-mini",
    "temperature": 0.3,
    "max_tokens": 2000,
    "response_format": {"type": "json_object"},
}


class OpenAIService:
    """
    Thin async client for the OpenAI chat-completion API.

    Responsibilities:
    - call_openai: one JSON-mode completion, parsed into a dict
    - generate_estimation: cached, model-optimised project estimation
    """

    def __init__(
        self,
        api_key: Optional[str],
        *,
        base_url: str = "https://api.openai.com/v1",
        default_model: str = "gpt-4o-mini",
        timeout: float = 60.0,
        client: Optional[httpx.AsyncClient] = None,
        cache: Optional[EstimationCache] = None,
    ) -> None:
        self.api_key = api_key
        self.base_url = base_url.rstrip("/")
        self.default_model = default_model
        self._client = client or httpx.AsyncClient(timeout=timeout)
        self.cache = cache if cache is not None else EstimationCache()

    def _headers(self) -> dict[str, str]:
        headers: dict[str, str] = {"Content-Type": "application/json"}
        if self.api_key:
            headers["Authorization"] = f"Bearer {self.api_key}"
        return headers

    async def aclose(self) -> None:
        await self._client.aclose()

    async def call_openai(self, prompt: str, options: Optional[Dict[str, Any]] = None) -> Dict[str, Any]:
        """Send ``prompt`` and return the JSON object the model answered with.

        Args:
            prompt: User message.
            options: Overrides for model, temperature, max_tokens and response_format.

        Raises:
            OpenAIServiceError: on transport or HTTP failure, missing content, or content that is not JSON.
        """
        opts = {**DEFAULT_OPTIONS, "model": self.default_model, **(options or {})}
        body = {
            "model": opts["model"],
            "messages": [
                {"role": "system", "content": SYSTEM_MESSAGE},
                {"role": "user", "content": prompt},
            ],
            "temperature": opts["temperature"],
            "max_tokens": opts["max_tokens"],
            "response_format": opts["response_format"],
        }
        try:
            logger.debug("OpenAIService.call_openai: POST %s/chat/completions model=%s", self.base_url, opts["model"])
            r = await self._client.post(f"{self.base_url}/chat/completions", headers=self._headers(), json=body)
            r.raise_for_status()
            data = r.json()
            try:
                content = data["choices"][0]["message"]["content"]
            except (KeyError, IndexError, TypeError):
                content = None
            if not content:
                raise OpenAIServiceError("Invalid OpenAI response", status_code=r.status_code, details=data)
            try:
                result = json.loads(content)
            except json.JSONDecodeError as e:
                raise OpenAIServiceError(f"Invalid JSON response: {e}", details=content) from e
            if not isinstance(result, dict):
                raise OpenAIServiceError("Invalid JSON response: expected an object", details=content)
        except httpx.HTTPStatusError as e:
            self._log_failure(prompt, opts, f"HTTP {e.response.status_code}")
            raise OpenAIServiceError(
                f"Error while calling OpenAI: {e.response.status_code}",
                status_code=e.response.status_code,
                details=e.response.text,
            ) from e
        except httpx.HTTPError as e:
            self._log_failure(prompt, opts, str(e))
            raise OpenAIServiceError(f"Error while calling OpenAI: {e}") from e
        except ValueError as e:
            self._log_failure(prompt, opts, f"unreadable response body: {e}")
            raise OpenAIServiceError(f"Error while calling OpenAI: {e}") from e
        except OpenAIServiceError as e:
            self._log_failure(prompt, opts, e.message)
            raise OpenAIServiceError(
                f"Error while calling OpenAI: {e.message}", status_code=e.status_code, details=e.details
            ) from e

        usage = data.get("usage") or {}
        log_llm_call(opts["model"], int(usage.get("total_tokens") or 0), purpose=opts.get("purpose"))
        return result

    def _log_failure(self, prompt: str, options: Dict[str, Any], reason: str) -> None:
        logger.error(
            "OpenAI error: %s (prompt=%r options=%s)",
            reason,
            prompt[:200] + "...",
            {k: v for k, v in options.items() if k != "response_format"},
        )

    async def generate_estimation(self, project_data: Dict[str, Any], user_type: str) -> Dict[str, Any]:
        """Estimate a project for a ``freelance`` or an ``entreprise``.

        Results are cached by the fields that determine them; a cached result
        is returned with ``optimization.fromCache`` set.
        """
        if user_type not in prompts.USER_TYPES:
            raise ValueError(f"Unknown user type: {user_type}")

        key = prompts.cache_key(project_data, user_type)
        cached = self.cache.get(key)
        if cached is not None:
            logger.info("Estimation found in cache (key=%s)", key[:50])
            optimization = cached.get("optimization")
            if isinstance(optimization, dict):
                optimization["fromCache"] = True
            else:
                cached["optimization"] = {"fromCache": True}
            return cached

        complexity_score = prompts.calculate_complexity(project_data, user_type)
        model = prompts.select_model(complexity_score)
        logger.info("Model selected: model=%s complexityScore=%s userType=%s", model, complexity_score, user_type)

        prompt = prompts.build_prompt(project_data, user_type)
        max_tokens = 2000 if model == prompts.GPT_4 else 1500

        try:
            result = await self.call_openai(
                prompt, {"model": model, "temperature": 0.2, "max_tokens": max_tokens, "purpose": "estimation"}
            )
            result["optimization"] = {
                "model": model,
                "complexityScore": complexity_score,
                "fromCache": False,
                "tokensLimit": max_tokens,
            }
        except OpenAIServiceError as e:
            if model != prompts.GPT_4:
                raise
            logger.warning("Falling back to %s: %s", prompts.GPT_35_TURBO, e)
            result = await self.call_openai(
                prompt,
                {"model": prompts.GPT_35_TURBO, "temperature": 0.2, "max_tokens": 1500, "purpose": "estimation"},
            )
            result["optimization"] = {
                "model": prompts.GPT_35_TURBO,
                "complexityScore": complexity_score,
                "fromCache": False,
                "tokensLimit": 1500,
                "fallback": True,
            }

        self.cache.set(key, result)
        return result
