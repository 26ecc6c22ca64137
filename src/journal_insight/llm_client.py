"""
LLM Client for journal analysis.

Wraps the OpenAI chat completions API:
- Journal entry analysis (JSON mode)
- Reframe practice scenario generation (JSON mode)
- Translation of SDK/transport failures into the engine's error types

Every failure is raised as an AnalysisServiceError subclass; the
orchestrator decides what to do with it.
"""

import json
import logging
import time
from typing import Any

import httpx
import openai
import tiktoken
from openai import AsyncOpenAI

from .config import AnalysisConfig
from .errors import AnalysisServiceError, MalformedResponseError, QuotaExceededError
from .models import AnalysisResult, PracticeSession

logger = logging.getLogger(__name__)

# Rough chars-per-token ratio used before paying for a real encode
CHARS_PER_TOKEN_ESTIMATE = 4
FALLBACK_ENCODING = "o200k_base"
TRUNCATION_MARKER = "\n[...]"

ANALYSIS_PROMPT = """Please analyze the following journal entry in the context of cognitive behavioral therapy.
The entry title is: "{title}"

Journal content:
"{content}"

Provide the following in JSON format:
1. suggestedTags: Extract 3-8 most relevant tags that would help categorize this journal entry
2. analysis: A brief (2-3 sentences) summary of the main themes and emotional content
3. emotions: Up to 5 emotions expressed in the entry
4. topics: Up to 5 main topics or themes discussed
5. cognitiveDistortions: Any cognitive distortions present (e.g. "Overgeneralization"), or an empty list
6. sentiment: Score the overall emotional tone with percentages for positive, negative, and neutral (totaling 100)

Your response should be a valid JSON object with these fields."""

SCENARIO_PROMPT = """Create a cognitive reframing practice session for someone working on this automatic thought:
"{thought}"

Cognitive distortions identified: {distortions}
Emotion category: {emotion}
{instructions}
Return a JSON object with:
- scenarios: exactly 3 items, each with
  - scenario: a short realistic situation related to the thought
  - options: exactly 4 possible reframes, each {{"text", "isCorrect", "explanation"}}, exactly one with isCorrect true
  - cognitiveDistortion: the distortion the scenario practices
  - emotionCategory: the emotion involved
- thoughtContent: the original thought
- generalFeedback: one or two encouraging sentences about reframing this thought

Your response should be a valid JSON object with these fields."""


def is_quota_error(error: BaseException) -> bool:
    """True for rate limiting or exhausted quota, however the SDK reports it."""
    if isinstance(error, openai.RateLimitError):
        return True
    if getattr(error, "status_code", None) == 429:
        return True
    if getattr(error, "code", None) == "insufficient_quota":
        return True
    body = getattr(error, "body", None)
    if isinstance(body, dict):
        details = body.get("error", body)
        if isinstance(details, dict) and "insufficient_quota" in (details.get("type"), details.get("code")):
            return True
    return "quota" in str(error).lower()


def translate_error(error: BaseException) -> AnalysisServiceError:
    if is_quota_error(error):
        return QuotaExceededError(f"Quota exceeded: {error}")
    return AnalysisServiceError(f"{type(error).__name__}: {error}")


def parse_json_content(content: str | None) -> Any:
    if not content or not content.strip():
        raise MalformedResponseError("Empty response from analysis service")
    try:
        return json.loads(content)
    except json.JSONDecodeError as e:
        raise MalformedResponseError(f"Failed to parse response JSON: {e}") from e


class LLMClient:
    """Async OpenAI client with pooled connections for journal analysis calls."""

    def __init__(self, config: AnalysisConfig, http_client: httpx.AsyncClient | None = None):
        self.config = config

        # Create async HTTP client with connection pooling
        self._http_client = http_client or httpx.AsyncClient(
            timeout=httpx.Timeout(config.request_timeout_seconds),
            limits=httpx.Limits(max_connections=20, max_keepalive_connections=10),
        )

        self.client = AsyncOpenAI(
            api_key=config.api_key,
            base_url=config.api_base_url,
            http_client=self._http_client,
        )

        self._encoder: tiktoken.Encoding | None = None
        self._api_call_count = 0

    async def aclose(self) -> None:
        """Close the HTTP client and cleanup resources."""
        await self._http_client.aclose()

    @property
    def encoder(self) -> tiktoken.Encoding:
        """Lazy-load tiktoken encoder."""
        if self._encoder is None:
            try:
                self._encoder = tiktoken.encoding_for_model(self.config.model)
            except KeyError:
                self._encoder = tiktoken.get_encoding(FALLBACK_ENCODING)
        return self._encoder

    def truncate_to_budget(self, text: str) -> str:
        """Cut text to the configured token budget; short text never touches the encoder."""
        budget = self.config.max_input_tokens
        if len(text) // CHARS_PER_TOKEN_ESTIMATE <= budget:
            return text

        tokens = self.encoder.encode(text)
        if len(tokens) <= budget:
            return text

        logger.info(f"[LLM] Truncating journal content from {len(tokens)} to {budget} tokens")
        return self.encoder.decode(tokens[:budget]) + TRUNCATION_MARKER

    async def _complete_json(self, prompt: str) -> Any:
        self._api_call_count += 1
        start = time.perf_counter()
        try:
            response = await self.client.chat.completions.create(
                model=self.config.model,
                messages=[{"role": "user", "content": prompt}],
                response_format={"type": "json_object"},
                temperature=self.config.temperature,
            )
        except (openai.APIError, httpx.HTTPError) as e:
            error = translate_error(e)
            logger.warning(f"[LLM] Request failed: {error}")
            raise error from e

        elapsed = time.perf_counter() - start
        logger.debug(f"[LLM] Completion received in {elapsed:.2f}s")

        if not response.choices:
            raise MalformedResponseError("Response contained no choices")
        return parse_json_content(response.choices[0].message.content)

    async def analyze_journal_entry(self, title: str, content: str) -> AnalysisResult:
        """
        Analyze a journal entry with the external model.

        Raises:
            QuotaExceededError: on rate limiting or exhausted quota
            MalformedResponseError: if the reply is not the expected JSON shape
            AnalysisServiceError: on any other API or transport failure
        """
        prompt = ANALYSIS_PROMPT.format(title=title, content=self.truncate_to_budget(content))
        data = await self._complete_json(prompt)
        return AnalysisResult.from_dict(data)

    async def generate_practice_scenarios(
        self,
        thought: str,
        distortions: list[str],
        emotion: str,
        custom_instructions: str | None = None,
    ) -> PracticeSession:
        """Generate a 3-scenario reframe practice session for an automatic thought."""
        prompt = SCENARIO_PROMPT.format(
            thought=self.truncate_to_budget(thought),
            distortions=", ".join(distortions) or "unknown",
            emotion=emotion,
            instructions=f"\n{custom_instructions}\n" if custom_instructions else "",
        )
        data = await self._complete_json(prompt)
        return PracticeSession.from_dict(data)

    def get_stats(self) -> dict[str, Any]:
        return {"api_calls": self._api_call_count, "model": self.config.model}


def create_llm_client(config: AnalysisConfig) -> LLMClient | None:
    """Build a client when an API key is configured, else None (fallback-only mode)."""
    if not config.external_enabled:
        logger.info("[LLM] No API key configured; external analysis disabled")
        return None
    return LLMClient(config)
