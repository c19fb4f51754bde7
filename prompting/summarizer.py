"""
Summarizer

Condenses over-length text through a secondary completion request,
then hard-truncates the result to the word budget. The model's own
adherence to the requested length is not relied on.

DESIGN RULES:
- Text within budget is returned unchanged, no backend call
- Usage of the secondary call is added to the caller's accumulator
- Backend failures propagate as SummarizationError
"""

import asyncio
import logging
from typing import Optional

from llm.base import CompletionBackend
from llm.errors import BackendError
from prompting.parser import parse_response
from prompting.templates import DEFAULT_SUMMARY_INSTRUCTION
from schemas.usage import TokenUsage


logger = logging.getLogger(__name__)


class SummarizationError(BackendError):
    """The secondary summarization request failed."""


def word_count(text: str) -> int:
    return len(text.split())


def truncate_words(text: str, max_words: int) -> str:
    """First max_words whitespace-delimited words, joined by single spaces."""
    return " ".join(text.split()[:max_words])


class Summarizer:
    """
    Shrinks prompt/response text before it enters history.
    """

    def __init__(
        self,
        backend: CompletionBackend,
        instruction: str = DEFAULT_SUMMARY_INSTRUCTION,
        timeout: Optional[float] = None,
    ):
        """
        Args:
            backend: Completion backend used for the secondary request
            instruction: Template with {max_words} and {text} placeholders
            timeout: Seconds to wait for the backend (None = no limit)
        """
        self._backend = backend
        self._instruction = instruction
        self._timeout = timeout

    async def summarize(
        self,
        text: str,
        max_word_count: int,
        usage: TokenUsage,
        reasoning_tag: str = "think",
    ) -> str:
        """
        Summarize text to at most max_word_count words if it exceeds them.
        
        Args:
            text: Text to condense
            max_word_count: Word budget
            usage: Accumulator that receives the secondary call's usage
            reasoning_tag: Tag whose block is discarded from the summary
            
        Returns:
            The original text, or a summary of at most max_word_count words
        """
        if word_count(text) <= max_word_count:
            return text

        request = self._instruction.format(max_words=max_word_count, text=text)

        try:
            completion = await asyncio.wait_for(self._backend.complete(request), timeout=self._timeout)
        except (BackendError, asyncio.TimeoutError) as exc:
            raise SummarizationError(f"summarization request failed: {exc}") from exc

        if completion.usage is not None:
            usage.add(
                completion.usage.input_tokens,
                completion.usage.output_tokens,
                completion.usage.total_tokens,
            )

        parsed = parse_response(text, completion.text, reasoning_tag)
        summary = truncate_words(parsed.response, max_word_count)

        logger.debug(f"Summarized {word_count(text)} words to {word_count(summary)}")

        return summary
