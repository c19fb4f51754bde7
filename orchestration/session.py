"""
Chat Session

The per-turn driver for one conversation.

FLOW:
Request → Composer → CompletionBackend → Parser → (Summarizer) → History → PromptResponse

TURN GUARANTEES:
1. One turn at a time per session (asyncio.Lock around the whole turn)
2. The prompt is composed from a single history snapshot
3. Usage and history are committed together, only after every step succeeds
4. A failed, timed-out or cancelled turn leaves usage and history untouched
5. The caller always gets the original, unsummarized answer
"""

import asyncio
import logging
import uuid
from typing import Iterable, Optional, Tuple, Union

from llm.base import CompletionBackend
from llm.errors import BackendError, MalformedCompletionError
from memory.history_store import HistoryStore
from memory.types import HistoryItem
from orchestration.state import TurnState
from prompting.composer import compose_prompt
from prompting.parser import parse_response
from prompting.summarizer import SummarizationError, Summarizer
from prompting.templates import DEFAULT_SUMMARY_INSTRUCTION
from schemas.options import PromptOptions
from schemas.request import PromptRequest, utc_now
from schemas.response import PromptResponse
from schemas.result import TurnErrorKind, TurnResult
from schemas.usage import TokenUsage


logger = logging.getLogger(__name__)


class ChatSession:
    """
    A single conversation with a completion backend.
    
    Owns its HistoryStore, TokenUsage accumulator, PromptOptions and
    system prompt. Nothing is persisted; state lives as long as the
    session object.
    """

    def __init__(
        self,
        backend: CompletionBackend,
        session_id: Optional[str] = None,
        options: Optional[PromptOptions] = None,
        system_prompt: Optional[str] = None,
        summary_instruction: str = DEFAULT_SUMMARY_INSTRUCTION,
        timeout: Optional[float] = None,
    ):
        """
        Initialize the session.
        
        Args:
            backend: Completion backend for primary and summarization calls
            session_id: Identifier used in logs (generated if omitted)
            options: Prompt options (defaults if omitted)
            system_prompt: Optional instructions prepended to every prompt
            summary_instruction: Template for summarization requests
            timeout: Seconds to wait on each backend call (None = no limit)
        """
        self.session_id = session_id or str(uuid.uuid4())
        self._backend = backend
        self._summarizer = Summarizer(backend, instruction=summary_instruction, timeout=timeout)
        self._timeout = timeout

        self._history = HistoryStore()
        self._usage = TokenUsage()
        self._options = PromptOptions()
        self._system_prompt: Optional[str] = None
        self._state = TurnState.IDLE
        self._lock = asyncio.Lock()

        if options is not None:
            self.set_prompt_options(options)
        if system_prompt is not None:
            self.set_system_prompt(system_prompt)

    # =====================================================
    # Configuration surface
    # =====================================================

    @property
    def prompt_options(self) -> PromptOptions:
        return self._options

    @property
    def system_prompt(self) -> Optional[str]:
        return self._system_prompt

    @property
    def state(self) -> TurnState:
        return self._state

    def set_prompt_options(self, options: PromptOptions) -> None:
        """Replace the options; takes effect from the next turn."""
        if options.use_rag:
            logger.warning(
                f"[{self.session_id}] use_rag is set but retrieval augmentation is not "
                "implemented; history renders as with the other modifiers"
            )
        self._options = options

    def set_system_prompt(self, instructions: str) -> None:
        self._system_prompt = instructions

    async def import_prompt_history(self, items: Iterable[HistoryItem]) -> int:
        """
        Append externally supplied items verbatim after existing history.
        
        Waits for any in-flight turn to finish first.
        
        Returns:
            Number of items imported
        """
        async with self._lock:
            count = self._history.extend(items)
        logger.info(f"[{self.session_id}] Imported {count} history items")
        return count

    # =====================================================
    # Read surface
    # =====================================================

    def get_token_usage(self) -> TokenUsage:
        """Point-in-time copy of the session's usage."""
        return self._usage.snapshot()

    def get_prompt_history(self) -> Tuple[HistoryItem, ...]:
        """Point-in-time, read-only view of history, oldest first."""
        return self._history.snapshot()

    # =====================================================
    # Turns
    # =====================================================

    async def submit_prompt(self, request: Union[PromptRequest, str]) -> TurnResult:
        """
        Run one turn.
        
        Args:
            request: PromptRequest, or a bare prompt string
            
        Returns:
            TurnResult with the response, or with the error that
            aborted the turn (session state unchanged in that case)
        """
        if isinstance(request, str):
            request = PromptRequest(prompt=request)

        async with self._lock:
            try:
                response = await self._run_turn(request)
                return TurnResult.success(response)
            except asyncio.TimeoutError:
                logger.warning(f"[{self.session_id}] Turn timed out after {self._timeout}s")
                return TurnResult.failure(TurnErrorKind.TIMEOUT, f"backend did not answer within {self._timeout}s")
            except SummarizationError as e:
                logger.warning(f"[{self.session_id}] Turn failed during summarization: {e}")
                return TurnResult.failure(TurnErrorKind.SUMMARIZATION_FAILURE, str(e))
            except MalformedCompletionError as e:
                logger.warning(f"[{self.session_id}] Turn failed on malformed completion: {e}")
                return TurnResult.failure(TurnErrorKind.MALFORMED_RESPONSE, str(e))
            except BackendError as e:
                logger.warning(f"[{self.session_id}] Turn failed at backend: {e}")
                return TurnResult.failure(TurnErrorKind.BACKEND_FAILURE, str(e))
            except Exception as e:
                logger.exception(f"[{self.session_id}] Turn failed unexpectedly")
                return TurnResult.failure(TurnErrorKind.INTERNAL_ERROR, f"{type(e).__name__}: {e}")
            finally:
                self._state = TurnState.IDLE

    async def send_prompt(self, prompt: str) -> Optional[PromptResponse]:
        """Run one turn; None if it failed."""
        result = await self.submit_prompt(prompt)
        return result.response

    async def _run_turn(self, request: PromptRequest) -> PromptResponse:
        options = self._options
        system_prompt = self._system_prompt

        # STEP 1: Compose from one snapshot
        self._state = TurnState.COMPOSING
        internal_prompt = compose_prompt(
            request.prompt,
            self._history.snapshot(),
            options,
            system_prompt,
        )

        # STEP 2: Completion
        self._state = TurnState.AWAITING_COMPLETION
        logger.info(f"[{self.session_id}] Sending prompt ({len(internal_prompt)} chars)")
        completion = await asyncio.wait_for(self._backend.complete(internal_prompt), timeout=self._timeout)

        # STEP 3: Usage (turn-local until commit)
        call_usage = TokenUsage()
        if completion.usage is not None:
            call_usage.add(
                completion.usage.input_tokens,
                completion.usage.output_tokens,
                completion.usage.total_tokens,
            )
        turn_usage = call_usage.snapshot()

        # STEP 4: Parse
        self._state = TurnState.PARSING
        parsed = parse_response(request.prompt, completion.text, options.reasoning_tag)

        # STEP 5: Stamp
        response = PromptResponse(
            prompt=parsed.prompt,
            reasoning=parsed.reasoning,
            response=parsed.response,
            request_timestamp_utc=request.request_timestamp_utc,
            response_timestamp_utc=utc_now(),
            token_usage=call_usage,
        )

        # STEP 6: Summarize (optional) and commit
        item = await self._history_item(parsed.prompt, parsed.response, options, turn_usage)

        self._state = TurnState.APPENDING
        self._history.append(item)
        self._usage.merge(turn_usage)

        logger.info(
            f"[{self.session_id}] Turn complete: reasoning={parsed.reasoning is not None} "
            f"tokens={turn_usage.total_tokens} history={len(self._history)}"
        )

        return response

    async def _history_item(
        self,
        prompt: str,
        response: str,
        options: PromptOptions,
        turn_usage: TokenUsage,
    ) -> HistoryItem:
        if not options.use_summarization:
            return HistoryItem(prompt=prompt, response=response)

        self._state = TurnState.SUMMARIZING
        max_words = options.summarize_max_word_count
        prompt = await self._summarizer.summarize(prompt, max_words, turn_usage, options.reasoning_tag)
        response = await self._summarizer.summarize(response, max_words, turn_usage, options.reasoning_tag)
        return HistoryItem(prompt=prompt, response=response)
