"""
Prompt Composer

Builds the single text blob sent to the completion backend:

    [Instructions] \n<system prompt>\n      (if a system prompt is set)
    [History] \n                          (if memory renders any items)
    User: <prompt>\nAssistant: <response>\n  ... per item, oldest first
    User: <new prompt>

Pure function of its inputs; no backend calls.
"""

from typing import Optional, Sequence

from memory.types import HistoryItem, USER_PREFIX
from schemas.options import PromptOptions


INSTRUCTIONS_HEADER = "[Instructions] \n"
HISTORY_HEADER = "[History] \n"


def _render_items(items: Sequence[HistoryItem]) -> str:
    if not items:
        return ""
    return HISTORY_HEADER + "".join(item.to_prompt_format() for item in items)


def render_history(history: Sequence[HistoryItem]) -> str:
    """All history, in order. Empty history renders as ""."""
    return _render_items(history)


def render_history_with_options(history: Sequence[HistoryItem], options: PromptOptions) -> str:
    """
    History shaped by the active modifiers.
    
    Truncation keeps the last N items in chronological order.
    Summarization is applied when items are stored, not here.
    use_rag has no rendering behaviour of its own.
    """
    if options.use_truncation:
        count = options.truncation_max_previous_prompts
        window = tuple(history[-count:]) if count > 0 else ()
    else:
        window = tuple(history)
    return _render_items(window)


def compose_prompt(
    prompt: str,
    history: Sequence[HistoryItem],
    options: PromptOptions,
    system_prompt: Optional[str] = None,
) -> str:
    """
    Compose the internal prompt for one turn.
    
    Args:
        prompt: The new user prompt
        history: Conversation so far, oldest first
        options: Active prompt options
        system_prompt: Optional instructions block
        
    Returns:
        Text to send to the completion backend
    """
    parts = []

    if system_prompt is not None:
        parts.append(f"{INSTRUCTIONS_HEADER}{system_prompt}\n")

    if options.use_memory:
        if options.uses_plain_history:
            parts.append(render_history(history))
        else:
            parts.append(render_history_with_options(history, options))

    parts.append(f"{USER_PREFIX}{prompt}")

    return "".join(parts)
