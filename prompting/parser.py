"""
Response Parser

Splits an optional <tag>...</tag> reasoning block out of raw model
output. Pure and deterministic.
"""

import re
from dataclasses import dataclass
from functools import lru_cache
from typing import Optional


@dataclass(frozen=True)
class ParsedCompletion:
    prompt: str
    reasoning: Optional[str]
    response: str


@lru_cache(maxsize=32)
def reasoning_pattern(tag: str) -> re.Pattern:
    """Non-greedy, newline-spanning pattern for one reasoning tag."""
    escaped = re.escape(tag)
    return re.compile(f"<{escaped}>(.*?)</{escaped}>", re.DOTALL)


def parse_response(prompt: str, raw_text: str, reasoning_tag: str = "think") -> ParsedCompletion:
    """
    Extract the first reasoning block from raw completion text.
    
    Args:
        prompt: The user prompt this completion answers
        raw_text: Raw model output
        reasoning_tag: Tag name delimiting the reasoning block
        
    Returns:
        ParsedCompletion. With a match, reasoning is the trimmed block
        content and response is the text with that block removed, trimmed.
        Without one, reasoning is None and response is raw_text untouched.
    """
    pattern = reasoning_pattern(reasoning_tag)
    match = pattern.search(raw_text)

    if match is None:
        return ParsedCompletion(prompt=prompt, reasoning=None, response=raw_text)

    reasoning = match.group(1).strip()
    response = (raw_text[:match.start()] + raw_text[match.end():]).strip()

    return ParsedCompletion(prompt=prompt, reasoning=reasoning, response=response)
