# Prompting Package
from prompting.composer import compose_prompt
from prompting.parser import ParsedCompletion, parse_response
from prompting.summarizer import Summarizer, SummarizationError, word_count

__all__ = [
    "compose_prompt",
    "ParsedCompletion",
    "parse_response",
    "Summarizer",
    "SummarizationError",
    "word_count",
]
