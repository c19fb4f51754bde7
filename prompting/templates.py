"""
Prompt Templates

Loads prompt text from prompts/chat.yaml.
"""

import os
from functools import lru_cache
from typing import Any, Dict

import yaml

from app.core.config import settings


DEFAULT_SUMMARY_INSTRUCTION = "Summarize this to {max_words} words: {text}"


@lru_cache(maxsize=4)
def load_prompts(prompts_dir: str | None = None) -> Dict[str, Any]:
    """Load chat.yaml from the prompts directory (empty dict if absent)."""
    path = os.path.join(prompts_dir or settings.prompts_dir, "chat.yaml")
    if not os.path.exists(path):
        return {}
    with open(path, "r") as f:
        return yaml.safe_load(f) or {}


def default_system_prompt() -> str | None:
    system = load_prompts().get("chat", {}).get("system")
    return system.strip() if system else None


def summary_instruction() -> str:
    return load_prompts().get("summarizer", {}).get("instruction", DEFAULT_SUMMARY_INSTRUCTION)
