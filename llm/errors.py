"""
LLM Errors

Exception types raised at the completion backend boundary.
SDK-specific exceptions never leave the llm package unwrapped.
"""


class ConfigurationError(ValueError):
    """Unsupported or incomplete backend configuration (fatal at setup)."""


class BackendError(RuntimeError):
    """A completion request failed."""


class MalformedCompletionError(BackendError):
    """The backend answered but returned no usable text."""
