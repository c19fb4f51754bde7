"""
Session Store

In-memory registry of live chat sessions.

DESIGN RULES:
- No long-term persistence
- No cross-session sharing of history or usage
- Ending a session discards its memory
- Sessions expire after inactivity
"""

from typing import Callable, Dict, Optional
from datetime import datetime, timedelta
from threading import Lock

from app.core.config import Settings, settings as default_settings
from llm.base import CompletionBackend
from llm.factory import create_backend
from orchestration.session import ChatSession
from prompting.templates import default_system_prompt, summary_instruction
from schemas.options import PromptOptions


def default_prompt_options(cfg: Settings) -> PromptOptions:
    """PromptOptions built from the GENAI_CHAT_* defaults."""
    return PromptOptions(
        reasoning_tag=cfg.reasoning_tag,
        summarize_max_word_count=cfg.summarize_max_word_count,
        truncation_max_previous_prompts=cfg.truncation_max_previous_prompts,
        use_memory=cfg.use_memory,
        use_truncation=cfg.use_truncation,
        use_summarization=cfg.use_summarization,
        use_rag=cfg.use_rag,
    )


class SessionStore:
    """
    In-memory session registry.
    
    Maps session_id to ChatSession. NOT persistent - data lives
    only in process memory. All sessions share one backend.
    
    Thread-safe for concurrent access to the registry; each
    ChatSession serializes its own turns.
    """
    
    def __init__(
        self,
        backend_factory: Optional[Callable[[], CompletionBackend]] = None,
        cfg: Optional[Settings] = None,
    ):
        """
        Initialize session store.
        
        Args:
            backend_factory: Builds the completion backend (called once, lazily;
                defaults to create_backend over cfg)
            cfg: Settings supplying session defaults
        """
        self._cfg = cfg or default_settings
        self._backend_factory = backend_factory or (lambda: create_backend(self._cfg))
        self._backend: Optional[CompletionBackend] = None
        self._sessions: Dict[str, ChatSession] = {}
        self._last_access: Dict[str, datetime] = {}
        self._timeout = timedelta(minutes=self._cfg.session_timeout_minutes)
        self._lock = Lock()
    
    def get_session(self, session_id: str) -> ChatSession:
        """
        Get or create a chat session.
        
        New sessions start with the default system prompt and
        prompt options from settings.
        
        Raises:
            ConfigurationError: if the configured backend is unsupported
        """
        with self._lock:
            self._cleanup_expired()
            
            if session_id not in self._sessions:
                self._sessions[session_id] = ChatSession(
                    backend=self._get_backend(),
                    session_id=session_id,
                    options=default_prompt_options(self._cfg),
                    system_prompt=default_system_prompt(),
                    summary_instruction=summary_instruction(),
                    timeout=self._cfg.request_timeout_seconds,
                )
            
            self._last_access[session_id] = datetime.now()
            return self._sessions[session_id]
    
    def end_session(self, session_id: str) -> bool:
        """
        Discard a session and its memory.
        
        Returns:
            True if the session existed
        """
        with self._lock:
            self._last_access.pop(session_id, None)
            return self._sessions.pop(session_id, None) is not None
    
    def _get_backend(self) -> CompletionBackend:
        if self._backend is None:
            self._backend = self._backend_factory()
        return self._backend
    
    def _cleanup_expired(self) -> None:
        """Remove expired sessions (internal)."""
        cutoff = datetime.now() - self._timeout
        expired = [
            sid for sid, last in self._last_access.items()
            if last < cutoff
        ]
        for sid in expired:
            del self._sessions[sid]
            del self._last_access[sid]
    
    def session_count(self) -> int:
        """Get count of active sessions."""
        with self._lock:
            self._cleanup_expired()
            return len(self._sessions)
