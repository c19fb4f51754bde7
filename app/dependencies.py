"""
FastAPI Dependencies

All object creation happens here, not per request.

RULE: Routes only talk to ChatSession objects obtained from the SessionStore.
"""

from functools import lru_cache

from memory.session_store import SessionStore


@lru_cache(maxsize=1)
def get_session_store() -> SessionStore:
    """
    Create and cache the process-wide SessionStore.
    
    The completion backend is resolved from settings on first use.
    
    Returns:
        SessionStore: Registry of live chat sessions.
    """
    return SessionStore()
