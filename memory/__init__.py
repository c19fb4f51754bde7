# Memory Package
from memory.types import HistoryItem
from memory.history_store import HistoryStore

__all__ = ["HistoryItem", "HistoryStore"]
