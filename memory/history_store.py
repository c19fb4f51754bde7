"""
History Store

Ordered, append-only conversation memory for one chat session.

DESIGN RULES:
- Append only, insertion order is conversation order
- No deletion API (truncation is a read-time view)
- Readers get tuples, never the backing list
"""

from typing import Iterable, List, Tuple

from memory.types import HistoryItem


class HistoryStore:
    """
    Chronological (oldest first) sequence of HistoryItem.
    
    Owned by exactly one ChatSession. Not synchronized; the
    session serializes access around whole turns.
    """

    def __init__(self, items: Iterable[HistoryItem] = ()):
        self._items: List[HistoryItem] = list(items)

    def append(self, item: HistoryItem) -> None:
        self._items.append(item)

    def extend(self, items: Iterable[HistoryItem]) -> int:
        """
        Append items verbatim after existing ones.
        
        Returns:
            Number of items appended
        """
        new_items = list(items)
        self._items.extend(new_items)
        return len(new_items)

    def snapshot(self) -> Tuple[HistoryItem, ...]:
        """Point-in-time, read-only view."""
        return tuple(self._items)

    def __len__(self) -> int:
        return len(self._items)

    def __iter__(self):
        return iter(tuple(self._items))
