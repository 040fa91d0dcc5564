"""
Request navigator
Adapter over the routing collaborator for a single request.

push() is fire-and-forget: it only records where to go. The request gate turns
the pending path into an HTTP redirect once the business logic has run.
"""

from typing import List, Optional


class RequestNavigator:

    def __init__(self, current_path: Optional[str] = None):
        self.current_path = current_path or ""
        self._pushed: List[str] = []

    def push(self, path: str) -> None:
        self._pushed.append(path)

    @property
    def pending_path(self) -> Optional[str]:
        """Most recent push, if any"""
        return self._pushed[-1] if self._pushed else None

    @property
    def push_count(self) -> int:
        return len(self._pushed)
