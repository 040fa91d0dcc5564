"""
Sidebar active-state tracking

The active entry is the first entry, in list order, whose target path occurs
anywhere in the current path. No most-specific match: with
["/dashboard/imports", "/dashboard"] the path "/dashboard/imports/123"
activates the first entry, and "/dashboard/exports" activates the second.

Selection is two-step:
- select() marks the clicked entry right away and asks the navigator to go there
- sync() with the confirmed path re-derives the active entry and drops the mark

Pages are rendered on the server, so the selected mark only lives for the
request that makes the selection (/dashboard/go/<index>). That request
answers with a redirect; the page the user then sees is highlighted by sync()
from the confirmed path, never by the mark.
"""

from typing import Optional, Sequence

from warehouse_admin.data.navigation_entry import NavigationEntry


def find_active_entry(entries: Sequence[NavigationEntry], current_path: Optional[str]) -> Optional[NavigationEntry]:
    current_path = current_path or ""
    for entry in entries:
        if entry.target_path in current_path:
            return entry
    return None


class NavigationTracker:

    def __init__(self, entries: Sequence[NavigationEntry], navigator=None):
        self.entries = tuple(entries)
        self.navigator = navigator
        self._confirmed: Optional[NavigationEntry] = None
        self._selected: Optional[NavigationEntry] = None

    @property
    def active(self) -> Optional[NavigationEntry]:
        if self._selected is not None:
            return self._selected
        return self._confirmed

    def is_active(self, entry: NavigationEntry) -> bool:
        return self.active == entry

    def sync(self, current_path: Optional[str]) -> Optional[NavigationEntry]:
        """Confirmed route change: derive the active entry from the path"""
        self._selected = None
        self._confirmed = find_active_entry(self.entries, current_path)
        return self._confirmed

    def select(self, entry: NavigationEntry) -> None:
        """User picked an entry: highlight it now, then request the route change"""
        if entry not in self.entries:
            raise ValueError(f"Unknown navigation entry: {entry.title}")
        self._selected = entry
        if self.navigator is not None:
            self.navigator.push(entry.target_path)

    def select_index(self, index: int) -> NavigationEntry:
        """
        Select by position in the sidebar list.

        Raises:
            IndexError: if the index is outside the list
        """
        if index < 0 or index >= len(self.entries):
            raise IndexError(f"No navigation entry at position {index}")
        entry = self.entries[index]
        self.select(entry)
        return entry
