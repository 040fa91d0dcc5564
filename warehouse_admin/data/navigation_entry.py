from dataclasses import dataclass


@dataclass(frozen=True)
class NavigationEntry:
    """One sidebar destination"""
    title: str
    target_path: str
    icon: str = ""
