"""
Device tier classification

Viewport widths are bucketed with half-open, upper-exclusive bands:

    width < 640          mobile
    640 <= width < 768   mobile (large phones share the mobile tier)
    768 <= width < 1024  tablet
    1024 <= width < 1280 laptop
    width >= 1280        desktop

Before any measurement the tier is desktop so the layout is always defined.
"""

from contextlib import contextmanager
from enum import Enum
from typing import Callable, List, Optional

BREAKPOINTS = {
    "mobile": 640,
    "tablet": 768,
    "laptop": 1024,
    "desktop": 1280,
}

WIDTH_HEADERS = ("Sec-CH-Viewport-Width", "Viewport-Width")
WIDTH_COOKIE = "viewport_width"


class DeviceTier(str, Enum):
    MOBILE = "mobile"
    TABLET = "tablet"
    LAPTOP = "laptop"
    DESKTOP = "desktop"


def classify_width(width: Optional[float]) -> DeviceTier:
    if width is None:
        return DeviceTier.DESKTOP
    if width < BREAKPOINTS["mobile"]:
        return DeviceTier.MOBILE
    if width < BREAKPOINTS["tablet"]:
        return DeviceTier.MOBILE
    if width < BREAKPOINTS["laptop"]:
        return DeviceTier.TABLET
    if width < BREAKPOINTS["desktop"]:
        return DeviceTier.LAPTOP
    return DeviceTier.DESKTOP


def is_below(width: Optional[float], breakpoint: str) -> bool:
    """True when the width is under the named breakpoint (KeyError for unknown names)"""
    threshold = BREAKPOINTS[breakpoint]
    if width is None:
        return False
    return width < threshold


def is_mobile(width: Optional[float]) -> bool:
    """Binary classifier kept for older layout code"""
    return is_below(width, "tablet")


def sidebar_width(mobile: bool) -> str:
    return "calc(var(--spacing) * 60)" if mobile else "calc(var(--spacing) * 72)"


def _parse_width(raw) -> Optional[float]:
    if raw is None:
        return None
    try:
        width = float(str(raw).strip())
    except ValueError:
        return None
    if width != width or width <= 0 or width == float("inf"):
        return None
    return width


def width_from_request(request) -> Optional[float]:
    """Viewport width reported by the browser: client hint headers first, then the cookie"""
    for header in WIDTH_HEADERS:
        width = _parse_width(request.headers.get(header))
        if width is not None:
            return width
    return _parse_width(request.cookies.get(WIDTH_COOKIE))


TierListener = Callable[[DeviceTier], None]


class ViewportObserver:
    """
    Holds the current tier and notifies listeners when a measurement moves it
    into another tier.
    """

    def __init__(self):
        self.width: Optional[float] = None
        self.tier = DeviceTier.DESKTOP
        self._listeners: List[TierListener] = []

    @property
    def is_mobile(self) -> bool:
        return is_mobile(self.width)

    def measure(self, width: Optional[float]) -> DeviceTier:
        self.width = width
        tier = classify_width(width)
        if tier != self.tier:
            self.tier = tier
            for listener in list(self._listeners):
                listener(tier)
        return tier

    def subscribe(self, listener: TierListener) -> Callable[[], None]:
        self._listeners.append(listener)

        def unsubscribe():
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    @contextmanager
    def observe(self, listener: TierListener):
        """Subscription scoped to the owning view"""
        unsubscribe = self.subscribe(listener)
        try:
            yield self
        finally:
            unsubscribe()
