"""
Window Locator
==============

Resolves the target window once at startup.

Lookup order:
    1. Exact title match for each candidate, in the order given
    2. First enumerated window whose title contains the keyword
       (case-insensitive)

The result is never re-resolved. If the window later closes, the
capture loop notices through the liveness check and shuts down.
"""

import logging
from typing import Sequence

from windowcast.errors import WindowNotFound
from windowcast.window.base import WindowHandle, WindowSystem


logger = logging.getLogger(__name__)


def locate_window(
    system: WindowSystem,
    candidate_titles: Sequence[str],
    keyword: str,
) -> WindowHandle:
    """
    Find the target window.

    Args:
        system: Window backend to query
        candidate_titles: Exact titles to try, in priority order
        keyword: Substring fallback, matched case-insensitively

    Returns:
        The first matching window

    Raises:
        WindowNotFound: If neither strategy finds a window
    """
    for title in candidate_titles:
        window = system.find_by_title(title)
        if window is not None:
            logger.info(f"Found window by exact title: {title!r}")
            return window

    needle = keyword.lower()
    if needle:
        logger.info(f"No exact title matched, scanning all windows for {keyword!r}")
        for window in system.list_windows():
            if window.title and needle in window.title.lower():
                logger.info(f"Found window by keyword: {window.title!r}")
                return window

    raise WindowNotFound(
        f"No window titled any of {list(candidate_titles)} "
        f"and none containing {keyword!r}"
    )
