#!/usr/bin/env python3
"""
Category Colors for Component Mapper

Deterministic, first-seen-order colour assignment for category labels.
"""

import math
from typing import Dict

# 360 * (2 - phi)
GOLDEN_ANGLE = 180.0 * (3.0 - math.sqrt(5.0))
SATURATION = 70
LIGHTNESS = 50


class CategoryColorAssigner:
    """Assigns HSL colours to category labels.

    One instance covers one ingestion run; the cache lives on the instance
    and is never shared between runs.
    """

    def __init__(self):
        self._colors: Dict[str, str] = {}

    def color_for(self, category: str) -> str:
        """Return the colour for ``category``, assigning the next hue on first sight."""
        color = self._colors.get(category)
        if color is None:
            hue = (len(self._colors) * GOLDEN_ANGLE) % 360
            color = f"hsl({hue:g}, {SATURATION}%, {LIGHTNESS}%)"
            self._colors[category] = color
        return color

    def assigned(self) -> Dict[str, str]:
        """Copy of the label to colour map, in assignment order."""
        return dict(self._colors)

    def __len__(self) -> int:
        return len(self._colors)
