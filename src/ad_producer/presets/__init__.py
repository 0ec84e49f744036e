"""Visual style presets for ad production."""

from ad_producer.presets.styles import (
    STYLES,
    VisualStyle,
    get_style,
    get_style_names,
    style_for_brief,
)

__all__ = [
    "STYLES",
    "VisualStyle",
    "get_style",
    "get_style_names",
    "style_for_brief",
]
