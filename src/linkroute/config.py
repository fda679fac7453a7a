"""
Link style configuration.

Style options arrive as a flat mapping (the shape a diagram document stores
them in) and are turned into an immutable LinkConfig once per link.
"""

from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Any, Dict, Mapping

# =============================================================================
# ROUTING CONFIGURATION - defaults applied when a style omits a key
# =============================================================================

# Link variant used when the style has no "type" key
DEFAULT_LINK_TYPE = "direct"

# Minimum stub length (in pixels) kept between a terminal and the first bend
DEFAULT_MIN_BUFFER = 10

# Widest channel (in pixels) the auto-router will route through
DEFAULT_MAX_CHANNEL_WIDTH = 100

# Detours attempted by one auto-route pass before giving up
MAX_ROUTE_ITERATIONS = 20

# =============================================================================

# Style mapping key -> LinkConfig field
STYLE_KEYS = {
    "type": "type",
    "showGauge": "show_gauge",
    "orthogonal": "orthogonal",
    "MIN_BUFFER": "min_buffer",
    "autoRoute": "auto_route",
    "maxChannelWidth": "max_channel_width",
}


@dataclass(frozen=True)
class LinkConfig:
    """
    Style configuration for a single link.

    Attributes:
        type: Route variant selector (direct, bezier, entityRelations,
              manhattan).
        show_gauge: Rendering hint, ignored by routing.
        orthogonal: Rendering hint carried for the renderer.
        min_buffer: Minimum stub length next to a terminal.
        auto_route: Whether Manhattan links avoid obstacle boxes.
        max_channel_width: Cap on the width of a routing channel.
        extras: Unrecognized style keys, passed through untouched.
    """

    type: str = DEFAULT_LINK_TYPE
    show_gauge: bool = False
    orthogonal: bool = False
    min_buffer: float = DEFAULT_MIN_BUFFER
    auto_route: bool = False
    max_channel_width: float = DEFAULT_MAX_CHANNEL_WIDTH
    extras: Mapping[str, Any] = field(default_factory=dict)

    def __post_init__(self):
        if self.min_buffer < 0:
            raise ValueError(f"MIN_BUFFER must be >= 0, got {self.min_buffer}")
        if self.max_channel_width <= 0:
            raise ValueError(
                f"maxChannelWidth must be > 0, got {self.max_channel_width}"
            )
        object.__setattr__(self, "extras", MappingProxyType(dict(self.extras)))

    @classmethod
    def from_mapping(cls, style: Mapping[str, Any] = None) -> "LinkConfig":
        """
        Build a config from a flat style mapping.

        Args:
            style: Mapping using the document key names (MIN_BUFFER,
                   autoRoute, ...). May be None.

        Returns:
            LinkConfig with defaults filled in for missing keys
        """
        kwargs: Dict[str, Any] = {}
        extras: Dict[str, Any] = {}
        for key, value in (style or {}).items():
            if key in STYLE_KEYS:
                kwargs[STYLE_KEYS[key]] = value
            else:
                extras[key] = value
        return cls(extras=extras, **kwargs)

    def to_mapping(self) -> Dict[str, Any]:
        """Return the flat style mapping, extras included."""
        style = dict(self.extras)
        for key, attr in STYLE_KEYS.items():
            style[key] = getattr(self, attr)
        return style
