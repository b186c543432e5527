"""Runtime settings for hierflow.

Values can be overridden with ``HIERFLOW_*`` environment variables, resolved
when the dataclasses are instantiated.
"""

import os
from dataclasses import dataclass, field
from typing import Any, Dict


def _env_int(name: str, default: int) -> int:
    return int(os.environ.get(name, default))


def _env_float(name: str, default: float) -> float:
    return float(os.environ.get(name, default))


@dataclass
class LayoutConfig:
    """Grid placement used when importing structures that carry no positions."""

    columns: int = field(default_factory=lambda: _env_int("HIERFLOW_GRID_COLUMNS", 3))
    origin_x: float = field(default_factory=lambda: _env_float("HIERFLOW_GRID_ORIGIN_X", 100))
    origin_y: float = field(default_factory=lambda: _env_float("HIERFLOW_GRID_ORIGIN_Y", 100))
    x_step: float = field(default_factory=lambda: _env_float("HIERFLOW_GRID_X_STEP", 200))
    y_step: float = field(default_factory=lambda: _env_float("HIERFLOW_GRID_Y_STEP", 150))

    def __post_init__(self) -> None:
        if self.columns < 1:
            raise ValueError(f"Grid needs at least one column, got {self.columns}")

    def cell(self, index: int):
        """(x, y) of the ``index``-th grid cell, filled row by row."""
        row, col = divmod(index, self.columns)
        return self.origin_x + col * self.x_step, self.origin_y + row * self.y_step


@dataclass
class EdgeStyleConfig:
    """Standard directed-arrow styling attached to new edges."""

    stroke: str = field(default_factory=lambda: os.environ.get("HIERFLOW_EDGE_STROKE", "#0FA0CE"))
    stroke_width: int = field(default_factory=lambda: _env_int("HIERFLOW_EDGE_STROKE_WIDTH", 2))
    animated: bool = field(
        default_factory=lambda: os.environ.get("HIERFLOW_EDGE_ANIMATED", "true").lower() in ("1", "true", "yes")
    )
    marker: str = "arrowclosed"

    def to_metadata(self) -> Dict[str, Any]:
        return {
            "animated": self.animated,
            "style": {"stroke": self.stroke, "strokeWidth": self.stroke_width},
            "markerEnd": {"type": self.marker, "color": self.stroke},
        }


@dataclass
class Settings:
    layout: LayoutConfig = field(default_factory=LayoutConfig)
    edge_style: EdgeStyleConfig = field(default_factory=EdgeStyleConfig)


settings = Settings()
