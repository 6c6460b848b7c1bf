"""Pydantic configuration models for layout geometry and paint styling.

``LayoutConfig`` has no field defaults: every request states its full
geometry. ``DEFAULT_LAYOUT`` is a ready-made complete config for callers
that do not care.
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

from pydantic import BaseModel, Field, model_validator

from compose_diagram.types import ShapeFamily, Tier

# --- Layout geometry ---


class LayoutConfig(BaseModel):
    """Grid geometry in abstract diagram units."""

    model_config = {"frozen": True}

    node_width: float = Field(gt=0)
    node_height: float = Field(gt=0)
    horizontal_spacing: float = Field(ge=0)
    vertical_spacing_within_row: float = Field(gt=0)
    vertical_spacing_between_tiers: float = Field(ge=0)
    canvas_width: float = Field(gt=0)
    top_margin: float = Field(ge=0)
    max_nodes_per_row: int = Field(ge=1)

    @model_validator(mode="after")
    def check_fit(self) -> LayoutConfig:
        if self.vertical_spacing_within_row < self.node_height:
            raise ValueError(
                "vertical_spacing_within_row must be at least node_height "
                f"({self.vertical_spacing_within_row} < {self.node_height})"
            )
        widest = self.row_width(self.max_nodes_per_row)
        if widest > self.canvas_width:
            raise ValueError(
                f"a full row of {self.max_nodes_per_row} nodes is {widest} wide, "
                f"which exceeds canvas_width {self.canvas_width}"
            )
        return self

    def row_width(self, count: int) -> float:
        """Total width of a row holding ``count`` nodes."""
        if count <= 0:
            return 0.0
        return count * self.node_width + (count - 1) * self.horizontal_spacing


DEFAULT_LAYOUT = LayoutConfig(
    node_width=200,
    node_height=100,
    horizontal_spacing=50,
    vertical_spacing_within_row=150,
    vertical_spacing_between_tiers=50,
    canvas_width=1920,
    top_margin=100,
    max_nodes_per_row=5,
)

# --- Paint style ---


class TierStyle(BaseModel):
    """How nodes of one tier are drawn."""

    model_config = {"frozen": True}

    shape: ShapeFamily
    fill_color: str
    line_color: str = "#000000"
    text_color: str = "#FFFFFF"


def _default_tier_styles() -> tuple[TierStyle, TierStyle, TierStyle]:
    # Indexed by tier ordinal.
    return (
        TierStyle(shape=ShapeFamily.ROUNDED, fill_color="#2E7D32"),
        TierStyle(shape=ShapeFamily.ROUNDED, fill_color="#0064C8"),
        TierStyle(shape=ShapeFamily.STORAGE, fill_color="#FFA500"),
    )


class StyleConfig(BaseModel):
    """Colors, shapes and text sizes used by the plan assembler."""

    model_config = {"frozen": True}

    background_color: str = "#FFFFFF"
    connector_color: str = "#808080"
    connector_thickness: float = Field(default=1.5, gt=0)
    shadow_color: str = "#B0B0B0"
    shadow_offset: tuple[float, float] = (6.0, 6.0)
    node_line_width: float = Field(default=2.0, ge=0)
    label_size: float = Field(default=14.0, gt=0)
    sublabel_size: float = Field(default=10.0, gt=0)
    placeholder_text: str = "No services to display"
    placeholder_color: str = "#000000"
    placeholder_width: float = Field(default=400.0, gt=0)
    placeholder_height: float = Field(default=50.0, gt=0)
    tier_styles: tuple[TierStyle, TierStyle, TierStyle] = Field(default_factory=_default_tier_styles)

    @model_validator(mode="before")
    @classmethod
    def merge_tier_styles(cls, data: Any) -> Any:
        # A mapping of tier -> style overrides only the tiers it mentions.
        if isinstance(data, dict) and isinstance(data.get("tier_styles"), Mapping):
            merged = list(_default_tier_styles())
            for key, value in data["tier_styles"].items():
                merged[Tier(key)] = value
            data = {**data, "tier_styles": tuple(merged)}
        return data

    def for_tier(self, tier: Tier) -> TierStyle:
        return self.tier_styles[tier]


DEFAULT_STYLE = StyleConfig()
