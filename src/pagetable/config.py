"""Configuration dataclasses and YAML loading for table layout."""

from dataclasses import dataclass, field, fields
from pathlib import Path
from typing import Any, Dict, Mapping, Optional
import yaml

from .errors import ConfigurationError


@dataclass
class Margin:
    """Page margins in points."""
    top: float = 10.0
    bottom: float = 50.0
    left: float = 50.0
    right: float = 50.0


@dataclass
class CellPadding:
    """Inner padding of a cell in points."""
    top: float = 5.0
    bottom: float = 5.0
    left: float = 5.0
    right: float = 5.0

    @property
    def vertical(self) -> float:
        return self.top + self.bottom

    @property
    def horizontal(self) -> float:
        return self.left + self.right


# camelCase option names accepted by TableConfig.from_options
_OPTION_ALIASES = {
    "fontSize": "font_size",
    "startPosY": "start_pos_y",
    "headerHeight": "header_height",
    "borderWidth": "border_width",
    "cellPadding": "cell_padding",
}


@dataclass
class TableConfig:
    """Layout parameters for a single table."""

    margin: Margin = field(default_factory=Margin)
    font_size: float = 14.0
    # Distance below the top margin at which the table starts
    start_pos_y: float = 0.0
    header_height: float = 20.0
    border_width: float = 1.0
    cell_padding: CellPadding = field(default_factory=CellPadding)

    @classmethod
    def from_dict(cls, data: Optional[Mapping[str, Any]]) -> "TableConfig":
        """Build a config from a plain mapping (snake_case or camelCase keys)."""
        if data is None:
            return cls()
        if not isinstance(data, Mapping):
            raise ConfigurationError(
                f"Table options must be a mapping, got {type(data).__name__}"
            )

        kwargs: Dict[str, Any] = {}
        known = {f.name for f in fields(cls)}
        for key, value in data.items():
            name = _OPTION_ALIASES.get(key, key)
            if name not in known:
                raise ConfigurationError(f"Unknown table option: {key!r}")
            kwargs[name] = value

        # Nested records may be given partially; unset sides keep defaults
        for name, record in (("margin", Margin), ("cell_padding", CellPadding)):
            if name not in kwargs or isinstance(kwargs[name], record):
                continue
            value = kwargs[name]
            if not isinstance(value, Mapping):
                raise ConfigurationError(
                    f"{name} must be a mapping of sides, got {type(value).__name__}"
                )
            try:
                kwargs[name] = record(**value)
            except TypeError as e:
                raise ConfigurationError(f"Invalid {name}: {e}") from e

        return cls(**kwargs)

    from_options = from_dict

    @classmethod
    def from_yaml(cls, path: Path) -> "TableConfig":
        """Load configuration from a YAML file."""
        with open(path, "r") as f:
            data = yaml.safe_load(f)
        return cls.from_dict(data)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "margin": {
                "top": self.margin.top,
                "bottom": self.margin.bottom,
                "left": self.margin.left,
                "right": self.margin.right,
            },
            "font_size": self.font_size,
            "start_pos_y": self.start_pos_y,
            "header_height": self.header_height,
            "border_width": self.border_width,
            "cell_padding": {
                "top": self.cell_padding.top,
                "bottom": self.cell_padding.bottom,
                "left": self.cell_padding.left,
                "right": self.cell_padding.right,
            },
        }

    def to_yaml(self, path: Path) -> None:
        """Save configuration to a YAML file."""
        with open(path, "w") as f:
            yaml.dump(self.to_dict(), f, default_flow_style=False, sort_keys=False)

    def usable_width(self, page_width: float) -> float:
        """Page width minus left and right margins."""
        return page_width - self.margin.left - self.margin.right

    def validate(self, page_width: Optional[float] = None) -> None:
        """Raise ConfigurationError if the config cannot produce usable geometry."""
        for side in ("top", "bottom", "left", "right"):
            if getattr(self.margin, side) < 0:
                raise ConfigurationError(f"margin.{side} must be non-negative")
            if getattr(self.cell_padding, side) < 0:
                raise ConfigurationError(f"cell_padding.{side} must be non-negative")
        if self.font_size <= 0:
            raise ConfigurationError("font_size must be positive")
        if self.header_height <= 0:
            raise ConfigurationError("header_height must be positive")
        if self.border_width < 0:
            raise ConfigurationError("border_width must be non-negative")
        if page_width is not None and self.usable_width(page_width) <= 0:
            raise ConfigurationError(
                f"usable width {self.usable_width(page_width):.2f} is not positive "
                f"(page width {page_width:.2f}, margins "
                f"{self.margin.left:.2f} + {self.margin.right:.2f})"
            )


def load_config(path: Optional[Path] = None) -> TableConfig:
    """Load config from path or return default config."""
    if path is None:
        return TableConfig()
    return TableConfig.from_yaml(path)
