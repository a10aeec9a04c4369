"""
Configuration management for TileRenderer package.

This module provides configuration options for tile rendering including
canvas size, DPI, output directory, background and label styling.
"""

import json
import yaml
from dataclasses import dataclass, asdict, field
from pathlib import Path


@dataclass
class Config:
    """Configuration for tile rendering.

    Attributes:
        canvas_width: Width of the rendered canvas in pixels.
        canvas_height: Height of the rendered canvas in pixels.
        default_dpi: Resolution used to size the figure and to convert pixel
            widths into Matplotlib points.
        background_color: Canvas background color (any Matplotlib color spec).
        output_dir: Directory for saving rendered tiles.
        label_font_size: Settlement label size in pixels.
        label_color: Settlement label color.
        label_font_weight: Settlement label weight ('normal', 'bold', ...).
    """

    canvas_width: int = 800
    canvas_height: int = 600
    default_dpi: int = 100
    background_color: str = "white"
    output_dir: Path = field(default_factory=lambda: Path("./output"))
    label_font_size: float = 12.0
    label_color: str = "black"
    label_font_weight: str = "bold"

    def __post_init__(self):
        """Convert string paths to Path objects if necessary."""
        if isinstance(self.output_dir, str):
            self.output_dir = Path(self.output_dir)

    @classmethod
    def load_from_file(cls, path: Path) -> "Config":
        """Load configuration from a YAML or JSON file.

        Args:
            path: Path to configuration file (.yaml, .yml, or .json).

        Returns:
            Config instance with loaded settings.

        Raises:
            ValueError: If file format is not supported.
            FileNotFoundError: If file does not exist.
        """
        path = Path(path)
        if not path.exists():
            raise FileNotFoundError(f"Configuration file not found: {path}")

        with open(path, 'r') as f:
            if path.suffix in ['.yaml', '.yml']:
                data = yaml.safe_load(f)
            elif path.suffix == '.json':
                data = json.load(f)
            else:
                raise ValueError(f"Unsupported file format: {path.suffix}. Use .yaml, .yml, or .json")

        data = data or {}
        if 'output_dir' in data:
            data['output_dir'] = Path(data['output_dir'])

        return cls(**data)

    def save_to_file(self, path: Path) -> None:
        """Save configuration to a YAML or JSON file.

        Args:
            path: Path where configuration should be saved.

        Raises:
            ValueError: If file format is not supported.
        """
        path = Path(path)
        path.parent.mkdir(parents=True, exist_ok=True)

        data = asdict(self)
        data['output_dir'] = str(data['output_dir'])

        with open(path, 'w') as f:
            if path.suffix in ['.yaml', '.yml']:
                yaml.dump(data, f, default_flow_style=False, sort_keys=False)
            elif path.suffix == '.json':
                json.dump(data, f, indent=2)
            else:
                raise ValueError(f"Unsupported file format: {path.suffix}. Use .yaml, .yml, or .json")

    def validate(self) -> bool:
        """Validate configuration parameters.

        Returns:
            True if configuration is valid.

        Raises:
            ValueError: If any configuration parameter is invalid.
        """
        if not isinstance(self.canvas_width, int) or self.canvas_width <= 0:
            raise ValueError("canvas_width must be a positive integer")

        if not isinstance(self.canvas_height, int) or self.canvas_height <= 0:
            raise ValueError("canvas_height must be a positive integer")

        if self.default_dpi <= 0:
            raise ValueError("default_dpi must be positive")

        if not isinstance(self.background_color, str) or not self.background_color:
            raise ValueError("background_color must be a non-empty string")

        if self.label_font_size <= 0:
            raise ValueError("label_font_size must be positive")

        if not isinstance(self.label_color, str) or not self.label_color:
            raise ValueError("label_color must be a non-empty string")

        if not isinstance(self.label_font_weight, str) or not self.label_font_weight:
            raise ValueError("label_font_weight must be a non-empty string")

        return True

    def ensure_directories(self) -> None:
        """Create the output directory if it doesn't exist."""
        self.output_dir.mkdir(parents=True, exist_ok=True)


def get_default_config() -> Config:
    """
    Get a Config instance with default settings.

    Returns:
        Config instance initialized with default values.
    """
    return Config()
