import rtoml
from pathlib import Path
from typing import Any, Dict, Optional, Tuple

from hexconv.core.hex_grid import GridGeometry
from hexconv.shared.errors import ConfigurationError

DEFAULT_CONFIG_NAME = "hexconv.toml"
MODES = ("colour", "template")

class ConverterConfig:
    """
    Settings for one conversion run.

    Layers, later ones winning:
    1. Built-in defaults (the classic Wesnoth export layout).
    2. A TOML file ('hexconv.toml' in the working directory, or --config).
    3. Command line flags (apply_overrides).
    """
    def __init__(self):
        # [io]
        self.input_path: Optional[Path] = None
        self.output_path = Path("map")
        self.data_path = Path("tiles.dat")
        self.data_explicit = False
        self.dump_dir: Optional[Path] = None

        # [grid]
        self.pitch: Tuple[int, int] = (32, 34)
        self.offset: Tuple[int, int] = (26, 23)
        self.tile_size: Optional[Tuple[int, int]] = None  # None -> same as pitch
        self.major_tile_start = False

        # [classifier]
        self.mode = "colour"
        self.blur_radius = 0
        self.threshold = 3

    @classmethod
    def load(cls, config_path: Optional[Path] = None) -> "ConverterConfig":
        """
        Builds a config from defaults plus an optional TOML file.
        An explicitly named file must exist; the implicit one is optional.
        """
        config = cls()
        if config_path is None:
            implicit = Path(DEFAULT_CONFIG_NAME)
            if not implicit.is_file():
                return config
            config_path = implicit
        elif not Path(config_path).is_file():
            raise ConfigurationError(f"Configuration file '{config_path}' not found.")

        try:
            with open(config_path, 'r', encoding='utf-8') as f:
                data = rtoml.load(f)
        except rtoml.TomlParsingError as e:
            raise ConfigurationError(f"Failed to parse {config_path}: {e}") from e

        print(f"[Config] Loaded {config_path}")
        config.apply_toml(data)
        return config

    def apply_toml(self, data: Dict[str, Any]):
        io = _table(data, "io")
        if "input" in io:
            self.input_path = Path(_str(io["input"], "io.input"))
        if "output" in io:
            self.output_path = Path(_str(io["output"], "io.output"))
        if "data" in io:
            self.data_path = Path(_str(io["data"], "io.data"))
            self.data_explicit = True
        if io.get("dump_dir"):
            self.dump_dir = Path(_str(io["dump_dir"], "io.dump_dir"))

        grid = _table(data, "grid")
        if "pitch" in grid:
            self.pitch = _int_pair(grid["pitch"], "grid.pitch")
        if "offset" in grid:
            self.offset = _int_pair(grid["offset"], "grid.offset")
        if "tile_size" in grid:
            self.tile_size = _int_pair(grid["tile_size"], "grid.tile_size")
        if "major_tile_start" in grid:
            self.major_tile_start = _bool(grid["major_tile_start"], "grid.major_tile_start")

        classifier = _table(data, "classifier")
        if "mode" in classifier:
            self.mode = _str(classifier["mode"], "classifier.mode")
        if "blur_radius" in classifier:
            self.blur_radius = _int(classifier["blur_radius"], "classifier.blur_radius")
        if "threshold" in classifier:
            self.threshold = _int(classifier["threshold"], "classifier.threshold")

        self.validate()

    def apply_overrides(self, **values: Any):
        """Applies CLI values; None means 'not given' and keeps the current setting."""
        for key, value in values.items():
            if value is None:
                continue
            if not hasattr(self, key):
                raise ConfigurationError(f"Unknown setting '{key}'")
            if key in ("input_path", "output_path", "data_path", "dump_dir"):
                value = Path(value)
            if key in ("pitch", "offset", "tile_size"):
                value = tuple(value)
            setattr(self, key, value)
            if key == "data_path":
                self.data_explicit = True
        self.validate()

    def validate(self):
        if self.mode not in MODES:
            raise ConfigurationError(f"Unknown mode '{self.mode}' (expected one of {', '.join(MODES)})")
        if self.blur_radius < 0:
            raise ConfigurationError(f"Blur radius must be non-negative, got {self.blur_radius}")
        if self.threshold <= 0:
            raise ConfigurationError(f"Threshold must be positive, got {self.threshold}")
        # GridGeometry checks pitch, offset and tile size
        self.geometry()

    def geometry(self) -> GridGeometry:
        tile_w, tile_h = self.tile_size if self.tile_size is not None else self.pitch
        return GridGeometry(
            tile_width=tile_w,
            tile_height=tile_h,
            pitch_x=self.pitch[0],
            pitch_y=self.pitch[1],
            offset_x=self.offset[0],
            offset_y=self.offset[1],
            major_tile_start=self.major_tile_start,
        )


# --- TOML value coercion ---

def _table(data: Dict[str, Any], name: str) -> Dict[str, Any]:
    value = data.get(name, {})
    if not isinstance(value, dict):
        raise ConfigurationError(f"[{name}] must be a table")
    return value

def _str(value: Any, name: str) -> str:
    if not isinstance(value, str):
        raise ConfigurationError(f"{name} must be a string, got {value!r}")
    return value

def _int(value: Any, name: str) -> int:
    # bool is an int subclass; 'true' is never a valid pixel count
    if isinstance(value, bool) or not isinstance(value, int):
        raise ConfigurationError(f"{name} must be an integer, got {value!r}")
    return value

def _bool(value: Any, name: str) -> bool:
    if not isinstance(value, bool):
        raise ConfigurationError(f"{name} must be true or false, got {value!r}")
    return value

def _int_pair(value: Any, name: str) -> Tuple[int, int]:
    if not isinstance(value, (list, tuple)) or len(value) != 2:
        raise ConfigurationError(f"{name} must be a pair of integers, got {value!r}")
    return _int(value[0], name), _int(value[1], name)
