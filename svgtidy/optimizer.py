"""Main orchestrator that ties parsing, the rewrite pipeline and serialization together."""
from pathlib import Path
from typing import List, Optional

import yaml

from .document.node import Node
from .errors import ConfigError, WriteError
from .optimization.pipeline import Pipeline
from .output.serializer import to_string, write
from .output.svg_writer import EmitterConfig
from .parsing.svg_parser import parse_svg
from .parsing.tokenizer import Source
from .utils.logger import get_logger, set_level

logger = get_logger(__name__)

DEFAULT_CONFIG_PATH = Path(__file__).parent / "config" / "defaults.yaml"


class SVGOptimizer:
    """
    Complete optimization run.

    Pipeline:
      1. Parse the markup into a forest
      2. Run the enabled rewrite passes in registry order
      3. Serialize the resulting forest
    """

    def __init__(self, config: dict = None, config_path: str = None, preset: str = None):
        """
        Initialize with config dict, YAML path, or preset name.

        Args:
            config: Direct config dictionary, merged last.
            config_path: Path to YAML config file.
            preset: Preset name ("safe", "aggressive", "ids").
        """
        self.config = self._load_config(config, config_path, preset)

        level = (self.config.get("logging") or {}).get("level")
        if level:
            set_level(level)

        self.pipeline = Pipeline(self.config)
        self.emitter_config = EmitterConfig.from_dict(self.config.get("output"))

    def _load_config(self, config, config_path, preset) -> dict:
        """Load and merge configuration."""
        base_config = self._read_yaml(DEFAULT_CONFIG_PATH) if DEFAULT_CONFIG_PATH.exists() else {}
        presets = base_config.pop("presets", {}) or {}

        if preset:
            if preset not in presets:
                raise ConfigError(f"Unknown preset: {preset} (choose from {', '.join(sorted(presets))})")
            base_config = self._deep_merge(base_config, presets[preset] or {})

        if config_path:
            base_config = self._deep_merge(base_config, self._read_yaml(config_path))

        if config:
            base_config = self._deep_merge(base_config, config)

        return base_config

    @staticmethod
    def _read_yaml(path) -> dict:
        try:
            with open(path, encoding="utf-8") as f:
                data = yaml.safe_load(f)
        except OSError as e:
            raise ConfigError(f"Cannot read config file {path}: {e}") from e
        except yaml.YAMLError as e:
            raise ConfigError(f"Invalid YAML in {path}: {e}") from e

        if data is None:
            return {}
        if not isinstance(data, dict):
            raise ConfigError(f"Config file {path} must contain a mapping, got {type(data).__name__}")
        return data

    @staticmethod
    def _deep_merge(base: dict, override: dict) -> dict:
        """Deep merge two dicts. Override takes precedence."""
        result = base.copy()
        for key, value in override.items():
            if key in result and isinstance(result[key], dict) and isinstance(value, dict):
                result[key] = SVGOptimizer._deep_merge(result[key], value)
            else:
                result[key] = value
        return result

    def _process(self, source: Source) -> List[Node]:
        logger.info("Parsing...")
        nodes = parse_svg(source)

        logger.info(f"Running {len(self.pipeline.enabled_passes)} passes...")
        return self.pipeline.run(nodes)

    def optimize(self, source: Source) -> str:
        """
        Parse, rewrite and serialize one document.

        Args:
            source: Markup as str, bytes or a readable file object.

        Returns:
            The optimized markup.
        """
        nodes = self._process(source)

        logger.info("Serializing...")
        return to_string(nodes, self.emitter_config)

    def optimize_file(self, input_path: str, output_path: Optional[str] = None) -> Optional[str]:
        """
        Optimize a file on disk.

        Args:
            input_path: SVG file to read.
            output_path: Where to stream the result. If None, the markup is returned instead.

        Returns:
            The optimized markup when no output path is given, else None.
        """
        logger.info(f"Starting optimization: {input_path}")
        with open(input_path, "rb") as f:
            nodes = self._process(f)

        if not output_path:
            logger.info("Serializing...")
            return to_string(nodes, self.emitter_config)

        try:
            f = open(output_path, "w", encoding="utf-8", newline="")
        except OSError as e:
            raise WriteError(e) from e
        with f:
            logger.info("Serializing...")
            write(nodes, f, self.emitter_config)
        logger.info(f"Saved to: {output_path}")
        return None
