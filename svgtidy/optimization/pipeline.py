"""Ordered pass registry and the engine that runs the enabled passes."""
from dataclasses import dataclass, field
from typing import Dict, Iterable, List, Optional, Type

from ..document.node import Node
from ..errors import ConfigError
from ..utils.logger import get_logger
from .base import OptimizationPass
from .convert_paths_to_uses import ConvertPathsToUses
from .extract_common_attributes import ExtractCommonAttributes
from .merge_consecutive_paths import MergeConsecutivePaths
from .remove_comments import RemoveComments
from .remove_unused_defs import RemoveUnusedDefs
from .remove_useless_groups import RemoveUselessGroups
from .remove_useless_ids import RemoveUselessIds
from .shorten_ids import ShortenIds

logger = get_logger(__name__)

# Execution order
PASSES: List[Type[OptimizationPass]] = [
    RemoveComments,
    RemoveUselessGroups,
    ExtractCommonAttributes,
    MergeConsecutivePaths,
    RemoveUnusedDefs,
    ConvertPathsToUses,
    RemoveUselessIds,
    ShortenIds,
]


@dataclass
class PipelineConfig:
    """
    Which passes run.

    Each pass has a toggle that is True, False or unset (None). With
    `disable_by_default` off every pass runs unless switched off; with it on
    only passes switched on run.
    """

    passes: Dict[str, Optional[bool]] = field(default_factory=dict)
    disable_by_default: bool = False

    @classmethod
    def from_dict(cls, config: Optional[dict], known_names: Iterable[str]) -> "PipelineConfig":
        if config is None:
            config = {}
        if not isinstance(config, dict):
            raise ConfigError(f"Pipeline configuration must be a mapping, got {type(config).__name__}")

        disable_by_default = config.get("disable_by_default", False)
        if disable_by_default is None:
            disable_by_default = False
        if not isinstance(disable_by_default, bool):
            raise ConfigError(f"disable_by_default must be true or false, got {disable_by_default!r}")

        toggles = config.get("passes") or {}
        if not isinstance(toggles, dict):
            raise ConfigError(f"Pass toggles must be a mapping, got {type(toggles).__name__}")

        known = set(known_names)
        passes = {}
        for name, value in toggles.items():
            if name not in known:
                raise ConfigError(f"Unknown pass: {name}")
            if value is not None and not isinstance(value, bool):
                raise ConfigError(f"Toggle for {name} must be true, false or null, got {value!r}")
            passes[name] = value

        return cls(passes=passes, disable_by_default=disable_by_default)

    def is_enabled(self, name: str) -> bool:
        value = self.passes.get(name)
        if self.disable_by_default:
            return value is True
        return value is not False


class Pipeline:
    """Run the enabled passes, in registry order, over a forest."""

    def __init__(self, config: dict, registry: Optional[List[Type[OptimizationPass]]] = None):
        self.config = config
        self.registry = list(PASSES if registry is None else registry)
        self.pipeline_config = PipelineConfig.from_dict(
            config.get("pipeline"),
            [pass_class.name for pass_class in self.registry],
        )
        self.passes = [pass_class(config) for pass_class in self.registry]

    @property
    def enabled_passes(self) -> List[OptimizationPass]:
        return [p for p in self.passes if self.pipeline_config.is_enabled(p.name)]

    def run(self, nodes: List[Node]) -> List[Node]:
        enabled = self.enabled_passes
        for optimization_pass in self.passes:
            if optimization_pass not in enabled:
                logger.debug(f"Skipping pass: {optimization_pass.name}")

        for index, optimization_pass in enumerate(enabled, start=1):
            logger.info(f"Pass {index}/{len(enabled)}: {optimization_pass.name}")
            nodes = optimization_pass.apply(nodes)
        return nodes
