"""Tests for pass selection and ordering."""
import pytest

from svgtidy.document.node import Comment
from svgtidy.errors import ConfigError
from svgtidy.optimization.base import OptimizationPass
from svgtidy.optimization.pipeline import PASSES, Pipeline, PipelineConfig

NAMES = [pass_class.name for pass_class in PASSES]


def recording_pass(pass_name):
    class Recording(OptimizationPass):
        name = pass_name

        def apply(self, nodes):
            return nodes + [Comment(self.name)]

    return Recording


class TestPipelineConfig:
    def test_default_all_mode(self):
        config = PipelineConfig.from_dict({"passes": {"shorten_ids": False}}, NAMES)
        assert not config.is_enabled("shorten_ids")
        assert config.is_enabled("remove_comments")

    def test_disable_by_default_mode(self):
        config = PipelineConfig.from_dict(
            {"disable_by_default": True, "passes": {"shorten_ids": True, "remove_comments": None}}, NAMES
        )
        assert config.is_enabled("shorten_ids")
        assert not config.is_enabled("remove_comments")
        assert not config.is_enabled("remove_useless_groups")

    def test_empty_config(self):
        config = PipelineConfig.from_dict(None, NAMES)
        assert all(config.is_enabled(name) for name in NAMES)

    def test_unknown_pass(self):
        with pytest.raises(ConfigError, match="Unknown pass"):
            PipelineConfig.from_dict({"passes": {"make_it_pretty": True}}, NAMES)

    def test_non_boolean_toggle(self):
        with pytest.raises(ConfigError):
            PipelineConfig.from_dict({"passes": {"shorten_ids": "yes"}}, NAMES)

    def test_non_boolean_mode(self):
        with pytest.raises(ConfigError):
            PipelineConfig.from_dict({"disable_by_default": 1}, NAMES)

    def test_non_mapping_section(self):
        with pytest.raises(ConfigError):
            PipelineConfig.from_dict(["shorten_ids"], NAMES)
        with pytest.raises(ConfigError):
            PipelineConfig.from_dict({"passes": ["shorten_ids"]}, NAMES)


class TestPipeline:
    def test_registry_order(self):
        assert NAMES == [
            "remove_comments",
            "remove_useless_groups",
            "extract_common_attributes",
            "merge_consecutive_paths",
            "remove_unused_defs",
            "convert_paths_to_uses",
            "remove_useless_ids",
            "shorten_ids",
        ]
        assert [p.name for p in Pipeline({}).enabled_passes] == NAMES

    def test_runs_enabled_passes_in_order(self):
        registry = [recording_pass("first"), recording_pass("second"), recording_pass("third")]
        pipeline = Pipeline({"pipeline": {"passes": {"second": False}}}, registry)
        assert pipeline.run([]) == [Comment("first"), Comment("third")]

    def test_nothing_enabled(self):
        registry = [recording_pass("only")]
        pipeline = Pipeline({"pipeline": {"disable_by_default": True}}, registry)
        assert pipeline.run([]) == []

    def test_invalid_config_fails_before_running(self):
        with pytest.raises(ConfigError):
            Pipeline({"pipeline": {"passes": {"nope": True}}})
