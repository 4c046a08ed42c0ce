"""Unit tests for the built-in source definition and default layering."""

import pytest

from pushsource.config.defaults import (
    apply_defaults,
    build_source_config,
    normalize_options,
    source_defaults,
)
from pushsource.config.models import SinkType


class TestSourceDefaults:
    def test_built_in_definition(self):
        defaults = source_defaults()
        assert defaults == {
            "source_id": "source",
            "options": {"buffer_size": None, "use_common_stream": False},
            "sinks": [],
        }

    def test_returns_fresh_copy(self):
        source_defaults()["options"]["buffer_size"] = 3
        assert source_defaults()["options"]["buffer_size"] is None


class TestNormalizeOptions:
    def test_camel_case_renamed(self):
        assert normalize_options({"bufferSize": 2, "useCommonStream": True}) == {
            "buffer_size": 2,
            "use_common_stream": True,
        }

    def test_unknown_keys_left_for_validation(self):
        assert normalize_options({"replay": True}) == {"replay": True}


class TestApplyDefaults:
    def test_options_merge_key_by_key(self):
        merged = apply_defaults({"options": {"useCommonStream": True}})
        assert merged["options"] == {"buffer_size": None, "use_common_stream": True}

    def test_sinks_replace_defaults(self):
        merged = apply_defaults({"sinks": [{"sink_id": "mem"}]})
        assert merged["sinks"] == [{"sink_id": "mem"}]

    def test_null_options_means_defaults(self):
        merged = apply_defaults({"options": None})
        assert merged["options"] == {"buffer_size": None, "use_common_stream": False}

    def test_input_not_modified(self):
        definition = {"options": {"bufferSize": 2}}
        apply_defaults(definition)
        assert definition == {"options": {"bufferSize": 2}}

    def test_non_mapping_options_rejected(self):
        with pytest.raises(TypeError, match="'options' must be a mapping"):
            apply_defaults({"options": [1, 2]})


class TestBuildSourceConfig:
    def test_empty_definition(self):
        cfg = build_source_config({})
        assert cfg.source_id == "source"
        assert cfg.options.buffer_size is None
        assert cfg.sinks == []

    def test_overrides_applied(self):
        cfg = build_source_config(
            {
                "source_id": "clicks",
                "options": {"buffer_size": 2},
                "sinks": [{"sink_id": "audit", "sink_type": "log"}],
            },
        )
        assert cfg.source_id == "clicks"
        assert cfg.options.buffer_size == 2
        # other option defaults preserved
        assert cfg.options.use_common_stream is False
        assert cfg.sinks[0].sink_type == SinkType.LOG
