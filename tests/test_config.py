# -*- coding: utf-8 -*-
"""Tests for PipelineConfig coercion, validation and warnings."""

import dataclasses
import math
import warnings

import numpy as np
import pytest

from lumen_config import PipelineConfig
from lumen_types import (
    CURVE_LABELS, PRIMARIES_LABELS, ColorSpacePrimaries, GammaType, PipelineVariant,
)


@pytest.fixture
def no_warnings():
    with warnings.catch_warnings():
        warnings.simplefilter("error")
        yield


class TestDefaults:
    def test_identity_defaults(self, no_warnings):
        cfg = PipelineConfig()
        assert cfg.variant is PipelineVariant.SIMPLE
        assert cfg.input_gamma is GammaType.LINEAR
        assert cfg.output_gamma is GammaType.LINEAR
        assert cfg.input_color_space is ColorSpacePrimaries.REC709
        assert cfg.output_color_space is ColorSpacePrimaries.REC709
        assert not cfg.tone_mapping_enabled

    def test_frozen(self):
        cfg = PipelineConfig()
        with pytest.raises(dataclasses.FrozenInstanceError):
            cfg.knee = 3.0

    def test_hashable_and_comparable(self):
        assert PipelineConfig(knee=3) == PipelineConfig(knee=3.0)
        assert hash(PipelineConfig()) == hash(PipelineConfig())


class TestEnumCoercion:
    @pytest.mark.parametrize("value", ["S-Log3", "SONY_SLOG3", "sony slog3", 4, np.int64(4),
                                       GammaType.SONY_SLOG3])
    def test_gamma_selectors(self, value, no_warnings):
        assert PipelineConfig(input_gamma=value).input_gamma is GammaType.SONY_SLOG3

    @pytest.mark.parametrize("gamma", list(GammaType), ids=lambda g: g.name)
    def test_every_curve_label_resolves(self, gamma):
        assert GammaType.coerce(CURVE_LABELS[gamma]) is gamma

    @pytest.mark.parametrize("space", list(ColorSpacePrimaries), ids=lambda s: s.name)
    def test_every_primaries_label_resolves(self, space):
        assert ColorSpacePrimaries.coerce(PRIMARIES_LABELS[space]) is space

    def test_variant_by_name(self, no_warnings):
        assert PipelineConfig(variant="zone").variant is PipelineVariant.ZONE

    def test_unknown_name(self):
        with pytest.raises(ValueError, match="Unknown GammaType"):
            PipelineConfig(output_gamma="HLG")

    def test_out_of_range_index(self):
        with pytest.raises(ValueError, match="not a valid ColorSpacePrimaries"):
            PipelineConfig(input_color_space=15)

    def test_wrong_enum_type(self):
        with pytest.raises(TypeError):
            PipelineConfig(input_gamma=ColorSpacePrimaries.REC709)

    @pytest.mark.parametrize("value", [True, 1.5, None])
    def test_wrong_selector_type(self, value):
        with pytest.raises(TypeError):
            PipelineConfig(input_gamma=value)

    def test_label_property(self):
        assert GammaType.SONY_SLOG3.label == "S-Log3"
        assert PipelineVariant.FULL.label == "FULL"


class TestValueValidation:
    @pytest.mark.parametrize("field, value", [
        ("max_input_nits", 9.0),
        ("max_output_nits", 5.0),
        ("max_input_nits", -100.0),
        ("knee", 1.0),
        ("knee", 0.5),
        ("saturation_max", -0.1),
        ("saturation_max", 1.5),
        ("chart_width_percent", 101.0),
        ("chart_width_percent", -1.0),
    ])
    def test_out_of_range(self, field, value):
        with pytest.raises(ValueError, match=field):
            PipelineConfig(**{field: value})

    @pytest.mark.parametrize("value", [math.nan, math.inf, -math.inf])
    def test_non_finite(self, value):
        with pytest.raises(ValueError, match="finite"):
            PipelineConfig(knee=value)

    @pytest.mark.parametrize("field, value", [
        ("knee", "2"), ("knee", True), ("max_input_nits", None),
        ("apply_forward_ootf", 1), ("show_chart", "yes"),
    ])
    def test_wrong_types(self, field, value):
        with pytest.raises(TypeError, match=field):
            PipelineConfig(**{field: value})

    def test_accepts_boundaries(self, no_warnings):
        cfg = PipelineConfig(saturation_max=0.0, chart_width_percent=100.0,
                             max_input_nits=9.5, knee=1.01)
        assert cfg.saturation_max == 0.0
        assert cfg.chart_width_percent == 100.0

    def test_numpy_scalars_are_coerced(self, no_warnings):
        cfg = PipelineConfig(knee=np.float32(2.5), show_chart=np.bool_(True))
        assert type(cfg.knee) is float
        assert cfg.show_chart is True


class TestWarnings:
    def test_full_only_options_under_simple(self):
        with pytest.warns(UserWarning, match="SIMPLE"):
            PipelineConfig(variant="SIMPLE", tone_mapping_enabled=True)

    def test_warning_lists_every_ignored_option(self):
        with pytest.warns(UserWarning) as record:
            PipelineConfig(saturation_compression_enabled=True,
                           white_point_adaptation_enabled=True)
        message = str(record[0].message)
        assert "saturation_compression_enabled" in message
        assert "white_point_adaptation_enabled" in message

    def test_equal_whites_with_tone_mapping(self):
        with pytest.warns(UserWarning, match="only clamping"):
            PipelineConfig(variant="FULL", tone_mapping_enabled=True,
                           max_input_nits=100.0, max_output_nits=100.0)

    def test_warning_points_at_caller(self):
        with pytest.warns(UserWarning) as record:
            PipelineConfig(tone_mapping_enabled=True)
        assert record[0].filename == __file__

    def test_zone_options_ignored(self):
        with pytest.warns(UserWarning, match="ZONE") as record:
            PipelineConfig(variant="ZONE", apply_forward_ootf=True,
                           tone_mapping_enabled=True)
        message = str(record[0].message)
        assert "apply_forward_ootf" in message
        assert "tone_mapping_enabled" in message
        assert record[0].filename == __file__

    def test_zone_chart_options_are_quiet(self, no_warnings):
        PipelineConfig(variant="ZONE", show_chart=True, is_display_referred=True)

    def test_full_variant_is_quiet(self, no_warnings):
        PipelineConfig(variant="FULL", tone_mapping_enabled=True,
                       saturation_compression_enabled=True,
                       white_point_adaptation_enabled=True)


class TestParams:
    def test_from_params_with_overrides(self, no_warnings):
        cfg = PipelineConfig.from_params({"variant": "FULL", "knee": 2.0}, knee=3.0)
        assert cfg.variant is PipelineVariant.FULL
        assert cfg.knee == 3.0

    def test_from_params_kwargs_only(self, no_warnings):
        assert PipelineConfig.from_params(output_gamma="sRGB").output_gamma is GammaType.SRGB

    def test_unknown_key(self):
        with pytest.raises(ValueError, match="Unknown PipelineConfig option"):
            PipelineConfig.from_params({"gamma": "sRGB"})

    def test_as_dict_round_trip(self, no_warnings):
        cfg = PipelineConfig(variant="FULL", input_gamma="ACEScct",
                             input_color_space="ACES AP1", knee=4.0)
        snapshot = cfg.as_dict()
        assert snapshot["input_gamma"] == "ACESCCT"
        assert snapshot["input_color_space"] == "ACES_AP1"
        assert snapshot["knee"] == 4.0
        assert set(snapshot) == set(PipelineConfig.field_names())
        assert PipelineConfig.from_params(snapshot) == cfg

    def test_replace_is_validated(self, no_warnings):
        cfg = PipelineConfig()
        assert cfg.replace(knee=5.0).knee == 5.0
        assert cfg.knee == 2.0
        with pytest.raises(ValueError):
            cfg.replace(knee=0.5)
        with pytest.raises(ValueError, match="Unknown PipelineConfig option"):
            cfg.replace(gain=2.0)


class TestMetadata:
    def test_summary(self):
        from __about__ import __version__, metadata_summary

        summary = metadata_summary()
        assert summary["title"] == "Lumen"
        assert summary["version"] == __version__
        assert summary["license"] == "LGPL-3.0-or-later"
