"""Tests for the adaptive sampler."""

import pytest

from procgraph import AdaptiveSampler, Graph, RGBColor, SamplerSettings, create_module


def _single(type_name: str, **params: object) -> Graph:
    g = Graph()
    g.add_module(create_module(type_name, "m", **params))
    return g


def _x_squared() -> Graph:
    """x * x: its error grows with |x|."""
    g = Graph()
    g.add_module(create_module("CoordinateModule", "x"))
    g.add_module(create_module("ProductModule", "m"))
    g.bind_input("m", 0, "x", 0)
    g.bind_input("m", 1, "x", 0)
    return g


class TestAdaptiveSampler:
    def test_constant_is_not_refined(self) -> None:
        settings = SamplerSettings(tiles=2, workers=1)
        samples = AdaptiveSampler(_single("NumberModule", value=3.0), "m", 0, settings).sample(0.0, 0.0, 1.0, 1.0)

        assert [(s.x, s.y) for s in samples] == [(0.25, 0.25), (0.75, 0.25), (0.25, 0.75), (0.75, 0.75)]
        assert all(s.depth == 0 for s in samples)
        assert all(s.value == 3.0 for s in samples)
        assert all(s.xsize == s.ysize == 0.25 for s in samples)

    def test_refines_to_max_depth(self) -> None:
        settings = SamplerSettings(error_threshold=0.01, max_depth=2, workers=1, tiles=1)
        samples = AdaptiveSampler(_single("CoordinateModule"), "m", 0, settings).sample(0.0, 0.0, 1.0, 1.0)

        assert len(samples) == 16
        assert all(s.depth == 2 for s in samples)
        assert all(s.error == pytest.approx(0.0625) for s in samples)
        assert sorted(s.value for s in samples) == pytest.approx(sorted([0.125, 0.375, 0.625, 0.875] * 4))

    def test_refinement_concentrates_on_high_error(self) -> None:
        settings = SamplerSettings(error_threshold=0.1, max_depth=3, workers=1, tiles=2)
        samples = AdaptiveSampler(_x_squared(), "m", 0, settings).sample(0.0, 0.0, 1.0, 1.0)

        left = [s for s in samples if s.x < 0.5]
        right = [s for s in samples if s.x > 0.5]
        assert len(left) == 2
        assert len(right) == 20
        assert max(s.depth for s in right) == 2
        assert all(s.error <= 0.1 for s in samples)

    @pytest.mark.parametrize("workers", [2, 3, 8])
    def test_deterministic_across_worker_counts(self, workers: int) -> None:
        g = Graph()
        g.add_module(create_module("NoiseModule", "m", octaves=8))
        base = SamplerSettings(error_threshold=0.05, max_depth=4, workers=1, tiles=3)
        threaded = base.model_copy(update={"workers": workers})

        expected = AdaptiveSampler(g, "m", 0, base).sample(-1.0, -1.0, 2.0, 2.0)
        actual = AdaptiveSampler(g, "m", 0, threaded).sample(-1.0, -1.0, 2.0, 2.0)

        assert actual == expected

    def test_color_output(self) -> None:
        settings = SamplerSettings(tiles=1, workers=1)
        samples = AdaptiveSampler(_single("ColorModule", red=0.5), "m", 0, settings).sample(0.0, 0.0, 1.0, 1.0)
        assert samples[0].value == RGBColor(0.5, 1.0, 1.0)

    def test_default_settings(self) -> None:
        sampler = AdaptiveSampler(_single("NumberModule"), "m", 0)
        assert sampler.settings == SamplerSettings()

    def test_empty_region_rejected(self) -> None:
        sampler = AdaptiveSampler(_single("NumberModule"), "m", 0)
        with pytest.raises(ValueError, match="Empty sampling region"):
            sampler.sample(1.0, 0.0, 1.0, 1.0)
