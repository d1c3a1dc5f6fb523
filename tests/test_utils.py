"""
Tests for configuration loading, seeding and run logging.
"""

import math
from pathlib import Path

import numpy as np
import pytest

from digital_filters import Butterworth, IIRFilter, InvalidArgumentError
from digital_filters.utils import (
    ExperimentLogger,
    FilterDesign,
    SpectrumExperimentConfig,
    get_seed_from_config,
    load_config,
    make_rng,
)

PROJECT_ROOT = Path(__file__).parent.parent


def _minimal(**signal):
    signal.setdefault('sampling_rate', 1000)
    return {'signal': signal}


class TestLoadConfig:

    def test_reads_yaml(self, tmp_path):
        path = tmp_path / 'run.yaml'
        path.write_text("signal:\n  sampling_rate: 500\nnoise:\n  seed: 7\n")
        cfg = load_config(path)
        assert cfg == {'signal': {'sampling_rate': 500}, 'noise': {'seed': 7}}

    def test_empty_file(self, tmp_path):
        path = tmp_path / 'empty.yaml'
        path.write_text("")
        assert load_config(path) == {}

    def test_top_level_must_be_mapping(self, tmp_path):
        path = tmp_path / 'list.yaml'
        path.write_text("- 1\n- 2\n")
        with pytest.raises(InvalidArgumentError):
            load_config(path)

    def test_repository_config(self):
        cfg = SpectrumExperimentConfig.from_dict(
            load_config(PROJECT_ROOT / 'configs' / 'filter_spectrum.yaml')
        )
        assert cfg.sampling_rate == 2000.0
        assert cfg.num_samples == 65536
        assert cfg.seed == 42
        assert [f.high_pass for f in cfg.filters] == [False, True]
        for design in cfg.filters:
            assert isinstance(design.build(cfg.sampling_rate), IIRFilter)


class TestSpectrumExperimentConfig:

    def test_defaults(self):
        cfg = SpectrumExperimentConfig.from_dict(_minimal())
        assert cfg.num_samples == 65536
        assert cfg.noise_magnitude == 1.0
        assert cfg.seed is None
        assert cfg.window is None
        assert cfg.filters == []

    def test_to_dict(self):
        cfg = SpectrumExperimentConfig.from_dict({
            'signal': {'sampling_rate': 100},
            'filters': [{'order': 2, 'cutoff_hz': 10}],
        })
        d = cfg.to_dict()
        assert d['sampling_rate'] == 100.0
        assert d['filters'][0]['order'] == 2
        assert d['filters'][0]['prototype'] == 'butterworth'

    @pytest.mark.parametrize("cfg", [
        {},
        {'signal': {'sampling_rate': 0}},
        {'signal': {'sampling_rate': 'fast'}},
        _minimal(num_samples=100),
        _minimal(num_samples=4),
        {**_minimal(), 'report': {'window': 'triangle'}},
        {**_minimal(), 'filters': {'order': 2}},
        {**_minimal(), 'filters': [{'cutoff_hz': 10}]},
        {**_minimal(), 'filters': [{'order': True, 'cutoff_hz': 10}]},
        {**_minimal(), 'filters': [{'order': 2, 'cutoff_hz': 10, 'prototype': 'elliptic'}]},
        {**_minimal(), 'filters': ['butterworth']},
    ])
    def test_rejects_bad_config(self, cfg):
        with pytest.raises(InvalidArgumentError):
            SpectrumExperimentConfig.from_dict(cfg)

    def test_bad_filter_order_surfaces_on_build(self):
        design = FilterDesign.from_dict({'order': 0, 'cutoff_hz': 10})
        with pytest.raises(InvalidArgumentError):
            design.build(100.0)


class TestFilterDesign:

    def test_cutoff_in_radians(self):
        design = FilterDesign(order=3, cutoff_hz=50.0)
        assert design.cutoff == pytest.approx(2 * math.pi * 50.0)

    def test_build(self):
        f = FilterDesign(order=3, cutoff_hz=50.0, high_pass=True, gain=0.5).build(400.0)
        assert f.sampling_rate == 400.0
        assert f.gain == 0.5
        assert isinstance(f.analog_filter, Butterworth)
        assert f.analog_filter.high_pass
        assert f.stages == IIRFilter(Butterworth(3, 2 * math.pi * 50.0, True), 400.0).stages


class TestSeed:

    def test_make_rng_repeats(self):
        a = make_rng(123).standard_normal(8)
        b = make_rng(123).standard_normal(8)
        np.testing.assert_array_equal(a, b)

    def test_seed_from_config(self):
        assert get_seed_from_config({'seed': 3}) == 3
        assert get_seed_from_config({'noise': {'seed': 5}}) == 5
        assert get_seed_from_config({'noise': {}}) is None
        assert get_seed_from_config(None) is None


class TestExperimentLogger:

    def test_writes_log_file(self, tmp_path):
        exp_logger = ExperimentLogger('unit_run', log_dir=str(tmp_path))
        exp_logger.log_config({'sampling_rate': 1000.0, 'noise': {'seed': 1}})
        exp_logger.info("hello")
        for handler in exp_logger.logger.handlers:
            handler.flush()

        text = exp_logger.log_file.read_text(encoding='utf-8')
        assert exp_logger.log_file.parent == tmp_path
        assert "CONFIGURATION" in text
        assert "sampling_rate: 1000" in text
        assert "seed: 1" in text
        assert "hello" in text
