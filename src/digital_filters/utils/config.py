"""
YAML configuration for filter design and spectrum runs.
"""

import math
from dataclasses import asdict, dataclass, field
from pathlib import Path
from typing import Any, Dict, List, Optional, Union

import yaml

from ..dsp_core.twiddle import is_positive_power_of_two
from ..dsp_core.window import WINDOW_COEFFICIENTS
from ..exceptions import InvalidArgumentError
from ..filters import Butterworth, IIRFilter

PROTOTYPES = {
    'butterworth': Butterworth,
}


def load_config(config_path: Union[str, Path]) -> Dict[str, Any]:
    """Load a YAML configuration file."""
    with open(config_path, 'r', encoding='utf-8') as f:
        config = yaml.safe_load(f)
    if config is None:
        return {}
    if not isinstance(config, dict):
        raise InvalidArgumentError(f"{config_path}: top level must be a mapping")
    return config


def _require(cfg: Dict[str, Any], key: str, kind, where: str):
    if key not in cfg:
        raise InvalidArgumentError(f"{where}: missing required key '{key}'")
    value = cfg[key]
    if isinstance(value, bool) and kind is not bool:
        raise InvalidArgumentError(f"{where}: '{key}' must be {kind.__name__}")
    try:
        return kind(value)
    except (TypeError, ValueError):
        raise InvalidArgumentError(
            f"{where}: '{key}' must be {kind.__name__}, got {value!r}"
        ) from None


@dataclass
class FilterDesign:
    """One analog prototype plus its digital gain."""

    order: int
    cutoff_hz: float
    high_pass: bool = False
    gain: float = 1.0
    prototype: str = 'butterworth'

    @property
    def cutoff(self) -> float:
        """Cutoff in rad/s."""
        return 2 * math.pi * self.cutoff_hz

    @classmethod
    def from_dict(cls, cfg: Dict[str, Any], where: str = 'filter') -> 'FilterDesign':
        if not isinstance(cfg, dict):
            raise InvalidArgumentError(f"{where}: expected a mapping, got {cfg!r}")
        prototype = str(cfg.get('prototype', 'butterworth')).lower()
        if prototype not in PROTOTYPES:
            raise InvalidArgumentError(
                f"{where}: unknown prototype '{prototype}', "
                f"choose from {sorted(PROTOTYPES)}"
            )
        return cls(
            order=_require(cfg, 'order', int, where),
            cutoff_hz=_require(cfg, 'cutoff_hz', float, where),
            high_pass=bool(cfg.get('high_pass', False)),
            gain=float(cfg.get('gain', 1.0)),
            prototype=prototype,
        )

    def build(self, sampling_rate: float) -> IIRFilter:
        analog = PROTOTYPES[self.prototype](self.order, self.cutoff, self.high_pass)
        return IIRFilter(analog, sampling_rate, self.gain)


@dataclass
class SpectrumExperimentConfig:
    """Settings for the noise -> filter cascade -> spectrum run."""

    sampling_rate: float
    num_samples: int = 65536
    noise_magnitude: float = 1.0
    seed: Optional[int] = None
    window: Optional[str] = None
    num_bands: int = 16
    filters: List[FilterDesign] = field(default_factory=list)
    output_dir: str = 'results/filter_spectrum'

    @classmethod
    def from_dict(cls, cfg: Dict[str, Any]) -> 'SpectrumExperimentConfig':
        signal_cfg = cfg.get('signal', {}) or {}
        noise_cfg = cfg.get('noise', {}) or {}
        report_cfg = cfg.get('report', {}) or {}

        sampling_rate = _require(signal_cfg, 'sampling_rate', float, 'signal')
        if sampling_rate <= 0:
            raise InvalidArgumentError(f"signal: 'sampling_rate' must be positive, got {sampling_rate}")

        num_samples = int(signal_cfg.get('num_samples', 65536))
        # Output spectrum uses a half-size engine, which must stay >= 4
        if not is_positive_power_of_two(num_samples) or num_samples < 8:
            raise InvalidArgumentError(
                f"signal: 'num_samples' must be a power of two >= 8, got {num_samples}"
            )

        window = report_cfg.get('window', None)
        if window is not None and window not in WINDOW_COEFFICIENTS:
            raise InvalidArgumentError(
                f"report: unknown window '{window}', choose from {sorted(WINDOW_COEFFICIENTS)}"
            )

        filters_cfg = cfg.get('filters', [])
        if not isinstance(filters_cfg, list):
            raise InvalidArgumentError("filters: expected a list of filter designs")

        seed = noise_cfg.get('seed', cfg.get('seed', None))
        return cls(
            sampling_rate=sampling_rate,
            num_samples=num_samples,
            noise_magnitude=float(noise_cfg.get('magnitude', 1.0)),
            seed=None if seed is None else int(seed),
            window=window,
            num_bands=int(report_cfg.get('num_bands', 16)),
            filters=[FilterDesign.from_dict(f, where=f'filters[{i}]')
                     for i, f in enumerate(filters_cfg)],
            output_dir=str(cfg.get('output_dir', 'results/filter_spectrum')),
        )

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)
