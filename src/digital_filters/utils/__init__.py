"""
Utility modules.
"""

from .logging import setup_logging, get_logger, ExperimentLogger
from .config import load_config, FilterDesign, SpectrumExperimentConfig
from .seed import make_rng, set_seed, get_seed_from_config

__all__ = [
    'setup_logging',
    'get_logger',
    'ExperimentLogger',
    'load_config',
    'FilterDesign',
    'SpectrumExperimentConfig',
    'make_rng',
    'set_seed',
    'get_seed_from_config',
]
