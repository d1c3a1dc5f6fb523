import random
from typing import Optional

import numpy as np


def set_seed(seed: int) -> None:
    random.seed(seed)
    np.random.seed(seed)


def make_rng(seed: Optional[int] = None) -> np.random.Generator:
    if seed is not None:
        set_seed(seed)
    return np.random.default_rng(seed)


def get_seed_from_config(config: dict) -> Optional[int]:
    if not isinstance(config, dict):
        return None
    seed = config.get('seed', None)
    if seed is not None:
        return int(seed)
    noise = config.get('noise', {})
    if isinstance(noise, dict) and noise.get('seed', None) is not None:
        return int(noise['seed'])
    return None
