#!/usr/bin/env python3
"""
Filter Spectrum Experiment

Feeds spectrally flat noise through a cascade of Butterworth IIR filters
and reports the magnitude spectrum of the output, band by band:
  - Noise: constant magnitude, random phase, via the inverse FFT
  - Filters: one IIRFilter per entry in the config, applied in order
  - Spectrum: real-input forward FFT of the filtered sequence

Usage:
    python filter_spectrum.py [--config CONFIG_PATH] [--output OUTPUT_DIR]
"""

import argparse
import json
import time
from datetime import datetime
from pathlib import Path
from typing import Dict, List

import numpy as np
from rich import box
from rich.console import Console
from rich.panel import Panel
from rich.table import Table

from digital_filters import IIRFilter, InvalidArgumentError
from digital_filters.analysis import band_summary, cascade, magnitude_spectrum, synthetic_noise
from digital_filters.utils import (
    ExperimentLogger,
    SpectrumExperimentConfig,
    load_config,
    make_rng,
)

PROJECT_ROOT = Path(__file__).parent.parent

console = Console()


def display_stages_table(filters: List[IIRFilter]):
    """Display the tap coefficients of every stage."""
    table = Table(title="Filter Stages", box=box.ROUNDED)
    table.add_column("Filter", style="bold")
    table.add_column("Stage", justify="right")
    table.add_column("coeff_x", justify="left")
    table.add_column("coeff_y", justify="left")

    for i, f in enumerate(filters):
        proto = f.analog_filter
        label = (f"#{i} {'HP' if proto.high_pass else 'LP'} "
                 f"n={proto.order} fc={proto.cutoff / (2 * np.pi):.1f}Hz")
        for j, stage in enumerate(f.stages):
            table.add_row(
                label if j == 0 else "",
                str(j),
                ", ".join(f"{c:+.6f}" for c in stage.coeff_x),
                ", ".join(f"{c:+.6f}" for c in stage.coeff_y),
            )

    console.print(table)


def display_bands_table(bands: List[Dict[str, float]]):
    """Display the band magnitudes with a dB column relative to the peak."""
    peak = max(b['mean_magnitude'] for b in bands) or 1.0
    table = Table(title="Output Spectrum", box=box.ROUNDED)
    table.add_column("Band (Hz)", style="bold")
    table.add_column("Mean |X|", justify="right")
    table.add_column("dB", justify="right")

    for b in bands:
        level = b['mean_magnitude'] / peak
        db = 20 * np.log10(level) if level > 0 else float('-inf')
        table.add_row(
            f"{b['low_hz']:7.1f} - {b['high_hz']:7.1f}",
            f"{b['mean_magnitude']:.4f}",
            f"{db:6.1f}",
        )

    console.print(table)


def run_filter_spectrum(config_path: str, output_dir: Path = None) -> Dict:
    """Run the noise -> filter cascade -> spectrum experiment."""
    cfg = SpectrumExperimentConfig.from_dict(load_config(config_path))
    if output_dir is None:
        output_dir = Path(cfg.output_dir)
    output_dir.mkdir(parents=True, exist_ok=True)

    exp_logger = ExperimentLogger('filter_spectrum', log_dir=str(output_dir))
    exp_logger.log_config(cfg.to_dict())

    console.print(Panel.fit(
        "[bold blue]Filter Spectrum[/bold blue]\n"
        f"Sampling rate: {cfg.sampling_rate:g} Hz, samples: {cfg.num_samples}",
        border_style="blue"
    ))

    filters = [design.build(cfg.sampling_rate) for design in cfg.filters]
    display_stages_table(filters)

    rng = make_rng(cfg.seed)
    noise = synthetic_noise(cfg.num_samples, cfg.noise_magnitude, rng)

    t0 = time.time()
    output = cascade(filters, noise)
    filter_time = time.time() - t0
    exp_logger.info(f"Filtered {len(output)} samples in {filter_time:.3f}s")

    spectrum = magnitude_spectrum(output, window=cfg.window)
    bands = band_summary(spectrum, cfg.sampling_rate, cfg.num_bands)

    console.print("\n")
    display_bands_table(bands)

    results = {
        'timestamp': datetime.now().isoformat(),
        'config': cfg.to_dict(),
        'filter_time_s': filter_time,
        'stages': [
            [{'coeff_x': list(s.coeff_x), 'coeff_y': list(s.coeff_y)} for s in f.stages]
            for f in filters
        ],
        'bands': bands,
    }
    exp_logger.log_results({'filter_time_s': filter_time, 'num_bands': len(bands)})

    with open(output_dir / 'spectrum.json', 'w') as f:
        json.dump(results, f, indent=2)

    console.print(f"\n[green]✓[/green] Results saved to {output_dir}")
    return results


def main():
    parser = argparse.ArgumentParser(description="Filter Spectrum Experiment")
    parser.add_argument(
        '--config',
        type=str,
        default=str(PROJECT_ROOT / 'configs' / 'filter_spectrum.yaml'),
        help='Path to configuration file'
    )
    parser.add_argument(
        '--output',
        type=str,
        default=None,
        help='Output directory (default: output_dir from the config)'
    )
    args = parser.parse_args()

    try:
        run_filter_spectrum(args.config, Path(args.output) if args.output else None)
    except InvalidArgumentError as e:
        console.print(f"[red]✗[/red] {e}")
        raise SystemExit(2)


if __name__ == '__main__':
    main()
