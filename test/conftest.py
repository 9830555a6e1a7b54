from __future__ import annotations

import logging
import sys
from pathlib import Path

import matplotlib

matplotlib.use('Agg')

import h5py
import numpy as np
import pytest
import uproot

ROOT = Path(__file__).resolve().parents[1] / 'Python'
ROOT_STR = str(ROOT)
if ROOT_STR not in sys.path:
    sys.path.insert(0, ROOT_STR)

from pmt_sipm_waveform.config import PlotConfig  # noqa: E402

N_EVENTS = 3
N_CHANNELS = 23
N_SAMPLES = 45


def make_event_arrays(n_events=N_EVENTS):
    """Synthetic events.

    Event 0: flat 180 with one 345 spike on channel 10, sample 20.
    Event 1: every sample negative.
    Event 2: flat 180.
    """
    adc = np.full((n_events, N_CHANNELS, N_SAMPLES), 180, dtype=np.int16)
    adc[0, 10, 20] = 345
    if n_events > 1:
        adc[1] = -5
    channels = np.arange(N_CHANNELS)
    area = np.stack([100.0 * e + channels + 0.25 for e in range(n_events)])
    baseline = np.stack([180.0 + 0.5 * channels for _ in range(n_events)])
    return adc, area, baseline


def write_hdf5(path, adc, area, baseline, tree_name='tree'):
    with h5py.File(path, 'w') as f:
        group = f.create_group(tree_name)
        group.create_dataset('adcVal', data=adc)
        group.create_dataset('area', data=area)
        group.create_dataset('baselineMean', data=baseline)
    return str(path)


def write_root(path, adc, area, baseline, tree_name='tree'):
    with uproot.recreate(path) as f:
        f[tree_name] = {'adcVal': adc, 'area': area, 'baselineMean': baseline}
    return str(path)


@pytest.fixture
def event_arrays():
    return make_event_arrays()


@pytest.fixture
def h5_file(tmp_path, event_arrays):
    return write_hdf5(tmp_path / 'run7.h5', *event_arrays)


@pytest.fixture
def root_file(tmp_path, event_arrays):
    return write_root(tmp_path / 'run7.root', *event_arrays)


@pytest.fixture
def plot_config(tmp_path):
    return PlotConfig(output_dir=str(tmp_path / 'plots'), dpi=20)


@pytest.fixture(autouse=True)
def _reset_package_logger():
    """Drop handlers installed by CLI runs; they hold captured streams."""
    yield
    logger = logging.getLogger('pmt_sipm_waveform')
    for h in list(logger.handlers):
        logger.removeHandler(h)
        h.close()
    logger.setLevel(logging.NOTSET)
