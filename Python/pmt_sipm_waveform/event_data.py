"""Loading a single event from a ROOT or HDF5 waveform file.

ROOT files are read with uproot; the event tree carries the branches
``adcVal`` (Short_t[23][45]), ``area`` (Double_t[23]) and
``baselineMean`` (Double_t[23]). HDF5 files (see ``converter``) hold a
group of the same name with one dataset per branch and a leading event
axis.
"""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass

import h5py
import numpy as np
import uproot


__all__ = [
    'BRANCHES',
    'EventData',
    'EventDataError',
    'EventFileError',
    'MissingTreeError',
    'EventRangeError',
    'is_hdf5_path',
    'open_source',
    'get_tree',
    'count_events',
    'load_event',
]

logger = logging.getLogger(__name__)

BRANCHES = ('adcVal', 'area', 'baselineMean')
HDF5_SUFFIXES = ('.h5', '.hdf5')


class EventDataError(Exception):
    """Base class for problems reading event data."""


class EventFileError(EventDataError):
    """The data file could not be opened or is not a valid file."""


class MissingTreeError(EventDataError):
    """The event tree, or one of its branches, is absent."""


class EventRangeError(EventDataError, IndexError):
    """The requested event id is outside the stored events."""

    def __init__(self, event_id, n_events):
        self.event_id = event_id
        self.n_events = n_events
        super().__init__(
            f'EventID {event_id} is out of range (0-{n_events - 1})'
        )


@dataclass(frozen=True)
class EventData:
    """One event: per-channel samples plus the precomputed summaries."""

    source: str
    event_id: int
    adc: np.ndarray
    area: np.ndarray
    baseline_mean: np.ndarray

    @property
    def prefix(self):
        return os.path.splitext(os.path.basename(self.source))[0]

    @property
    def n_channels(self):
        return self.adc.shape[0]

    @property
    def n_samples(self):
        return self.adc.shape[1]


def is_hdf5_path(path):
    return str(path).lower().endswith(HDF5_SUFFIXES)


def _readonly(arr, dtype=None):
    out = np.array(arr, dtype=dtype, copy=True)
    out.setflags(write=False)
    return out


def open_source(path):
    """Open ``path`` as HDF5 or ROOT by suffix; use as a context manager."""
    try:
        if is_hdf5_path(path):
            return h5py.File(path, 'r')
        return uproot.open(path)
    except Exception as e:
        raise EventFileError(f'Error opening file: {path} ({e})') from e


def get_tree(handle, path, tree_name):
    """Event tree ``tree_name`` of an open source, with all three branches."""
    if tree_name not in handle:
        raise MissingTreeError(
            f"Error accessing tree '{tree_name}' in {path}"
        )
    tree = handle[tree_name]
    if not hasattr(tree, 'keys'):
        raise MissingTreeError(
            f"Object '{tree_name}' in {path} is not an event tree"
        )
    keys = tree.keys()
    missing = [b for b in BRANCHES if b not in keys]
    if missing:
        raise MissingTreeError(
            f"Tree '{tree_name}' in {path} lacks branch(es): "
            f"{', '.join(missing)}"
        )
    return tree


def _num_entries(tree):
    if isinstance(tree, h5py.Group):
        return int(tree['adcVal'].shape[0])
    return int(tree.num_entries)


def _read_entry(tree, event_id):
    if isinstance(tree, h5py.Group):
        return {b: tree[b][event_id] for b in BRANCHES}
    arrays = tree.arrays(
        list(BRANCHES),
        library='np',
        entry_start=event_id,
        entry_stop=event_id + 1,
    )
    return {b: arrays[b][0] for b in BRANCHES}


def count_events(path, tree_name='tree'):
    """Number of events stored in the tree of ``path``."""
    with open_source(path) as handle:
        return _num_entries(get_tree(handle, path, tree_name))


def load_event(path, event_id, tree_name='tree'):
    """Read event ``event_id`` from ``path``.

    Raises:
        EventFileError: the file cannot be opened.
        MissingTreeError: the tree or a branch is missing.
        EventRangeError: ``event_id`` is not in ``0 <= id < n_events``.
    """
    with open_source(path) as handle:
        tree = get_tree(handle, path, tree_name)
        n_events = _num_entries(tree)
        if event_id < 0 or event_id >= n_events:
            raise EventRangeError(event_id, n_events)
        entry = _read_entry(tree, event_id)

    adc = np.asarray(entry['adcVal'])
    if adc.ndim != 2:
        raise MissingTreeError(
            f"Branch 'adcVal' in {path} is not a channel x sample array "
            f'(shape {adc.shape})'
        )
    logger.debug(
        'Loaded event %d of %d from %s (%d channels x %d samples)',
        event_id, n_events, path, adc.shape[0], adc.shape[1],
    )
    return EventData(
        source=str(path),
        event_id=int(event_id),
        adc=_readonly(adc, dtype=adc.dtype.newbyteorder('=')),
        area=_readonly(entry['area'], dtype=float),
        baseline_mean=_readonly(entry['baselineMean'], dtype=float),
    )
