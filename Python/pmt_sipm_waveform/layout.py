"""Channel maps and panel layouts for the PMT/SiPM detector plane.

A layout grid holds logical slot numbers: slots 0-11 are PMT 1-12 and
slots 12-21 are SiPM 1-10. ``EMPTY`` marks a grid cell with no sensor.
The channel maps translate a slot to the physical channel index of the
``adcVal``/``area``/``baselineMean`` arrays.
"""

from __future__ import annotations

from collections import namedtuple


__all__ = [
    'EMPTY',
    'PMT_CHANNEL_MAP',
    'SIPM_CHANNEL_MAP',
    'Panel',
    'Layout',
    'PMT_LAYOUT',
    'COMBINED_LAYOUT',
    'LAYOUTS',
    'get_layout',
    'resolve_slot',
    'resolve_panel',
    'iter_panels',
    'layout_channels',
]

EMPTY = -1

PMT_CHANNEL_MAP = (0, 10, 7, 2, 6, 3, 8, 9, 11, 4, 5, 1)
SIPM_CHANNEL_MAP = (12, 13, 14, 15, 16, 17, 18, 19, 20, 21)

N_PMT = len(PMT_CHANNEL_MAP)
N_SIPM = len(SIPM_CHANNEL_MAP)

Panel = namedtuple('Panel', ['slot', 'channel', 'label', 'kind'])

Layout = namedtuple(
    'Layout',
    ['name', 'title', 'grid', 'baseline_label', 'legend'],
)

# Rows run top to bottom as seen looking at the detector face.
PMT_LAYOUT = Layout(
    name='pmt',
    title='Combined PMT Waveforms',
    grid=(
        (9, 3, 7),
        (5, 4, 8),
        (0, 6, 1),
        (10, 11, 2),
    ),
    baseline_label='Baseline Mean',
    legend=False,
)

COMBINED_LAYOUT = Layout(
    name='combined',
    title='Combined PMT and SiPM Waveforms',
    grid=(
        (EMPTY, EMPTY, 20, 21, EMPTY),
        (16, 9, 3, 7, 12),
        (15, 5, 4, 8, EMPTY),
        (19, 0, 6, 1, 17),
        (EMPTY, 10, 11, 2, 13),
        (EMPTY, 14, 18, EMPTY, EMPTY),
    ),
    baseline_label='BM',
    legend=True,
)

LAYOUTS = {
    PMT_LAYOUT.name: PMT_LAYOUT,
    COMBINED_LAYOUT.name: COMBINED_LAYOUT,
}


def get_layout(name):
    """Return the layout registered under ``name`` ('pmt' or 'combined')."""
    if isinstance(name, Layout):
        return name
    try:
        return LAYOUTS[name]
    except KeyError:
        raise ValueError(
            f"Unknown layout '{name}' (choose from {', '.join(LAYOUTS)})"
        ) from None


def resolve_slot(slot):
    """Translate a logical slot into a ``Panel``.

    Returns None for the ``EMPTY`` sentinel.
    """
    if slot == EMPTY:
        return None
    if 0 <= slot < N_PMT:
        return Panel(slot, PMT_CHANNEL_MAP[slot], f'PMT {slot + 1}', 'PMT')
    if N_PMT <= slot < N_PMT + N_SIPM:
        n = slot - N_PMT
        return Panel(slot, SIPM_CHANNEL_MAP[n], f'SiPM {n + 1}', 'SiPM')
    raise ValueError(f'Invalid layout slot: {slot}')


def resolve_panel(layout, row, col):
    """Return the ``Panel`` drawn at grid position (row, col), or None."""
    layout = get_layout(layout)
    n_rows = len(layout.grid)
    n_cols = len(layout.grid[0])
    if not (0 <= row < n_rows and 0 <= col < n_cols):
        raise IndexError(
            f'Position ({row}, {col}) outside {n_rows}x{n_cols} '
            f"'{layout.name}' grid"
        )
    return resolve_slot(layout.grid[row][col])


def iter_panels(layout):
    """Yield ``(row, col, panel)`` over the grid in row-major order."""
    layout = get_layout(layout)
    for row, cells in enumerate(layout.grid):
        for col, _ in enumerate(cells):
            yield row, col, resolve_panel(layout, row, col)


def layout_channels(layout):
    """Every panel placed in ``layout``, PMTs first, in label order."""
    layout = get_layout(layout)
    slots = sorted(
        slot for cells in layout.grid for slot in cells if slot != EMPTY
    )
    return [resolve_slot(slot) for slot in slots]
