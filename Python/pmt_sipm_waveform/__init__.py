"""Per-event waveform plots for the PMT/SiPM detector plane.

Main features:
* Event loading from ROOT (uproot) or HDF5 (h5py) event trees.
* Shared y-axis scale derived from the event's largest ADC sample.
* Static channel maps and layouts for the PMT-only and PMT+SiPM views.
* Combined and per-channel matplotlib charts with area/baseline labels.
* ROOT to HDF5 conversion of event trees.
"""

from .layout import (
    EMPTY,
    PMT_CHANNEL_MAP,
    SIPM_CHANNEL_MAP,
    PMT_LAYOUT,
    COMBINED_LAYOUT,
    get_layout,
    resolve_slot,
    resolve_panel,
    iter_panels,
    layout_channels,
)
from .event_data import (
    EventData,
    EventDataError,
    EventFileError,
    MissingTreeError,
    EventRangeError,
    count_events,
    load_event,
)
from .analysis import (
    round_up_to_bin,
    display_ceiling,
    sample_times,
    channel_trace,
    event_summary,
)
from .config import PlotConfig, load_config
from .converter import convert_root_to_hdf5, convert_folder
from .plot_event import (
    plot_combined_chart,
    plot_channel_chart,
    plot_event_waveforms,
)

__all__ = [
    'EMPTY', 'PMT_CHANNEL_MAP', 'SIPM_CHANNEL_MAP',
    'PMT_LAYOUT', 'COMBINED_LAYOUT',
    'get_layout', 'resolve_slot', 'resolve_panel', 'iter_panels',
    'layout_channels',
    'EventData', 'EventDataError', 'EventFileError', 'MissingTreeError',
    'EventRangeError', 'count_events', 'load_event',
    'round_up_to_bin', 'display_ceiling', 'sample_times', 'channel_trace',
    'event_summary',
    'PlotConfig', 'load_config',
    'convert_root_to_hdf5', 'convert_folder',
    'plot_combined_chart', 'plot_channel_chart', 'plot_event_waveforms',
]
