import math

import numpy as np
import pandas as pd

from .layout import get_layout, layout_channels


__all__ = [
    'BIN_SIZE',
    'SAMPLE_INTERVAL_NS',
    'TIME_MAX_NS',
    'round_up_to_bin',
    'display_ceiling',
    'sample_times',
    'channel_trace',
    'event_summary',
]

BIN_SIZE = 10
SAMPLE_INTERVAL_NS = 16.0
TIME_MAX_NS = 720.0


def round_up_to_bin(value, bin_size):
    return math.ceil((value + 0.5) / bin_size) * bin_size


def display_ceiling(adc, bin_size=BIN_SIZE):
    """Shared y-axis maximum for every panel of one event.

    The running maximum starts at 0, so an event with no positive sample
    still gets a ceiling of one bin.
    """
    adc = np.asarray(adc)
    peak = max(0.0, float(adc.max())) if adc.size else 0.0
    return float(round_up_to_bin(peak, bin_size))


def sample_times(n_samples, interval=SAMPLE_INTERVAL_NS, t_max=TIME_MAX_NS):
    """Times of samples ``k = 0..n_samples-1``, stopping after ``t_max``.

    Sample ``k`` sits at ``(k + 1) * interval``.
    """
    times = (np.arange(n_samples) + 1) * float(interval)
    return times[times <= t_max]


def channel_trace(event, channel, interval=SAMPLE_INTERVAL_NS,
                  t_max=TIME_MAX_NS):
    times = sample_times(event.n_samples, interval, t_max)
    return times, event.adc[channel, :len(times)]


def event_summary(event, layout):
    """Per-channel table of the drawn channels of ``event``."""
    layout = get_layout(layout)
    rows = []
    for panel in layout_channels(layout):
        rows.append({
            'label': panel.label,
            'kind': panel.kind,
            'slot': panel.slot,
            'channel': panel.channel,
            'area': float(event.area[panel.channel]),
            'baseline_mean': float(event.baseline_mean[panel.channel]),
            'peak_adc': int(event.adc[panel.channel].max()),
        })
    return pd.DataFrame(rows).set_index('label')
