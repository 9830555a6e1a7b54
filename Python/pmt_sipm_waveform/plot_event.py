"""Waveform plots of one event laid out like the detector plane.

For a chosen event this module writes one combined figure with a panel
per sensor, placed according to the PMT-only or the combined PMT+SiPM
layout, and one standalone figure per sensor. Every panel shares the
same y-axis range so amplitudes can be compared by eye.
"""

import logging
import os

import matplotlib.pyplot as plt

from .analysis import channel_trace, display_ceiling, event_summary
from .config import PlotConfig
from .event_data import EventDataError, load_event
from .layout import get_layout, iter_panels, layout_channels


__all__ = [
    'y_axis_range',
    'combined_chart_path',
    'channel_chart_path',
    'summary_csv_path',
    'plot_combined_chart',
    'plot_channel_chart',
    'plot_event_waveforms',
]

logger = logging.getLogger(__name__)

X_LABEL = 'Time (ns)'
Y_LABEL = 'ADC Value (mV)'


def y_axis_range(ceiling, config):
    """Fixed floor up to the shared ceiling.

    Events whose ceiling does not clear the floor still get one bin of
    height instead of an inverted axis.
    """
    top = max(ceiling, config.y_floor + config.bin_size)
    return config.y_floor, top


def combined_chart_path(config, prefix, event_id):
    return os.path.join(
        config.output_dir,
        f'CombinedChart_SpecificLayout_{prefix}_Event{event_id}.png',
    )


def channel_chart_path(config, panel, prefix, event_id):
    name = panel.label.replace(' ', '')
    return os.path.join(
        config.output_dir, f'{name}_{prefix}_Event{event_id}.png'
    )


def summary_csv_path(config, prefix, event_id):
    return os.path.join(
        config.output_dir, f'ChannelSummary_{prefix}_Event{event_id}.csv'
    )


def _draw_trace(ax, event, panel, y_range, config, linewidth=3):
    times, values = channel_trace(
        event, panel.channel, config.sample_interval, config.time_max
    )
    ax.plot(times, values, color='black', linewidth=linewidth)
    ax.set_xlim(0, config.time_max)
    ax.set_ylim(*y_range)


def _annotate(ax, event, panel, baseline_label, x, y, fontsize, step):
    ax.text(
        x, y, f'Area: {event.area[panel.channel]:.2f}',
        transform=ax.transAxes, ha='left', va='top',
        color='blue', fontsize=fontsize,
    )
    ax.text(
        x, y - step,
        f'{baseline_label}: {event.baseline_mean[panel.channel]:.2f}',
        transform=ax.transAxes, ha='left', va='top',
        color='red', fontsize=fontsize,
    )


def plot_combined_chart(event, layout, y_range, config):
    """Draw every sensor of ``layout`` on one grid figure and save it."""
    layout = get_layout(layout)
    n_rows = len(layout.grid)
    n_cols = len(layout.grid[0])
    fig, axes = plt.subplots(
        n_rows, n_cols, figsize=config.combined_size, squeeze=False
    )
    fig.subplots_adjust(
        left=0.05, right=0.98, bottom=0.05, top=0.98,
        wspace=0.25, hspace=0.3,
    )

    for row, col, panel in iter_panels(layout):
        ax = axes[row][col]
        if panel is None:
            ax.axis('off')
            continue
        _draw_trace(ax, event, panel, y_range, config)
        ax.set_xlabel(X_LABEL, fontsize=16)
        ax.set_ylabel(Y_LABEL, fontsize=16)
        ax.tick_params(labelsize=12)
        ax.text(
            0.5, 0.94, panel.label, transform=ax.transAxes,
            ha='center', va='center', fontsize=28,
        )
        _annotate(
            ax, event, panel, layout.baseline_label,
            x=0.06, y=0.86, fontsize=16, step=0.08,
        )

    if layout.legend:
        fig.text(0.01, 0.03, f'X axis: Time (0-{config.time_max:g}) ns',
                 fontsize=20, ha='left', va='top')
        fig.text(0.01, 0.015, 'Y axis: ADC values(mV)',
                 fontsize=20, ha='left', va='top')

    output_path = combined_chart_path(config, event.prefix, event.event_id)
    plt.savefig(output_path, dpi=config.dpi)
    plt.close(fig)
    logger.info('Combined chart saved as %s', output_path)
    return output_path


def plot_channel_chart(event, panel, layout, y_range, config):
    """Standalone figure for one sensor."""
    layout = get_layout(layout)
    fig, ax = plt.subplots(1, 1, figsize=config.single_size)
    _draw_trace(ax, event, panel, y_range, config)
    ax.set_title(panel.label)
    ax.set_xlabel(X_LABEL)
    ax.set_ylabel(Y_LABEL)
    _annotate(
        ax, event, panel, layout.baseline_label,
        x=0.06, y=0.95, fontsize=11, step=0.06,
    )
    plt.tight_layout()
    output_path = channel_chart_path(
        config, panel, event.prefix, event.event_id
    )
    plt.savefig(output_path, dpi=config.dpi)
    plt.close(fig)
    logger.debug('Saved %s chart: %s', panel.label, output_path)
    return output_path


def plot_event_waveforms(
    data_file,
    event_id,
    layout='combined',
    config=None,
    save_csv=False,
):
    """Render all waveform charts of one event.

    Args:
        data_file: ROOT or HDF5 file holding the event tree
        event_id: event index, ``0 <= event_id < n_events``
        layout: 'pmt' (12 PMTs on a 4x3 grid) or 'combined'
            (PMTs and SiPMs on a 6x5 grid)
        config: PlotConfig; defaults are used when None
        save_csv: also write the per-channel summary table

    Returns:
        list of written file paths; empty when the event could not be read.
    """
    layout = get_layout(layout)
    if config is None:
        config = PlotConfig()

    try:
        event = load_event(data_file, event_id, tree_name=config.tree_name)
    except EventDataError as e:
        logger.error('%s', e)
        return []

    panels = layout_channels(layout)
    highest = max(p.channel for p in panels)
    if highest >= event.n_channels:
        logger.error(
            "Event %d in %s has %d channels; layout '%s' needs %d",
            event_id, data_file, event.n_channels, layout.name, highest + 1,
        )
        return []

    os.makedirs(config.output_dir, exist_ok=True)
    ceiling = display_ceiling(event.adc, config.bin_size)
    y_range = y_axis_range(ceiling, config)
    logger.info(
        'Event %d of %s: y-axis %g-%g', event_id,
        os.path.basename(str(data_file)), y_range[0], y_range[1],
    )

    outputs = [plot_combined_chart(event, layout, y_range, config)]
    for panel in panels:
        outputs.append(
            plot_channel_chart(event, panel, layout, y_range, config)
        )
    logger.info('Saved %d individual channel charts', len(panels))

    if save_csv:
        csv_out = summary_csv_path(config, event.prefix, event.event_id)
        event_summary(event, layout).to_csv(csv_out)
        logger.info('Saved channel summary CSV: %s', csv_out)
        outputs.append(csv_out)
    return outputs
