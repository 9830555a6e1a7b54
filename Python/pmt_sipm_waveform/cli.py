import argparse
import logging
import sys

from .config import load_config
from .logutil import setup_logger
from .plot_event import plot_event_waveforms


class _ArgumentParser(argparse.ArgumentParser):
    """Exit with status 1 on usage errors."""

    def error(self, message):
        self.print_usage(sys.stderr)
        self.exit(1, f'{self.prog}: error: {message}\n')


def build_parser(prog, description):
    parser = _ArgumentParser(prog=prog, description=description)
    parser.add_argument('data_file', help='ROOT or HDF5 file with the event tree')
    parser.add_argument('event_id', type=int, help='Event index to plot')
    parser.add_argument(
        '--output-dir', default=None,
        help='Folder for the images (default: plots)',
    )
    parser.add_argument(
        '--config', default=None,
        help='YAML file with plot settings',
    )
    parser.add_argument(
        '--tree', default=None,
        help="Name of the event tree (default: 'tree')",
    )
    parser.add_argument(
        '--save-csv', action='store_true',
        help='Also save a per-channel area/baseline CSV',
    )
    parser.add_argument(
        '--log-dir', default=None,
        help='Write a rotating log file into this folder',
    )
    parser.add_argument(
        '--verbose', action='store_true', help='Log every saved file',
    )
    return parser


def run(layout, prog, description, argv=None):
    parser = build_parser(prog, description)
    args = parser.parse_args(argv)
    setup_logger(
        args.log_dir, level=logging.DEBUG if args.verbose else logging.INFO
    )
    try:
        config = load_config(
            args.config,
            {'output_dir': args.output_dir, 'tree_name': args.tree},
        )
    except ValueError as e:
        parser.error(str(e))

    plot_event_waveforms(
        args.data_file,
        args.event_id,
        layout=layout,
        config=config,
        save_csv=args.save_csv,
    )
    return 0


def main_pmt(argv=None):
    return run(
        'pmt', 'pmt-waveforms',
        'Plot the 12 PMT waveforms of one event on the PMT layout.',
        argv,
    )


def main_combined(argv=None):
    return run(
        'combined', 'event-waveforms',
        'Plot PMT and SiPM waveforms of one event on the detector layout.',
        argv,
    )


if __name__ == '__main__':
    sys.exit(main_combined())
