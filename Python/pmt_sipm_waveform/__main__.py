"""Module entry point for `python -m pmt_sipm_waveform`.

Runs any of the package's console commands without the installed
scripts, by short name.

Usage examples:
    python -m pmt_sipm_waveform --list
    python -m pmt_sipm_waveform combined run42.root 17 --save-csv
    python -m pmt_sipm_waveform pmt run42.root 17
    python -m pmt_sipm_waveform convert data/
"""

import sys

from .cli import main_combined, main_pmt
from .converter import main as convert_main


# short name -> (console script, entry function, summary)
COMMANDS = {
    'combined': (
        'event-waveforms', main_combined,
        'PMT and SiPM waveforms of one event, 6x5 layout',
    ),
    'pmt': (
        'pmt-waveforms', main_pmt,
        'PMT waveforms of one event, 4x3 layout',
    ),
    'convert': (
        'convert-event-root', convert_main,
        'convert event-tree ROOT files to HDF5',
    ),
}


def _print_commands(stream):
    print('Commands:', file=stream)
    for name, (script, _, summary) in COMMANDS.items():
        print(f'  {name:<9} ({script:<18}) {summary}', file=stream)
    print('\nRun a command with --help for details, e.g.:', file=stream)
    print('  python -m pmt_sipm_waveform combined --help', file=stream)


def main(argv=None):
    argv = list(sys.argv[1:] if argv is None else argv)
    if not argv or argv[0] in ('--list', '-h', '--help'):
        _print_commands(sys.stdout)
        return 0
    name, rest = argv[0], argv[1:]
    if name not in COMMANDS:
        print(f"Unknown command '{name}'", file=sys.stderr)
        _print_commands(sys.stderr)
        return 1
    return COMMANDS[name][1](rest)


if __name__ == '__main__':  # pragma: no cover
    sys.exit(main())
