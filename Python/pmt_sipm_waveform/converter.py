import argparse
import logging
import os

import h5py
import numpy as np

from .event_data import (
    BRANCHES,
    EventDataError,
    EventFileError,
    get_tree,
    is_hdf5_path,
    open_source,
)
from .logutil import setup_logger


__all__ = [
    'convert_root_to_hdf5',
    'convert_folder',
]

logger = logging.getLogger(__name__)

ROOT_SUFFIX = '.root'


def convert_root_to_hdf5(
    root_file,
    output_path=None,
    tree_name='tree',
    sample_interval_ns=16.0,
):
    """Copy the event tree of ``root_file`` into an HDF5 file.

    The HDF5 file holds a group ``tree_name`` with one gzip dataset per
    branch; an existing output is left untouched.
    """
    if is_hdf5_path(root_file):
        raise EventFileError(f'Not a ROOT file: {root_file}')
    if output_path is None:
        output_path = os.path.splitext(root_file)[0] + '.h5'
    if os.path.exists(output_path):
        logger.info('HDF5 exists; skip: %s', output_path)
        return output_path
    with open_source(root_file) as f:
        tree = get_tree(f, root_file, tree_name)
        arrays = tree.arrays(list(BRANCHES), library='np')

    adc = np.asarray(arrays['adcVal'], dtype='int16')
    with h5py.File(output_path, 'w') as out:
        group = out.create_group(tree_name)
        group.create_dataset('adcVal', data=adc, compression='gzip')
        group.create_dataset(
            'area', data=np.asarray(arrays['area'], dtype=float),
            compression='gzip',
        )
        group.create_dataset(
            'baselineMean',
            data=np.asarray(arrays['baselineMean'], dtype=float),
            compression='gzip',
        )
        out.attrs['num_events'] = adc.shape[0]
        out.attrs['num_channels'] = adc.shape[1] if adc.ndim > 1 else 0
        out.attrs['num_samples_per_event'] = adc.shape[2] if adc.ndim > 2 else 0
        out.attrs['sample_interval_ns'] = sample_interval_ns
        out.attrs['source_file'] = str(root_file)
    logger.info('Saved: %s', output_path)
    return output_path


def convert_folder(folder_path, pattern=ROOT_SUFFIX, tree_name='tree'):
    if not os.path.isdir(folder_path):
        raise FileNotFoundError(f'Folder not found: {folder_path}')
    files = sorted(f for f in os.listdir(folder_path) if f.endswith(pattern))
    skipped = [f for f in files if is_hdf5_path(f)]
    if skipped:
        logger.warning('Skipping HDF5 file(s): %s', ', '.join(skipped))
        files = [f for f in files if not is_hdf5_path(f)]
    if not files:
        logger.warning("No files matching '%s' in %s", pattern, folder_path)
        return []
    outputs = []
    for fname in files:
        full = os.path.join(folder_path, fname)
        logger.info('Processing: %s', fname)
        try:
            outputs.append(convert_root_to_hdf5(full, tree_name=tree_name))
        except EventDataError as e:
            logger.error('Skipping %s: %s', fname, e)
    return outputs


def main(argv=None):
    parser = argparse.ArgumentParser(
        description='Convert event-tree ROOT files to HDF5.'
    )
    parser.add_argument(
        'folder', nargs='?', default='.',
        help='Folder to search (default: .)'
    )
    parser.add_argument(
        '--pattern', default=ROOT_SUFFIX,
        help='Filename suffix pattern (default: .root)'
    )
    parser.add_argument(
        '--tree', default='tree', help="Tree name (default: 'tree')"
    )
    args = parser.parse_args(argv)
    setup_logger()

    outputs = convert_folder(args.folder, pattern=args.pattern,
                             tree_name=args.tree)
    if outputs:
        print(f'Converted {len(outputs)} file(s).')
    else:
        print('No files converted.')
    return 0


if __name__ == '__main__':
    main()
