import logging
import os

import h5py
import numpy as np
import pytest

from pmt_sipm_waveform.converter import convert_folder, convert_root_to_hdf5, main
from pmt_sipm_waveform.event_data import EventFileError, MissingTreeError, load_event

from conftest import N_EVENTS, write_root


def test_convert_root_to_hdf5(root_file, event_arrays):
    out = convert_root_to_hdf5(root_file)
    assert out == os.path.splitext(root_file)[0] + '.h5'
    with h5py.File(out, 'r') as f:
        assert f.attrs['num_events'] == N_EVENTS
        assert f.attrs['num_channels'] == 23
        assert f.attrs['num_samples_per_event'] == 45
        assert f['tree/adcVal'].dtype == np.int16
    event = load_event(out, 0)
    np.testing.assert_array_equal(event.adc, event_arrays[0][0])
    np.testing.assert_allclose(event.area, event_arrays[1][0])


def test_existing_output_is_kept(root_file, tmp_path):
    target = tmp_path / 'run7.h5'
    target.write_bytes(b'placeholder')
    assert convert_root_to_hdf5(root_file) == str(target)
    assert target.read_bytes() == b'placeholder'


def test_missing_tree(root_file, tmp_path):
    with pytest.raises(MissingTreeError):
        convert_root_to_hdf5(root_file, str(tmp_path / 'x.h5'), tree_name='events')


def test_convert_folder(tmp_path, event_arrays):
    write_root(tmp_path / 'a.root', *event_arrays)
    write_root(tmp_path / 'b.root', *event_arrays, tree_name='other')
    outputs = convert_folder(str(tmp_path))
    assert [os.path.basename(p) for p in outputs] == ['a.h5']


def test_convert_folder_missing(tmp_path):
    with pytest.raises(FileNotFoundError):
        convert_folder(str(tmp_path / 'absent'))


def test_main(tmp_path, event_arrays, capsys):
    write_root(tmp_path / 'c.root', *event_arrays)
    assert main([str(tmp_path)]) == 0
    assert 'Converted 1 file(s).' in capsys.readouterr().out
    assert (tmp_path / 'c.h5').is_file()


def test_hdf5_input_rejected(h5_file):
    with pytest.raises(EventFileError, match='Not a ROOT file'):
        convert_root_to_hdf5(h5_file, h5_file + '.copy.h5')


def test_convert_folder_skips_hdf5(h5_file, tmp_path, caplog):
    with caplog.at_level(logging.WARNING):
        assert convert_folder(str(tmp_path), pattern='.h5') == []
    assert 'Skipping HDF5 file(s): run7.h5' in caplog.text
