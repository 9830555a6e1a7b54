import logging
import os

import pytest

from pmt_sipm_waveform.cli import main_combined, main_pmt


@pytest.mark.parametrize('argv', [[], ['only_file.root'], ['a.root', '1', 'extra']])
def test_wrong_argument_count_exits_1(argv, capsys):
    with pytest.raises(SystemExit) as excinfo:
        main_combined(argv)
    assert excinfo.value.code == 1
    assert 'usage: event-waveforms' in capsys.readouterr().err


def test_non_integer_event_id_exits_1(capsys):
    with pytest.raises(SystemExit) as excinfo:
        main_pmt(['a.root', 'first'])
    assert excinfo.value.code == 1
    assert 'usage: pmt-waveforms' in capsys.readouterr().err


def test_pmt_command_writes_images(h5_file, tmp_path):
    out = tmp_path / 'pmt_out'
    assert main_pmt([h5_file, '0', '--output-dir', str(out)]) == 0
    names = os.listdir(out)
    assert len(names) == 13
    assert 'CombinedChart_SpecificLayout_run7_Event0.png' in names


def test_out_of_range_returns_without_images(h5_file, tmp_path, caplog):
    out = tmp_path / 'none'
    with caplog.at_level(logging.ERROR):
        assert main_combined([h5_file, '99', '--output-dir', str(out)]) == 0
    assert not out.exists()
    assert 'EventID 99 is out of range' in caplog.text


def test_config_file_and_overrides(h5_file, tmp_path):
    cfg = tmp_path / 'plot.yaml'
    cfg.write_text(
        f"output_dir: {tmp_path / 'from_yaml'}\n"
        "dpi: 20\n"
        "tree_name: tree\n"
    )
    out = tmp_path / 'from_cli'
    argv = [h5_file, '1', '--config', str(cfg), '--output-dir', str(out),
            '--save-csv']
    assert main_combined(argv) == 0
    assert not (tmp_path / 'from_yaml').exists()
    names = os.listdir(out)
    assert len(names) == 24
    assert 'ChannelSummary_run7_Event1.csv' in names


def test_unknown_config_key_exits_1(h5_file, tmp_path, capsys):
    cfg = tmp_path / 'bad.yaml'
    cfg.write_text('colour: red\n')
    with pytest.raises(SystemExit) as excinfo:
        main_combined([h5_file, '0', '--config', str(cfg)])
    assert excinfo.value.code == 1
    assert 'Unknown config key(s): colour' in capsys.readouterr().err


def test_log_dir_receives_log_file(h5_file, tmp_path):
    logs = tmp_path / 'logs'
    argv = [h5_file, '5', '--log-dir', str(logs), '--output-dir',
            str(tmp_path / 'p')]
    assert main_pmt(argv) == 0
    logging.getLogger('pmt_sipm_waveform').handlers[-1].flush()
    text = (logs / 'pmt_sipm_waveform.log').read_text(encoding='utf-8')
    assert 'out of range' in text


@pytest.mark.parametrize('line', ['bin_size: ten', 'y_floor: low', 'time_max: -1'])
def test_bad_config_value_exits_1(h5_file, tmp_path, capsys, line):
    cfg = tmp_path / 'bad_value.yaml'
    cfg.write_text(line + '\n')
    out = tmp_path / 'never'
    with pytest.raises(SystemExit) as excinfo:
        main_pmt([h5_file, '0', '--config', str(cfg), '--output-dir', str(out)])
    assert excinfo.value.code == 1
    assert line.split(':')[0] in capsys.readouterr().err
    assert not out.exists()
