#
# ZMK Battery Monitor - read battery levels of ZMK keyboards via BlueZ.
#
# Copyright (C) 2025 by ZMK Battery Monitor authors
#
# This program is free software: you can redistribute it and/or modify
# it under the terms of the GNU General Public License as published by
# the Free Software Foundation, either version 3 of the License, or
# (at your option) any later version.
#
# This program is distributed in the hope that it will be useful,
# but WITHOUT ANY WARRANTY; without even the implied warranty of
# MERCHANTABILITY or FITNESS FOR A PARTICULAR PURPOSE.  See the
# GNU General Public License for more details.
#
# You should have received a copy of the GNU General Public License
# along with this program.  If not, see <http://www.gnu.org/licenses/>.
#

import sys
from pathlib import Path
from unittest import mock

from zmkbattery.cli import config_main, main, tray_main
from zmkbattery.config import generate_template
from zmkbattery.data import BatteryInfo, DeviceInfo
from zmkbattery.error import TransportError

import pytest

@pytest.fixture
def reader():  # type: ignore
    pytest.importorskip('dbus')
    with mock.patch('zmkbattery.reader.BatteryReader.create') as create:
        yield create.return_value

def test_main(reader: mock.Mock, capsys: pytest.CaptureFixture[str]) -> None:
    """
    Test printing battery levels of a keyboard.
    """
    reader.read_battery_levels.return_value = [
        BatteryInfo('Left', 42), BatteryInfo('Right', 17)
    ]
    assert main(['AA:BB:CC:DD:EE:FF']) == 0

    out = capsys.readouterr().out
    assert 'Scanning for battery information on AA:BB:CC:DD:EE:FF...' in out
    assert '=== Battery Levels ===\nLeft: 42%\nRight: 17%\n' in out

def test_main_no_data(
        reader: mock.Mock, capsys: pytest.CaptureFixture[str]
    ) -> None:
    """
    Test help message when keyboard provides no battery data.
    """
    reader.read_battery_levels.return_value = []
    assert main(['AA:BB:CC:DD:EE:FF']) == 0
    assert 'No battery services found' in capsys.readouterr().out

def test_main_error(
        reader: mock.Mock, capsys: pytest.CaptureFixture[str]
    ) -> None:
    """
    Test listing devices on battery level read error.
    """
    reader.read_battery_levels.side_effect = TransportError('Not connected')
    reader.list_devices.return_value = [DeviceInfo('Corne', '11:22:33:44:55:66')]
    assert main(['AA:BB:CC:DD:EE:FF']) == 1

    captured = capsys.readouterr()
    assert 'Error reading battery levels: Not connected' in captured.err
    assert 'Corne - 11:22:33:44:55:66' in captured.out

def test_main_config(
        reader: mock.Mock,
        tmp_path: Path,
        capsys: pytest.CaptureFixture[str],
    ) -> None:
    """
    Test reading battery levels of configured keyboards.
    """
    path = tmp_path / 'config.toml'
    path.write_text(
        '[[devices]]\nname = "a"\naddress = "11:11:11:11:11:11"\n'
        '[[devices]]\nname = "b"\naddress = "22:22:22:22:22:22"\n'
        'enabled = false\n'
    )
    reader.read_battery_levels.return_value = [BatteryInfo('Battery', 99)]
    assert main(['--config', str(path)]) == 0
    reader.read_battery_levels.assert_called_once_with('11:11:11:11:11:11')

def test_main_interface(reader: mock.Mock) -> None:
    """
    Test reading battery levels via selected Bluetooth interface.
    """
    from zmkbattery.reader import BatteryReader

    reader.read_battery_levels.return_value = []
    assert main(['--interface', 'hci1', 'AA:BB:CC:DD:EE:FF']) == 0
    BatteryReader.create.assert_called_once_with('hci1')  # type: ignore

@pytest.mark.parametrize('argv, expected', [
    ([], 'hci0'),
    (['-i', 'hci1'], 'hci1'),
])
def test_tray_interface(
        reader: mock.Mock,
        monkeypatch: pytest.MonkeyPatch,
        tmp_path: Path,
        argv: list[str],
        expected: str,
    ) -> None:
    """
    Test running tray icon with selected Bluetooth interface.
    """
    from zmkbattery.reader import BatteryReader

    # tray icon module requires GTK, use its replacement
    tray = mock.Mock()
    monkeypatch.setitem(sys.modules, 'zmkbattery.tray', tray)

    path = tmp_path / 'config.toml'
    argv = argv + ['--config', str(path)]
    assert tray_main(argv) == 0

    BatteryReader.create.assert_called_once_with(expected)  # type: ignore
    tray.BatteryTray.return_value.run.assert_called_once_with()

def test_config_generate(capsys: pytest.CaptureFixture[str]) -> None:
    """
    Test printing configuration template.
    """
    assert config_main(['generate']) == 0
    assert capsys.readouterr().out == generate_template()

def test_config_show(tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
    """
    Test showing configuration.
    """
    path = tmp_path / 'config.toml'
    path.write_text(generate_template())

    assert config_main(['--config', str(path)]) == 0
    out = capsys.readouterr().out
    assert '  - My ZMK Keyboard (00:00:00:00:00:00) [enabled]' in out
    assert '    Low battery threshold: 20%' in out

def test_config_missing(
        tmp_path: Path, capsys: pytest.CaptureFixture[str]
    ) -> None:
    """
    Test showing missing configuration.
    """
    path = tmp_path / 'config.toml'
    assert config_main(['--config', str(path)]) == 0
    assert 'No config file found at: {}'.format(path) \
        in capsys.readouterr().out
    assert not path.exists()

# vim: sw=4:et:ai
