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

from unittest import mock

import pytest

dbus = pytest.importorskip('dbus')

from zmkbattery.bus import Bus
from zmkbattery.data import BatteryInfo, DeviceInfo
from zmkbattery.error import TransportError
from zmkbattery.reader import BatteryReader

DEV = '/org/bluez/hci0/dev_AA_BB_CC_DD_EE_FF'

MANAGED = dbus.Dictionary({
    dbus.ObjectPath(DEV): {
        dbus.String('org.bluez.Device1'): {
            dbus.String('Name'): dbus.String('Corne'),
            dbus.String('Address'): dbus.String('AA:BB:CC:DD:EE:FF'),
        },
    },
    dbus.ObjectPath(DEV + '/service0010'): {
        dbus.String('org.bluez.GattService1'): {
            dbus.String('UUID'): dbus.String(
                '0000180f-0000-1000-8000-00805f9b34fb'
            ),
        },
    },
    dbus.ObjectPath(DEV + '/service0010/char0011'): {
        dbus.String('org.bluez.GattCharacteristic1'): {
            dbus.String('UUID'): dbus.String(
                '00002a19-0000-1000-8000-00805f9b34fb'
            ),
        },
    },
})

def dbus_error(msg: str='org.bluez.Error.Failed') -> Exception:
    return dbus.exceptions.DBusException(msg)

@pytest.fixture
def interface():  # type: ignore
    with mock.patch.object(dbus, 'Interface') as iface:
        yield iface

def test_fetch_tree(interface: mock.Mock) -> None:
    """
    Test fetching BlueZ managed object tree.
    """
    interface.return_value.GetManagedObjects.return_value = MANAGED
    system_bus = mock.Mock()
    bus = Bus(system_bus)

    tree = bus.fetch_tree()
    assert set(tree) == {
        DEV, DEV + '/service0010', DEV + '/service0010/char0011'
    }
    assert all(type(p) is str for p in tree)
    assert tree[DEV]['org.bluez.Device1']['Name'] == 'Corne'

    system_bus.get_object.assert_called_once_with('org.bluez', '/')
    interface.assert_called_once_with(
        system_bus.get_object.return_value,
        'org.freedesktop.DBus.ObjectManager',
    )
    interface.return_value.GetManagedObjects.assert_called_once_with(
        timeout=5.0
    )

def test_fetch_tree_error(interface: mock.Mock) -> None:
    """
    Test error on fetching BlueZ managed object tree.
    """
    error = dbus_error('org.freedesktop.DBus.Error.ServiceUnknown')
    interface.return_value.GetManagedObjects.side_effect = error
    bus = Bus(mock.Mock())

    with pytest.raises(TransportError) as ctx:
        bus.fetch_tree()
    assert ctx.value.__cause__ is error

def test_fetch_tree_malformed(interface: mock.Mock) -> None:
    """
    Test error on malformed reply of BlueZ object manager.
    """
    interface.return_value.GetManagedObjects.return_value = [DEV]
    bus = Bus(mock.Mock())

    with pytest.raises(TransportError):
        bus.fetch_tree()

def test_read_value(interface: mock.Mock) -> None:
    """
    Test reading value of GATT characteristic.
    """
    read = interface.return_value.ReadValue
    read.return_value = dbus.Array([dbus.Byte(42)], signature='y')
    system_bus = mock.Mock()
    bus = Bus(system_bus)

    path = DEV + '/service0010/char0011'
    assert bus.read_value(path, 'org.bluez.GattCharacteristic1') == b'*'

    system_bus.get_object.assert_called_once_with('org.bluez', path)
    interface.assert_called_once_with(
        system_bus.get_object.return_value, 'org.bluez.GattCharacteristic1'
    )
    (options,), kw = read.call_args
    assert options == {}
    assert kw == {'timeout': 5.0}

def test_read_value_error(interface: mock.Mock) -> None:
    """
    Test error on reading value of GATT characteristic.
    """
    error = dbus_error('org.bluez.Error.NotPermitted')
    interface.return_value.ReadValue.side_effect = error
    bus = Bus(mock.Mock())

    with pytest.raises(TransportError) as ctx:
        bus.read_value(DEV + '/char', 'org.bluez.GattCharacteristic1')
    assert ctx.value.__cause__ is error

def test_read_value_invalid(interface: mock.Mock) -> None:
    """
    Test error on reading value, which is not array of bytes.
    """
    interface.return_value.ReadValue.return_value = dbus.String('abc')
    bus = Bus(mock.Mock())

    with pytest.raises(TransportError):
        bus.read_value(DEV + '/char', 'org.bluez.GattCharacteristic1')

def test_create_error() -> None:
    """
    Test error on connecting to D-Bus system bus.
    """
    with mock.patch.object(dbus, 'SystemBus', side_effect=dbus_error()):
        with pytest.raises(TransportError):
            Bus.create()

def test_reader() -> None:
    """
    Test reading battery levels with battery reader.
    """
    bus = mock.Mock()
    bus.interface = 'hci0'
    bus.fetch_tree.return_value = {
        str(p): {str(i): dict(v) for i, v in d.items()}
        for p, d in MANAGED.items()
    }
    bus.read_value.return_value = b'\x37'

    reader = BatteryReader(bus)
    assert reader.read_battery_levels('AA-BB-CC-DD-EE-FF') \
        == [BatteryInfo('Battery', 55)]
    bus.read_value.assert_called_once_with(
        DEV + '/service0010/char0011', 'org.bluez.GattCharacteristic1'
    )
    assert reader.list_devices() == [DeviceInfo('Corne', 'AA:BB:CC:DD:EE:FF')]
    assert bus.fetch_tree.call_count == 2

def test_reader_error() -> None:
    """
    Test that transport error of battery level read is not suppressed.
    """
    bus = mock.Mock()
    bus.interface = 'hci0'
    bus.fetch_tree.return_value = MANAGED
    bus.read_value.side_effect = TransportError('Not connected')

    reader = BatteryReader(bus)
    with pytest.raises(TransportError):
        reader.read_battery_levels('AA:BB:CC:DD:EE:FF')

# vim: sw=4:et:ai
