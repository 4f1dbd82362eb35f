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

"""
Bluetooth identifiers and BlueZ object path functions.
"""

import typing as tp

from .config import DEFAULT_INTERFACE

# function to convert 16-bit UUID to full 128-bit Bluetooth normative UUID
# string
to_uuid: tp.Callable[[int], str] = '0000{:04x}-0000-1000-8000-00805f9b34fb'.format

BATTERY_SERVICE_UUID = to_uuid(0x180f)
BATTERY_LEVEL_UUID = to_uuid(0x2a19)
USER_DESCRIPTION_UUID = to_uuid(0x2901)

INTERFACE_DEVICE = 'org.bluez.Device1'
INTERFACE_GATT_SERVICE = 'org.bluez.GattService1'
INTERFACE_GATT_CHR = 'org.bluez.GattCharacteristic1'
INTERFACE_GATT_DESC = 'org.bluez.GattDescriptor1'

def normalize_address(address: str) -> str:
    """
    Convert Bluetooth device address into the form used in BlueZ object
    paths.

    Both `AA:BB:CC:DD:EE:FF` and `AA-BB-CC-DD-EE-FF` are accepted and
    converted into `AA_BB_CC_DD_EE_FF`.

    The hex digits are upper case, because BlueZ names device objects
    with upper case addresses, i.e. `/org/bluez/hci0/dev_AA_BB_CC_DD_EE_FF`.
    A lower case address would never match a path of the object tree.

    :param address: Bluetooth device MAC address.
    """
    return address.strip().replace(':', '_').replace('-', '_').upper()

def adapter_path(interface: str=DEFAULT_INTERFACE) -> str:
    return '/org/bluez/{}'.format(interface)

def device_path(address: str, interface: str=DEFAULT_INTERFACE) -> str:
    """
    Get BlueZ object path of a Bluetooth device.

    :param address: Bluetooth device MAC address.
    :param interface: Bluetooth interface, i.e. `hci0`.
    """
    return '{}/dev_{}'.format(
        adapter_path(interface), normalize_address(address)
    )

def is_descendant(path: str, parent: str) -> bool:
    """
    Check if BlueZ object path is below parent object path.

    This is plain string prefix test, so `/a/bc` is considered to be
    below `/a/b`.
    """
    return path != parent and path.startswith(parent)

# vim: sw=4:et:ai
