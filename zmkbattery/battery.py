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
Find battery levels of a Bluetooth device in BlueZ managed object tree.

BlueZ exposes GATT hierarchy of a device as objects with hierarchical
paths

    /org/bluez/hci0/dev_AA_BB_CC_DD_EE_FF                       device
    /org/bluez/hci0/dev_AA_BB_CC_DD_EE_FF/service0010           service
    /org/bluez/hci0/dev_AA_BB_CC_DD_EE_FF/service0010/char0011  characteristic
    /org/bluez/hci0/dev_AA_BB_CC_DD_EE_FF/service0010/char0011/desc0013

ZMK split keyboard exposes one Battery Service for each of its halves.
"""

import logging
import typing as tp

from .config import DEFAULT_INTERFACE
from .conv import to_level, to_name, to_str
from .data import DEFAULT_BATTERY_NAME, BatteryInfo, DeviceInfo, \
    ManagedObjectTree, ReadValue
from .util import BATTERY_LEVEL_UUID, BATTERY_SERVICE_UUID, \
    USER_DESCRIPTION_UUID, INTERFACE_DEVICE, INTERFACE_GATT_CHR, \
    INTERFACE_GATT_DESC, INTERFACE_GATT_SERVICE, device_path, is_descendant

logger = logging.getLogger(__name__)

def find_objects(
        tree: ManagedObjectTree,
        parent: str,
        iface: str,
        uuid: str,
    ) -> tp.Iterator[str]:
    """
    Find paths of objects below parent path, which implement BlueZ
    interface and have UUID property of given value.

    :param tree: BlueZ managed object tree.
    :param parent: Parent object path.
    :param iface: BlueZ interface name.
    :param uuid: Value of UUID property.
    """
    for path, interfaces in tree.items():
        props = interfaces.get(iface)
        if props is not None \
                and is_descendant(path, parent) \
                and to_str(props.get('UUID')) == uuid:
            yield path

def find_battery_levels(
        tree: ManagedObjectTree,
        address: str,
        read_value: ReadValue,
        interface: str=DEFAULT_INTERFACE,
    ) -> list[BatteryInfo]:
    """
    Find battery levels of Bluetooth device.

    Empty list is returned if the device, its battery service or battery
    level characteristic cannot be found. An error raised by
    `read_value` function on battery level read is propagated.

    :param tree: BlueZ managed object tree.
    :param address: Bluetooth device MAC address.
    :param read_value: Function to read value of BlueZ object.
    :param interface: Bluetooth interface, i.e. `hci0`.
    """
    dev_path = device_path(address, interface)
    batteries = []
    for svc_path in find_objects(
            tree, dev_path, INTERFACE_GATT_SERVICE, BATTERY_SERVICE_UUID
        ):
        logger.debug('battery service found: {}'.format(svc_path))
        chr_path = next(find_objects(
            tree, svc_path, INTERFACE_GATT_CHR, BATTERY_LEVEL_UUID
        ), None)
        if chr_path is None:
            logger.debug(
                'battery level characteristic not found for {}'
                .format(svc_path)
            )
            continue

        level = to_level(read_value(chr_path, INTERFACE_GATT_CHR))
        desc_path = next(find_objects(
            tree, chr_path, INTERFACE_GATT_DESC, USER_DESCRIPTION_UUID
        ), None)
        if desc_path is None:
            name = DEFAULT_BATTERY_NAME
        else:
            name = read_name(read_value, desc_path)

        batteries.append(BatteryInfo(name, level))

    logger.debug('battery levels of {}: {}'.format(address, batteries))
    return batteries

def read_name(
        read_value: ReadValue,
        path: str,
        default: str=DEFAULT_BATTERY_NAME,
    ) -> str:
    """
    Read name from Characteristic User Description descriptor.

    Any error is ignored and default name is returned instead.

    :param read_value: Function to read value of BlueZ object.
    :param path: Path of descriptor object.
    :param default: Name returned on read or decoding error.
    """
    try:
        return to_name(read_value(path, INTERFACE_GATT_DESC))
    except Exception as ex:
        logger.debug('cannot read name from {}: {}'.format(path, ex))
        return default

def list_devices(tree: ManagedObjectTree) -> list[DeviceInfo]:
    """
    List Bluetooth devices known to BlueZ.

    Devices without name or address are skipped.

    :param tree: BlueZ managed object tree.
    """
    devices = []
    for interfaces in tree.values():
        props = interfaces.get(INTERFACE_DEVICE)
        if props is None:
            continue

        name = to_str(props.get('Name'))
        address = to_str(props.get('Address'))
        if name is not None and address is not None:
            devices.append(DeviceInfo(name, address))
    return devices

# vim: sw=4:et:ai
