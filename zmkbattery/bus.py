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
D-Bus access to BlueZ daemon.

Only two D-Bus calls are made

- `GetManagedObjects` of BlueZ object manager to fetch the tree of
  objects
- `ReadValue` of GATT characteristic or GATT descriptor
"""

from __future__ import annotations

import logging
import typing as tp

import dbus

from .config import BLUEZ_SERVICE, DEFAULT_DBUS_TIMEOUT, DEFAULT_INTERFACE
from .conv import to_bytes
from .data import ManagedObjectTree
from .error import TransportError

logger = logging.getLogger(__name__)

INTERFACE_OBJECT_MANAGER = 'org.freedesktop.DBus.ObjectManager'

class Bus:
    """
    Connection to BlueZ daemon via D-Bus system bus.

    The connection is created once and reused by all calls.

    :var system_bus: D-Bus system bus connection.
    :var interface: Bluetooth interface, i.e. `hci0`.
    """
    def __init__(
            self,
            system_bus: dbus.Bus,
            interface: str=DEFAULT_INTERFACE,
            timeout: float=DEFAULT_DBUS_TIMEOUT,
        ) -> None:
        self.system_bus = system_bus
        self.interface = interface
        self.timeout = timeout

    @staticmethod
    def create(interface: str=DEFAULT_INTERFACE) -> Bus:
        """
        Connect to D-Bus system bus.

        :param interface: Bluetooth interface, i.e. `hci0`.
        """
        try:
            system_bus = dbus.SystemBus()
        except dbus.exceptions.DBusException as ex:
            raise TransportError(
                'Cannot connect to D-Bus system bus: {}'.format(ex)
            ) from ex
        return Bus(system_bus, interface)

    def fetch_tree(self) -> ManagedObjectTree:
        """
        Fetch tree of all objects managed by BlueZ daemon.
        """
        try:
            obj = self.system_bus.get_object(BLUEZ_SERVICE, '/')
            manager = dbus.Interface(obj, INTERFACE_OBJECT_MANAGER)
            managed = manager.GetManagedObjects(timeout=self.timeout)
        except dbus.exceptions.DBusException as ex:
            raise TransportError(
                'Cannot fetch BlueZ managed objects: {}'.format(ex)
            ) from ex

        try:
            tree = {
                str(path): {
                    str(iface): {str(k): v for k, v in props.items()}
                    for iface, props in interfaces.items()
                }
                for path, interfaces in managed.items()
            }
        except (AttributeError, TypeError) as ex:
            raise TransportError(
                'Malformed reply of BlueZ object manager: {}'.format(ex)
            ) from ex

        logger.debug('fetched {} BlueZ objects'.format(len(tree)))
        return tree

    def read_value(self, path: str, iface: str) -> bytes:
        """
        Read value of GATT characteristic or GATT descriptor.

        :param path: Object path of GATT characteristic or descriptor.
        :param iface: BlueZ interface of the object.
        """
        try:
            obj = self.system_bus.get_object(BLUEZ_SERVICE, path)
            value = dbus.Interface(obj, iface).ReadValue(
                dbus.Dictionary({}, signature='sv'), timeout=self.timeout
            )
        except dbus.exceptions.DBusException as ex:
            raise TransportError(
                'Cannot read value of {}: {}'.format(path, ex)
            ) from ex

        data = to_bytes(value)
        if data is None:
            raise TransportError(
                'Cannot decode value of {}: {!r}'.format(path, value)
            )
        return data

# vim: sw=4:et:ai
