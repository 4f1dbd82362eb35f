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

from __future__ import annotations

import logging

from .battery import find_battery_levels, list_devices
from .bus import Bus
from .config import DEFAULT_INTERFACE
from .data import BatteryInfo, DeviceInfo

logger = logging.getLogger(__name__)

class BatteryReader:
    """
    Battery level reader of ZMK keyboards.

    BlueZ managed object tree is fetched on each read, nothing is cached.
    """
    def __init__(self, bus: Bus) -> None:
        self.bus = bus

    @staticmethod
    def create(interface: str=DEFAULT_INTERFACE) -> BatteryReader:
        return BatteryReader(Bus.create(interface))

    def read_battery_levels(self, address: str) -> list[BatteryInfo]:
        """
        Read battery levels of a keyboard.

        :param address: Bluetooth device MAC address of the keyboard.
        """
        logger.info('reading battery levels of {}'.format(address))
        tree = self.bus.fetch_tree()
        return find_battery_levels(
            tree, address, self.bus.read_value, self.bus.interface
        )

    def list_devices(self) -> list[DeviceInfo]:
        return list_devices(self.bus.fetch_tree())

# vim: sw=4:et:ai
