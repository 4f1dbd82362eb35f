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
Basic records and types.
"""

import dataclasses as dtc
import typing as tp

DEFAULT_BATTERY_NAME = 'Battery'

# object path -> interface name -> property name -> property value
ManagedObjectTree = tp.Mapping[str, tp.Mapping[str, tp.Mapping[str, tp.Any]]]

# read value of object path and interface pair
ReadValue = tp.Callable[[str, str], bytes]

@dtc.dataclass(frozen=True)
class BatteryInfo:
    """
    Battery level of a keyboard or of a part of a keyboard.

    :var name: Battery name read from characteristic user description.
    :var level: Battery level in percent.
    """
    name: str
    level: int

@dtc.dataclass(frozen=True)
class DeviceInfo:
    """
    Bluetooth device known to BlueZ.
    """
    name: str
    address: str

    def __iter__(self) -> tp.Iterator[str]:
        yield self.name
        yield self.address

# vim: sw=4:et:ai
