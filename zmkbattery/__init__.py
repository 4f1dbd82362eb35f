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

# D-Bus bindings are imported on demand, see `zmkbattery.reader` module

from .battery import find_battery_levels, list_devices
from .config import Config, DeviceConfig, load_config, load_or_create
from .data import BatteryInfo, DeviceInfo, ManagedObjectTree
from .error import *
from .util import BATTERY_LEVEL_UUID, BATTERY_SERVICE_UUID, \
    USER_DESCRIPTION_UUID, device_path

__version__ = '0.1.0'

__all__ = [
    # battery levels
    'find_battery_levels', 'list_devices',

    # basic data
    'BatteryInfo', 'DeviceInfo', 'ManagedObjectTree',

    # configuration
    'Config', 'DeviceConfig', 'load_config', 'load_or_create',

    # errors
    'ZMKBatteryError', 'TransportError', 'ConfigError',

    # bluetooth identifiers
    'BATTERY_SERVICE_UUID', 'BATTERY_LEVEL_UUID', 'USER_DESCRIPTION_UUID',
    'device_path',
]

# vim: sw=4:et:ai
