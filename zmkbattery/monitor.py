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
Battery status refresh for status displays like the tray icon.
"""

import logging
import threading
import typing as tp

from .config import DeviceConfig
from .data import BatteryInfo
from .error import TransportError

logger = logging.getLogger(__name__)

NO_DATA = 'No battery data available'
LOADING = 'Loading...'

class Reader(tp.Protocol):
    def read_battery_levels(self, address: str) -> list[BatteryInfo]: ...

def format_levels(batteries: tp.Sequence[BatteryInfo]) -> str:
    if not batteries:
        return NO_DATA
    return '\n'.join('{}: {}%'.format(b.name, b.level) for b in batteries)

def low_batteries(
        batteries: tp.Iterable[BatteryInfo], threshold: int
    ) -> list[BatteryInfo]:
    return [b for b in batteries if b.level < threshold]

class Monitor:
    """
    Battery status of configured keyboards.

    Status text is shared between refresh calls and status display, the
    access is serialized with a lock.

    :var reader: Battery level reader.
    :var devices: Keyboards to read battery levels of.
    """
    def __init__(
            self, reader: Reader, devices: tp.Sequence[DeviceConfig]
        ) -> None:
        self.reader = reader
        self.devices = devices

        self._lock = threading.Lock()
        self._status = LOADING
        self._levels: list[BatteryInfo] = []

    @property
    def status(self) -> str:
        with self._lock:
            return self._status

    def refresh(self) -> str:
        """
        Read battery levels of all keyboards and update status text.

        Errors of a keyboard are shown in the status text.
        """
        with self._lock:
            lines = []
            levels = []
            for dev in self.devices:
                try:
                    batteries = self.reader.read_battery_levels(dev.address)
                except TransportError as ex:
                    logger.error('{}: {}'.format(dev.name, ex))
                    text = 'Error: {}'.format(ex)
                else:
                    levels.extend(batteries)
                    text = format_levels(batteries)
                    for b in low_batteries(batteries, dev.low_battery_threshold):
                        logger.warning(
                            'low battery of {} ({}): {}%'
                            .format(dev.name, b.name, b.level)
                        )

                if len(self.devices) > 1:
                    text = '{}\n{}'.format(dev.name, text)
                lines.append(text)

            self._status = '\n'.join(lines) if lines else NO_DATA
            self._levels = levels
            return self._status

    def tray_label(self, show_percentage: bool) -> str:
        """
        Get label for tray icon, which is the lowest battery level.
        """
        with self._lock:
            if not show_percentage or not self._levels:
                return ''
            return '{}%'.format(min(b.level for b in self._levels))

# vim: sw=4:et:ai
