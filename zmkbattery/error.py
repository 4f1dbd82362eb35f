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
ZMK Battery Monitor errors.

Absence of a device, a service, a characteristic or a descriptor is not
an error. It is reported as an empty result or as a default value.
"""

class ZMKBatteryError(Exception):
    """
    Base class for ZMK Battery Monitor errors.
    """

class TransportError(ZMKBatteryError):
    """
    Error raised when connection to BlueZ daemon cannot be made or when
    a mandatory D-Bus call fails.

    The original D-Bus error is available as `__cause__` attribute.
    """

class ConfigError(ZMKBatteryError):
    """
    Error raised when configuration file cannot be read or is invalid.
    """

__all__ = ['ZMKBatteryError', 'TransportError', 'ConfigError']

# vim: sw=4:et:ai
