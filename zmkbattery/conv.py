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
Conversion functions for D-Bus property values and Bluetooth
characteristic data.

D-Bus property values are loosely typed. BlueZ sends strings, byte arrays
and other primitives, and `dbus-python` wraps them with its own
subclasses of `str`, `bytes`, `list` and `int`. The functions below
return `None` when a value cannot be converted, so each caller decides
what a conversion failure means.
"""

import typing as tp
from functools import singledispatch

@singledispatch
def to_str(value: tp.Any) -> tp.Optional[str]:
    return None

@to_str.register
def _to_str_str(value: str) -> tp.Optional[str]:
    return str(value)

@singledispatch
def to_bytes(value: tp.Any) -> tp.Optional[bytes]:
    return None

@to_bytes.register(bytes)
@to_bytes.register(bytearray)
def _to_bytes_bytes(value: tp.Union[bytes, bytearray]) -> tp.Optional[bytes]:
    return bytes(value)

@to_bytes.register(list)
@to_bytes.register(tuple)
def _to_bytes_seq(value: tp.Sequence[tp.Any]) -> tp.Optional[bytes]:
    # array of bytes, i.e. `dbus.Array` of `dbus.Byte` items
    if all(isinstance(v, int) and 0 <= v <= 255 for v in value):
        return bytes(value)
    return None

def to_level(data: bytes) -> int:
    """
    Convert Battery Level characteristic value into battery level.

    Battery level is the first byte of the value, zero if the value is
    empty.
    """
    return data[0] if data else 0

def to_name(data: bytes) -> str:
    """
    Convert Characteristic User Description descriptor value into a name.

    The value is UTF-8 encoded, trailing NUL bytes are removed.

    :raises UnicodeDecodeError: If the value is not valid UTF-8 data.
    """
    return data.decode('utf-8').rstrip('\0')

# vim: sw=4:et:ai
