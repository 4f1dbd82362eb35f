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
ZMK Battery Monitor constants and configuration file.
"""

from __future__ import annotations

import dataclasses as dtc
import logging
import os
import tomllib
import typing as tp
from pathlib import Path

from .error import ConfigError

logger = logging.getLogger(__name__)

BLUEZ_SERVICE = 'org.bluez'
DEFAULT_INTERFACE = 'hci0'

# D-Bus method call timeout in seconds
DEFAULT_DBUS_TIMEOUT = 5.0

DEFAULT_UPDATE_INTERVAL = 60
DEFAULT_LOG_LEVEL = 'info'
DEFAULT_LOW_BATTERY_THRESHOLD = 20
DEFAULT_ICON_THEME = 'battery'

CONFIG_DIR = 'zmk-battery-monitor'
CONFIG_FILE = 'config.toml'

LOG_LEVELS = {
    'trace': logging.DEBUG,
    'debug': logging.DEBUG,
    'info': logging.INFO,
    'warn': logging.WARNING,
    'error': logging.ERROR,
}

TEMPLATE = """\
# ZMK Battery Monitor Configuration

[general]
# Update interval in seconds
update_interval = 60
# Log level: trace, debug, info, warn, error
log_level = "info"

# Define your keyboards here
# You can have multiple devices and enable/disable them individually

[[devices]]
name = "My ZMK Keyboard"
address = "00:00:00:00:00:00"  # Replace with your keyboard's MAC address
enabled = true
low_battery_threshold = 20

# Example of a second keyboard (disabled)
# [[devices]]
# name = "Second Keyboard"
# address = "11:11:11:11:11:11"
# enabled = false
# low_battery_threshold = 15

[tray]
enabled = true
show_percentage_in_tray = false
icon_theme = "battery"  # Icon name for system tray
"""

@dtc.dataclass(frozen=True)
class GeneralConfig:
    """
    General configuration.

    :var update_interval: Battery levels refresh interval in seconds.
    :var log_level: Log level name, one of `LOG_LEVELS` keys.
    """
    update_interval: int=DEFAULT_UPDATE_INTERVAL
    log_level: str=DEFAULT_LOG_LEVEL

@dtc.dataclass(frozen=True)
class DeviceConfig:
    """
    Keyboard configuration.

    :var name: Name of keyboard.
    :var address: Bluetooth MAC address of keyboard.
    :var enabled: Read battery levels of the keyboard if true.
    :var low_battery_threshold: Battery level in percent, below which
        battery is considered low.
    """
    name: str
    address: str
    enabled: bool=True
    low_battery_threshold: int=DEFAULT_LOW_BATTERY_THRESHOLD

@dtc.dataclass(frozen=True)
class TrayConfig:
    enabled: bool=True
    show_percentage_in_tray: bool=False
    icon_theme: str=DEFAULT_ICON_THEME

@dtc.dataclass(frozen=True)
class Config:
    general: GeneralConfig=GeneralConfig()
    devices: tuple[DeviceConfig, ...]=()
    tray: TrayConfig=TrayConfig()

    def primary_device(self) -> tp.Optional[DeviceConfig]:
        """
        Get first enabled keyboard.
        """
        return next(self.enabled_devices(), None)

    def enabled_devices(self) -> tp.Iterator[DeviceConfig]:
        return (d for d in self.devices if d.enabled)

def config_path() -> Path:
    """
    Get default path of configuration file.
    """
    base = os.environ.get('XDG_CONFIG_HOME') or Path.home() / '.config'
    return Path(base) / CONFIG_DIR / CONFIG_FILE

def generate_template() -> str:
    """
    Generate configuration file template.
    """
    return TEMPLATE

def load_config(path: Path) -> Config:
    """
    Load configuration from a file.

    :param path: Path of configuration file.
    """
    try:
        with open(path, 'rb') as f:
            data = tomllib.load(f)
    except OSError as ex:
        raise ConfigError(
            'Failed to read config file: {}'.format(path)
        ) from ex
    except tomllib.TOMLDecodeError as ex:
        raise ConfigError(
            'Failed to parse config file: {}: {}'.format(path, ex)
        ) from ex

    return parse_config(data)

def load_or_create(path: tp.Optional[Path]=None) -> Config:
    """
    Load configuration file, create it from the template first if it does
    not exist.

    :param path: Path of configuration file, default location if null.
    """
    if path is None:
        path = config_path()

    if not path.exists():
        logger.info('no config file found, creating {}'.format(path))
        try:
            path.parent.mkdir(parents=True, exist_ok=True)
            path.write_text(generate_template())
        except OSError as ex:
            raise ConfigError(
                'Failed to write config file: {}'.format(path)
            ) from ex

    return load_config(path)

def check_type(name: str, value: tp.Any, cls: type) -> None:
    """
    Raise configuration error if configuration value is not of the type.

    Boolean value is not accepted as an integer.
    """
    if not isinstance(value, cls) \
            or (cls is int and isinstance(value, bool)):
        raise ConfigError('Invalid type of {}: {!r}'.format(name, value))

def parse_config(data: dict[str, tp.Any]) -> Config:
    """
    Create configuration from parsed TOML data.
    """
    if 'devices' not in data:
        raise ConfigError('Missing devices configuration')

    try:
        general = GeneralConfig(**data.get('general', {}))
        devices = tuple(DeviceConfig(**d) for d in data['devices'])
        tray = TrayConfig(**data.get('tray', {}))
    except TypeError as ex:
        raise ConfigError('Invalid configuration: {}'.format(ex)) from ex

    check_type('log level', general.log_level, str)
    check_type('update interval', general.update_interval, int)
    for d in devices:
        check_type('device name', d.name, str)
        check_type('device address', d.address, str)
        check_type('device enabled flag', d.enabled, bool)
        check_type('low battery threshold', d.low_battery_threshold, int)
    check_type('tray enabled flag', tray.enabled, bool)
    check_type('show percentage flag', tray.show_percentage_in_tray, bool)
    check_type('icon theme', tray.icon_theme, str)

    if general.log_level not in LOG_LEVELS:
        raise ConfigError('Invalid log level: {}'.format(general.log_level))
    if general.update_interval <= 0:
        raise ConfigError(
            'Invalid update interval: {}'.format(general.update_interval)
        )
    for d in devices:
        if not 0 <= d.low_battery_threshold <= 100:
            raise ConfigError(
                'Invalid low battery threshold for {}: {}'
                .format(d.name, d.low_battery_threshold)
            )

    return Config(general, devices, tray)

# vim: sw=4:et:ai
