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
Command line entry points.

- `zmk-battery` - print battery levels of keyboards
- `zmk-battery-config` - show configuration or generate its template
- `zmk-battery-tray` - run system tray icon
"""

from __future__ import annotations

import argparse
import logging
import sys
import typing as tp
from pathlib import Path

from .config import DEFAULT_INTERFACE, LOG_LEVELS, Config, DeviceConfig, \
    config_path, generate_template, load_config, load_or_create
from .error import ConfigError, TransportError, ZMKBatteryError

if tp.TYPE_CHECKING:
    from .reader import BatteryReader

logger = logging.getLogger(__name__)

NO_BATTERY_HELP = """\
No battery services found
Make sure:
  1. The keyboard is connected
  2. Battery reporting is enabled in ZMK firmware
  3. The device address is correct"""

def setup_logging(level: str, verbose: bool=False) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else LOG_LEVELS.get(level, logging.INFO),
        format='%(asctime)s %(name)s %(levelname)s %(message)s',
    )

def create_parser(description: str) -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description=description)
    parser.add_argument(
        '-c', '--config', type=Path, default=None,
        help='configuration file (default: {})'.format(config_path()),
    )
    parser.add_argument(
        '-v', '--verbose', action='store_true', default=False,
        help='show debug messages',
    )
    return parser

def add_interface_argument(parser: argparse.ArgumentParser) -> None:
    parser.add_argument(
        '-i', '--interface', default=DEFAULT_INTERFACE,
        help='Bluetooth interface (default: {})'.format(DEFAULT_INTERFACE),
    )

def main(argv: tp.Optional[list[str]]=None) -> int:
    """
    Print battery levels of a keyboard or of configured keyboards.
    """
    from .reader import BatteryReader

    parser = create_parser('Read battery levels of ZMK keyboards')
    add_interface_argument(parser)
    parser.add_argument(
        'address', nargs='?', default=None,
        help='Bluetooth MAC address of keyboard, i.e. AA:BB:CC:DD:EE:FF',
    )
    args = parser.parse_args(argv)

    try:
        if args.address:
            config = Config(devices=(DeviceConfig(args.address, args.address),))
        else:
            config = load_or_create(args.config)
    except ConfigError as ex:
        setup_logging('info', args.verbose)
        logger.error(ex)
        return 1

    setup_logging(config.general.log_level, args.verbose)
    devices = list(config.enabled_devices())
    if not devices:
        print('No enabled devices in configuration', file=sys.stderr)
        return 1

    try:
        reader = BatteryReader.create(args.interface)
    except TransportError as ex:
        print('Error: {}'.format(ex), file=sys.stderr)
        return 1

    status = 0
    for dev in devices:
        print('Scanning for battery information on {}...'.format(dev.address))
        try:
            batteries = reader.read_battery_levels(dev.address)
        except TransportError as ex:
            print('Error reading battery levels: {}'.format(ex), file=sys.stderr)
            print_devices(reader)
            status = 1
            continue

        if batteries:
            print('\n=== Battery Levels ===')
            for b in batteries:
                print('{}: {}%'.format(b.name, b.level))
        else:
            print(NO_BATTERY_HELP)
    return status

def print_devices(reader: BatteryReader) -> None:
    """
    Print Bluetooth devices known to BlueZ to help finding keyboard
    address.
    """
    try:
        devices = reader.list_devices()
    except TransportError as ex:
        logger.debug('cannot list devices: {}'.format(ex))
        return

    print('\nAvailable Bluetooth devices:')
    for name, address in devices:
        print('  {} - {}'.format(name, address))

def config_main(argv: tp.Optional[list[str]]=None) -> int:
    """
    Show configuration or print its template.
    """
    parser = create_parser('Show ZMK Battery Monitor configuration')
    parser.add_argument(
        'command', nargs='?', choices=['generate'], default=None,
        help='print configuration template',
    )
    args = parser.parse_args(argv)
    setup_logging('warn', args.verbose)

    if args.command == 'generate':
        print(generate_template(), end='')
        return 0

    path = args.config or config_path()
    if not path.exists():
        print('No config file found at: {}'.format(path))
        print('\nRun with \'generate\' to create a template:')
        print('  {} generate > config.toml'.format(parser.prog))
        print(
            '\nOr run the main program to create a default config'
            ' automatically.'
        )
        return 0

    print('Config file exists at: {}'.format(path))
    try:
        config = load_config(path)
    except ConfigError as ex:
        print('Error loading config: {}'.format(ex), file=sys.stderr)
        return 1

    print(describe_config(config))
    return 0

def describe_config(config: Config) -> str:
    general = config.general
    lines = [
        '\nCurrent configuration:',
        '  Update interval: {} seconds'.format(general.update_interval),
        '  Log level: {}'.format(general.log_level),
        '\nDevices:',
    ]
    for d in config.devices:
        lines.append('  - {} ({}) [{}]'.format(
            d.name, d.address, 'enabled' if d.enabled else 'disabled'
        ))
        lines.append(
            '    Low battery threshold: {}%'.format(d.low_battery_threshold)
        )
    lines.extend([
        '\nTray:',
        '  Enabled: {}'.format(config.tray.enabled),
        '  Show percentage: {}'.format(config.tray.show_percentage_in_tray),
    ])
    return '\n'.join(lines)

def tray_main(argv: tp.Optional[list[str]]=None) -> int:
    """
    Run system tray icon with battery levels of configured keyboards.
    """
    from .monitor import Monitor
    from .reader import BatteryReader
    from .tray import BatteryTray

    parser = create_parser('ZMK keyboards battery levels in system tray')
    add_interface_argument(parser)
    args = parser.parse_args(argv)

    try:
        config = load_or_create(args.config)
        setup_logging(config.general.log_level, args.verbose)
        if not config.tray.enabled:
            logger.warning('tray is disabled in configuration')
            return 0

        reader = BatteryReader.create(args.interface)
    except ZMKBatteryError as ex:
        setup_logging('info', args.verbose)
        logger.error(ex)
        return 1

    monitor = Monitor(reader, list(config.enabled_devices()))
    tray = BatteryTray(monitor, config.tray, config.general.update_interval)
    try:
        tray.run()
    except KeyboardInterrupt:
        logger.info('tray stopped')
    return 0

# vim: sw=4:et:ai
