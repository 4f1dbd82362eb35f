#!/usr/bin/env python3
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
Build setup for the ZMK Battery Monitor.
"""

import ast
from setuptools import setup, find_packages

VERSION = ast.parse(
    next(l for l in open('zmkbattery/__init__.py') if l.startswith('__version__'))
).body[0].value.value

setup(
    name='zmk-battery-monitor',
    version=VERSION,
    description='ZMK Battery Monitor - read battery levels of ZMK keyboards',
    classifiers=[
        'License :: OSI Approved :: GNU General Public License v3 or later (GPLv3+)',
        'Programming Language :: Python',
        'Programming Language :: Python :: 3',
        'Development Status :: 3 - Alpha',
        'Operating System :: POSIX :: Linux',
        'Topic :: System :: Hardware',
    ],
    python_requires='>=3.11',
    install_requires=['dbus-python'],
    extras_require={
        'tray': ['PyGObject'],
        'test': ['pytest'],
    },
    entry_points={
        'console_scripts': [
            'zmk-battery = zmkbattery.cli:main',
            'zmk-battery-config = zmkbattery.cli:config_main',
            'zmk-battery-tray = zmkbattery.cli:tray_main',
        ],
    },
    packages=find_packages('.'),
    include_package_data=True,
    long_description=open('README').read(),
    long_description_content_type='text/x-rst',
)

# vim: sw=4:et:ai
