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
System tray icon showing battery levels of ZMK keyboards.

The tooltip of the icon shows battery status. Click on the icon to
refresh the status. The status is refreshed periodically too.
"""

import logging

import gi
gi.require_version('Gtk', '3.0')
from gi.repository import GLib, Gtk

from .config import TrayConfig
from .monitor import Monitor

logger = logging.getLogger(__name__)

TITLE = 'ZMK Battery Monitor'
TOOLTIP_TITLE = 'ZMK Keyboard Battery'

class BatteryTray:
    """
    Tray icon displaying status of battery monitor.
    """
    def __init__(
            self, monitor: Monitor, config: TrayConfig, interval: int
        ) -> None:
        self.monitor = monitor
        self.config = config
        self.interval = interval

        self._icon = Gtk.StatusIcon.new_from_icon_name(config.icon_theme)
        self._icon.set_title(TITLE)
        self._icon.connect('activate', self._on_activate)
        self._icon.connect('popup-menu', self._on_popup_menu)
        self._menu = self._create_menu()

    def run(self) -> None:
        self.refresh()
        GLib.timeout_add_seconds(self.interval, self._on_timeout)
        logger.info(
            'battery monitor tray started, refresh every {} seconds'
            .format(self.interval)
        )
        Gtk.main()

    def refresh(self) -> None:
        status = self.monitor.refresh()
        label = self.monitor.tray_label(self.config.show_percentage_in_tray)
        title = '{} {}'.format(TOOLTIP_TITLE, label).strip()
        self._icon.set_tooltip_text('{}\n{}'.format(title, status))

    def _create_menu(self) -> Gtk.Menu:
        menu = Gtk.Menu()

        item = Gtk.MenuItem(label='Refresh')
        item.connect('activate', lambda *args: self.refresh())
        menu.append(item)

        menu.append(Gtk.SeparatorMenuItem())

        item = Gtk.MenuItem(label='Quit')
        item.connect('activate', lambda *args: Gtk.main_quit())
        menu.append(item)

        menu.show_all()
        return menu

    def _on_activate(self, icon: Gtk.StatusIcon) -> None:
        self.refresh()

    def _on_popup_menu(
            self, icon: Gtk.StatusIcon, button: int, time: int
        ) -> None:
        self._menu.popup(
            None, None, Gtk.StatusIcon.position_menu, icon, button, time
        )

    def _on_timeout(self) -> bool:
        self.refresh()
        # keep the timer running
        return True

# vim: sw=4:et:ai
