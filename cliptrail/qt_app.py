from __future__ import annotations

import logging
import os
import sys

log = logging.getLogger(__name__)

from PySide6.QtCore import QObject, Signal
from PySide6.QtGui import QAction, QIcon
from PySide6.QtWidgets import QApplication, QMenu, QStyle, QSystemTrayIcon

from .detector import ChangeDetector
from .models import EntryId
from .pasteboard import Pasteboard, restore_entry
from .settings import AppSettings
from .store import HistoryStore


class _Bridge(QObject):
    captured = Signal()


class ClipTrailApp:
    def __init__(self, settings: AppSettings, pasteboard: Pasteboard) -> None:
        self.qt_app = QApplication(sys.argv)
        self.qt_app.setQuitOnLastWindowClosed(False)

        self.settings = settings
        self.pasteboard = pasteboard
        self.history = HistoryStore(max_entries=self.settings.max_entries)

        # 轮询线程只负责写入历史，托盘提示在 GUI 线程刷新
        self._bridge = _Bridge()
        self._bridge.captured.connect(self._sync_tooltip)

        initial_counter = None
        if not self.settings.capture_on_start:
            initial_counter = self.pasteboard.read_change_counter()
        self.detector = ChangeDetector(
            self.pasteboard,
            on_text=self._on_captured,
            interval_s=self.settings.poll_interval_s,
            initial_counter=initial_counter,
        )

        self.tray = QSystemTrayIcon(self._default_icon(), self.qt_app)
        self.menu = QMenu()
        self.menu.aboutToShow.connect(self._rebuild_menu)
        self._rebuild_menu()
        self.tray.setContextMenu(self.menu)
        self.tray.show()

        self.detector.start()

    def _on_captured(self, text: str) -> None:
        self.history.insert(text)
        self._bridge.captured.emit()

    def _sync_tooltip(self) -> None:
        self.tray.setToolTip(f"ClipTrail\n记录: {len(self.history)}/{self.history.max_entries}")

    def _default_icon(self) -> QIcon:
        icon_candidates = [
            os.path.join(os.path.dirname(os.path.dirname(os.path.abspath(__file__))), "assets", "icon.ico"),
        ]
        # PyInstaller 打包后的路径
        if getattr(sys, "_MEIPASS", None):
            icon_candidates.insert(0, os.path.join(sys._MEIPASS, "assets", "icon.ico"))
        for p in icon_candidates:
            if os.path.isfile(p):
                return QIcon(p)
        return self.qt_app.style().standardIcon(QStyle.SP_FileDialogDetailedView)

    def _rebuild_menu(self) -> None:
        self.menu.clear()

        entries = self.history.entries()
        for entry in entries:
            act = QAction(entry.preview(), self.menu)
            act.triggered.connect(lambda _checked=False, eid=entry.entry_id: self._activate_entry(eid))
            self.menu.addAction(act)
        if not entries:
            act_empty = QAction("(暂无记录)", self.menu)
            act_empty.setEnabled(False)
            self.menu.addAction(act_empty)

        self.menu.addSeparator()

        act_exit = QAction("退出", self.menu)
        act_exit.setShortcut("Q")
        act_exit.triggered.connect(self.quit)
        self.menu.addAction(act_exit)

        self._sync_tooltip()

    def _activate_entry(self, entry_id: EntryId) -> None:
        try:
            restore_entry(self.history, self.pasteboard, entry_id)
        except Exception:
            log.exception("写回剪贴板失败")

    def run(self) -> int:
        try:
            return self.qt_app.exec()
        finally:
            self.quit()

    def quit(self) -> None:
        try:
            self.detector.stop()
        except Exception:
            log.debug("停止轮询异常", exc_info=True)
        try:
            self.tray.hide()
        except Exception:
            log.debug("隐藏托盘异常", exc_info=True)
        try:
            self.qt_app.quit()
        except Exception:
            log.debug("退出应用异常", exc_info=True)
