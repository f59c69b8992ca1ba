#!/usr/bin/env python3
"""PyQt6 desktop shell for MarkPrompter.

The window hosts the control panel and the scrolling content view. A
frame timer feeds elapsed time, heading offsets and the scroll extent to
the ScrollController; a slower timer polls the open file for changes.
"""
from __future__ import annotations

import sys
from pathlib import Path
from typing import List, Optional

from PyQt6.QtCore import QElapsedTimer, Qt, QTimer
from PyQt6.QtGui import QKeySequence, QShortcut
from PyQt6.QtWidgets import (
    QApplication,
    QCheckBox,
    QComboBox,
    QDoubleSpinBox,
    QFileDialog,
    QFrame,
    QHBoxLayout,
    QLabel,
    QMainWindow,
    QMessageBox,
    QPushButton,
    QScrollArea,
    QVBoxLayout,
    QWidget,
)

from .config import AppConfig
from .document import heading_indices, load_document
from .errors import LoadError
from .logging_utils import log, status_line, warn
from .models import (
    PAUSE_DURATION_MAX,
    PAUSE_DURATION_MIN,
    SPEED_STEP,
    Block,
    Theme,
    ThemeConfig,
)
from .render import block_to_html, panel_stylesheet
from .scroll import ScrollController
from .themes import save_theme_preference, select_theme
from .watcher import FileWatcher


ICON_OPEN = "\U0001F4C2"
ICON_PLAY = "▶"
ICON_PAUSE = "⏸"
ICON_RESTART = "⏮"

PANEL_WIDTH = 300
PLACEHOLDER = "Open a markdown file to begin."


def _big_button(text: str, size: int, font_px: int) -> QPushButton:
    btn = QPushButton(text)
    btn.setFixedSize(size, size)
    btn.setStyleSheet(f"font-size: {font_px}px;")
    return btn


def _section_title(text: str) -> QLabel:
    lbl = QLabel(text)
    lbl.setStyleSheet("font-size: 20px; font-weight: bold;")
    return lbl


class MainWindow(QMainWindow):
    """Control panel on the left, auto-scrolling content on the right."""

    def __init__(
        self,
        cfg: AppConfig,
        theme_cfg: ThemeConfig,
        *,
        quiet: bool = False,
    ) -> None:
        super().__init__()
        self.cfg = cfg
        self.quiet = quiet
        self.controller = ScrollController(cfg.to_playback_state(), quiet=quiet)

        self.themes: List[Theme] = list(theme_cfg.themes)
        self.theme: Theme = select_theme(self.themes, theme_cfg.selected_theme)

        self.current_file: Optional[Path] = None
        self.blocks: List[Block] = []
        self._block_labels: List[QLabel] = []
        self._watcher: Optional[FileWatcher] = None
        self._syncing_scroll = False

        self.setWindowTitle("MarkPrompter")
        self.resize(1200, 800)
        self.setMinimumSize(800, 600)

        self._build_ui()
        self._install_shortcuts()
        self._apply_theme()
        self._rebuild_content()
        self._refresh_controls()

        # Frame loop
        self._elapsed = QElapsedTimer()
        self._elapsed.start()
        self._frame_timer = QTimer(self)
        self._frame_timer.setInterval(max(1, int(cfg.frame_interval_ms)))
        self._frame_timer.timeout.connect(self._on_frame)
        self._frame_timer.start()

        # File change polling
        self._reload_timer = QTimer(self)
        self._reload_timer.setInterval(max(100, int(cfg.reload_interval * 1000)))
        self._reload_timer.timeout.connect(self._check_file_updates)
        self._reload_timer.start()

    # ---------------- layout ----------------

    def _build_ui(self) -> None:
        root = QWidget()
        row = QHBoxLayout(root)

        panel = QWidget()
        panel.setFixedWidth(PANEL_WIDTH)
        col = QVBoxLayout(panel)
        col.setAlignment(Qt.AlignmentFlag.AlignTop)

        col.addWidget(_section_title("MP"))

        self.open_btn = _big_button(ICON_OPEN, 80, 28)
        self.open_btn.setToolTip("Open markdown file")
        self.open_btn.clicked.connect(self.open_file)
        col.addWidget(self.open_btn)

        col.addWidget(self._separator())
        col.addWidget(_section_title("Playback"))

        playback_row = QHBoxLayout()
        self.play_btn = _big_button(ICON_PLAY, 80, 40)
        self.play_btn.clicked.connect(self.toggle_playback)
        self.restart_btn = _big_button(ICON_RESTART, 80, 40)
        self.restart_btn.setToolTip("Back to top")
        self.restart_btn.clicked.connect(self.restart_playback)
        playback_row.addWidget(self.play_btn)
        playback_row.addWidget(self.restart_btn)
        playback_row.addStretch(1)
        col.addLayout(playback_row)

        col.addWidget(QLabel("Scroll Speed"))
        speed_row = QHBoxLayout()
        self.speed_down_btn = _big_button("−", 60, 30)
        self.speed_down_btn.clicked.connect(lambda: self._change_speed(-1))
        self.speed_label = QLabel()
        self.speed_label.setStyleSheet("font-size: 20px;")
        self.speed_up_btn = _big_button("+", 60, 30)
        self.speed_up_btn.clicked.connect(lambda: self._change_speed(1))
        speed_row.addWidget(self.speed_down_btn)
        speed_row.addWidget(self.speed_label)
        speed_row.addWidget(self.speed_up_btn)
        speed_row.addStretch(1)
        col.addLayout(speed_row)

        col.addWidget(self._separator())
        col.addWidget(_section_title("Settings"))

        self.pause_check = QCheckBox("Pause at Headings")
        self.pause_check.toggled.connect(self._on_pause_toggled)
        col.addWidget(self.pause_check)

        self.pause_duration_row = QWidget()
        duration_layout = QHBoxLayout(self.pause_duration_row)
        duration_layout.setContentsMargins(0, 0, 0, 0)
        duration_layout.addWidget(QLabel("Duration:"))
        self.pause_spin = QDoubleSpinBox()
        self.pause_spin.setRange(PAUSE_DURATION_MIN, PAUSE_DURATION_MAX)
        self.pause_spin.setSingleStep(0.5)
        self.pause_spin.setSuffix(" s")
        self.pause_spin.valueChanged.connect(self.controller.set_pause_duration)
        duration_layout.addWidget(self.pause_spin)
        col.addWidget(self.pause_duration_row)

        self.auto_restart_check = QCheckBox("Auto Restart")
        self.auto_restart_check.toggled.connect(self.controller.set_auto_restart)
        col.addWidget(self.auto_restart_check)

        font_row = QHBoxLayout()
        self.font_down_btn = _big_button("A−", 50, 20)
        self.font_down_btn.clicked.connect(lambda: self._change_font_size(-1))
        self.font_label = QLabel()
        self.font_label.setStyleSheet("font-size: 20px;")
        self.font_up_btn = _big_button("A+", 50, 20)
        self.font_up_btn.clicked.connect(lambda: self._change_font_size(1))
        font_row.addWidget(self.font_down_btn)
        font_row.addWidget(self.font_label)
        font_row.addWidget(self.font_up_btn)
        font_row.addStretch(1)
        col.addLayout(font_row)

        col.addWidget(self._separator())
        col.addWidget(_section_title("Theme"))
        self.theme_combo = QComboBox()
        self.theme_combo.addItems([t.name for t in self.themes])
        self.theme_combo.setCurrentText(self.theme.name)
        self.theme_combo.currentTextChanged.connect(self._on_theme_selected)
        col.addWidget(self.theme_combo)

        # Content column
        content_col = QVBoxLayout()
        self.file_label = QLabel()
        self.file_label.setStyleSheet("font-size: 24px; font-weight: bold;")
        content_col.addWidget(self.file_label)

        self.content = QWidget()
        self.content_layout = QVBoxLayout(self.content)
        self.content_layout.setAlignment(Qt.AlignmentFlag.AlignTop)
        self.content_layout.setSpacing(5)

        self.scroll_area = QScrollArea()
        self.scroll_area.setWidgetResizable(True)
        self.scroll_area.setFrameShape(QFrame.Shape.NoFrame)
        self.scroll_area.setWidget(self.content)
        self.scroll_area.verticalScrollBar().valueChanged.connect(self._on_user_scroll)
        content_col.addWidget(self.scroll_area, 1)

        self.status_label = QLabel()
        content_col.addWidget(self.status_label)

        row.addWidget(panel)
        row.addWidget(self._separator(vertical=True))
        row.addLayout(content_col, 1)
        self.setCentralWidget(root)

    @staticmethod
    def _separator(vertical: bool = False) -> QFrame:
        line = QFrame()
        line.setFrameShape(QFrame.Shape.VLine if vertical else QFrame.Shape.HLine)
        line.setFrameShadow(QFrame.Shadow.Sunken)
        return line

    def _install_shortcuts(self) -> None:
        QShortcut(QKeySequence(Qt.Key.Key_Space), self, activated=self.toggle_playback)
        QShortcut(QKeySequence(Qt.Key.Key_Home), self, activated=self.restart_playback)
        QShortcut(QKeySequence(Qt.Key.Key_Up), self, activated=lambda: self._change_speed(1))
        QShortcut(QKeySequence(Qt.Key.Key_Down), self, activated=lambda: self._change_speed(-1))

    # ---------------- content ----------------

    def _apply_theme(self) -> None:
        self.centralWidget().setStyleSheet(panel_stylesheet(self.theme))

    def _rebuild_content(self) -> None:
        while self.content_layout.count():
            item = self.content_layout.takeAt(0)
            widget = item.widget()
            if widget is not None:
                widget.deleteLater()
        self._block_labels = []

        font_size = self.controller.state.font_size
        if not self.blocks:
            lbl = QLabel(PLACEHOLDER)
            lbl.setStyleSheet(f"font-size: {font_size:.0f}px;")
            self.content_layout.addWidget(lbl)
            return

        for block in self.blocks:
            lbl = QLabel()
            lbl.setTextFormat(Qt.TextFormat.RichText)
            lbl.setWordWrap(True)
            lbl.setText(block_to_html(block, self.theme, font_size))
            self.content_layout.addWidget(lbl)
            self._block_labels.append(lbl)

    def _heading_offsets(self) -> List[float]:
        return [
            float(self._block_labels[i].y())
            for i in heading_indices(self.blocks)
            if i < len(self._block_labels)
        ]

    # ---------------- file handling ----------------

    def open_file(self) -> None:
        path, _ = QFileDialog.getOpenFileName(
            self, "Open Markdown", "", "Markdown (*.md *.markdown)"
        )
        if path:
            self.load_file(Path(path))

    def load_file(self, path: Path) -> bool:
        """Load a document and scroll back to the top.

        A LoadError is shown to the user and leaves playback untouched.
        """
        try:
            blocks = load_document(path)
        except LoadError as e:
            warn(str(e), quiet=self.quiet)
            QMessageBox.warning(self, "Cannot open file", str(e))
            return False

        self.blocks = blocks
        self.current_file = Path(path)
        self._watcher = FileWatcher(self.current_file)
        self.controller.seek(0.0, 0.0)
        self._rebuild_content()
        self._refresh_controls()
        log(f"Loaded {self.current_file} ({len(blocks)} blocks)", quiet=self.quiet)
        return True

    def _check_file_updates(self) -> None:
        if self._watcher is None or self.current_file is None:
            return
        if not self._watcher.poll():
            return
        try:
            self.blocks = load_document(self.current_file)
        except LoadError as e:
            warn(f"Reload failed, keeping previous content: {e}", quiet=self.quiet)
            return
        self._rebuild_content()
        log(f"Reloaded {self.current_file}", quiet=self.quiet)

    # ---------------- controls ----------------

    def toggle_playback(self) -> None:
        self.controller.toggle()
        self._elapsed.restart()
        self._refresh_controls()

    def restart_playback(self) -> None:
        self.controller.restart()
        self._elapsed.restart()
        self._set_scroll(0)
        self._refresh_controls()

    def _change_speed(self, direction: int) -> None:
        if direction > 0:
            self.controller.adjust_speed()
        else:
            self.controller.adjust_speed(-SPEED_STEP)
        self._refresh_controls()

    def _change_font_size(self, direction: int) -> None:
        self.controller.adjust_font_size(float(direction))
        self._rebuild_content()
        self._refresh_controls()

    def _on_pause_toggled(self, checked: bool) -> None:
        self.controller.set_pause_at_headings(checked)
        self.pause_duration_row.setVisible(checked)

    def _on_theme_selected(self, name: str) -> None:
        if not name or name == self.theme.name:
            return
        self.theme = select_theme(self.themes, name)
        save_theme_preference(self.theme.name, self.cfg.themes_path, quiet=self.quiet)
        self._apply_theme()
        self._rebuild_content()

    def _refresh_controls(self) -> None:
        st = self.controller.state
        self.play_btn.setText(ICON_PAUSE if st.running else ICON_PLAY)
        self.speed_label.setText(f"{int(st.speed)}px/s")
        self.font_label.setText(f"{st.font_size:.0f}px")

        for widget, value in (
            (self.pause_check, st.pause_at_headings),
            (self.auto_restart_check, st.auto_restart),
        ):
            if widget.isChecked() != value:
                widget.blockSignals(True)
                widget.setChecked(value)
                widget.blockSignals(False)
        self.pause_duration_row.setVisible(st.pause_at_headings)
        if abs(self.pause_spin.value() - st.pause_duration) > 1e-6:
            self.pause_spin.blockSignals(True)
            self.pause_spin.setValue(st.pause_duration)
            self.pause_spin.blockSignals(False)

        self.file_label.setText(self.current_file.name if self.current_file else "")

    # ---------------- frame loop ----------------

    def _set_scroll(self, value: int) -> None:
        self._syncing_scroll = True
        try:
            self.scroll_area.verticalScrollBar().setValue(value)
        finally:
            self._syncing_scroll = False

    def _on_user_scroll(self, value: int) -> None:
        if self._syncing_scroll:
            return
        bar = self.scroll_area.verticalScrollBar()
        self.controller.seek(float(value), float(bar.maximum()))

    def _on_frame(self) -> None:
        dt = self._elapsed.restart() / 1000.0
        bar = self.scroll_area.verticalScrollBar()
        content_height = float(bar.maximum())

        before = self.controller.status
        self.controller.clamp_position(content_height)
        st = self.controller.advance(dt, self._heading_offsets(), content_height)

        self._set_scroll(int(round(st.position)))
        if st.status is not before:
            self._refresh_controls()

        self.status_label.setText(
            status_line(st.status, self.controller.remaining_seconds(content_height))
        )


def run_gui(
    cfg: AppConfig,
    theme_cfg: ThemeConfig,
    *,
    document: Optional[Path] = None,
    quiet: bool = False,
) -> int:
    """Create the application window and run the Qt event loop.

    Returns:
        The Qt exit code
    """
    app = QApplication.instance() or QApplication(sys.argv)
    window = MainWindow(cfg, theme_cfg, quiet=quiet)
    if document is not None:
        window.load_file(document)
    window.show()
    return app.exec()
