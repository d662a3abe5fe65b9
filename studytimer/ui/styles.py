"""QSS stylesheet and mode colours for StudyTimer."""

from __future__ import annotations

from ..timer.engine import Mode

# ── mode accent colours ─────────────────────────────────────────────────

MODE_COLORS: dict[Mode, str] = {
    Mode.FOCUS:       "#E85D5D",   # tomato
    Mode.SHORT_BREAK: "#3FB8AF",   # teal
    Mode.LONG_BREAK:  "#7B6CD9",   # violet
}

PALETTE: dict[str, str] = {
    "bg":         "#FAF7F2",
    "surface":    "#FFFFFF",
    "text":       "#2B2B2B",
    "text_muted": "#8A8580",
    "border":     "#E6E0D8",
    "success":    "#4CAF7A",
    "danger":     "#D9534F",
}


def build_stylesheet(mode: Mode, palette: dict[str, str] | None = None) -> str:
    """Window stylesheet tinted with the accent colour of *mode*."""
    p = dict(PALETTE)
    if palette:
        p.update(palette)
    accent = MODE_COLORS[mode]
    return f"""
        QMainWindow, QWidget {{
            background: {p['bg']};
            color: {p['text']};
            font-size: 14px;
        }}
        QFrame#card {{
            background: {p['surface']};
            border: 1px solid {p['border']};
            border-radius: 16px;
        }}
        QLabel#timeLabel {{
            font-size: 72px;
            font-weight: 600;
            color: {accent};
        }}
        QLabel#mutedLabel {{
            color: {p['text_muted']};
        }}
        QPushButton {{
            border: 1px solid {p['border']};
            border-radius: 8px;
            padding: 6px 14px;
            background: {p['surface']};
        }}
        QPushButton#primaryButton {{
            background: {accent};
            border: none;
            color: white;
            font-weight: 600;
            padding: 8px 28px;
        }}
        QPushButton#modeButton:checked {{
            background: {accent};
            color: white;
            border: none;
        }}
        QPushButton#dangerButton {{
            color: {p['danger']};
        }}
        QLineEdit, QSpinBox {{
            border: 1px solid {p['border']};
            border-radius: 6px;
            padding: 4px 8px;
            background: {p['surface']};
        }}
        QProgressBar {{
            border: none;
            background: {p['border']};
            border-radius: 4px;
            height: 8px;
            text-align: center;
        }}
        QProgressBar::chunk {{
            background: {accent};
            border-radius: 4px;
        }}
    """
