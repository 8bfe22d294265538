from abc import ABC, abstractmethod
import tkinter as tk
from typing import Optional, Dict, Any
import logging

# Base window dimensions for responsive scaling
BASE_WINDOW_WIDTH = 900
BASE_WINDOW_HEIGHT = 700

# Shared palette for the prayer views
COLORS = {
    'text': '#222222',
    'muted': '#777777',
    'today': '#fff3c4',
    'progress_bg': '#e4e4e4',
    'progress': '#4a90d9',
    'completed': '#3aa35b',
    'logged': '#3aa35b',
    'warning': '#c0392b',
}


class TrackerComponent(ABC):
    """Base class for a view tab. Subclasses read and write through app.state."""

    def __init__(self, app, config: Dict[str, Any]):
        self.frame: Optional[tk.Frame] = None
        self.config = config
        self.app = app
        self.state = app.state
        self.logger = logging.getLogger(self.name)

    def _get_window_dimensions(self) -> tuple:
        """Current window size, or the base size before the window is drawn"""
        root = getattr(self.app, 'root', None)
        if root is not None and root.winfo_exists():
            width = root.winfo_width()
            height = root.winfo_height()
            if width > 1 and height > 1:
                return width, height
        return BASE_WINDOW_WIDTH, BASE_WINDOW_HEIGHT

    def _scale(self) -> float:
        window_width, window_height = self._get_window_dimensions()
        scale = (window_width / BASE_WINDOW_WIDTH + window_height / BASE_WINDOW_HEIGHT) / 2
        # Clamp to 0.5x - 2x
        return max(0.5, min(2.0, scale))

    def get_responsive_fonts(self) -> dict:
        """Font sizes scaled to the window, with config overrides"""
        scale = self._scale()
        fonts = {
            'title': max(10, int(18 * scale)),
            'heading': max(9, int(14 * scale)),
            'body': max(8, int(12 * scale)),
            'small': max(7, int(10 * scale)),
            'tiny': max(6, int(8 * scale)),
        }
        for key, value in (self.config.get('fonts') or {}).items():
            if key in fonts and isinstance(value, (int, float)):
                fonts[key] = max(6, int(value * scale))
        return fonts

    def get_padding(self, size='medium') -> int:
        """Responsive padding value by size name"""
        scale = self._scale()
        padding = {
            'small': max(3, int(5 * scale)),
            'medium': max(5, int(10 * scale)),
            'large': max(8, int(15 * scale)),
        }
        return padding.get(size, padding['medium'])

    def create_label(self, parent, text="", font_size='body', bold=False, color=None, **kwargs) -> tk.Label:
        """Create a label with responsive font sizing"""
        fonts = self.get_responsive_fonts()
        size = fonts.get(font_size, fonts['body']) if isinstance(font_size, str) else font_size
        family = kwargs.pop('font_family', self.config.get('font_family', 'Arial'))
        font = (family, size, "bold") if bold else (family, size)
        if 'fg' not in kwargs and 'foreground' not in kwargs:
            kwargs['fg'] = color or COLORS['text']
        return tk.Label(parent, text=text, font=font, **kwargs)

    @property
    @abstractmethod
    def name(self) -> str:
        """Return the name of the component"""
        pass

    @property
    def headline(self) -> str:
        """Return the display name for the component"""
        return self.config.get("headline", self.name)

    @abstractmethod
    def initialize(self, parent: tk.Widget) -> None:
        """Create the component's frame inside parent"""
        self.frame = tk.Frame(parent)
        padding = self.get_padding('medium')
        self.frame.pack(pady=padding, padx=padding, fill=tk.BOTH, expand=True)

    @abstractmethod
    def update(self) -> None:
        """Re-render from app.state"""
        pass

    def destroy(self) -> None:
        """Clean up resources"""
        try:
            if self.frame and self.frame.winfo_exists():
                self.frame.destroy()
            self.frame = None
            self.logger.debug(f"Component {self.name} destroyed")
        except Exception as e:
            self.logger.error(f"Error destroying component {self.name}: {e}")

    def _handle_config_update(self) -> None:
        """Re-render after a config reload"""
        try:
            self.logger.debug(f"Handling config update for {self.name}")
            self.update()
        except Exception as e:
            self.logger.error(f"Error handling config update for {self.name}: {e}", exc_info=True)
