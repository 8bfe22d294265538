import tkinter as tk
import tkinter.messagebox as messagebox
from datetime import date
from typing import Dict, Any, Optional
import logging
import sys
from .calendar_grid import first_weekday_from_config
from .config import Config
from .db import init_db, close_db
from .plugin_manager import PluginManager
from .state import TrackerState
from .stats_bar import StatsBar
from .storage import PrayerLogStorage, DEFAULT_STORAGE_KEY
from .view_manager import ViewManager

DAILY_VIEW = "Daily"

# Check for a date change this often so "today" highlights and the streak roll over
DAY_CHECK_INTERVAL_MS = 60 * 1000


class TrackerApp:
    def __init__(self, config_path: Optional[str] = None, force_api: bool = False):
        self.root = tk.Tk()
        self.logger = logging.getLogger(self.__class__.__name__)

        self.config = Config(root=self.root, config_path=config_path)
        self.config.register_change_callback(self.handle_config_change)

        self._setup_logging()
        self._configure_window()

        # Database before state so the store can be hydrated
        init_db(self.config.data)
        storage_config = self.config.data.get("storage") or {}
        storage = PrayerLogStorage(storage_config.get("key", DEFAULT_STORAGE_KEY))
        self.state = TrackerState(storage)
        self.state.register_change_callback(self._on_state_change)
        self.first_weekday = first_weekday_from_config(
            (self.config.data.get("calendar") or {}).get("first_weekday")
        )
        self._last_seen_date = date.today()

        bg_color = self.config.data.get("window", {}).get("background_color")
        self.stats_bar = StatsBar(self.root, self)
        self.stats_bar.pack(side=tk.TOP, fill=tk.X)

        self.main_container = tk.Frame(self.root)
        self.main_container.pack(fill=tk.BOTH, expand=True)
        if bg_color:
            self.main_container.configure(bg=bg_color)

        self.plugin_manager = PluginManager()
        self.view_manager = ViewManager(self.main_container, bg_color=bg_color)
        self.components = []
        self.initialize_components()

        if force_api:
            self.config.data.setdefault("api", {})["enabled"] = True
        try:
            from namaaz_tracker.api import run_api_server
            run_api_server(self)
        except Exception as e:
            self.logger.warning(f"API server not started: {e}")

    def _setup_logging(self):
        """Configure logging to write to both file and stdout"""
        root_logger = logging.getLogger()
        for handler in list(root_logger.handlers):
            root_logger.removeHandler(handler)
        root_logger.setLevel(getattr(logging, self.config.data["logging"]["level"], logging.INFO))

        formatter = logging.Formatter(
            '%(asctime)s - %(name)s - %(levelname)s - [%(filename)s:%(lineno)d] - %(message)s'
        )

        try:
            file_handler = logging.FileHandler(self.config.data["logging"]["file"])
            file_handler.setFormatter(formatter)
            root_logger.addHandler(file_handler)
        except OSError as e:
            sys.stderr.write(f"Cannot open log file, logging to stdout only: {e}\n")

        console_handler = logging.StreamHandler(sys.stdout)
        console_handler.setFormatter(formatter)
        root_logger.addHandler(console_handler)

        logging.info("Namaaz tracker starting...")

    def _configure_window(self) -> None:
        """Configure window size and appearance"""
        window_config = self.config.data["window"]
        self.root.title("Namaaz Tracker")
        self.root.geometry(f"{window_config.get('width', 900)}x{window_config.get('height', 700)}")
        if window_config.get("fullscreen"):
            self.root.attributes('-fullscreen', True)
            self.root.bind('<Escape>', lambda e: self.root.attributes('-fullscreen', False))
        bg_color = window_config.get("background_color")
        if bg_color:
            self.root.configure(bg=bg_color)

    def initialize_components(self):
        try:
            self.plugin_manager.discover_plugins()
            for component in self.plugin_manager.create_enabled(self, self.config.data.get("components")):
                self.logger.debug(f"Initializing view: {component.name}")
                self.view_manager.add_component(component)
                self.components.append(component)
        except Exception as e:
            self.logger.error(f"Error initializing views: {e}", exc_info=True)
            messagebox.showerror("Error", f"Failed to initialize views: {e}")

    def open_day(self, day: date) -> None:
        """Show a date in the daily view (calendar cell click)"""
        self.state.show_day(day)
        self.view_manager.select(DAILY_VIEW)

    def _on_state_change(self, state: TrackerState) -> None:
        # May run on the API thread; hand the redraw to the Tk loop
        self.root.after_idle(self.refresh)

    def refresh(self) -> None:
        """Redraw stats and all views from current state"""
        try:
            self.stats_bar.refresh()
            self.view_manager.update_all()
        except Exception as e:
            self.logger.error(f"Error refreshing views: {e}", exc_info=True)

    def _check_date_change(self) -> None:
        today = date.today()
        if today != self._last_seen_date:
            self.logger.info(f"Date changed to {today}; refreshing views")
            self._last_seen_date = today
            self.refresh()
        self.root.after(DAY_CHECK_INTERVAL_MS, self._check_date_change)

    def handle_config_change(self, new_config: Dict[str, Any]) -> None:
        """Apply a reloaded config: week start and per-component settings"""
        self.logger.info("Handling config change")
        try:
            self.first_weekday = first_weekday_from_config(
                (new_config.get("calendar") or {}).get("first_weekday")
            )
            for component in self.components:
                component_config = (new_config.get("components") or {}).get(component.name)
                if component_config:
                    component.config.update(component_config)
                component._handle_config_update()
            self.stats_bar.refresh()
        except Exception as e:
            self.logger.error(f"Error handling config change: {e}", exc_info=True)

    def run(self):
        try:
            self.refresh()
            self.root.after(DAY_CHECK_INTERVAL_MS, self._check_date_change)
            self.root.mainloop()
        finally:
            self.config.cleanup()
            close_db()
