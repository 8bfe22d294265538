import tkinter as tk
from tkinter import ttk
from typing import Dict, Optional
import logging
from .component_base import TrackerComponent


class ViewManager:
    """Places each view component in its own notebook tab, in registration order."""

    def __init__(self, container: tk.Widget, padding: int = 10, bg_color: Optional[str] = None):
        self.container = container
        self.padding = padding
        self.bg_color = bg_color
        self.components: Dict[str, TrackerComponent] = {}
        self.tabs: Dict[str, tk.Frame] = {}
        self.logger = logging.getLogger(self.__class__.__name__)

        self.notebook = ttk.Notebook(self.container)
        self.notebook.pack(expand=True, fill=tk.BOTH, padx=self.padding, pady=self.padding)

    def add_component(self, component: TrackerComponent) -> None:
        """Create a tab for the component and let it build its widgets there"""
        try:
            tab = tk.Frame(self.notebook, bg=self.bg_color) if self.bg_color else tk.Frame(self.notebook)
            component.initialize(tab)
            self.notebook.add(tab, text=component.headline)
            self.components[component.name] = component
            self.tabs[component.name] = tab
        except Exception as e:
            self.logger.error(f"Error adding component {component.name}: {e}", exc_info=True)

    def remove_component(self, component_name: str) -> None:
        """Remove a component's tab"""
        component = self.components.pop(component_name, None)
        tab = self.tabs.pop(component_name, None)
        if component:
            component.destroy()
        if tab is not None and tab.winfo_exists():
            self.notebook.forget(tab)
            tab.destroy()

    def select(self, component_name: str) -> bool:
        """Bring a component's tab to the front. Returns False if it is not shown."""
        tab = self.tabs.get(component_name)
        if tab is None:
            return False
        self.notebook.select(tab)
        return True

    def update_all(self) -> None:
        for component in list(self.components.values()):
            try:
                component.update()
            except Exception as e:
                self.logger.error(f"Error updating component {component.name}: {e}", exc_info=True)
