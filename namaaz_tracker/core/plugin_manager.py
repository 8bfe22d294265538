"""
View registry. Plugin packages under namaaz_tracker.plugins call register_component()
for each view they provide; views become tabs in registration order.
"""
import importlib
import logging
import pkgutil
from typing import Any, Dict, List, Optional, Type

from .component_base import TrackerComponent

PLUGIN_PACKAGE = "namaaz_tracker.plugins"


def is_enabled(components_config: Optional[Dict[str, Any]], view_name: str) -> bool:
    """A view is shown only when components.<name>.enable is true."""
    view_config = (components_config or {}).get(view_name)
    return isinstance(view_config, dict) and bool(view_config.get("enable", False))


class PluginManager:
    def __init__(self):
        self.components: Dict[str, Type[TrackerComponent]] = {}
        self.plugin_of: Dict[str, str] = {}
        self._loading: Optional[str] = None
        self.logger = logging.getLogger(__name__)

    def discover_plugins(self, plugin_package: str = PLUGIN_PACKAGE) -> None:
        """Import each plugin package and let it register its views. A broken plugin is logged and skipped."""
        package = importlib.import_module(plugin_package)
        for _, name, is_pkg in pkgutil.iter_modules(package.__path__):
            if not is_pkg:
                continue
            self._loading = name
            try:
                module = importlib.import_module(f"{plugin_package}.{name}")
                if hasattr(module, "register_components"):
                    module.register_components(self)
            except Exception as e:
                self.logger.error(f"Error loading plugin {name}: {e}", exc_info=True)
            finally:
                self._loading = None
        self.logger.info(f"Views available: {', '.join(self.components) or 'none'}")

    def register_component(self, component_class: Type[TrackerComponent]) -> None:
        if component_class.name in self.components:
            self.logger.warning(f"View '{component_class.name}' registered twice; keeping the latest")
        self.components[component_class.name] = component_class
        if self._loading:
            self.plugin_of[component_class.name] = self._loading

    def view_states(self, components_config: Optional[Dict[str, Any]]) -> List[Dict[str, Any]]:
        """[{name, enabled}] for every registered view, in tab order."""
        return [{"name": name, "enabled": is_enabled(components_config, name)} for name in self.components]

    def create_enabled(self, app, components_config: Optional[Dict[str, Any]]) -> List[TrackerComponent]:
        """Instantiate the enabled views in tab order; disabled ones are skipped."""
        created = []
        for name, component_class in self.components.items():
            if not is_enabled(components_config, name):
                self.logger.info(f"View '{name}' disabled")
                continue
            created.append(component_class(app, components_config[name]))
        return created
