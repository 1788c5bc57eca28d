"""Phase registry with auto-discovery of PhaseRule subclasses."""

from __future__ import annotations

import importlib
import logging
import pkgutil
from pathlib import Path

from protocol_engine.phases.base import PhaseRule

logger = logging.getLogger(__name__)


class PhaseRegistry:
    """Discovers and manages all PhaseRule implementations.

    Auto-discovers phases by scanning the phases/ package tree for any
    concrete subclasses of PhaseRule. New phases are added by placing a
    .py file in the appropriate subdirectory and giving it an ``order``.
    """

    def __init__(self) -> None:
        self._phases: dict[str, PhaseRule] = {}

    def discover_phases(self) -> None:
        """Scan the phases package tree and register all PhaseRule subclasses."""
        import protocol_engine.phases as phases_pkg

        phases_path = Path(phases_pkg.__file__).parent  # type: ignore[arg-type]
        self._scan_package(phases_pkg.__name__, str(phases_path))

    def _scan_package(self, package_name: str, package_path: str) -> None:
        """Recursively import all modules under a package and register phases."""
        for _importer, module_name, _is_pkg in pkgutil.walk_packages(
            [package_path], prefix=package_name + "."
        ):
            module = importlib.import_module(module_name)

            for attr_name in dir(module):
                attr = getattr(module, attr_name)
                if (
                    isinstance(attr, type)
                    and issubclass(attr, PhaseRule)
                    and attr is not PhaseRule
                    and not getattr(attr, "__abstractmethods__", set())
                    and attr.__module__ == module.__name__
                ):
                    self.register(attr())

    def register(self, phase: PhaseRule) -> None:
        """Register a phase instance by its phase_id."""
        if phase.phase_id in self._phases:
            logger.debug("Replacing phase %s", phase.phase_id)
        self._phases[phase.phase_id] = phase

    def get(self, phase_id: str) -> PhaseRule | None:
        return self._phases.get(phase_id)

    def get_all_phases(self) -> list[PhaseRule]:
        """Return all registered phases in generation order."""
        return sorted(self._phases.values(), key=lambda p: p.order)

    @property
    def phase_ids(self) -> list[str]:
        return list(self._phases.keys())
