# src/form_auditor/dom/registry.py
import importlib
import pkgutil
import logging
from typing import Dict, List, Set

from .core import CheckDefinition

logger = logging.getLogger(__name__)


class CheckRegistry:
    """
    Central registry for check groups.

    Dynamically discovers CheckDefinition modules from the
    'form_auditor.checks' package and keeps them in execution order.
    """

    _definitions: Dict[str, CheckDefinition] = {}
    _all_codes: Set[str] = set()
    _loaded: bool = False

    @classmethod
    def discover(cls) -> None:
        """
        Discovers and registers all check definitions found in the 'form_auditor.checks' package.

        Every module exposing a module-level `DEFINITION` (instance of `CheckDefinition`)
        is registered under its group name. A module that fails to import is logged
        and skipped; the remaining groups still load.
        """
        if cls._loaded:
            return

        try:
            import form_auditor.checks as checks_pkg

            for _, name, _ in pkgutil.iter_modules(checks_pkg.__path__):
                full_name = f"form_auditor.checks.{name}"
                try:
                    module = importlib.import_module(full_name)
                    if hasattr(module, "DEFINITION") and isinstance(module.DEFINITION, CheckDefinition):
                        cls.register(module.DEFINITION)
                        logger.debug("Check group loaded: %s", module.DEFINITION.group)
                except Exception as e:
                    logger.error("Error loading check module %s: %s", name, e)

            cls._loaded = True
        except ImportError as e:
            logger.error("Could not find checks package: %s", e)

    @classmethod
    def register(cls, definition: CheckDefinition) -> None:
        """Registers (or replaces) a check group."""
        cls._definitions[definition.group] = definition
        cls._all_codes.update(definition.codes)

    @classmethod
    def get_definitions(cls) -> List[CheckDefinition]:
        """Returns all registered groups sorted by their execution order."""
        return sorted(cls._definitions.values(), key=lambda d: (d.order, d.group))

    @classmethod
    def get_all_possible_codes(cls) -> List[str]:
        """Returns a sorted list of every check code known to the registry."""
        return sorted(cls._all_codes)
