# src/auditor/dom/registry.py
import importlib
import pkgutil
import logging
from typing import Dict, List, Optional

from .core import ExtractorDefinition

logger = logging.getLogger(__name__)


class DOMRegistry:
    """
    Central registry for structural extractors.

    Dynamically discovers ExtractorDefinition modules from the
    'auditor.dom.elements' package.
    """

    _extractors: Dict[str, ExtractorDefinition] = {}
    _loaded: bool = False

    @classmethod
    def discover(cls) -> None:
        """
        Registers every module in `auditor.dom.elements` that exposes a
        `DEFINITION` attribute (instance of `ExtractorDefinition`).
        """
        if cls._loaded:
            return

        import auditor.dom.elements as elements_pkg

        for _, name, _ in pkgutil.iter_modules(elements_pkg.__path__):
            full_name = f"auditor.dom.elements.{name}"
            module = importlib.import_module(full_name)
            defn = getattr(module, "DEFINITION", None)
            if not isinstance(defn, ExtractorDefinition):
                logger.debug("Module %s has no extractor definition, skipped.", full_name)
                continue

            if defn.name in cls._extractors:
                logger.warning("Extractor '%s' registered twice; keeping %s.", defn.name, full_name)
            cls._extractors[defn.name] = defn
            logger.debug("Extractor loaded: %s", defn.name)

        cls._loaded = True

    @classmethod
    def get_extractor(cls, name: str) -> Optional[ExtractorDefinition]:
        """Retrieves the extractor registered under `name`."""
        return cls._extractors.get(name)

    @classmethod
    def get_all_extractors(cls) -> List[ExtractorDefinition]:
        """Returns all registered extractors, sorted by name."""
        return [cls._extractors[name] for name in sorted(cls._extractors)]
