# src/pagelens/core/utils/path_utils.py
import logging
import re
from pathlib import Path
from urllib.parse import urlparse

logger = logging.getLogger(__name__)


class PathUtils:
    """
    A central utility for reliably retrieving important package and user paths.
    """

    # --- Package specific paths

    @staticmethod
    def get_package_root() -> Path:
        """Returns the directory of the 'pagelens' package."""
        return Path(__file__).resolve().parent.parent.parent

    @staticmethod
    def get_settings_file() -> Path:
        return PathUtils.get_package_root() / "settings.json"

    # --- User specific paths ---

    @staticmethod
    def get_user_documents_dir() -> Path:
        """
        Returns the absolute path to the current user's Documents directory.
        """
        return Path.home() / "Documents"

    # --- Helper methods ---

    @staticmethod
    def slugify_url(url: str) -> str:
        """Turns a page URL into a filesystem-safe stem, e.g. 'example.com_about'."""
        parsed = urlparse(url)
        raw = f"{parsed.netloc}{parsed.path}".strip("/") or "page"
        return re.sub(r"[^A-Za-z0-9.-]+", "_", raw).strip("_")

    @staticmethod
    def resolve_export_path(output: str, url: str, suffix: str) -> Path:
        """
        Resolves the target file for an export.

        Absolute paths are used as-is, relative ones are placed in the user's
        Documents folder. A directory target gets a file named after the URL.
        """
        path = Path(output).expanduser()
        if not path.is_absolute():
            path = PathUtils.get_user_documents_dir() / path

        if path.is_dir() or not path.suffix:
            path = path / f"pagelens_{PathUtils.slugify_url(url)}{suffix}"

        path.parent.mkdir(parents=True, exist_ok=True)
        return path
