# src/form_auditor/utils/path_utils.py
from typing import Optional, Union

import logging
from pathlib import Path

logger = logging.getLogger(__name__)


class PathUtils:
    """
    A central utility for reliably retrieving important package and document paths.
    """

    @staticmethod
    def get_package_root() -> Path:
        """Returns the absolute path of the form_auditor package directory."""
        return Path(__file__).resolve().parent.parent

    @staticmethod
    def get_settings_file() -> Path:
        """Returns the path of the bundled default settings.json."""
        return PathUtils.get_package_root() / "settings.json"

    @staticmethod
    def resolve_document(path: Union[str, Path], base_dir: Optional[Union[str, Path]] = None) -> Path:
        """
        Resolves the document path. Absolute paths are kept; relative paths are
        taken relative to `base_dir` (default: the current working directory).
        Existence is not checked here; DOMBuilder.load_doc raises MissingFileError.
        """
        doc_path = Path(path).expanduser()
        if not doc_path.is_absolute():
            doc_path = Path(base_dir) / doc_path if base_dir else Path.cwd() / doc_path
        resolved = doc_path.resolve()
        logger.debug("Resolved document path %s -> %s", path, resolved)
        return resolved
