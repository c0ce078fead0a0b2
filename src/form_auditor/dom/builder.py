# src/form_auditor/dom/builder.py
import logging
import re
from pathlib import Path
from typing import Union

from bs4 import BeautifulSoup

from .models import HTMLDocument
from ..errors import MissingFileError

logger = logging.getLogger(__name__)

DOCTYPE_PATTERN = re.compile(r"<!doctype html>", re.IGNORECASE)


class DOMBuilder:
    """
    Builder responsible for turning raw HTML (or a file on disk) into an HTMLDocument.
    """

    def load_doc(self, path: Union[str, Path]) -> HTMLDocument:
        """
        Reads and parses the document at `path`.

        Raises:
            MissingFileError: If the path does not exist or is not a regular file.
        """
        doc_path = Path(path)
        if not doc_path.is_file():
            logger.error("Document not found at %s", doc_path)
            raise MissingFileError(doc_path)

        html = doc_path.read_text(encoding="utf-8")
        logger.debug("Loaded %d characters from %s", len(html), doc_path)
        return self.parse_doc(html, source=str(doc_path))

    def parse_doc(self, html: str, source: str = "<string>") -> HTMLDocument:
        """
        Parses raw HTML content into an HTMLDocument.

        Args:
            html (str): The raw HTML string.
            source (str): Where the HTML came from; used in reports only.

        Returns:
            HTMLDocument: The immutable parsed document.
        """
        # Strip a leading BOM so the doctype prefix check sees the real first characters
        clean_html = (html or "").removeprefix('\ufeff')

        # html5lib builds the tree as a browser does: implied head/body, textarea content as text.
        # multi_valued_attributes=None keeps class/accesskey/etc. as plain strings
        soup = BeautifulSoup(clean_html, 'html5lib', multi_valued_attributes=None)

        has_doctype = bool(DOCTYPE_PATTERN.match(clean_html.strip()))
        logger.debug("Parsed %s (doctype=%s)", source, has_doctype)

        return HTMLDocument(
            source=source,
            raw_html=clean_html,
            has_doctype=has_doctype,
            soup=soup
        )
