# src/form_auditor/dom/models.py
from typing import List, Optional

from bs4 import BeautifulSoup, Tag
from pydantic import BaseModel, ConfigDict, Field


class HTMLDocument(BaseModel):
    """
    Represents a parsed HTML document.

    Built once by the DOMBuilder and shared read-only by every check.
    Lookups that find nothing return None (or an empty list) instead of
    raising, so every check has to deal with absence explicitly.
    """
    model_config = ConfigDict(arbitrary_types_allowed=True, frozen=True)

    source: str
    raw_html: str = ""
    has_doctype: bool = False

    # The parsed tree. Excluded from dumps and repr; it is not data, it is the index.
    soup: BeautifulSoup = Field(exclude=True, repr=False)

    def find_first(self, selector: str) -> Optional[Tag]:
        """Returns the first element matching the CSS selector, or None."""
        return self.soup.select_one(selector)

    def find_all(self, selector: str) -> List[Tag]:
        """Returns all elements matching the CSS selector in document order."""
        return list(self.soup.select(selector))
