import re
from collections import Counter
from typing import List, Optional

from ..dom.core import CheckDefinition, check_spec, get_attribute
from ..dom.models import HTMLDocument
from ..errors import ensure
from ..expectations import FormExpectations

LEADING_INT = re.compile(r"\s*([+-]?\d+)")


def parse_tabindex(value: Optional[str]) -> Optional[int]:
    """
    Lenient integer parse: reads the leading digits and ignores the rest
    ("7" -> 7, " 8px" -> 8, "abc" -> None), as browsers do.
    """
    if value is None:
        return None
    match = LEADING_INT.match(value)
    return int(match.group(1)) if match else None


def _duplicates(values: List) -> List:
    return sorted(v for v, n in Counter(values).items() if n > 1)


@check_spec(code="ACCESSKEY_MIN_COUNT", title="At least {subject.min_accesskeys} elements carry accesskey")
def check_accesskey_count(doc: HTMLDocument, expectations: FormExpectations) -> None:
    count = len(doc.find_all("[accesskey]"))
    ensure(
        count >= expectations.min_accesskeys,
        f"{count} element(s) carry accesskey, expected at least {expectations.min_accesskeys}"
    )


@check_spec(code="TABINDEX_MIN_COUNT", title="At least {subject.min_tabindexes} elements carry tabindex")
def check_tabindex_count(doc: HTMLDocument, expectations: FormExpectations) -> None:
    count = len(doc.find_all("[tabindex]"))
    ensure(
        count >= expectations.min_tabindexes,
        f"{count} element(s) carry tabindex, expected at least {expectations.min_tabindexes}"
    )


@check_spec(code="TABINDEX_UNIQUE", title="tabindex values are unique")
def check_tabindex_unique(doc: HTMLDocument, _: FormExpectations) -> None:
    values = [parse_tabindex(get_attribute(el, "tabindex")) for el in doc.find_all("[tabindex]")]
    dupes = _duplicates([v for v in values if v is not None])
    ensure(not dupes, f"Duplicate tabindex value(s): {', '.join(map(str, dupes))}")


@check_spec(code="ACCESSKEY_UNIQUE", title="accesskey values are unique")
def check_accesskey_unique(doc: HTMLDocument, _: FormExpectations) -> None:
    values = [get_attribute(el, "accesskey") for el in doc.find_all("[accesskey]")]
    dupes = _duplicates([v for v in values if v])
    ensure(not dupes, f"Duplicate accesskey value(s): {', '.join(dupes)}")


DEFINITION = CheckDefinition(
    group="ACCESSIBILITY",
    scope="document",
    checks=[check_accesskey_count, check_tabindex_count, check_tabindex_unique, check_accesskey_unique],
    order=40,
    description="Document-wide keyboard accessibility invariants"
)
