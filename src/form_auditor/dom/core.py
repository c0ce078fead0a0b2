from typing import Any, Callable, List, Optional, Set
from bs4 import Tag


def check_spec(code: str, title: str, applies: Optional[Callable[[Any], bool]] = None):
    """
    Decorator to declare the code and title of a check function.
    Facilitates auto-discovery by the CheckRegistry.

    `title` may reference the subject via str.format (e.g. "{subject.id}").
    `applies` is an optional predicate on the subject; when it returns False
    the check is not scheduled for that subject.
    """
    def decorator(func):
        func.defined_code = code
        func.title = title
        func.applies = applies
        return func
    return decorator


# --- Element query helpers ---
# All helpers accept None for the element and treat it as "not found".

def get_attribute(element: Optional[Tag], name: str) -> Optional[str]:
    """Returns the attribute value, or None if the element or attribute is absent."""
    if element is None:
        return None
    value = element.get(name)
    if isinstance(value, list):
        return " ".join(value)
    return value


def has_attribute(element: Optional[Tag], name: str) -> bool:
    if element is None:
        return False
    return element.has_attr(name)


def text_content(element: Optional[Tag]) -> Optional[str]:
    """Returns the concatenated text of the element and its descendants."""
    if element is None:
        return None
    return element.get_text()


def contains(ancestor: Optional[Tag], descendant: Optional[Tag]) -> bool:
    """
    True if `descendant` sits somewhere below `ancestor` in the tree.
    Compares by identity: bs4 Tags compare equal when they merely look alike.
    """
    if ancestor is None or descendant is None:
        return False
    return any(parent is ancestor for parent in descendant.parents)


SCOPES = ("document", "field", "button")


class CheckDefinition:
    """
    Configuration object binding a group of checks to the subjects they run against.

    scope:
      - "document": each check runs once, receiving the FormExpectations.
      - "field":    each check runs once per configured FieldExpectation.
      - "button":   each check runs once per configured ButtonExpectation.
    """

    def __init__(
            self,
            group: str,
            scope: str,
            checks: List[Callable[[Any, Any], None]],
            order: int = 100,
            description: str = ""
    ):
        if scope not in SCOPES:
            raise ValueError(f"Unknown check scope '{scope}' (expected one of {SCOPES})")

        self.group = group
        self.scope = scope
        self.checks = checks
        self.order = order
        self.description = description

        codes: Set[str] = set()
        for check in self.checks:
            if not hasattr(check, "defined_code"):
                raise ValueError(f"Check '{check.__name__}' in group '{group}' is missing @check_spec")
            if check.defined_code in codes:
                raise ValueError(f"Duplicate check code '{check.defined_code}' in group '{group}'")
            codes.add(check.defined_code)

        self.codes = sorted(codes)
