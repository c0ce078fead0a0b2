from bs4 import Tag

from ..dom.core import CheckDefinition, check_spec, get_attribute, text_content
from ..dom.models import HTMLDocument
from ..errors import AssertionFailure, ensure
from ..expectations import ButtonExpectation


def _require_button(doc: HTMLDocument, button: ButtonExpectation) -> Tag:
    element = doc.find_first(button.selector)
    if element is None:
        raise AssertionFailure(f"{button.display} not found")
    return element


@check_spec(code="BUTTON_EXISTS", title="{subject.display} exists")
def check_exists(doc: HTMLDocument, button: ButtonExpectation) -> None:
    _require_button(doc, button)


@check_spec(
    code="BUTTON_ACCESSKEY",
    title='{subject.display} has accesskey="{subject.accesskey}"',
    applies=lambda b: b.accesskey is not None
)
def check_accesskey(doc: HTMLDocument, button: ButtonExpectation) -> None:
    actual = get_attribute(_require_button(doc, button), "accesskey")
    ensure(actual == button.accesskey, f'{button.display} has accesskey={actual!r}, expected "{button.accesskey}"')


@check_spec(
    code="BUTTON_TABINDEX",
    title='{subject.display} has tabindex="{subject.tabindex}"',
    applies=lambda b: b.tabindex is not None
)
def check_tabindex(doc: HTMLDocument, button: ButtonExpectation) -> None:
    actual = get_attribute(_require_button(doc, button), "tabindex")
    ensure(actual == button.tabindex, f'{button.display} has tabindex={actual!r}, expected "{button.tabindex}"')


@check_spec(code="BUTTON_TEXT", title="{subject.display} has visible text")
def check_text(doc: HTMLDocument, button: ButtonExpectation) -> None:
    text = (text_content(_require_button(doc, button)) or "").strip()
    ensure(text, f"{button.display} has no text content")


DEFINITION = CheckDefinition(
    group="BUTTONS",
    scope="button",
    checks=[check_exists, check_accesskey, check_tabindex, check_text],
    order=30,
    description="Submit/reset action controls"
)
