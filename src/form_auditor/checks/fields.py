from typing import Optional

from bs4 import Tag

from ..dom.core import CheckDefinition, check_spec, get_attribute, has_attribute
from ..dom.models import HTMLDocument
from ..errors import AssertionFailure, ensure
from ..expectations import FieldExpectation


def _require_field(doc: HTMLDocument, field: FieldExpectation) -> Tag:
    """Every attribute check on a field fails (not crashes) when the field itself is absent."""
    element = doc.find_first(field.selector)
    if element is None:
        raise AssertionFailure(f"{field.display} not found")
    return element


def _find_label(doc: HTMLDocument, field: FieldExpectation) -> Optional[Tag]:
    return doc.find_first(field.label_selector)


@check_spec(code="FIELD_EXISTS", title="{subject.display} exists")
def check_exists(doc: HTMLDocument, field: FieldExpectation) -> None:
    _require_field(doc, field)


@check_spec(
    code="FIELD_NAME",
    title='{subject.display} has name="{subject.name}"',
    applies=lambda f: f.name is not None
)
def check_name(doc: HTMLDocument, field: FieldExpectation) -> None:
    element = _require_field(doc, field)
    actual = get_attribute(element, "name")
    ensure(actual == field.name, f'{field.display} has name={actual!r}, expected "{field.name}"')


@check_spec(
    code="FIELD_REQUIRED",
    title="{subject.display} is required",
    applies=lambda f: f.required
)
def check_required(doc: HTMLDocument, field: FieldExpectation) -> None:
    element = _require_field(doc, field)
    ensure(has_attribute(element, "required"), f"{field.display} is missing the required attribute")


@check_spec(
    code="FIELD_TABINDEX",
    title='{subject.display} has tabindex="{subject.tabindex}"',
    applies=lambda f: f.tabindex is not None
)
def check_tabindex(doc: HTMLDocument, field: FieldExpectation) -> None:
    element = _require_field(doc, field)
    actual = get_attribute(element, "tabindex")
    ensure(actual == field.tabindex, f'{field.display} has tabindex={actual!r}, expected "{field.tabindex}"')


@check_spec(
    code="SELECT_MIN_OPTIONS",
    title="{subject.display} has at least {subject.min_options} options",
    applies=lambda f: f.min_options is not None
)
def check_min_options(doc: HTMLDocument, field: FieldExpectation) -> None:
    element = _require_field(doc, field)
    count = len(element.select("option"))
    ensure(
        count >= field.min_options,
        f"{field.display} has {count} option(s), expected at least {field.min_options}"
    )


@check_spec(
    code="SELECT_PLACEHOLDER",
    title="{subject.display} starts with an empty-value placeholder option",
    applies=lambda f: f.placeholder_first
)
def check_placeholder(doc: HTMLDocument, field: FieldExpectation) -> None:
    element = _require_field(doc, field)
    first = element.select_one("option")
    ensure(first is not None, f"{field.display} has no options")
    value = get_attribute(first, "value")
    ensure(value == "", f'First option of {field.display} has value={value!r}, expected ""')


@check_spec(
    code="SELECT_OPTION_VALUES",
    title="{subject.display} offers options {subject.option_values}",
    applies=lambda f: bool(f.option_values)
)
def check_option_values(doc: HTMLDocument, field: FieldExpectation) -> None:
    element = _require_field(doc, field)
    values = {get_attribute(option, "value") for option in element.select("option")}
    missing = [v for v in field.option_values if v not in values]
    ensure(not missing, f"{field.display} is missing option value(s): {', '.join(missing)}")


@check_spec(
    code="FIELD_ATTRIBUTES",
    title="{subject.display} has non-empty {subject.non_empty_attributes}",
    applies=lambda f: bool(f.non_empty_attributes)
)
def check_non_empty_attributes(doc: HTMLDocument, field: FieldExpectation) -> None:
    element = _require_field(doc, field)
    problems = []
    for attr in field.non_empty_attributes:
        if not has_attribute(element, attr):
            problems.append(f"{attr} (missing)")
        elif not get_attribute(element, attr):
            problems.append(f"{attr} (empty)")
    ensure(not problems, f"{field.display} attribute problems: {', '.join(problems)}")


@check_spec(code="LABEL_PRESENT", title='A label with for="{subject.id}" exists')
def check_label(doc: HTMLDocument, field: FieldExpectation) -> None:
    ensure(_find_label(doc, field) is not None, f'No <label for="{field.id}"> found')


@check_spec(
    code="LABEL_ACCESSKEY",
    title='Label for {subject.display} has accesskey="{subject.label_accesskey}"',
    applies=lambda f: f.label_accesskey is not None
)
def check_label_accesskey(doc: HTMLDocument, field: FieldExpectation) -> None:
    label = _find_label(doc, field)
    ensure(label is not None, f'No <label for="{field.id}"> found')
    actual = get_attribute(label, "accesskey")
    ensure(
        actual == field.label_accesskey,
        f'Label for {field.display} has accesskey={actual!r}, expected "{field.label_accesskey}"'
    )


DEFINITION = CheckDefinition(
    group="FIELDS",
    scope="field",
    checks=[
        check_exists,
        check_name,
        check_required,
        check_tabindex,
        check_min_options,
        check_placeholder,
        check_option_values,
        check_non_empty_attributes,
        check_label,
        check_label_accesskey,
    ],
    order=20,
    description="Per-field attributes, options and label association"
)
