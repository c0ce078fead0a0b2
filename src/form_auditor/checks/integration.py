from ..dom.core import CheckDefinition, check_spec, contains
from ..dom.models import HTMLDocument
from ..errors import ensure
from ..expectations import FormExpectations


@check_spec(code="CONTROLS_INSIDE_FORM", title="All checked controls are inside the form")
def check_controls_inside_form(doc: HTMLDocument, expectations: FormExpectations) -> None:
    form = doc.find_first("form")
    ensure(form is not None, "Document does not contain a <form> element")

    subjects = [(f.display, f.selector) for f in expectations.fields]
    subjects += [(b.display, b.selector) for b in expectations.buttons]

    outside = []
    for display, selector in subjects:
        element = doc.find_first(selector)
        if element is None:
            outside.append(f"{display} (not found)")
        elif not contains(form, element):
            outside.append(display)

    ensure(not outside, f"Not inside the first <form>: {', '.join(outside)}")


@check_spec(code="LABELS_ASSOCIATED", title="Every checked field has a for-linked label")
def check_labels_associated(doc: HTMLDocument, expectations: FormExpectations) -> None:
    problems = []
    for field in expectations.fields:
        element = doc.find_first(field.selector)
        label = doc.find_first(field.label_selector)
        if element is None:
            problems.append(f"{field.display} not found")
        if label is None:
            problems.append(f'<label for="{field.id}"> not found')

    ensure(not problems, "; ".join(problems))


DEFINITION = CheckDefinition(
    group="INTEGRATION",
    scope="document",
    checks=[check_controls_inside_form, check_labels_associated],
    order=50,
    description="Controls and labels wired together inside the form"
)
