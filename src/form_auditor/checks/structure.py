from ..dom.core import CheckDefinition, check_spec
from ..dom.models import HTMLDocument
from ..errors import ensure
from ..expectations import FormExpectations


@check_spec(code="DOCTYPE", title="Document starts with <!DOCTYPE html>")
def check_doctype(doc: HTMLDocument, _: FormExpectations) -> None:
    first_line = doc.raw_html.strip().splitlines()[0] if doc.raw_html.strip() else ""
    ensure(doc.has_doctype, f"Document does not start with <!DOCTYPE html> (found: '{first_line[:40]}')")


@check_spec(code="HTML_SKELETON", title="Document has <html>, <head> and <body>")
def check_skeleton(doc: HTMLDocument, _: FormExpectations) -> None:
    missing = [tag for tag in ("html", "head", "body") if doc.find_first(tag) is None]
    ensure(not missing, f"Document missing: {', '.join(f'<{tag}>' for tag in missing)}")


@check_spec(code="FORM_PRESENT", title="Document contains a <form>")
def check_form(doc: HTMLDocument, _: FormExpectations) -> None:
    ensure(doc.find_first("form") is not None, "Document does not contain a <form> element")


DEFINITION = CheckDefinition(
    group="STRUCTURE",
    scope="document",
    checks=[check_doctype, check_skeleton, check_form],
    order=10,
    description="Basic HTML document structure"
)
