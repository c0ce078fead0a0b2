import pytest
from pydantic import ValidationError

from form_auditor.errors import FormAuditError, MissingFileError


def test_load_doc_missing_file_raises(builder, tmp_path):
    """A missing document is fatal and reported as MissingFileError."""
    missing = tmp_path / "index.html"
    with pytest.raises(MissingFileError) as exc_info:
        builder.load_doc(missing)

    assert exc_info.value.path == missing
    # Catchable both as our own error and as the builtin
    assert isinstance(exc_info.value, FormAuditError)
    assert isinstance(exc_info.value, FileNotFoundError)


def test_load_doc_directory_is_missing(builder, tmp_path):
    with pytest.raises(MissingFileError):
        builder.load_doc(tmp_path)


def test_load_doc_reads_file(builder, tmp_path, valid_html):
    path = tmp_path / "index.html"
    path.write_text(valid_html, encoding="utf-8")

    doc = builder.load_doc(path)
    assert doc.source == str(path)
    assert doc.has_doctype is True
    assert doc.find_first("form") is not None


@pytest.mark.parametrize("html", [
    "<!DOCTYPE html><html></html>",
    "<!doctype html><html></html>",
    "<!DocType HTML><html></html>",
    "\n\n   <!DOCTYPE html>\n<html></html>",
    "\ufeff<!DOCTYPE html><html></html>",
])
def test_doctype_detected(make_doc, html):
    assert make_doc(html).has_doctype is True


@pytest.mark.parametrize("html", [
    "<html></html>",
    "<!-- comment --><!DOCTYPE html><html></html>",
    '<!DOCTYPE html PUBLIC "-//W3C//DTD HTML 4.01//EN"><html></html>',
    "",
])
def test_doctype_not_detected(make_doc, html):
    assert make_doc(html).has_doctype is False


def test_only_leading_bom_is_removed(make_doc):
    doc = make_doc("\ufeff<!DOCTYPE html><p>a\ufeffb</p>")
    assert doc.raw_html == "<!DOCTYPE html><p>a\ufeffb</p>"
    assert doc.has_doctype is True


def test_document_is_immutable(valid_doc):
    with pytest.raises(ValidationError):
        valid_doc.source = "other.html"


def test_find_first_and_find_all(valid_doc):
    assert valid_doc.find_first("select#gender").name == "select"
    assert valid_doc.find_first("select#nope") is None
    assert len(valid_doc.find_all("option")) == 4
    assert valid_doc.find_all("table") == []


def test_dump_excludes_tree(valid_doc):
    dumped = valid_doc.model_dump()
    assert "soup" not in dumped
    assert dumped["has_doctype"] is True
