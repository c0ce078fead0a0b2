import json

import pytest

from form_auditor.dom.builder import DOMBuilder
from form_auditor.dom.engine import CheckEngine
from form_auditor.expectations import FormExpectations
from form_auditor.utils.path_utils import PathUtils

# A document that satisfies every default expectation.
VALID_HTML = """<!DOCTYPE html>
<html lang="en">
<head>
  <meta charset="UTF-8">
  <title>Registration</title>
</head>
<body>
  <form action="#" method="post">
    <label for="gender" accesskey="g">Gender</label>
    <select id="gender" name="gender" required tabindex="6">
      <option value="">-- Select --</option>
      <option value="male">Male</option>
      <option value="female">Female</option>
      <option value="other">Other</option>
    </select>

    <label for="address" accesskey="a">Address</label>
    <textarea id="address" name="address" rows="4" cols="40" required tabindex="7"></textarea>

    <button type="submit" accesskey="r" tabindex="8">Register</button>
    <button type="reset" accesskey="x" tabindex="9">Clear</button>
  </form>
</body>
</html>
"""


@pytest.fixture
def valid_html():
    return VALID_HTML


@pytest.fixture
def builder():
    return DOMBuilder()


@pytest.fixture
def make_doc(builder):
    """Parses an HTML string into an HTMLDocument."""
    def _make(html, source="test.html"):
        return builder.parse_doc(html, source=source)
    return _make


@pytest.fixture
def valid_doc(make_doc):
    return make_doc(VALID_HTML)


@pytest.fixture(scope="session")
def expectations():
    """The bundled defaults, read straight from settings.json (independent of ConfigManager state)."""
    settings = json.loads(PathUtils.get_settings_file().read_text(encoding="utf-8"))
    return FormExpectations.from_config(settings["form"])


@pytest.fixture(scope="session")
def engine():
    return CheckEngine()


@pytest.fixture
def audit(engine, expectations, make_doc):
    """Runs the full battery on an HTML string and returns the AuditReport."""
    def _audit(html):
        return engine.run_audit(make_doc(html), expectations)
    return _audit
