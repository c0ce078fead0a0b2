import pytest

from form_auditor.dom.core import CheckDefinition, check_spec
from form_auditor.dom.engine import CheckEngine
from form_auditor.dom.registry import CheckRegistry
from form_auditor.errors import ensure
from form_auditor.expectations import FormExpectations


# A few simple fake checks for the isolation tests
@check_spec(code="ALWAYS_FAILS", title="always fails")
def always_fails(doc, _):
    ensure(False, "nope")


@check_spec(code="CRASHES", title="crashes")
def crashes(doc, _):
    raise KeyError("boom")


@check_spec(code="ALWAYS_PASSES", title="always passes")
def always_passes(doc, _):
    pass


@pytest.fixture
def fake_engine():
    definition = CheckDefinition(group="FAKE", scope="document", checks=[always_fails, crashes, always_passes])
    return CheckEngine(definitions=[definition])


def test_failure_and_crash_do_not_stop_siblings(fake_engine, valid_doc):
    report = fake_engine.run_audit(valid_doc, FormExpectations())

    assert [r.check_id for r in report.results] == ["ALWAYS_FAILS", "CRASHES", "ALWAYS_PASSES"]
    assert [r.status for r in report.results] == ["FAIL", "ERROR", "PASS"]
    assert report.get("ALWAYS_FAILS").message == "nope"
    assert "KeyError" in report.get("CRASHES").message
    assert report.passed is False


def test_default_plan_order_and_expansion(engine, expectations):
    ids = [c.check_id for c in engine.plan(expectations)]

    assert ids[:3] == ["DOCTYPE", "HTML_SKELETON", "FORM_PRESENT"]
    assert ids[-2:] == ["CONTROLS_INSIDE_FORM", "LABELS_ASSOCIATED"]
    assert len(ids) == len(set(ids))
    assert len(ids) == 33

    # Select-only and textarea-only rules are scheduled only where configured
    assert "gender.SELECT_PLACEHOLDER" in ids
    assert "address.SELECT_PLACEHOLDER" not in ids
    assert "address.FIELD_ATTRIBUTES" in ids
    assert "gender.FIELD_ATTRIBUTES" not in ids
    assert "submit.BUTTON_ACCESSKEY" in ids
    assert "reset.BUTTON_TEXT" in ids


def test_titles_are_rendered_from_subject(engine, expectations):
    titles = {c.check_id: c.title for c in engine.plan(expectations)}
    assert titles["gender.FIELD_TABINDEX"] == 'select#gender has tabindex="6"'
    assert titles["reset.BUTTON_ACCESSKEY"] == 'button[type="reset"] has accesskey="x"'
    assert titles["ACCESSKEY_MIN_COUNT"] == "At least 4 elements carry accesskey"


def test_unconfigured_rules_are_skipped(engine, valid_doc):
    expectations = FormExpectations.from_config({
        "fields": [{"key": "gender", "tag": "select", "id": "gender"}],
        "buttons": []
    })
    ids = [c.check_id for c in engine.plan(expectations)]
    assert "gender.FIELD_EXISTS" in ids
    assert "gender.LABEL_PRESENT" in ids
    assert "gender.FIELD_NAME" not in ids
    assert "gender.FIELD_TABINDEX" not in ids
    assert not any(i.startswith("submit.") for i in ids)

    report = engine.run_audit(valid_doc, expectations)
    assert report.passed


def test_idempotent(engine, expectations, make_doc, valid_html):
    """Running twice over the same document gives identical outcomes."""
    doc = make_doc(valid_html.replace('tabindex="9"', 'tabindex="8"'))

    def outcome():
        return [(r.check_id, r.status, r.message) for r in engine.run_audit(doc, expectations).results]

    assert outcome() == outcome()


def test_progress_wrapper_is_used(engine, expectations, valid_doc):
    seen = []

    def progress(checks):
        for c in checks:
            seen.append(c.check_id)
            yield c

    report = engine.run_audit(valid_doc, expectations, progress=progress)
    assert seen == [r.check_id for r in report.results]


def test_registry_discovers_groups_in_order():
    CheckRegistry.discover()
    groups = [d.group for d in CheckRegistry.get_definitions()]
    assert groups == ["STRUCTURE", "FIELDS", "BUTTONS", "ACCESSIBILITY", "INTEGRATION"]

    codes = CheckRegistry.get_all_possible_codes()
    for code in ("DOCTYPE", "FIELD_TABINDEX", "SELECT_OPTION_VALUES", "BUTTON_TEXT", "TABINDEX_UNIQUE", "CONTROLS_INSIDE_FORM"):
        assert code in codes


def test_definition_rejects_undecorated_check():
    def bare(doc, _):
        pass

    with pytest.raises(ValueError, match="missing @check_spec"):
        CheckDefinition(group="BAD", scope="document", checks=[bare])


def test_definition_rejects_unknown_scope():
    with pytest.raises(ValueError, match="Unknown check scope"):
        CheckDefinition(group="BAD", scope="page", checks=[always_passes])


def test_definition_rejects_duplicate_codes():
    with pytest.raises(ValueError, match="Duplicate check code"):
        CheckDefinition(group="BAD", scope="document", checks=[always_passes, always_passes])
