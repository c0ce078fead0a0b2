# src/form_auditor/dom/engine.py
import logging
from typing import Any, Callable, Iterable, List, Optional

from .core import CheckDefinition
from .models import HTMLDocument
from .registry import CheckRegistry
from ..errors import AssertionFailure
from ..expectations import FormExpectations
from ..model import AuditReport, CheckResult, ERROR, FAIL, PASS

logger = logging.getLogger(__name__)


class ScheduledCheck:
    """One check bound to the subject it runs against."""

    def __init__(self, definition: CheckDefinition, func: Callable[[HTMLDocument, Any], None], subject: Any):
        self.group = definition.group
        self.code = func.defined_code
        self.func = func
        self.subject = subject
        self.subject_key = getattr(subject, "key", None) if definition.scope != "document" else None

        self.check_id = f"{self.subject_key}.{self.code}" if self.subject_key else self.code
        self.title = getattr(func, "title", func.__name__).format(subject=subject)

    def __repr__(self) -> str:
        return f"ScheduledCheck({self.check_id!r})"


class CheckEngine:
    """
    Runs the conformance battery against an HTMLDocument.

    Every check is isolated: an AssertionFailure marks that check FAIL, any other
    exception marks it ERROR, and in both cases the remaining checks still run.
    The engine holds no per-run state, so repeated runs give identical reports.
    """

    def __init__(self, definitions: Optional[List[CheckDefinition]] = None):
        """Uses the discovered check groups unless explicit definitions are given."""
        if definitions is None:
            CheckRegistry.discover()
            definitions = CheckRegistry.get_definitions()
        self.definitions = sorted(definitions, key=lambda d: (d.order, d.group))

    def plan(self, expectations: FormExpectations) -> List[ScheduledCheck]:
        """Expands every group over its subjects, in execution order."""
        scheduled = []
        for definition in self.definitions:
            for subject in self._subjects(definition, expectations):
                for func in definition.checks:
                    applies = getattr(func, "applies", None)
                    if applies is not None and not applies(subject):
                        continue
                    scheduled.append(ScheduledCheck(definition, func, subject))
        return scheduled

    @staticmethod
    def _subjects(definition: CheckDefinition, expectations: FormExpectations) -> Iterable[Any]:
        if definition.scope == "field":
            return expectations.fields
        if definition.scope == "button":
            return expectations.buttons
        return [expectations]

    def run_check(self, check: ScheduledCheck, doc: HTMLDocument) -> CheckResult:
        """Runs a single scheduled check and converts its outcome into a CheckResult."""
        status, message = PASS, ""
        try:
            check.func(doc, check.subject)
        except AssertionFailure as e:
            status, message = FAIL, str(e)
        except Exception as e:
            logger.error("Check %s crashed on %s: %s", check.check_id, doc.source, e, exc_info=True)
            status, message = ERROR, f"{type(e).__name__}: {e}"

        return CheckResult(
            check_id=check.check_id,
            code=check.code,
            group=check.group,
            subject=check.subject_key,
            title=check.title,
            status=status,
            message=message
        )

    def run_audit(
            self,
            doc: HTMLDocument,
            expectations: FormExpectations,
            progress: Optional[Callable[[Iterable[ScheduledCheck]], Iterable[ScheduledCheck]]] = None
    ) -> AuditReport:
        """
        Runs the full battery on a parsed document.

        Args:
            doc (HTMLDocument): The parsed document, shared read-only by all checks.
            expectations (FormExpectations): The literal values to check against.
            progress: Optional wrapper around the check iterable (e.g. tqdm).

        Returns:
            AuditReport: One result per scheduled check, in execution order.
        """
        checks = self.plan(expectations)
        iterable = progress(checks) if progress else checks

        results = [self.run_check(check, doc) for check in iterable]

        failed = sum(1 for r in results if not r.passed)
        logger.info("Audit of %s finished: %d checks, %d not passing", doc.source, len(results), failed)
        return AuditReport(source=doc.source, results=results)
