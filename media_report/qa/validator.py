"""QA validator — inspects an exported deck against its report view.

Checks that a built presentation matches the view it was exported from:
one slide per page, every contents row listed with its page number on the
contents slide, and every module slide carrying its module title.  Uses
python-pptx to read back the generated file.

Usage::

    from media_report.qa.validator import DeckValidator

    validator = DeckValidator(view)
    result = validator.validate(pptx_bytes)
    assert result.passed, result.summary()
"""

import io
from dataclasses import dataclass, field

from pptx import Presentation

from media_report.processor.view import ReportView
from media_report.schema.labels import module_label
from media_report.schema.models import CONTENTS_PAGE, COVER_PAGE


# ---------------------------------------------------------------------------
# Result types
# ---------------------------------------------------------------------------

@dataclass
class Issue:
    """A single QA issue found during validation."""
    severity: str       # "error" or "warning"
    page: int           # 0 for deck-level issues
    category: str       # e.g. "slide_count", "contents", "title"
    message: str

    def __str__(self) -> str:
        loc = f"page {self.page}" if self.page else "deck"
        return f"[{self.severity.upper()}] {loc}: {self.message}"


@dataclass
class QAResult:
    """Aggregated result of QA validation."""
    issues: list[Issue] = field(default_factory=list)

    @property
    def errors(self) -> list[Issue]:
        return [i for i in self.issues if i.severity == "error"]

    @property
    def warnings(self) -> list[Issue]:
        return [i for i in self.issues if i.severity == "warning"]

    @property
    def passed(self) -> bool:
        return len(self.errors) == 0

    def summary(self) -> str:
        """One-line summary string."""
        status = "PASS" if self.passed else "FAIL"
        return (
            f"QA {status}: {len(self.errors)} error(s), "
            f"{len(self.warnings)} warning(s)"
        )

    def report(self) -> str:
        """Multi-line report of all issues."""
        lines = [self.summary()]
        for issue in self.issues:
            lines.append(f"  {issue}")
        return "\n".join(lines)


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------

def all_text_on_slide(slide) -> str:
    """Concatenate all text on a slide, including table cells."""
    parts: list[str] = []
    for shape in slide.shapes:
        if shape.has_text_frame:
            parts.append(shape.text_frame.text)
        if getattr(shape, "has_table", False) and shape.has_table:
            for row in shape.table.rows:
                for cell in row.cells:
                    parts.append(cell.text)
    return "\n".join(parts)


# ---------------------------------------------------------------------------
# DeckValidator
# ---------------------------------------------------------------------------

class DeckValidator:
    """Validates an exported deck against the :class:`ReportView` it shows."""

    def __init__(self, view: ReportView) -> None:
        self.view = view

    def validate(self, pptx_bytes: bytes) -> QAResult:
        prs = Presentation(io.BytesIO(pptx_bytes))
        result = QAResult()

        expected = self.view.total_pages
        actual = len(prs.slides)
        if actual != expected:
            result.issues.append(Issue(
                "error", 0, "slide_count",
                f"Expected {expected} slides (one per page), found {actual}",
            ))
            return result

        self._check_cover(prs.slides[COVER_PAGE - 1], result)
        self._check_contents(prs.slides[CONTENTS_PAGE - 1], result)
        self._check_module_titles(prs, result)
        return result

    def _check_cover(self, slide, result: QAResult) -> None:
        expected = f"Prepared for {self.view.cover.organization_name}"
        if expected not in all_text_on_slide(slide):
            result.issues.append(Issue(
                "error", COVER_PAGE, "cover",
                f"Cover does not name {self.view.cover.organization_name!r}",
            ))

    def _check_contents(self, slide, result: QAResult) -> None:
        lines = all_text_on_slide(slide).splitlines()
        for row in self.view.contents.rows():
            suffix = f"{row.label} ........ {row.page}"
            if not any(line.endswith(suffix) for line in lines):
                result.issues.append(Issue(
                    "error", CONTENTS_PAGE, "contents",
                    f"Contents row {row.label!r} with page {row.page} not found",
                ))

    def _check_module_titles(self, prs, result: QAResult) -> None:
        for entry in self.view.page_index.ordered_modules:
            slide = prs.slides[entry.page - 1]
            title = module_label(entry.module, self.view.module_labels)
            if title not in all_text_on_slide(slide):
                result.issues.append(Issue(
                    "warning", entry.page, "title",
                    f"Module title {title!r} missing from slide",
                ))


# ---------------------------------------------------------------------------
# Convenience function
# ---------------------------------------------------------------------------

def validate_deck(pptx_bytes: bytes, view: ReportView) -> QAResult:
    return DeckValidator(view).validate(pptx_bytes)
