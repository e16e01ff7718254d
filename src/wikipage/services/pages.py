"""PageService — show, update, check, convert, and list wiki pages.

Update pipeline: LOAD → APPLY → SAVE → RESPOND.  A page that does not
exist yet is created with the store's default format; an existing page
keeps the format it was written in unless ``convert`` is asked for.
"""

from __future__ import annotations

from typing import Any

from wikipage.domain.formats import FormatMark
from wikipage.domain.page import Page
from wikipage.services.base import HANDLED_ERRORS, BaseService
from wikipage.services.result import ServiceResult

# Field name -> Page setter name.
_SETTERS: dict[str, str] = {
    "title": "set_title",
    "description": "set_description",
    "tags": "set_tags",
    "date": "set_date",
    "language": "set_language",
    "draft": "set_draft",
}


def _issue_warnings(page: Page) -> list[str]:
    return [f"{issue.key}: {issue.message}" for issue in page.issues]


class PageService(BaseService):
    """Page operations over a :class:`PageStore`."""

    # ------------------------------------------------------------------
    # Read
    # ------------------------------------------------------------------

    def show(self, path: str) -> ServiceResult:
        """Return the typed fields, raw metadata, and body of a page."""
        op = "show"
        try:
            page = self._store.load(path)
        except HANDLED_ERRORS as exc:
            return self._failure(op, exc, path=path)

        view = page.view()
        data: dict[str, Any] = view.model_dump(mode="json")
        data["date"] = page.date_text
        data["metadata"] = page.metadata.to_dict()
        data["body"] = page.body
        return ServiceResult(ok=True, op=op, data=data, warnings=_issue_warnings(page))

    def list_pages(self) -> ServiceResult:
        """List every page path in the content directory."""
        paths = self._store.find_pages()
        return ServiceResult(
            ok=True,
            op="list_pages",
            data={"items": [{"path": p} for p in paths], "count": len(paths)},
        )

    # ------------------------------------------------------------------
    # Write
    # ------------------------------------------------------------------

    def update(self, path: str, *, changes: dict[str, Any]) -> ServiceResult:
        """Apply field *changes* (and optionally ``body``) and save the page.

        Field values go through the page setters, so ``tags`` may be a
        whitespace-separated string, ``date`` a string in the configured
        date format, and ``draft`` the string ``"true"``/``"false"``.
        """
        op = "update"
        warnings: list[str] = []

        # ── LOAD ─────────────────────────────────────────────
        try:
            page = self._store.load_or_new(path)
        except HANDLED_ERRORS as exc:
            return self._failure(op, exc, path=path)
        created = not page.document.has_front_matter and not page.body

        # ── APPLY ────────────────────────────────────────────
        fields_changed: list[str] = []
        for key, value in changes.items():
            if value is None:
                continue
            if key == "body":
                page.body = str(value)
                fields_changed.append(key)
                continue
            setter = _SETTERS.get(key)
            if setter is None:
                warnings.append(f"Unknown field ignored: {key}")
                continue
            if getattr(page, setter)(value) is False:
                warnings.append(f"Ill formatted {key} ignored: {value}")
                continue
            fields_changed.append(key)

        # ── SAVE ─────────────────────────────────────────────
        try:
            file = self._store.save(page)
        except HANDLED_ERRORS as exc:
            return self._failure(op, exc, path=path)

        # ── RESPOND ──────────────────────────────────────────
        return ServiceResult(
            ok=True,
            op=op,
            data={
                "path": path,
                "file": str(file),
                "format": page.mark.format_name,
                "created": created,
                "fields_changed": fields_changed,
            },
            warnings=warnings,
        )

    def convert(self, path: str, *, to: str | FormatMark) -> ServiceResult:
        """Rewrite a page's front matter in another format."""
        op = "convert"
        try:
            target = FormatMark.parse(to)
        except ValueError as exc:
            return ServiceResult.failure(op, "INVALID_FORMAT", str(exc), format=str(to))

        try:
            page = self._store.load(path)
        except HANDLED_ERRORS as exc:
            return self._failure(op, exc, path=path)

        source = page.mark
        data = {"path": path, "from": source.format_name, "to": target.format_name}
        if source is target:
            return ServiceResult(
                ok=True,
                op=op,
                data={**data, "changed": False},
                warnings=[f"Page is already in {target.format_name} format"],
            )

        page.document = page.document.reformat(target)
        try:
            self._store.save(page)
        except HANDLED_ERRORS as exc:
            return self._failure(op, exc, path=path)
        return ServiceResult(ok=True, op=op, data={**data, "changed": True})

    # ------------------------------------------------------------------
    # Check
    # ------------------------------------------------------------------

    def check(self, *, errors_only: bool = False) -> ServiceResult:
        """Decode every page and report problems.

        Pages that fail to decode are ``error`` issues.  Missing front
        matter and typed-field problems are ``warning`` issues (or
        ``error`` for a malformed date).
        """
        issues: list[dict[str, Any]] = []
        paths = self._store.find_pages()

        for path in paths:
            try:
                page = self._store.load(path)
            except HANDLED_ERRORS as exc:
                failed = self._failure("check", exc, path=path)
                assert failed.error is not None
                issues.append(
                    {
                        "path": path,
                        "category": "decode",
                        "severity": "error",
                        "code": failed.error.code,
                        "message": failed.error.message,
                    }
                )
                continue

            if not page.document.has_front_matter:
                issues.append(
                    {
                        "path": path,
                        "category": "front_matter",
                        "severity": "warning",
                        "code": "NO_FRONT_MATTER",
                        "message": "Page has no front matter",
                    }
                )
                continue

            page.view()
            for issue in page.issues:
                issues.append(
                    {
                        "path": path,
                        "category": "fields",
                        "severity": issue.severity,
                        "code": f"FIELD_{issue.key.upper()}",
                        "message": f"{issue.key}: {issue.message}",
                    }
                )

        if errors_only:
            issues = [i for i in issues if i["severity"] == "error"]
        error_count = sum(1 for i in issues if i["severity"] == "error")
        return ServiceResult(
            ok=True,
            op="check",
            data={
                "pages": len(paths),
                "issues": issues,
                "count": len(issues),
                "error_count": error_count,
                "warning_count": len(issues) - error_count,
                "healthy": error_count == 0,
            },
        )
