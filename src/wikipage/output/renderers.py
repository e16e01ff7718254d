"""Operation-specific Rich renderers for ServiceResult.

Each renderer writes to a Rich Console (backed by StringIO).  The caller
extracts the rendered text via ``get_output(console)``.

Renderers are dispatched by ``result.op`` in :func:`render_result`.
Unknown ops fall through to a generic key-value renderer.
"""

from __future__ import annotations

from collections.abc import Callable
from typing import TYPE_CHECKING, Any

from rich.markup import escape
from rich.panel import Panel
from rich.table import Table
from rich.text import Text

from wikipage.output.console import create_console, get_output, style_for_format

if TYPE_CHECKING:
    from rich.console import Console

    from wikipage.services.result import ServiceResult


# ── Public API ────────────────────────────────────────────────────────


def render_result(result: ServiceResult, *, verbose: bool = False) -> str:
    """Render a ServiceResult to a styled string via Rich.

    Returns plain text (no ANSI) when Rich detects no terminal,
    which is the case inside Click's CliRunner and piped output.
    """
    console = create_console()

    if result.ok:
        renderer = _OP_RENDERERS.get(result.op, _render_generic)
        renderer(result, console, verbose=verbose)
    else:
        _render_error(result, console, verbose=verbose)

    return get_output(console).rstrip("\n")


def render_quiet(result: ServiceResult) -> str:
    """Render minimal output for ``--quiet`` mode."""
    if not result.ok:
        msg = result.error.message if result.error else "Unknown error"
        return f"ERROR: {result.op} — {msg}"

    items = result.data.get("items")
    if items and isinstance(items, list):
        return "\n".join(str(item.get("path", "")) for item in items if isinstance(item, dict))
    if result.op == "check":
        return f"{result.data.get('error_count', 0)} errors, {result.data.get('warning_count', 0)} warnings"

    return f"OK: {result.op}"


# ── Helpers ───────────────────────────────────────────────────────────


def _status_line(console: Console, result: ServiceResult) -> None:
    """Print the OK status line."""
    console.print(Text.assemble(("OK", "wiki.ok"), "  ", (result.op, "wiki.op")))


def _field(console: Console, key: str, value: Any) -> None:
    """Print a single indented key-value field."""
    label = Text(f"  {key}: ", style="wiki.key")
    if key in ("path", "file"):
        v = Text(str(value), style="wiki.path")
    elif key == "title":
        v = Text(str(value), style="wiki.title")
    elif key in ("format", "from", "to"):
        v = Text(str(value), style=style_for_format(str(value)))
    elif isinstance(value, list):
        v = Text(", ".join(str(x) for x in value))
    else:
        v = Text(str(value))
    console.print(Text.assemble(label, v))


# ── Error renderer ────────────────────────────────────────────────────


def _render_error(result: ServiceResult, console: Console, *, verbose: bool = False) -> None:
    err = result.error
    msg = err.message if err else "Unknown error"
    console.print(Text.assemble(("ERROR", "wiki.error"), "  ", (result.op, "wiki.op"), f" — {msg}"))

    if verbose and err and err.detail:
        console.print(Text("  detail:", style="dim"))
        for k, v in err.detail.items():
            console.print(Text(f"    {k}: {v}"))


# ── Page renderers ────────────────────────────────────────────────────


def _render_page(result: ServiceResult, console: Console, *, verbose: bool = False) -> None:
    """Render a shown page as a panel: typed fields, then the body."""
    d = result.data
    lines: list[str] = []
    for key in ("date", "language", "draft", "description"):
        val = d.get(key)
        if val not in (None, ""):
            lines.append(f"{key}: {val}")
    tags = d.get("tags", [])
    if tags:
        lines.append(f"tags: {', '.join(tags)}")

    if verbose:
        extra = {k: v for k, v in d.get("metadata", {}).items() if k not in _TYPED_KEYS}
        for key, val in extra.items():
            lines.append(f"{key}: {val}")

    content = "\n".join(lines)
    body = d.get("body", "")
    if body:
        content += f"\n\n{body.strip()}"

    title = f"{d.get('path', '?')} — {d.get('title') or 'Untitled'}"
    style = style_for_format(str(d.get("format", "")))
    console.print(
        Panel(Text(content), title=escape(title), subtitle=d.get("format"), border_style=style or "dim")
    )


_TYPED_KEYS = frozenset({"title", "description", "tags", "date", "language", "draft"})


def _render_mutation(result: ServiceResult, console: Console, *, verbose: bool = False) -> None:
    """Render update/convert results."""
    _status_line(console, result)
    for key in ("path", "format", "from", "to", "changed", "created"):
        if key in result.data:
            _field(console, key, result.data[key])
    if result.data.get("fields_changed"):
        _field(console, "fields_changed", result.data["fields_changed"])
    if verbose and "file" in result.data:
        _field(console, "file", result.data["file"])


def _render_page_list(result: ServiceResult, console: Console, *, verbose: bool = False) -> None:
    items = result.data.get("items", [])
    table = Table(show_header=True, header_style="bold", box=None)
    table.add_column("Path", style="wiki.path")
    for item in items:
        table.add_row(str(item.get("path", "")))
    console.print(table)
    console.print(f"\n{result.data.get('count', len(items))} pages")


def _render_check(result: ServiceResult, console: Console, *, verbose: bool = False) -> None:
    """Render check results with issues grouped by page."""
    issues = result.data.get("issues", [])
    count = result.data.get("count", len(issues))

    if count == 0:
        pages = result.data.get("pages", 0)
        console.print(f"[wiki.ok]OK[/wiki.ok]  No issues found in {pages} pages.")
        return

    severity_styles = {"error": "wiki.error", "warning": "wiki.warning"}

    by_path: dict[str, list[dict[str, Any]]] = {}
    for issue in issues:
        by_path.setdefault(str(issue.get("path", "?")), []).append(issue)

    for path, page_issues in by_path.items():
        console.print(f"\n[wiki.path]{escape(path)}[/wiki.path]")
        for issue in page_issues:
            sev = str(issue.get("severity", "warning"))
            style = severity_styles.get(sev, "")
            prefix = f"[{style}]{sev}[/{style}]" if style else sev
            console.print(f"  {prefix}: {escape(str(issue.get('message', '')))}")
            if verbose and issue.get("code"):
                console.print(f"    code: {issue['code']}")

    errors = result.data.get("error_count", 0)
    warnings = result.data.get("warning_count", count - errors)
    console.print(f"\n{errors} errors, {warnings} warnings")


def _render_generic(result: ServiceResult, console: Console, *, verbose: bool = False) -> None:
    _status_line(console, result)
    for key, value in result.data.items():
        _field(console, key, value)


_OP_RENDERERS: dict[str, Callable[..., None]] = {
    "show": _render_page,
    "update": _render_mutation,
    "convert": _render_mutation,
    "list_pages": _render_page_list,
    "check": _render_check,
}
