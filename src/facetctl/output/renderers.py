"""Rich renderers for each service operation.

:func:`render_result` looks the renderer up by ``result.op`` in
``_OP_RENDERERS`` and draws it on a buffered console; ops without an
entry get a plain key/value listing. :func:`render_quiet` is the
pipe-friendly counterpart used by ``--quiet``.
"""

from __future__ import annotations

import json
from collections.abc import Callable
from typing import TYPE_CHECKING, Any

from rich.table import Table
from rich.text import Text

from facetctl.output.console import count_style, create_console, get_output

if TYPE_CHECKING:
    from rich.console import Console

    from facetctl.services.result import ServiceResult

type Renderer = Callable[..., None]

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
        if verbose:
            _render_meta(console, result)
    else:
        _render_error(result, console, verbose=verbose)

    return get_output(console).rstrip("\n")


def render_quiet(result: ServiceResult) -> str:
    """Render minimal output for ``--quiet`` mode.

    Wire values and query strings print bare so they can be piped; an
    absent (null) wire value prints as an empty line.
    """
    if not result.ok:
        msg = result.error.message if result.error else "Unknown error"
        return f"ERROR: {result.op}: {msg}"

    d = result.data
    if "wire" in d:
        return wire_text(d["wire"], null="")
    if "query" in d:
        return str(d["query"])
    if result.op == "list_filters":
        return "\n".join(f["key"] for f in d.get("filters", []))
    if result.op == "show_terms":
        return "\n".join(t["slug"] for t in d.get("terms", []))
    if result.op == "parse_query":
        return "\n".join(
            f"{key}={wire_text(item['wire'], null='')}" for key, item in d["filters"].items()
        )
    return f"OK: {result.op}"


def wire_text(wire: Any, *, null: str = "null") -> str:
    """Display form of a wire value; strings are shown as-is."""
    if wire is None:
        return null
    return str(wire)


# ── Helpers ───────────────────────────────────────────────────────────


def _status_line(console: Console, result: ServiceResult) -> None:
    """Print the OK status line."""
    console.print(Text("OK", style="facet.ok"), Text(f"  {result.op}", style="facet.op"))


def _field(console: Console, key: str, value: Any) -> None:
    """Print a single indented key-value field."""
    k = Text(f"  {key}: ", style="facet.key")
    if key == "wire":
        v = Text(wire_text(value), style="facet.null" if value is None else "facet.wire")
    elif isinstance(value, (dict, list)):
        v = Text(json.dumps(value, separators=(",", ":")))
    else:
        v = Text(str(value))
    console.print(k, v, sep="")


def _render_meta(console: Console, result: ServiceResult) -> None:
    """Print meta block including the telemetry span (verbose only)."""
    if not result.meta:
        return

    console.print()
    console.print(Text("  meta:", style="dim"))
    for k, v in result.meta.items():
        if k == "telemetry":
            _render_span(console, v)
        else:
            console.print(f"    {k}: {v}")


def _render_span(console: Console, span_data: dict[str, Any]) -> None:
    duration = span_data.get("duration_ms", 0.0)
    style = "yellow" if duration > 100 else "dim"
    line = f"    [{style}]{duration:>8.2f}ms[/{style}]  {span_data.get('name', '?')}"
    annotations = span_data.get("annotations") or {}
    if annotations:
        line += "  (" + ", ".join(f"{k}={v}" for k, v in annotations.items()) + ")"
    console.print(line)


# ── Error renderer ────────────────────────────────────────────────────


def _render_error(result: ServiceResult, console: Console, *, verbose: bool = False) -> None:
    err = result.error
    msg = err.message if err else "Unknown error"
    label = Text("ERROR", style="facet.error")
    op = Text(f"  {result.op}", style="facet.op")
    console.print(label, op, Text(": "), msg, sep="")

    if verbose and err and err.detail:
        console.print(Text("  detail:", style="dim"))
        for k, v in err.detail.items():
            console.print(f"    {k}: {v}")


# ── Filter renderers ──────────────────────────────────────────────────


def _render_filters(result: ServiceResult, console: Console, *, verbose: bool = False) -> None:
    """Render the configured filters as a table."""
    d = result.data
    if d.get("post_type"):
        _field(console, "post_type", d["post_type"])
    table = Table(show_header=True, show_lines=False, pad_edge=False, expand=False)
    table.add_column("Key", style="facet.label", no_wrap=True)
    table.add_column("Type")
    table.add_column("Label")
    table.add_column("Resets to", style="facet.wire")
    if verbose:
        table.add_column("Options", style="dim")

    for f in d.get("filters", []):
        row = [f["key"], f["type"], f.get("label", ""), wire_text(f.get("resets_to"), null="")]
        if verbose:
            options = {k: v for k, v in f.items() if k not in ("key", "type", "label", "resets_to")}
            row.append(json.dumps(options, separators=(",", ":")))
        table.add_row(*row)

    console.print(table)
    console.print(f"\n{d.get('count', 0)} filters")


def _render_value(result: ServiceResult, console: Console, *, verbose: bool = False) -> None:
    """Render encode/decode/reset: the wire value and the value's fields."""
    _status_line(console, result)
    d = result.data
    for key in ("key", "type", "wire"):
        if key in d:
            _field(console, key, d[key])

    value = d.get("value")
    if value is None:
        _field(console, "value", "none")
        return
    _field(console, "value", value.get("variant", "?"))
    for name, field_value in value.items():
        if name == "variant" or (field_value is None and not verbose):
            continue
        console.print(Text(f"    {name}: ", style="facet.key"), Text(str(field_value)), sep="")


# ── Query renderers ───────────────────────────────────────────────────


def _render_query(result: ServiceResult, console: Console, *, verbose: bool = False) -> None:
    """Render build_query / clear_query results."""
    _status_line(console, result)
    d = result.data
    _field(console, "query", d.get("query", ""))
    if verbose and d.get("values"):
        for key, wire in d["values"].items():
            _field(console, key, wire)


def _render_parsed_query(
    result: ServiceResult, console: Console, *, verbose: bool = False
) -> None:
    """Render parse_query as a table of decoded filters."""
    _status_line(console, result)
    d = result.data
    _field(console, "post_type", d.get("post_type") or "-")
    for key, value in (d.get("system") or {}).items():
        _field(console, key, value)

    filters: dict[str, dict[str, Any]] = d.get("filters", {})
    if not filters:
        console.print("\nNo filters applied")
        return

    table = Table(show_header=True, show_lines=False, pad_edge=False, expand=False)
    table.add_column("Key", style="facet.label", no_wrap=True)
    table.add_column("Type")
    table.add_column("Wire", style="facet.wire")
    table.add_column("Value")
    for key, item in filters.items():
        value = item.get("value") or {}
        shown = {k: v for k, v in value.items() if k != "variant" and v is not None}
        table.add_row(
            key,
            item["type"],
            wire_text(item["wire"]),
            json.dumps(shown, separators=(",", ":")),
        )
    console.print(table)


# ── Terms renderers ───────────────────────────────────────────────────


def _render_terms(result: ServiceResult, console: Console, *, verbose: bool = False) -> None:
    """Render show_terms as an indented tree table."""
    d = result.data
    table = Table(show_header=True, show_lines=False, pad_edge=False, expand=False)
    table.add_column("", no_wrap=True)
    table.add_column("Term", no_wrap=True)
    table.add_column("Count", justify="right")
    if verbose:
        table.add_column("Slug", style="dim")

    for term in d.get("terms", []):
        if term["selected"]:
            marker = Text("✓", style="facet.selected")
        elif term["has_selection"]:
            marker = Text("•", style="facet.hint")
        else:
            marker = Text("")
        label = Text("  " * term["depth"] + term["label"], style="facet.label")
        count = term.get("count")
        row: list[Any] = [marker, label, Text(wire_text(count, null="-"), style=count_style(count))]
        if verbose:
            row.append(term["slug"])
        table.add_row(*row)

    console.print(table)
    shown = len(d.get("terms", []))
    if d.get("search"):
        console.print(f"\n{shown} matching {d['search']!r} of {d.get('total', 0)} terms")
    else:
        footer = f"\n{shown} of {d.get('total', 0)} terms"
        if d.get("has_more"):
            footer += f" (more with --page {d.get('page', 1) + 1})"
        console.print(footer)
    _render_summary(console, d.get("summary"))


def _render_selection(result: ServiceResult, console: Console, *, verbose: bool = False) -> None:
    """Render select_terms: the new selection and its wire value."""
    _status_line(console, result)
    d = result.data
    _field(console, "selected", ", ".join(d.get("selected", [])) or "-")
    _field(console, "wire", d.get("wire"))
    _render_summary(console, d.get("summary"))


def _render_summary(console: Console, summary: dict[str, Any] | None) -> None:
    if not summary or summary.get("primary_label") is None:
        return
    text = summary["primary_label"]
    if summary.get("additional_count"):
        text += f" +{summary['additional_count']}"
    _field(console, "summary", text)


# ── Generic fallback ──────────────────────────────────────────────────


def _render_generic(result: ServiceResult, console: Console, *, verbose: bool = False) -> None:
    """Fallback renderer: status line + all data as key-value pairs."""
    _status_line(console, result)
    for key, value in result.data.items():
        _field(console, key, value)


# ── Dispatch table ────────────────────────────────────────────────────

_OP_RENDERERS: dict[str, Renderer] = {
    "list_filters": _render_filters,
    "encode": _render_value,
    "decode": _render_value,
    "reset": _render_value,
    "build_query": _render_query,
    "clear_query": _render_query,
    "parse_query": _render_parsed_query,
    "show_terms": _render_terms,
    "select_terms": _render_selection,
}
