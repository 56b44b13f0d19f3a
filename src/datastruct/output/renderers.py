"""Operation-specific Rich renderers for ServiceResult.

Each renderer writes to a Rich Console (backed by StringIO).  The caller
extracts the rendered text via ``get_output(console)``.

Renderers are dispatched by ``result.op`` in :func:`render_result`.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

from rich.text import Text
from rich.tree import Tree

from datastruct.output.console import create_console, get_output, style_for_datatype

if TYPE_CHECKING:
    from rich.console import Console

    from datastruct.services.result import ServiceResult


# ── Public API ────────────────────────────────────────────────────────


def render_result(result: ServiceResult, *, verbose: bool = False) -> str:
    """Render a ServiceResult to a styled string via Rich.

    Conversion ops (``to_json``, ``from_json``, ``encode_file``) print their
    ``output`` payload verbatim so it can be piped; Rich would wrap it.
    """
    if result.ok and result.op in _RAW_OUTPUT_OPS:
        return str(result.data.get("output", ""))

    console = create_console()
    if result.ok:
        renderer = _OP_RENDERERS[result.op]
        renderer(result, console, verbose=verbose)
    else:
        _render_error(result, console, verbose=verbose)

    return get_output(console).rstrip("\n")


def render_quiet(result: ServiceResult) -> str:
    """Render minimal output for ``--quiet`` mode."""
    if not result.ok:
        msg = result.error.message if result.error else "Unknown error"
        return f"ERROR: {result.op} — {msg}"

    if "output" in result.data:
        return str(result.data["output"])
    if "tagged" in result.data:
        return str(result.data["tagged"])
    return f"OK: {result.op}"


# ── Helpers ───────────────────────────────────────────────────────────


def _status_line(console: Console, result: ServiceResult) -> None:
    """Print the OK status line."""
    label = Text("OK", style="ds.ok")
    op = Text(f"  {result.op}", style="ds.op")
    console.print(label, op, end="")
    console.print()


def _field(console: Console, key: str, value: Any) -> None:
    """Print a single indented key-value field."""
    k = Text(f"  {key}: ", style="ds.key")
    if key == "path":
        v = Text(str(value), style="ds.path")
    elif key == "size":
        v = Text(str(value), style="ds.size")
    elif key == "datatype":
        v = Text(str(value), style=style_for_datatype(str(value)))
    else:
        v = Text(str(value))
    console.print(k, v, end="", soft_wrap=True)
    console.print()


def _render_error(result: ServiceResult, console: Console, *, verbose: bool = False) -> None:
    err = result.error
    msg = err.message if err else "Unknown error"
    label = Text("ERROR", style="ds.error")
    op = Text(f"  {result.op}", style="ds.op")
    sep = Text(" — ")
    console.print(label, op, sep, Text(msg))

    if verbose and err:
        console.print(Text(f"  code: {err.code}", style="dim"))
        if err.detail:
            console.print(Text("  detail:", style="dim"))
            for k, v in err.detail.items():
                console.print(Text(f"    {k}: {v}"))


def _node_label(node: dict[str, Any]) -> Text:
    label = Text()
    if "key" in node:
        label.append(f"{node['key']}: ", style="ds.key")
    datatype = str(node.get("type", "?"))
    label.append(datatype, style=style_for_datatype(datatype))
    if "value" in node:
        label.append(f" {node['value']}")
    label.append(f"  size={node.get('size', 0)}", style="ds.size")
    return label


def _build_tree(node: dict[str, Any], tree: Tree | None = None) -> Tree:
    """Build a Rich Tree from a service ``outline`` node."""
    branch = Tree(_node_label(node)) if tree is None else tree.add(_node_label(node))
    for child in node.get("children", []):
        _build_tree(child, branch)
    return branch


# ── Op renderers ──────────────────────────────────────────────────────


def _render_inspect(result: ServiceResult, console: Console, *, verbose: bool = False) -> None:
    """Render a parsed value: summary fields followed by its structure."""
    _status_line(console, result)
    data = result.data
    for key in ("datatype", "size", "weight", "tagged", "json"):
        if key in data and data[key] is not None:
            _field(console, key, data[key])
    if "tree" in data:
        console.print()
        console.print(_build_tree(data["tree"]))


def _render_decode_binary(
    result: ServiceResult, console: Console, *, verbose: bool = False
) -> None:
    _status_line(console, result)
    _field(console, "path", result.data.get("path", ""))
    _field(console, "size", result.data.get("size", 0))


# ── Dispatch table ────────────────────────────────────────────────────

_RAW_OUTPUT_OPS = frozenset({"to_json", "from_json", "encode_file"})

_OP_RENDERERS: dict[str, Any] = {
    "inspect": _render_inspect,
    "decode_binary": _render_decode_binary,
}
