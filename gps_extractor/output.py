"""
Rendering of scan results for the command line.
"""

import html
import json
from typing import List

from .models import ExtractionResult


def printable(text: str) -> str:
    """
    Make a path safe to write to a UTF-8 text stream.

    File names that are not valid UTF-8 reach Python as lone surrogates
    (PEP 383), which strict encoders reject. Those bytes are shown as
    `\\xNN` escapes instead; every other character is left alone.
    """
    try:
        return text.encode("utf-8", "surrogateescape").decode("utf-8", "backslashreplace")
    except UnicodeEncodeError:
        # Surrogates outside the escaped-byte range
        return text.encode("utf-8", "backslashreplace").decode("utf-8")


def render_plain(results: List[ExtractionResult]) -> str:
    """One `path: latitude, longitude` line per result."""
    return "\n".join(
        f"{printable(result.path)}: {result.latitude:.6f}, {result.longitude:.6f}" for result in results
    )


def render_json(results: List[ExtractionResult]) -> str:
    entries = [dict(result.as_dict(), path=printable(result.path)) for result in results]
    return json.dumps(entries, indent=2, ensure_ascii=False)


def render_html(results: List[ExtractionResult]) -> str:
    """
    Render results as an HTML table.

    Paths are escaped; coordinates are printed with six decimals.
    """
    lines = [
        "<table>",
        "  <thead>",
        "    <tr><th>Path</th><th>Latitude</th><th>Longitude</th></tr>",
        "  </thead>",
        "  <tbody>",
    ]
    for result in results:
        lines.append(
            f"    <tr><td>{html.escape(printable(result.path))}</td>"
            f"<td>{result.latitude:.6f}</td><td>{result.longitude:.6f}</td></tr>"
        )
    lines.extend(["  </tbody>", "</table>"])
    return "\n".join(lines)


RENDERERS = {
    "plain": render_plain,
    "json": render_json,
    "html": render_html,
}
