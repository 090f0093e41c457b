"""
Assemble the static HTML report.

Figures are embedded as base64 ``data:`` URIs so the report is a single
self-contained file; tables go through ``DataFrame.to_html``.
"""
from __future__ import annotations
import base64
import html
import io
from dataclasses import dataclass, field
from datetime import datetime
from pathlib import Path
from typing import Iterable, Optional

import matplotlib.pyplot as plt
import pandas as pd

_CSS = """
body { font-family: -apple-system, "Segoe UI", Helvetica, Arial, sans-serif; margin: 2em auto; max-width: 1100px; color: #1f2937; }
h1 { border-bottom: 2px solid #e5e7eb; padding-bottom: .3em; }
h2 { margin-top: 2em; color: #264653; }
img { max-width: 100%; height: auto; display: block; margin: 1em 0; }
table.dataframe { border-collapse: collapse; font-size: 0.9em; }
table.dataframe th, table.dataframe td { border: 1px solid #d1d5db; padding: 4px 8px; text-align: right; }
table.dataframe th { background: #f3f4f6; }
.meta { color: #6b7280; font-size: 0.9em; }
"""


@dataclass
class ReportSection:
    title: str
    text: str = ""
    images: list[str] = field(default_factory=list)  # data URIs
    tables: list[pd.DataFrame] = field(default_factory=list)


def figure_to_base64(fig, fmt: str = "png", dpi: int = 110, close: bool = True) -> str:
    """Encode a matplotlib figure as a data URI; closes the figure by default."""
    buf = io.BytesIO()
    fig.savefig(buf, format=fmt, dpi=dpi, bbox_inches="tight")
    if close:
        plt.close(fig)
    return bytes_to_data_uri(buf.getvalue(), f"image/{fmt}")


def bytes_to_data_uri(data: bytes, mime: str) -> str:
    b64 = base64.b64encode(data).decode()
    return f"data:{mime};base64,{b64}"


def _section_html(section: ReportSection) -> str:
    parts = [f"<h2>{html.escape(section.title)}</h2>"]
    if section.text:
        parts.append(f"<p>{html.escape(section.text)}</p>")
    for uri in section.images:
        parts.append(f'<img src="{uri}" alt="{html.escape(section.title)}">')
    for table in section.tables:
        parts.append(table.to_html(index=False, na_rep="", float_format=lambda v: f"{v:.3f}"))
    return "\n".join(parts)


def render_html(sections: Iterable[ReportSection], title: str, subtitle: Optional[str] = None) -> str:
    stamp = datetime.now().strftime("%Y-%m-%d %H:%M")
    body = "\n".join(_section_html(s) for s in sections)
    sub = f'<p class="meta">{html.escape(subtitle)}</p>' if subtitle else ""
    return (
        "<!DOCTYPE html>\n"
        '<html lang="en">\n<head>\n<meta charset="utf-8">\n'
        f"<title>{html.escape(title)}</title>\n<style>{_CSS}</style>\n</head>\n<body>\n"
        f"<h1>{html.escape(title)}</h1>\n{sub}\n"
        f'<p class="meta">Generated {stamp}</p>\n'
        f"{body}\n</body>\n</html>\n"
    )


def write_report(path: str | Path, sections: Iterable[ReportSection], title: str, subtitle: Optional[str] = None) -> Path:
    """Render and write atomically (temp file then rename)."""
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    tmp_path = path.with_suffix(path.suffix + ".tmp")
    try:
        tmp_path.write_text(render_html(sections, title, subtitle), encoding="utf-8")
        tmp_path.replace(path)
    except Exception:
        tmp_path.unlink(missing_ok=True)
        raise
    return path
