"""Output formatters for run reports."""

from __future__ import annotations

import csv
import io
import json
from pathlib import Path

from i18ngen.reporting.report import RunReport


def to_json(report: RunReport, indent: int = 2) -> str:
    """Format report as JSON string."""
    return json.dumps(report.to_dict(), indent=indent, default=str, ensure_ascii=False)


def to_markdown(report: RunReport) -> str:
    """Format report as Markdown."""
    lines = [
        "# Translation Report",
        "",
        "| Field | Value |",
        "|-------|-------|",
        f"| Source language | {report.source_lang} |",
        f"| Output directory | `{report.output_dir}` |",
        f"| Backend | {report.backend} |",
        f"| Messages translated | {report.messages_translated} |",
        f"| Model calls | {report.model_calls} |",
        f"| Duration | {report.duration_seconds:.1f}s |",
        "",
        "## Languages",
        "",
        "| Language | Status | Messages | Chunks |",
        "|----------|--------|----------|--------|",
    ]
    for entry in report.languages:
        lines.append(f"| {entry.lang} | {entry.status} | {entry.messages} | {entry.chunks} |")

    warnings = [w for entry in report.languages for w in entry.warnings]
    if warnings:
        lines.extend(["", "## Warnings", ""])
        lines.extend(f"- {w}" for w in warnings)

    if report.errors:
        lines.extend(["", "## Errors", ""])
        lines.extend(f"- {err}" for err in report.errors)

    return "\n".join(lines) + "\n"


def to_csv(report: RunReport) -> str:
    """Format report as CSV, one row per language."""
    output = io.StringIO()
    writer = csv.DictWriter(
        output, fieldnames=["lang", "status", "messages", "chunks", "model_calls", "error"],
    )
    writer.writeheader()
    for entry in report.languages:
        writer.writerow({
            "lang": entry.lang,
            "status": entry.status,
            "messages": entry.messages,
            "chunks": entry.chunks,
            "model_calls": entry.model_calls,
            "error": entry.error,
        })
    return output.getvalue()


def save_report(report: RunReport, path: str | Path) -> None:
    """Save report to file, auto-detecting format from extension."""
    path = Path(path)
    suffix = path.suffix.lower()

    if suffix in (".md", ".markdown"):
        content = to_markdown(report)
    elif suffix == ".csv":
        content = to_csv(report)
    else:
        content = to_json(report)

    path.write_text(content, encoding="utf-8")
