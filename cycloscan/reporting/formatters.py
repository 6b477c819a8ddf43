from __future__ import annotations

import json
from typing import Iterable

from cycloscan.core.results import AnalysisResult


def format_text(results: Iterable[AnalysisResult]) -> str:
    lines = []
    units = 0
    functions = 0
    for result in results:
        units += 1
        lines.append(f"== {result.unit_path} ==")
        if result.error:
            lines.append(f"  Error: {result.error}")
            lines.append("")
            continue
        for function in sorted(result.functions, key=lambda f: (f.location.line, f.name)):
            loc = function.location
            lines.append(f"  {function.complexity:4d}  {function.name:<32} {loc.path}:{loc.line}")
        functions += len(result.functions)
        if result.report_path:
            status = "written" if result.report_written else "NOT written"
            lines.append(f"  Report: {result.report_path} ({status})")
        if result.excluded:
            lines.append(f"  Excluded declarations: {result.excluded}")
        if result.anomalies:
            lines.append(f"  Empty bodies: {result.anomalies}")
        lines.append("")
    lines.append(f"Translation units: {units}")
    lines.append(f"Functions analyzed: {functions}")
    return "\n".join(lines) + "\n"


def format_json(results: Iterable[AnalysisResult]) -> str:
    results_list = list(results)
    data = {
        "summary": {
            "units": len(results_list),
            "functions": sum(len(result.functions) for result in results_list),
        },
        "units": [result.to_dict() for result in results_list],
    }
    return json.dumps(data, indent=2)


FORMATTERS = {
    "text": format_text,
    "json": format_json,
}


def get_formatter(format_name: str):
    """Get a formatter function by name."""
    formatter = FORMATTERS.get(format_name.lower())
    if formatter is None:
        raise ValueError(f"Unknown format: {format_name}")
    return formatter
