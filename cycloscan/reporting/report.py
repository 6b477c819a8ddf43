"""
Persisted complexity report.

One line per function, sorted by name::

    Function: main, Cyclomatic Complexity: 3

The file is rewritten from scratch on every run.
"""

import logging
from pathlib import Path
from typing import Union

from cycloscan.core.results import ComplexityMap


logger = logging.getLogger(__name__)

DEFAULT_REPORT_PATH = "results.cy"

LINE_FORMAT = "Function: {name}, Cyclomatic Complexity: {complexity}\n"


def format_report(complexity_map: ComplexityMap) -> str:
    return "".join(
        LINE_FORMAT.format(name=name, complexity=complexity)
        for name, complexity in complexity_map.items()
    )


def report_path_for(template: str, unit_path: str) -> str:
    """Expand ``{stem}`` in a report path template for one translation unit."""
    if "{stem}" not in template:
        return template
    return template.replace("{stem}", Path(unit_path).stem)


class ReportWriter:
    def write(self, complexity_map: ComplexityMap, path: Union[str, Path]) -> bool:
        """Write the report. Returns False, after logging, if it cannot be written."""
        try:
            with open(path, "w", encoding="utf-8", newline="\n") as f:
                f.write(format_report(complexity_map))
        except OSError as exc:
            logger.error("Error opening report file %s: %s", path, exc)
            return False
        logger.info("Wrote %d function(s) to %s", len(complexity_map), path)
        return True
