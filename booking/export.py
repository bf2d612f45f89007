"""CSV export of the appointment list."""
import csv
import io
from pathlib import Path
from typing import Any, Dict, Iterable, Union

from booking import config


def appointments_to_csv(appointments: Iterable[Dict[str, Any]]) -> str:
    """
    Render appointments as CSV.

    Every field is quoted and embedded quotes are doubled. Rows are joined
    with a bare newline and there is no trailing newline.
    """
    buffer = io.StringIO()
    writer = csv.writer(buffer, quoting=csv.QUOTE_ALL, lineterminator="\n")
    writer.writerow(config.CSV_HEADER)
    for apt in appointments:
        writer.writerow([
            apt.get("name", ""),
            apt.get("email", ""),
            apt.get("phone") or "",
            apt.get("service", ""),
            apt.get("date", ""),
            apt.get("time", ""),
        ])
    return buffer.getvalue().rstrip("\n")


def write_csv(appointments: Iterable[Dict[str, Any]], path: Union[str, Path]) -> Path:
    path = Path(path)
    path.write_text(appointments_to_csv(appointments), encoding="utf-8")
    return path
