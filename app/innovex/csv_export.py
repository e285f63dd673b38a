from __future__ import annotations

import csv
import io
from collections.abc import Mapping, Sequence
from datetime import date, datetime
from typing import Any

from flask import Response, send_file


def _cell(value: Any) -> str:
    if value is None:
        return ""
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, datetime):
        return value.isoformat(sep=" ", timespec="seconds")
    if isinstance(value, date):
        return value.isoformat()
    return str(value)


def rows_to_csv(rows: Sequence[Mapping[str, Any]]) -> str:
    """
    Header from the first row's keys, then one line per row in the same key order.

    Fields containing a comma, double quote or newline are quoted with inner quotes
    doubled. Lines are joined with "\\n" and there is no trailing newline.
    """
    if not rows:
        return ""
    headers = list(rows[0].keys())
    out = io.StringIO()
    w = csv.writer(out, quoting=csv.QUOTE_MINIMAL, lineterminator="\n")
    w.writerow(headers)
    for row in rows:
        cells = [_cell(row.get(h)) for h in headers]
        if cells == [""]:
            # csv.writer renders a lone empty field as "" to keep the row visible
            out.write("\n")
            continue
        w.writerow(cells)
    return out.getvalue()[:-1]


def csv_download(rows: Sequence[Mapping[str, Any]], label: str) -> Response:
    data = rows_to_csv(rows).encode("utf-8")
    return send_file(
        io.BytesIO(data),
        mimetype="text/csv",
        as_attachment=True,
        download_name=f"{label}.csv",
        max_age=0,
    )
