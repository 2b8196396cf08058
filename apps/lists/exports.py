"""CSV/XLSX writers for campaign and segment exports."""

import csv
import io
from typing import Dict, Iterable, List, Mapping, Optional, Sequence

import pandas as pd


def _row_values(data: Mapping[str, str], columns: Sequence[str]) -> List[str]:
    return [data.get(column) or '' for column in columns]


def _header_row(columns: Sequence[str], labels: Optional[Mapping[str, str]]) -> List[str]:
    labels = labels or {}
    return [labels.get(column, column) for column in columns]


def generate_csv(
    rows: Iterable[Mapping[str, str]],
    columns: Sequence[str],
    labels: Optional[Dict[str, str]] = None,
) -> str:
    """Write ``rows`` with one column per key in ``columns``.

    Keys missing from a row are written as empty strings. ``labels`` renames
    header cells without changing which key a column reads from.
    """
    buffer = io.StringIO()
    writer = csv.writer(buffer)
    writer.writerow(_header_row(columns, labels))
    for data in rows:
        writer.writerow(_row_values(data, columns))
    return buffer.getvalue()


def generate_xlsx(
    rows: Iterable[Mapping[str, str]],
    columns: Sequence[str],
    labels: Optional[Dict[str, str]] = None,
) -> bytes:
    frame = pd.DataFrame(
        [_row_values(data, columns) for data in rows],
        columns=_header_row(columns, labels),
    )
    buffer = io.BytesIO()
    with pd.ExcelWriter(buffer, engine='openpyxl') as writer:
        frame.to_excel(writer, sheet_name='Sheet1', index=False)
    return buffer.getvalue()


def export_response(rows, columns, labels, filename_stem, file_format='csv'):
    """Wrap an export in a download response."""
    from django.http import HttpResponse

    if file_format == 'xlsx':
        response = HttpResponse(
            generate_xlsx(rows, columns, labels),
            content_type='application/vnd.openxmlformats-officedocument.spreadsheetml.sheet',
        )
    else:
        file_format = 'csv'
        response = HttpResponse(generate_csv(rows, columns, labels), content_type='text/csv')

    response['Content-Disposition'] = f'attachment; filename="{filename_stem}.{file_format}"'
    return response
