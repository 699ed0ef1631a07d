import csv
import io
import logging
from typing import Any, Dict, List, Optional, Sequence, Tuple
from zipfile import BadZipFile

from openpyxl import load_workbook
from openpyxl.utils.exceptions import InvalidFileException

from app.core import config
from app.core.text_normalization import normalize_cell

logger = logging.getLogger(__name__)

SheetRows = Tuple[List[str], List[Dict[str, Any]]]

XLSX_CONTENT_TYPES = {
    "application/vnd.openxmlformats-officedocument.spreadsheetml.sheet",
    "application/vnd.ms-excel.sheet.macroenabled.12",
}
CSV_CONTENT_TYPES = {"text/csv", "application/csv"}


class SheetReadError(ValueError):
    """The upload could not be read as a spreadsheet."""


def _is_empty(values: Sequence[Any]) -> bool:
    return all(normalize_cell(v) in (None, "") for v in values)


def _make_headers(raw: Sequence[Any]) -> List[str]:
    """
    Turn the header row into unique strings.
    Blank headers become column_<n>; repeats get a _<k> suffix ("Name", "Name_2").
    """
    headers: List[str] = []
    seen: Dict[str, int] = {}
    for i, cell in enumerate(raw):
        h = normalize_cell(cell) or f"column_{i + 1}"
        if h in seen:
            seen[h] += 1
            h = f"{h}_{seen[h]}"
        else:
            seen[h] = 1
        headers.append(h)
    return headers


def _rows_from_table(table: List[Sequence[Any]], max_rows: int) -> SheetRows:
    it = iter(table)
    header_row: Optional[Sequence[Any]] = None
    for values in it:
        if not _is_empty(values):
            header_row = values
            break
    if header_row is None:
        return [], []

    headers = _make_headers(header_row)
    rows: List[Dict[str, Any]] = []
    for values in it:
        if _is_empty(values):
            continue
        if len(rows) >= max_rows:
            logger.warning(f"Sheet has more than {max_rows} data rows; the rest are ignored")
            break
        padded = list(values) + [None] * (len(headers) - len(values))
        rows.append({h: v for h, v in zip(headers, padded)})
    return headers, rows


def extract_xlsx_rows(data: bytes, max_rows: Optional[int] = None) -> SheetRows:
    """
    Read the first worksheet of an .xlsx workbook.
    Returns (headers, rows) where each row maps header -> cached cell value.
    """
    max_rows = max_rows if max_rows is not None else config.MAX_UPLOAD_ROWS
    try:
        wb = load_workbook(io.BytesIO(data), read_only=True, data_only=True)
    except (BadZipFile, InvalidFileException, KeyError, OSError) as e:
        logger.warning(f"Unreadable workbook: {e}")
        raise SheetReadError(f"Cannot read workbook: {e}") from e

    try:
        if not wb.sheetnames:
            raise SheetReadError("No data sheets found in workbook")
        ws = wb[wb.sheetnames[0]]
        table = [tuple(r) for r in ws.iter_rows(values_only=True)]
    finally:
        wb.close()
    return _rows_from_table(table, max_rows)


def extract_csv_rows(data: bytes, max_rows: Optional[int] = None) -> SheetRows:
    """Read a CSV file (UTF-8, BOM tolerated). Cells stay strings."""
    max_rows = max_rows if max_rows is not None else config.MAX_UPLOAD_ROWS
    text = data.decode("utf-8-sig", errors="replace")
    table = list(csv.reader(io.StringIO(text)))
    return _rows_from_table(table, max_rows)


def sheet_source(filename: Optional[str], content_type: Optional[str] = None) -> Optional[str]:
    """Source tag ("xlsx" or "csv") from the file extension, falling back to the content type."""
    name = (filename or "").lower()
    ctype = (content_type or "").lower()
    if name.endswith((".xlsx", ".xlsm")):
        return "xlsx"
    if name.endswith(".csv"):
        return "csv"
    if ctype in XLSX_CONTENT_TYPES:
        return "xlsx"
    if ctype in CSV_CONTENT_TYPES:
        return "csv"
    return None


def extract_sheet_rows(
    data: bytes,
    filename: Optional[str],
    content_type: Optional[str] = None,
    max_rows: Optional[int] = None,
) -> SheetRows:
    """Dispatch on sheet_source(): .xlsx/.xlsm via openpyxl, .csv via the csv module."""
    source = sheet_source(filename, content_type)
    if source == "xlsx":
        return extract_xlsx_rows(data, max_rows)
    if source == "csv":
        return extract_csv_rows(data, max_rows)
    raise SheetReadError(f"Unsupported spreadsheet type: {filename}")
