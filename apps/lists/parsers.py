"""Turn uploaded CSV/XLSX files into headers plus string rows."""

import csv
import io
import logging
import zipfile
from dataclasses import dataclass, field
from typing import Dict, List, Union

import pandas as pd
from charset_normalizer import from_bytes
from openpyxl.utils.exceptions import InvalidFileException
from xlrd import XLRDError

logger = logging.getLogger(__name__)

CSV_EXTENSIONS = {'csv'}
EXCEL_EXTENSIONS = {'xlsx', 'xls'}


class FileParseError(ValueError):
    """The upload could not be read as a table."""


class UnsupportedFileFormat(FileParseError):
    pass


@dataclass
class ParsedFile:
    headers: List[str] = field(default_factory=list)
    rows: List[Dict[str, str]] = field(default_factory=list)

    def preview(self, limit: int) -> List[Dict[str, str]]:
        return self.rows[:limit]


def file_extension(filename: str) -> str:
    if '.' not in filename:
        return ''
    return filename.rsplit('.', 1)[-1].lower()


def detect_encoding(content: bytes) -> str:
    """Guess the text encoding of a CSV upload.

    BOM first, then strict UTF-8, then charset_normalizer. latin-1 accepts
    any byte sequence so it is the last resort.
    """
    if content.startswith(b"\xef\xbb\xbf"):
        return "utf-8-sig"
    if content.startswith(b"\xff\xfe"):
        return "utf-16-le"
    if content.startswith(b"\xfe\xff"):
        return "utf-16-be"

    try:
        content.decode("utf-8")
        return "utf-8"
    except UnicodeDecodeError:
        pass

    best = from_bytes(content).best()
    if best is not None:
        return best.encoding

    return "latin-1"


def decode_text(content: bytes) -> str:
    encoding = detect_encoding(content)
    try:
        text = content.decode(encoding)
    except (UnicodeDecodeError, LookupError):
        encoding = "latin-1"
        text = content.decode(encoding)

    if encoding not in ("utf-8", "utf-8-sig"):
        logger.info(f"Decoded CSV upload as {encoding}")
    # Explicit-endian utf-16 codecs keep the BOM as U+FEFF
    return text.lstrip('\ufeff')


def parse_csv(content: Union[bytes, str]) -> ParsedFile:
    if isinstance(content, bytes):
        content = decode_text(content)

    try:
        reader = csv.DictReader(io.StringIO(content))
        headers = list(reader.fieldnames or [])
        rows = []
        for row in reader:
            # Blank lines come back with every cell empty
            if not any((value or '').strip() for key, value in row.items() if key is not None):
                continue
            rows.append({header: row.get(header) or '' for header in headers})
    except csv.Error as e:
        raise FileParseError(f"Could not read CSV: {e}") from e

    return ParsedFile(headers=headers, rows=rows)


def parse_xlsx(content: bytes) -> ParsedFile:
    """Read the first sheet, every cell as a string."""
    try:
        frame = pd.read_excel(io.BytesIO(content), sheet_name=0, dtype=str)
    except (ValueError, KeyError, zipfile.BadZipFile, InvalidFileException, XLRDError) as e:
        raise FileParseError(f"Could not read spreadsheet: {e}") from e

    frame = frame.dropna(how='all').fillna('')
    headers = [str(column) for column in frame.columns]
    frame.columns = headers
    rows = frame.to_dict(orient='records')
    return ParsedFile(headers=headers, rows=rows)


def parse_upload(filename: str, content: bytes) -> ParsedFile:
    extension = file_extension(filename)
    if extension in CSV_EXTENSIONS:
        return parse_csv(content)
    if extension in EXCEL_EXTENSIONS:
        return parse_xlsx(content)

    logger.warning(f"Rejected upload {filename}: unsupported extension '{extension}'")
    raise UnsupportedFileFormat(f"Unsupported file format: {filename}")
