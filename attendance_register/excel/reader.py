from __future__ import annotations

from io import BytesIO
from pathlib import Path
from typing import Any, BinaryIO

import pandas as pd

from .errors import AttendanceParseError, EmptyWorkbookError, WorkbookReadError

"""Excel reader.

Only the first worksheet of a workbook is read. The sheet is parsed without a
header (header row position varies per export) and returned as a plain
row-major matrix of raw cell values, formulas already evaluated by openpyxl.
"""

__all__ = [
    "Matrix",
    "read_first_sheet",
    "frame_to_matrix",
]

Matrix = list[list[Any]]


def frame_to_matrix(df: pd.DataFrame) -> Matrix:
    """Convert a header-less DataFrame to a list of rows, NaN -> None."""
    obj = df.astype(object)
    return obj.where(pd.notna(obj), None).values.tolist()


def read_first_sheet(source: Path | bytes | BinaryIO) -> tuple[str, Matrix]:
    """Read the first worksheet of an .xlsx file.

    Parameters
    ----------
    source: ファイルパス / バイト列 / バイナリストリーム

    Returns
    -------
    (sheet_name, matrix)

    Raises
    ------
    EmptyWorkbookError: workbook has no sheets
    WorkbookReadError: pandas / openpyxl could not read the file
    """
    if isinstance(source, (bytes, bytearray)):
        source = BytesIO(source)
    # "NA" などの文字列をステータス値として残すため既定の NaN 変換は無効化
    try:
        with pd.ExcelFile(source) as xls:
            if not xls.sheet_names:
                raise EmptyWorkbookError()
            name = xls.sheet_names[0]
            df = xls.parse(name, header=None, keep_default_na=False, na_values=[""])
    except AttendanceParseError:
        raise
    except Exception as e:
        # 読込エラーの型はエンジン次第 (BadZipFile, KeyError, OptionError, xlrd の ImportError ...)
        raise WorkbookReadError(f"Failed to read Excel file: {e}") from e
    return str(name), frame_to_matrix(df)
