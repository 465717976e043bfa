"""
CSV loading for metafield source files

Each file is UTF-8, comma-delimited, with the first line as header. Rows are
returned in file order as plain dicts of column name -> trimmed string value.
"""
import logging
from pathlib import Path
from typing import Dict, List, Optional, Tuple, Union

import pandas as pd

logger = logging.getLogger(__name__)

CSV_EXTENSION = ".csv"

Row = Dict[str, str]


class CSVLoadError(Exception):
    """Base class for CSV loading failures"""

    def __init__(self, path: Union[str, Path], message: str):
        self.path = Path(path)
        super().__init__(f"{self.path}: {message}")


class FileReadError(CSVLoadError):
    """The file (or directory) could not be opened or decoded"""
    pass


class ParseError(CSVLoadError):
    """The content is not well-formed delimited text with a header line"""
    pass


def load_csv_rows(file_path: Union[str, Path]) -> List[Row]:
    """
    Parse a CSV file into an ordered list of rows

    Args:
        file_path: Path to the CSV file

    Returns:
        List of dicts keyed by header column. When a header repeats, the
        last value for that column wins.

    Raises:
        FileReadError: if the file cannot be opened or is not valid UTF-8
        ParseError: if the content is malformed or has no header line
    """
    path = Path(file_path)

    try:
        df = pd.read_csv(
            path,
            header=None,
            dtype=str,
            keep_default_na=False,
            skip_blank_lines=True,
            encoding='utf-8-sig',
        )
    except pd.errors.EmptyDataError:
        raise ParseError(path, "file is empty, expected a header line")
    except pd.errors.ParserError as e:
        raise ParseError(path, f"malformed CSV content ({e})")
    except UnicodeDecodeError as e:
        raise FileReadError(path, f"not valid UTF-8 ({e})")
    except OSError as e:
        raise FileReadError(path, f"cannot read file ({e.strerror or e})")

    df = df.fillna('')
    records = df.values.tolist()
    if not records:
        raise ParseError(path, "file is empty, expected a header line")

    header = [str(column).strip() for column in records[0]]
    rows = [
        dict(zip(header, (str(value).strip() for value in values)))
        for values in records[1:]
    ]

    logger.debug(f"Loaded {len(rows)} rows with {len(header)} columns from {path.name}")
    return rows


def find_csv_files(data_dir: Union[str, Path]) -> List[Path]:
    """All CSV files in a directory, sorted by file name"""
    directory = Path(data_dir)
    if not directory.is_dir():
        raise FileReadError(directory, "data directory not found")

    return sorted(
        (p for p in directory.iterdir() if p.is_file() and p.name.endswith(CSV_EXTENSION)),
        key=lambda p: p.name
    )


def select_csv_files(
    data_dir: Union[str, Path],
    skip: int = 0,
    limit: Optional[int] = None
) -> Tuple[List[Path], List[Path]]:
    """
    Find CSV files and apply the skip/limit window

    A limit of None or 0 means "no limit".

    Returns:
        (all files found, files selected for processing)
    """
    csv_files = find_csv_files(data_dir)
    skip = skip or 0
    end = skip + limit if limit else None
    return csv_files, csv_files[skip:end]
