"""
Reference data loading.

Loads the neighborhood -> parent city table consumed by
``std_city_names``. The table is read once, validated row by row, and
handed out as a read-only mapping:
- Encoding detection with fallback chain
- Column validation
- Row validation with NeighborhoodEntry
"""

from pathlib import Path
from types import MappingProxyType
from typing import Mapping, Optional, Union

import chardet
import pandas as pd
from pydantic import ValidationError

from .config import settings
from .logging_utils import get_logger
from .models import NeighborhoodEntry

logger = get_logger(__name__)


def detect_encoding(file_path: Path, sample_size: Optional[int] = None) -> str:
    """
    Detect CSV file encoding with fallback chain.

    Reads a sample of the file to determine encoding, then validates it by
    parsing the first rows. Falls back through common encodings if detection
    fails.

    Args:
        file_path: Path to the CSV file
        sample_size: Number of bytes to sample (default: settings.ENCODING_SAMPLE_SIZE)

    Returns:
        str: Detected encoding (e.g., 'utf-8', 'iso-8859-1', 'cp1252')
    """
    sample_size = sample_size or settings.ENCODING_SAMPLE_SIZE

    with open(file_path, 'rb') as f:
        raw_data = f.read(sample_size)
        result = chardet.detect(raw_data)
        detected_encoding = result['encoding']
        confidence = result['confidence'] or 0.0

    logger.debug(
        f"Detected encoding: {detected_encoding} (confidence: {confidence:.2%})"
    )

    # ASCII detection is often incorrect - treat as UTF-8
    if detected_encoding and detected_encoding.lower() == 'ascii':
        detected_encoding = 'utf-8'

    encoding_chain = []
    if detected_encoding and confidence >= 0.6:
        encoding_chain.append(detected_encoding)
    encoding_chain.extend(['utf-8', 'cp1252', 'latin-1'])

    # Remove duplicates while preserving order
    seen = set()
    encoding_chain = [
        enc for enc in encoding_chain
        if enc.lower() not in seen and not seen.add(enc.lower())
    ]

    for encoding in encoding_chain:
        try:
            pd.read_csv(file_path, encoding=encoding, nrows=10)
            return encoding
        except (UnicodeDecodeError, UnicodeError):
            logger.debug(f"Encoding {encoding} failed, trying next...")
            continue

    logger.warning(
        "All encoding attempts failed, using UTF-8 with error replacement. "
        "Some characters may be corrupted."
    )
    return 'utf-8'


def lookup_neighborhoods(
    path: Optional[Union[str, Path]] = None,
    name_column: Optional[str] = None,
    city_column: Optional[str] = None,
    default_city: Optional[str] = None,
) -> Mapping[str, str]:
    """
    Load the neighborhood -> parent city table.

    Args:
        path: CSV file (default: settings.neighborhood_path)
        name_column: Neighborhood name column (default: settings.NEIGHBORHOOD_NAME_COLUMN)
        city_column: Parent city column; when None every neighborhood maps
            to ``default_city`` (default: settings.NEIGHBORHOOD_CITY_COLUMN)
        default_city: Parent city used without a city column
            (default: settings.DEFAULT_PARENT_CITY)

    Returns:
        Read-only mapping of upper-cased neighborhood name to parent city

    Raises:
        FileNotFoundError: If the file does not exist
        ValueError: If a requested column is missing from the file

    Example:
        ```python
        neighborhoods = lookup_neighborhoods("data/bos_neighborhoods.csv")
        df = std_flow_cities(df, ["city"], neighborhoods)
        ```
    """
    path = Path(path) if path is not None else settings.neighborhood_path
    name_column = name_column or settings.NEIGHBORHOOD_NAME_COLUMN
    city_column = city_column or settings.NEIGHBORHOOD_CITY_COLUMN
    default_city = default_city or settings.DEFAULT_PARENT_CITY

    if not path.exists():
        logger.error(f"Neighborhood table not found: {path}")
        raise FileNotFoundError(f"Neighborhood table not found: {path}")

    encoding = detect_encoding(path)
    table = pd.read_csv(
        path,
        encoding=encoding,
        dtype=str,
        keep_default_na=False,
        encoding_errors='replace',
    )
    table.columns = table.columns.str.strip()

    missing = [col for col in (name_column, city_column) if col and col not in table.columns]
    if missing:
        logger.error(f"Neighborhood table {path} is missing columns: {missing}")
        raise ValueError(
            f"Missing required columns: {', '.join(missing)}. "
            f"Available columns: {', '.join(table.columns)}"
        )

    neighborhoods = {}
    for row_number, row in enumerate(table.to_dict("records"), start=1):
        try:
            entry = NeighborhoodEntry(
                name=row[name_column],
                city=row[city_column] if city_column else default_city,
            )
        except ValidationError as e:
            logger.warning(f"Skipping neighborhood row {row_number}: {e.error_count()} error(s)")
            continue
        neighborhoods[entry.name] = entry.city

    logger.info(f"Loaded {len(neighborhoods)} neighborhoods from {path}")
    return MappingProxyType(neighborhoods)


__all__ = ["detect_encoding", "lookup_neighborhoods"]
