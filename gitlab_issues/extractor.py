"""
extractor.py - Reads issue records from CSV and JSON files

The file type is picked from the extension. Extraction is all or nothing:
the first broken row, object or value aborts the whole file and no partial
list of records is returned.
"""

import csv
import json
from itertools import chain
from pathlib import Path

from .errors import (
    ConfigError,
    ExtractionError,
    FormatError,
    MissingTitleError,
    SourceError,
    UnsupportedFileTypeError,
    ValueTypeError,
)
from .models import IssueRecord
from .resolver import resolve_positions

SUPPORTED_FILE_TYPES = (".csv", ".json")

# Every combined fragment ends with a blank line, including the last one
FRAGMENT_SEPARATOR = "\n\n"


def extract(path, config, trace=None):
    """
    Read every issue record from a .csv or .json file.

    trace is an optional callable that receives progress messages.
    Raises an ExtractionError subclass on the first problem found.
    """
    path = Path(path)
    extension = path.suffix.lower()
    if extension not in SUPPORTED_FILE_TYPES:
        raise UnsupportedFileTypeError(path.suffix, path)

    if trace:
        trace(f"Parsing {extension[1:]} file {path} with options: {config}")

    try:
        if extension == ".csv":
            records = _extract_csv(path, config, trace)
        else:
            records = _extract_json(path, config, trace)
    except ExtractionError as e:
        if e.path is None:
            e.path = str(path)
        raise

    if trace:
        trace(f"Extracted {len(records)} issues from {path}")
    return records


# -----------------------
# CSV
# -----------------------

def _extract_csv(path, config, trace):
    try:
        with open(path, "r", newline="", encoding="utf-8-sig") as f:
            return list(iter_csv_records(f, config, trace))
    except OSError as e:
        raise SourceError(f"Could not read file: {e}", path) from e


def _read_rows(reader):
    """Yield non-blank rows, turning parse and decode failures into SourceError"""
    while True:
        try:
            row = next(reader)
        except StopIteration:
            return
        except (csv.Error, UnicodeDecodeError) as e:
            raise SourceError(f"Could not read record at line {reader.line_num}: {e}") from e
        if row:
            yield row


def iter_csv_records(lines, config, trace=None):
    """
    Lazily turn delimited text lines into IssueRecords.

    Positions are resolved and bounds-checked before the first data row is
    turned into a record.
    """
    reader = csv.reader(lines, delimiter=config.delimiter)
    rows = _read_rows(reader)

    if config.has_header:
        header = next(rows, [])
        if trace:
            trace(f"CSV file has headers {header}")
        positions = resolve_positions(config, header=header, trace=trace)
    else:
        first_row = next(rows, None)
        width = len(first_row) if first_row is not None else None
        positions = resolve_positions(config, width=width, trace=trace)
        if first_row is not None:
            rows = chain([first_row], rows)

    if config.combine_remaining and trace:
        trace("Combining remaining columns into the description")

    count = 0
    for count, row in enumerate(rows, start=1):
        yield _row_to_record(row, count, positions, config)

    if trace:
        trace(f"Read {count} data rows")


def _row_to_record(row, ordinal, positions, config):
    title_index = positions.title_index
    if title_index >= len(row):
        raise MissingTitleError(ordinal, title_index)

    description = None
    if config.combine_remaining:
        description = "".join(
            f"{positions.column_label(i)}: {value}{FRAGMENT_SEPARATOR}"
            for i, value in enumerate(row)
            if i != title_index
        )
    elif positions.description_index is not None:
        # Short rows only lose their optional description
        if positions.description_index < len(row):
            description = row[positions.description_index]

    return IssueRecord(title=config.apply_prefix(row[title_index]), description=description)


# -----------------------
# JSON
# -----------------------

def _check_json_config(config):
    if config.title_selector.is_index:
        raise ConfigError("JSON files select the title by key, a title column index cannot be used")
    if config.description_selector is not None and config.description_selector.is_index:
        raise ConfigError(
            "JSON files select the description by key, a description column index cannot be used"
        )


def _extract_json(path, config, trace):
    _check_json_config(config)
    try:
        with open(path, "r", encoding="utf-8-sig") as f:
            document = json.load(f)
    except OSError as e:
        raise SourceError(f"Could not read file: {e}", path) from e
    except UnicodeDecodeError as e:
        raise SourceError(f"Could not decode file: {e}", path) from e
    except json.JSONDecodeError as e:
        raise SourceError(f"Could not parse json: {e}", path) from e

    return list(iter_json_records(document, config, trace))


def stringify_value(value, key, ordinal):
    """
    Render a scalar JSON value as text.
    Nested objects and arrays are rejected here and nowhere else.
    """
    if isinstance(value, str):
        return value
    if isinstance(value, dict):
        raise ValueTypeError(key, "object", ordinal)
    if isinstance(value, list):
        raise ValueTypeError(key, "array", ordinal)
    # true/false, null and numbers in their JSON literal form
    return json.dumps(value)


def iter_json_records(document, config, trace=None):
    """Lazily turn a decoded JSON object, or array of objects, into IssueRecords"""
    _check_json_config(config)

    if isinstance(document, dict):
        objects = [document]
    elif isinstance(document, list):
        objects = document
    else:
        raise FormatError(
            f"Json data is not of a format that can be parsed, root is {_json_type(document)}"
        )

    if trace:
        trace(f"Json document holds {len(objects)} objects")

    for ordinal, item in enumerate(objects, start=1):
        if not isinstance(item, dict):
            raise FormatError(
                f"Json data is not of a format that can be parsed, "
                f"item {ordinal} is {_json_type(item)}, expected an object"
            )
        yield _object_to_record(item, ordinal, config)


def _object_to_record(data, ordinal, config):
    title_key = config.title_selector.name.lower()
    description_key = None
    if config.description_selector is not None:
        description_key = config.description_selector.name.lower()

    title = ""
    fragments = []
    for key, value in data.items():
        text = stringify_value(value, key, ordinal)
        if key.lower() == title_key:
            title = text
        elif config.combine_remaining:
            fragments.append(f"{key.strip()}: {text}{FRAGMENT_SEPARATOR}")
        elif description_key is not None and key.lower() == description_key:
            # last matching key wins
            fragments = [text]

    return IssueRecord(
        title=config.apply_prefix(title),
        description="".join(fragments) if fragments else None,
    )


def _json_type(value):
    if value is None:
        return "null"
    if isinstance(value, bool):
        return "a boolean"
    if isinstance(value, (int, float)):
        return "a number"
    if isinstance(value, str):
        return "a string"
    if isinstance(value, list):
        return "an array"
    return "an object"
