"""
errors.py - Errors raised while turning a file into issue records

Everything raised by the resolver and the extractor derives from
ExtractionError, so the caller can report any failure with one except clause.
"""


class ExtractionError(Exception):
    """Base class for every failure while reading issues from a file"""

    def __init__(self, message, path=None):
        self.path = str(path) if path is not None else None
        super().__init__(message)

    def __str__(self):
        message = super().__str__()
        if self.path:
            return f"{self.path}: {message}"
        return message


class ConfigError(ExtractionError):
    """The parser options are contradictory or do not fit the file"""


class ResolveError(ConfigError):
    """A title or description column could not be located"""


class HeaderRequiredError(ResolveError):
    def __init__(self, name, path=None):
        self.name = name
        super().__init__(f"Column '{name}' is selected by name but the file has no header", path)


class NameNotFoundError(ResolveError):
    def __init__(self, name, path=None):
        self.name = name
        super().__init__(f"Could not find column with name '{name}'", path)


class IndexOutOfBoundsError(ResolveError):
    def __init__(self, field, index, limit, path=None):
        self.field = field
        self.index = index
        self.limit = limit
        super().__init__(
            f"{field} column index {index} is out of bounds, the file has {limit} columns", path
        )


class UnsupportedFileTypeError(ExtractionError):
    def __init__(self, extension, path=None):
        self.extension = extension
        super().__init__(f"Unsupported file type '{extension}', expected .csv or .json", path)


class SourceError(ExtractionError):
    """The file could not be opened, read, decoded or parsed"""


class RowError(ExtractionError):
    """A row or object is structurally broken"""


class MissingTitleError(RowError):
    def __init__(self, row, index, path=None):
        self.row = row
        self.index = index
        super().__init__(f"Row {row} has no title field at column {index}", path)


class FormatError(RowError):
    """The JSON document root is not an object or an array of objects"""


class ValueTypeError(RowError):
    def __init__(self, key, type_name, ordinal, path=None):
        self.key = key
        self.type_name = type_name
        self.ordinal = ordinal
        super().__init__(
            f"Object {ordinal}: value of key '{key}' is a nested {type_name}, "
            "only strings, numbers, booleans and null are supported",
            path,
        )
