"""
resolver.py - Turns field selectors into concrete column positions

Runs once per document, before any data row is read.
"""

from .errors import HeaderRequiredError, IndexOutOfBoundsError, NameNotFoundError
from .models import ResolvedPositions


def resolve(selector, header=None):
    """
    Return the zero-based column index for a selector.

    Index selectors resolve to themselves without looking at the header.
    Name selectors match header entries case-insensitively and the first
    matching column wins, since exported files often repeat a column name.
    """
    if selector.is_index:
        return selector.index

    if header is None:
        raise HeaderRequiredError(selector.name)

    wanted = selector.name.lower()
    for position, column in enumerate(header):
        if column.lower() == wanted:
            return position

    raise NameNotFoundError(selector.name)


def check_bounds(field, index, limit):
    if index >= limit:
        raise IndexOutOfBoundsError(field, index, limit)


def resolve_positions(config, header=None, width=None, trace=None):
    """
    Resolve title and description positions and validate them against the
    header width, or against the width of the first data row when the file
    has no header.
    """
    header_names = tuple(header) if header is not None else None

    title_index = resolve(config.title_selector, header_names)
    if trace:
        trace(f"Title {config.title_selector.describe()} resolved to column {title_index}")

    description_index = None
    if config.description_selector is not None and not config.combine_remaining:
        description_index = resolve(config.description_selector, header_names)
        if trace:
            trace(
                f"Description {config.description_selector.describe()} "
                f"resolved to column {description_index}"
            )

    limit = len(header_names) if header_names is not None else width
    if limit is not None:
        check_bounds("title", title_index, limit)
        if description_index is not None:
            check_bounds("description", description_index, limit)

    return ResolvedPositions(
        title_index=title_index,
        description_index=description_index,
        header_names=header_names,
    )
