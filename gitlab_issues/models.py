"""
models.py - Value types shared by the resolver and the extractor

ParserConfig is built once from the command line and never mutated, so the
same instance can be reused to check several files.
"""

from dataclasses import dataclass
from typing import Optional, Tuple

from .errors import ConfigError


@dataclass(frozen=True)
class FieldSelector:
    """Locates a field either by header name or by zero-based column index"""

    name: Optional[str] = None
    index: Optional[int] = None

    def __post_init__(self):
        if (self.name is None) == (self.index is None):
            raise ValueError("FieldSelector needs exactly one of name or index")
        if self.index is not None and self.index < 0:
            raise ConfigError(f"Column index must not be negative, got {self.index}")

    @classmethod
    def by_name(cls, name):
        return cls(name=name)

    @classmethod
    def by_index(cls, index):
        return cls(index=index)

    @classmethod
    def choose(cls, name=None, index=None):
        """
        Build a selector from optional name and index settings.
        The index always wins; the name is dropped here so it can never be looked up.
        Returns None when neither is given.
        """
        if index is not None:
            return cls.by_index(index)
        if name is not None:
            return cls.by_name(name)
        return None

    @property
    def is_index(self):
        return self.index is not None

    def describe(self):
        if self.is_index:
            return f"column {self.index}"
        return f"'{self.name}'"


@dataclass(frozen=True)
class ParserConfig:
    """How to find the title and description in an input file"""

    title_selector: FieldSelector
    description_selector: Optional[FieldSelector] = None
    has_header: bool = True
    delimiter: str = ","
    combine_remaining: bool = False
    title_prefix: Optional[str] = None

    def __post_init__(self):
        if len(self.delimiter) != 1:
            raise ConfigError(f"Separator must be a single character, got '{self.delimiter}'")
        if not self.has_header and not self.title_selector.is_index:
            raise ConfigError(
                f"Title column {self.title_selector.describe()} is selected by name "
                "but the file has no header; use a column index instead"
            )

    @classmethod
    def build(
        cls,
        title_key="title",
        title_column=None,
        description_key=None,
        description_column=None,
        has_header=True,
        delimiter=",",
        combine_remaining=False,
        title_prefix=None,
    ):
        """
        Apply option precedence once and return a consistent config.

        A column index beats a key name, and combine_remaining beats any
        explicit description. Without a header a description key cannot be
        looked up, so it is dropped.
        """
        title_selector = FieldSelector.choose(title_key, title_column)
        if title_selector is None:
            raise ConfigError("A title key or title column must be given")

        description_selector = None
        if not combine_remaining:
            description_selector = FieldSelector.choose(description_key, description_column)
            if description_selector is not None and not has_header and not description_selector.is_index:
                description_selector = None

        return cls(
            title_selector=title_selector,
            description_selector=description_selector,
            has_header=has_header,
            delimiter=delimiter,
            combine_remaining=combine_remaining,
            title_prefix=title_prefix,
        )

    def apply_prefix(self, raw_title):
        if self.title_prefix is not None:
            return f"{self.title_prefix} {raw_title}"
        return raw_title


@dataclass(frozen=True)
class ResolvedPositions:
    title_index: int
    description_index: Optional[int] = None
    header_names: Optional[Tuple[str, ...]] = None

    def column_label(self, index):
        if self.header_names is not None and index < len(self.header_names):
            return self.header_names[index].strip()
        return f"Column {index}"


@dataclass(frozen=True)
class IssueRecord:
    """A single issue read from a file, ready to be uploaded"""

    title: str
    description: Optional[str] = None

    def __str__(self):
        return f"Title: '{self.title}', Description: '{self.description or ''}'"
