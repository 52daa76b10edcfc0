from __future__ import annotations

import dataclasses

import pytest

from gitlab_issues.errors import ConfigError
from gitlab_issues.models import FieldSelector, IssueRecord, ParserConfig, ResolvedPositions


def test_index_wins_over_name() -> None:
    selector = FieldSelector.choose("title", 2)

    assert selector.is_index
    assert selector.index == 2
    assert selector.name is None


def test_choose_without_values_returns_none() -> None:
    assert FieldSelector.choose(None, None) is None


def test_negative_index_is_rejected() -> None:
    with pytest.raises(ConfigError):
        FieldSelector.by_index(-1)


def test_title_by_name_without_header_fails_at_construction() -> None:
    with pytest.raises(ConfigError):
        ParserConfig.build(title_key="title", has_header=False)


def test_title_by_index_without_header_is_valid() -> None:
    config = ParserConfig.build(title_key="title", title_column=0, has_header=False)

    assert config.title_selector == FieldSelector.by_index(0)


def test_description_key_dropped_without_header() -> None:
    config = ParserConfig.build(title_column=0, description_key="description", has_header=False)

    assert config.description_selector is None


def test_combine_remaining_wins_over_description() -> None:
    config = ParserConfig.build(description_key="description", description_column=1, combine_remaining=True)

    assert config.combine_remaining
    assert config.description_selector is None


def test_separator_must_be_single_character() -> None:
    with pytest.raises(ConfigError):
        ParserConfig.build(delimiter=";;")
    with pytest.raises(ConfigError):
        ParserConfig.build(delimiter="")


def test_config_is_immutable() -> None:
    config = ParserConfig.build()

    with pytest.raises(dataclasses.FrozenInstanceError):
        config.delimiter = ";"


def test_prefix_is_joined_with_single_space() -> None:
    config = ParserConfig.build(title_prefix="TODO:")

    assert config.apply_prefix("Fix bug") == "TODO: Fix bug"
    assert config.apply_prefix("") == "TODO: "
    assert ParserConfig.build().apply_prefix("Fix bug") == "Fix bug"


def test_empty_prefix_is_still_applied() -> None:
    config = ParserConfig.build(title_prefix="")

    assert config.title_prefix == ""
    assert config.apply_prefix("Fix bug") == " Fix bug"


def test_column_label_falls_back_to_position() -> None:
    positions = ResolvedPositions(title_index=0, header_names=(" id ", "title"))

    assert positions.column_label(0) == "id"
    assert positions.column_label(5) == "Column 5"
    assert ResolvedPositions(title_index=0).column_label(1) == "Column 1"


def test_issue_record_display() -> None:
    assert str(IssueRecord("A", "B")) == "Title: 'A', Description: 'B'"
    assert str(IssueRecord("A")) == "Title: 'A', Description: ''"
