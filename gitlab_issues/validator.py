"""
validator.py - Validation module for input parameters

This module handles validation of the input file, the GitLab URL,
the project and label options, and builds the parser configuration
from the command line options.
"""

import re
from pathlib import Path

from .errors import ConfigError
from .extractor import SUPPORTED_FILE_TYPES
from .models import ParserConfig


def log(message):
    """Simple logging function"""
    print(f"[validator] {message}")


def validate_file(file_path):
    """
    Validate that the input file exists, is a regular file and has a
    supported extension
    Returns True if valid, False otherwise
    """
    path = Path(file_path)

    if not path.exists():
        log(f"File does not exist: {file_path}")
        return False

    if not path.is_file():
        log(f"File is not a file: {file_path}")
        return False

    if path.suffix.lower() not in SUPPORTED_FILE_TYPES:
        log(f"Unsupported file type '{path.suffix}', expected one of: {', '.join(SUPPORTED_FILE_TYPES)}")
        return False

    return True


def validate_gitlab_url(url):
    """
    Validate a GitLab instance URL
    Returns the URL without trailing slash if valid, otherwise None
    """
    if not url:
        log("Either --url or the GITLAB_URL environment variable must be provided")
        return None

    if not re.match(r'^https?://[^/\s]+(/\S*)?$', url):
        log(f"Invalid GitLab URL format: {url}")
        log("URL should be in format: https://gitlab.example.com")
        return None

    return url.rstrip("/")


def validate_project_selection(project_name, project_id):
    """
    Exactly one of project name and project id must be provided
    Returns True if valid, False otherwise
    """
    if project_name is None and project_id is None:
        log("Either project name or project id must be provided")
        return False

    if project_name is not None and project_id is not None:
        log("Only one of project name or project id can be provided")
        return False

    return True


def parse_labels(labels):
    """
    Validate a comma separated list of labels, or a list of labels from config.yaml
    Returns the list of labels (empty if none given), or None if invalid
    """
    if not labels:
        return []

    if isinstance(labels, (list, tuple)):
        parts = [str(label).strip() if label is not None else "" for label in labels]
    else:
        parts = [label.strip() for label in str(labels).split(",")]
    if any(not part for part in parts):
        log("Labels must be a comma separated list of non-empty strings")
        return None

    return parts


def build_parser_config(
    separator=",",
    no_header=False,
    title_key="title",
    title_column=None,
    description_key="description",
    description_column=None,
    prepend_title=None,
    combine_remaining=False,
):
    """
    Build the ParserConfig from command line options
    Returns the config if the options are consistent, otherwise None
    """
    if title_column is not None and title_column < 0:
        log(f"Title column must not be negative, got {title_column}")
        return None

    if description_column is not None and description_column < 0:
        log(f"Description column must not be negative, got {description_column}")
        return None

    if no_header and title_column is None:
        log("A file without header needs the title selected with --title-column")
        return None

    try:
        return ParserConfig.build(
            title_key=title_key,
            title_column=title_column,
            description_key=description_key,
            description_column=description_column,
            has_header=not no_header,
            delimiter=separator,
            combine_remaining=combine_remaining,
            title_prefix=prepend_title,
        )
    except ConfigError as e:
        log(str(e))
        return None
