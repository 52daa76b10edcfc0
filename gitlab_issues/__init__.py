"""
gitlab_issues package for GitLab Issue creation from CSV and JSON files

This package provides modules for extracting issue records from files,
validating inputs, and creating GitLab Issues with labels and an
assignee taken from the target project.
"""

__version__ = "1.0.0"

# Import all modules
from . import models
from . import errors
from . import resolver
from . import extractor
from . import validator
from . import creator
from . import analyzer
