#!/usr/bin/env python3
"""
issues.py - Main orchestrator for GitLab issue creation from CSV and JSON files

This script reads issues from a file, checks the target GitLab project,
its labels and members, and creates one issue per record. With --check
the file is only parsed and the extracted issues are listed.
"""

import argparse
import getpass
import os
import sys
from pathlib import Path

import yaml

from gitlab_issues.analyzer import analyze_project
from gitlab_issues.creator import connect, create_issues
from gitlab_issues.errors import ExtractionError
from gitlab_issues.extractor import extract
from gitlab_issues.validator import (
    build_parser_config,
    parse_labels,
    validate_file,
    validate_gitlab_url,
    validate_project_selection,
)

DEFAULT_URL = "https://localhost"

# Terminal colors for better readability
class Colors:
    HEADER = '\033[95m'
    BLUE = '\033[94m'
    GREEN = '\033[92m'
    YELLOW = '\033[93m'
    RED = '\033[91m'
    GRAY = '\033[90m'
    ENDC = '\033[0m'
    BOLD = '\033[1m'

def log(message, level="INFO"):
    """Log a message with appropriate formatting"""
    prefix = {
        "INFO": f"{Colors.BLUE}[INFO]{Colors.ENDC}",
        "SUCCESS": f"{Colors.GREEN}[SUCCESS]{Colors.ENDC}",
        "WARNING": f"{Colors.YELLOW}[WARNING]{Colors.ENDC}",
        "ERROR": f"{Colors.RED}[ERROR]{Colors.ENDC}",
        "PROMPT": f"{Colors.BOLD}{Colors.GREEN}[PROMPT]{Colors.ENDC}",
        "DEBUG": f"{Colors.GRAY}[DEBUG]{Colors.ENDC}",
    }.get(level, f"[{level}]")

    print(f"{prefix} {message}")

def get_input(prompt, options=None):
    """Get user input with optional validation against allowed options"""
    while True:
        log(prompt, "PROMPT")
        user_input = input("> ").strip().lower()

        if options and user_input not in options:
            log(f"Please enter one of: {', '.join(options)}", "WARNING")
        else:
            return user_input

def load_yaml(path):
    """Load a YAML file, returning an empty dictionary when it is empty"""
    with open(path, 'r') as f:
        return yaml.safe_load(f) or {}

def load_config(config_dir):
    """
    Load defaults from config.yaml and the token from secrets.yaml

    Both files are optional. Returns a tuple of (upload_issues section, secrets).
    """
    if not config_dir:
        return {}, {}

    config_dir = Path(config_dir)
    if not config_dir.is_dir():
        log(f"Config directory not found: {config_dir}", "ERROR")
        sys.exit(1)

    config, secrets = {}, {}
    try:
        config_path = config_dir / "config.yaml"
        if config_path.exists():
            config = load_yaml(config_path).get("upload_issues", {}) or {}
        else:
            log(f"No config.yaml in {config_dir}, using command line options only", "WARNING")

        secrets_path = config_dir / "secrets.yaml"
        if secrets_path.exists():
            secrets = load_yaml(secrets_path)
    except (OSError, yaml.YAMLError) as e:
        log(f"Failed to load configuration: {str(e)}", "ERROR")
        sys.exit(1)

    return config, secrets

def resolve_token(token, secrets):
    """Pick the token from the command line, the environment, secrets.yaml or a prompt"""
    if token:
        return token
    if os.environ.get("GITLAB_ACCESS_TOKEN"):
        return os.environ["GITLAB_ACCESS_TOKEN"]
    if secrets.get("gitlab_token"):
        return secrets["gitlab_token"]

    log("No token given by argument, GITLAB_ACCESS_TOKEN or secrets.yaml", "PROMPT")
    return getpass.getpass("GitLab access token: ").strip()

def first_set(*values):
    return next((value for value in values if value is not None), None)

def build_arg_parser():
    parser = argparse.ArgumentParser(description="Create GitLab issues from a CSV or JSON file")
    parser.add_argument("-f", "--file", required=True, help="Path to the CSV or JSON file with issue data")
    parser.add_argument("-u", "--url", help="URL of the GitLab instance (default: GITLAB_URL or https://localhost)")
    parser.add_argument("-t", "--token", help="GitLab API token (default: GITLAB_ACCESS_TOKEN, secrets.yaml or prompt)")
    parser.add_argument("-p", "--project-name", help="Name or path of the GitLab project to upload to")
    parser.add_argument("--project-id", type=int, help="ID of the GitLab project to upload to")
    parser.add_argument("-l", "--labels", help="Comma separated list of labels to add to every issue")
    parser.add_argument("-a", "--assignee", help="Username to assign every issue to")
    parser.add_argument("-n", "--no-ssl-verify", action="store_true", help="Disable SSL verification for requests to GitLab")
    parser.add_argument("-c", "--check", action="store_true", help="Only check that issues can be extracted from the file, nothing is uploaded")
    parser.add_argument("-v", "--verbose", action="store_true", help="Verbose output")
    parser.add_argument("-y", "--yes", action="store_true", help="Do not ask for confirmation")
    parser.add_argument("--config-dir", help="Directory containing config.yaml and secrets.yaml")

    file_options = parser.add_argument_group("file parsing")
    file_options.add_argument("-s", "--separator", default=",", help="Field separator for CSV files (default: ,)")
    file_options.add_argument("--no-header", action="store_true", help="The CSV file has no header row")
    file_options.add_argument("--title-key", default="title", help="Column name or JSON key of the title (default: title)")
    file_options.add_argument("--title-column", type=int, help="Zero-based column index of the title, overrides --title-key")
    file_options.add_argument("--description-key", default="description", help="Column name or JSON key of the description (default: description)")
    file_options.add_argument("--description-column", type=int, help="Zero-based column index of the description, overrides --description-key")
    file_options.add_argument("--prepend-title", help="Text put in front of every title, separated by a space")
    file_options.add_argument("--combine-remaining", action="store_true", help="Build the description from every column except the title")
    return parser

def list_issues(records):
    """Print the extracted issues for a dry run"""
    for i, record in enumerate(records, start=1):
        print(f"{i}. {record}")

def main(argv=None):
    args = build_arg_parser().parse_args(argv)
    trace = (lambda message: log(message, "DEBUG")) if args.verbose else None

    # Display header
    print(f"\n{Colors.HEADER}===== GitLab Issue Creator ====={Colors.ENDC}")

    config, secrets = load_config(args.config_dir)

    # Validate inputs
    log("Validating inputs...")
    if not validate_file(args.file):
        log("File validation failed. Exiting.", "ERROR")
        sys.exit(1)

    parser_config = build_parser_config(
        separator=args.separator,
        no_header=args.no_header,
        title_key=args.title_key,
        title_column=args.title_column,
        description_key=args.description_key,
        description_column=args.description_column,
        prepend_title=args.prepend_title,
        combine_remaining=args.combine_remaining,
    )
    if parser_config is None:
        log("Invalid file parsing options. Exiting.", "ERROR")
        sys.exit(1)

    # Read issues
    log(f"Reading issues from {args.file}")
    try:
        records = extract(args.file, parser_config, trace=trace)
    except ExtractionError as e:
        log(f"Could not extract issues: {e}", "ERROR")
        sys.exit(1)

    log(f"Found {len(records)} issues in file", "SUCCESS")

    if args.check:
        list_issues(records)
        log("Check complete, no issues were uploaded.", "SUCCESS")
        sys.exit(0)

    if not records:
        log("Nothing to upload.", "WARNING")
        sys.exit(0)

    url = validate_gitlab_url(first_set(args.url, config.get("url"), os.environ.get("GITLAB_URL"), DEFAULT_URL))
    if not url:
        log("GitLab URL validation failed. Exiting.", "ERROR")
        sys.exit(1)

    project_name, project_id = args.project_name, args.project_id
    if project_name is None and project_id is None:
        project_name, project_id = config.get("project_name"), config.get("project_id")
    if not validate_project_selection(project_name, project_id):
        log("Project selection failed. Exiting.", "ERROR")
        sys.exit(1)

    labels = parse_labels(first_set(args.labels, config.get("labels")))
    if labels is None:
        log("Label validation failed. Exiting.", "ERROR")
        sys.exit(1)

    assignee = first_set(args.assignee, config.get("assignee"))
    verify_ssl = not (args.no_ssl_verify or config.get("no_ssl_verify", False))
    if not verify_ssl:
        log("SSL verification is disabled", "WARNING")

    token = resolve_token(args.token, secrets)
    if not token:
        log("A GitLab token is required. Exiting.", "ERROR")
        sys.exit(1)

    api = connect(url, token, verify_ssl=verify_ssl)

    # Check project, labels and assignee
    log("Checking GitLab project...")
    analysis = analyze_project(api, project_name, project_id, labels, assignee)
    if not analysis["success"]:
        log(f"Project check failed: {analysis['error']}", "ERROR")
        sys.exit(1)

    project = analysis["project"]
    if analysis["missing_labels"]:
        log(f"Labels not found in project: {', '.join(analysis['missing_labels'])}", "WARNING")
        log("GitLab will create them when the first issue is uploaded.", "WARNING")
        if not args.yes:
            choice = get_input("Would you like to continue? (yes/no)", options=["yes", "no", "y", "n"])
            if choice not in ["yes", "y"]:
                log("Process cancelled by user. Exiting.", "WARNING")
                sys.exit(0)

    # Create all issues
    log(f"Creating {len(records)} issues in {project['path_with_namespace']}...")
    result = create_issues(api, project["id"], records, labels, analysis["assignee_id"])

    # Display results
    log(f"Successfully created {result['created']} issues", "SUCCESS")
    if not result['success']:
        for failure in result['failures']:
            log(f"Issue {failure['index']} '{failure['title']}' failed: {failure['error']}", "ERROR")
        log(f"Failed to create {result['failed']} issues", "ERROR")
        sys.exit(1)

    log("Issue creation process complete!", "SUCCESS")

def run(argv=None):
    """Console entry point: run main() and turn interrupts and crashes into log lines"""
    try:
        main(argv)
    except KeyboardInterrupt:
        print("\n")
        log("Process interrupted by user. Exiting.", "WARNING")
        sys.exit(0)
    except Exception as e:
        log(f"Unexpected error: {str(e)}", "ERROR")
        sys.exit(1)

if __name__ == "__main__":
    run()
