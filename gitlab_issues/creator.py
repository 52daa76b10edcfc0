"""
creator.py - GitLab REST API calls

This module handles the requests sent to GitLab: listing projects,
members and labels, and creating issues from extracted records.
"""

import requests

API_PREFIX = "/api/v4"


def log(message):
    """Simple logging function"""
    print(f"[creator] {message}")


def connect(base_url, token, verify_ssl=True):
    """
    Build the connection settings used by every request
    Returns a dictionary with the API URL, headers and SSL setting
    """
    return {
        "api_url": f"{base_url.rstrip('/')}{API_PREFIX}",
        "headers": {
            "PRIVATE-TOKEN": token,
            "Accept": "application/json"
        },
        "verify": verify_ssl
    }


def _url(api, path):
    return f"{api['api_url']}/{path.lstrip('/')}"


def api_get(api, path):
    """
    Send a GET request to the GitLab API
    Returns the decoded JSON body if successful, None otherwise
    """
    url = _url(api, path)
    log(f"Sending GET request to {url}")

    try:
        response = requests.get(url, headers=api["headers"], verify=api["verify"])
    except requests.RequestException as e:
        log(f"Failed to send request: {str(e)}")
        return None

    if not response.ok:
        log(f"Request was not successful ({response.status_code}): {response.text}")
        return None

    try:
        return response.json()
    except ValueError as e:
        log(f"Failed to parse response: {str(e)}")
        return None


def api_post(api, path, body):
    """
    Send a POST request with a JSON body to the GitLab API
    Returns the decoded JSON body if successful, None otherwise
    """
    url = _url(api, path)
    log(f"Sending POST request to {url}")

    try:
        response = requests.post(url, headers=api["headers"], json=body, verify=api["verify"])
    except requests.RequestException as e:
        log(f"Failed to send request: {str(e)}")
        return None

    if not response.ok:
        log(f"Request was not successful ({response.status_code}): {response.text}")
        return None

    try:
        return response.json()
    except ValueError as e:
        log(f"Failed to parse response: {str(e)}")
        return None


def get_projects(api):
    """
    Get the projects visible to the token
    Returns a list of dictionaries with id, name and path_with_namespace, or None
    """
    projects = api_get(api, "projects")
    if projects is None:
        return None

    return [
        {
            "id": project["id"],
            "name": project["name"],
            "path_with_namespace": project["path_with_namespace"]
        }
        for project in projects
    ]


def get_project_members(api, project_id):
    """
    Get the members of a project
    Returns a list of dictionaries with id, username and name, or None
    """
    members = api_get(api, f"projects/{project_id}/members")
    if members is None:
        return None

    return [
        {
            "id": member["id"],
            "username": member["username"],
            "name": member.get("name", "")
        }
        for member in members
    ]


def get_project_labels(api, project_id):
    """
    Get the labels of a project
    Returns a list of dictionaries with id and name, or None
    """
    labels = api_get(api, f"projects/{project_id}/labels")
    if labels is None:
        return None

    return [{"id": label["id"], "name": label["name"]} for label in labels]


def build_issue_body(record, labels=None, assignee_id=None):
    """Build the create-issue payload for a single record"""
    body = {"title": record.title}

    if record.description is not None:
        body["description"] = record.description
    if labels:
        body["labels"] = ",".join(labels)
    if assignee_id is not None:
        body["assignee_id"] = assignee_id

    return body


def create_issue(api, project_id, record, labels=None, assignee_id=None):
    """
    Create a GitLab Issue
    Returns the created issue data if successful, None otherwise
    """
    log(f"Creating issue: {record.title}")

    issue_data = api_post(api, f"projects/{project_id}/issues", build_issue_body(record, labels, assignee_id))
    if issue_data is None:
        log(f"Error creating issue: {record.title}")
        return None

    log(f"Successfully created issue #{issue_data.get('iid')}: {record.title}")
    return issue_data


def create_issues(api, project_id, records, labels=None, assignee_id=None):
    """
    Create one issue per record, continuing past failures
    Returns a dictionary with the result
    """
    created_count = 0
    failures = []

    for i, record in enumerate(records, start=1):
        if not record.title:
            log(f"Skipping issue {i}: Missing title")
            failures.append({"index": i, "title": record.title, "error": "Missing title"})
            continue

        issue_data = create_issue(api, project_id, record, labels, assignee_id)
        if not issue_data:
            failures.append({"index": i, "title": record.title, "error": "Request failed"})
            continue

        created_count += 1

    return {
        "success": not failures,
        "created": created_count,
        "failed": len(failures),
        "failures": failures
    }
