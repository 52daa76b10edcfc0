"""
analyzer.py - Analysis module for the target GitLab project

This module finds the target project, checks that the requested labels
exist in it and resolves the assignee username to a project member id.
"""

from .creator import get_project_labels, get_project_members, get_projects


def log(message):
    """Simple logging function"""
    print(f"[analyzer] {message}")


def find_project(projects, project_name=None, project_id=None):
    """
    Find a project by id, or by name or full path (any case)
    Returns the project dictionary, or None if not found
    """
    if project_id is not None:
        return next((p for p in projects if p["id"] == project_id), None)

    wanted = project_name.lower()
    return next(
        (p for p in projects
         if p["name"].lower() == wanted or p["path_with_namespace"].lower() == wanted),
        None
    )


def find_missing_labels(labels, project_labels):
    """
    Compare requested labels with the labels of the project (any case)
    Returns the requested labels that do not exist
    """
    existing = {label["name"].lower() for label in project_labels}
    return [label for label in labels if label.lower() not in existing]


def find_member_id(members, username):
    """
    Find the member id for a username (any case)
    Returns the id, or None if the user is not a member
    """
    wanted = username.lower()
    for member in members:
        if member["username"].lower() == wanted:
            return member["id"]
    return None


def analyze_project(api, project_name=None, project_id=None, labels=None, assignee=None):
    """
    Look up the project, its labels and members
    Returns a dictionary with analysis results
    """
    projects = get_projects(api)
    if projects is None:
        return {
            "success": False,
            "error": "Failed to get projects"
        }

    project = find_project(projects, project_name, project_id)
    if not project:
        target = project_name if project_id is None else project_id
        return {
            "success": False,
            "error": f"Project '{target}' not found or not accessible"
        }

    log(f"Found project {project['id']}: {project['name']} ({project['path_with_namespace']})")

    missing_labels = []
    if labels:
        project_labels = get_project_labels(api, project["id"])
        if project_labels is None:
            return {
                "success": False,
                "error": "Failed to get labels of project"
            }
        missing_labels = find_missing_labels(labels, project_labels)

    assignee_id = None
    if assignee:
        members = get_project_members(api, project["id"])
        if members is None:
            return {
                "success": False,
                "error": "Failed to get members of project"
            }
        assignee_id = find_member_id(members, assignee)
        if assignee_id is None:
            return {
                "success": False,
                "error": f"User '{assignee}' is not a member of project '{project['name']}'"
            }

    return {
        "success": True,
        "project": project,
        "missing_labels": missing_labels,
        "assignee_id": assignee_id
    }
