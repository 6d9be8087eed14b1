"""Project endpoints."""

from flask import Blueprint, jsonify

from bizledger.domain.project import ProjectService, TaskService
from bizledger.web import get_services
from bizledger.web.auth import current_principal, login_required
from bizledger.web.payload import json_body
from bizledger.web.serializers import project_to_json, task_to_json

projects_bp = Blueprint("projects", __name__, url_prefix="/projects")


def _service() -> ProjectService:
    return ProjectService(get_services().db)


@projects_bp.get("")
@login_required
def list_projects():
    """Fetch the projects the caller may see."""
    projects = _service().list_projects(current_principal())
    return jsonify([project_to_json(p) for p in projects])


@projects_bp.post("")
@login_required
def create_project():
    """Create a project; admins and owners only."""
    project = _service().create_project(current_principal(), json_body())
    return jsonify(project_to_json(project)), 201


@projects_bp.get("/<int:project_id>")
@login_required
def get_project(project_id: int):
    principal = current_principal()
    project = _service().get_project(principal, project_id)
    body = project_to_json(project)
    body["tasks"] = [
        task_to_json(t) for t in TaskService(get_services().db).list_tasks(principal, project.id)
    ]
    return jsonify(body)
