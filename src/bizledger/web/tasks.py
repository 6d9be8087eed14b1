"""Task endpoints."""

from flask import Blueprint, jsonify, request

from bizledger.domain.errors import ValidationError
from bizledger.domain.project import TaskService
from bizledger.web import get_services
from bizledger.web.auth import current_principal, login_required
from bizledger.web.payload import json_body
from bizledger.web.serializers import task_to_json

tasks_bp = Blueprint("tasks", __name__, url_prefix="/tasks")


def _service() -> TaskService:
    return TaskService(get_services().db)


@tasks_bp.get("")
@login_required
def list_tasks():
    """Fetch the tasks of the project named by the projectId query parameter."""
    project_id = request.args.get("projectId", type=int)
    if project_id is None:
        raise ValidationError(
            "projectId query parameter is required", {"projectId": "is required"}
        )
    tasks = _service().list_tasks(current_principal(), project_id)
    return jsonify([task_to_json(t) for t in tasks])


@tasks_bp.post("")
@login_required
def create_task():
    task = _service().create_task(current_principal(), json_body())
    return jsonify(task_to_json(task)), 201


@tasks_bp.put("/<int:task_id>")
@login_required
def update_task(task_id: int):
    """Edit a task; status changes need admin, owner or the project head."""
    task = _service().update_task(current_principal(), task_id, json_body())
    return jsonify(task_to_json(task))


@tasks_bp.delete("/<int:task_id>")
@login_required
def delete_task(task_id: int):
    _service().delete_task(current_principal(), task_id)
    return jsonify(message="Task deleted successfully")
