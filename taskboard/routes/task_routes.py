from flask import Blueprint, g, request

from taskboard.utils.auth import get_services, proof_required
from taskboard.utils.responses import json_body, success

tasks_bp = Blueprint("tasks", __name__)


@tasks_bp.get("")
@tasks_bp.get("/")
@proof_required
def list_tasks():
    tasks = get_services().tasks.list(g.user_id, request.args.get("status"))
    return success(tasks)


@tasks_bp.post("")
@tasks_bp.post("/")
@proof_required
def create_task():
    payload = json_body()
    task = get_services().tasks.create(
        g.user_id,
        payload.get("title"),
        description=payload.get("description"),
        priority=payload.get("priority"),
        due_date=payload.get("dueDate"),
    )
    return success(task, 201)


@tasks_bp.get("/<task_id>")
@proof_required
def get_task(task_id):
    return success(get_services().tasks.get(g.user_id, task_id))


@tasks_bp.put("/<task_id>")
@proof_required
def update_task(task_id):
    payload = json_body()
    return success(get_services().tasks.update(g.user_id, task_id, payload))


@tasks_bp.delete("/<task_id>")
@proof_required
def delete_task(task_id):
    return success(get_services().tasks.delete(g.user_id, task_id))
