"""Static API description served at GET /api."""

from typing import Any

from patterns.domain_config import TaskTrackerConfig
from verticals.tasks.rules import PRIORITY_VALUES, STATUS_VALUES


def build_api_document(config: TaskTrackerConfig) -> dict[str, Any]:
    limits = config.limits
    return {
        "application": "Task Management CRUD API",
        "version": config.version,
        "description": "CRUD operations for task management with web interface",
        "frontend": "Available at GET /",
        "endpoints": {
            "GET /": "Web application interface",
            "GET /api": "API documentation",
            "GET /health": "Health check with system information",
            "GET /api/stats": "Application statistics",
            "GET /api/tasks": "Get all tasks (supports filtering)",
            "GET /api/tasks/{id}": "Get task by ID",
            "POST /api/tasks": "Create new task",
            "PUT /api/tasks/{id}": "Update task completely",
            "PATCH /api/tasks/{id}": "Update task partially",
            "DELETE /api/tasks/{id}": "Delete task",
        },
        "queryParameters": {
            "/api/tasks": {
                "status": f"Filter by status ({', '.join(STATUS_VALUES)})",
                "priority": f"Filter by priority ({', '.join(PRIORITY_VALUES)})",
                "search": "Search in title and description",
                "sortBy": "Sort by field (title, createdAt, updatedAt, dueDate, priority)",
                "order": "Sort order (asc, desc)",
            }
        },
        "taskStructure": {
            "id": "number (auto-generated)",
            "title": f"string (required, max {limits.title_max_length} chars)",
            "description": f"string (optional, max {limits.description_max_length} chars)",
            "status": f"string ({'|'.join(STATUS_VALUES)})",
            "priority": f"string ({'|'.join(PRIORITY_VALUES)})",
            "createdAt": "ISO date string",
            "updatedAt": "ISO date string",
            "dueDate": "ISO date string (optional)",
        },
        "examples": {
            "createTask": {
                "title": "Learn Docker",
                "description": "Master Docker containerization",
                "status": "pending",
                "priority": "high",
                "dueDate": "2025-09-20T23:59:59Z",
            }
        },
    }
