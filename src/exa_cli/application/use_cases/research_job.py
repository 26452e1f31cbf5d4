"""Use-cases: StartResearch / CheckResearch – the two halves of a research task.

The two calls are independent. Nothing is kept between them; the caller
carries the task id from one to the other and owns any polling cadence.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any
from urllib.parse import quote

from exa_cli.application.payload import build_payload
from exa_cli.application.ports import Logger
from exa_cli.application.use_cases.dispatch_request import ROUTES, DispatchRequest
from exa_cli.domain.commands import ResearchStartCommand
from exa_cli.domain.entities import ApiResponse
from exa_cli.domain.errors import MalformedResponse, MissingField
from exa_cli.domain.value_objects import ResearchStatus, ResearchTask

TASK_ID_KEYS = ("id", "researchId", "taskId")
RESULT_KEYS = ("output", "data", "result")


def _json_object(response: ApiResponse, what: str) -> dict[str, Any]:
    data = response.json_or_none()
    if not isinstance(data, dict):
        raise MalformedResponse(f"{what}: response is not a JSON object")
    return data


@dataclass
class StartResearchResponse:
    task_id: str
    response: ApiResponse


@dataclass
class CheckResearchResponse:
    task: ResearchTask
    result: Any
    response: ApiResponse


class StartResearch:
    """Submit research instructions and return the service-assigned task id."""

    def __init__(self, dispatcher: DispatchRequest, logger: Logger) -> None:
        self._dispatch = dispatcher
        self._log = logger

    def execute(self, command: ResearchStartCommand) -> StartResearchResponse:
        payload = build_payload(command, self._log)
        response = self._dispatch.send(ROUTES[command.name], payload)

        data = _json_object(response, "research start")
        for key in TASK_ID_KEYS:
            value = data.get(key)
            if isinstance(value, str) and value:
                self._log.info(f"Research task submitted: {value}")
                return StartResearchResponse(task_id=value, response=response)
        raise MalformedResponse("research start: response has no task id")


class CheckResearch:
    """Fetch the current status (and result, once completed) of a task."""

    def __init__(self, dispatcher: DispatchRequest, logger: Logger) -> None:
        self._dispatch = dispatcher
        self._log = logger

    def execute(self, task_id: str | None) -> CheckResearchResponse:
        if not task_id or not task_id.strip():
            raise MissingField("task_id")

        route = ROUTES["research-check"].format(task_id=quote(task_id, safe=""))
        response = self._dispatch.send(route)

        data = _json_object(response, "research check")
        raw_status = data.get("status")
        try:
            status = ResearchStatus(raw_status)
        except ValueError:
            raise MalformedResponse(f"research check: unexpected status {raw_status!r}") from None

        result = None
        if status is ResearchStatus.COMPLETED:
            result = next((data[k] for k in RESULT_KEYS if k in data), None)

        self._log.debug(f"Research task {task_id}: {status.value}")
        return CheckResearchResponse(
            task=ResearchTask(task_id=task_id, status=status),
            result=result,
            response=response,
        )
