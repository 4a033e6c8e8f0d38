"""
Advisory Service Module
=======================
Generates short crop advisories for farmers through the Gemini
generateContent REST API.

TASK STATES:
-----------
pending -> succeeded   text available
pending -> failed      fallback text, error reason kept
pending -> cancelled   user navigated away

RE-ENTRANCY:
-----------
A second request for the same crop and season while one is pending returns
the pending task instead of starting another call.

FAILURES:
--------
Missing API key, HTTP errors and malformed responses never escape the task;
they are logged and stored on it.

RETENTION:
---------
Only the newest `max_finished_tasks` finished tasks are kept; older ones are
forgotten when a new request starts.
"""

import asyncio
from datetime import datetime
from typing import Dict, Optional
from uuid import uuid4

import httpx

from ..models.advisory import AdvisoryRequest, AdvisoryTaskView, TaskState
from ..utils.clock import Clock, SystemClock
from ..utils.constants import ADVISORY_FALLBACK_TEXT, ADVISORY_SYSTEM_INSTRUCTION
from ..utils.exceptions import AdvisoryError, NotFoundError
from ..utils.logger import logger


def build_prompt(crop: str, season: str) -> str:
    return (
        f"Create a brief professional agricultural advisory for Bihar farmers regarding {crop} "
        f"cultivation in the {season} season. Include tips for pest control, irrigation, and "
        f"post-harvest management. Keep it concise (under 200 words)."
    )


class AdvisoryTask:
    """One generation request and its outcome"""

    def __init__(self, request: AdvisoryRequest, created_at: datetime):
        self.id = f"ADV-{uuid4().hex[:12]}"
        self.request = request
        self.state = TaskState.PENDING
        self.text: Optional[str] = None
        self.error: Optional[str] = None
        self.created_at = created_at
        self.completed_at: Optional[datetime] = None
        self.runner: Optional[asyncio.Task] = None

    @property
    def key(self):
        return (self.request.crop.lower(), self.request.season.lower())

    def view(self) -> AdvisoryTaskView:
        return AdvisoryTaskView(
            id=self.id,
            crop=self.request.crop,
            season=self.request.season,
            channel=self.request.channel,
            scheduled_for=self.request.scheduled_for,
            state=self.state,
            text=self.text,
            error=self.error,
            created_at=self.created_at,
            completed_at=self.completed_at
        )


class AdvisoryService:
    """Runs advisory generation as tracked asyncio tasks"""

    def __init__(
        self,
        api_key: str = "",
        model: str = "gemini-1.5-flash",
        base_url: str = "https://generativelanguage.googleapis.com/v1beta",
        timeout: float = 30.0,
        clock: Optional[Clock] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
        max_finished_tasks: int = 100
    ):
        self.api_key = api_key
        self.model = model
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self.clock = clock or SystemClock()
        self.transport = transport
        self._tasks: Dict[str, AdvisoryTask] = {}
        self.max_finished_tasks = max_finished_tasks

    @property
    def endpoint(self) -> str:
        return f"{self.base_url}/models/{self.model}:generateContent"

    async def request(self, request: AdvisoryRequest) -> AdvisoryTask:
        """Start generation, or return the pending task for the same crop and season"""
        for task in self._tasks.values():
            if task.state == TaskState.PENDING and task.key == (request.crop.lower(), request.season.lower()):
                logger.info(f"Advisory for {request.crop}/{request.season} already pending: {task.id}")
                return task

        self._prune()
        task = AdvisoryTask(request, self.clock.now())
        self._tasks[task.id] = task
        task.runner = asyncio.create_task(self._run(task))
        logger.info(f"Advisory {task.id} requested for {request.crop} ({request.season})")
        return task

    def _prune(self) -> None:
        """Forget the oldest finished tasks beyond max_finished_tasks"""
        finished = [task for task in self._tasks.values() if task.state != TaskState.PENDING]
        excess = len(finished) - self.max_finished_tasks
        if excess <= 0:
            return
        finished.sort(key=lambda task: task.completed_at or task.created_at)
        for task in finished[:excess]:
            del self._tasks[task.id]
        logger.debug(f"Pruned {excess} finished advisory tasks")

    def get(self, task_id: str) -> AdvisoryTask:
        task = self._tasks.get(task_id)
        if task is None:
            raise NotFoundError(f"Advisory task not found: {task_id}")
        return task

    def cancel(self, task_id: str) -> AdvisoryTask:
        task = self.get(task_id)
        if task.state != TaskState.PENDING:
            return task
        if task.runner is not None:
            task.runner.cancel()
        self._finish(task, TaskState.CANCELLED)
        logger.info(f"Advisory {task.id} cancelled")
        return task

    async def wait(self, task_id: str) -> AdvisoryTask:
        """Wait for a task to leave the pending state"""
        task = self.get(task_id)
        if task.runner is not None:
            try:
                await task.runner
            except asyncio.CancelledError:
                pass
        return task

    async def _run(self, task: AdvisoryTask) -> None:
        try:
            text = await self.generate_text(task.request.crop, task.request.season)
        except asyncio.CancelledError:
            self._finish(task, TaskState.CANCELLED)
            raise
        except (AdvisoryError, httpx.HTTPError, ValueError) as e:
            logger.error(f"Advisory {task.id} failed: {e}")
            self._fail(task, str(e))
            return
        except Exception as e:
            logger.exception(f"Advisory {task.id} failed unexpectedly: {e}")
            self._fail(task, f"Unexpected error: {e}")
            return

        if task.state == TaskState.PENDING:
            task.text = text
            self._finish(task, TaskState.SUCCEEDED)
            logger.info(f"Advisory {task.id} generated ({len(text)} chars)")

    def _fail(self, task: AdvisoryTask, reason: str) -> None:
        if task.state != TaskState.PENDING:
            return
        task.text = ADVISORY_FALLBACK_TEXT
        task.error = reason
        self._finish(task, TaskState.FAILED)

    def _finish(self, task: AdvisoryTask, state: TaskState) -> None:
        if task.state != TaskState.PENDING:
            return
        task.state = state
        task.completed_at = self.clock.now()

    async def generate_text(self, crop: str, season: str) -> str:
        """Call generateContent and return the first candidate's text"""
        if not self.api_key:
            raise AdvisoryError("Advisory generation is not configured (missing API key)")

        payload = {
            "systemInstruction": {"parts": [{"text": ADVISORY_SYSTEM_INSTRUCTION}]},
            "contents": [{"role": "user", "parts": [{"text": build_prompt(crop, season)}]}],
        }
        async with httpx.AsyncClient(timeout=self.timeout, transport=self.transport) as client:
            response = await client.post(
                self.endpoint,
                json=payload,
                headers={"x-goog-api-key": self.api_key}
            )
            response.raise_for_status()
            body = response.json()

        try:
            text = body["candidates"][0]["content"]["parts"][0]["text"]
        except (KeyError, IndexError, TypeError) as e:
            raise AdvisoryError("Unexpected advisory response", details=str(body)[:200]) from e
        if not isinstance(text, str):
            raise AdvisoryError("Advisory text is not a string", details=repr(text)[:200])
        if not text.strip():
            raise AdvisoryError("Advisory response was empty")
        return text.strip()
