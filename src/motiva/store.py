"""
Document storage for week plans and workout logs, keyed by user and date.
"""

import json
import logging
from abc import ABC, abstractmethod
from pathlib import Path
from typing import Any, Dict, List, Optional

import backoff
import requests

from .config import settings
from .errors import StoreError
from .model import WeekPlan, WorkoutLog
from .session import log_to_record

logger = logging.getLogger(__name__)

WEEK_PLANS_TABLE = "week_plans"
WORKOUT_LOGS_TABLE = "workout_logs"

# Connection errors and timeouts only; HTTP error statuses are not retried
RETRY_ATTEMPTS = 3
RETRY_INTERVAL_SECONDS = 0.1


class WorkoutStore(ABC):
    """Key-value style access to a user's plans and logs"""

    @abstractmethod
    def get_week_plans(self, user_id: str) -> List[WeekPlan]:
        """All week plans, newest week first"""

    @abstractmethod
    def save_week_plan(self, user_id: str, week_plan: WeekPlan) -> WeekPlan:
        ...

    @abstractmethod
    def get_recent_logs(self, user_id: str, limit: int) -> List[WorkoutLog]:
        """Completed logs, newest first"""

    @abstractmethod
    def upsert_log(self, log: WorkoutLog) -> None:
        """Insert or replace the log for (user_id, workout_date)"""


class JsonFileStore(WorkoutStore):
    """Stores each document as a JSON file under ``root/<user_id>/``"""

    def __init__(self, root: str):
        self.root = Path(root)

    def _user_dir(self, user_id: str, table: str) -> Path:
        path = self.root / user_id / table
        path.mkdir(parents=True, exist_ok=True)
        return path

    def _read_all(self, directory: Path) -> List[Dict[str, Any]]:
        records = []
        for json_file in sorted(directory.glob("*.json"), reverse=True):
            with open(json_file, 'r') as f:
                records.append(json.load(f))
        return records

    def _write(self, path: Path, record: Dict[str, Any]) -> None:
        with open(path, 'w') as f:
            json.dump(record, f, indent=4, default=str)

    def get_week_plans(self, user_id: str) -> List[WeekPlan]:
        records = self._read_all(self._user_dir(user_id, WEEK_PLANS_TABLE))
        return [WeekPlan.model_validate(r) for r in records]

    def save_week_plan(self, user_id: str, week_plan: WeekPlan) -> WeekPlan:
        if week_plan.week_start_date is None:
            raise StoreError("Week plans need a week_start_date to be stored")
        week_plan = week_plan.model_copy(update={"user_id": user_id})
        path = self._user_dir(user_id, WEEK_PLANS_TABLE) / f"{week_plan.week_start_date.isoformat()}.json"
        self._write(path, week_plan.model_dump(mode="json"))
        return week_plan

    def get_recent_logs(self, user_id: str, limit: int) -> List[WorkoutLog]:
        records = self._read_all(self._user_dir(user_id, WORKOUT_LOGS_TABLE))
        logs = [WorkoutLog.model_validate(r) for r in records]
        return [log for log in logs if log.status == "completed"][:limit]

    def upsert_log(self, log: WorkoutLog) -> None:
        if not log.user_id:
            raise StoreError("Workout logs need a user_id to be stored")
        path = self._user_dir(log.user_id, WORKOUT_LOGS_TABLE) / f"{log.workout_date.isoformat()}.json"
        self._write(path, log_to_record(log))


class RestStore(WorkoutStore):
    """PostgREST (Supabase) backed store. Each call is a single request."""

    def __init__(self, base_url: str, api_key: str, timeout: int = 30,
                 session: Optional[requests.Session] = None):
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self.session = session or requests.Session()
        self.headers = {
            "accept": "application/json",
            "apikey": api_key,
            "Authorization": f"Bearer {api_key}",
            "Content-Type": "application/json",
        }

    def _request(self, method: str, table: str, params: Dict[str, str],
                 payload: Any = None, prefer: Optional[str] = None) -> Any:
        url = f"{self.base_url}/rest/v1/{table}"
        headers = dict(self.headers)
        if prefer:
            headers["Prefer"] = prefer

        try:
            response = self._send(method, url, headers, params, payload)
            response.raise_for_status()
        except requests.exceptions.RequestException as e:
            raise StoreError(f"{method} {table} failed: {e}") from e

        if not response.content:
            return None
        return response.json()

    @backoff.on_exception(
        backoff.constant,
        (requests.exceptions.ConnectionError, requests.exceptions.Timeout),
        max_tries=RETRY_ATTEMPTS,
        interval=RETRY_INTERVAL_SECONDS,
    )
    def _send(self, method: str, url: str, headers: Dict[str, str], params: Dict[str, str],
              payload: Any) -> requests.Response:
        return self.session.request(method, url, headers=headers, params=params, json=payload,
                                    timeout=self.timeout)

    def get_week_plans(self, user_id: str) -> List[WeekPlan]:
        rows = self._request("GET", WEEK_PLANS_TABLE, {
            "select": "*",
            "user_id": f"eq.{user_id}",
            "order": "week_start_date.desc",
        })
        return [WeekPlan.model_validate(row) for row in rows or []]

    def save_week_plan(self, user_id: str, week_plan: WeekPlan) -> WeekPlan:
        payload = week_plan.model_dump(mode="json", exclude_none=True)
        payload["user_id"] = user_id
        rows = self._request("POST", WEEK_PLANS_TABLE, {}, payload=payload, prefer="return=representation")
        if rows:
            return WeekPlan.model_validate(rows[0])
        return week_plan.model_copy(update={"user_id": user_id})

    def get_recent_logs(self, user_id: str, limit: int) -> List[WorkoutLog]:
        rows = self._request("GET", WORKOUT_LOGS_TABLE, {
            "select": "user_id,workout_date,details,status",
            "user_id": f"eq.{user_id}",
            "status": "eq.completed",
            "order": "workout_date.desc",
            "limit": str(limit),
        })
        return [WorkoutLog.model_validate(row) for row in rows or []]

    def upsert_log(self, log: WorkoutLog) -> None:
        logger.info("Saving workout log for %s on %s", log.user_id, log.workout_date)
        self._request(
            "POST",
            WORKOUT_LOGS_TABLE,
            {"on_conflict": "user_id,workout_date"},
            payload=log_to_record(log),
            prefer="resolution=merge-duplicates",
        )


def default_store() -> WorkoutStore:
    """RestStore when Supabase credentials are configured, else JsonFileStore under DATA_DIR"""
    if settings.SUPABASE_URL and settings.SUPABASE_KEY:
        return RestStore(settings.SUPABASE_URL, settings.SUPABASE_KEY)
    return JsonFileStore(settings.DATA_DIR)
