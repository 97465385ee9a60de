"""
Periodic message statistics report.
"""
import asyncio
from datetime import datetime, timedelta
from typing import Optional

from pydantic import BaseModel

from msgboard.core.clock import Clock, format_timestamp, utc_now
from msgboard.core.logging import get_logger
from msgboard.services.message_service import MessageService

logger = get_logger(__name__)

BANNER = "=" * 40
# Logged by every successful run; carries no transport meaning
TASK_STATUS_OK = 200


class StatisticsReport(BaseModel):
    """Aggregate counts sampled by one reporter run."""
    execution_time: datetime
    total_messages: int
    active_messages: int
    inactive_messages: int
    recent_messages: int
    next_execution: datetime
    status_code: int = TASK_STATUS_OK


class StatisticsReporter:
    """
    Samples message statistics on a fixed-delay schedule and logs a report.

    The next run starts ``interval_seconds`` after the previous one ends, so
    runs never overlap. A failing run is logged and the schedule carries on.
    Runs have no timeout: a hung store call stalls the schedule.
    """

    def __init__(
        self,
        message_service: MessageService,
        interval_seconds: float = 60.0,
        recent_days: int = 7,
        clock: Clock = utc_now,
    ):
        self.message_service = message_service
        self.interval_seconds = interval_seconds
        self.recent_days = recent_days
        self._clock = clock
        self._task: Optional[asyncio.Task] = None
        self._stop_event: Optional[asyncio.Event] = None
        self.last_report: Optional[StatisticsReport] = None
        self.run_count = 0
        self.failure_count = 0

    @property
    def is_running(self) -> bool:
        return self._task is not None and not self._task.done()

    def run_once(self) -> Optional[StatisticsReport]:
        """Execute one run. Never raises; returns None when the run failed."""
        logger.info(BANNER)
        logger.info("Message Statistics Task - Executing")
        logger.info(BANNER)

        report = None
        try:
            now = self._clock()
            logger.info(f"Execution Time: {format_timestamp(now)}")

            total = len(self.message_service.get_all_messages())
            active = self.message_service.get_active_message_count()

            logger.info(f"Total Messages: {total}")
            logger.info(f"Active Messages: {active}")
            logger.info(f"Inactive Messages: {total - active}")

            recent = len(self.message_service.get_recent_messages(self.recent_days))
            logger.info(f"Messages from last {self.recent_days} days: {recent}")

            next_execution = now + timedelta(seconds=self.interval_seconds)
            logger.info(f"Next Execution: {format_timestamp(next_execution)}")

            report = StatisticsReport(
                execution_time=now,
                total_messages=total,
                active_messages=active,
                inactive_messages=total - active,
                recent_messages=recent,
                next_execution=next_execution,
            )
            logger.info(f"Task Status Code: {report.status_code}")
            logger.info(
                "Task completed successfully",
                extra={"extra_data": report.model_dump(mode="json")},
            )

            self.last_report = report
            self.run_count += 1
        except Exception as e:
            self.failure_count += 1
            logger.error("Error executing scheduled task", exc_info=True)
            logger.error(f"Error message: {e}")

        logger.info(BANNER)
        return report

    async def start(self) -> None:
        """Launch the background schedule on the running event loop."""
        if self.is_running:
            logger.warning("Statistics reporter is already running")
            return

        self._stop_event = asyncio.Event()
        self._task = asyncio.create_task(self._run_loop())
        logger.info(f"Statistics reporter started with {self.interval_seconds}s fixed delay")

    async def stop(self) -> None:
        """Stop the schedule, waiting for an in-flight run to finish."""
        if self._task is None:
            return

        self._stop_event.set()
        await self._task
        self._task = None
        logger.info("Statistics reporter stopped")

    async def _run_loop(self) -> None:
        while not self._stop_event.is_set():
            # Store calls are blocking, keep them off the event loop
            await asyncio.to_thread(self.run_once)
            try:
                await asyncio.wait_for(self._stop_event.wait(), timeout=self.interval_seconds)
            except asyncio.TimeoutError:
                pass
