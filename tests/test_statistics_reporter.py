"""
Tests for the periodic statistics reporter.
"""
import asyncio
import logging
import time
from datetime import timedelta

import pytest

from msgboard.models.message import Message
from msgboard.tasks.statistics_reporter import StatisticsReporter


@pytest.fixture
def captured_logs(caplog):
    """Capture records from the non-propagating application logger."""
    logger = logging.getLogger("msgboard")
    logger.addHandler(caplog.handler)
    caplog.set_level(logging.INFO, logger="msgboard")
    yield caplog
    logger.removeHandler(caplog.handler)


class SlowService:
    """Service stand-in whose runs take a known amount of time."""

    def __init__(self, run_duration: float):
        self.run_duration = run_duration
        self.runs = []  # (start, end) monotonic pairs

    def get_all_messages(self):
        start = time.monotonic()
        time.sleep(self.run_duration)
        self.runs.append((start, time.monotonic()))
        return []

    def get_active_message_count(self):
        return 0

    def get_recent_messages(self, days_ago):
        return []


class FailingService(SlowService):
    def __init__(self):
        super().__init__(0)
        self.calls = 0

    def get_all_messages(self):
        self.calls += 1
        raise RuntimeError("database unavailable")


class TestRunOnce:
    """Tests for a single reporter run."""

    def test_empty_store_reports_zeros(self, service, clock):
        reporter = StatisticsReporter(service, clock=clock)

        report = reporter.run_once()

        assert report is not None
        assert report.total_messages == 0
        assert report.active_messages == 0
        assert report.inactive_messages == 0
        assert report.recent_messages == 0
        assert report.status_code == 200

    def test_counts_and_next_execution(self, service, store, clock):
        now = clock.now
        store.insert(Message(content="new", author="admin", created_date=now - timedelta(days=1), active=True))
        store.insert(Message(content="old", author="admin", created_date=now - timedelta(days=30), active=True))
        store.insert(Message(content="hidden", author="system", created_date=now, active=False))
        reporter = StatisticsReporter(service, interval_seconds=60, clock=clock)

        report = reporter.run_once()

        assert report.execution_time == now
        assert report.total_messages == 3
        assert report.active_messages == 2
        assert report.inactive_messages == 1
        assert report.recent_messages == 1
        assert report.next_execution == now + timedelta(seconds=60)
        assert reporter.last_report == report
        assert reporter.run_count == 1

    def test_report_is_logged(self, service, clock, captured_logs):
        StatisticsReporter(service, clock=clock).run_once()

        messages = [record.getMessage() for record in captured_logs.records]
        assert "Message Statistics Task - Executing" in messages
        assert "Execution Time: 2025-01-15 10:00:00" in messages
        assert "Total Messages: 0" in messages
        assert "Messages from last 7 days: 0" in messages
        assert "Next Execution: 2025-01-15 10:01:00" in messages
        assert "Task Status Code: 200" in messages
        assert "Task completed successfully" in messages

    def test_failure_is_logged_not_raised(self, clock, captured_logs):
        reporter = StatisticsReporter(FailingService(), clock=clock)

        report = reporter.run_once()

        assert report is None
        assert reporter.failure_count == 1
        assert reporter.run_count == 0
        assert reporter.last_report is None
        errors = [r for r in captured_logs.records if r.levelno == logging.ERROR]
        assert errors[0].exc_info is not None
        assert errors[1].getMessage() == "Error message: database unavailable"

    def test_does_not_mutate_messages(self, service, clock):
        created = service.create_message("Hello", "admin")

        StatisticsReporter(service, clock=clock).run_once()

        after = service.get_message_by_id(created.id)
        assert after.content == "Hello"
        assert after.updated_date is None


class TestSchedule:
    """Tests for the fixed-delay background schedule."""

    @pytest.mark.asyncio
    async def test_first_run_starts_immediately(self, service):
        reporter = StatisticsReporter(service, interval_seconds=60)

        await reporter.start()
        for _ in range(100):
            if reporter.run_count:
                break
            await asyncio.sleep(0.01)
        await reporter.stop()

        assert reporter.run_count == 1
        assert not reporter.is_running

    @pytest.mark.asyncio
    async def test_fixed_delay_between_runs(self):
        stub = SlowService(run_duration=0.1)
        reporter = StatisticsReporter(stub, interval_seconds=0.05)

        await reporter.start()
        await asyncio.sleep(0.6)
        await reporter.stop()

        assert len(stub.runs) >= 2
        for (_, previous_end), (next_start, _) in zip(stub.runs, stub.runs[1:]):
            # Measured from the end of the previous run, so runs never overlap
            assert next_start - previous_end >= 0.045

    @pytest.mark.asyncio
    async def test_schedule_survives_failing_runs(self):
        failing = FailingService()
        reporter = StatisticsReporter(failing, interval_seconds=0.01)

        await reporter.start()
        await asyncio.sleep(0.3)
        assert reporter.is_running
        await reporter.stop()

        assert failing.calls >= 2
        assert reporter.failure_count == failing.calls

    @pytest.mark.asyncio
    async def test_start_twice_keeps_single_task(self, service, captured_logs):
        reporter = StatisticsReporter(service, interval_seconds=60)

        await reporter.start()
        task = reporter._task
        await reporter.start()

        assert reporter._task is task
        assert "Statistics reporter is already running" in captured_logs.text
        await reporter.stop()

    @pytest.mark.asyncio
    async def test_stop_does_not_wait_for_interval(self, service):
        reporter = StatisticsReporter(service, interval_seconds=60)
        await reporter.start()
        await asyncio.sleep(0.05)

        started = time.monotonic()
        await reporter.stop()

        assert time.monotonic() - started < 5

    @pytest.mark.asyncio
    async def test_stop_without_start_is_noop(self, service):
        reporter = StatisticsReporter(service)
        await reporter.stop()
        assert not reporter.is_running
