"""
Background worker that pays out due scheduled orders.

An APScheduler BackgroundScheduler runs one processing pass every
DUE_CHECK_INTERVAL_SECONDS on a single worker thread. A pass also
runs right after startup, so anything missed while the
application was down is caught up immediately.

Each pass opens its own database session; the processor's batch
commit is the only write. A failed pass is logged and the next
tick simply tries again, since nothing was advanced.

stop() waits for a pass that is already running, so a batch is
never cut off halfway through its commit.
"""

from datetime import datetime, timezone

from apscheduler.schedulers.background import BackgroundScheduler
from apscheduler.triggers.interval import IntervalTrigger

from family_allowance.clock import SystemClock
from family_allowance.config import get_settings
from family_allowance.logging_config import get_logger
from family_allowance.services.due_order_processor import DueOrderProcessor
from family_allowance.services.order_store import OrderStore

logger = get_logger(__name__)

JOB_ID = "process_due_orders"


class DueOrderWorker:
    """Periodic trigger for DueOrderProcessor."""

    def __init__(
        self,
        session_factory,
        clock=None,
        interval_seconds: int | None = None,
        catch_up_on_start: bool = True,
    ):
        self.session_factory = session_factory
        self.clock = clock or SystemClock()
        if interval_seconds is None:
            interval_seconds = get_settings().DUE_CHECK_INTERVAL_SECONDS
        self.interval_seconds = interval_seconds
        self.catch_up_on_start = catch_up_on_start
        self._scheduler: BackgroundScheduler | None = None

    @property
    def running(self) -> bool:
        return self._scheduler is not None and self._scheduler.running

    def start(self) -> None:
        if self._scheduler is not None:
            logger.info("Due-order worker already started; ignoring")
            return

        scheduler = BackgroundScheduler()
        job_options = {}
        if self.catch_up_on_start:
            job_options["next_run_time"] = datetime.now(timezone.utc)

        scheduler.add_job(
            self.run_once,
            trigger=IntervalTrigger(seconds=self.interval_seconds),
            id=JOB_ID,
            replace_existing=True,
            coalesce=True,
            max_instances=1,
            **job_options,
        )
        scheduler.start()
        self._scheduler = scheduler
        logger.info(
            "Due-order worker started, check interval: %ss",
            self.interval_seconds,
        )

    def stop(self) -> None:
        if self._scheduler is None:
            return
        try:
            self._scheduler.shutdown(wait=True)
            logger.info("Due-order worker stopped")
        finally:
            self._scheduler = None

    def run_once(self) -> int:
        """
        Run a single processing pass.

        Errors are logged, not raised, so one bad pass never
        stops the schedule. Returns the number of occurrences
        processed, or 0 if the pass failed.
        """
        db = self.session_factory()
        try:
            processor = DueOrderProcessor(OrderStore(db), self.clock)
            count = processor.process_due()
        except Exception:
            logger.exception("Error processing due scheduled orders")
            return 0
        finally:
            db.close()

        if count > 0:
            logger.info("Processed %d scheduled payment(s)", count)
        return count
