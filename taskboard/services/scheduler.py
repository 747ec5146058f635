# taskboard/services/scheduler.py
"""
Scheduler service for periodic housekeeping
"""

from typing import Any, Dict
from apscheduler.schedulers.asyncio import AsyncIOScheduler
from apscheduler.triggers.interval import IntervalTrigger
import logging

from taskboard.config.security import SecurityConfig
from taskboard.database import SessionLocal
from taskboard.utils.auth import purge_expired_sessions

logger = logging.getLogger(__name__)


class SessionSweeper:
    """Removes expired sessions in the background.

    Expiry is still checked whenever a session is read; the sweep only keeps
    the table from growing.
    """

    def __init__(self, session_factory=SessionLocal):
        self.scheduler = AsyncIOScheduler()
        self.session_factory = session_factory
        self.is_running = False

    def start(self):
        """Start the scheduler"""
        if self.is_running or not SecurityConfig.SESSION_SWEEP['enabled']:
            return

        self.scheduler.add_job(
            self.sweep_expired_sessions,
            trigger=IntervalTrigger(minutes=SecurityConfig.SESSION_SWEEP['interval_minutes']),
            id='sweep_expired_sessions',
            name='Sweep Expired Sessions',
            replace_existing=True
        )
        self.scheduler.start()
        self.is_running = True
        logger.info("Session sweeper started successfully")

    def stop(self):
        """Stop the scheduler"""
        if self.is_running:
            self.scheduler.shutdown()
            self.is_running = False
            logger.info("Session sweeper stopped")

    def sweep_expired_sessions(self) -> int:
        """Delete expired sessions, returns how many were removed.

        Runs in the scheduler's thread pool executor, off the event loop.
        """
        db = self.session_factory()
        try:
            count = purge_expired_sessions(db)
            logger.info(f"Removed {count} expired sessions")
            return count
        except Exception as e:
            db.rollback()
            logger.error(f"Error sweeping expired sessions: {e}")
            return 0
        finally:
            db.close()

    def get_status(self) -> Dict[str, Any]:
        """Get scheduler status and job information"""
        if not self.is_running:
            return {"status": "stopped", "jobs": []}

        jobs = []
        for job in self.scheduler.get_jobs():
            jobs.append({
                "id": job.id,
                "name": job.name,
                "next_run_time": job.next_run_time.isoformat() if job.next_run_time else None,
                "trigger": str(job.trigger)
            })

        return {
            "status": "running",
            "jobs": jobs
        }


# Global sweeper instance
session_sweeper = SessionSweeper()
