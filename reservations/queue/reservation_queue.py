"""
Scheduled Job Queue Module

This module provides the ScheduledJobQueue class for managing deferred booking
requests. Every mutation writes the full job list back to the persistent store
so jobs survive a process restart.
"""

import logging
import uuid
from typing import Any, Dict, List, Optional

from automation.availability.datetime_helpers import parse_instant
from infrastructure.constants import STORE_KEYS, Resource
from infrastructure.store import KeyValueStore
from reservations.models import ScheduledJob


class ScheduledJobQueue:
    """
    Manages the storage, retrieval and removal of scheduled booking jobs.

    Attributes:
        store (KeyValueStore): Backing store for the job list
        key (str): Store slot holding the jobs
        jobs (List[ScheduledJob]): In-memory job list, most recent first
        logger (logging.Logger): Logger instance for this class
    """

    def __init__(self, store: KeyValueStore, *, key: str = STORE_KEYS['jobs']):
        """
        Initialize the ScheduledJobQueue.

        Args:
            store: Key-value store holding the job list.
            key: Store slot name. Defaults to ``app_scheduled_jobs``.
        """
        self.logger = logging.getLogger('ScheduledJobQueue')
        self.store = store
        self.key = key
        self.jobs: List[ScheduledJob] = []
        repaired = self._load_queue()
        if repaired:
            self.logger.warning(
                "Dropped %s stored jobs that could not be read", repaired
            )
            self._save_queue()
        self.logger.info(f"""SCHEDULED JOB QUEUE INITIALIZED
        Store slot: {self.key}
        Existing jobs: {len(self.jobs)}
        """)

    def create(self, resource: Resource, desired_start: Any, fire_at: Any) -> str:
        """
        Add a new scheduled job to the queue.

        Args:
            resource: Resource to book (enum or its value).
            desired_start: Instant of the slot to book.
            fire_at: Instant at which the booking attempt should run.

        Returns:
            str: Unique identifier assigned to the new job
        """
        job = ScheduledJob(
            id=self._new_id(),
            resource=Resource.parse(resource),
            desired_start=parse_instant(desired_start),
            fire_at=parse_instant(fire_at),
        )
        self.jobs.insert(0, job)
        self._save_queue()

        self.logger.info(f"""SCHEDULED JOB ADDED
        Job ID: {job.id}
        Resource: {job.resource.value}
        Desired start: {job.desired_start.isoformat()}
        Fires at: {job.fire_at.isoformat()}
        Total queue size: {len(self.jobs)}
        """)
        return job.id

    def list(self) -> List[ScheduledJob]:
        """Return a snapshot of the queued jobs, most recent first."""
        return list(self.jobs)

    def get(self, job_id: str) -> Optional[ScheduledJob]:
        """
        Retrieve a single job by its identifier.

        Args:
            job_id: Unique job identifier

        Returns:
            ScheduledJob if queued, None otherwise
        """
        for job in self.jobs:
            if job.id == job_id:
                return job
        return None

    def remove(self, job_id: str) -> bool:
        """
        Remove a job from the queue by its identifier.

        Removing an unknown identifier is a no-op.

        Args:
            job_id: Unique job identifier

        Returns:
            bool: True if a job was removed, False if it was not queued
        """
        for i, job in enumerate(self.jobs):
            if job.id == job_id:
                self.jobs.pop(i)
                self._save_queue()
                self.logger.info(f"Removed scheduled job {job_id} ({job.resource.value})")
                return True

        self.logger.debug(f"Scheduled job {job_id} not queued; nothing to remove")
        return False

    def _new_id(self) -> str:
        existing = {job.id for job in self.jobs}
        while True:
            candidate = uuid.uuid4().hex
            if candidate not in existing:
                return candidate

    def _save_queue(self) -> None:
        """Write the current job list to the store."""
        self.store.set(self.key, [job.to_storage() for job in self.jobs])

    def _load_queue(self) -> int:
        """
        Load jobs from the store.

        Returns:
            int: Number of stored entries that were dropped as unreadable
        """
        payload = self.store.get(self.key, [])
        if not isinstance(payload, list):
            self.logger.warning(
                "Invalid queue format in slot %s; expected list, received %s",
                self.key,
                type(payload).__name__,
            )
            return 1

        dropped = 0
        seen: Dict[str, ScheduledJob] = {}
        for entry in payload:
            try:
                job = ScheduledJob.from_storage(entry)
            except ValueError as exc:
                self.logger.warning("Skipping stored job: %s", exc)
                dropped += 1
                continue
            if job.id in seen:
                self.logger.warning("Skipping duplicate stored job %s", job.id)
                dropped += 1
                continue
            seen[job.id] = job
            self.jobs.append(job)
        return dropped
