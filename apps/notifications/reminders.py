"""
Deadline reminder pipeline.

One run:
1. Scan: open, not-yet-reminded assignments due during tomorrow's local
   calendar day (midnight to midnight in TIME_ZONE)
2. Filter: skip assignments created less than REMINDER_MIN_LEAD_HOURS
   before their deadline
3. Notify: email the owner
4. Mark: flag the assignment as reminded, only after a successful send

A failure for one candidate never stops the others. A scan failure ends
the run with completed=False and nothing marked.

The ReminderService instance lives on the notifications AppConfig:
    service = get_reminder_service()
    summary = service.run()
"""

import logging
from dataclasses import asdict, dataclass, field
from datetime import datetime, timedelta

from django.apps import apps
from django.db import DatabaseError
from django.utils import timezone

from apps.assignments.models import Assignment, calendar_day_window
from apps.core.http import isoformat

logger = logging.getLogger(__name__)

DEFAULT_MIN_LEAD = timedelta(hours=24)


class ReminderScanError(Exception):
    """The candidate query failed."""


class ReminderMarkError(Exception):
    """A reminder was delivered but could not be recorded."""


# =============================================================================
# Data
# =============================================================================

@dataclass(frozen=True)
class ReminderCandidate:
    assignment_id: int
    title: str
    deadline: datetime
    created_at: datetime
    user_email: str


@dataclass
class ReminderRunSummary:
    """
    Outcome of one run.

    scanned = eligible + skipped; every eligible candidate ends up in
    exactly one of sent or failed. mark_failed is a subset of sent:
    delivered, but the flag could not be written.
    """

    run_at: datetime
    scanned: int = 0
    eligible: int = 0
    skipped: int = 0
    sent: int = 0
    failed: int = 0
    mark_failed: int = 0
    completed: bool = True
    errors: list = field(default_factory=list)

    def as_dict(self):
        data = asdict(self)
        data['run_at'] = isoformat(self.run_at)
        return data

    def __str__(self):
        return (
            f'scanned={self.scanned} eligible={self.eligible} '
            f'skipped={self.skipped} sent={self.sent} failed={self.failed} '
            f'mark_failed={self.mark_failed} completed={self.completed}'
        )


# =============================================================================
# Scanner / eligibility / marker
# =============================================================================

def reminder_window(now):
    """[start, end) of the local calendar day after `now`."""
    return calendar_day_window(now, days_ahead=1)


def is_eligible(candidate, min_lead=DEFAULT_MIN_LEAD):
    """
    An assignment qualifies only if it existed at least `min_lead` before
    its deadline. Exactly `min_lead` qualifies.
    """
    return candidate.deadline - candidate.created_at >= min_lead


class AssignmentReminderStore:
    """Reads candidates from and writes reminder flags to the Assignment table."""

    def scan_due_tomorrow(self, now):
        """
        Raises:
            ReminderScanError: On any database error
        """
        start, end = reminder_window(now)

        try:
            assignments = list(
                Assignment.objects.awaiting_reminder()
                .due_between(start, end)
                .select_related('user')
                .order_by('deadline', 'pk')
            )
        except DatabaseError as e:
            raise ReminderScanError(f'Reminder scan failed: {e}') from e

        return [
            ReminderCandidate(
                assignment_id=a.pk,
                title=a.title,
                deadline=a.deadline,
                created_at=a.created_at,
                user_email=a.user.email,
            )
            for a in assignments
        ]

    def mark_reminder_sent(self, assignment_id, sent_at):
        """
        Flag an assignment as reminded.

        Returns:
            True if the flag is set (now or by an earlier run),
            False if the assignment no longer exists

        Raises:
            ReminderMarkError: On any database error
        """
        try:
            updated = Assignment.objects.mark_reminder_sent(assignment_id, sent_at)
            if updated:
                return True
            return Assignment.objects.filter(pk=assignment_id, reminder_sent=True).exists()
        except DatabaseError as e:
            raise ReminderMarkError(
                f'Reminder sent but not recorded for assignment {assignment_id}: {e}'
            ) from e


# =============================================================================
# Orchestration
# =============================================================================

class ReminderService:
    """
    Runs the scan -> filter -> notify -> mark pipeline.

    Collaborators:
        store: scan_due_tomorrow(now), mark_reminder_sent(id, sent_at)
        notifier: send_deadline_reminder(to, title, deadline) -> bool
        clock: callable returning the current aware datetime
    """

    def __init__(self, store, notifier, clock=timezone.now, min_lead=DEFAULT_MIN_LEAD):
        self.store = store
        self.notifier = notifier
        self.clock = clock
        self.min_lead = min_lead

    def run(self, now=None):
        now = now or self.clock()
        summary = ReminderRunSummary(run_at=now)

        start, end = reminder_window(now)
        logger.info(f'Reminder run started for deadlines in [{start.isoformat()}, {end.isoformat()})')

        try:
            candidates = self.store.scan_due_tomorrow(now)
        except ReminderScanError as e:
            logger.error(f'Reminder run aborted: {e}')
            summary.completed = False
            summary.errors.append(str(e))
            return summary

        summary.scanned = len(candidates)

        for candidate in candidates:
            try:
                self._process(candidate, now, summary)
            except Exception as e:
                logger.exception(
                    f'Unexpected error processing reminder for assignment {candidate.assignment_id}'
                )
                summary.failed += 1
                summary.errors.append(f'Assignment {candidate.assignment_id}: {e}')

        logger.info(f'Reminder run finished: {summary}')
        return summary

    def _process(self, candidate, now, summary):
        if not is_eligible(candidate, self.min_lead):
            summary.skipped += 1
            logger.debug(
                f'Skipping assignment {candidate.assignment_id}: created less than '
                f'{self.min_lead} before its deadline'
            )
            return

        summary.eligible += 1

        delivered = self.notifier.send_deadline_reminder(
            candidate.user_email, candidate.title, candidate.deadline,
        )
        if not delivered:
            summary.failed += 1
            logger.warning(f'Reminder for assignment {candidate.assignment_id} was not delivered')
            return

        summary.sent += 1

        try:
            marked = self.store.mark_reminder_sent(candidate.assignment_id, now)
        except ReminderMarkError as e:
            summary.mark_failed += 1
            summary.errors.append(str(e))
            logger.error(str(e))
            return

        if marked:
            logger.info(f'Reminder sent for assignment {candidate.assignment_id} to {candidate.user_email}')
        else:
            logger.warning(
                f'Assignment {candidate.assignment_id} was deleted before its reminder could be recorded'
            )

    def run_scheduled_check(self):
        """Entry point for the daily schedule."""
        summary = self.run()
        if summary.completed:
            logger.info(f'Scheduled reminder check completed: {summary}')
        else:
            logger.error(f'Scheduled reminder check did not complete: {summary}')

    def run_manual_check(self):
        """Entry point for the HTTP trigger and the management command."""
        summary = self.run()
        return {
            'completed': summary.completed,
            'summary': summary.as_dict(),
        }


def get_reminder_service():
    return apps.get_app_config('notifications').reminder_service
