"""
Assignment models.

Models:
- Assignment: a student's assignment with deadline, status workflow and
  deadline-reminder tracking
"""

from datetime import datetime, time, timedelta

from django.conf import settings
from django.db import models
from django.db.models import Q
from django.utils import timezone


def calendar_day_window(now, days_ahead=1):
    """
    Return the half-open [start, end) window covering one local calendar day.

    start is midnight (in the current time zone) of the day `days_ahead`
    days after `now`'s local date; end is 24 hours later.

    Example (TIME_ZONE=UTC):
        now = 2025-06-10 15:00 -> [2025-06-11 00:00, 2025-06-12 00:00)
    """
    local_now = timezone.localtime(now)
    target_date = local_now.date() + timedelta(days=days_ahead)
    start = timezone.make_aware(datetime.combine(target_date, time.min))
    return start, start + timedelta(hours=24)


class AssignmentQuerySet(models.QuerySet):
    """Typed queries used by the API and the reminder pipeline."""

    def for_user(self, user):
        return self.filter(user=user)

    def open(self):
        """Assignments that are not completed."""
        return self.exclude(status=Assignment.Status.COMPLETED)

    def due_between(self, start, end):
        """Deadline in the half-open interval [start, end)."""
        return self.filter(deadline__gte=start, deadline__lt=end)

    def due_on_day(self, now, days_ahead=0):
        start, end = calendar_day_window(now, days_ahead)
        return self.due_between(start, end)

    def overdue(self, now=None):
        now = now or timezone.now()
        return self.open().filter(deadline__lt=now)

    def awaiting_reminder(self):
        """Not yet reminded and not completed."""
        return self.open().filter(reminder_sent=False)

    def mark_reminder_sent(self, pk, sent_at):
        """
        Conditionally flag one assignment as reminded.

        Only rows still at reminder_sent=False are touched, so a repeated
        call keeps the original reminder_sent_at. Returns the number of rows
        updated (0 or 1).
        """
        return self.filter(pk=pk, reminder_sent=False).update(
            reminder_sent=True,
            reminder_sent_at=sent_at,
        )


class Assignment(models.Model):
    """
    A student's assignment.

    Status workflow: pending -> in-progress -> completed (free to move back).

    Reminder tracking:
    - reminder_sent / reminder_sent_at are written only by the deadline
      reminder pipeline, never by the API
    - reminder_sent_at is set if and only if reminder_sent is True
      (enforced by a check constraint)
    """

    class Status(models.TextChoices):
        PENDING = 'pending', 'Pending'
        IN_PROGRESS = 'in-progress', 'In Progress'
        COMPLETED = 'completed', 'Completed'

    user = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.CASCADE,
        related_name='assignments',
    )
    title = models.CharField(max_length=255)
    description = models.TextField(blank=True, default='')
    deadline = models.DateTimeField(db_index=True)
    status = models.CharField(
        max_length=15,
        choices=Status.choices,
        default=Status.PENDING,
        db_index=True,
    )

    # Timestamps
    created_at = models.DateTimeField(auto_now_add=True, db_index=True)
    updated_at = models.DateTimeField(auto_now=True)

    # Notification tracking
    reminder_sent = models.BooleanField(
        default=False,
        help_text='Day-before deadline reminder sent'
    )
    reminder_sent_at = models.DateTimeField(null=True, blank=True)

    objects = AssignmentQuerySet.as_manager()

    class Meta:
        verbose_name = 'assignment'
        verbose_name_plural = 'assignments'
        ordering = ['-created_at']
        indexes = [
            models.Index(fields=['user', 'status'], name='assignment_user_status_idx'),
            models.Index(fields=['deadline', 'reminder_sent'], name='assignment_deadline_rem_idx'),
        ]
        constraints = [
            models.CheckConstraint(
                condition=(
                    Q(reminder_sent=True, reminder_sent_at__isnull=False)
                    | Q(reminder_sent=False, reminder_sent_at__isnull=True)
                ),
                name='assignment_reminder_sent_at_consistent',
            ),
        ]

    def __str__(self):
        return f"{self.title} (due {self.deadline:%Y-%m-%d %H:%M})"

    @property
    def is_completed(self):
        return self.status == self.Status.COMPLETED

    @property
    def is_overdue(self):
        """Check if assignment is past deadline and not completed."""
        if self.is_completed:
            return False
        return timezone.now() > self.deadline
