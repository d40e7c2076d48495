# students/signals.py
import logging

from django.dispatch import Signal, receiver

logger = logging.getLogger(__name__)


# Sent after an allocation run commits.
# kwargs: year, grade, assignments [(student_id, class_id), ...]
students_allocated = Signal()


# ============================================================
# ALLOCATION AUDIT
# ============================================================

@receiver(students_allocated)
def log_students_allocated(sender, year, grade, assignments, **kwargs):
    """Record committed allocations. Gradebook and audit consumers hook in here too."""
    if not assignments:
        return

    class_ids = {class_id for _, class_id in assignments}
    logger.info(
        f"Allocation committed for grade {grade} ({year}): "
        f"{len(assignments)} students across {len(class_ids)} classes"
    )
