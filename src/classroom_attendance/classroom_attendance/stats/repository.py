from __future__ import annotations

from typing import Protocol

from .model import ClassCounts


class StatsRepository(Protocol):
    def get_class_counts(self, class_id: int) -> ClassCounts:
        """Lectures, enrollments, present records and all records of one class.

        Records are counted through their lecture, so only lectures of the class count.
        """

        raise NotImplementedError
