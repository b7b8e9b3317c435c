"""
DateTime Handler module for consistent date and time handling throughout the application.
"""
from datetime import datetime
from typing import Optional, Tuple


class DateTimeHandler:
    """
    Centralized service for handling dates and times consistently throughout the application.
    """

    @classmethod
    def get_current_datetime(cls) -> datetime:
        """
        Get the current UTC datetime.

        Returns:
            Current UTC datetime (naive, as stored by MongoDB)
        """
        return datetime.utcnow()

    @classmethod
    def get_month_boundaries(cls, reference: Optional[datetime] = None) -> Tuple[datetime, datetime]:
        """
        Get the first instant of the month containing ``reference`` and of the following month.

        Args:
            reference: Datetime within the desired month, defaults to now

        Returns:
            Tuple of (month_start, next_month_start)
        """
        if reference is None:
            reference = cls.get_current_datetime()

        month_start = reference.replace(day=1, hour=0, minute=0, second=0, microsecond=0)
        if month_start.month == 12:
            next_month = month_start.replace(year=month_start.year + 1, month=1)
        else:
            next_month = month_start.replace(month=month_start.month + 1)

        return month_start, next_month
