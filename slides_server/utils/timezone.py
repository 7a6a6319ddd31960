from datetime import datetime
from datetime import timezone as dt_timezone


class TimeZone:
    def __init__(self, tz: dt_timezone = dt_timezone.utc) -> None:
        self.tz_info = tz

    def now(self) -> datetime:
        """Current time in the configured timezone"""
        return datetime.now(self.tz_info)

    def now_millis(self) -> int:
        """Current time as milliseconds since the epoch"""
        return int(self.now().timestamp() * 1000)

    def to_str(self, dt: datetime, format_str: str = '%Y-%m-%d %H:%M:%S') -> str:
        return dt.strftime(format_str)

    def aware(self, dt: datetime) -> datetime:
        """Attach the configured timezone to naive values read back from SQLite"""
        if dt.tzinfo is None:
            return dt.replace(tzinfo=self.tz_info)
        return dt


timezone = TimeZone()
