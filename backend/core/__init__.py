from .calendar import CalendarDay, CalendarMonth, parse_calendar
from .clock import Clock, SystemClock, FixedClock
from .parsers import parse_calendar_date, parse_month_label, parse_full_date
from .semester import SemesterManager, semester_id, current_semester_id
