"""
Unit test fixtures
"""

import pytest
import sys
from pathlib import Path

# Add backend to path for imports
backend_dir = Path(__file__).parent.parent.parent
sys.path.insert(0, str(backend_dir))

from core.calendar import CalendarDay, CalendarMonth
from core.clock import FixedClock
from services.cache import MemoryStore


@pytest.fixture
def memory_store():
    """Fresh in-memory key-value store"""
    return MemoryStore()


@pytest.fixture
def may_14_clock():
    """Clock pinned to May 14, 2025, midday"""
    return FixedClock("2025-05-14T12:00:00")


@pytest.fixture
def may_calendar():
    """Calendar with 'Last Working Day' on May 17, 2025"""
    return [
        CalendarMonth(month="May'25", days=[
            CalendarDay(date="01-05-2025", day_order="1", day="Thursday"),
            CalendarDay(date="17-05-2025", day_order="2", day="Saturday", event="Last Working Day"),
        ])
    ]


@pytest.fixture
def sample_marks():
    """Marks as sent by the academia fetch layer"""
    return [
        {
            'courseCode': 'CSE101',
            'courseName': 'Introduction to Computer Science',
            'courseType': 'Theory',
            'overall': {'scored': '82', 'total': '100'},
            'testPerformance': [
                {'test': 'Continuous', 'marks': {'scored': '40', 'total': '50'}},
                {'test': 'Term', 'marks': {'scored': '42', 'total': '50'}}
            ]
        },
        {
            'courseCode': 'MAT202',
            'courseName': 'Advanced Mathematics',
            'courseType': 'Theory',
            'overall': {'scored': '75', 'total': '100'},
            'testPerformance': []
        }
    ]


@pytest.fixture
def sample_courses():
    return [
        {'code': 'CSE101', 'title': 'Introduction to Computer Science', 'credit': '4', 'slot': 'A'},
        {'code': 'MAT202', 'title': 'Advanced Mathematics', 'credit': '4', 'slot': 'B'}
    ]


@pytest.fixture
def sample_attendance():
    return [
        {
            'courseCode': 'CSE101',
            'courseTitle': 'Introduction to Computer Science',
            'attendancePercentage': '92',
            'hoursAbsent': '4',
            'hoursConducted': '50'
        }
    ]
