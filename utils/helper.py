import logging
from typing import Any, Dict, Iterable, List, Optional, Tuple

from models.schema import Employee, Shift

DAYS_IN_WEEK = 7

# Seed week used by the demo endpoint and the tests
sample_employees = [
    {"id": "1", "name": "Sarah Chen", "role": "Manager", "hourly_rate": 28, "max_hours_per_week": 45},
    {"id": "2", "name": "Mike Ross", "role": "Cook", "hourly_rate": 22, "max_hours_per_week": 40},
    {"id": "3", "name": "Jessica Day", "role": "Server", "hourly_rate": 15, "max_hours_per_week": 35},
    {"id": "4", "name": "Nick Miller", "role": "Bartender", "hourly_rate": 18, "max_hours_per_week": 40},
    {"id": "5", "name": "Winston B.", "role": "Server", "hourly_rate": 15, "max_hours_per_week": 30},
]

sample_shifts = [
    {"id": "s1", "employee_id": "1", "day_index": 0, "start_time": "09", "end_time": "17", "role": "Manager"},
    {"id": "s2", "employee_id": "2", "day_index": 0, "start_time": "16", "end_time": "23", "role": "Cook"},
    {"id": "s3", "employee_id": "3", "day_index": 0, "start_time": "17", "end_time": "23", "role": "Server"},
    {"id": "s4", "employee_id": "1", "day_index": 1, "start_time": "09", "end_time": "17", "role": "Manager"},
    {"id": "s5", "employee_id": "4", "day_index": 1, "start_time": "16", "end_time": "00", "role": "Bartender"},
]

SAMPLE_WEEKLY_BUDGET = 3500


def load_sample_week() -> Dict:
    return {
        "employees": [Employee(**emp) for emp in sample_employees],
        "shifts": [Shift(**shift) for shift in sample_shifts],
        "budget": SAMPLE_WEEKLY_BUDGET,
    }


def parse_hour(value: Any) -> Optional[int]:
    """Return the hour of day in [0, 23], or None when it cannot be read.

    Accepts ints and "HH" / "HH:MM" strings; minutes are ignored.
    """
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, int):
        hour = value
    else:
        label = str(value).strip()
        if ":" in label:
            label = label.split(":", 1)[0]
        try:
            hour = int(label)
        except ValueError:
            return None
    if hour < 0 or hour > 23:
        return None
    return hour


def resolve_shift_duration(start_time, end_time) -> int:
    start = parse_hour(start_time)
    end = parse_hour(end_time)
    if start is None or end is None:
        logging.warning(f"Malformed shift time {start_time!r}-{end_time!r}, counting 0 hours")
        return 0
    if end == 0:
        end = 24
    return max(0, end - start)


def build_roster_index(employees: Iterable[Employee]) -> Dict[str, Employee]:
    """Index the roster by id; the first entry wins when an id repeats."""
    roster = {}
    for emp in employees:
        if emp.id in roster:
            logging.warning(f"Duplicate employee_id {emp.id} in roster, keeping the first entry")
            continue
        roster[emp.id] = emp
    return roster


def get_employee_by_id(roster: Dict[str, Employee], employee_id: str) -> Optional[Employee]:
    employee = roster.get(employee_id)
    if employee is None:
        logging.warning(f"Shift references unknown employee_id: {employee_id}")
    return employee


def timed_shifts(shifts: Iterable[Shift]) -> List[Tuple[Shift, int]]:
    return [(shift, resolve_shift_duration(shift.start_time, shift.end_time)) for shift in shifts]


def known_shifts(timed: Iterable[Tuple[Shift, int]], roster: Dict[str, Employee]) -> List[Tuple[Shift, int]]:
    """Drop shifts whose employee is missing from the roster or whose day is out of range."""
    kept = []
    for shift, hours in timed:
        if get_employee_by_id(roster, shift.employee_id) is None:
            continue
        if not 0 <= shift.day_index < DAYS_IN_WEEK:
            logging.warning(f"Shift {shift.id} has day_index {shift.day_index} outside 0..6, dropped")
            continue
        kept.append((shift, hours))
    return kept


def _empty_week() -> Dict[int, float]:
    return {day: 0.0 for day in range(DAYS_IN_WEEK)}


def group_daily_hours(kept: Iterable[Tuple[Shift, int]], roster: Dict[str, Employee]) -> Dict[str, Dict[int, float]]:
    """Bucket already-filtered shifts by employee and weekday."""
    daily_hours = {employee_id: _empty_week() for employee_id in roster}
    for shift, hours in kept:
        daily_hours[shift.employee_id][shift.day_index] += hours
    return daily_hours


def aggregate_daily_hours(employee_id: str, shifts: Iterable[Shift], roster: Dict[str, Employee]) -> Dict[int, float]:
    if employee_id not in roster:
        return _empty_week()
    own = [shift for shift in shifts if shift.employee_id == employee_id]
    return group_daily_hours(known_shifts(timed_shifts(own), roster), roster)[employee_id]
