import logging
from typing import Dict, Iterable, List, Optional, Tuple

from models.schema import (
    ComplianceSummary,
    CostAnalysis,
    CostBreakdown,
    DailyCost,
    Employee,
    OvertimeRule,
    PayrollReport,
    Shift,
    WeeklyStats,
)
from utils.helper import (
    DAYS_IN_WEEK,
    aggregate_daily_hours,
    build_roster_index,
    group_daily_hours,
    known_shifts,
    timed_shifts,
)

WEEKLY_OVERTIME_THRESHOLD = 40
DAILY_OVERTIME_THRESHOLD = 8
OVERTIME_MULTIPLIER = 1.5
DOUBLE_TIME_MULTIPLIER = 2.0
SUNDAY_INDEX = 6
DAYS_OF_WEEK = ["Mon", "Tue", "Wed", "Thu", "Fri", "Sat", "Sun"]
DEFAULT_WEEKLY_BUDGET = 3500


def _weekly_split(weekly_hours: float, hourly_rate: float) -> Dict:
    regular = min(weekly_hours, WEEKLY_OVERTIME_THRESHOLD)
    overtime = max(0, weekly_hours - WEEKLY_OVERTIME_THRESHOLD)
    return {
        "regular_hours": regular,
        "overtime_hours": overtime,
        "total_cost": regular * hourly_rate + overtime * hourly_rate * OVERTIME_MULTIPLIER,
    }


def evaluate_overtime(daily_hours: Dict[int, float], hourly_rate: float, rule: Optional[OvertimeRule]) -> Dict:
    """Split one employee's week into regular/overtime hours and price it.

    ``daily_hours`` maps day index (Monday=0 .. Sunday=6) to scheduled hours.

    STANDARD pays 1.5x past 40 weekly hours. CALIFORNIA pays 1.5x past 8 hours
    on each day as it goes, then adds a 0.5x top-up for straight hours past 40
    in the week (base rate was already paid on those). SUNDAY_DOUBLE pays every
    Sunday hour at 2x outside the weekly bucket and treats the other days as
    STANDARD. Anything else is STANDARD.
    """
    days = [daily_hours.get(day, 0) for day in range(DAYS_IN_WEEK)]

    if rule == OvertimeRule.CALIFORNIA:
        straight_hours = 0
        overtime_hours = 0
        total_cost = 0.0
        for hours in days:
            straight = min(hours, DAILY_OVERTIME_THRESHOLD)
            daily_overtime = max(0, hours - DAILY_OVERTIME_THRESHOLD)
            straight_hours += straight
            overtime_hours += daily_overtime
            total_cost += straight * hourly_rate
            total_cost += daily_overtime * hourly_rate * OVERTIME_MULTIPLIER

        weekly_excess = max(0, straight_hours - WEEKLY_OVERTIME_THRESHOLD)
        if weekly_excess > 0:
            total_cost += weekly_excess * hourly_rate * (OVERTIME_MULTIPLIER - 1)
            overtime_hours += weekly_excess
        return {
            "regular_hours": straight_hours - weekly_excess,
            "overtime_hours": overtime_hours,
            "total_cost": total_cost,
        }

    if rule == OvertimeRule.SUNDAY_DOUBLE:
        sunday_hours = days[SUNDAY_INDEX]
        weekday_hours = 0
        for day, hours in enumerate(days):
            if day != SUNDAY_INDEX:
                weekday_hours += hours
        result = _weekly_split(weekday_hours, hourly_rate)
        result["overtime_hours"] += sunday_hours
        result["total_cost"] += sunday_hours * hourly_rate * DOUBLE_TIME_MULTIPLIER
        return result

    return _weekly_split(sum(days), hourly_rate)


def calculate_cost_breakdown(employee: Employee, shifts: Iterable[Shift], roster: Dict[str, Employee]) -> CostBreakdown:
    daily_hours = aggregate_daily_hours(employee.id, shifts, roster)
    result = evaluate_overtime(daily_hours, employee.hourly_rate, employee.overtime_rule)
    return CostBreakdown(employee_id=employee.id, **result)


def _price_roster(roster: Dict[str, Employee], kept: List[Tuple[Shift, int]]) -> List[CostBreakdown]:
    daily_hours = group_daily_hours(kept, roster)
    breakdowns = []
    for emp in roster.values():
        result = evaluate_overtime(daily_hours[emp.id], emp.hourly_rate, emp.overtime_rule)
        breakdowns.append(CostBreakdown(employee_id=emp.id, **result))
    return breakdowns


def _daily_costs(roster: Dict[str, Employee], kept: List[Tuple[Shift, int]]) -> List[DailyCost]:
    costs = [0.0] * DAYS_IN_WEEK
    for shift, hours in kept:
        costs[shift.day_index] += hours * roster[shift.employee_id].hourly_rate
    return [DailyCost(day_index=day, day=DAYS_OF_WEEK[day], cost=cost) for day, cost in enumerate(costs)]


def calculate_cost_breakdowns(employees: List[Employee], shifts: List[Shift]) -> List[CostBreakdown]:
    roster = build_roster_index(employees)
    return _price_roster(roster, known_shifts(timed_shifts(shifts), roster))


def summarize_breakdowns(breakdowns: List[CostBreakdown], budget: float) -> WeeklyStats:
    total_cost = sum(b.total_cost for b in breakdowns)
    total_hours = sum(b.regular_hours + b.overtime_hours for b in breakdowns)
    overtime_hours = sum(b.overtime_hours for b in breakdowns)
    return WeeklyStats(
        total_cost=total_cost,
        total_hours=total_hours,
        overtime_hours=overtime_hours,
        budget=budget,
        over_budget=total_cost > budget,
    )


def calculate_weekly_stats(employees: List[Employee], shifts: List[Shift], budget: float = DEFAULT_WEEKLY_BUDGET) -> WeeklyStats:
    return summarize_breakdowns(calculate_cost_breakdowns(employees, shifts), budget)


def project_daily_costs(employees: List[Employee], shifts: List[Shift]) -> List[DailyCost]:
    """Flat-rate cost per weekday for charting; overtime premiums are not applied."""
    roster = build_roster_index(employees)
    return _daily_costs(roster, known_shifts(timed_shifts(shifts), roster))


def _report(roster: Dict[str, Employee], kept: List[Tuple[Shift, int]], budget: Optional[float]) -> PayrollReport:
    if budget is None:
        budget = DEFAULT_WEEKLY_BUDGET
    breakdowns = _price_roster(roster, kept)
    return PayrollReport(
        stats=summarize_breakdowns(breakdowns, budget),
        breakdowns=breakdowns,
        daily_costs=_daily_costs(roster, kept),
    )


def build_payroll_report(employees: List[Employee], shifts: List[Shift], budget: Optional[float] = None) -> PayrollReport:
    roster = build_roster_index(employees)
    return _report(roster, known_shifts(timed_shifts(shifts), roster), budget)


def _cost_analysis(report: PayrollReport, roster: Dict[str, Employee]) -> CostAnalysis:
    regular_cost = 0.0
    for breakdown in report.breakdowns:
        employee = roster.get(breakdown.employee_id)
        if employee is not None:
            regular_cost += breakdown.regular_hours * employee.hourly_rate
    total_cost = report.stats.total_cost
    return CostAnalysis(
        estimated_total_cost=total_cost,
        budget_variance=total_cost - report.stats.budget,
        regular_cost=regular_cost,
        overtime_cost=total_cost - regular_cost,
    )


def calculate_cost_analysis(report: PayrollReport, employees: List[Employee]) -> CostAnalysis:
    return _cost_analysis(report, build_roster_index(employees))


def build_compliance_summary(employees: List[Employee], shifts: List[Shift], budget: Optional[float] = None) -> ComplianceSummary:
    """Assemble the schedule digest handed to the compliance advisor."""
    roster = build_roster_index(employees)
    timed = timed_shifts(shifts)
    report = _report(roster, known_shifts(timed, roster), budget)

    employee_lines = [
        f"{emp.name or emp.id}: ${emp.hourly_rate:g}/hr, {emp.overtime_rule.value}" for emp in roster.values()
    ]
    shift_lines = []
    for shift, hours in timed:
        employee = roster.get(shift.employee_id)
        day = DAYS_OF_WEEK[shift.day_index] if 0 <= shift.day_index < DAYS_IN_WEEK else f"Day {shift.day_index}"
        name = (employee.name or employee.id) if employee else "Unknown"
        shift_lines.append(f"{day} {shift.start_time}-{shift.end_time}: {name} ({hours}h, {shift.role or 'Staff'})")

    hours_by_employee = {}
    over_max_hours = []
    for breakdown in report.breakdowns:
        scheduled = breakdown.regular_hours + breakdown.overtime_hours
        hours_by_employee[breakdown.employee_id] = scheduled
        limit = roster[breakdown.employee_id].max_hours_per_week
        if limit is not None and scheduled > limit:
            over_max_hours.append(breakdown.employee_id)

    if report.stats.over_budget:
        logging.info(f"Schedule is over budget: {report.stats.total_cost:.2f} > {report.stats.budget:.2f}")

    return ComplianceSummary(
        employees=employee_lines,
        shifts=shift_lines,
        budget=report.stats.budget,
        cost_analysis=_cost_analysis(report, roster),
        over_max_hours=over_max_hours,
        hours_by_employee=hours_by_employee,
    )
