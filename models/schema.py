import logging
from enum import Enum
from typing import Any, Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel


class OvertimeRule(str, Enum):
    STANDARD = "STANDARD"
    CALIFORNIA = "CALIFORNIA"
    SUNDAY_DOUBLE = "SUNDAY_DOUBLE"


class CamelModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class Employee(CamelModel):
    id: str
    name: str = ""
    role: Optional[str] = None
    hourly_rate: float = 0.0
    overtime_rule: OvertimeRule = OvertimeRule.STANDARD
    max_hours_per_week: Optional[float] = None

    @field_validator("id", mode="before")
    @classmethod
    def _id_as_string(cls, value):
        return value if value is None else str(value)

    @field_validator("overtime_rule", mode="before")
    @classmethod
    def _fallback_to_standard(cls, value):
        if isinstance(value, OvertimeRule):
            return value
        try:
            return OvertimeRule(value)
        except ValueError:
            if value is not None:
                logging.warning(f"Unknown overtime rule {value!r}, using STANDARD")
            return OvertimeRule.STANDARD


class Shift(CamelModel):
    id: Optional[str] = None
    employee_id: str
    day_index: int
    start_time: Any = None
    end_time: Any = None
    role: Optional[str] = None

    @field_validator("id", "employee_id", mode="before")
    @classmethod
    def _id_as_string(cls, value):
        return value if value is None else str(value)


class CostBreakdown(CamelModel):
    employee_id: str
    regular_hours: float = 0.0
    overtime_hours: float = 0.0
    total_cost: float = 0.0


class WeeklyStats(CamelModel):
    total_cost: float
    total_hours: float
    overtime_hours: float
    budget: float
    over_budget: bool


class DailyCost(CamelModel):
    day_index: int
    day: str
    cost: float


class PayrollReport(CamelModel):
    stats: WeeklyStats
    breakdowns: List[CostBreakdown]
    daily_costs: List[DailyCost]


class CostAnalysis(CamelModel):
    estimated_total_cost: float
    budget_variance: float
    regular_cost: float
    overtime_cost: float


class ComplianceSummary(CamelModel):
    employees: List[str]
    shifts: List[str]
    budget: float
    cost_analysis: CostAnalysis
    over_max_hours: List[str] = Field(default_factory=list)
    hours_by_employee: Dict[str, float] = Field(default_factory=dict)

    def as_text(self) -> str:
        lines = ["SHIFTS:"]
        lines.extend(f"- {line}" for line in self.shifts)
        lines.append("")
        lines.append("EMPLOYEES:")
        lines.extend(f"- {line}" for line in self.employees)
        lines.append("")
        lines.append(f"BUDGET: ${self.budget:g}")
        lines.append(f"ESTIMATED COST: ${self.cost_analysis.estimated_total_cost:.2f}")
        lines.append(f"BUDGET VARIANCE: ${self.cost_analysis.budget_variance:.2f}")
        return "\n".join(lines)


class PayrollRequest(CamelModel):
    employees: List[Employee] = Field(default_factory=list)
    shifts: List[Shift] = Field(default_factory=list)
    budget: Optional[float] = None
