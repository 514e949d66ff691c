import logging

from fastapi import BackgroundTasks, FastAPI

from models.schema import ComplianceSummary, PayrollReport, PayrollRequest, WeeklyStats
from payroll import build_compliance_summary, build_payroll_report
from utils.helper import load_sample_week

app = FastAPI()


@app.post("/payroll/weekly", response_model=PayrollReport)
def weekly_payroll(request: PayrollRequest, background_tasks: BackgroundTasks):
    report = build_payroll_report(request.employees, request.shifts, request.budget)
    background_tasks.add_task(log_budget_status, report.stats)
    return report


@app.post("/payroll/compliance-summary", response_model=ComplianceSummary)
def compliance_summary(request: PayrollRequest):
    return build_compliance_summary(request.employees, request.shifts, request.budget)


@app.get("/payroll/sample", response_model=PayrollReport)
def sample_payroll():
    week = load_sample_week()
    return build_payroll_report(week["employees"], week["shifts"], week["budget"])


def log_budget_status(stats: WeeklyStats):
    if stats.over_budget:
        logging.warning(f"Weekly labor cost {stats.total_cost:.2f} is over budget {stats.budget:.2f}")
    else:
        logging.info(f"Weekly labor cost {stats.total_cost:.2f} within budget {stats.budget:.2f}")
