from pydantic import BaseModel


class PerformanceStatus(BaseModel):
    status: str
    text_color: str


class StatusColor(BaseModel):
    color: str
    status: str
    text_color: str
    bg_color: str


class BudgetSummary(BaseModel):
    total: float = 0.0
    spent: float = 0.0
    remaining: float = 0.0


class CostControlSummary(BaseModel):
    total_budget: float = 0.0
    total_actual: float = 0.0
    total_earned_value: float = 0.0
    cost_variance: float = 0.0
    cost_performance_index: float = 1.0


class BarPosition(BaseModel):
    left: float
    width: float
