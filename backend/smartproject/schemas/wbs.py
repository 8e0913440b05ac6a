import datetime as dt
from enum import Enum

from pydantic import BaseModel, ConfigDict, Field, model_validator
from pydantic.alias_generators import to_camel


class WbsType(str, Enum):
    summary = "Summary"
    work_package = "WorkPackage"
    activity = "Activity"


class DependencyType(str, Enum):
    finish_to_start = "FS"
    start_to_start = "SS"
    finish_to_finish = "FF"
    start_to_finish = "SF"


class _CamelModel(BaseModel):
    # REST payloads arrive in camelCase; python code uses snake_case
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class WbsItem(_CamelModel):
    id: int
    parent_id: int | None = None
    project_id: int | None = None
    name: str | None = None
    level: int = Field(default=1, ge=1)
    code: str = ""
    type: WbsType = WbsType.activity

    start_date: dt.date | None = None
    end_date: dt.date | None = None
    duration: int | None = Field(default=None, ge=0)  # days

    budgeted_cost: float = Field(default=0.0, ge=0)
    actual_cost: float = Field(default=0.0, ge=0)
    percent_complete: float = Field(default=0.0, ge=0, le=100)

    @model_validator(mode="after")
    def _check_dates(self):
        if self.start_date and self.end_date and self.end_date < self.start_date:
            raise ValueError("end_date must not be earlier than start_date")
        return self

    @property
    def is_budgetable(self) -> bool:
        return self.type in (WbsType.summary, WbsType.work_package)


class WbsNode(WbsItem):
    children: list["WbsNode"] = Field(default_factory=list)


class Dependency(_CamelModel):
    id: int | None = None
    predecessor_id: int
    successor_id: int
    type: DependencyType = DependencyType.finish_to_start
    lag: int = 0  # days, may be negative

    @model_validator(mode="after")
    def _check_not_self(self):
        if self.predecessor_id == self.successor_id:
            raise ValueError("predecessor_id and successor_id must differ")
        return self
