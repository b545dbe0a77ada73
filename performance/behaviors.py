# performance/behaviors.py
"""
Behavior catalog: every score event names one of these, its points come from here.
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Optional


@dataclass(frozen=True)
class Behavior:
    type: str
    score: int
    description: str

    @property
    def category(self) -> str:
        return "addition" if self.score > 0 else "deduction"

    def as_dict(self) -> dict:
        return {
            "type": self.type,
            "score": self.score,
            "description": self.description,
            "category": self.category,
        }


DEDUCTIONS: tuple[Behavior, ...] = (
    Behavior("late", -2, "迟到"),
    Behavior("early_leave", -3, "早退"),
    Behavior("absent", -10, "旷工"),
    Behavior("phone_usage", -1, "上班看手机"),
    Behavior("work_slack", -5, "工作懈怠"),
    Behavior("rule_violation_minor", -5, "违反规定(轻微)"),
    Behavior("rule_violation_serious", -20, "违反规定(严重)"),
    Behavior("interview_record", -3, "约谈记录"),
)

ADDITIONS: tuple[Behavior, ...] = (
    Behavior("weekend_help", 5, "周末加班帮忙"),
    Behavior("cleaning", 3, "主动打扫卫生"),
    Behavior("moving_help", 3, "协助搬运物品"),
    Behavior("group_activity", 5, "积极参与集体活动"),
    Behavior("group_task", 8, "协助完成集体任务"),
    Behavior("suggestion", 10, "提出合理化建议"),
    Behavior("help_newcomer", 5, "帮助新员工"),
    Behavior("outstanding_work", 10, "工作表现突出"),
)

CATALOG: dict[str, Behavior] = {b.type: b for b in DEDUCTIONS + ADDITIONS}

BEHAVIOR_CHOICES = [(b.type, b.description) for b in DEDUCTIONS + ADDITIONS]


def get_behavior(behavior_type: str) -> Optional[Behavior]:
    return CATALOG.get(behavior_type)


def score_for(behavior_type: str) -> int:
    """Points of a behavior; 0 for anything outside the catalog."""
    behavior = CATALOG.get(behavior_type)
    return behavior.score if behavior else 0
