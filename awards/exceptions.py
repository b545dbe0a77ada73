# awards/exceptions.py
"""
Failures of annual award generation.
All are raised synchronously to the caller; nothing is retried.
"""
from __future__ import annotations


class AwardGenerationError(Exception):
    status = 400

    def __init__(self, message: str, year: int | None = None):
        super().__init__(message)
        self.message = message
        self.year = year

    def as_details(self) -> dict:
        return {}


class NoEligibleCandidates(AwardGenerationError):
    """Nobody is active and hired by year end, or everybody left has a negative score."""

    NO_EMPLOYEES = "no_employees"
    NO_QUALIFIED = "no_qualified"

    def __init__(self, year: int, reason: str = NO_EMPLOYEES):
        if reason == self.NO_QUALIFIED:
            message = f"{year}年度没有符合评优条件的员工（最终得分需≥0分）"
        else:
            message = f"{year}年度没有符合条件的员工"
        super().__init__(message, year)
        self.reason = reason

    def as_details(self) -> dict:
        return {"reason": self.reason}


class AlreadyGenerated(AwardGenerationError):
    """The year has awards and regeneration was not requested."""

    def __init__(self, year: int, existing_count: int):
        super().__init__(f"{year}年度评优已生成，如需重新生成请设置forceRegenerate为true", year)
        self.existing_count = existing_count

    def as_details(self) -> dict:
        return {"existingCount": self.existing_count}


class PersistenceFailure(AwardGenerationError):
    """
    Writing the new award set failed.
    previous_lost tells whether the old set is gone; it is False when the
    replacement transaction rolled back.
    """
    status = 500

    def __init__(self, year: int, previous_lost: bool = False, cause: Exception | None = None):
        super().__init__(f"{year}年度评优保存失败，原有评优记录{'已丢失' if previous_lost else '未受影响'}", year)
        self.previous_lost = previous_lost
        self.cause = cause

    def as_details(self) -> dict:
        return {"previousLost": self.previous_lost}


class DuplicateCandidate(AwardGenerationError):
    """The candidate list named the same employee twice (internal invariant)."""
    status = 500

    def __init__(self, employee_id: str, year: int | None = None):
        super().__init__(f"候选人重复：{employee_id}", year)
        self.employee_id = employee_id

    def as_details(self) -> dict:
        return {"employeeId": self.employee_id}
