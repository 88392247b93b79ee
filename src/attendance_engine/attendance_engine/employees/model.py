from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from ..core.enums import EmployeeStatus


@dataclass(frozen=True)
class Employee:
    """Domain entity: employee directory entry.

    Note: Plain data object, the engine only reads it.
    """

    employee_id: str
    firstname: Optional[str] = None
    lastname: Optional[str] = None
    department: Optional[str] = None
    position: Optional[str] = None
    status: EmployeeStatus = EmployeeStatus.ACTIVE

    @property
    def full_name(self) -> str:
        name = f"{self.firstname or ''} {self.lastname or ''}".strip()
        return name or self.employee_id

    @property
    def is_active(self) -> bool:
        return self.status == EmployeeStatus.ACTIVE
