"""
Payslip arithmetic.

Pure functions over a salary structure and a month's attendance counts; no
database access happens here so the figures can be tested in isolation.
"""
from dataclasses import dataclass, asdict
from decimal import Decimal
from typing import Dict, Iterable

from dayflow.core.dates import percent_of, prorate, round_money, to_decimal
from dayflow.models.attendance import AttendanceStatus


@dataclass(frozen=True)
class AttendanceCounts:
    working_days: int
    days_present: int
    paid_leave_days: int

    @property
    def payable_days(self) -> int:
        return self.days_present + self.paid_leave_days

    @property
    def unpaid_leave_days(self) -> int:
        return max(0, self.working_days - self.days_present - self.paid_leave_days)

    @property
    def payable_ratio(self) -> Decimal:
        if self.working_days <= 0:
            return Decimal("0")
        return Decimal(self.payable_days) / Decimal(self.working_days)

    @classmethod
    def from_statuses(cls, statuses: Iterable[str], working_days: int) -> "AttendanceCounts":
        present = 0
        leave = 0
        for status in statuses:
            if status == AttendanceStatus.PRESENT.value:
                present += 1
            elif status == AttendanceStatus.LEAVE.value:
                leave += 1
        return cls(working_days=working_days, days_present=present, paid_leave_days=leave)


@dataclass(frozen=True)
class PayslipFigures:
    """Rounded payslip amounts, ready to be persisted."""
    working_days: int
    days_present: int
    paid_leave_days: int
    unpaid_leave_days: int
    basic_salary: int
    hra: int
    standard_allowance: int
    performance_bonus: int
    lta: int
    fixed_allowance: int
    gross_salary: int
    pf_employee: int
    pf_employer: int
    professional_tax: int
    total_deductions: int
    net_salary: int

    def to_dict(self) -> Dict[str, int]:
        return asdict(self)


def compute_payslip(structure, counts: AttendanceCounts) -> PayslipFigures:
    """
    Prorate a salary structure by the payable ratio of the month.

    Components are computed unrounded and each one is rounded only when
    stored, so gross/net are rounded from exact sums rather than from the
    sum of rounded parts.
    """
    payable = counts.payable_days
    working = counts.working_days

    basic = prorate(percent_of(structure.wage, structure.basic_salary_percentage), payable, working)
    hra = percent_of(basic, structure.hra_percentage)
    standard_allowance = prorate(structure.standard_allowance, payable, working)
    performance_bonus = prorate(structure.performance_bonus, payable, working)
    lta = prorate(structure.lta, payable, working)
    fixed_allowance = prorate(structure.fixed_allowance, payable, working)

    gross = basic + hra + standard_allowance + performance_bonus + lta + fixed_allowance

    pf_employee = percent_of(basic, structure.pf_employee_percentage)
    pf_employer = percent_of(basic, structure.pf_employer_percentage)
    # Flat monthly amount, not prorated
    professional_tax = to_decimal(structure.professional_tax)
    total_deductions = pf_employee + professional_tax
    net = gross - total_deductions

    return PayslipFigures(
        working_days=working,
        days_present=counts.days_present,
        paid_leave_days=counts.paid_leave_days,
        unpaid_leave_days=counts.unpaid_leave_days,
        basic_salary=round_money(basic),
        hra=round_money(hra),
        standard_allowance=round_money(standard_allowance),
        performance_bonus=round_money(performance_bonus),
        lta=round_money(lta),
        fixed_allowance=round_money(fixed_allowance),
        gross_salary=round_money(gross),
        pf_employee=round_money(pf_employee),
        pf_employer=round_money(pf_employer),
        professional_tax=round_money(professional_tax),
        total_deductions=round_money(total_deductions),
        net_salary=round_money(net),
    )
