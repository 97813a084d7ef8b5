"""Installment plans for ticket purchases.

A plan is an initial reservation payment followed by N monthly
installments covering the rest of the price.
"""

import calendar
from datetime import date
from decimal import ROUND_DOWN, Decimal

from .models import Installment, InstallmentPlan

CENT = Decimal("0.01")


def calculate_installment_plan(
    total_amount: float,
    reservation_amount: float,
    installments_count: int,
    start_date: date,
) -> InstallmentPlan:
    """Split the balance after the reservation into monthly installments.

    Every installment but the last is the balance divided by the count,
    floored to cents; the last one absorbs the rounding so the installments
    sum exactly to the balance. Invalid input returns a failed plan.
    """
    if total_amount <= 0:
        return InstallmentPlan(success=False, error_message="Total amount must be greater than 0")
    if reservation_amount < 0:
        return InstallmentPlan(success=False, error_message="Reservation amount cannot be negative")
    if reservation_amount >= total_amount:
        return InstallmentPlan(
            success=False,
            error_message="Reservation amount cannot be greater than or equal to total amount",
        )
    if installments_count < 1:
        return InstallmentPlan(success=False, error_message="Installments count must be at least 1")

    total = Decimal(str(total_amount))
    remaining = total - Decimal(str(reservation_amount))
    monthly = (remaining / installments_count).quantize(CENT, rounding=ROUND_DOWN)

    installments = []
    paid_so_far = Decimal("0")
    for number in range(1, installments_count + 1):
        if number == installments_count:
            amount = (remaining - paid_so_far).quantize(CENT)
        else:
            amount = monthly
            paid_so_far += amount
        installments.append(Installment(
            number=number,
            amount=float(amount),
            due_date=add_months(start_date, number - 1),
        ))

    return InstallmentPlan(
        total_amount=float(total),
        reservation_amount=float(reservation_amount),
        remaining_amount=float(remaining),
        monthly_amount=float(monthly),
        installments=installments,
    )


def add_months(start: date, months: int) -> date:
    """Same day N months later, clamped to the month's last day (Jan 31 -> Feb 28)."""
    month_index = start.month - 1 + months
    year = start.year + month_index // 12
    month = month_index % 12 + 1
    last_day = calendar.monthrange(year, month)[1]
    return date(year, month, min(start.day, last_day))
