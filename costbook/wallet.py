"""
Wallet Aggregator: business-wide revenue, cost and net profit.

    net_profit = sum(selling_price) - sum(total_cost) - extra_expenses

Legacy products without total_cost use material_cost + labor_cost.
"""

from typing import Iterable

from .parsing import number_or_zero
from .schemas import Product, WalletSummary


def parse_expenses(value) -> float:
    """Extra expenses from the form. Non-numeric input is treated as zero."""
    return number_or_zero(value)


def recompute(products: Iterable[Product], extra_expenses) -> WalletSummary:
    expenses = parse_expenses(extra_expenses)
    total_revenue = 0.0
    total_cost = 0.0
    for product in products:
        total_revenue += product.selling_price
        total_cost += product.effective_total_cost

    return WalletSummary(
        total_revenue=total_revenue,
        total_cost=total_cost,
        extra_expenses=expenses,
        net_profit=total_revenue - total_cost - expenses,
    )
