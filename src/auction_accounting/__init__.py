"""Accounting reports for a vehicle auction export business.

Turns purchases, their payments and cost items, and operating expenses into
Profit & Loss, Cash Flow, Revenue Analytics, Cost Analysis, Accounts
Receivable and Summary reports for any date range.
"""

__version__ = "1.0.0"
