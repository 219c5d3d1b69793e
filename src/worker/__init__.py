"""Background workers for the delivery service"""
from .monthly_invoicing import MonthlyInvoicingWorker

__all__ = ["MonthlyInvoicingWorker"]
