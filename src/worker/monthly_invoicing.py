"""Monthly Invoicing Background Worker

Bills every active customer's delivered, not yet invoiced deliveries for
a calendar month. Can be run as a standalone script or from a scheduler.
"""

import asyncio
import logging
import time
from calendar import monthrange
from datetime import date
from typing import List, Optional, Tuple

from config import ApplicationConfig
from src.adapter.repositories import (
    SqlAlchemyCustomerRepository,
    SqlAlchemyDeliveryRepository,
    SqlAlchemyInvoiceRepository,
    SqlAlchemyInvoiceLineRepository,
)
from src.adapter.services.database import Database
from src.adapter.services.unit_of_work import SqlAlchemyUnitOfWork
from src.app.use_cases.invoices import (
    GenerateInvoiceFromDeliveries,
    GenerateInvoiceCommandDTO,
    MonthlyInvoicingResultDTO,
)
from src.domain.customer import CustomerStatus

logger = logging.getLogger(__name__)

PAGE_SIZE = 100


class MonthlyInvoicingWorker:
    """
    Background worker for monthly invoice generation

    Features:
    - Runs at the start of each month for the previous month
    - One invoice per active customer with billable deliveries
    - Safe to re-run: deliveries already on an invoice are not billed again
    - Each customer is invoiced in its own transaction

    Usage:
        worker = MonthlyInvoicingWorker()
        await worker.start()
        result = await worker.run_once(year=2024, month=2)
        await worker.shutdown()
    """

    def __init__(self, database: Optional[Database] = None, due_days: Optional[int] = None):
        self.database = database or Database(ApplicationConfig.DB_URI)
        self.due_days = due_days if due_days is not None else ApplicationConfig.INVOICE_DUE_DAYS

    async def start(self):
        await self.database.connect()
        logger.info("MonthlyInvoicingWorker initialized")

    def _get_billing_period(
        self, year: Optional[int] = None, month: Optional[int] = None
    ) -> Tuple[date, date]:
        """
        First and last day of the billing month

        Defaults to the previous calendar month.
        """
        if year is None or month is None:
            today = date.today()
            if today.month == 1:
                year, month = today.year - 1, 12
            else:
                year, month = today.year, today.month - 1

        _, last_day = monthrange(year, month)
        return date(year, month, 1), date(year, month, last_day)

    async def _active_customer_ids(self) -> List[int]:
        customer_ids: List[int] = []
        async with self.database.session() as session:
            customer_repo = SqlAlchemyCustomerRepository(session)
            offset = 0
            while True:
                customers, total = await customer_repo.list(
                    status=CustomerStatus.ACTIVE, limit=PAGE_SIZE, offset=offset
                )
                customer_ids.extend(c.id for c in customers)
                offset += PAGE_SIZE
                if offset >= total or not customers:
                    break
        return customer_ids

    async def run_once(
        self, year: Optional[int] = None, month: Optional[int] = None
    ) -> MonthlyInvoicingResultDTO:
        """
        Generate invoices for one billing month

        Args:
            year: Year (optional, defaults to previous month)
            month: Month (optional, defaults to previous month)

        Returns:
            MonthlyInvoicingResultDTO with summary
        """
        start_time = time.time()
        period_start, period_end = self._get_billing_period(year, month)

        logger.info(f"Starting monthly invoicing for {period_start} to {period_end}")

        customer_ids = await self._active_customer_ids()
        invoices_created = 0
        skipped_customers = 0
        failed_customers = 0

        for customer_id in customer_ids:
            try:
                # Separate session per customer to isolate transactions
                async with self.database.session() as session:
                    use_case = GenerateInvoiceFromDeliveries(
                        uow=SqlAlchemyUnitOfWork(session),
                        customer_repo=SqlAlchemyCustomerRepository(session),
                        delivery_repo=SqlAlchemyDeliveryRepository(session),
                        invoice_repo=SqlAlchemyInvoiceRepository(session),
                        line_repo=SqlAlchemyInvoiceLineRepository(session),
                        due_days=self.due_days,
                    )
                    result = await use_case.execute(
                        GenerateInvoiceCommandDTO(
                            customer_id=customer_id,
                            billing_period_start=period_start,
                            billing_period_end=period_end,
                        )
                    )

                if result.is_ok():
                    invoices_created += 1
                elif result.error.code == "NO_BILLABLE_DELIVERIES":
                    skipped_customers += 1
                else:
                    logger.warning(
                        f"Failed to invoice customer {customer_id}: {result.error.message}"
                    )
                    failed_customers += 1

            except Exception as e:
                logger.error(f"Unexpected error invoicing customer {customer_id}: {e}")
                failed_customers += 1

        execution_time_ms = int((time.time() - start_time) * 1000)

        logger.info(
            f"Monthly invoicing complete: {invoices_created} invoices, "
            f"{skipped_customers} skipped, {failed_customers} failed, {execution_time_ms}ms"
        )

        return MonthlyInvoicingResultDTO(
            total_customers=len(customer_ids),
            invoices_created=invoices_created,
            skipped_customers=skipped_customers,
            failed_customers=failed_customers,
            billing_period_start=period_start,
            billing_period_end=period_end,
            execution_time_ms=execution_time_ms,
        )

    async def run_forever(self, check_interval_seconds: int = 86400):
        """Check daily and invoice the previous month during the first three days of a month"""
        logger.info(f"Starting continuous monthly invoicing with {check_interval_seconds}s interval")

        last_processed_month = None

        while True:
            try:
                today = date.today()
                current_month = (today.year, today.month)

                if today.day <= 3 and last_processed_month != current_month:
                    await self.run_once()
                    last_processed_month = current_month

            except Exception as e:
                logger.error(f"Invoicing cycle failed: {e}")

            await asyncio.sleep(check_interval_seconds)

    async def shutdown(self):
        await self.database.disconnect()
        logger.info("MonthlyInvoicingWorker shutdown complete")


async def main():
    """
    Entry point for running the worker as a standalone script

    Usage:
        # Invoice previous month
        python -m src.worker.monthly_invoicing

        # Invoice a specific month
        python -m src.worker.monthly_invoicing --year 2024 --month 2

        # Run continuously
        python -m src.worker.monthly_invoicing --continuous
    """
    import argparse

    logging.basicConfig(
        level=logging.INFO,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )

    parser = argparse.ArgumentParser(description="Monthly Invoicing Worker")
    parser.add_argument("--year", type=int, help="Year to invoice")
    parser.add_argument("--month", type=int, help="Month to invoice")
    parser.add_argument("--continuous", action="store_true", help="Run continuously")
    args = parser.parse_args()

    worker = MonthlyInvoicingWorker()
    await worker.start()

    try:
        if args.continuous:
            await worker.run_forever()
        else:
            result = await worker.run_once(year=args.year, month=args.month)
            print("Invoicing complete:")
            print(f"  Active customers: {result.total_customers}")
            print(f"  Invoices created: {result.invoices_created}")
            print(f"  Nothing to bill: {result.skipped_customers}")
            print(f"  Failed: {result.failed_customers}")
            print(f"  Execution time: {result.execution_time_ms}ms")
    except KeyboardInterrupt:
        logger.info("Received shutdown signal")
    finally:
        await worker.shutdown()


if __name__ == "__main__":
    asyncio.run(main())
