"""CreateInvoice Use Case

Creates an invoice from explicit line items.
"""

import logging
from datetime import date, timedelta
from decimal import Decimal, ROUND_HALF_UP
from typing import List
from sqlalchemy.exc import IntegrityError
from libs.result import Result, Return, Error
from src.app.services.unit_of_work import UnitOfWork
from src.app.repositories.customer_repository import CustomerRepository
from src.app.repositories.product_repository import ProductRepository
from src.app.repositories.invoice_repository import InvoiceRepository
from src.app.repositories.invoice_line_repository import InvoiceLineRepository
from src.app.use_cases.errors import constraint_violation_error
from src.domain.invoice import Invoice, InvoiceStatus
from src.domain.invoice_line import InvoiceLineItem
from .dtos import CreateInvoiceCommandDTO, InvoiceDetailResponseDTO
from .mappers import invoice_fields, to_line_response

logger = logging.getLogger(__name__)

CENT = Decimal("0.01")


def line_total(quantity: Decimal, unit_price: Decimal) -> Decimal:
    return (quantity * unit_price).quantize(CENT, rounding=ROUND_HALF_UP)


class CreateInvoice:
    """
    Use Case: Create an invoice from line items

    Business Rules:
    1. Customer and every product must exist
    2. Invoice number is auto-generated (INV-YYYY-NNNNNN)
    3. subtotal = sum of line totals; total = subtotal + tax - discount, never negative
    4. paid_amount starts at 0 and balance_amount at total_amount
    5. due_date defaults to billing_period_end + due_days

    Flow:
    1. Validate customer
    2. Resolve line prices from the catalog
    3. Create invoice
    4. Create line items
    5. Commit transaction
    6. Return response
    """

    def __init__(
        self,
        uow: UnitOfWork,
        customer_repo: CustomerRepository,
        product_repo: ProductRepository,
        invoice_repo: InvoiceRepository,
        line_repo: InvoiceLineRepository,
        due_days: int = 15,
    ):
        self.uow = uow
        self.customer_repo = customer_repo
        self.product_repo = product_repo
        self.invoice_repo = invoice_repo
        self.line_repo = line_repo
        self.due_days = due_days

    async def execute(self, command: CreateInvoiceCommandDTO) -> Result[InvoiceDetailResponseDTO]:
        try:
            # Step 1: Validate customer
            customer = await self.customer_repo.get_by_id(command.customer_id)
            if not customer:
                return Return.err(
                    Error(
                        code="CUSTOMER_NOT_FOUND",
                        message=f"Customer {command.customer_id} not found",
                    )
                )

            # Step 2: Resolve line prices
            lines: List[InvoiceLineItem] = []
            for line in command.lines:
                product = await self.product_repo.get_by_id(line.product_id)
                if not product:
                    return Return.err(
                        Error(
                            code="PRODUCT_NOT_FOUND",
                            message=f"Product {line.product_id} not found",
                        )
                    )
                unit_price = line.unit_price if line.unit_price is not None else product.price_per_unit
                lines.append(
                    InvoiceLineItem(
                        product_id=product.id,
                        description=line.description or product.product_name,
                        quantity=line.quantity,
                        unit_price=unit_price,
                        line_total=line_total(line.quantity, unit_price),
                    )
                )

            subtotal = sum((line.line_total for line in lines), Decimal("0"))
            total = subtotal + command.tax_amount - command.discount_amount
            if total < 0:
                return Return.err(
                    Error(
                        code="INVALID_INVOICE_TOTAL",
                        message="Discount exceeds subtotal plus tax",
                        reason=f"subtotal={subtotal}, tax={command.tax_amount}, "
                               f"discount={command.discount_amount}",
                    )
                )

            # Step 3: Create invoice
            invoice_number = await self.invoice_repo.generate_invoice_number()
            invoice = Invoice(
                invoice_number=invoice_number,
                customer_id=customer.id,
                status=InvoiceStatus.PAID if total == 0 else command.status,
                billing_period_start=command.billing_period_start,
                billing_period_end=command.billing_period_end,
                invoice_date=command.invoice_date or date.today(),
                due_date=command.due_date
                or command.billing_period_end + timedelta(days=self.due_days),
                subtotal=subtotal,
                tax_amount=command.tax_amount,
                discount_amount=command.discount_amount,
                total_amount=total,
                paid_amount=Decimal("0"),
                balance_amount=total,
            )
            invoice = await self.invoice_repo.create(invoice)

            # Step 4: Create line items
            for line in lines:
                line.invoice_id = invoice.id
            lines = await self.line_repo.create_many(lines)

            # Step 5: Commit transaction
            await self.uow.commit()

            logger.info(
                f"Created invoice {invoice.invoice_number} for customer {customer.id}, total {total}"
            )

            # Step 6: Build response
            return Return.ok(
                InvoiceDetailResponseDTO(
                    **invoice_fields(invoice),
                    lines=[to_line_response(line) for line in lines],
                )
            )

        except IntegrityError as e:
            await self.uow.rollback()
            return Return.err(constraint_violation_error(e))

        except Exception as e:
            await self.uow.rollback()
            logger.error(f"Failed to create invoice for customer {command.customer_id}: {e}")
            return Return.err(
                Error(
                    code="CREATE_INVOICE_FAILED",
                    message="Failed to create invoice",
                    reason=str(e),
                )
            )
