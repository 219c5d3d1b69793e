"""GenerateInvoiceFromDeliveries Use Case

Bills a customer's delivered deliveries for a period. Each delivery ends
up on at most one invoice line.
"""

import logging
from datetime import date, timedelta
from decimal import Decimal
from sqlalchemy.exc import IntegrityError
from libs.result import Result, Return, Error
from src.app.services.unit_of_work import UnitOfWork
from src.app.repositories.customer_repository import CustomerRepository
from src.app.repositories.delivery_repository import DeliveryRepository
from src.app.repositories.invoice_repository import InvoiceRepository
from src.app.repositories.invoice_line_repository import InvoiceLineRepository
from src.app.use_cases.errors import constraint_violation_error
from src.domain.invoice import Invoice, InvoiceStatus
from src.domain.invoice_line import InvoiceLineItem
from .create_invoice import line_total
from .dtos import GenerateInvoiceCommandDTO, InvoiceDetailResponseDTO
from .mappers import invoice_fields, to_line_response

logger = logging.getLogger(__name__)


class GenerateInvoiceFromDeliveries:
    """
    Use Case: Generate an invoice from delivered, not yet invoiced deliveries

    Business Rules:
    1. Only deliveries with status delivered inside the period are billed
    2. A delivery already on an invoice line is skipped
    3. Quantity billed is the delivered quantity at the delivery's recorded amount
    4. Nothing to bill is an error, no empty invoice is created

    Flow:
    1. Validate customer
    2. Collect billable deliveries
    3. Create invoice with totals
    4. Create one line per delivery
    5. Commit transaction
    """

    def __init__(
        self,
        uow: UnitOfWork,
        customer_repo: CustomerRepository,
        delivery_repo: DeliveryRepository,
        invoice_repo: InvoiceRepository,
        line_repo: InvoiceLineRepository,
        due_days: int = 15,
    ):
        self.uow = uow
        self.customer_repo = customer_repo
        self.delivery_repo = delivery_repo
        self.invoice_repo = invoice_repo
        self.line_repo = line_repo
        self.due_days = due_days

    async def execute(self, command: GenerateInvoiceCommandDTO) -> Result[InvoiceDetailResponseDTO]:
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

            # Step 2: Collect billable deliveries
            billable = await self.delivery_repo.get_uninvoiced_delivered(
                customer.id, command.billing_period_start, command.billing_period_end
            )
            if not billable:
                return Return.err(
                    Error(
                        code="NO_BILLABLE_DELIVERIES",
                        message=f"No uninvoiced deliveries for customer {customer.id} "
                                f"between {command.billing_period_start} and {command.billing_period_end}",
                    )
                )

            lines = []
            for delivery, product in billable:
                quantity = delivery.delivered_quantity or delivery.scheduled_quantity
                lines.append(
                    InvoiceLineItem(
                        delivery_id=delivery.id,
                        product_id=product.id,
                        description=f"{product.product_name} ({delivery.scheduled_date.isoformat()})",
                        quantity=quantity,
                        unit_price=product.price_per_unit,
                        line_total=delivery.amount
                        if delivery.amount is not None
                        else line_total(quantity, product.price_per_unit),
                    )
                )

            subtotal = sum((line.line_total for line in lines), Decimal("0"))
            total = subtotal + command.tax_amount - command.discount_amount
            if total < 0:
                return Return.err(
                    Error(
                        code="INVALID_INVOICE_TOTAL",
                        message="Discount exceeds subtotal plus tax",
                    )
                )

            # Step 3: Create invoice
            invoice_number = await self.invoice_repo.generate_invoice_number()
            invoice = await self.invoice_repo.create(
                Invoice(
                    invoice_number=invoice_number,
                    customer_id=customer.id,
                    status=InvoiceStatus.PAID if total == 0 else InvoiceStatus.SENT,
                    billing_period_start=command.billing_period_start,
                    billing_period_end=command.billing_period_end,
                    invoice_date=date.today(),
                    due_date=command.due_date
                    or command.billing_period_end + timedelta(days=self.due_days),
                    subtotal=subtotal,
                    tax_amount=command.tax_amount,
                    discount_amount=command.discount_amount,
                    total_amount=total,
                    paid_amount=Decimal("0"),
                    balance_amount=total,
                )
            )

            # Step 4: Create line items
            for line in lines:
                line.invoice_id = invoice.id
            lines = await self.line_repo.create_many(lines)

            # Step 5: Commit transaction
            await self.uow.commit()

            logger.info(
                f"Generated invoice {invoice.invoice_number} for customer {customer.id} "
                f"from {len(lines)} deliveries, total {total}"
            )

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
            logger.error(f"Failed to generate invoice for customer {command.customer_id}: {e}")
            return Return.err(
                Error(
                    code="GENERATE_INVOICE_FAILED",
                    message="Failed to generate invoice",
                    reason=str(e),
                )
            )
