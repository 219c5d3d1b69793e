"""RecordPayment Use Case

Persists a payment received from a customer and applies it to the
customer's invoices, either automatically (oldest due date first) or
exactly as the caller lists.
"""

import logging
from decimal import Decimal
from typing import Dict, List, Tuple
from sqlalchemy.exc import IntegrityError
from libs.result import Result, Return, Error
from src.app.services.unit_of_work import UnitOfWork
from src.app.repositories.customer_repository import CustomerRepository
from src.app.repositories.invoice_repository import InvoiceRepository
from src.app.repositories.payment_repository import PaymentRepository
from src.app.repositories.payment_allocation_repository import PaymentAllocationRepository
from src.app.use_cases.errors import constraint_violation_error
from src.domain.invoice import Invoice, InvoiceStatus
from src.domain.payment import Payment
from src.domain.payment_allocation import PaymentAllocation
from .dtos import ExplicitAllocation, RecordPaymentCommandDTO, PaymentResponseDTO
from .mappers import to_payment_response

logger = logging.getLogger(__name__)

AllocationPlan = List[Tuple[Invoice, Decimal]]


class RecordPayment:
    """
    Use Case: Record a customer payment and allocate it to invoices

    Business Rules:
    1. Amount must be strictly positive; nothing is written otherwise
    2. Auto mode walks open invoices by due_date ascending, then id ascending,
       applying min(remaining, balance) to each until the money runs out
    3. Explicit mode is validated in full before any write:
       invoice exists, belongs to the customer, amount <= balance,
       and the allocations together do not exceed the payment
    4. Money left over stays on the payment as unallocated credit
    5. Payment, allocations and invoice updates commit together or not at all
    6. Invoices are read with a row lock so concurrent payments serialize

    Flow:
    1. Validate amount and customer
    2. Build the allocation plan (auto or explicit)
    3. Create the payment
    4. Create allocations and update invoice paid / balance amounts
    5. Commit transaction
    6. Return payment with its allocations
    """

    def __init__(
        self,
        uow: UnitOfWork,
        customer_repo: CustomerRepository,
        invoice_repo: InvoiceRepository,
        payment_repo: PaymentRepository,
        allocation_repo: PaymentAllocationRepository,
    ):
        self.uow = uow
        self.customer_repo = customer_repo
        self.invoice_repo = invoice_repo
        self.payment_repo = payment_repo
        self.allocation_repo = allocation_repo

    async def execute(self, command: RecordPaymentCommandDTO) -> Result[PaymentResponseDTO]:
        """
        Execute payment recording

        Args:
            command: RecordPaymentCommandDTO with customer, amount and allocation instruction

        Returns:
            Result[PaymentResponseDTO]: Payment with allocations or error
        """
        try:
            # Step 1: Validate amount and customer
            if command.amount is None or command.amount <= 0:
                return Return.err(
                    Error(
                        code="INVALID_AMOUNT",
                        message="Payment amount must be greater than zero",
                        reason=f"amount={command.amount}",
                    )
                )

            customer = await self.customer_repo.get_by_id(command.customer_id)
            if not customer:
                return Return.err(
                    Error(
                        code="CUSTOMER_NOT_FOUND",
                        message=f"Customer {command.customer_id} not found",
                    )
                )

            # Step 2: Build allocation plan
            if isinstance(command.allocation, ExplicitAllocation):
                plan_result = await self._plan_explicit(command)
                if plan_result.is_err():
                    return plan_result
                plan = plan_result.value
            else:
                plan = await self._plan_auto(command.customer_id, command.amount)

            # Step 3: Create payment
            payment_code = await self.payment_repo.generate_payment_code()
            payment = Payment(
                payment_code=payment_code,
                customer_id=command.customer_id,
                amount=command.amount,
                payment_date=command.payment_date,
                payment_method=command.payment_method,
                transaction_reference=command.transaction_reference,
                notes=command.notes,
                received_by=command.received_by,
            )
            payment = await self.payment_repo.create(payment)

            # Step 4: Create allocations and update invoices
            allocations: List[Tuple[PaymentAllocation, Invoice]] = []
            for invoice, amount in plan:
                allocation = await self.allocation_repo.create(
                    PaymentAllocation(
                        payment_id=payment.id,
                        invoice_id=invoice.id,
                        allocated_amount=amount,
                    )
                )
                invoice.apply_payment(amount)
                await self.invoice_repo.update(invoice)
                allocations.append((allocation, invoice))

            # Step 5: Commit transaction
            await self.uow.commit()

            logger.info(
                f"Recorded payment {payment.payment_code} of {payment.amount} "
                f"for customer {payment.customer_id} across {len(allocations)} invoice(s)"
            )

            # Step 6: Build response
            return Return.ok(to_payment_response(payment, allocations))

        except IntegrityError as e:
            await self.uow.rollback()
            logger.warning(f"Payment rejected by constraint: {e.orig}")
            return Return.err(constraint_violation_error(e))

        except Exception as e:
            await self.uow.rollback()
            logger.error(f"Failed to record payment for customer {command.customer_id}: {e}")
            return Return.err(
                Error(
                    code="RECORD_PAYMENT_FAILED",
                    message="Failed to record payment",
                    reason=str(e),
                )
            )

    async def _plan_auto(self, customer_id: int, amount: Decimal) -> AllocationPlan:
        """Spread amount over open invoices, oldest due date first"""
        open_invoices = await self.invoice_repo.get_open_by_customer_id(
            customer_id, for_update=True
        )

        plan: AllocationPlan = []
        remaining = amount
        for invoice in open_invoices:
            if remaining <= 0:
                break
            portion = min(remaining, invoice.balance_amount)
            if portion <= 0:
                continue
            plan.append((invoice, portion))
            remaining -= portion
        return plan

    async def _plan_explicit(self, command: RecordPaymentCommandDTO) -> Result[AllocationPlan]:
        """Validate caller allocations against invoices and the payment amount"""
        lines = command.allocation.allocations

        requested_total = sum((line.amount for line in lines), Decimal("0"))
        if requested_total > command.amount:
            return Return.err(
                Error(
                    code="ALLOCATION_EXCEEDS_PAYMENT",
                    message="Allocations exceed the payment amount",
                    reason=f"allocations={requested_total}, amount={command.amount}",
                )
            )

        invoices: Dict[int, Invoice] = {}
        requested: Dict[int, Decimal] = {}
        plan: AllocationPlan = []

        for line in lines:
            if line.amount <= 0:
                return Return.err(
                    Error(
                        code="INVALID_AMOUNT",
                        message="Allocation amount must be greater than zero",
                        reason=f"invoice_id={line.invoice_id}, amount={line.amount}",
                    )
                )

            invoice = invoices.get(line.invoice_id)
            if invoice is None:
                invoice = await self.invoice_repo.get_by_id(line.invoice_id, for_update=True)
                if not invoice:
                    return Return.err(
                        Error(
                            code="INVOICE_NOT_FOUND",
                            message=f"Invoice {line.invoice_id} not found",
                        )
                    )
                if invoice.customer_id != command.customer_id:
                    return Return.err(
                        Error(
                            code="INVOICE_CUSTOMER_MISMATCH",
                            message=f"Invoice {invoice.invoice_number} belongs to another customer",
                        )
                    )
                if invoice.status == InvoiceStatus.CANCELLED:
                    return Return.err(
                        Error(
                            code="INVOICE_NOT_PAYABLE",
                            message=f"Invoice {invoice.invoice_number} is cancelled",
                        )
                    )
                invoices[invoice.id] = invoice

            # Same invoice may be listed more than once
            requested[invoice.id] = requested.get(invoice.id, Decimal("0")) + line.amount
            if requested[invoice.id] > invoice.balance_amount:
                return Return.err(
                    Error(
                        code="ALLOCATION_EXCEEDS_BALANCE",
                        message=f"Allocation exceeds balance of invoice {invoice.invoice_number}",
                        reason=f"requested={requested[invoice.id]}, balance={invoice.balance_amount}",
                    )
                )
            plan.append((invoice, line.amount))

        return Return.ok(plan)
