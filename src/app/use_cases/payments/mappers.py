"""Entity to DTO conversion shared by the payment use cases"""

from decimal import Decimal
from typing import List, Optional, Tuple
from src.domain.invoice import Invoice
from src.domain.payment import Payment
from src.domain.payment_allocation import PaymentAllocation
from .dtos import AllocationResponseDTO, PaymentResponseDTO


def to_payment_response(
    payment: Payment,
    allocations: Optional[List[Tuple[PaymentAllocation, Invoice]]] = None,
) -> PaymentResponseDTO:
    """
    Build a PaymentResponseDTO

    When allocations is None the allocation summary fields stay None.
    """
    allocation_dtos: List[AllocationResponseDTO] = []
    allocated_amount = None
    unallocated_amount = None

    if allocations is not None:
        allocated_amount = Decimal("0")
        for allocation, invoice in allocations:
            allocation_dtos.append(
                AllocationResponseDTO(
                    allocation_id=allocation.id,
                    invoice_id=allocation.invoice_id,
                    invoice_number=invoice.invoice_number,
                    invoice_total=invoice.total_amount,
                    allocated_amount=allocation.allocated_amount,
                )
            )
            allocated_amount += allocation.allocated_amount
        unallocated_amount = payment.amount - allocated_amount

    return PaymentResponseDTO(
        payment_id=payment.id,
        payment_code=payment.payment_code,
        customer_id=payment.customer_id,
        amount=payment.amount,
        payment_date=payment.payment_date,
        payment_method=payment.payment_method,
        payment_status=payment.payment_status,
        transaction_reference=payment.transaction_reference,
        notes=payment.notes,
        received_by=payment.received_by,
        allocations=allocation_dtos,
        allocated_amount=allocated_amount,
        unallocated_amount=unallocated_amount,
        created_at=payment.created_at,
    )
