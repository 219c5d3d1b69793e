"""Entity to DTO conversion shared by the invoice use cases"""

from src.domain.invoice import Invoice
from src.domain.invoice_line import InvoiceLineItem
from .dtos import InvoiceResponseDTO, InvoiceLineResponseDTO


def invoice_fields(invoice: Invoice) -> dict:
    return dict(
        invoice_id=invoice.id,
        invoice_number=invoice.invoice_number,
        customer_id=invoice.customer_id,
        status=invoice.status,
        billing_period_start=invoice.billing_period_start,
        billing_period_end=invoice.billing_period_end,
        invoice_date=invoice.invoice_date,
        due_date=invoice.due_date,
        subtotal=invoice.subtotal,
        tax_amount=invoice.tax_amount,
        discount_amount=invoice.discount_amount,
        total_amount=invoice.total_amount,
        paid_amount=invoice.paid_amount,
        balance_amount=invoice.balance_amount,
        created_at=invoice.created_at,
    )


def to_invoice_response(invoice: Invoice) -> InvoiceResponseDTO:
    return InvoiceResponseDTO(**invoice_fields(invoice))


def to_line_response(line: InvoiceLineItem) -> InvoiceLineResponseDTO:
    return InvoiceLineResponseDTO(
        line_id=line.id,
        delivery_id=line.delivery_id,
        product_id=line.product_id,
        description=line.description,
        quantity=line.quantity,
        unit_price=line.unit_price,
        line_total=line.line_total,
    )
