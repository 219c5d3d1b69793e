from .create_invoice import CreateInvoice
from .generate_invoice import GenerateInvoiceFromDeliveries
from .get_invoice import GetInvoice
from .list_invoices import ListInvoices
from .delete_invoice import DeleteInvoice
from .render_invoice_pdf import RenderInvoicePdf
from .dtos import (
    InvoiceLineInputDTO,
    CreateInvoiceCommandDTO,
    GenerateInvoiceCommandDTO,
    InvoiceResponseDTO,
    InvoiceLineResponseDTO,
    InvoicePaymentDTO,
    InvoiceDetailResponseDTO,
    InvoiceListResponseDTO,
    MonthlyInvoicingResultDTO,
)

__all__ = [
    "CreateInvoice",
    "GenerateInvoiceFromDeliveries",
    "GetInvoice",
    "ListInvoices",
    "DeleteInvoice",
    "RenderInvoicePdf",
    "InvoiceLineInputDTO",
    "CreateInvoiceCommandDTO",
    "GenerateInvoiceCommandDTO",
    "InvoiceResponseDTO",
    "InvoiceLineResponseDTO",
    "InvoicePaymentDTO",
    "InvoiceDetailResponseDTO",
    "InvoiceListResponseDTO",
    "MonthlyInvoicingResultDTO",
]
