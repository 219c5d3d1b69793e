"""Invoice API Routes

FastAPI routes for invoice creation, generation from deliveries, lookup
and PDF rendering.
"""

from typing import Optional

from fastapi import APIRouter, Depends, Query, status
from fastapi.responses import Response
from sqlmodel.ext.asyncio.session import AsyncSession

from src.app.use_cases.invoices import (
    CreateInvoice,
    GenerateInvoiceFromDeliveries,
    GetInvoice,
    ListInvoices,
    DeleteInvoice,
    RenderInvoicePdf,
    CreateInvoiceCommandDTO,
    GenerateInvoiceCommandDTO,
    InvoiceDetailResponseDTO,
    InvoiceListResponseDTO,
)
from src.adapter.repositories import (
    SqlAlchemyCustomerRepository,
    SqlAlchemyDeliveryRepository,
    SqlAlchemyInvoiceRepository,
    SqlAlchemyInvoiceLineRepository,
    SqlAlchemyPaymentAllocationRepository,
    SqlAlchemyProductRepository,
)
from src.adapter.services.pdf_service import ReportLabPdfService
from src.adapter.services.unit_of_work import SqlAlchemyUnitOfWork
from src.depends import CurrentUser, get_config, get_current_user, get_session, require_roles
from src.domain.invoice import InvoiceStatus
from src.domain.user import UserRole
from src.api.error import ClientError

router = APIRouter(prefix="/invoices", tags=["Invoices"])


@router.post(
    "",
    response_model=InvoiceDetailResponseDTO,
    status_code=status.HTTP_201_CREATED,
    responses={404: {"description": "Customer or product not found"}},
)
async def create_invoice(
    request: CreateInvoiceCommandDTO,
    session: AsyncSession = Depends(get_session),
    config=Depends(get_config),
    user: CurrentUser = Depends(require_roles(UserRole.ADMIN, UserRole.MANAGER)),
):
    """
    Create an invoice from explicit line items.

    Unit price and description default to the catalog values. The due date
    defaults to the end of the billing period plus the configured due days.
    """
    use_case = CreateInvoice(
        uow=SqlAlchemyUnitOfWork(session),
        customer_repo=SqlAlchemyCustomerRepository(session),
        product_repo=SqlAlchemyProductRepository(session),
        invoice_repo=SqlAlchemyInvoiceRepository(session),
        line_repo=SqlAlchemyInvoiceLineRepository(session),
        due_days=config.INVOICE_DUE_DAYS,
    )
    result = await use_case.execute(request)

    if result.is_err():
        raise ClientError(result.error)

    return result.value


@router.post(
    "/generate",
    response_model=InvoiceDetailResponseDTO,
    status_code=status.HTTP_201_CREATED,
    responses={
        400: {
            "description": "Nothing to bill",
            "content": {
                "application/json": {
                    "example": {
                        "error": {
                            "code": "NO_BILLABLE_DELIVERIES",
                            "message": "No uninvoiced deliveries for customer 1 between 2024-02-01 and 2024-02-29"
                        }
                    }
                }
            }
        },
        404: {"description": "Customer not found"},
    }
)
async def generate_invoice(
    request: GenerateInvoiceCommandDTO,
    session: AsyncSession = Depends(get_session),
    config=Depends(get_config),
    user: CurrentUser = Depends(require_roles(UserRole.ADMIN, UserRole.MANAGER)),
):
    """Bill a customer's delivered, not yet invoiced deliveries for a period."""
    use_case = GenerateInvoiceFromDeliveries(
        uow=SqlAlchemyUnitOfWork(session),
        customer_repo=SqlAlchemyCustomerRepository(session),
        delivery_repo=SqlAlchemyDeliveryRepository(session),
        invoice_repo=SqlAlchemyInvoiceRepository(session),
        line_repo=SqlAlchemyInvoiceLineRepository(session),
        due_days=config.INVOICE_DUE_DAYS,
    )
    result = await use_case.execute(request)

    if result.is_err():
        raise ClientError(result.error)

    return result.value


@router.get("", response_model=InvoiceListResponseDTO)
async def list_invoices(
    customer_id: Optional[int] = Query(default=None),
    status_filter: Optional[InvoiceStatus] = Query(default=None, alias="status"),
    limit: int = Query(default=20, ge=1, le=100),
    offset: int = Query(default=0, ge=0),
    session: AsyncSession = Depends(get_session),
    user: CurrentUser = Depends(get_current_user),
):
    result = await ListInvoices(SqlAlchemyInvoiceRepository(session)).execute(
        customer_id=customer_id, status=status_filter, limit=limit, offset=offset
    )

    if result.is_err():
        raise ClientError(result.error)

    return result.value


@router.get(
    "/{invoice_id}",
    response_model=InvoiceDetailResponseDTO,
    responses={404: {"description": "Invoice not found"}},
)
async def get_invoice(
    invoice_id: int,
    session: AsyncSession = Depends(get_session),
    user: CurrentUser = Depends(get_current_user),
):
    """Invoice with line items and the payments applied to it."""
    use_case = GetInvoice(
        SqlAlchemyInvoiceRepository(session),
        SqlAlchemyInvoiceLineRepository(session),
        SqlAlchemyPaymentAllocationRepository(session),
    )
    result = await use_case.execute(invoice_id)

    if result.is_err():
        raise ClientError(result.error)

    return result.value


@router.delete(
    "/{invoice_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    responses={
        404: {"description": "Invoice not found"},
        409: {"description": "Invoice has payment allocations"},
    },
)
async def delete_invoice(
    invoice_id: int,
    session: AsyncSession = Depends(get_session),
    user: CurrentUser = Depends(require_roles(UserRole.ADMIN)),
):
    use_case = DeleteInvoice(
        SqlAlchemyUnitOfWork(session),
        SqlAlchemyInvoiceRepository(session),
        SqlAlchemyPaymentAllocationRepository(session),
    )
    result = await use_case.execute(invoice_id)

    if result.is_err():
        raise ClientError(result.error)

    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.get(
    "/{invoice_id}/pdf",
    responses={
        200: {
            "content": {"application/pdf": {}},
            "description": "PDF document"
        },
        404: {"description": "Invoice not found"},
    }
)
async def download_invoice_pdf(
    invoice_id: int,
    session: AsyncSession = Depends(get_session),
    config=Depends(get_config),
    user: CurrentUser = Depends(get_current_user),
):
    use_case = RenderInvoicePdf(
        invoice_repo=SqlAlchemyInvoiceRepository(session),
        line_repo=SqlAlchemyInvoiceLineRepository(session),
        customer_repo=SqlAlchemyCustomerRepository(session),
        pdf_service=ReportLabPdfService(),
        company_name=config.COMPANY_NAME,
        company_address=config.COMPANY_ADDRESS,
        currency=config.CURRENCY,
    )
    result = await use_case.execute(invoice_id)

    if result.is_err():
        raise ClientError(result.error)

    return Response(
        content=result.value,
        media_type="application/pdf",
        headers={
            "Content-Disposition": f"attachment; filename=invoice_{invoice_id}.pdf"
        }
    )
