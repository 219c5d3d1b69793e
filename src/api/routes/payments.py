"""Payment API Routes

FastAPI routes for recording, inspecting and reversing customer payments.
"""

from datetime import date
from typing import List, Optional

from fastapi import APIRouter, Depends, Query, Response, status
from sqlmodel.ext.asyncio.session import AsyncSession

from src.api.schemas.payment_request import RecordPaymentRequestSchema, UpdatePaymentRequestSchema
from src.app.use_cases.payments import (
    RecordPayment,
    DeletePayment,
    GetPayment,
    ListPayments,
    UpdatePayment,
    GetPendingCollections,
    PaymentResponseDTO,
    PaymentListResponseDTO,
    PendingCollectionDTO,
)
from src.adapter.repositories import (
    SqlAlchemyCustomerRepository,
    SqlAlchemyInvoiceRepository,
    SqlAlchemyPaymentRepository,
    SqlAlchemyPaymentAllocationRepository,
    SqlAlchemyReportRepository,
)
from src.adapter.services.unit_of_work import SqlAlchemyUnitOfWork
from src.depends import CurrentUser, get_current_user, get_session, require_roles
from src.domain.payment import PaymentMethod, PaymentStatus
from src.domain.user import UserRole
from src.api.error import ClientError

router = APIRouter(prefix="/payments", tags=["Payments"])


@router.post(
    "",
    response_model=PaymentResponseDTO,
    status_code=status.HTTP_201_CREATED,
    responses={
        400: {
            "description": "Allocation rejected",
            "content": {
                "application/json": {
                    "example": {
                        "error": {
                            "code": "ALLOCATION_EXCEEDS_BALANCE",
                            "message": "Allocation exceeds balance of invoice INV-2024-000004"
                        }
                    }
                }
            }
        },
        404: {"description": "Customer or invoice not found"},
        422: {"description": "Validation error (e.g. amount <= 0)"},
    }
)
async def record_payment(
    request: RecordPaymentRequestSchema,
    session: AsyncSession = Depends(get_session),
    user: CurrentUser = Depends(
        require_roles(UserRole.ADMIN, UserRole.MANAGER, UserRole.DELIVERY_PERSON)
    ),
):
    """
    Record a payment and allocate it to invoices.

    **Allocation:**
    - Without `invoice_allocations`: applied to open invoices, oldest due date first;
      anything left over stays on the payment as credit.
    - With `invoice_allocations`: applied exactly as listed. Rejected as a whole if an
      invoice is unknown, belongs to another customer, would be over-paid, or the
      allocations exceed the payment amount.

    **Returns:**
    - 201: Payment with its allocations
    - 400: Allocation rejected
    - 404: Customer or invoice not found
    - 422: Invalid request (amount <= 0, unknown payment method)
    """
    # Create repositories and unit of work
    uow = SqlAlchemyUnitOfWork(session)
    use_case = RecordPayment(
        uow=uow,
        customer_repo=SqlAlchemyCustomerRepository(session),
        invoice_repo=SqlAlchemyInvoiceRepository(session),
        payment_repo=SqlAlchemyPaymentRepository(session),
        allocation_repo=SqlAlchemyPaymentAllocationRepository(session),
    )

    result = await use_case.execute(request.to_command(received_by=user.user_id))

    if result.is_err():
        raise ClientError(result.error)

    return result.value


@router.get("", response_model=PaymentListResponseDTO)
async def list_payments(
    customer_id: Optional[int] = Query(default=None),
    payment_method: Optional[PaymentMethod] = Query(default=None),
    payment_status: Optional[PaymentStatus] = Query(default=None),
    date_from: Optional[date] = Query(default=None),
    date_to: Optional[date] = Query(default=None),
    limit: int = Query(default=20, ge=1, le=100),
    offset: int = Query(default=0, ge=0),
    session: AsyncSession = Depends(get_session),
    user: CurrentUser = Depends(get_current_user),
):
    """List payments, most recent first."""
    use_case = ListPayments(SqlAlchemyPaymentRepository(session))
    result = await use_case.execute(
        customer_id=customer_id,
        payment_method=payment_method,
        payment_status=payment_status,
        date_from=date_from,
        date_to=date_to,
        limit=limit,
        offset=offset,
    )

    if result.is_err():
        raise ClientError(result.error)

    return result.value


@router.get("/pending", response_model=List[PendingCollectionDTO])
async def list_pending_collections(
    area_id: Optional[int] = Query(default=None),
    session: AsyncSession = Depends(get_session),
    user: CurrentUser = Depends(get_current_user),
):
    """Customers with open invoices, largest amount owed first."""
    use_case = GetPendingCollections(SqlAlchemyReportRepository(session))
    result = await use_case.execute(area_id=area_id)

    if result.is_err():
        raise ClientError(result.error)

    return result.value


@router.get(
    "/{payment_id}",
    response_model=PaymentResponseDTO,
    responses={404: {"description": "Payment not found"}},
)
async def get_payment(
    payment_id: int,
    session: AsyncSession = Depends(get_session),
    user: CurrentUser = Depends(get_current_user),
):
    """Payment with its allocations, each joined with the invoice number and total."""
    use_case = GetPayment(
        SqlAlchemyPaymentRepository(session),
        SqlAlchemyPaymentAllocationRepository(session),
    )
    result = await use_case.execute(payment_id)

    if result.is_err():
        raise ClientError(result.error)

    return result.value


@router.patch(
    "/{payment_id}",
    response_model=PaymentResponseDTO,
    responses={
        404: {"description": "Payment not found"},
        409: {"description": "Payment still allocated to invoices"},
    },
)
async def update_payment(
    payment_id: int,
    request: UpdatePaymentRequestSchema,
    session: AsyncSession = Depends(get_session),
    user: CurrentUser = Depends(require_roles(UserRole.ADMIN, UserRole.MANAGER)),
):
    """Update status, transaction reference or notes. Amount and allocations are fixed."""
    use_case = UpdatePayment(
        SqlAlchemyUnitOfWork(session),
        SqlAlchemyPaymentRepository(session),
        SqlAlchemyPaymentAllocationRepository(session),
    )
    result = await use_case.execute(payment_id, request.to_command())

    if result.is_err():
        raise ClientError(result.error)

    return result.value


@router.delete(
    "/{payment_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    responses={404: {"description": "Payment not found"}},
)
async def delete_payment(
    payment_id: int,
    session: AsyncSession = Depends(get_session),
    user: CurrentUser = Depends(require_roles(UserRole.ADMIN)),
):
    """
    Delete a payment.

    Every allocation is reversed on its invoice (paid amount, balance and
    status restored) before the payment and its allocations are removed.
    """
    use_case = DeletePayment(
        uow=SqlAlchemyUnitOfWork(session),
        invoice_repo=SqlAlchemyInvoiceRepository(session),
        payment_repo=SqlAlchemyPaymentRepository(session),
        allocation_repo=SqlAlchemyPaymentAllocationRepository(session),
    )
    result = await use_case.execute(payment_id)

    if result.is_err():
        raise ClientError(result.error)

    return Response(status_code=status.HTTP_204_NO_CONTENT)
