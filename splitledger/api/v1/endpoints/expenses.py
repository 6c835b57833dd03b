from fastapi import APIRouter, Depends, HTTPException, Query, status

from splitledger.db.session import get_ledger_service
from splitledger.schemas.expense import (
    ExpenseAmountResponse,
    ExpenseCountResponse,
    ExpenseCreate,
    ExpenseCreated,
    ExpenseDetailResponse,
    ExpenseInfoResponse,
    ExpenseListResponse,
    ExpenseParticipantsResponse,
)
from splitledger.services.ledger_service import LedgerService
from splitledger.utils.ledger_validation import InvalidInput, NotFound

router = APIRouter()


def _not_found(exc: NotFound) -> HTTPException:
    return HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(exc))


@router.post("", response_model=ExpenseCreated, status_code=status.HTTP_201_CREATED)
async def add_expense(payload: ExpenseCreate, service: LedgerService = Depends(get_ledger_service)):
    """Append an expense. Paid and owed totals are not required to match."""
    try:
        expense_id = await service.add_expense(
            payload.label,
            payload.participants,
            payload.paid_amounts,
            payload.owed_amounts
        )
    except InvalidInput as exc:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(exc))
    return ExpenseCreated(id=expense_id)


@router.get("", response_model=ExpenseListResponse)
async def list_expenses(
    offset: int = Query(0, ge=0),
    limit: int = Query(50, ge=1, le=500),
    service: LedgerService = Depends(get_ledger_service)
):
    records = await service.list_expenses(offset=offset, limit=limit)
    return ExpenseListResponse(
        count=await service.expense_count(),
        offset=offset,
        items=[ExpenseDetailResponse.model_validate(record) for record in records]
    )


@router.get("/count", response_model=ExpenseCountResponse)
async def expense_count(service: LedgerService = Depends(get_ledger_service)):
    return ExpenseCountResponse(count=await service.expense_count())


@router.get("/{expense_id}", response_model=ExpenseInfoResponse)
async def get_expense_info(expense_id: int, service: LedgerService = Depends(get_ledger_service)):
    try:
        record_id, label, created_at = await service.get_expense_info(expense_id)
    except NotFound as exc:
        raise _not_found(exc)
    return ExpenseInfoResponse(id=record_id, label=label, created_at=created_at)


@router.get("/{expense_id}/detail", response_model=ExpenseDetailResponse)
async def get_expense(expense_id: int, service: LedgerService = Depends(get_ledger_service)):
    try:
        record = await service.get_expense(expense_id)
    except NotFound as exc:
        raise _not_found(exc)
    return ExpenseDetailResponse.model_validate(record)


@router.get("/{expense_id}/participants", response_model=ExpenseParticipantsResponse)
async def get_expense_participants(expense_id: int, service: LedgerService = Depends(get_ledger_service)):
    try:
        participants = await service.get_expense_participants(expense_id)
    except NotFound as exc:
        raise _not_found(exc)
    return ExpenseParticipantsResponse(id=expense_id, participants=participants)


@router.get("/{expense_id}/paid/{identity}", response_model=ExpenseAmountResponse)
async def get_amount_paid(
    expense_id: int,
    identity: str,
    service: LedgerService = Depends(get_ledger_service)
):
    """0 if the identity is not part of the expense"""
    try:
        amount = await service.get_amount_paid(expense_id, identity)
    except NotFound as exc:
        raise _not_found(exc)
    return ExpenseAmountResponse(id=expense_id, identity=identity, amount=amount)


@router.get("/{expense_id}/owed/{identity}", response_model=ExpenseAmountResponse)
async def get_amount_owed(
    expense_id: int,
    identity: str,
    service: LedgerService = Depends(get_ledger_service)
):
    try:
        amount = await service.get_amount_owed(expense_id, identity)
    except NotFound as exc:
        raise _not_found(exc)
    return ExpenseAmountResponse(id=expense_id, identity=identity, amount=amount)
