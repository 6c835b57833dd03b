from fastapi import APIRouter, Depends, HTTPException, status

from splitledger.core.identity import get_caller_identity
from splitledger.db.session import get_ledger_service
from splitledger.models.profile import Profile
from splitledger.schemas.profile import (
    IdentityListResponse,
    ProfileRegister,
    ProfileRename,
    ProfileResponse,
)
from splitledger.services.ledger_service import LedgerService
from splitledger.utils.ledger_validation import AlreadyRegistered, InvalidInput, NotFound

router = APIRouter()


def _to_profile_response(profile: Profile) -> ProfileResponse:
    return ProfileResponse(
        identity=profile.identity,
        name=profile.display_name,
        registered=profile.is_registered
    )


@router.post("", response_model=ProfileResponse, status_code=status.HTTP_201_CREATED)
async def register(
    payload: ProfileRegister,
    caller: str = Depends(get_caller_identity),
    service: LedgerService = Depends(get_ledger_service)
):
    """Register the caller's identity under a display name."""
    try:
        profile = await service.register(caller, payload.name)
    except InvalidInput as exc:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(exc))
    except AlreadyRegistered as exc:
        raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail=str(exc))
    return _to_profile_response(profile)


@router.patch("/me", response_model=ProfileResponse)
async def rename(
    payload: ProfileRename,
    caller: str = Depends(get_caller_identity),
    service: LedgerService = Depends(get_ledger_service)
):
    """Rename the caller's profile"""
    try:
        profile = await service.rename(caller, payload.name)
    except InvalidInput as exc:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(exc))
    except NotFound as exc:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(exc))
    return _to_profile_response(profile)


@router.get("", response_model=IdentityListResponse)
async def list_identities(service: LedgerService = Depends(get_ledger_service)):
    """All registered identities in registration order"""
    return IdentityListResponse(identities=await service.list_identities())


@router.get("/{identity}", response_model=ProfileResponse)
async def get_profile(identity: str, service: LedgerService = Depends(get_ledger_service)):
    """Unregistered identities return the zero-value profile, not 404."""
    return _to_profile_response(await service.get_profile(identity))
