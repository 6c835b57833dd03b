from datetime import datetime
from pydantic import BaseModel, ConfigDict, Field

from splitledger.models.base import Amount, Identity, _utcnow


class SettlementEvent(BaseModel):
    """Attestation that from_identity paid amount to to_identity. Never stored."""
    model_config = ConfigDict(frozen=True)

    from_identity: Identity
    to_identity: Identity
    amount: Amount
    created_at: datetime = Field(default_factory=_utcnow)
