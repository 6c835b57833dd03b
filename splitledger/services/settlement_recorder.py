from splitledger.models.settlement import SettlementEvent
from splitledger.utils.ledger_validation import validate_settlement


class SettlementRecorder:
    """
    Attests settlements between two identities.

    The value transfer itself happens outside the ledger; amount is
    whatever the transfer layer reports. Ledger balances are untouched.
    """

    def settle(self, from_identity: str, to_identity: str, amount: int) -> SettlementEvent:
        validate_settlement(from_identity, to_identity, amount)
        return SettlementEvent(
            from_identity=from_identity,
            to_identity=to_identity,
            amount=amount,
        )
