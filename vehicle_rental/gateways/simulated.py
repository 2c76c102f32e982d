"""Simulated card gateway for demonstrations and tests.

Every well-formed card is accepted except numbers ending in ``0002``,
which are declined. Expiry and CVV never influence the outcome.
"""

from vehicle_rental.gateways.base import (
    CardDetails,
    GatewayType,
    PaymentGateway,
    PaymentResult,
)
from vehicle_rental.utils.booking_number import generate_transaction_id
from vehicle_rental.utils.validators import mask_card_number, normalize_card_number

DECLINE_SUFFIX = "0002"


def should_decline(card_number: str) -> bool:
    return normalize_card_number(card_number).endswith(DECLINE_SUFFIX)


class SimulatedGateway(PaymentGateway):
    """Deterministic in-process card gateway."""

    @property
    def gateway_type(self) -> GatewayType:
        return GatewayType.SIMULATED

    async def charge_card(
        self,
        amount: int,
        currency: str,
        reference_id: str,
        card: CardDetails,
    ) -> PaymentResult:
        masked = mask_card_number(card.number)
        if should_decline(card.number):
            return PaymentResult(
                success=False,
                error_message="Card declined by issuer",
                raw_response={"reference": reference_id, "card": masked, "status": "declined"},
            )
        return PaymentResult(
            success=True,
            transaction_id=generate_transaction_id(),
            raw_response={
                "reference": reference_id,
                "card": masked,
                "amount": amount,
                "currency": currency,
                "status": "approved",
            },
        )


_gateway = SimulatedGateway()


def get_gateway() -> PaymentGateway:
    """Return the configured payment gateway."""
    return _gateway
