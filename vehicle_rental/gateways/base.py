"""Base payment gateway interface.

All gateway adapters must implement this interface.
Business logic should NOT live in adapters - only the accept/decline
decision for a card charge.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass
from enum import Enum


class GatewayType(str, Enum):
    """Supported payment gateways."""

    SIMULATED = "SIMULATED"


@dataclass(frozen=True)
class CardDetails:
    """Card fields as submitted by the customer (already format-checked)."""

    number: str
    holder: str
    expiry: str
    cvv: str


@dataclass
class PaymentResult:
    """Result of a payment operation."""

    success: bool
    transaction_id: str | None = None
    error_message: str | None = None
    raw_response: dict | None = None


class PaymentGateway(ABC):
    """Abstract base class for payment gateways."""

    @property
    @abstractmethod
    def gateway_type(self) -> GatewayType:
        """Return the gateway type."""

    @abstractmethod
    async def charge_card(
        self,
        amount: int,
        currency: str,
        reference_id: str,
        card: CardDetails,
    ) -> PaymentResult:
        """Charge a card.

        Args:
            amount: Amount in whole currency units
            currency: Currency code (XAF)
            reference_id: Internal reference (booking number)
            card: Card details

        Returns:
            PaymentResult; ``success`` is False when the issuer declines
        """
