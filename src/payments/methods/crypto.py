"""Cryptocurrency payments (Bitcoin, Ethereum).

Validation rules:
- Amount must be at least €10.00
- Network must be BITCOIN or ETHEREUM (case-insensitive)
- Wallet address must match the declared network's format

Fee: 1.0% + a simulated network gas fee. Processing is gated by a simulated
congestion check: when the network is congested, a share of payments fail.
"""

import re
from decimal import Decimal

import structlog

from dispatch.money import round_half_up
from dispatch.port import matches
from dispatch.random_source import RandomSource
from payments.methods.base import PaymentHandler
from payments.payment import CryptoNetwork, PaymentMethod, PaymentRequest

logger = structlog.get_logger(__name__)

MINIMUM_AMOUNT = Decimal("10.00")

ADDRESS_PATTERNS = {
    CryptoNetwork.BITCOIN: re.compile(r"(1|3|bc1)[a-zA-HJ-NP-Z0-9]{25,62}"),
    CryptoNetwork.ETHEREUM: re.compile(r"0x[a-fA-F0-9]{40}"),
}
ADDRESS_ERROR_MSGS = {
    CryptoNetwork.BITCOIN: "Invalid Bitcoin address format",
    CryptoNetwork.ETHEREUM: "Invalid Ethereum address format",
}
MINIMUM_AMOUNT_ERROR_MSG = "Cryptocurrency payment minimum is €10.00"
INVALID_NETWORK_ERROR_MSG = "Network type is not supported"
HIGH_NETWORK_CONGESTION_MSG = "High network congestion - try again"

PERCENTAGE_FEE = Decimal("0.01")

# (upper bound of the draw, gas fee): 50% low, 35% medium, 15% high congestion
GAS_FEE_TIERS = (
    (0.5, Decimal("1.00")),
    (0.85, Decimal("2.50")),
    (1.0, Decimal("5.00")),
)


def parse_network(value: str) -> CryptoNetwork | None:
    try:
        return CryptoNetwork[value.strip().upper()]
    except KeyError:
        return None


class CryptoHandler(PaymentHandler):
    discriminant = PaymentMethod.CRYPTO
    required_fields = ("wallet_address", "network")

    def __init__(
        self,
        random_source: RandomSource | None = None,
        congestion_probability: float = 0.15,
        congestion_failure_rate: float = 0.3,
    ) -> None:
        super().__init__(random_source)
        self.congestion_probability = congestion_probability
        self.congestion_failure_rate = congestion_failure_rate

    def check_rules(self, request: PaymentRequest) -> list[str]:
        errors = []
        if request.amount < MINIMUM_AMOUNT:
            errors.append(MINIMUM_AMOUNT_ERROR_MSG)

        network = parse_network(request.parameter("network"))
        if network is None:
            errors.append(INVALID_NETWORK_ERROR_MSG)
        elif not matches(ADDRESS_PATTERNS[network], request.parameter("wallet_address")):
            errors.append(ADDRESS_ERROR_MSGS[network])

        return errors

    def simulate_processing(self, request: PaymentRequest) -> None:
        if self.random_source.random() < self.congestion_probability:
            logger.warning("Crypto network congested", network=request.parameter("network"))
            self.simulate_failure(self.congestion_failure_rate, HIGH_NETWORK_CONGESTION_MSG)

    def calculate_fee(self, amount: Decimal) -> Decimal:
        gas_fee = self.network_gas_fee()
        logger.debug("Network gas fee calculated", gas_fee=str(gas_fee))
        return round_half_up(amount * PERCENTAGE_FEE + gas_fee)

    def network_gas_fee(self) -> Decimal:
        draw = self.random_source.random()
        for upper_bound, gas_fee in GAS_FEE_TIERS:
            if draw < upper_bound:
                return gas_fee
        return GAS_FEE_TIERS[-1][1]
