import time
from uuid import uuid4
from typing import Dict

class MockCheckoutGateway:
    """
    Stand-in for the external order/payment confirmation service.
    It waits a fixed delay to simulate network latency and always confirms;
    failures are not modeled.
    """

    def __init__(self, delay_ms: int = 2000):
        # Convert delay from milliseconds to seconds for time.sleep
        self.delay_seconds = delay_ms / 1000.0

    def confirm(self, order_id: str, amount: int) -> Dict:
        """
        Simulates confirming an order with the gateway.

        Args:
            order_id: The transaction id being confirmed.
            amount: The final payable amount in rupiah.

        Returns:
            A dictionary describing the confirmation.
        """
        if self.delay_seconds > 0:
            time.sleep(self.delay_seconds)
        return {
            "confirmation_id": f"mock-{uuid4().hex}",
            "order_id": order_id,
            "status": "confirmed",
            "amount": amount,
        }

    def health_check(self) -> bool:
        return True
