from marketplace.config import settings
from marketplace.services.payment_processor import PaymentConfirmation, SimulatedSettlement


def get_payment_confirmation() -> PaymentConfirmation:
    return SimulatedSettlement(delay_seconds=settings.processing_delay_seconds)
