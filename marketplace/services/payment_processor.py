import asyncio
import logging
from enum import Enum
from typing import Optional

from pydantic import BaseModel

logger = logging.getLogger(__name__)


class ProcessingOutcome(str, Enum):
    SUCCESS = "success"
    FAILED = "failed"
    TIMED_OUT = "timed_out"
    CANCELLED = "cancelled"


class ProcessingResult(BaseModel):
    outcome: ProcessingOutcome
    reference: Optional[str] = None
    detail: Optional[str] = None

    @property
    def succeeded(self) -> bool:
        return self.outcome == ProcessingOutcome.SUCCESS


class PaymentConfirmation:
    """Waits for settlement of a checkout. Gateway integrations subclass this."""

    async def confirm(self, checkout_id: str) -> ProcessingResult:
        raise NotImplementedError


class SimulatedSettlement(PaymentConfirmation):
    def __init__(self, delay_seconds: float = 5.0):
        self.delay_seconds = delay_seconds

    async def confirm(self, checkout_id: str) -> ProcessingResult:
        logger.info(f"Awaiting simulated settlement for {checkout_id} ({self.delay_seconds}s)")
        await asyncio.sleep(self.delay_seconds)

        return ProcessingResult(
            outcome=ProcessingOutcome.SUCCESS,
            reference=f"sim_{checkout_id}",
        )


async def await_confirmation(
    task: "asyncio.Task[ProcessingResult]",
    timeout_seconds: Optional[float],
) -> ProcessingResult:
    """
    Wait for a confirmation task and fold errors into an outcome.

    The task is cancelled before returning on every path except normal
    completion, including cancellation of the caller.
    """
    try:
        return await asyncio.wait_for(asyncio.shield(task), timeout=timeout_seconds)
    except asyncio.TimeoutError:
        logger.warning("Payment confirmation timed out")
        return ProcessingResult(outcome=ProcessingOutcome.TIMED_OUT, detail="confirmation timed out")
    except asyncio.CancelledError:
        if task.cancelled():
            logger.info("Payment confirmation withdrawn")
            return ProcessingResult(outcome=ProcessingOutcome.CANCELLED, detail="confirmation cancelled")
        raise
    except Exception as e:
        logger.error(f"Payment confirmation failed: {e}")
        return ProcessingResult(outcome=ProcessingOutcome.FAILED, detail=str(e))
    finally:
        if not task.done():
            task.cancel()
