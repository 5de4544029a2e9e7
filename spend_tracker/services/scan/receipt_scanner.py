"""
Receipt Scan Service

DESIGN DECISION: Scanning is an abstract capability.
The add-expense flow only sees ReceiptScanner.scan() and a ScanResult,
so a real OCR backend can replace the mock without touching the flow.

The shipped implementation is a MOCK:
1. It waits a fixed delay to simulate processing
2. It returns one of five literal receipts chosen at random
3. It never looks at the image

CRITICAL: A scan only pre-fills the form. Nothing is stored until the
user submits.
"""

import asyncio
import random
import re
from abc import ABC, abstractmethod
from datetime import date
from decimal import Decimal, InvalidOperation
from typing import Callable, Optional

import structlog

from spend_tracker.config import get_settings
from spend_tracker.models.expense import ScanResult


logger = structlog.get_logger(__name__)


# (amount, merchant, receipt header, total label)
MOCK_RECEIPTS: list[tuple[str, str, str, str]] = [
    ("45.67", "Starbucks Coffee", "STARBUCKS COFFEE", "Total"),
    ("123.45", "Target Store", "TARGET", "Subtotal"),
    ("28.99", "McDonald's", "McDonald's", "Total"),
    ("89.50", "Whole Foods Market", "WHOLE FOODS MARKET", "Total"),
    ("15.75", "Subway", "SUBWAY", "Total"),
]

_AMOUNT_PATTERN = re.compile(r"\$?(\d+\.?\d*)")
_SHORT_DATE_PATTERN = re.compile(r"\d{2}/\d{2}")


class ScanError(Exception):
    """Base exception for scan errors."""
    pass


class ReceiptScanner(ABC):
    """
    Extracts expense details from a receipt image.

    IMPORTANT BOUNDARIES:
    1. A scanner never raises for an unreadable image, it returns
       ScanResult(success=False)
    2. A scanner never stores anything
    """

    @abstractmethod
    async def scan(self, image_ref: str) -> ScanResult:
        """
        Scan a receipt.

        Args:
            image_ref: Opaque reference to the captured or selected image

        Returns:
            ScanResult with the extracted fields, or success=False
        """
        pass

    def should_proceed_with_scan(self, result: ScanResult) -> tuple[bool, str]:
        """
        Decide whether the scan is usable as a form pre-fill.

        Returns: (should_proceed, message_for_user)
        """
        if not result.success:
            return False, (
                "Could not extract data from the image. "
                "Please try again or add manually."
            )

        if result.amount is None:
            return True, (
                "Receipt scanned, but no total was found. "
                "Please enter the amount before saving."
            )

        return True, "Receipt scanned. Please review the details and save."


class MockReceiptScanner(ReceiptScanner):
    """
    Scanner that pretends to read a receipt.

    The random source and the clock are injectable so tests can
    pin the outcome.
    """

    def __init__(
        self,
        delay_seconds: Optional[float] = None,
        rng: Optional[random.Random] = None,
        today: Callable[[], date] = date.today,
    ):
        if delay_seconds is None:
            delay_seconds = get_settings().scan.delay_seconds
        self._delay_seconds = delay_seconds
        self._rng = rng or random.Random()
        self._today = today

    async def scan(self, image_ref: str) -> ScanResult:
        logger.info("processing_receipt_image", image_ref=image_ref)

        if not image_ref:
            logger.warning("receipt_scan_failed", reason="no image")
            return ScanResult(
                success=False,
                raw_text="Failed to process image: no image provided",
            )

        await asyncio.sleep(self._delay_seconds)

        amount, merchant, header, label = self._rng.choice(MOCK_RECEIPTS)
        today = self._today()
        raw_text = (
            f"{header}\n"
            f"{label}: ${amount}\n"
            f"Date: {today.month}/{today.day}/{today.year}"
        )

        result = ScanResult(
            success=True,
            amount=Decimal(amount),
            merchant=merchant,
            date=today.isoformat(),
            raw_text=raw_text,
        )
        logger.info("receipt_processed", merchant=merchant, amount=amount)
        return result


def extract_amount_from_text(text: str) -> Optional[Decimal]:
    """
    Pull an amount out of raw receipt text.

    Takes the LAST number in the text, with an optional leading '$'.
    """
    matches = _AMOUNT_PATTERN.findall(text or "")
    if not matches:
        return None
    try:
        return Decimal(matches[-1])
    except InvalidOperation:
        return None


def extract_merchant_from_text(text: str) -> Optional[str]:
    """
    Guess the merchant from raw receipt text.

    The merchant is usually printed in the first few lines: take the
    first of the top three lines that is longer than two characters and
    holds neither a price nor a dd/dd date.
    """
    lines = (text or "").split("\n")
    for line in lines[:3]:
        line = line.strip()
        if len(line) > 2 and "$" not in line and not _SHORT_DATE_PATTERN.search(line):
            return line
    return None
