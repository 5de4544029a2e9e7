"""Receipt scan services package."""

from spend_tracker.services.scan.receipt_scanner import (
    MOCK_RECEIPTS,
    MockReceiptScanner,
    ReceiptScanner,
    ScanError,
    extract_amount_from_text,
    extract_merchant_from_text,
)

__all__ = [
    "MOCK_RECEIPTS",
    "MockReceiptScanner",
    "ReceiptScanner",
    "ScanError",
    "extract_amount_from_text",
    "extract_merchant_from_text",
]
