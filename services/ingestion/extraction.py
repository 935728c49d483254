from __future__ import annotations

from dataclasses import dataclass

from domain.models import ExtractedFields, ValidationResult
from domain.value_objects import FileMetadata
from services.forms.matching import STANDARD_LOAN_THRESHOLD

DEFAULT_LOAN_AMOUNT = 5_000_000
EXTRACTION_CONFIDENCE = 0.92
HIGH_VALUE_WARNING = "High-value loan requires additional approvals"


@dataclass
class ExtractionResult:
    fields: ExtractedFields
    confidence: float
    validation: ValidationResult


def extract_loan_fields(file: FileMetadata, loan_amount: float | None = None) -> ExtractionResult:
    """
    Mocked CAM extraction: the payload is constant and never reads file content.
    Only the loan amount may be overridden by the caller.
    """
    amount = DEFAULT_LOAN_AMOUNT if loan_amount is None else loan_amount
    fields = ExtractedFields(
        borrower_name="Sample Borrower Corp",
        loan_amount=amount,
        loan_term=60,
        interest_rate=4.25,
        loan_type="Commercial Real Estate",
        jurisdiction="New York",
        collateral="Commercial Property - 123 Business Ave",
    )

    warnings: list[str] = []
    if amount > STANDARD_LOAN_THRESHOLD:
        warnings.append(HIGH_VALUE_WARNING)

    return ExtractionResult(
        fields=fields,
        confidence=EXTRACTION_CONFIDENCE,
        validation=ValidationResult(is_valid=True, errors=[], warnings=warnings),
    )
