from __future__ import annotations

from domain.models import FormReference

LARGE_LOAN_THRESHOLD = 10_000_000
STANDARD_LOAN_THRESHOLD = 1_000_000

FORM_A_LARGE = FormReference(
    form_id="FORM_A_LARGE",
    form_name="Large Commercial Loan Agreement",
    template_path="templates/large-commercial-loan.docx",
    jurisdiction="New York",
    priority=1,
    required_approvals=("Senior Credit Officer", "Legal Counsel", "Risk Manager"),
)

FORM_B_COMPLIANCE = FormReference(
    form_id="FORM_B_COMPLIANCE",
    form_name="High-Value Compliance Form",
    template_path="templates/high-value-compliance.docx",
    jurisdiction="Federal",
    priority=2,
    required_approvals=("Compliance Officer",),
)

FORM_STANDARD_COMMERCIAL = FormReference(
    form_id="FORM_STANDARD_COMMERCIAL",
    form_name="Standard Commercial Loan Agreement",
    template_path="templates/standard-commercial.docx",
    jurisdiction="New York",
    priority=1,
    required_approvals=("Credit Officer", "Legal Review"),
)

FORM_SMALL_BUSINESS = FormReference(
    form_id="FORM_SMALL_BUSINESS",
    form_name="Small Business Loan Agreement",
    template_path="templates/small-business.docx",
    jurisdiction="New York",
    priority=1,
    required_approvals=("Loan Officer",),
)


def match_forms(loan_amount: float) -> list[FormReference]:
    """Return the legal forms for a loan amount, ordered by priority (deterministic).

    Thresholds are exclusive on the lower side: exactly 1,000,000 is still a
    small-business loan and exactly 10,000,000 is still standard commercial.
    """
    # T1: large commercial loans need the agreement plus the compliance form
    if loan_amount > LARGE_LOAN_THRESHOLD:
        return [FORM_A_LARGE, FORM_B_COMPLIANCE]

    # T2: mid-size commercial loans
    if loan_amount > STANDARD_LOAN_THRESHOLD:
        return [FORM_STANDARD_COMMERCIAL]

    # T3: everything else, including zero / negative amounts
    return [FORM_SMALL_BUSINESS]
