"""Rent and home-ownership affordability calculations.

Thresholds follow the HUD cost-burden convention: housing costs above 30% of
gross income are burdensome.
"""

AFFORDABLE_SHARE = 0.30
COMFORTABLE_SHARE = 0.25

# Verdict tiers as (max % of income, label), ascending
VERDICT_TIERS = [
    (25.0, "comfortable"),
    (30.0, "affordable"),
    (40.0, "tight"),
]
UNAFFORDABLE = "unaffordable"

# Ownership cost assumptions (annual, as share of home price / loan)
PROPERTY_TAX_RATE = 0.011
INSURANCE_RATE = 0.005
PMI_RATE = 0.007
PMI_DOWN_PAYMENT_THRESHOLD = 0.20
LOAN_TERM_MONTHS = 360


def rent_to_income_ratio(monthly_rent: float | None, annual_income: float | None) -> float | None:
    """Monthly rent as a percent of gross monthly income."""
    if monthly_rent is None or annual_income is None or annual_income <= 0:
        return None
    return 100 * monthly_rent * 12 / annual_income


def affordability_verdict(ratio: float | None) -> str | None:
    if ratio is None:
        return None
    for ceiling, label in VERDICT_TIERS:
        if ratio <= ceiling:
            return label
    return UNAFFORDABLE


def income_required(monthly_rent: float | None, share: float = AFFORDABLE_SHARE) -> float | None:
    """Annual income needed for the rent to be `share` of gross income."""
    if monthly_rent is None or share <= 0:
        return None
    return monthly_rent / share * 12


def monthly_mortgage_payment(principal: float, annual_rate_pct: float) -> float:
    """Principal-and-interest payment on a 30-year fixed loan."""
    if principal <= 0:
        return 0.0
    r = annual_rate_pct / 100 / 12
    if r == 0:
        return principal / LOAN_TERM_MONTHS
    growth = (1 + r) ** LOAN_TERM_MONTHS
    return principal * r * growth / (growth - 1)


def monthly_ownership_cost(
    home_price: float, down_payment: float, annual_rate_pct: float
) -> dict[str, float]:
    """Monthly P&I, property tax, insurance and PMI for a purchase."""
    loan = max(home_price - down_payment, 0.0)
    principal_and_interest = monthly_mortgage_payment(loan, annual_rate_pct)
    property_tax = home_price * PROPERTY_TAX_RATE / 12
    insurance = home_price * INSURANCE_RATE / 12
    pmi = 0.0
    if down_payment < home_price * PMI_DOWN_PAYMENT_THRESHOLD:
        pmi = loan * PMI_RATE / 12
    return {
        "principal_and_interest": principal_and_interest,
        "property_tax": property_tax,
        "insurance": insurance,
        "pmi": pmi,
        "total": principal_and_interest + property_tax + insurance + pmi,
    }
