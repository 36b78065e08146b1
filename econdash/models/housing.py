"""Normalized HUD Fair Market Rent and Income Limits models."""

from econdash.models.schema import CamelModel

BEDROOM_LABELS = ["Studio", "1 BR", "2 BR", "3 BR", "4 BR"]


class FairMarketRent(CamelModel):
    zip_code: str
    county_name: str | None = None
    metro_name: str | None = None
    year: int | None = None
    fmr_0br: float | None = None
    fmr_1br: float | None = None
    fmr_2br: float | None = None
    fmr_3br: float | None = None
    fmr_4br: float | None = None
    small_area: bool = False

    def rents(self) -> list[float | None]:
        """Rents ordered by bedroom count, studio first."""
        return [self.fmr_0br, self.fmr_1br, self.fmr_2br, self.fmr_3br, self.fmr_4br]

    def fmr_for_beds(self, beds: int) -> float | None:
        """Return FMR for a given bedroom count (capped at 4)."""
        return self.rents()[max(0, min(beds, 4))]


class IncomeLimits(CamelModel):
    zip_code: str
    median_income: float | None = None
    # Keyed by household size (1-8)
    very_low: dict[int, float] = {}
    extremely_low: dict[int, float] = {}
    low: dict[int, float] = {}
