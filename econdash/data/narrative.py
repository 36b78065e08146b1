"""Claude API client for the daily economic briefing."""

import logging
from datetime import date, datetime, timezone

import anthropic

from econdash.config import settings
from econdash.models.summary import EconomicSummary

logger = logging.getLogger(__name__)

NA = "N/A"

INSTRUCTIONS = """Write a concise economic briefing (150-200 words) for a federal policy analyst or informed citizen. Structure it as:

1. **The Big Picture** (1-2 sentences): Overall economic assessment
2. **What Changed** (2-3 bullet points): Notable recent developments
3. **Watch List** (1-2 bullet points): Risks or indicators to monitor
4. **Bottom Line** (1 sentence): Summary takeaway

Guidelines:
- Be factual and balanced - avoid political commentary
- Use plain English, not jargon
- Reference specific numbers from the data
- Note any recession signals or their absence
- Compare current values to historical norms where relevant (e.g., 4% unemployment is historically low, 2% is the Fed's inflation target)

Do not include a title or date header - those will be added separately."""


def _fmt(value: float | None, format_spec: str = "") -> str:
    return NA if value is None else format(value, format_spec)


def _movement(change: float | None) -> str:
    if change is None:
        return "change N/A"
    if change == 0:
        return "unchanged"
    return f"{'up' if change > 0 else 'down'} {abs(change):g}"


def _yield_at(summary: EconomicSummary, maturity: str) -> str:
    for point in summary.yield_curve:
        if point.maturity == maturity:
            return f"{point.rate:.2f}"
    return NA


def _headline_lines(summary: EconomicSummary) -> list[str]:
    s = summary.summary
    gdp = s.gdp
    growth = NA if gdp.change is None else f"{gdp.change:+g}"
    return [
        "HEADLINE NUMBERS:",
        f"- GDP: ${_fmt(gdp.value)}T ({gdp.label}), {growth}% annualized growth",
        f"- Unemployment: {_fmt(s.unemployment.value)}%, {_movement(s.unemployment.change)} from prior month",
        f"- CPI (YoY): {_fmt(s.inflation.value)}%, {_movement(s.inflation.change)} from prior month",
        f"- Fed Funds Rate: {_fmt(s.fed_funds.value)}%, {_movement(s.fed_funds.change)}",
    ]


def build_briefing_prompt(summary: EconomicSummary, today: date) -> str:
    """Render the economic summary as the data block of the briefing prompt."""
    recession = summary.recession_indicators
    labor = summary.labor_market
    if recession.yield_inversion is None:
        spread_state, curve_signal = NA, NA
    elif recession.yield_inversion:
        spread_state, curve_signal = "INVERTED", "Inverted (recession signal)"
    else:
        spread_state, curve_signal = "positive/normal", "Normal (no signal)"
    starts = summary.housing_data[-1].starts if summary.housing_data else None

    lines = [
        f"Here is today's economic data ({today:%A, %B} {today.day}, {today.year}):",
        "",
        *_headline_lines(summary),
        "",
        "YIELD CURVE:",
        f"- 2Y Treasury: {_yield_at(summary, '2Y')}%",
        f"- 10Y Treasury: {_yield_at(summary, '10Y')}%",
        f"- 2Y-10Y Spread: {_fmt(recession.current_spread)}% ({spread_state})",
        "",
        "RECESSION INDICATORS:",
        f"- Sahm Rule: {_fmt(recession.sahm_rule)} (threshold is 0.5 - above = recession signal)",
        f"- Yield Curve: {curve_signal}",
        f"- Unemployment Trend: {recession.unemployment_trend or NA}",
        "",
        "HOUSING:",
        f"- 30Y Mortgage Rate: {_fmt(summary.mortgage30)}%",
        f"- Housing Starts: {_fmt(starts, '.2f')}M annualized",
        "",
        "LABOR MARKET:",
        f"- Job Openings (JOLTS): {_fmt(labor.jolts)}M",
        f"- Quits Rate: {_fmt(labor.quits)}%",
        f"- Hires: {_fmt(labor.hires)}M",
        f"- Labor Force Participation: {_fmt(labor.participation)}%",
    ]
    return "\n".join(lines) + "\n\n" + INSTRUCTIONS


async def generate_briefing(summary: EconomicSummary, today: date | None = None) -> str | None:
    """Generate the daily briefing text using Claude API.

    Returns None if the API key is missing or the call fails.
    """
    api_key = settings.anthropic_api_key
    if not api_key:
        logger.debug("Anthropic API key not configured, skipping briefing")
        return None

    prompt = build_briefing_prompt(summary, today or datetime.now(timezone.utc).date())
    try:
        client = anthropic.AsyncAnthropic(api_key=api_key)
        message = await client.messages.create(
            model=settings.briefing_model,
            max_tokens=settings.briefing_max_tokens,
            messages=[{"role": "user", "content": prompt}],
        )
    except anthropic.APIError as e:
        logger.warning("Claude briefing generation failed: %s", e)
        return None

    text = "".join(block.text for block in message.content if getattr(block, "type", None) == "text")
    if not text.strip():
        logger.warning("Claude returned an empty briefing")
        return None
    return text
