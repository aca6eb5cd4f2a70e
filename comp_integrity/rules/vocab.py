"""Reference vocabularies: countries, currencies and performance ratings."""

VALID_COUNTRIES: frozenset[str] = frozenset({
    # ISO-style codes used in HRIS exports
    "US", "CA", "UK", "DE", "FR", "AU", "JP", "IN", "BR", "MX", "NL", "SE", "NO", "DK", "FI",
    # full names as they appear in the comp team's spreadsheets
    "United States of America", "India", "Canada", "United Kingdom", "Germany", "France",
    "Australia", "Japan", "Brazil", "Mexico", "Netherlands", "Sweden", "Norway", "Denmark",
    "Finland",
})

VALID_CURRENCIES: frozenset[str] = frozenset({
    "USD", "CAD", "GBP", "EUR", "AUD", "JPY", "INR", "BRL", "MXN", "SEK", "NOK", "DKK",
})

COUNTRY_SYNONYMS: dict[str, str] = {
    "united states": "US",
    "united states of america": "US",
    "usa": "US",
    "canada": "CA",
    "united kingdom": "UK",
    "great britain": "UK",
    "germany": "DE",
    "france": "FR",
    "australia": "AU",
    "japan": "JP",
    "india": "IN",
    "brazil": "BR",
    "mexico": "MX",
    "netherlands": "NL",
    "sweden": "SE",
    "norway": "NO",
    "denmark": "DK",
    "finland": "FI",
}

CURRENT_RATINGS: tuple[str, ...] = (
    "High Impact Performer",
    "Successful Performer",
    "Evolving Performer",
    "Needs Improvement",
    "Unsatisfactory",
)

LEGACY_RATINGS: tuple[str, ...] = (
    "Exceeds Expectations",
    "Meets Expectations",
    "Below Expectations",
)

VALID_RATINGS: frozenset[str] = frozenset(CURRENT_RATINGS + LEGACY_RATINGS)

RATING_SYNONYMS: dict[str, str] = {
    "exceeds": "Exceeds Expectations",
    "exceeds expectations": "Exceeds Expectations",
    "excellent": "Exceeds Expectations",
    "meets": "Meets Expectations",
    "meets expectations": "Meets Expectations",
    "good": "Meets Expectations",
    "below": "Below Expectations",
    "below expectations": "Below Expectations",
    "poor": "Below Expectations",
    "needs improvement": "Needs Improvement",
    "high impact performer": "High Impact Performer",
    "high impact": "High Impact Performer",
    "successful performer": "Successful Performer",
    "successful": "Successful Performer",
    "evolving performer": "Evolving Performer",
    "evolving": "Evolving Performer",
    "unsatisfactory": "Unsatisfactory",
}

# used by the rating/comparatio alignment rules
HIGH_PERFORMANCE_RATINGS: frozenset[str] = frozenset({
    "Exceeds Expectations",
    "High Impact Performer",
})

LOW_PERFORMANCE_RATINGS: frozenset[str] = frozenset({
    "Below Expectations",
    "Needs Improvement",
    "Unsatisfactory",
})


def is_known_country(value: str) -> bool:
    """Accept a code, a full name, or a case-insensitive synonym."""
    trimmed = value.strip()
    return (
        trimmed in VALID_COUNTRIES
        or trimmed.lower() in COUNTRY_SYNONYMS
        or trimmed in COUNTRY_SYNONYMS.values()
    )


def canonical_country(value: str) -> str:
    return COUNTRY_SYNONYMS.get(value.strip().lower(), value)


def canonical_rating(value: str) -> str:
    return RATING_SYNONYMS.get(value.strip().lower(), value)
