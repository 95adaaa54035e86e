"""
Shape checks for answers collected during guided flows.

Every validator takes the visitor's raw message and decides whether it
looks like the value the current step asked for. They are deliberately
permissive: the goal is to catch answers to a different question, not to
parse dates or addresses.
"""

import re

from salesbot.utils import contains_any, normalize_text

MIN_REASON_LENGTH = 3
MIN_CONTACT_DIGITS = 9

_DATE_NUMERIC = re.compile(r"\b\d{1,2}[/-]\d{1,2}(?:[/-]\d{2,4})?\b")
_TIME_CLOCK = re.compile(r"\b(?:[01]?\d|2[0-3])(?:[:.h][0-5]\d|\s?h)\b")
_TIME_MERIDIEM = re.compile(r"\b\d{1,2}\s*(?:am|pm)\b")
_EMAIL = re.compile(r"[A-Za-z0-9._%+-]+@[A-Za-z0-9.-]+\.[A-Za-z]{2,}")
_BUDGET_AMOUNT = re.compile(r"\b\d{1,3}(?:[.,\s]\d{3})+\b|\b\d{4,}\b")
_BUDGET_SHORT = re.compile(r"\b\d+\s?k\b")
_ANY_NUMBER = re.compile(r"\b\d+\b")
_YEAR = re.compile(r"\b(?:19|20)\d{2}\b")
_VIN = re.compile(r"\b[a-hj-npr-z0-9]{17}\b")
_WORD = re.compile(r"[a-z]{4,}")

DATE_TERMS = [
    "hoy", "manana", "pasado manana", "semana que viene", "proxima semana",
    "lunes", "martes", "miercoles", "jueves", "viernes", "sabado", "domingo",
    "today", "tomorrow", "next week",
    "monday", "tuesday", "wednesday", "thursday", "friday", "saturday", "sunday",
]
TIME_TERMS = [
    "manana", "tarde", "noche", "mediodia", "a las",
    "morning", "afternoon", "evening", "noon", "o clock",
]
MODE_TERMS = ["presencial", "online", "virtual", "remoto", "videollamada", "in person", "video call"]
IN_PERSON_TERMS = ["presencial", "in person"]
ZONE_TERMS = [
    "madrid", "barcelona", "valencia", "sevilla", "malaga", "bilbao", "zaragoza",
    "centro", "norte", "sur", "este", "oeste", "barrio", "zona", "area", "downtown",
]
BUDGET_TERMS = ["eur", "euro*", "mil", "k", "presupuesto", "budget", "hasta", "up to"]
ROOM_TERMS = [
    "habitacion*", "dormitorio*", "bedroom*", "room*",
    "una", "uno", "dos", "tres", "cuatro", "cinco", "one", "two", "three", "four", "five",
]
PROPERTY_TYPE_TERMS = [
    "piso*", "chalet*", "casa*", "obra nueva", "inversion", "local*", "atico*", "duplex",
    "apartment*", "flat", "house*", "new build", "investment", "commercial",
]
GOAL_TERMS = [
    "vivir", "alquilar", "alquiler", "inversion", "invertir",
    "living", "live", "rent*", "investment", "invest",
]
ENGINE_TERMS = [
    "motor", "diesel", "gasolina", "hibrido", "hdi", "tdi", "tsi", "dci", "cv",
    "engine", "petrol", "hybrid", "hp",
]


def looks_like_date(raw: str) -> bool:
    text = normalize_text(raw)
    return contains_any(text, DATE_TERMS) or bool(_DATE_NUMERIC.search(raw or ""))


def looks_like_time(raw: str) -> bool:
    text = normalize_text(raw)
    if contains_any(text, TIME_TERMS):
        return True
    lowered = (raw or "").lower()
    return bool(_TIME_MERIDIEM.search(lowered) or _TIME_CLOCK.search(lowered))


def looks_like_contact(raw: str) -> bool:
    """An email address, or a phone number with at least nine digits."""
    if not raw:
        return False
    if _EMAIL.search(raw):
        return True
    return sum(ch.isdigit() for ch in raw) >= MIN_CONTACT_DIGITS


def is_valid_reason(raw: str) -> bool:
    """A meeting motive: some text that is not a date, a time or a contact."""
    text = normalize_text(raw)
    if len(text) < MIN_REASON_LENGTH:
        return False
    if (raw or "").strip().endswith("?"):
        return False
    return not (looks_like_date(raw) or looks_like_time(raw) or looks_like_contact(raw))


def looks_like_mode(raw: str) -> bool:
    return contains_any(normalize_text(raw), MODE_TERMS)


def normalize_mode(raw: str, lang: str) -> str:
    """Map an accepted mode answer to the label shown in the summary."""
    in_person = contains_any(normalize_text(raw), IN_PERSON_TERMS)
    if lang == "en":
        return "in-person" if in_person else "online"
    return "presencial" if in_person else "online"


def looks_like_zone(raw: str) -> bool:
    text = normalize_text(raw)
    return contains_any(text, ZONE_TERMS) or bool(_WORD.search(text))


def looks_like_budget(raw: str) -> bool:
    text = normalize_text(raw)
    if "€" in (raw or ""):
        return True
    return bool(
        _BUDGET_AMOUNT.search(raw or "")
        or _BUDGET_SHORT.search(text)
        or contains_any(text, BUDGET_TERMS)
    )


def looks_like_rooms(raw: str) -> bool:
    text = normalize_text(raw)
    return bool(_ANY_NUMBER.search(text)) or contains_any(text, ROOM_TERMS)


def looks_like_property_type(raw: str) -> bool:
    return contains_any(normalize_text(raw), PROPERTY_TYPE_TERMS)


def looks_like_goal(raw: str) -> bool:
    return contains_any(normalize_text(raw), GOAL_TERMS)


def looks_like_vehicle_data(raw: str) -> bool:
    """A 17-character VIN, or a model year together with an engine keyword."""
    text = normalize_text(raw)
    if _VIN.search(text):
        return True
    return bool(_YEAR.search(text)) and contains_any(text, ENGINE_TERMS)
