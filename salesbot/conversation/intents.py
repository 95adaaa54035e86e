"""
Rule-based intent classification over normalized messages.

Rules are evaluated in priority order and the first match wins. Privacy
and contact checks run first so that "store my data" never reads as a
generic contact request; tenant-scoped rules (property search) only fire
for the tenant that supports them.

Usage:
    classifier = IntentClassifier()
    classifier.classify("A", normalize_text("Hola"))  # Intent.GREETING
"""

import logging
from dataclasses import dataclass
from enum import Enum
from typing import Callable

from salesbot.tools.tenants import supports_property_search
from salesbot.utils import contains_any

logger = logging.getLogger(__name__)

GREETING_MAX_LENGTH = 20


class Intent(str, Enum):
    """Closed set of message intents."""
    DEFAULT = "default"
    GREETING = "greeting"
    IDENTITY = "identity"
    LOCATION = "location"
    DIRECTIONS = "directions"
    CONTACT_INFO = "contact_info"
    APPOINTMENT = "appointment"
    PROPERTY_SEARCH = "property_search"
    CATALOG = "catalog"
    PRIVACY = "privacy"
    PERSONAL = "personal"
    SMALLTALK = "smalltalk"


PRIVACY_TERMS = [
    "privacidad", "conversacion privada", "es privada", "rgpd", "gdpr",
    "datos personales", "guardais mis datos", "guardar mis datos", "compartis mis datos",
    "borrar mis datos", "que datos teneis", "se guarda lo que escribo",
    "me esta leyendo una persona", "eres una ia", "eres ia", "ia o humano", "ia o un humano",
    "ai or human", "human or ai", "are you ai", "are you human",
    "privacy", "personal data", "store my data", "share my data", "delete my data",
]
ORDER_TERMS = ["pedido*", "order", "orders"]
THIRD_PARTY_TERMS = ["juan", "perez", "otra persona", "tercero*", "another person", "third party"]

# The visitor sharing their own details is never a request for ours.
SELF_CONTACT_TERMS = ["mi telefono", "my phone", "mi email", "my email", "mi correo", "mi movil"]

CONTACT_TERMS = [
    "whatsapp", "wsp", "wasap", "contacto", "atencion al cliente",
    "persona real", "humano", "humana", "hablar con", "ventas", "soporte", "supervisor", "responsable",
    "horario*", "a que hora", "abris", "abrir", "cerrar", "cerrais", "cerras",
    "fin de semana", "fines de semana", "atendeis", "abierto*", "cerrado*",
    "sin cita", "cita previa", "puedo pasar ahora", "pasar ahora", "atenderme hoy",
    "contact*", "customer service", "human", "real person", "talk to", "sales", "support", "manager",
    "opening hours", "open", "close*", "weekend", "available today",
]

LOCATION_TERMS = [
    "donde estais", "donde estan", "ubicacion", "direccion", "oficina*", "horario*", "telefono",
    "mapa", "email", "correo", "where are you", "location", "address", "office*", "phone", "maps",
]

DIRECTIONS_TERMS = [
    "como llego", "como llegar", "parking", "aparcamiento", "transporte", "metro", "bus", "autobus",
    "google maps", "indicaciones", "how to get", "directions", "public transport", "maps",
]

APPOINTMENT_TERMS = [
    "cita", "citas", "concertar", "agendar", "reunion", "appointment*", "book", "meeting", "schedule",
]

COMPANY_OVERVIEW_TERMS = [
    "de que va", "a que se dedica*", "quienes sois", "quienes son", "informacion de la empresa",
    "quien eres", "who are you", "about the company", "company info", "what do you do",
]

PROPERTY_TERMS = [
    "viviendas", "vivienda", "pisos", "casas", "chalet*", "obra nueva", "locales", "en venta",
    "comprar vivienda", "properties", "apartments", "homes", "for sale",
]

CATALOG_TERMS = [
    "servicios", "productos", "articulos", "que teneis", "que ofreces", "que ofreceis", "catalogo",
    "lista", "services", "products", "catalog", "list",
]

PERSONAL_TERMS = [
    "que llevas puesto", "tu edad", "cuantos anos", "donde vives", "eres real",
    "what are you wearing", "your age",
]

SMALLTALK_TERMS = ["chiste*", "joke*", "cuentame algo"]

GREETING_TERMS = ["hola", "buenas", "hello", "hi", "hey", "buenos dias", "buenas tardes", "good morning"]

INVENTORY_TERMS = [
    "pisos", "locales", "disponibles", "stock", "inventario", "referencia*",
    "availability", "inventory", "units",
]


def is_privacy_request(text: str) -> bool:
    return contains_any(text, PRIVACY_TERMS) or (
        contains_any(text, ORDER_TERMS) and contains_any(text, THIRD_PARTY_TERMS)
    )


def mentions_own_contact(text: str) -> bool:
    return contains_any(text, SELF_CONTACT_TERMS)


def asks_directions(text: str) -> bool:
    return contains_any(text, DIRECTIONS_TERMS)


def asks_office_location(text: str) -> bool:
    return not mentions_own_contact(text) and contains_any(text, LOCATION_TERMS)


def asks_contact_info(text: str) -> bool:
    return not mentions_own_contact(text) and contains_any(text, CONTACT_TERMS)


def is_personal_request(text: str) -> bool:
    return contains_any(text, PERSONAL_TERMS)


def is_small_talk(text: str) -> bool:
    return contains_any(text, SMALLTALK_TERMS)


def is_greeting(text: str) -> bool:
    return len(text) <= GREETING_MAX_LENGTH and contains_any(text, GREETING_TERMS)


def asks_appointment(text: str) -> bool:
    return contains_any(text, APPOINTMENT_TERMS)


def asks_company_overview(text: str) -> bool:
    return contains_any(text, COMPANY_OVERVIEW_TERMS)


def asks_service_list(text: str) -> bool:
    return contains_any(text, CATALOG_TERMS)


def asks_inventory(text: str) -> bool:
    return contains_any(text, INVENTORY_TERMS)


def is_property_search(tenant: str, text: str) -> bool:
    return supports_property_search(tenant) and contains_any(text, PROPERTY_TERMS)


@dataclass(frozen=True)
class IntentRule:
    """One ``(predicate, intent)`` row of the priority table."""
    intent: Intent
    predicate: Callable[[str, str], bool]


class IntentClassifier:
    """Evaluates the rule table top-down; the first matching rule wins."""

    RULES: list[IntentRule] = [
        IntentRule(Intent.PRIVACY, lambda tenant, text: is_privacy_request(text)),
        IntentRule(Intent.CONTACT_INFO, lambda tenant, text: asks_contact_info(text)),
        IntentRule(Intent.PERSONAL, lambda tenant, text: is_personal_request(text)),
        IntentRule(Intent.SMALLTALK, lambda tenant, text: is_small_talk(text)),
        IntentRule(Intent.GREETING, lambda tenant, text: is_greeting(text)),
        IntentRule(Intent.DIRECTIONS, lambda tenant, text: asks_directions(text)),
        IntentRule(Intent.LOCATION, lambda tenant, text: asks_office_location(text)),
        IntentRule(Intent.APPOINTMENT, lambda tenant, text: asks_appointment(text)),
        IntentRule(Intent.IDENTITY, lambda tenant, text: asks_company_overview(text)),
        IntentRule(Intent.PROPERTY_SEARCH, is_property_search),
        IntentRule(Intent.CATALOG, lambda tenant, text: asks_service_list(text)),
    ]

    def classify(self, tenant: str, normalized_message: str) -> Intent:
        if not normalized_message.strip():
            return Intent.DEFAULT
        for rule in self.RULES:
            if rule.predicate(tenant, normalized_message):
                logger.debug("Intent '%s' for message '%s'", rule.intent.value, normalized_message)
                return rule.intent
        return Intent.DEFAULT
