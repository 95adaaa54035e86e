"""Tenant catalog: display names, escalation contacts and demo profiles."""

import logging
from dataclasses import dataclass

logger = logging.getLogger(__name__)

DEFAULT_TENANT = "A"
REAL_ESTATE_TENANT = "A"
AUTO_PARTS_TENANT = "C"

# Item added once the visitor has shared vehicle data.
VEHICLE_PENDING_ITEM_ID = "C-02"

TENANT_CATALOG: dict[str, dict] = {
    "A": {
        "name": "Urbania Nexus Inmobiliaria",
        "kb_file": "kbA.txt",
        "agent_name": "Laura Serrano",
        "contact_title": {
            "es": "Asesora Inmobiliaria Senior",
            "en": "Senior Real Estate Advisor",
        },
        "sector": {"es": "inmobiliario y construccion", "en": "real estate and construction"},
        "capabilities": {
            "es": ["busqueda de viviendas", "informacion de oficina", "citas comerciales"],
            "en": ["property search", "office information", "commercial appointments"],
        },
        "address": "Calle Orense 18, Madrid (zona AZCA)",
        "schedule": {"es": "L-V de 9:30 a 19:00", "en": "Mon-Fri 09:30 to 19:00"},
        "phone": "+34 910 240 118",
        "email": "contacto@urbanianexus.demo",
    },
    "B": {
        "name": "LeadWave Growth Marketing",
        "kb_file": "kbB.txt",
        "agent_name": "Diego Martin",
        "contact_title": {
            "es": "Consultor Growth Senior",
            "en": "Senior Growth Consultant",
        },
        "sector": {"es": "marketing, publicidad y ventas", "en": "marketing, advertising and sales"},
        "capabilities": {
            "es": ["captacion de leads", "automatizacion comercial", "analitica de campanas"],
            "en": ["lead generation", "sales automation", "campaign analytics"],
        },
        "address": "Avenida Diagonal 487, Barcelona",
        "schedule": {"es": "L-V de 8:30 a 19:30", "en": "Mon-Fri 08:30 to 19:30"},
        "phone": "+34 931 880 225",
        "email": "hola@leadwavegrowth.demo",
    },
    "C": {
        "name": "MotoRecambio Atlas",
        "kb_file": "kbC.txt",
        "agent_name": "Marta Velasco",
        "contact_title": {
            "es": "Responsable de Operaciones de Recambios",
            "en": "Parts Operations Lead",
        },
        "sector": {
            "es": "almacen y distribucion de recambios",
            "en": "vehicle parts warehousing and distribution",
        },
        "capabilities": {
            "es": ["validacion por VIN", "catalogo multimarca", "entrega urgente"],
            "en": ["VIN validation", "multi-brand catalog", "urgent delivery"],
        },
        "address": "Poligono Industrial La Estrella, Nave 12, Zaragoza",
        "schedule": {"es": "L-V 08:00-19:00", "en": "Mon-Fri 08:00-19:00"},
        "phone": "+34 976 550 410",
        "email": "ventas@motorecambioatlas.demo",
    },
}


@dataclass(frozen=True)
class TenantProfile:
    """Facts injected into the multi-turn proxy's system prompt."""

    company: str
    agent_name: str
    sector: str
    capabilities: list[str]
    address: str
    schedule: str
    phone: str
    email: str


def normalize_tenant(tenant_id: str | None, kb: str | None = None) -> str:
    """Resolve a tenant id (or legacy kb selector) to a known tenant key."""
    raw = tenant_id if tenant_id and tenant_id.strip() else kb
    key = (raw or "").strip().upper()
    return key if key in TENANT_CATALOG else DEFAULT_TENANT


def get_tenant_ids() -> list[str]:
    return list(TENANT_CATALOG.keys())


def display_name(tenant: str) -> str:
    return TENANT_CATALOG[normalize_tenant(tenant)]["name"]


def kb_file(tenant: str) -> str:
    return TENANT_CATALOG[normalize_tenant(tenant)]["kb_file"]


def human_contact(tenant: str, lang: str) -> str:
    """Named escalation contact, e.g. "Laura Serrano (Senior Real Estate Advisor)"."""
    info = TENANT_CATALOG[normalize_tenant(tenant)]
    title = info["contact_title"]["en" if lang == "en" else "es"]
    return f"{info['agent_name']} ({title})"


def default_profile(tenant: str, lang: str) -> TenantProfile:
    info = TENANT_CATALOG[normalize_tenant(tenant)]
    key = "en" if lang == "en" else "es"
    return TenantProfile(
        company=info["name"],
        agent_name=info["agent_name"],
        sector=info["sector"][key],
        capabilities=list(info["capabilities"][key]),
        address=info["address"],
        schedule=info["schedule"][key],
        phone=info["phone"],
        email=info["email"],
    )


def supports_property_search(tenant: str) -> bool:
    return normalize_tenant(tenant) == REAL_ESTATE_TENANT


def requires_vehicle_data(tenant: str) -> bool:
    return normalize_tenant(tenant) == AUTO_PARTS_TENANT
