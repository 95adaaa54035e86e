"""Per-session conversation state and flow positions."""

import time
from dataclasses import dataclass, field
from enum import Enum
from typing import Optional


class Flow(str, Enum):
    """Position inside one of the guided multi-step sequences."""

    NONE = "none"

    # Appointment booking
    CITA_MOTIVO = "cita_motivo"
    CITA_FECHA = "cita_fecha"
    CITA_HORA = "cita_hora"
    CITA_MODALIDAD = "cita_modalidad"
    CITA_CONTACTO = "cita_contacto"

    # Property qualification
    PROPIEDAD_ZONA = "propiedad_zona"
    PROPIEDAD_PRESUPUESTO = "propiedad_presupuesto"
    PROPIEDAD_HABITACIONES = "propiedad_habitaciones"
    PROPIEDAD_TIPO = "propiedad_tipo"
    PROPIEDAD_OBJETIVO = "propiedad_objetivo"

    # Cart add that needs vehicle data first
    CARRITO_DATOS_VEHICULO = "carrito_datos_vehiculo"


@dataclass
class ConversationState:
    """
    Session-scoped dialogue state keyed by ``(tenant, session_id)``.

    ``flow`` and ``fields`` always describe the same in-progress sequence:
    they are only ever cleared together.
    """

    tenant: str
    lang: str
    flow: Flow = Flow.NONE
    fields: dict[str, str] = field(default_factory=dict)
    touched_at: float = field(default_factory=time.monotonic)

    def put(self, key: str, value: Optional[str]) -> None:
        self.fields[key] = "" if value is None else value.strip()

    def get(self, key: str) -> str:
        return self.fields.get(key, "")

    def start(self, flow: Flow) -> None:
        """Begin a new sequence, discarding anything collected before."""
        self.clear()
        self.flow = flow

    def clear(self) -> None:
        self.flow = Flow.NONE
        self.fields.clear()

    def reset(self, tenant: str, lang: str) -> None:
        self.tenant = tenant
        self.lang = lang
        self.clear()

    @property
    def in_flow(self) -> bool:
        return self.flow is not Flow.NONE
