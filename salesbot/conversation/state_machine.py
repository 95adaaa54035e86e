"""
Dialogue flow controller for the guided multi-step sequences.

Three sequences are supported: appointment booking, property
qualification and the vehicle-data check that gates adding a filter to
the cart. Each step is a row of ``FLOW_STEPS``: the validator its answer
must pass, where the answer is stored, the next step, and the prompts.

While a flow is pending, every message goes through:
    1. cancel keywords      -> flow cleared, confirmation
    2. interrupting intents -> short answer + reminder, flow untouched,
                               unless the step accepts the message as its answer
    3. the current step     -> re-prompt, or store and advance

Usage:
    controller = DialogueFlowController(composer, kb)
    reply = controller.start_appointment(state, "es")
    reply = controller.handle_pending(state, "A", "es", raw, normalized, intent, detection)
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Callable, Optional, TYPE_CHECKING

from salesbot.conversation.actions import DetectionResult
from salesbot.conversation.intents import Intent
from salesbot.conversation.validators import (
    is_valid_reason,
    looks_like_budget,
    looks_like_contact,
    looks_like_date,
    looks_like_goal,
    looks_like_mode,
    looks_like_property_type,
    looks_like_rooms,
    looks_like_time,
    looks_like_vehicle_data,
    looks_like_zone,
    normalize_mode,
)
from salesbot.prompts.replies import render
from salesbot.schemas.chat_schema import ActionType, ChatAction, ChatResponse
from salesbot.schemas.session_schema import ConversationState, Flow
from salesbot.tools.knowledge_base import KnowledgeBase
from salesbot.tools.tenants import VEHICLE_PENDING_ITEM_ID, human_contact, supports_property_search
from salesbot.utils import contains_any

if TYPE_CHECKING:
    from salesbot.agents.composer import ResponseComposer

logger = logging.getLogger(__name__)

CANCEL_TERMS = ["cancelar", "cancela", "cancel", "detener", "stop", "salir", "exit"]

CART_ITEM_KEY = "cart_item_id"
APPOINTMENT_KEYS = ["cita_motivo", "cita_fecha", "cita_hora", "cita_modalidad", "cita_contacto"]

CONTACT_ANSWER_INTENTS = frozenset({Intent.LOCATION, Intent.CONTACT_INFO})
PROPERTY_ANSWER_INTENTS = frozenset({Intent.PROPERTY_SEARCH})


@dataclass(frozen=True)
class FlowStep:
    """One step of a guided sequence."""
    field_key: Optional[str]
    validator: Callable[[str], bool]
    next_flow: Flow
    retry_key: str
    next_prompt_key: Optional[str] = None
    transform: Optional[Callable[[str, str], str]] = None
    # Intents whose vocabulary overlaps the expected answer; a valid answer wins over them.
    answer_intents: frozenset[Intent] = frozenset()


FLOW_STEPS: dict[Flow, FlowStep] = {
    # --- Appointment ---
    Flow.CITA_MOTIVO: FlowStep("cita_motivo", is_valid_reason, Flow.CITA_FECHA,
                               "cita_motivo_retry", "cita_fecha_prompt"),
    Flow.CITA_FECHA: FlowStep("cita_fecha", looks_like_date, Flow.CITA_HORA,
                              "cita_fecha_retry", "cita_hora_prompt"),
    Flow.CITA_HORA: FlowStep("cita_hora", looks_like_time, Flow.CITA_MODALIDAD,
                             "cita_hora_retry", "cita_modalidad_prompt"),
    Flow.CITA_MODALIDAD: FlowStep("cita_modalidad", looks_like_mode, Flow.CITA_CONTACTO,
                                  "cita_modalidad_retry", "cita_contacto_prompt",
                                  transform=normalize_mode),
    Flow.CITA_CONTACTO: FlowStep("cita_contacto", looks_like_contact, Flow.NONE,
                                 "cita_contacto_retry", answer_intents=CONTACT_ANSWER_INTENTS),

    # --- Property qualification ---
    Flow.PROPIEDAD_ZONA: FlowStep("prop_zona", looks_like_zone, Flow.PROPIEDAD_PRESUPUESTO,
                                  "prop_zona_retry", "prop_presupuesto_prompt",
                                  answer_intents=PROPERTY_ANSWER_INTENTS),
    Flow.PROPIEDAD_PRESUPUESTO: FlowStep("prop_presupuesto", looks_like_budget, Flow.PROPIEDAD_HABITACIONES,
                                         "prop_presupuesto_retry", "prop_habitaciones_prompt",
                                         answer_intents=PROPERTY_ANSWER_INTENTS),
    Flow.PROPIEDAD_HABITACIONES: FlowStep("prop_habitaciones", looks_like_rooms, Flow.PROPIEDAD_TIPO,
                                          "prop_habitaciones_retry", "prop_tipo_prompt",
                                          answer_intents=PROPERTY_ANSWER_INTENTS),
    Flow.PROPIEDAD_TIPO: FlowStep("prop_tipo", looks_like_property_type, Flow.PROPIEDAD_OBJETIVO,
                                  "prop_tipo_retry", "prop_objetivo_prompt",
                                  answer_intents=PROPERTY_ANSWER_INTENTS),
    Flow.PROPIEDAD_OBJETIVO: FlowStep("prop_objetivo", looks_like_goal, Flow.NONE,
                                      "prop_objetivo_retry", "prop_done",
                                      answer_intents=PROPERTY_ANSWER_INTENTS),

    # --- Cart ---
    Flow.CARRITO_DATOS_VEHICULO: FlowStep(None, looks_like_vehicle_data, Flow.NONE,
                                          "vehicle_retry"),
}


def wants_to_cancel(normalized_message: str) -> bool:
    return contains_any(normalized_message, CANCEL_TERMS)


class DialogueFlowController:
    """Drives the guided sequences stored in a ``ConversationState``."""

    def __init__(self, composer: ResponseComposer, knowledge_base: KnowledgeBase) -> None:
        self.composer = composer
        self.kb = knowledge_base

    # --- Flow starts ---

    def start_appointment(self, state: ConversationState, lang: str) -> ChatResponse:
        state.start(Flow.CITA_MOTIVO)
        logger.debug("Flow started: %s", state.flow.value)
        return ChatResponse.simple(render("appointment_start", lang))

    def start_property_search(self, state: ConversationState, tenant: str, lang: str) -> ChatResponse:
        if not supports_property_search(tenant):
            return self.composer.property_redirect(tenant, lang)
        state.start(Flow.PROPIEDAD_ZONA)
        logger.debug("Flow started: %s", state.flow.value)
        return ChatResponse.simple(render("property_start", lang))

    def start_vehicle_data(
        self, state: ConversationState, lang: str, item_id: str = VEHICLE_PENDING_ITEM_ID
    ) -> ChatResponse:
        state.start(Flow.CARRITO_DATOS_VEHICULO)
        state.put(CART_ITEM_KEY, item_id)
        logger.debug("Flow started: %s pending item=%s", state.flow.value, item_id)
        return ChatResponse.simple(render("vehicle_start", lang))

    def pending_question(self, state: ConversationState, lang: str) -> str:
        if not state.in_flow:
            return ""
        return render(f"pending_{state.flow.value}", lang)

    def answers_pending_step(self, state: ConversationState, intent: Intent, raw_message: str) -> bool:
        """True when the message is a valid answer to the current step despite looking like ``intent``."""
        step = FLOW_STEPS.get(state.flow)
        return step is not None and intent in step.answer_intents and step.validator(raw_message)

    # --- Pending flow ---

    def handle_pending(
        self,
        state: ConversationState,
        tenant: str,
        lang: str,
        raw_message: str,
        normalized_message: str,
        intent: Intent,
        detection: DetectionResult,
    ) -> Optional[ChatResponse]:
        """Answer a message received while a flow is pending; ``None`` when no flow is active."""
        if not state.in_flow:
            return None

        if wants_to_cancel(normalized_message):
            logger.info("Flow cancelled at step %s", state.flow.value)
            state.clear()
            return ChatResponse.simple(render("flow_cancelled", lang))

        if (
            intent not in (Intent.DEFAULT, Intent.APPOINTMENT)
            and not detection.has_actions
            and not self.answers_pending_step(state, intent, raw_message)
        ):
            interruption = self.composer.interruption(intent, tenant, lang, normalized_message)
            if interruption is not None:
                logger.debug("Flow %s interrupted by intent %s", state.flow.value, intent.value)
                interruption.reply = f"{interruption.reply}\n\n{self.pending_question(state, lang)}"
                return interruption

        step = FLOW_STEPS.get(state.flow)
        if step is None:
            return None

        if not step.validator(raw_message):
            logger.debug("Flow %s rejected answer", state.flow.value)
            return ChatResponse.simple(render(step.retry_key, lang))

        current = state.flow
        if step.field_key is not None:
            value = step.transform(raw_message, lang) if step.transform else raw_message
            state.put(step.field_key, value)

        if current is Flow.CARRITO_DATOS_VEHICULO:
            return self._complete_vehicle_data(state, tenant, lang)
        if current is Flow.CITA_CONTACTO:
            return self._complete_appointment(state, tenant, lang)

        state.flow = step.next_flow
        if step.next_flow is Flow.NONE:
            logger.info("Flow %s completed", current.value)
            state.clear()
        else:
            logger.debug("Flow advanced %s -> %s", current.value, step.next_flow.value)
        return ChatResponse.simple(render(step.next_prompt_key, lang))

    def _complete_appointment(self, state: ConversationState, tenant: str, lang: str) -> ChatResponse:
        values = {key: state.get(key) for key in APPOINTMENT_KEYS}
        summary = render("cita_summary", lang, contact=human_contact(tenant, lang), **values)
        logger.info("Appointment request completed")
        state.clear()
        return ChatResponse.simple(summary)

    def _complete_vehicle_data(self, state: ConversationState, tenant: str, lang: str) -> ChatResponse:
        item = self.kb.find_by_id(tenant, state.get(CART_ITEM_KEY))
        state.clear()
        if item is None:
            logger.warning("Pending cart item no longer in knowledge base for tenant %s", tenant)
            return self.composer.out_of_scope(tenant, lang)
        logger.info("Vehicle data collected, adding %s", item.id)
        return ChatResponse(
            reply=render("vehicle_added", lang, title=item.title),
            actions=[ChatAction(type=ActionType.ADD, item_id=item.id)],
            item=item.to_api_map(),
        )
