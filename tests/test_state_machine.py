"""Tests for the guided dialogue flows."""

import pytest

from salesbot.conversation.actions import DetectionResult
from salesbot.conversation.intents import Intent, IntentClassifier
from salesbot.conversation.state_machine import CART_ITEM_KEY, FLOW_STEPS, wants_to_cancel
from salesbot.prompts.replies import render
from salesbot.schemas.chat_schema import ActionType
from salesbot.schemas.session_schema import ConversationState, Flow
from salesbot.utils import normalize_text


def answer(controller, state, message, tenant="A", lang="es", detection=None):
    normalized = normalize_text(message)
    intent = IntentClassifier().classify(tenant, normalized)
    return controller.handle_pending(
        state, tenant, lang, message, normalized, intent, detection or DetectionResult()
    )


class TestFlowTable:
    def test_every_flow_has_a_step(self):
        assert set(FLOW_STEPS) == {f for f in Flow if f is not Flow.NONE}

    def test_appointment_steps_chain_in_order(self):
        flow = Flow.CITA_MOTIVO
        visited = []
        while flow is not Flow.NONE:
            visited.append(flow)
            flow = FLOW_STEPS[flow].next_flow
        assert visited == [
            Flow.CITA_MOTIVO, Flow.CITA_FECHA, Flow.CITA_HORA, Flow.CITA_MODALIDAD, Flow.CITA_CONTACTO,
        ]

    def test_cancel_terms(self):
        assert wants_to_cancel("cancelar")
        assert wants_to_cancel("mejor cancela eso")
        assert not wants_to_cancel("cancelacion de la reserva")


class TestNoPendingFlow:
    def test_returns_none(self, flow_controller, state):
        assert answer(flow_controller, state, "hola") is None


class TestAppointmentFlow:
    def test_start(self, flow_controller, state):
        response = flow_controller.start_appointment(state, "es")
        assert state.flow == Flow.CITA_MOTIVO
        assert "motivo" in response.reply

    def test_full_flow(self, flow_controller, state):
        flow_controller.start_appointment(state, "es")
        answer(flow_controller, state, "Asesoria para comprar piso")
        assert state.flow == Flow.CITA_FECHA
        answer(flow_controller, state, "el jueves")
        assert state.flow == Flow.CITA_HORA
        answer(flow_controller, state, "a las 10:30")
        assert state.flow == Flow.CITA_MODALIDAD
        answer(flow_controller, state, "Presencial")
        assert state.flow == Flow.CITA_CONTACTO
        summary = answer(flow_controller, state, "600123123")

        assert "Asesoria para comprar piso" in summary.reply
        assert "el jueves" in summary.reply
        assert "a las 10:30" in summary.reply
        assert "presencial" in summary.reply
        assert "600123123" in summary.reply
        assert "Laura Serrano" in summary.reply
        assert state.flow == Flow.NONE
        assert state.fields == {}

    def test_invalid_answer_keeps_state(self, flow_controller, state):
        flow_controller.start_appointment(state, "es")
        answer(flow_controller, state, "Asesoria")
        before = dict(state.fields)

        response = answer(flow_controller, state, "no lo se")
        assert state.flow == Flow.CITA_FECHA
        assert state.fields == before
        assert "fecha" in response.reply

    def test_english_summary(self, flow_controller):
        state = ConversationState(tenant="B", lang="en")
        flow_controller.start_appointment(state, "en")
        for message in ["Growth audit", "tomorrow", "10:30", "in person", "diego@example.com"]:
            response = answer(flow_controller, state, message, tenant="B", lang="en")
        assert "Mode: in-person" in response.reply
        assert "Diego Martin" in response.reply

    @pytest.mark.parametrize("message", ["email: ana.garcia@gmail.com", "telefono 612 345 678"])
    def test_contact_with_location_words_completes(self, flow_controller, state, message):
        assert IntentClassifier().classify("A", normalize_text(message)) == Intent.LOCATION
        flow_controller.start_appointment(state, "es")
        for step_answer in ["Asesoria", "el jueves", "10:30", "Presencial"]:
            answer(flow_controller, state, step_answer)

        summary = answer(flow_controller, state, message)
        assert message in summary.reply
        assert "Calle Orense 18" not in summary.reply
        assert state.flow == Flow.NONE


class TestCancelAndInterrupt:
    def test_cancel_clears_flow(self, flow_controller, state):
        flow_controller.start_appointment(state, "es")
        answer(flow_controller, state, "Asesoria")
        response = answer(flow_controller, state, "cancelar")
        assert state.flow == Flow.NONE
        assert state.fields == {}
        assert "cancelado" in response.reply

    def test_location_question_keeps_flow(self, flow_controller, state):
        flow_controller.start_appointment(state, "es")
        answer(flow_controller, state, "Asesoria")
        response = answer(flow_controller, state, "¿Dónde estáis?")

        assert state.flow == Flow.CITA_FECHA
        assert state.get("cita_motivo") == "Asesoria"
        assert "Calle Orense 18" in response.reply
        assert response.reply.endswith(flow_controller.pending_question(state, "es"))

    def test_greeting_interrupts_with_reminder(self, flow_controller, state):
        flow_controller.start_appointment(state, "es")
        response = answer(flow_controller, state, "hola")
        assert state.flow == Flow.CITA_MOTIVO
        assert "sigo aqui" in response.reply
        assert "motivo" in response.reply

    def test_catalog_question_answers_and_reminds(self, flow_controller):
        state = ConversationState(tenant="C", lang="es")
        flow_controller.start_vehicle_data(state, "es")
        response = answer(flow_controller, state, "que productos teneis", tenant="C")
        assert "Pastillas de freno ceramicas" in response.reply
        assert response.reply.endswith("comparte datos del vehiculo.")
        assert state.flow == Flow.CARRITO_DATOS_VEHICULO


class TestPropertyFlow:
    def test_only_real_estate_tenant_starts(self, flow_controller):
        state = ConversationState(tenant="B", lang="es")
        response = flow_controller.start_property_search(state, "B", "es")
        assert state.flow == Flow.NONE
        assert "Urbania Nexus Inmobiliaria" in response.reply

    def test_full_flow(self, flow_controller, state):
        flow_controller.start_property_search(state, "A", "es")
        for message, next_flow in [
            ("Madrid centro", Flow.PROPIEDAD_PRESUPUESTO),
            ("300.000", Flow.PROPIEDAD_HABITACIONES),
            ("3", Flow.PROPIEDAD_TIPO),
            ("un piso", Flow.PROPIEDAD_OBJETIVO),
        ]:
            answer(flow_controller, state, message)
            assert state.flow == next_flow

        response = answer(flow_controller, state, "para vivir")
        assert state.flow == Flow.NONE
        assert "perfil" in response.reply

    def test_budget_retry(self, flow_controller, state):
        flow_controller.start_property_search(state, "A", "es")
        answer(flow_controller, state, "Madrid")
        response = answer(flow_controller, state, "ni idea")
        assert state.flow == Flow.PROPIEDAD_PRESUPUESTO
        assert "presupuesto" in response.reply

    @pytest.mark.parametrize("message", ["chalet", "obra nueva"])
    def test_property_type_with_search_words_advances(self, flow_controller, state, message):
        assert IntentClassifier().classify("A", normalize_text(message)) == Intent.PROPERTY_SEARCH
        state.start(Flow.PROPIEDAD_TIPO)
        response = answer(flow_controller, state, message)
        assert state.flow == Flow.PROPIEDAD_OBJETIVO
        assert state.get("prop_tipo") == message
        assert response.reply == render("prop_objetivo_prompt", "es")


class TestVehicleFlow:
    @pytest.fixture
    def c_state(self):
        return ConversationState(tenant="C", lang="es")

    def test_start_stores_pending_item(self, flow_controller, c_state):
        flow_controller.start_vehicle_data(c_state, "es")
        assert c_state.flow == Flow.CARRITO_DATOS_VEHICULO
        assert c_state.get(CART_ITEM_KEY) == "C-02"

    def test_vehicle_data_adds_item(self, flow_controller, c_state):
        flow_controller.start_vehicle_data(c_state, "es")
        response = answer(flow_controller, c_state, "Ford Focus 2018 motor 1.6 TDI", tenant="C")
        assert [a.type for a in response.actions] == [ActionType.ADD]
        assert response.actions[0].item_id == "C-02"
        assert response.item["id"] == "C-02"
        assert c_state.flow == Flow.NONE

    def test_missing_vehicle_data_retries(self, flow_controller, c_state):
        flow_controller.start_vehicle_data(c_state, "es")
        response = answer(flow_controller, c_state, "un Ford", tenant="C")
        assert c_state.flow == Flow.CARRITO_DATOS_VEHICULO
        assert not response.actions

    def test_unknown_pending_item_gives_out_of_scope(self, flow_controller, c_state):
        flow_controller.start_vehicle_data(c_state, "es", item_id="C-99")
        response = answer(flow_controller, c_state, "Seat Leon 2019 diesel", tenant="C")
        assert not response.actions
        assert "Marta Velasco" in response.reply
        assert c_state.flow == Flow.NONE
