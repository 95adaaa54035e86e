"""Tests for reply templates, prompt construction and the response composer."""

import pytest

from salesbot.conversation.intents import Intent
from salesbot.prompts.prompt_templates import action_text, build_context, build_user_prompt, cart_summary
from salesbot.prompts.replies import REPLIES, label, render
from salesbot.prompts.system_prompts import proxy_system_prompt, sales_system_prompt
from salesbot.schemas.chat_schema import ActionType, ChatAction
from salesbot.schemas.kb_schema import SearchMatch
from salesbot.schemas.session_schema import Flow
from salesbot.tools.tenants import default_profile
from tests.conftest import make_item


class TestReplies:
    def test_every_template_is_bilingual(self):
        for key, variants in REPLIES.items():
            assert set(variants) == {"es", "en"}, key

    def test_every_flow_has_a_reminder(self):
        for flow in Flow:
            if flow is not Flow.NONE:
                assert f"pending_{flow.value}" in REPLIES

    def test_unknown_lang_renders_spanish(self):
        assert render("fallback_cleared", "fr") == "He vaciado tu carrito."

    def test_labels(self):
        assert label("phone", "en") == "Phone"
        assert label("phone", "es") == "Telefono"


class TestPromptTemplates:
    def test_cart_summary(self):
        cart = [{"id": "B-01", "title": "Plan Growth Starter", "qty": 2, "price": "490 €/mes"}, {}]
        assert cart_summary(cart) == "Plan Growth Starter(B-01) x2 490 €/mes; item(N/A) x1 0 EUR"
        assert cart_summary([]) == "[]"
        assert cart_summary(None) == "[]"

    def test_action_text(self):
        actions = [ChatAction(type=ActionType.ADD, item_id="B-01"), ChatAction(type=ActionType.SHOW)]
        assert action_text(actions) == "ADD(B-01), SHOW"
        assert action_text([]) == "none"

    def test_context_blocks_are_separated(self):
        matches = [SearchMatch(make_item("X-1", "Uno"), 0.5), SearchMatch(make_item("X-2", "Dos"), 0.4)]
        context = build_context(matches)
        assert context.count("\n\n---\n\n") == 1
        assert context.startswith("ID: X-1\nTITLE: Uno")

    def test_user_prompt_language(self):
        english = build_user_prompt("en", "C", "price?", [], [], "ctx")
        assert "Selected company: MotoRecambio Atlas (C)" in english
        assert "Detected actions: none" in english
        spanish = build_user_prompt("es", "C", "precio?", [], [], "ctx")
        assert "Empresa seleccionada: MotoRecambio Atlas (C)" in spanish

    def test_system_prompts(self):
        assert sales_system_prompt("en").startswith("You are")
        assert sales_system_prompt("xx").startswith("Eres")
        prompt = proxy_system_prompt(default_profile("A", "en"), "en")
        assert "Urbania Nexus Inmobiliaria" in prompt
        assert "phone=+34 910 240 118" in prompt


class TestComposer:
    def test_company_facts(self, composer):
        facts = composer.company_facts("B")
        assert facts.address == "Avenida Diagonal 487, Barcelona"
        assert facts.email == "hola@leadwavegrowth.demo"

    def test_sellable_items_respect_limit(self, knowledge_base):
        from salesbot.agents.composer import ResponseComposer

        items = ResponseComposer(knowledge_base, catalog_limit=2).sellable_items("A")
        assert [i.id for i in items] == ["A-01", "A-02"]

    def test_identity(self, composer):
        reply = composer.identity("C", "es").reply
        assert reply.startswith("Soy la asistente comercial de MotoRecambio Atlas.")
        assert "ventas@motorecambioatlas.demo" in reply

    def test_location_short_mode(self, composer):
        reply = composer.location("A", "es", "solo la ubicacion").reply
        assert reply.startswith("Direccion: Calle Orense 18")
        assert "Horario" not in reply

    def test_directions_hints(self, composer):
        reply = composer.directions("A", "es", "como llego en metro hay parking").reply
        assert "parking" in reply
        assert "transporte publico" in reply

    def test_whatsapp_line(self, composer):
        reply = composer.contact_info("C", "es", "teneis whatsapp").reply
        assert "WhatsApp: disponible en +34 976 550 410" in reply

    def test_property_redirect(self, composer):
        reply = composer.property_redirect("C", "en").reply
        assert "MotoRecambio Atlas" in reply
        assert "Urbania Nexus Inmobiliaria" in reply

    @pytest.mark.parametrize("intent", [Intent.PROPERTY_SEARCH, Intent.SMALLTALK, Intent.PRIVACY])
    def test_interruption_copy(self, composer, intent):
        assert composer.interruption(intent, "A", "es", "") is not None

    def test_no_interruption_for_default(self, composer):
        assert composer.interruption(Intent.DEFAULT, "A", "es", "") is None

    def test_fallback_inventory(self, composer):
        match = SearchMatch(composer.kb.find_by_id("A", "A-01"), 0.5)
        reply = composer.fallback("A", "es", "pisos disponibles", [], None, [match], [])
        assert "inventario en vivo" in reply

    def test_fallback_services(self, composer):
        match = SearchMatch(composer.kb.find_by_id("B", "B-01"), 0.5)
        reply = composer.fallback("B", "en", "which services", [], None, [match], [])
        assert reply.startswith("Great, these are the main services/products available:")
        assert "- LeadWave CRM App (39 €/usuario/mes)" in reply
