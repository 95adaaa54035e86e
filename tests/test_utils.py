"""Tests for shared text utilities."""

import pytest

from salesbot.utils import contains_any, extract_field, normalize_text, tokenize


class TestNormalizeText:
    def test_strips_accents_and_lowercases(self):
        assert normalize_text("Añadís el FILTRO") == "anadis el filtro"

    def test_punctuation_becomes_space(self):
        assert normalize_text("¿Dónde estáis?") == "donde estais"

    def test_collapses_whitespace(self):
        assert normalize_text("  Calle   Orense-18 \n Madrid ") == "calle orense 18 madrid"

    def test_none_and_empty(self):
        assert normalize_text(None) == ""
        assert normalize_text("") == ""

    def test_symbols_only_yields_empty(self):
        assert normalize_text("¿¡ !? €") == ""

    @pytest.mark.parametrize("text", [
        "Hola, ¿qué tal?",
        "Añade el Plan Growth Pro al carrito",
        "Ford Focus 2018 motor 1.6 TDI",
        "e-mail: laura@example.com",
        "   ",
        "ÀÉÎÕÜ ñ ç",
    ])
    def test_idempotent(self, text):
        once = normalize_text(text)
        assert normalize_text(once) == once


class TestContainsAny:
    def test_whole_word_match(self):
        assert contains_any("hola que tal", ["hola"])

    def test_no_partial_word_match(self):
        assert not contains_any("chiste", ["hi"])
        assert not contains_any("citar a alguien", ["cita"])

    def test_phrase_match(self):
        assert contains_any("me gustaria ver carrito ahora", ["ver carrito"])

    def test_stem_marker_matches_prefix(self):
        assert contains_any("que me recomiendas", ["recomiend*"])
        assert not contains_any("que me propones", ["recomiend*"])

    def test_terms_are_normalized(self):
        assert contains_any("anade el filtro", ["Añade"])

    def test_empty_text(self):
        assert not contains_any("", ["hola"])


class TestTokenize:
    def test_drops_short_tokens(self):
        assert tokenize("el kit de filtros") == {"kit", "filtros"}

    def test_keeps_spanish_letters(self):
        assert "valoración" in tokenize("Valoración de vivienda")

    def test_empty(self):
        assert tokenize(None) == set()


class TestExtractField:
    NOTES = "Direccion central: Calle Orense 18, Madrid. Horario: L-V de 9:30 a 19:00. Email: a@b.demo"

    def test_extracts_until_next_sentence(self):
        assert extract_field(self.NOTES, "Direccion central:") == "Calle Orense 18, Madrid"

    def test_extracts_last_field(self):
        assert extract_field(self.NOTES, "Email:") == "a@b.demo"

    def test_first_present_label_wins(self):
        assert extract_field(self.NOTES, "Oficina principal:", "Direccion central:") == "Calle Orense 18, Madrid"

    def test_missing_label(self):
        assert extract_field(self.NOTES, "Telefono:") == ""
        assert extract_field("", "Telefono:") == ""
