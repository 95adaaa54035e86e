"""
Offline console demo: chat with the sales assistant in the terminal.

Runs the real engine (intents, cart actions, guided flows, retrieval and
the deterministic fallback) against the packaged knowledge files. Without
OPENAI_API_KEY no network calls are made. Designed for live demo
walkthroughs.

Usage:
    python console_demo.py
    python console_demo.py --tenant C --lang en
    python console_demo.py --scenario appointment
    python console_demo.py --scenario vehicle
"""

import argparse
import uuid
from typing import Any, Optional

from salesbot.agents.chat_engine import ChatEngine
from salesbot.schemas.chat_schema import ActionType, ChatResponse, ChatRequest
from salesbot.tools.tenants import display_name, get_tenant_ids, normalize_tenant

BLUE = "\033[94m"
GREEN = "\033[92m"
YELLOW = "\033[93m"
RED = "\033[91m"
DIM = "\033[2m"
RESET = "\033[0m"
BOLD = "\033[1m"


class ConsoleSession:
    """Drives one engine session from the terminal, keeping a local cart."""

    # Pre-scripted scenarios for --scenario flag: (tenant, messages)
    SCENARIOS: dict[str, tuple[str, list[str]]] = {
        "appointment": ("A", [
            "Hola",
            "Quiero concertar una cita",
            "el jueves",
            "Asesoria para comprar piso",
            "Donde estais?",
            "el jueves",
            "a las 10:30",
            "online",
            "laura.cliente@example.com",
        ]),
        "property": ("A", [
            "Busco viviendas en venta",
            "Chamberi, Madrid",
            "350.000 euros",
            "3 habitaciones",
            "piso",
            "para vivir",
        ]),
        "vehicle": ("C", [
            "Que productos teneis?",
            "Añade filtro al carrito",
            "es un coche azul",
            "Ford Focus 2018 motor 1.6 TDI",
            "ver carrito",
        ]),
    }

    MAX_INPUT_LENGTH = 500

    def __init__(self, engine: ChatEngine, tenant: str = "A", lang: str = "es") -> None:
        self.engine = engine
        self.tenant = normalize_tenant(tenant)
        self.lang = "en" if lang == "en" else "es"
        self.session_id = str(uuid.uuid4())
        self.cart: list[dict[str, Any]] = []

    def agent_say(self, text: str) -> None:
        print(f"{GREEN}{BOLD}[{display_name(self.tenant)}]{RESET} {GREEN}{text}{RESET}")

    def system_log(self, text: str) -> None:
        print(f"{DIM}  >> {text}{RESET}")

    def _banner(self, title: str) -> None:
        print()
        print(f"{BOLD}{'=' * 60}{RESET}")
        print(f"{BOLD}  SALES ASSISTANT - {title}{RESET}")
        print(f"{BOLD}  Tenant: {self.tenant} ({display_name(self.tenant)}) | Lang: {self.lang}{RESET}")
        print(f"{BOLD}{'=' * 60}{RESET}")
        print()

    def send(self, message: str) -> ChatResponse:
        request = ChatRequest(
            kb=self.tenant,
            lang=self.lang,
            session_id=self.session_id,
            message=message,
            cart=self.cart,
        )
        response = self.engine.chat(request)
        self._apply_actions(response)
        self.agent_say(response.reply)
        self._log_turn(response)
        return response

    def _apply_actions(self, response: ChatResponse) -> None:
        """Mirror the cart updates a web client would make."""
        for action in response.actions:
            if action.type is ActionType.ADD and response.item:
                for entry in self.cart:
                    if entry["id"] == action.item_id:
                        entry["qty"] += 1
                        break
                else:
                    self.cart.append({
                        "id": response.item["id"],
                        "title": response.item["title"],
                        "qty": 1,
                        "price": response.item["price"],
                    })
            elif action.type is ActionType.REMOVE:
                self.cart = [e for e in self.cart if e["id"] != action.item_id]
            elif action.type is ActionType.CLEAR:
                self.cart = []

    def _log_turn(self, response: ChatResponse) -> None:
        state = self.engine.sessions.get_or_create(self.tenant, self.session_id, self.lang)
        if response.actions:
            self.system_log(f"Actions: {', '.join(a.describe() for a in response.actions)}")
        if response.citations:
            self.system_log(f"Citations: {'; '.join(response.citations)}")
        self.system_log(f"Flow: {state.flow.value} | Cart items: {len(self.cart)}")

    def run_scenario(self, scenario: str) -> None:
        """Auto-play a pre-scripted scenario for demo purposes."""
        if scenario not in self.SCENARIOS:
            print(f"{RED}Unknown scenario: {scenario}{RESET}")
            return
        tenant, steps = self.SCENARIOS[scenario]
        self.tenant = tenant
        self._banner(f"Scenario: {scenario}")

        for step in steps:
            print(f"\n{BLUE}[Visitor] {RESET}{step}")
            self.send(step)

        print(f"\n{BOLD}{'=' * 60}{RESET}")
        print(f"{BOLD}  Scenario '{scenario}' complete.{RESET}")
        print(f"{DIM}  Cart: {self.cart}{RESET}")
        print(f"{BOLD}{'=' * 60}{RESET}")

    def run(self) -> None:
        self._banner("Console Demo")
        print(f"{YELLOW}Type 'quit' to exit.{RESET}")

        while True:
            try:
                user_input = input(f"\n{BLUE}[Visitor] {RESET}").strip()
            except EOFError:
                print(f"\n{DIM}Session ended.{RESET}")
                return
            if not user_input:
                continue
            if user_input.lower() in ("quit", "q"):
                print(f"\n{DIM}Session ended.{RESET}")
                return
            if len(user_input) > self.MAX_INPUT_LENGTH:
                self.agent_say("Ese mensaje es muy largo. Puedes resumirlo?" if self.lang == "es"
                               else "That message is quite long. Could you keep it brief?")
                continue
            self.send(user_input)


def main(argv: Optional[list[str]] = None) -> None:
    parser = argparse.ArgumentParser(description="Offline console demo")
    parser.add_argument("--tenant", choices=get_tenant_ids(), default="A", help="Tenant to chat with")
    parser.add_argument("--lang", choices=["es", "en"], default="es", help="Reply language")
    parser.add_argument(
        "--scenario",
        choices=sorted(ConsoleSession.SCENARIOS),
        default=None,
        help="Auto-play a pre-scripted scenario instead of interactive mode",
    )
    args = parser.parse_args(argv)

    session = ConsoleSession(ChatEngine.from_settings(), tenant=args.tenant, lang=args.lang)
    if args.scenario:
        session.run_scenario(args.scenario)
    else:
        session.run()


if __name__ == "__main__":
    main()
