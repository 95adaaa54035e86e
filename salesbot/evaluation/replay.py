"""
Question replay: play a scripted list of visitor messages through one
engine session and write the exchange to a log file.

Every answer must be non-blank; the first blank reply aborts the replay
with ``ReplayError``.

Usage:
    python -m salesbot.evaluation.replay --tenant A --lang es
    python -m salesbot.evaluation.replay --questions my_questions.txt --out logs/
"""

import argparse
import logging
import sys
import time
import uuid
from datetime import datetime
from pathlib import Path
from typing import Optional

from salesbot.agents.chat_engine import ChatEngine
from salesbot.config import PACKAGE_DIR
from salesbot.schemas.chat_schema import ChatRequest
from salesbot.schemas.transcript_schema import ConversationTranscript, Speaker, TranscriptTurn
from salesbot.tools.tenants import normalize_tenant

logger = logging.getLogger(__name__)

DEFAULT_QUESTIONS_FILE = PACKAGE_DIR / "data" / "replay" / "questions.txt"
DEFAULT_OUTPUT_DIR = Path("replay-logs")


class ReplayError(Exception):
    """Raised when the question file is unusable or the engine gives a blank reply."""


def load_questions(path: Optional[Path] = None) -> list[str]:
    """Read questions, skipping blank lines and ``#`` comments."""
    source = Path(path) if path is not None else DEFAULT_QUESTIONS_FILE
    if not source.exists():
        raise ReplayError(f"Questions file not found: {source}")
    lines = (line.strip() for line in source.read_text(encoding="utf-8").splitlines())
    return [line for line in lines if line and not line.startswith("#")]


def replay(
    engine: ChatEngine,
    questions: list[str],
    tenant: str = "A",
    lang: str = "es",
    session_id: Optional[str] = None,
) -> ConversationTranscript:
    """Send every question through a single session and record the transcript."""
    if not questions:
        raise ReplayError("No questions to replay")

    tenant = normalize_tenant(tenant)
    lang = "en" if lang.strip().lower() == "en" else "es"
    session_id = session_id or str(uuid.uuid4())
    transcript = ConversationTranscript(
        session_id=session_id, tenant=tenant, lang=lang, timestamp=datetime.now()
    )

    start = time.monotonic()
    for question in questions:
        asked_at = time.monotonic() - start
        transcript.turns.append(TranscriptTurn(speaker=Speaker.USER, text=question, timestamp=asked_at))

        request = ChatRequest(kb=tenant, lang=lang, session_id=session_id, message=question)
        response = engine.chat(request)
        answer = (response.reply or "").strip()
        if not answer:
            raise ReplayError(f"Blank reply for question: {question}")

        answered_at = time.monotonic() - start
        state = engine.sessions.get_or_create(tenant, session_id, lang)
        transcript.turns.append(TranscriptTurn(
            speaker=Speaker.ASSISTANT,
            text=answer,
            timestamp=answered_at,
            actions=[a.describe() for a in response.actions],
            citations=list(response.citations),
            flow=state.flow.value,
            response_time_ms=round((answered_at - asked_at) * 1000, 1),
        ))

    transcript.duration_seconds = round(time.monotonic() - start, 3)
    logger.info("Replayed %d questions for tenant %s in %.2fs", len(questions), tenant, transcript.duration_seconds)
    return transcript


def format_log(transcript: ConversationTranscript) -> str:
    lines = [f"KB={transcript.tenant} | LANG={transcript.lang} | SESSION={transcript.session_id}", ""]
    for i, (question, answer) in enumerate(zip(transcript.questions(), transcript.answers()), start=1):
        lines.append(f"[{i}] Q: {question}")
        lines.append(f"[{i}] A: {answer}")
        lines.append("")
    return "\n".join(lines)


def write_log(transcript: ConversationTranscript, output_dir: Path = DEFAULT_OUTPUT_DIR) -> Path:
    """Write ``replay-<tenant>-<timestamp>.log`` and return its path."""
    output_dir = Path(output_dir)
    output_dir.mkdir(parents=True, exist_ok=True)
    stamp = transcript.timestamp.strftime("%Y%m%d-%H%M%S")
    path = output_dir / f"replay-{transcript.tenant}-{stamp}.log"
    path.write_text(format_log(transcript), encoding="utf-8")
    return path


def main(argv: Optional[list[str]] = None) -> None:
    parser = argparse.ArgumentParser(
        description="Replay scripted questions through the sales assistant and log the answers."
    )
    parser.add_argument("--tenant", default="A", help="Tenant id: A, B or C (default: A).")
    parser.add_argument("--lang", default="es", help="Reply language: es or en (default: es).")
    parser.add_argument(
        "--questions",
        type=str,
        default=None,
        help="Path to a questions file (default: packaged questions).",
    )
    parser.add_argument(
        "--out",
        type=str,
        default=str(DEFAULT_OUTPUT_DIR),
        help="Directory for the replay log (default: replay-logs/).",
    )
    args = parser.parse_args(argv)

    try:
        questions = load_questions(Path(args.questions) if args.questions else None)
        transcript = replay(ChatEngine.from_settings(), questions, tenant=args.tenant, lang=args.lang)
    except ReplayError as exc:
        logger.error("Replay failed: %s", exc)
        sys.exit(1)

    path = write_log(transcript, Path(args.out))
    logger.info("Replay log written to %s", path.resolve())
    sys.stdout.write(f"{path}\n")


if __name__ == "__main__":
    main()
