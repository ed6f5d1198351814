"""Conversation-history rendering shared by the prompt builders."""

from typing import Iterable, Optional

from .prompts import NO_HISTORY


def build_history(answers: Iterable) -> str:
    """Render answered turns as "คำถามที่ N: ...\\nคำตอบ: ..." blocks.

    Accepts AnswerRecord-like objects (``question`` / ``answer`` attributes).
    Returns the NO_HISTORY sentinel when there is nothing to show.
    """
    blocks = []
    for idx, record in enumerate(answers, start=1):
        question = getattr(record, "question", "") or ""
        answer = getattr(record, "answer", "") or ""
        blocks.append(f"คำถามที่ {idx}: {question}\nคำตอบ: {answer}")
    return "\n\n".join(blocks) if blocks else NO_HISTORY


def last_answer(answers: list) -> str:
    if not answers:
        return ""
    return getattr(answers[-1], "answer", "") or ""


def format_asked_questions(questions: Optional[Iterable[str]], header: str) -> str:
    """Numbered list of already-asked questions, appended to prompts as a constraint."""
    questions = list(questions or [])
    if not questions:
        return ""
    lines = [f"{i}. {q}" for i, q in enumerate(questions, start=1)]
    return "\n\n" + header + "\n" + "\n".join(lines)
