"""Deterministic stand-in results, used only when no provider produced a valid one."""
import re as _re
from typing import List

from models import COMMAND, QUESTION, STATEMENT, type_label
from text_utils import normalize

_QUESTION_END = _re.compile(r"[？?]$")
_COMMAND_END = _re.compile(r"(なさい|しろ|せよ|ください)$")

_ACTION_SUGGESTIONS = {
    COMMAND: "Thực hiện yêu cầu được nêu (placeholder)",
    QUESTION: "Cân nhắc câu trả lời phù hợp (placeholder)",
    STATEMENT: "Ghi nhớ thông tin chính (placeholder)",
}


def guess_sentence_type(sentence: str) -> str:
    """Suffix/keyword rules; a command ending wins over question markers."""
    sentence_type = STATEMENT
    if _QUESTION_END.search(sentence) or "か" in sentence:
        sentence_type = QUESTION
    if _COMMAND_END.search(sentence):
        sentence_type = COMMAND
    return sentence_type


def placeholder_classification(sentences: List[str]) -> dict:
    shaped = []
    for sentence in sentences:
        normalized = normalize(sentence)
        sentence_type = guess_sentence_type(sentence)
        shaped.append({
            "original": sentence,
            "normalized": normalized,
            "type": sentence_type,
            "typeLabel": type_label(sentence_type),
            "mainIdea": f'Ý chính (placeholder) của câu: "{normalized}"',
            "actionSuggestion": _ACTION_SUGGESTIONS[sentence_type],
        })
    return {"sentences": shaped}


def placeholder_translation(text: str) -> dict:
    return {"source": text, "translated": f"Tiếng Việt (server fallback): {text}"}


def placeholder_vocabulary(text: str) -> dict:
    return {
        "input": text,
        "mainTranslation": f'Dịch mẫu của câu: "{text}" (thiếu Gemini)',
        "vocabList": [
            {
                "kanji": "",
                "reading": text,
                "hanViet": "",
                "meaning": f'Nghĩa mẫu của "{text}"',
                "synonyms": [f"{text} の類義語 (mẫu)"],
                "examples": [
                    {"jp": f"{text} の例文 (mẫu)", "vi": f'Ví dụ tiếng Việt cho "{text}" (mẫu)'},
                    {"jp": "もう一つの例文 (mẫu)", "vi": "Ví dụ khác (mẫu)"},
                ],
            }
        ],
    }
