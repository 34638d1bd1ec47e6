"""Pydantic request schemas and sentence-type constants for Kotoba Bridge."""
from typing import Optional
from pydantic import BaseModel

# --- Sentence types ---
COMMAND = "命令文"
QUESTION = "疑問文"
STATEMENT = "肯定文"

SENTENCE_TYPES = (COMMAND, QUESTION, STATEMENT)

TYPE_LABELS = {
    COMMAND: "Câu mệnh lệnh",
    QUESTION: "Câu nghi vấn",
    STATEMENT: "Câu khẳng định",
}
UNKNOWN_TYPE_LABEL = "Không xác định"


def type_label(sentence_type) -> str:
    if not isinstance(sentence_type, str):
        return UNKNOWN_TYPE_LABEL
    return TYPE_LABELS.get(sentence_type.strip(), UNKNOWN_TYPE_LABEL)


# --- Pydantic Models ---
# Fields are optional so that a missing value reaches the route and becomes
# the same 400 as an empty one.

class ClassifyRequest(BaseModel):
    text: Optional[str] = None


class TranslateRequest(BaseModel):
    text: Optional[str] = None


class VocabLookupRequest(BaseModel):
    input: Optional[str] = None
