"""Prompt templates for the Gemini-backed operations."""
from typing import List

from models import SENTENCE_TYPES

CLASSIFY_TEMPLATE = """You are a Japanese language assistant for Vietnamese students.
Classify each numbered sentence below as exactly one of: {types}
(命令文 = command, 疑問文 = question, 肯定文 = statement).

Return ONLY one valid JSON object, no explanation:
{{
  "sentences": [
    {{
      "original": "the sentence as given",
      "normalized": "the sentence with typos and spacing fixed",
      "type": "命令文" | "疑問文" | "肯定文",
      "mainIdea": "main idea of the sentence, in Vietnamese",
      "actionSuggestion": "what the listener should do, in Vietnamese"
    }}
  ]
}}

Keep the same order as the input. Input:
{numbered}"""

TRANSLATE_TEMPLATE = """Translate the following Japanese text into Vietnamese. Keep the punctuation.
Return ONLY valid JSON: {{"translated": "Vietnamese translation"}}

{text}"""

VOCAB_TEMPLATE = """You are a Japanese-Vietnamese language expert. Analyse the Japanese text: "{text}"

1. Translate the whole text into Vietnamese ("mainTranslation").
2. Split it into meaningful words. Leave out very common words (私, あなた, です, だ)
   and particles (は, が, を, に, も, で, と, から, まで, へ). Keep nouns, verbs and
   adjectives worth studying.
3. Give each kept word in dictionary form.

Return ONLY one valid JSON object:
{{
  "mainTranslation": "Vietnamese translation of the whole text",
  "vocabList": [
    {{
      "kanji": "kanji form, or empty",
      "reading": "hiragana/katakana reading",
      "hanViet": "Sino-Vietnamese reading if kanji, or empty",
      "meaning": "Vietnamese meaning",
      "synonyms": ["synonym 1", "synonym 2"],
      "examples": [
        {{"jp": "Japanese example 1", "vi": "Vietnamese translation 1"}},
        {{"jp": "Japanese example 2", "vi": "Vietnamese translation 2"}}
      ]
    }}
  ]
}}

Rules: vocabList has at least 1 item. Every item has at least 1 synonym and 1 example.
No text outside the JSON."""


def classify_prompt(sentences: List[str]) -> str:
    numbered = "\n".join(f"{idx}. {s}" for idx, s in enumerate(sentences, start=1))
    return CLASSIFY_TEMPLATE.format(types=", ".join(SENTENCE_TYPES), numbered=numbered)


def translate_prompt(text: str) -> str:
    return TRANSLATE_TEMPLATE.format(text=text)


def vocab_prompt(text: str) -> str:
    return VOCAB_TEMPLATE.format(text=text)


def passthrough(text: str) -> str:
    """For providers that take the raw text rather than a prompt."""
    return text
