"""Interviewer system prompt and per-language reply instructions."""

from ..config import DEFAULT_LANGUAGE, INTERVIEW_END_MARKER

LANGUAGE_INSTRUCTIONS = {
    "zho": "請用繁體中文進行對話",
    "eng": "Please respond in English",
    "jpn": "日本語で応答してください",
    "kor": "한국어로 응답해주세요",
    "fra": "Veuillez répondre en français",
    "deu": "Bitte antworten Sie auf Deutsch",
    "spa": "Por favor responda en español",
    "ita": "Si prega di rispondere in italiano",
    "por": "Por favor responda em português",
    "rus": "Пожалуйста, отвечайте на русском языке",
    "ara": "يرجى الرد بالعربية",
    "tha": "กรุณาตอบเป็นภาษาไทย",
    "vie": "Vui lòng trả lời bằng tiếng Việt",
}

SYSTEM_PROMPT_TEMPLATE = """You are a professional interviewer conducting a technical interview. Your tasks:
1. Ask in-depth follow-up questions based on the candidate's answers
2. Assess the candidate's technical ability, problem solving and communication
3. Keep the conversation professional but friendly
4. Give constructive feedback where appropriate
5. Decide from the depth of each answer whether to dig deeper or change topic
6. When you have assessed the candidate sufficiently, or the interview has run for enough rounds (about 8-12), append the special marker {marker} at the end of your reply to signal that the interview is over
{test_instruction}
Ask your question or respond directly. Do not repeat the candidate's question and do not open with phrases like "You mentioned..., please explain:". Keep the style concise and direct.

{language_instruction}, keeping the conversation natural and fluent. When the interview ends, give a short summary and thanks, then append the {marker} marker."""

TEST_MODE_INSTRUCTION = (
    "Important: append the {marker} marker at the end of your very first reply "
    "to test the end-of-interview flow.\n"
)


def get_language_instruction(language: str) -> str:
    """Reply-language instruction for a request language code."""
    return LANGUAGE_INSTRUCTIONS.get(language, LANGUAGE_INSTRUCTIONS[DEFAULT_LANGUAGE])


def build_system_prompt(language: str, test_mode: bool = False) -> str:
    """Interviewer system prompt for the given language code."""
    test_instruction = (
        TEST_MODE_INSTRUCTION.format(marker=INTERVIEW_END_MARKER) if test_mode else ""
    )
    return SYSTEM_PROMPT_TEMPLATE.format(
        marker=INTERVIEW_END_MARKER,
        test_instruction=test_instruction,
        language_instruction=get_language_instruction(language),
    )
