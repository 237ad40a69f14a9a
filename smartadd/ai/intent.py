# smartadd/ai/intent.py
# Keyword-based update intent detection used to route prompts between endpoints

# * Keywords (English & Hinglish) that signal the user wants to change an existing record
UPDATE_KEYWORDS: tuple[str, ...] = (
    "change",
    "update",
    "modify",
    "kar do",
    "badlo",
    "edit",
    "correct",
    "fix",
)


def detect_update_intent(prompt: str) -> bool:
    lowered = prompt.lower()
    return any(keyword in lowered for keyword in UPDATE_KEYWORDS)
