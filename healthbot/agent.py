import re
import uuid
from types import MappingProxyType
from typing import Callable, Iterable, List, Optional, Tuple
from loguru import logger

from healthbot.schemas import (
    ChatResponse,
    SymptomCheckResponse,
    SymptomEntry,
    SymptomResult,
)
from healthbot.utils import utc_now_iso

# Symptom knowledge base. Lookup order is declaration order.
SYMPTOM_TABLE = MappingProxyType({
    "fever": SymptomEntry(
        causes=["Viral infection", "Bacterial infection", "Heat exhaustion"],
        advice="Rest, stay hydrated, monitor temperature. Consult doctor if fever persists over 3 days or exceeds 101°F.",
        severity="medium",
    ),
    "headache": SymptomEntry(
        causes=["Stress", "Dehydration", "Eye strain", "Tension"],
        advice="Rest in a dark room, stay hydrated, consider pain relief if needed. Consult doctor if severe or persistent.",
        severity="low",
    ),
    "cough": SymptomEntry(
        causes=["Cold", "Allergies", "Respiratory infection"],
        advice="Stay hydrated, avoid irritants, use honey for throat soothing. Consult doctor if persistent or with blood.",
        severity="medium",
    ),
    "chest pain": SymptomEntry(
        causes=["Muscle strain", "Heartburn", "Heart issues"],
        advice="SEEK IMMEDIATE MEDICAL ATTENTION. Do not ignore chest pain.",
        severity="high",
    ),
})

SEVERITY_RANK = {"low": 0, "medium": 1, "high": 2}

GENERAL_ADVICE = {
    "high": "URGENT: Please seek immediate medical attention or call emergency services.",
    "medium": "Consider consulting a healthcare provider if symptoms persist or worsen.",
    "low": "Monitor symptoms and maintain general health practices. Consult a doctor if concerned.",
}

SYMPTOM_DISCLAIMER = (
    "This is for informational purposes only. Please consult a healthcare "
    "professional for proper diagnosis and treatment."
)

MATCH_POLICIES = ("all", "first")


def match_symptom(text: str, policy: str = "all") -> List[str]:
    """
    Return the table keys contained in `text`, in table order.
    With policy "first" at most one key is returned.
    """
    if policy not in MATCH_POLICIES:
        raise ValueError(f"Unknown symptom match policy: {policy!r}")

    lower = text.lower()
    found = []
    for key in SYMPTOM_TABLE:
        if key in lower:
            found.append(key)
            if policy == "first":
                break
    return found


def aggregate_severity(severities: Iterable[str]) -> str:
    return max(severities, key=SEVERITY_RANK.__getitem__, default="low")


def check_symptoms(symptoms: List[str], policy: str = "all") -> SymptomCheckResponse:
    """
    Match free-text symptoms against the symptom table.
    Unmatched inputs are dropped; each table key contributes at most one result.
    """
    results: List[SymptomResult] = []
    seen = set()

    for text in symptoms:
        for key in match_symptom(text, policy):
            if key in seen:
                continue
            seen.add(key)
            entry = SYMPTOM_TABLE[key]
            results.append(SymptomResult(symptom=key, **entry.model_dump()))

    severity = aggregate_severity(r.severity for r in results)
    logger.debug("Symptom check matched {} of {} inputs, severity={}",
                 len(results), len(symptoms), severity)

    return SymptomCheckResponse(
        results=results,
        severity=severity,
        general_advice=GENERAL_ADVICE[severity],
        disclaimer=SYMPTOM_DISCLAIMER,
    )


# ---- Rule-based chat ----
Predicate = Callable[[str], bool]


def contains_any(*keywords: str) -> Predicate:
    return lambda lower: any(kw in lower for kw in keywords)


def contains_word(*words: str) -> Predicate:
    # Whole-word match so "hi" does not fire on "this" or "chills"
    pattern = re.compile(r"\b(?:" + "|".join(re.escape(w) for w in words) + r")\b")
    return lambda lower: pattern.search(lower) is not None


CHAT_RULES: Tuple[Tuple[str, Predicate, str], ...] = (
    ("greeting", contains_word("hello", "hi"),
     "Hello! I'm your health assistant. I can help you with symptom checking, finding hospitals, "
     "setting medicine reminders, and providing health tips. How can I assist you today?"),
    ("fever", contains_any("fever", "temperature"),
     "I understand you're concerned about fever. Common causes include viral or bacterial infections. "
     "Please rest, stay hydrated, and monitor your temperature. If fever persists over 3 days or "
     "exceeds 101°F, please consult a doctor immediately."),
    ("headache", contains_any("headache", "head pain"),
     "Headaches can be caused by stress, dehydration, or eye strain. Try resting in a dark room and "
     "staying hydrated. If headaches are severe or persistent, please consult a healthcare provider."),
    ("hospital", contains_any("hospital", "doctor"),
     "I can help you find nearby hospitals and healthcare facilities. Please provide your pincode, "
     "and I'll show you the closest options with contact information."),
    ("medicine", contains_any("medicine", "reminder"),
     "I can help you set up medicine reminders to ensure you never miss a dose. This is especially "
     "important for maintaining treatment effectiveness. Would you like to set up a reminder?"),
    ("emergency", contains_any("emergency"),
     "For medical emergencies, please call 108 immediately. For general emergencies, call 112. "
     "If you're experiencing chest pain, difficulty breathing, severe bleeding, or loss of "
     "consciousness, seek immediate medical attention."),
)

CHAT_FALLBACK = (
    "Thank you for your message. I can assist with symptom checking, finding hospitals, medicine "
    "reminders, health tips, and emergency information. Could you please be more specific about "
    "how I can help you today?"
)

CHAT_DISCLAIMER = (
    " \n\nDisclaimer: This information is for educational purposes only and should not replace "
    "professional medical advice. Please consult with a healthcare provider for proper diagnosis "
    "and treatment."
)


def select_chat_rule(message: str) -> Tuple[str, str]:
    """Return (rule name, response) of the first rule matching the message."""
    lower = message.lower()
    for name, predicate, response in CHAT_RULES:
        if predicate(lower):
            return name, response
    return "fallback", CHAT_FALLBACK


def chat_reply(message: str, conversation_id: Optional[str] = None) -> ChatResponse:
    rule, text = select_chat_rule(message)
    logger.debug("Chat rule selected: {}", rule)
    return ChatResponse(
        response=text + CHAT_DISCLAIMER,
        conversation_id=conversation_id or uuid.uuid4().hex,
        timestamp=utc_now_iso(),
    )
