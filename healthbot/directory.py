"""
Static directories: hospitals by pincode, health tips and emergency contacts.
"""
import random
from types import MappingProxyType
from typing import List, Optional
from loguru import logger

from healthbot.schemas import EmergencyContact, HealthTip, Hospital, HospitalsResponse

EMERGENCY_NUMBER = "108"

HOSPITALS_BY_PINCODE = MappingProxyType({
    "110001": (
        Hospital(
            name="All India Institute of Medical Sciences (AIIMS)",
            address="Ansari Nagar, New Delhi - 110029",
            phone="011-26588500",
            type="Multi-specialty Government Hospital",
            emergency=True,
        ),
        Hospital(
            name="Safdarjung Hospital",
            address="Safdarjung, New Delhi - 110029",
            phone="011-26165060",
            type="Government Hospital",
            emergency=True,
        ),
    ),
    "400001": (
        Hospital(
            name="King Edward Memorial Hospital",
            address="Acharya Donde Marg, Parel, Mumbai - 400012",
            phone="022-24136051",
            type="Government Hospital",
            emergency=True,
        ),
        Hospital(
            name="Lilavati Hospital",
            address="A-791, Bandra Reclamation, Mumbai - 400050",
            phone="022-26430891",
            type="Private Multi-specialty Hospital",
            emergency=True,
        ),
    ),
})

HEALTH_TIPS = (
    HealthTip(category="Nutrition",
              tip="Eat a rainbow of fruits and vegetables daily for essential vitamins and minerals.",
              importance="high"),
    HealthTip(category="Exercise",
              tip="Aim for at least 150 minutes of moderate aerobic activity per week.",
              importance="high"),
    HealthTip(category="Sleep",
              tip="Maintain a consistent sleep schedule and aim for 7-9 hours per night.",
              importance="high"),
    HealthTip(category="Hydration",
              tip="Drink 8-10 glasses of water daily to stay properly hydrated.",
              importance="medium"),
    HealthTip(category="Mental Health",
              tip="Practice stress management techniques like meditation or deep breathing.",
              importance="high"),
)

EMERGENCY_CONTACTS = (
    EmergencyContact(name="National Emergency Services", number="112", type="general"),
    EmergencyContact(name="Medical Emergency", number="108", type="medical"),
    EmergencyContact(name="Fire Emergency", number="101", type="fire"),
    EmergencyContact(name="Police Emergency", number="100", type="police"),
    EmergencyContact(name="Women Helpline", number="1091", type="women"),
    EmergencyContact(name="Child Helpline", number="1098", type="child"),
)


def fallback_hospitals(pincode: str) -> List[Hospital]:
    """Generic facilities for a pincode with no listing"""
    return [
        Hospital(
            name="Local Community Health Center",
            address=f"Health Street, {pincode}",
            phone="108",
            type="Primary Health Center",
            emergency=True,
        ),
        Hospital(
            name="District Hospital",
            address=f"Main Road, {pincode}",
            phone="Emergency: 108",
            type="Government Hospital",
            emergency=True,
        ),
    ]


def find_hospitals(pincode: str) -> HospitalsResponse:
    listed = HOSPITALS_BY_PINCODE.get(pincode)
    if listed is None:
        logger.debug("No hospital listing for pincode {}, using fallback", pincode)
        hospitals = fallback_hospitals(pincode)
    else:
        hospitals = list(listed)
    return HospitalsResponse(pincode=pincode, hospitals=hospitals, emergency_number=EMERGENCY_NUMBER)


def pick_health_tips(count: int = 3, rng: Optional[random.Random] = None) -> List[HealthTip]:
    """Return `count` distinct tips from the pool in random order."""
    rng = rng or random
    count = max(0, min(count, len(HEALTH_TIPS)))
    return rng.sample(HEALTH_TIPS, count)


def emergency_contacts() -> List[EmergencyContact]:
    return list(EMERGENCY_CONTACTS)
