from pydantic import BaseModel, ConfigDict, Field, field_validator
from typing import Any, Literal, Optional, List

Severity = Literal["low", "medium", "high"]
ContactType = Literal["general", "medical", "fire", "police", "women", "child"]


class HealthStatus(BaseModel):
    status: str
    timestamp: str


class SymptomCheckRequest(BaseModel):
    symptoms: Optional[List[str]] = None
    age: Optional[Any] = None  # accepted, not used
    gender: Optional[Any] = None  # accepted, not used


class SymptomEntry(BaseModel):
    model_config = ConfigDict(frozen=True)

    causes: List[str]
    advice: str
    severity: Severity


class SymptomResult(SymptomEntry):
    symptom: str


class SymptomCheckResponse(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    results: List[SymptomResult]
    severity: Severity
    general_advice: str = Field(alias="generalAdvice")
    disclaimer: str


class Hospital(BaseModel):
    model_config = ConfigDict(frozen=True)

    name: str
    address: str
    phone: str
    type: str
    emergency: bool


class HospitalsResponse(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    pincode: str
    hospitals: List[Hospital]
    emergency_number: str = Field(alias="emergencyNumber")


class HealthTip(BaseModel):
    model_config = ConfigDict(frozen=True)

    category: str
    tip: str
    importance: Severity


class EmergencyContact(BaseModel):
    model_config = ConfigDict(frozen=True)

    name: str
    number: str
    type: ContactType


class ReminderCreate(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    medicine_name: Optional[str] = Field(None, alias="medicineName")
    dosage: Optional[str] = None
    frequency: Optional[str] = None
    time: Optional[str] = None
    start_date: Optional[str] = Field(None, alias="startDate")


class Reminder(BaseModel):
    model_config = ConfigDict(populate_by_name=True, frozen=True)

    id: str
    medicine_name: str = Field(alias="medicineName")
    dosage: str
    frequency: str
    time: str
    start_date: str = Field(alias="startDate")
    active: bool = True
    created_at: str = Field(alias="createdAt")


class MessageResponse(BaseModel):
    message: str


class ChatRequest(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    message: Optional[str] = None
    conversation_id: Optional[str] = Field(None, alias="conversationId")

    @field_validator("conversation_id", mode="before")
    @classmethod
    def echo_any_id(cls, v):
        # Clients may send numeric ids; they are echoed back as strings
        return None if v is None else str(v)


class ChatResponse(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    response: str
    conversation_id: str = Field(alias="conversationId")
    timestamp: str
