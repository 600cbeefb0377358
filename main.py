import os
import sys
from typing import List
from fastapi import FastAPI, HTTPException, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException
from dotenv import load_dotenv
from loguru import logger
from healthbot.schemas import (
    ChatRequest, ChatResponse, EmergencyContact, HealthStatus, HealthTip,
    HospitalsResponse, MessageResponse, Reminder, ReminderCreate,
    SymptomCheckRequest, SymptomCheckResponse,
)
from healthbot.agent import MATCH_POLICIES, chat_reply, check_symptoms
from healthbot.directory import emergency_contacts, find_hospitals, pick_health_tips
from healthbot.reminders import MissingFieldsError, ReminderStore
from healthbot.utils import utc_now_iso

load_dotenv(dotenv_path=".env")

SYMPTOM_MATCH_POLICY = os.getenv("SYMPTOM_MATCH_POLICY", "all").lower()
if SYMPTOM_MATCH_POLICY not in MATCH_POLICIES:
    logger.warning("Unknown SYMPTOM_MATCH_POLICY {!r}, using 'all'", SYMPTOM_MATCH_POLICY)
    SYMPTOM_MATCH_POLICY = "all"

app = FastAPI(title="Healthcare Chatbot API", version="1.0.0")

origins_env = os.getenv("ALLOWED_ORIGINS", "")
if origins_env:
    origins = [o.strip() for o in origins_env.split(",")]
else:
    origins = None
app.add_middleware(
    CORSMiddleware,
    allow_origins=origins or ["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

reminder_store = ReminderStore()

# Message returned when a request body fails type validation
BODY_ERRORS = {
    "/api/symptom-check": "Symptoms array is required",
    "/api/reminders": "Medicine name, frequency, and time are required",
    "/api/chat": "Message is required",
}


@app.exception_handler(StarletteHTTPException)
async def http_error(request: Request, exc: StarletteHTTPException):
    return JSONResponse(status_code=exc.status_code, content={"error": exc.detail})


@app.exception_handler(RequestValidationError)
async def body_error(request: Request, exc: RequestValidationError):
    message = BODY_ERRORS.get(request.url.path, "Invalid request")
    logger.info("Rejected {} {}: {}", request.method, request.url.path, exc.errors())
    return JSONResponse(status_code=status.HTTP_400_BAD_REQUEST, content={"error": message})


@app.exception_handler(Exception)
async def server_error(request: Request, exc: Exception):
    logger.exception("Unhandled error on {} {}", request.method, request.url.path)
    return JSONResponse(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
                        content={"error": "Internal server error"})


@app.get("/api/health", response_model=HealthStatus)
def health():
    return HealthStatus(status="Server is running!", timestamp=utc_now_iso())


@app.post("/api/symptom-check", response_model=SymptomCheckResponse)
def symptom_check(req: SymptomCheckRequest):
    if req.symptoms is None:
        raise HTTPException(status_code=400, detail="Symptoms array is required")

    result = check_symptoms(req.symptoms, policy=SYMPTOM_MATCH_POLICY)
    logger.info("Symptom check: {} inputs, {} matches, severity={}",
                len(req.symptoms), len(result.results), result.severity)
    return result


@app.get("/api/hospitals/{pincode}", response_model=HospitalsResponse)
def hospitals(pincode: str):
    result = find_hospitals(pincode)
    logger.info("Hospital lookup for {}: {} results", pincode, len(result.hospitals))
    return result


@app.get("/api/health-tips", response_model=List[HealthTip])
def health_tips():
    tips = pick_health_tips()
    logger.info("Health tips: {}", ", ".join(t.category for t in tips))
    return tips


@app.get("/api/reminders", response_model=List[Reminder])
def list_reminders():
    return reminder_store.list()


@app.post("/api/reminders", response_model=Reminder, status_code=status.HTTP_201_CREATED)
def create_reminder(req: ReminderCreate):
    try:
        return reminder_store.create(
            medicine_name=req.medicine_name,
            frequency=req.frequency,
            time_of_day=req.time,
            dosage=req.dosage,
            start_date=req.start_date,
        )
    except MissingFieldsError as e:
        logger.info("Reminder rejected, missing {}", ", ".join(e.fields))
        raise HTTPException(status_code=400, detail=str(e))


@app.delete("/api/reminders/{reminder_id}", response_model=MessageResponse)
def delete_reminder(reminder_id: str):
    reminder_store.delete(reminder_id)
    return MessageResponse(message="Reminder deleted successfully")


@app.get("/api/emergency-contacts", response_model=List[EmergencyContact])
def contacts():
    logger.info("Emergency contacts requested")
    return emergency_contacts()


@app.post("/api/chat", response_model=ChatResponse)
def chat(req: ChatRequest):
    user_text = (req.message or "").strip()
    if not user_text:
        raise HTTPException(status_code=400, detail="Message is required")

    reply = chat_reply(user_text, conversation_id=req.conversation_id)
    logger.info("Chat reply for conversation {}", reply.conversation_id)
    return reply


def run():
    import uvicorn

    logger.remove()
    logger.add(sys.stderr, level=os.getenv("LOG_LEVEL", "INFO").upper())

    host = os.getenv("HOST", "0.0.0.0")
    port = int(os.getenv("PORT", "5000"))
    logger.info("Healthcare Chatbot API server running on port {}", port)
    logger.info("Access the API at: http://localhost:{}/api/health", port)
    uvicorn.run(app, host=host, port=port)


if __name__ == "__main__":
    run()
