import logging
import os

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from campus_seating.errors import SeatingError
from campus_seating.routes.auth import router as authRouter
from campus_seating.routes.busRoutes import router as busRoutesRouter

logging.basicConfig(
    level=os.getenv("LOG_LEVEL", "INFO").upper(),
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)
logger = logging.getLogger(__name__)

app = FastAPI(title="Campus Bus Seating")

# Enable CORS for the web client
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(authRouter)
app.include_router(busRoutesRouter)


@app.exception_handler(SeatingError)
async def handleSeatingError(request: Request, exc: SeatingError):
    return JSONResponse(
        status_code=exc.statusCode,
        content={"success": False, "message": exc.message}
    )


@app.exception_handler(RequestValidationError)
async def handleRequestValidation(request: Request, exc: RequestValidationError):
    errors = exc.errors()
    first = errors[0] if errors else {}
    field = ".".join(str(part) for part in first.get("loc", ()) if part != "body")
    message = f"{field}: {first.get('msg')}" if field else "Invalid request"
    return JSONResponse(status_code=400, content={"success": False, "message": message})


@app.get("/health")
def healthCheck():
    return {
        "status": "OK",
        "service": "campus-seating"
    }
