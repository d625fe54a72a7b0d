from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from .api import router
from .config import configure_logging, get_settings
from .errors import ScheduleStoreError, SchedulingError

#  python -m uvicorn sched_guard.main:app --reload --port 9000 run this
settings = get_settings()
configure_logging(settings.log_level)

app = FastAPI(title="Sched_Guard")

# --- Allow the PHP backend / scheduling UI access ---
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.exception_handler(SchedulingError)
async def scheduling_error_handler(request: Request, exc: SchedulingError):
    return JSONResponse(
        status_code=422,
        content={"type": type(exc).__name__, "message": str(exc)},
    )


@app.exception_handler(ScheduleStoreError)
async def store_error_handler(request: Request, exc: ScheduleStoreError):
    return JSONResponse(status_code=502, content={"type": type(exc).__name__, "message": str(exc)})


@app.get("/")
def root():
    return {"message": "Sched_Guard conflict service is running"}


app.include_router(router)
