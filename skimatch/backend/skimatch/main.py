from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from .api.routes import listings, recurring, availability
from .db.session import Base, engine
from .config import get_settings
from .core.logging_config import configure_logging


app = FastAPI(title="SkiMatch Availability API", version="1.0.0")

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(listings.router, prefix="/api/v1")
app.include_router(recurring.router, prefix="/api/v1")
app.include_router(availability.router, prefix="/api/v1")


@app.on_event("startup")
async def startup_event() -> None:
    settings = get_settings()
    configure_logging(settings.log_level)
    Base.metadata.create_all(bind=engine)
