import logging

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from app.config import settings
from app.routers import health, pay_rates, reference_data, rules

logging.basicConfig(
    level=settings.log_level.upper(),
    format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
)

app = FastAPI(
    title="Fair Work Pay Rates API",
    description="Award pay rate calculation and computed rule generation",
    version="1.0.0",
)

# CORS: open for now, to be restricted per deployment
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(health.router)
app.include_router(pay_rates.router)
app.include_router(rules.router)
app.include_router(reference_data.router)
