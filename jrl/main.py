import logging

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from jrl.auth import routes as auth_router
from jrl.core.config import CORS_ORIGINS
from jrl.core.database import create_tables
from jrl.drafts import routes as drafts_router
from jrl.journals import routes as journals_router
from jrl.preferences import routes as preferences_router
from jrl.system import routes as system_router

logging.basicConfig(level=logging.INFO, format="%(asctime)s %(levelname)s %(name)s: %(message)s")

app = FastAPI(
    title="JRL Client API",
    version="1.0.0",
    description="Local shell for the JRL journal client: persistence, reconciliation and translation.",
)

# CORS config
app.add_middleware(
    CORSMiddleware,
    allow_origins=CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Routers
app.include_router(auth_router.router)
app.include_router(journals_router.router)
app.include_router(drafts_router.router)
app.include_router(preferences_router.router)
app.include_router(system_router.router)


# DB Tables
@app.on_event("startup")
def startup_create_tables():
    create_tables()
