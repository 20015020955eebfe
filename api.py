import os
import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from auth.database import SessionLocal, init_db, close_db
from auth.auth import seed_superadmin
from common.errors import register_exception_handlers
from pipeline import router as auth_router
from categories import routes as category_routes
from unit_works import routes as unit_work_routes
from reports import routes as report_routes
from comments import routes as comment_routes
from dashboard import routes as dashboard_routes
from storage import routes as storage_routes

logging.basicConfig(level=logging.INFO)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    init_db()
    db = SessionLocal()
    try:
        seed_superadmin(db)
    finally:
        db.close()
    yield
    close_db()


app = FastAPI(
    title="Lapor Warga API",
    lifespan=lifespan,
    openapi_tags=[
        {"name": "auth", "description": "Registration, login & user accounts"},
        {"name": "reports", "description": "Citizen reports and their lifecycle"},
    ],
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=[o.strip() for o in os.getenv("CORS_ORIGINS", "*").split(",")],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

register_exception_handlers(app)


@app.get("/")
async def root():
    logger.info("GET / - Root endpoint accessed")
    return {"message": "Server is running!"}


app.include_router(auth_router, tags=["auth"])
app.include_router(category_routes.router)
app.include_router(unit_work_routes.router)
app.include_router(report_routes.router)
app.include_router(comment_routes.router)
app.include_router(dashboard_routes.router)
app.include_router(storage_routes.router)


if __name__ == "__main__":
    import uvicorn
    uvicorn.run("api:app", host="0.0.0.0", port=9000, reload=False)
