from fastapi import FastAPI, Depends, HTTPException
from fastapi.middleware.cors import CORSMiddleware
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session
import logging
import os

from taskboard.config.security import SecurityConfig
from taskboard.database import get_db, SessionLocal
from taskboard.models import Task, User
from taskboard.routers import auth, users, tasks, comments, ratings, notifications, messages, activity, reports
from taskboard.services.bootstrap import create_tables, ensure_admin
from taskboard.services.scheduler import session_sweeper

logging.basicConfig(level=os.getenv("LOG_LEVEL", "INFO").upper())
logger = logging.getLogger(__name__)

app = FastAPI(title="Taskboard API")

# CORS configuration; credentials are needed for the session cookie
app.add_middleware(
    CORSMiddleware,
    allow_origins=SecurityConfig.get_cors_origins(),
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Route registration
app.include_router(auth.router, prefix="/auth", tags=["Authentication"])
app.include_router(users.router, prefix="/users", tags=["Users"])
app.include_router(tasks.router, tags=["Tasks"])
app.include_router(comments.router, tags=["Comments"])
app.include_router(ratings.router, tags=["Ratings"])
app.include_router(notifications.router, tags=["Notifications"])
app.include_router(messages.router, tags=["Messages"])
app.include_router(activity.router, tags=["Activity"])
app.include_router(reports.router, tags=["Reports"])

# Startup and shutdown events
@app.on_event("startup")
async def startup_event():
    """Create missing tables, bootstrap the admin account and start the sweeper"""
    logger.info("Starting Taskboard API...")
    create_tables()
    db = SessionLocal()
    try:
        ensure_admin(db)
    finally:
        db.close()
    session_sweeper.start()

@app.on_event("shutdown")
async def shutdown_event():
    """Stop the session sweeper when the application shuts down"""
    logger.info("Shutting down Taskboard API...")
    session_sweeper.stop()

# Root route
@app.get("/")
def read_root():
    return {"message": "Taskboard API"}

@app.get("/health")
def health():
    return {"status": "ok"}

@app.get("/health/db")
def database_health(db: Session = Depends(get_db)):
    """Check the database connection and report row counts"""
    try:
        return {
            "status": "ok",
            "database": db.get_bind().dialect.name,
            "usersCount": db.query(User).count(),
            "tasksCount": db.query(Task).count(),
        }
    except SQLAlchemyError as e:
        logger.error(f"Database health check failed: {e}")
        raise HTTPException(status_code=500, detail="Database unavailable")

@app.get("/init")
def initialise(db: Session = Depends(get_db)):
    """Create the default admin account on an empty database"""
    admin = ensure_admin(db)
    if admin is None:
        return {"status": "success", "message": "System already initialised", "usersCount": db.query(User).count()}
    return {
        "status": "success",
        "message": "Admin account created",
        "admin": {"username": admin.username},
    }

@app.get("/scheduler/status")
def get_scheduler_status():
    """Get session sweeper status and job information"""
    return session_sweeper.get_status()
