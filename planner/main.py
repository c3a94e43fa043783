import logging

from fastapi import FastAPI
from .database import engine, Base
from .routes import users, tasks, events, focus, analytics

logging.basicConfig(level=logging.INFO, format="%(asctime)s %(levelname)s %(name)s: %(message)s")

# Create database tables
Base.metadata.create_all(bind=engine)

# Create FastAPI app
app = FastAPI(
    title="Planner API",
    description="Tasks, calendar events and automatic scheduling with focus time protection",
    version="1.0.0"
)

# Include routers
app.include_router(users.router, prefix="/users", tags=["users"])
app.include_router(tasks.router, prefix="/tasks", tags=["tasks"])
app.include_router(events.router, prefix="/events", tags=["events"])
app.include_router(focus.router, prefix="/focus", tags=["focus"])
app.include_router(analytics.router, prefix="/analytics", tags=["analytics"])

@app.get("/")
def read_root():
    """Root endpoint with API information"""
    return {
        "message": "Welcome to Planner API",
        "version": "1.0.0",
        "endpoints": {
            "register": "POST /users/register - Create a new user",
            "login": "POST /users/login - Login with username and password",
            "refresh": "POST /users/refresh - Refresh access token",
            "tasks": "CRUD /tasks/* - Task management",
            "auto_schedule": "POST /tasks/auto-schedule - Place pending tasks into free time",
            "events": "CRUD /events/* - Calendar events",
            "focus_suggestions": "GET /focus/suggestions - Free blocks of 2+ hours this week",
            "focus_protect": "POST /focus/protect - Book focus time in those blocks",
            "focus_analytics": "GET /analytics/focus - Focus vs meeting minutes for a day"
        },
        "authentication": "Bearer token in Authorization header",
        "swagger_ui": "/docs - Interactive API documentation",
        "redoc": "/redoc - Alternative API documentation"
    }

@app.get("/health")
def health_check():
    """Health check endpoint"""
    return {"status": "healthy", "message": "API is running"}

if __name__ == "__main__":
    import uvicorn
    uvicorn.run("planner.main:app", host="0.0.0.0", port=8000, reload=True)
