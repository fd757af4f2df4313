import logging

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from fitflow import config
from fitflow.api import dashboard, nutrition, onboarding, profile, workouts

logging.basicConfig(
    level=config.LOG_LEVEL,
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)

app = FastAPI(title="FitFlow API")

app.add_middleware(
    CORSMiddleware,
    allow_origins=config.ALLOWED_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(onboarding.router)
app.include_router(profile.router)
app.include_router(workouts.router)
app.include_router(dashboard.router)
app.include_router(nutrition.router)


# Root endpoint
@app.get("/")
def root():
    return {
        "message": "Welcome to FitFlow API",
        "docs": "/docs",
        "redoc": "/redoc"
    }


# Health check endpoint
@app.get("/health")
def health_check():
    return {"status": "healthy", "message": "API is running"}


if __name__ == "__main__":
    import uvicorn
    uvicorn.run("fitflow.main:app", host="0.0.0.0", port=8000, reload=True)
