import logging

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

import uvicorn

from backend.config import settings
from backend.routers import auth, documents, generations

logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)

app = FastAPI(title=settings.app_name)

# Configure CORS
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Include routers
app.include_router(auth.router)
app.include_router(documents.router)
app.include_router(generations.router)


@app.get("/health")
async def health_check() -> dict[str, str]:
    return {"status": "healthy", "service": "json_studio_backend"}


if __name__ == "__main__":
    uvicorn.run(
        "backend.main:app",
        host="0.0.0.0",
        port=8000,
        reload=True,
        loop="asyncio",  # Explicitly use asyncio instead of auto (which tries uvloop)
    )
