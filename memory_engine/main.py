import logging
from contextlib import asynccontextmanager
from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from .core.config import get_settings
from .core.database import init_db
from .routers import memory as memory_router
from .services.llm_client import llm_client

settings = get_settings()

logger = logging.getLogger("memory_engine")
if not logging.getLogger().handlers:
    logging.basicConfig(
        level=settings.log_level.upper(),
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )

@asynccontextmanager
async def lifespan(app: FastAPI):
    init_db()
    logger.info(f"{settings.app_name} started (env={settings.environment})")
    logger.info(f"Memory Engine is running on port: {settings.port}")
    try:
        yield
    finally:
        llm_client.close()

app = FastAPI(title=settings.app_name, version=settings.api_version, lifespan=lifespan)

# CORS
origins = [o.strip() for o in settings.allowed_origins.split(",")]
app.add_middleware(
    CORSMiddleware,
    allow_origins=origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

@app.exception_handler(RequestValidationError)
async def invalid_input(request: Request, exc: RequestValidationError):
    # field details stay in the log, clients only get the generic message
    logger.info(f"Rejected {request.method} {request.url.path}: {exc.errors()}")
    return memory_router.invalid_input_response()

app.include_router(memory_router.router)

@app.get("/health")
async def health():
    return {
        "status": "ok",
        "app": settings.app_name,
        "env": settings.environment,
        "llm_configured": bool(settings.openrouter_api_key),
    }

@app.get("/")
async def root():
    return {"message": "Memory Engine online", "version": settings.api_version}

def run() -> None:
    import uvicorn

    uvicorn.run(app, host=settings.host, port=settings.port, log_level=settings.log_level.lower())

if __name__ == "__main__":
    run()
