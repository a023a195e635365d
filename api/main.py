from contextlib import asynccontextmanager

import uvicorn
from dotenv import load_dotenv
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from auth import router as auth_router
from core import errors, settings, supabase
from core.logging_config import configure_logging
from posts import router as posts_router
from web import router as web_router

load_dotenv()
configure_logging()


@asynccontextmanager
async def lifespan(_: FastAPI):
    # Open the hosted database client once per process.
    await supabase.init_client()
    try:
        yield
    finally:
        await supabase.close_client()


app = FastAPI(title="blog-api", lifespan=lifespan)

# Allow the browser frontend to call this API.
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins(),
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.add_exception_handler(errors.APIError, errors.api_error_handler)

app.include_router(posts_router.router, tags=["posts"])
app.include_router(auth_router.router, tags=["auth"])
app.include_router(web_router.router, tags=["web"])


@app.get("/health")
def health() -> dict:
    return {"status": "ok"}


if __name__ == "__main__":
    uvicorn.run(app, host=settings.host(), port=settings.port())
