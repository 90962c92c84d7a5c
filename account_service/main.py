import logging
from contextlib import asynccontextmanager
from fastapi import FastAPI, Request
from fastapi.exception_handlers import http_exception_handler
from fastapi.middleware.cors import CORSMiddleware
from starlette.exceptions import HTTPException as StarletteHTTPException
from account_service.core.config import settings
from account_service.api.v1.api import api_router
from account_service.api.v1.endpoints.users import method_not_allowed
from account_service.db.init_db import init_db

logging.basicConfig(
    level=settings.LOG_LEVEL,
    format="%(asctime)s %(levelname)s %(name)s %(message)s",
)
logger = logging.getLogger(__name__)

USERS_COLLECTION_PATH = f"{settings.API_V1_STR}/users/"

@asynccontextmanager
async def lifespan(app: FastAPI):
    if settings.CREATE_TABLES_ON_STARTUP:
        await init_db()
    yield

app = FastAPI(
    title=settings.PROJECT_NAME,
    openapi_url=f"{settings.API_V1_STR}/openapi.json",
    lifespan=lifespan,
)

# CORS
origins = settings.BACKEND_CORS_ORIGINS

app.add_middleware(
    CORSMiddleware,
    allow_origins=origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(api_router, prefix=settings.API_V1_STR)

@app.exception_handler(StarletteHTTPException)
async def users_method_not_allowed_handler(request: Request, exc: StarletteHTTPException):
    # Methods the users collection route does not register never reach its handler
    if exc.status_code == 405 and request.url.path == USERS_COLLECTION_PATH:
        return method_not_allowed(request.method)
    return await http_exception_handler(request, exc)

@app.get("/")
def root():
    return {"message": "Welcome to the Account Service API"}
