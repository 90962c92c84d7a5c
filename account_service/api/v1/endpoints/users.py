import json
import logging
from typing import Any, Awaitable, Callable, Dict, Tuple
from fastapi import APIRouter, Depends, HTTPException, Request, status
from fastapi.encoders import jsonable_encoder
from fastapi.responses import JSONResponse, PlainTextResponse, Response
from pydantic import ValidationError
from account_service.api import deps
from account_service.models.user import UserRole
from account_service.schemas.account import AccountRead, AccountCreate, AccountDelete, PasswordUpdate
from account_service.services.accounts import AccountError, AccountService

logger = logging.getLogger(__name__)

router = APIRouter()

# Advertised in the Allow header of every 405. The legacy handler sent only
# "GET, POST" although it served PUT and DELETE too; all four are listed here.
ALLOWED_METHODS = ("GET", "POST", "PUT", "DELETE")

Handler = Callable[[Dict[str, Any]], Awaitable[Tuple[int, Any]]]

def method_not_allowed(method: str) -> PlainTextResponse:
    logger.info("Rejected %s on users collection", method)
    return PlainTextResponse(
        f"Method {method} not allowed",
        status_code=status.HTTP_405_METHOD_NOT_ALLOWED,
        headers={"Allow": ", ".join(ALLOWED_METHODS)},
    )

def parse_body(raw: bytes) -> Dict[str, Any]:
    if not raw or not raw.strip():
        return {}
    try:
        payload = json.loads(raw)
    except json.JSONDecodeError as e:
        raise ValueError(f"Invalid JSON body: {e}") from e
    if not isinstance(payload, dict):
        raise ValueError("Request body must be a JSON object")
    return payload

class UsersDispatcher:
    """
    Single entry point of the users collection.
    Routes on the HTTP method; every failure of a supported method becomes a
    400 with {"message": str(error)}. Unsupported methods get a plain-text 405
    without touching the body or storage.
    """

    def __init__(self, service: AccountService) -> None:
        self.service = service
        self._handlers: Dict[str, Handler] = {
            "GET": self.list_users,
            "POST": self.create_user,
            "PUT": self.update_password,
            "DELETE": self.delete_user,
        }

    async def dispatch(self, method: str, raw_body: bytes) -> Response:
        handler = self._handlers.get(method.upper())
        if handler is None:
            return method_not_allowed(method)

        try:
            # GET takes no body, so whatever was sent with it is ignored
            payload = {} if method.upper() == "GET" else parse_body(raw_body)
            status_code, content = await handler(payload)
        except (AccountError, ValidationError, ValueError) as e:
            logger.info("%s on users collection failed: %s", method, e)
            return self.error_response(e)
        except Exception as e:
            logger.exception("%s on users collection failed", method)
            return self.error_response(e)

        return JSONResponse(content=jsonable_encoder(content), status_code=status_code)

    @staticmethod
    def error_response(error: Exception) -> JSONResponse:
        return JSONResponse(
            content={"message": str(error)},
            status_code=status.HTTP_400_BAD_REQUEST,
        )

    async def list_users(self, payload: Dict[str, Any]) -> Tuple[int, Any]:
        accounts = await self.service.list_accounts()
        return status.HTTP_200_OK, [AccountRead.model_validate(a) for a in accounts]

    async def create_user(self, payload: Dict[str, Any]) -> Tuple[int, Any]:
        data = AccountCreate.model_validate(payload)
        role = UserRole.from_type(data.type)
        account = await self.service.create_account(
            role, username=data.username, email=data.email, password=data.password
        )
        return status.HTTP_201_CREATED, AccountRead.model_validate(account)

    async def update_password(self, payload: Dict[str, Any]) -> Tuple[int, Any]:
        data = PasswordUpdate.model_validate(payload)
        account = await self.service.update_password(data.email, data.password)
        return status.HTTP_200_OK, AccountRead.model_validate(account)

    async def delete_user(self, payload: Dict[str, Any]) -> Tuple[int, Any]:
        data = AccountDelete.model_validate(payload)
        deleted = await self.service.delete_account(data.email)
        return status.HTTP_200_OK, deleted

@router.api_route("/", methods=list(ALLOWED_METHODS))
async def users_collection(
    request: Request,
    service: AccountService = Depends(deps.get_account_service),
) -> Response:
    """
    List (GET), create (POST), update password (PUT) and delete (DELETE) accounts.
    POST selects the role from `type`: "superAdmin", "admin", anything else is normal.
    """
    dispatcher = UsersDispatcher(service)
    return await dispatcher.dispatch(request.method, await request.body())

@router.get("/{account_id}", response_model=AccountRead)
async def read_user(
    account_id: int,
    service: AccountService = Depends(deps.get_account_service),
) -> Any:
    """
    Get a single account by id.
    """
    account = await service.get_account(account_id)
    if not account:
        raise HTTPException(status_code=404, detail="Account not found")
    return account
