from urllib.parse import quote_plus

from fastapi import APIRouter, Depends, HTTPException, Request
from fastapi.encoders import jsonable_encoder
from fastapi.responses import JSONResponse, RedirectResponse
from pydantic import ValidationError

from blog.dependencies import get_account_store
from blog.exceptions import DuplicateAccountError
from blog.repositories import AccountStore
from blog.schemas import AccountCreate, AccountResponse
from blog.services import account_service

router = APIRouter(tags=["accounts"])


def _signup_error(message: str) -> RedirectResponse:
    return RedirectResponse(f"/signup?error={quote_plus(message)}", status_code=303)


@router.post("/user", response_model=AccountResponse, status_code=201)
async def create_account(request: Request, store: AccountStore = Depends(get_account_store)):
    """
    Register an account.

    Accepts a JSON body (API clients, answers 201 with the new account) or
    the signup page's form post (answers with a redirect to the login view).
    """
    is_json = request.headers.get("content-type", "").startswith("application/json")
    if is_json:
        try:
            payload = await request.json()
        except ValueError:
            raise HTTPException(status_code=422, detail="Malformed JSON body")
    else:
        payload = dict(await request.form())

    try:
        data = AccountCreate.model_validate(payload)
    except ValidationError as exc:
        if is_json:
            raise HTTPException(status_code=422, detail=jsonable_encoder(exc.errors()))
        return _signup_error("Enter a valid email and a password of at least 8 characters")

    try:
        account = await account_service.register(store, data)
    except DuplicateAccountError:
        if is_json:
            raise HTTPException(
                status_code=409,
                detail="An account with this email already exists",
            )
        return _signup_error("An account with this email already exists")

    if is_json:
        return JSONResponse(
            AccountResponse.model_validate(account).model_dump(), status_code=201
        )
    return RedirectResponse("/login", status_code=303)
