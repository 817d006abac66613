from fastapi import Header, HTTPException
from resume_ia.schemas.account import AccountOut
from resume_ia.services.identity import lookup_account


def get_id_token(authorization: str | None = Header(default=None)) -> str:
    if not authorization or not authorization.lower().startswith("bearer "):
        raise HTTPException(status_code=401, detail="Authentification requise.")
    token = authorization.split(" ", 1)[1].strip()
    if not token:
        raise HTTPException(status_code=401, detail="Authentification requise.")
    return token


def get_current_account(authorization: str | None = Header(default=None)) -> AccountOut:
    return lookup_account(get_id_token(authorization))
