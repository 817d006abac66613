from fastapi import APIRouter, Depends
from resume_ia.api.deps import get_current_account, get_id_token
from resume_ia.schemas.account import AccountOut, AuthSessionOut, DisplayNameIn, PasswordResetIn, SignInIn, SignUpIn
from resume_ia.services import identity

router = APIRouter(prefix="/auth")


@router.post("/signup", response_model=AuthSessionOut, status_code=201)
def signup(payload: SignUpIn):
    return identity.sign_up(payload.email, payload.password, payload.confirm_password, payload.display_name)


@router.post("/signin", response_model=AuthSessionOut)
def signin(payload: SignInIn):
    return identity.sign_in(payload.email, payload.password)


@router.post("/password-reset")
def password_reset(payload: PasswordResetIn):
    identity.send_password_reset(payload.email)
    return {"status": "sent"}


@router.post("/verify-email")
def verify_email(id_token: str = Depends(get_id_token)):
    identity.send_email_verification(id_token)
    return {"status": "sent"}


@router.get("/me", response_model=AccountOut)
def me(account: AccountOut = Depends(get_current_account)):
    return account


@router.put("/me/display-name", response_model=AccountOut)
def update_display_name(payload: DisplayNameIn, id_token: str = Depends(get_id_token)):
    return identity.update_display_name(id_token, payload.display_name.strip())
