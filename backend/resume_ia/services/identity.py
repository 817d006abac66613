"""Account operations delegated to the Firebase Auth REST API.

No session or token handling happens here: ID tokens issued by the provider
are passed through and verified by asking the provider to look them up.
Provider error codes are mapped to French messages.
"""

import logging
import httpx
from resume_ia.core.config import settings
from resume_ia.core.errors import ConfigurationError, IdentityError
from resume_ia.schemas.account import AccountOut, AuthSessionOut

logger = logging.getLogger(__name__)

INVALID_CREDENTIALS = "L'adresse e-mail ou le mot de passe que vous avez entré n'est pas valide."
SESSION_EXPIRED = "Votre session a expiré. Veuillez vous reconnecter."

ERROR_MESSAGES = {
    "EMAIL_EXISTS": "Cette adresse e-mail est déjà utilisée. Veuillez vous connecter.",
    "INVALID_EMAIL": "Le format de l'adresse e-mail n'est pas valide.",
    "MISSING_EMAIL": "Le format de l'adresse e-mail n'est pas valide.",
    "EMAIL_NOT_FOUND": INVALID_CREDENTIALS,
    "INVALID_PASSWORD": INVALID_CREDENTIALS,
    "INVALID_LOGIN_CREDENTIALS": INVALID_CREDENTIALS,
    "MISSING_PASSWORD": "Veuillez saisir votre mot de passe.",
    "WEAK_PASSWORD": "Le mot de passe doit contenir au moins 6 caractères.",
    "USER_DISABLED": "Ce compte a été désactivé.",
    "TOO_MANY_ATTEMPTS_TRY_LATER": "Trop de tentatives. Veuillez réessayer plus tard.",
    "INVALID_ID_TOKEN": SESSION_EXPIRED,
    "TOKEN_EXPIRED": SESSION_EXPIRED,
    "USER_NOT_FOUND": SESSION_EXPIRED,
    "CREDENTIAL_TOO_OLD_LOGIN_AGAIN": SESSION_EXPIRED,
}

UNAUTHORIZED_CODES = {"INVALID_ID_TOKEN", "TOKEN_EXPIRED", "USER_NOT_FOUND", "CREDENTIAL_TOO_OLD_LOGIN_AGAIN"}

MIN_PASSWORD_LENGTH = 6


def _http_client() -> httpx.Client:
    return httpx.Client(timeout=settings.http_timeout_s)


def provider_error_code(body: dict) -> str | None:
    # messages look like "WEAK_PASSWORD : Password should be at least 6 characters"
    message = ((body or {}).get("error") or {}).get("message") or ""
    code = message.split(":", 1)[0].strip()
    return code or None


def map_error(code: str | None, fallback: str) -> IdentityError:
    message = ERROR_MESSAGES.get(code or "", fallback)
    status_code = 401 if code in UNAUTHORIZED_CODES else 400
    return IdentityError(message, code=code, status_code=status_code)


def _call(endpoint: str, payload: dict, fallback: str) -> dict:
    if not settings.firebase_api_key:
        raise ConfigurationError(
            "La configuration du service d'identité est absente. Veuillez définir FIREBASE_API_KEY."
        )
    url = f"{settings.identity_api_url.rstrip('/')}/{endpoint}"
    try:
        with _http_client() as client:
            response = client.post(url, params={"key": settings.firebase_api_key}, json=payload)
    except httpx.HTTPError as exc:
        logger.error("Identity provider unreachable", extra={"endpoint": endpoint, "error": str(exc)})
        raise IdentityError(fallback, status_code=502) from exc
    try:
        body = response.json()
    except ValueError:
        body = {}
    if response.status_code != 200:
        code = provider_error_code(body)
        if code not in ERROR_MESSAGES:
            logger.error("Identity provider error", extra={"endpoint": endpoint, "code": code, "status": response.status_code})
        raise map_error(code, fallback)
    return body


def sign_up(email: str, password: str, confirm_password: str, display_name: str | None = None) -> AuthSessionOut:
    if password != confirm_password:
        raise IdentityError("Les mots de passe ne correspondent pas.")
    if len(password) < MIN_PASSWORD_LENGTH:
        raise IdentityError(ERROR_MESSAGES["WEAK_PASSWORD"], code="WEAK_PASSWORD")
    fallback = "Erreur lors de l'inscription. Veuillez réessayer."
    body = _call("accounts:signUp", {"email": email, "password": password, "returnSecureToken": True}, fallback)
    session = _session_from(body, email)
    if display_name:
        update_display_name(session.id_token, display_name)
        session.display_name = display_name
    logger.info("Account created", extra={"account_id": session.account_id})
    return session


def sign_in(email: str, password: str) -> AuthSessionOut:
    fallback = "Email ou mot de passe incorrect. Veuillez réessayer."
    body = _call(
        "accounts:signInWithPassword",
        {"email": email, "password": password, "returnSecureToken": True},
        fallback,
    )
    return _session_from(body, email)


def send_password_reset(email: str) -> None:
    _call(
        "accounts:sendOobCode",
        {"requestType": "PASSWORD_RESET", "email": email},
        "Impossible d'envoyer l'email de réinitialisation.",
    )


def send_email_verification(id_token: str) -> None:
    _call(
        "accounts:sendOobCode",
        {"requestType": "VERIFY_EMAIL", "idToken": id_token},
        "Impossible d'envoyer l'email de vérification.",
    )


def update_display_name(id_token: str, display_name: str) -> AccountOut:
    body = _call(
        "accounts:update",
        {"idToken": id_token, "displayName": display_name, "returnSecureToken": False},
        "Impossible de mettre à jour le nom.",
    )
    return AccountOut(
        account_id=body.get("localId", ""),
        email=body.get("email"),
        display_name=body.get("displayName"),
        email_verified=bool(body.get("emailVerified", False)),
    )


def lookup_account(id_token: str) -> AccountOut:
    body = _call("accounts:lookup", {"idToken": id_token}, SESSION_EXPIRED)
    users = body.get("users") or []
    if not users:
        raise map_error("USER_NOT_FOUND", SESSION_EXPIRED)
    user = users[0]
    return AccountOut(
        account_id=user["localId"],
        email=user.get("email"),
        display_name=user.get("displayName"),
        email_verified=bool(user.get("emailVerified", False)),
    )


def _session_from(body: dict, email: str) -> AuthSessionOut:
    expires_in = body.get("expiresIn")
    return AuthSessionOut(
        account_id=body["localId"],
        email=body.get("email") or email,
        id_token=body["idToken"],
        refresh_token=body.get("refreshToken"),
        expires_in=int(expires_in) if expires_in else None,
        display_name=body.get("displayName") or None,
    )
