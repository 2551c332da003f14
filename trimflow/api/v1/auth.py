from __future__ import annotations

import logging

from fastapi import APIRouter, Depends, Header, HTTPException, Response

from trimflow.api.v1.schemas import CredentialsSchema, SessionSchema
from trimflow.application.exceptions import AuthenticationError, StoreError, ValidationError
from trimflow.application.ports.auth import AuthPort
from trimflow.domain.entities.operator import OperatorSession
from trimflow.wiring.dependencies import get_auth

router = APIRouter()
logger = logging.getLogger(__name__)


def bearer_token(authorization: str | None = Header(None)) -> str | None:
    if not authorization:
        return None
    scheme, _, token = authorization.partition(" ")
    if scheme.lower() != "bearer" or not token.strip():
        return None
    return token.strip()


def get_current_operator(
    token: str | None = Depends(bearer_token),
    auth: AuthPort = Depends(get_auth),
) -> OperatorSession:
    if not token:
        raise HTTPException(status_code=401, detail="Access denied. Please log in.")
    try:
        operator = auth.current_user(token)
    except StoreError as e:
        raise HTTPException(status_code=503, detail=str(e))
    if operator is None:
        raise HTTPException(status_code=401, detail="Session expired. Please log in again.")
    return operator


@router.post("/auth/sign-up", status_code=201)
def sign_up(req: CredentialsSchema, auth: AuthPort = Depends(get_auth)) -> dict[str, str]:
    try:
        auth.sign_up(req.email, req.password)
    except ValidationError as e:
        raise HTTPException(status_code=400, detail=str(e))
    except StoreError as e:
        raise HTTPException(status_code=503, detail=str(e))
    return {"status": "created"}


@router.post("/auth/sign-in", response_model=SessionSchema)
def sign_in(req: CredentialsSchema, auth: AuthPort = Depends(get_auth)):
    try:
        session = auth.sign_in(req.email, req.password)
    except AuthenticationError as e:
        raise HTTPException(status_code=401, detail=str(e))
    except StoreError as e:
        raise HTTPException(status_code=503, detail=str(e))

    logger.info("Operator signed in", extra={"reason": session.email})
    return SessionSchema(access_token=session.access_token, email=session.email, expires_at=session.expires_at)


@router.post("/auth/sign-out", status_code=204)
def sign_out(
    operator: OperatorSession = Depends(get_current_operator),
    auth: AuthPort = Depends(get_auth),
) -> Response:
    try:
        auth.sign_out(operator.access_token)
    except StoreError as e:
        raise HTTPException(status_code=503, detail=str(e))
    return Response(status_code=204)


@router.get("/auth/me", response_model=SessionSchema)
def me(operator: OperatorSession = Depends(get_current_operator)):
    return SessionSchema(access_token=operator.access_token, email=operator.email, expires_at=operator.expires_at)
