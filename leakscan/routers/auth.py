from fastapi import APIRouter, Depends, HTTPException, Request
from pydantic import BaseModel, model_validator

from leakscan.deps import get_storage
from leakscan.schemas import InsertUser, PublicUser
from leakscan.storage import UsernameTaken
from leakscan.utils.passwords import hash_password, verify_password

router = APIRouter()


class Credentials(BaseModel):
    username: str
    password: str

    @model_validator(mode="after")
    def ensure_identifier(self):
        self.username = self.username.strip()
        if not self.username:
            raise ValueError("username required")
        if not self.password:
            raise ValueError("password required")
        return self


SESSION_KEY = "user"


def _public(user) -> dict:
    return PublicUser(id=user.id, username=user.username).model_dump(by_alias=True)


@router.post("/signup")
async def signup(body: Credentials, storage=Depends(get_storage)):
    try:
        user = storage.create_user(InsertUser(username=body.username, password=hash_password(body.password)))
    except UsernameTaken:
        raise HTTPException(status_code=409, detail="Username already exists")
    return {"ok": True, "user": _public(user)}


@router.post("/login")
async def login(body: Credentials, request: Request, storage=Depends(get_storage)):
    user = storage.get_user_by_username(body.username)
    if not user or not verify_password(user.password, body.password):
        raise HTTPException(status_code=401, detail="Invalid username or password")
    request.session[SESSION_KEY] = _public(user)
    return {"ok": True, "user": request.session[SESSION_KEY]}


@router.get("/session-check")
async def session_check(request: Request, storage=Depends(get_storage)):
    user = request.session.get(SESSION_KEY)
    if not user:
        raise HTTPException(status_code=401, detail="No session")
    if storage.get_user(user.get("id")) is None:
        request.session.pop(SESSION_KEY, None)
        raise HTTPException(status_code=401, detail="Session user missing")
    return {"ok": True, "user": user}


@router.post("/logout")
async def logout(request: Request):
    request.session.pop(SESSION_KEY, None)
    return {"ok": True}
