"""User Routes — registration and login."""

from fastapi import APIRouter, Depends, status

from boutique.core.repository_protocols import DocumentGateway
from boutique.infrastructure.database import get_db
from boutique.schemas.user import UserLogin, UserRegister
from boutique.services import users

router = APIRouter(tags=["users"])


@router.post("/register", status_code=status.HTTP_201_CREATED)
async def register(body: UserRegister, db: DocumentGateway = Depends(get_db)):
    await users.register_user(db, body.model_dump())
    return {"message": "User registered successfully"}


@router.post("/login")
async def login(body: UserLogin, db: DocumentGateway = Depends(get_db)):
    """Existence check only. 200 with the stored record, 401 when unknown."""
    user = await users.login_user(db, body.email)
    return {"message": "Login successful", "user": user}
