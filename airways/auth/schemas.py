from pydantic import BaseModel, EmailStr, Field
from datetime import datetime
from airways.models import UserRole

class LoginRequest(BaseModel):
    username: str = Field(..., min_length=1)
    password: str = Field(..., min_length=1)

class RegisterRequest(BaseModel):
    username: str = Field(..., min_length=3, max_length=100)
    email: EmailStr
    password: str = Field(..., min_length=6, max_length=72)

class UserResponse(BaseModel):
    id: str
    username: str
    email: str
    role: UserRole
    created_at: datetime

    class Config:
        from_attributes = True

# Same shape for login and register
class JwtResponse(BaseModel):
    token: str
    id: str
    username: str
    email: str
    role: UserRole
