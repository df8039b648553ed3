from typing import Optional
from pydantic import EmailStr, Field
from app.v1_0.models import UserRole, UserStatus
from .base import CamelModel, ListQuery

class UserName(CamelModel):
    firstname: str = Field("", max_length=100)
    lastname: str = Field("", max_length=100)

class UserGeolocation(CamelModel):
    lat: str = ""
    long: str = ""

class UserAddress(CamelModel):
    city: str = Field("", max_length=100)
    street: str = Field("", max_length=200)
    number: str = Field("", max_length=20)
    zipcode: str = Field("", max_length=20)
    geolocation: UserGeolocation = Field(default_factory=UserGeolocation)

class UserBase(CamelModel):
    email: EmailStr
    username: str = Field(..., min_length=3, max_length=100)
    name: UserName = Field(default_factory=UserName)
    address: UserAddress = Field(default_factory=UserAddress)
    phone: str = Field("", max_length=50)
    status: UserStatus = UserStatus.ACTIVE
    role: UserRole = UserRole.CUSTOMER

class UserCreate(UserBase):
    password: str = Field(..., min_length=6, max_length=128)

class UserUpdate(UserBase):
    """Full replace; password is re-hashed only when supplied."""
    password: Optional[str] = Field(default=None, min_length=6, max_length=128)

class UserListQuery(ListQuery):
    username: Optional[str] = None
    email: Optional[str] = None
    firstname: Optional[str] = None
    lastname: Optional[str] = None
    city: Optional[str] = None
    status: Optional[UserStatus] = None
    role: Optional[UserRole] = None
