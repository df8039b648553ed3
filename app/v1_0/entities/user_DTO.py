from app.v1_0.models import UserRole, UserStatus
from app.v1_0.schemas.base import CamelModel
from app.v1_0.schemas.user_schema import UserName, UserAddress
from .page import PageDTO

class UserDTO(CamelModel):
    # sin password_hash
    id: int
    email: str
    username: str
    name: UserName
    address: UserAddress
    phone: str
    status: UserStatus
    role: UserRole

UserPageDTO = PageDTO[UserDTO]
