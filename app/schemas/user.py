import datetime

from pydantic import BaseModel, ConfigDict, EmailStr, Field, field_validator

from app.models.user import ROLE_USER


# 🔹 사용자 생성 요청용
class UserCreate(BaseModel):
    username: str = Field(min_length=1, max_length=50)
    password: str = Field(min_length=8, max_length=64)
    email: EmailStr
    birthday: datetime.date
    address: str = Field(default="", max_length=255)
    authorities: list[str] = Field(default_factory=lambda: [ROLE_USER])


# 🔹 사용자 수정 요청용 (주소만 반영)
class UserUpdate(BaseModel):
    address: str = Field(max_length=255)


# 🔹 유저 응답용 (비밀번호 해시 제외)
class UserResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)  # SQLAlchemy → Pydantic 변환

    id: int
    username: str
    email: str
    birthday: datetime.date
    address: str
    is_active: bool
    authorities: list[str]

    @field_validator("authorities", mode="before")
    @classmethod
    def _authority_names(cls, value):
        return [a if isinstance(a, str) else a.name for a in value]
