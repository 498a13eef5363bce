from dataclasses import asdict, dataclass, field
from typing import Any, Dict, List, Optional

import email_validator
from email_validator import EmailNotValidError, validate_email
from pydantic import (
    BaseModel,
    ConfigDict,
    Field,
    ValidationError,
    ValidationInfo,
    field_validator,
)
from pydantic.alias_generators import to_camel
from pydantic_core import PydanticCustomError

from .models import User


DEPARTMENTS = ("HR", "IT")

# Подписи полей для сообщений "<поле> is required"
FIELD_LABELS = {
    "first_name": "First name",
    "last_name": "Last name",
    "department": "Department",
    "email": "Email",
}

# Имена полей в JSON (camelCase)
FIELD_ALIASES = {name: to_camel(name) for name in FIELD_LABELS}

# Публичные имена параметров пути
PARAM_ALIASES = {"user_id": "id"}

# Проверяется только синтаксис email: служебные домены
# (localhost, *.test, *.local) допустимы
email_validator.SPECIAL_USE_DOMAIN_NAMES.clear()


# Схема тела запроса для создания/обновления пользователя
class UserPayload(BaseModel):
    model_config = ConfigDict(
        alias_generator=to_camel,
        extra="ignore",
    )

    # Пустая строка по умолчанию + validate_default: отсутствующее поле
    # проходит ту же проверку "required", что и пустое
    first_name: str = Field("", validate_default=True, description="Имя")
    last_name: str = Field("", validate_default=True, description="Фамилия")
    department: str = Field(
        "", validate_default=True, description="Отдел: HR или IT"
    )
    email: str = Field("", validate_default=True, description="Email")

    @field_validator(
        "first_name", "last_name", "department", "email", mode="before"
    )
    @classmethod
    def validate_required(cls, v, info: ValidationInfo):
        if v is None or (isinstance(v, str) and not v.strip()):
            raise PydanticCustomError(
                "required",
                "{label} is required",
                {"label": FIELD_LABELS[info.field_name]},
            )
        return v

    @field_validator("department")
    @classmethod
    def validate_department(cls, v):
        if v not in DEPARTMENTS:
            raise PydanticCustomError(
                "department", "Department must be HR or IT"
            )
        return v

    @field_validator("email")
    @classmethod
    def validate_email_format(cls, v):
        try:
            validate_email(
                v, check_deliverability=False, globally_deliverable=False
            )
        except EmailNotValidError:
            raise PydanticCustomError("email", "Invalid email format")
        return v


class UserResponse(BaseModel):
    id: int
    first_name: str
    last_name: str
    department: str
    email: str

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
    )

    @classmethod
    def from_user(cls, user: User) -> "UserResponse":
        return cls(**asdict(user))


@dataclass
class PayloadValidation:
    """
    Результат проверки тела запроса.

    Либо user заполнен (данные валидны), либо errors содержит
    список ошибок по полям в формате {"memberNames": [...], "errorMessage": ...}.
    """

    user: Optional[UserPayload] = None
    errors: List[Dict[str, Any]] = field(default_factory=list)

    @property
    def is_valid(self) -> bool:
        return self.user is not None and not self.errors


def field_error(member: Optional[str], message: str) -> Dict[str, Any]:
    """Ошибка валидации одного поля"""
    return {
        "memberNames": [member] if member else [],
        "errorMessage": message,
    }


def errors_from_pydantic(errors: List[Dict[str, Any]]) -> List[Dict[str, Any]]:
    """
    Преобразовать ошибки pydantic/FastAPI в список ошибок по полям.

    Путь ошибки FastAPI начинается с источника ("body", "path", "query"),
    поэтому берется последний строковый элемент loc.
    """
    result = []
    for error in errors:
        names = [part for part in error.get("loc", ()) if isinstance(part, str)]
        member = names[-1] if names else None
        if member in ("body", "path", "query"):
            member = None
        member = FIELD_ALIASES.get(member, PARAM_ALIASES.get(member, member))
        result.append(field_error(member, error.get("msg", "Invalid value")))
    return result


def validate_user_payload(payload: Any) -> PayloadValidation:
    """
    Проверить тело запроса без выбрасывания исключений.
    """
    if not isinstance(payload, dict):
        return PayloadValidation(
            errors=[field_error(None, "Request body must be a JSON object.")]
        )

    try:
        user = UserPayload.model_validate(payload)
    except ValidationError as e:
        return PayloadValidation(
            errors=errors_from_pydantic(e.errors(include_url=False))
        )
    return PayloadValidation(user=user)
