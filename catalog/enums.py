from enum import Enum


class AccountRole(str, Enum):
    ADMIN = "admin"
    USER = "user"


class TokenType(str, Enum):
    ACCESS = "access"
