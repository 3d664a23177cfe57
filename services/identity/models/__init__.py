from .users import AuthUser
