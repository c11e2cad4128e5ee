from engines.users import DuplicatedUserEmailError, UserService

__all__ = [
    "DuplicatedUserEmailError",
    "UserService",
]
