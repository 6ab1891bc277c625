from app.models.user import Authority, User, user_authorities  # noqa: F401
