# app/graphql/router.py
from strawberry.fastapi import GraphQLRouter, BaseContext
from fastapi import Depends, Request
from jose import JWTError, jwt
from sqlalchemy.orm import Session

from .schema import schema
from ..db.session import get_db
from ..core.config import settings


class CustomContext(BaseContext):
    def __init__(self, db: Session, user: dict | None = None):
        super().__init__()
        self.db = db
        self.user = user


def get_context(request: Request, db: Session = Depends(get_db)) -> CustomContext:
    """Decode the bearer token, if any; resolvers decide whether a user is required."""
    auth_header = request.headers.get("Authorization")
    user = None

    if auth_header:
        try:
            token = auth_header.split(" ")[1]
            if token:
                user = jwt.decode(token, settings.JWT_SECRET, algorithms=["HS256"])
        except (JWTError, IndexError):
            # Invalid token or malformed header: treat as anonymous
            user = None

    return CustomContext(db=db, user=user)


graphql_router = GraphQLRouter(
    schema,
    context_getter=get_context,
)
