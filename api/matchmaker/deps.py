from fastapi import Request
from sqlalchemy.orm import sessionmaker


def get_session_factory(request: Request) -> sessionmaker:
    return request.app.state.session_factory
