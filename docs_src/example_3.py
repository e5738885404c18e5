from dataclasses import dataclass

import uvicorn
from starlette.applications import Starlette
from starlette.requests import Request
from starlette.responses import JSONResponse
from starlette.routing import Route
from starlette.types import Scope

from scoped_current import Current, ScopeSettings, configure, setup_logger
from scoped_current.middleware import CurrentScopeSetMiddleware

settings = ScopeSettings()
configure(settings)
setup_logger(settings.log)


@dataclass
class RequestInfo:
    path: str
    client: str

    @classmethod
    def from_scope(cls, scope: Scope) -> 'RequestInfo':
        client = scope.get('client')
        return cls(path=scope.get('path', '-'), client=f'{client[0]}:{client[1]}' if client else '-')


def describe() -> dict[str, str]:
    info = Current(RequestInfo).get()
    return {'path': info.path, 'client': info.client}


async def index(_: Request) -> JSONResponse:
    return JSONResponse(describe())


app = Starlette(routes=[Route('/', index)])
app.add_middleware(CurrentScopeSetMiddleware, factories=[RequestInfo.from_scope])


if __name__ == '__main__':
    uvicorn.run(app, host='0.0.0.0', port=8000)
