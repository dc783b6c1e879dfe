from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

from game.api.v1.health import router as health_router
from game.api.v1.players import router as players_router
from game.core.logging import configure_logging
from game.core.settings import settings
from game.services.exceptions import BadRequestError, NotFoundError

configure_logging()

app = FastAPI(title=settings.PROJECT_NAME)


@app.exception_handler(BadRequestError)
async def _bad_request(_request: Request, exc: BadRequestError):
    return JSONResponse(status_code=400, content={"detail": exc.message, **exc.to_dict()})


@app.exception_handler(NotFoundError)
async def _not_found(_request: Request, exc: NotFoundError):
    return JSONResponse(status_code=404, content={"detail": exc.message, **exc.to_dict()})


app.include_router(
    health_router,
    prefix=settings.API_V1_STR,
    tags=["Health"],
)
app.include_router(
    players_router,
    prefix=settings.API_V1_STR,
    tags=["Players"],
)
