import logging

import uvicorn
from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware

from safeconfig import __version__, config
from safeconfig.api.responses import AsciiJSONResponse
from safeconfig.api.routes import router
from safeconfig.schemas import ANALYZE_USAGE, DIFF_USAGE

app = FastAPI(
    title="SafeConfig",
    version=__version__,
    default_response_class=AsciiJSONResponse,
)

# Middleware FIRST
app.add_middleware(
    CORSMiddleware,
    allow_origins=config.CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Routes AFTER middleware
app.include_router(router)


@app.exception_handler(RequestValidationError)
async def bad_request_body(request: Request, exc: RequestValidationError):
    usage = DIFF_USAGE if request.url.path.endswith("/diff") else ANALYZE_USAGE
    return AsciiJSONResponse(status_code=400, content={"error": usage})


def run():
    logging.basicConfig(
        level=config.LOG_LEVEL,
        format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
    )
    uvicorn.run(app, host=config.HOST, port=config.PORT)


if __name__ == "__main__":
    run()
