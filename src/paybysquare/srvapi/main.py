import logging
from pathlib import Path

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from paybysquare import env
from paybysquare.errors import PayBySquareError
from paybysquare.qr import generate_default_frame
from paybysquare.srvapi.routers import generator

logger = logging.getLogger(__name__)


def load_frame() -> bytes | None:
    """Frame image for the QR endpoint, read once at start-up."""
    if env.FRAME_PATH:
        logger.info("Using frame %s", env.FRAME_PATH)
        return Path(env.FRAME_PATH).read_bytes()
    if env.DEFAULT_FRAME:
        logger.info("Using built-in frame")
        return generate_default_frame(env.QR_SIZE)
    return None


app = FastAPI(
    title="PayBySquare Generator API",
    description="REST API for generating PAY by square QR codes according to the Slovak banking standard",
    docs_url=f"{generator.PREFIX}/docs",
    openapi_url="/api-docs/openapi.json",
)
app.state.frame_data = load_frame()

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_methods=["*"],
    allow_headers=["*"],
    max_age=3600,
)

# Include the generator router
app.include_router(generator.router)


@app.exception_handler(PayBySquareError)
async def handle_pay_by_square_error(request: Request, exc: PayBySquareError) -> JSONResponse:
    if exc.client_error:
        logger.info("Rejected %s: %s", request.url.path, exc)
        return JSONResponse(status_code=400, content={"error": str(exc)})
    logger.error("Failed %s: %s", request.url.path, exc, exc_info=exc)
    return JSONResponse(status_code=500, content={"error": "Internal server error"})


def main():
    import uvicorn

    logging.basicConfig(level=env.LOG_LEVEL)
    logger.info("Documentation: http://localhost:%d%s/docs", env.PORT, generator.PREFIX)
    uvicorn.run("paybysquare.srvapi.main:app", host=env.HOST, port=env.PORT)


if __name__ == "__main__":
    # Main entry point for the server
    main()
