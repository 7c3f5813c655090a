import json

from fastapi import Depends, FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse, StreamingResponse

# Local imports
from config import Config
from gemini_client import generate
from models import ChatRequest, ChatResponse, ErrorResponse, HealthCheckResponse
from qa_core import Generator, Scraper, content_preview, prepare_answer
from response import collect_full_answer, generate_streaming_response
from scraper import scrape_url

# Import logger
from logger import logger

GENERIC_ERROR = "An error occurred processing your request"

app = FastAPI()
app.add_middleware(
    CORSMiddleware,
    allow_origins=Config.CORS_ORIGINS,
    allow_methods=["*"],
    allow_headers=["*"],
    expose_headers=["X-Sources"],
)


@app.middleware("http")
async def log_requests(request, call_next):
    try:
        logger.info(f"[req] {request.method} {request.url.path}")
        response = await call_next(request)
        logger.info(f"[res] {request.method} {request.url.path} -> {response.status_code}")
        return response
    except Exception as e:
        logger.exception(f"[req] unhandled error on {request.method} {request.url.path}: {e}")
        raise


@app.exception_handler(Exception)
async def unexpected_failure(request: Request, exc: Exception):
    return JSONResponse(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, content={"message": GENERIC_ERROR})


@app.exception_handler(RequestValidationError)
async def reject_malformed(request: Request, exc: RequestValidationError):
    logger.warning(f"[req] rejected malformed body on {request.url.path}: {exc.errors()}")
    return JSONResponse(status_code=status.HTTP_400_BAD_REQUEST, content={"message": GENERIC_ERROR})


def get_generator() -> Generator:
    return generate


def get_scraper() -> Scraper:
    return scrape_url


@app.post(
    "/api/chat",
    response_model=ChatResponse,
    responses={400: {"model": ErrorResponse}, 500: {"model": ErrorResponse}},
)
async def chat(
    data: ChatRequest,
    generator: Generator = Depends(get_generator),
    scraper: Scraper = Depends(get_scraper),
):
    logger.info(f"[chat] stream={data.stream} history={len(data.history)} q='{data.message[:80]}'")
    answer = await prepare_answer(data.message, data.history, generate=generator, scrape=scraper)

    if data.stream:
        sources = json.dumps([s.model_dump() for s in answer.sources])
        return StreamingResponse(
            generate_streaming_response(answer),
            media_type="text/plain; charset=utf-8",
            headers={"X-Sources": sources},
        )

    extraction = answer.extraction
    message = await collect_full_answer(answer)
    return ChatResponse(
        message=message,
        scrapedContentPreview=content_preview(extraction),
        scrapeError=extraction.error if extraction else None,
        extractorUsed=extraction.extractor_used if extraction else None,
    )


@app.get("/health", response_model=HealthCheckResponse)
async def health():
    return HealthCheckResponse(status="ok", message="Chat service is running", model=Config.GEMINI_MODEL)


if __name__ == "__main__":
    import uvicorn

    uvicorn.run("main:app", host=Config.HOST, port=Config.PORT)
