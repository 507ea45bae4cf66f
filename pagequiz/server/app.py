"""HTTP endpoint that turns aggregated page text into a quiz.

``POST /generate`` takes ``{"text": ...}`` and answers ``{"result": ...}``.
Any failure, including a missing upstream API key, answers HTTP 500 with
``{"error": ...}``.
"""

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from pagequiz.config.settings import Settings
from pagequiz.logging.logger import Log
from pagequiz.quizgen import BaseQuizGenerator, QuizGeneratorFactory
from pagequiz.quizgen.exceptions import CompletionError
from pagequiz.server.schemas import ErrorResponse, GenerateRequest, GenerateResponse

GENERIC_ERROR_MESSAGE = "An error occurred while generating the test"


def create_app(
    settings: Settings | None = None,
    generator: BaseQuizGenerator | None = None,
) -> FastAPI:
    settings = settings or Settings()
    quiz_generator = generator or QuizGeneratorFactory.create(settings)

    app = FastAPI(title="pagequiz generation")
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_allow_origins,
        allow_methods=["POST", "OPTIONS", "GET"],
        allow_headers=["authorization", "x-client-info", "apikey", "content-type"],
    )

    @app.exception_handler(RequestValidationError)
    async def invalid_request(request: Request, exc: RequestValidationError) -> JSONResponse:
        Log.error(f"Invalid generation request: {exc.errors()}")
        return _error_response("Invalid request body")

    @app.get("/health")
    async def health() -> dict[str, str]:
        return {"status": "ok"}

    @app.post(
        "/generate",
        response_model=GenerateResponse,
        responses={500: {"model": ErrorResponse}},
    )
    async def generate(request: GenerateRequest) -> GenerateResponse | JSONResponse:
        if not request.text.strip():
            return _error_response("No text was provided")
        try:
            result = await quiz_generator.generate(request.text)
        except CompletionError as exc:
            Log.error(f"Quiz generation failed: {exc}")
            return _error_response(str(exc) or GENERIC_ERROR_MESSAGE)
        except Exception:
            Log.exception("Unexpected error in quiz generation")
            return _error_response(GENERIC_ERROR_MESSAGE)
        return GenerateResponse(result=result)

    return app


def _error_response(message: str) -> JSONResponse:
    return JSONResponse(status_code=500, content=ErrorResponse(error=message).model_dump())
