import logging
from typing import Annotated

import httpx
from fastapi import Depends, FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from openai import AsyncOpenAI

from learning_map.client import MapGenerationClient
from learning_map.controller import MapViewController
from learning_map.exceptions import NoMapError, ProviderError
from learning_map.llm_pipelines import GenerateMapPipeline
from learning_map.models import ErrorResponse, GenerateRequest, LearningMap
from learning_map.settings import settings
from learning_map.ui import router as ui_router

logging.basicConfig(
    level=settings.log_level,
    format='%(asctime)s | %(levelname)-8s | %(name)s | %(message)s',
)
logger = logging.getLogger(__name__)

GENERATION_PATH = '/generate-learning-map'

client = (
    AsyncOpenAI(
        api_key=settings.ai_gateway_api_key,
        base_url=str(settings.openai_base_url),
        timeout=settings.request_timeout,
    )
    if settings.ai_gateway_api_key
    else None
)
if client is None:
    logger.warning('AI gateway API key missing, generation requests will fail')

generate_map_pipeline = GenerateMapPipeline(client=client, model=settings.model_name)


def get_pipeline() -> GenerateMapPipeline:
    return generate_map_pipeline


app = FastAPI(
    title='Learning Map API',
    description=(
        f'POST {GENERATION_PATH}: topic + level => hierarchical learning map JSON.\n'
        'GET /: interactive graph and card views over the last generated map.'
    ),
    version='1.0.0',
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=False,
    allow_methods=['*'],
    allow_headers=['authorization', 'x-client-info', 'apikey', 'content-type'],
)


@app.exception_handler(ProviderError)
async def provider_error_handler(request: Request, exc: ProviderError):
    logger.error(f'Error in {request.url.path}: {exc.message}')
    return JSONResponse(
        status_code=exc.status_code, content=ErrorResponse(error=exc.message).model_dump()
    )


@app.exception_handler(RequestValidationError)
async def request_validation_handler(request: Request, exc: RequestValidationError):
    message = '; '.join(
        f"{'.'.join(str(p) for p in e['loc'] if p != 'body')}: {e['msg']}" for e in exc.errors()
    )
    logger.warning(f'Rejected request to {request.url.path}: {message}')
    return JSONResponse(status_code=422, content=ErrorResponse(error=message).model_dump())


@app.exception_handler(NoMapError)
async def no_map_handler(request: Request, exc: NoMapError):
    return JSONResponse(status_code=404, content=ErrorResponse(error=exc.message).model_dump())


@app.exception_handler(Exception)
async def unhandled_error_handler(request: Request, exc: Exception):
    logger.error(f'Unhandled exception on {request.url.path}: {exc}', exc_info=True)
    return JSONResponse(status_code=500, content=ErrorResponse(error=str(exc)).model_dump())


@app.post(
    GENERATION_PATH,
    response_model=LearningMap,
    response_model_exclude_none=True,
    responses={
        400: {'model': ErrorResponse},
        402: {'model': ErrorResponse},
        429: {'model': ErrorResponse},
        500: {'model': ErrorResponse},
    },
    summary='Generate a learning map for a topic',
)
async def generate_learning_map(
    request: GenerateRequest,
    pipeline: Annotated[GenerateMapPipeline, Depends(get_pipeline)],
):
    """Ask the AI gateway for a learning map and return it as JSON"""
    topic = request.topic.strip()
    if not topic:
        return JSONResponse(
            status_code=400, content=ErrorResponse(error='Topic is required').model_dump()
        )
    return await pipeline.generate(topic, level=request.level, language=request.language)


def build_controller() -> MapViewController:
    """Controller for the UI; without a configured URL it calls this app in-process"""
    if settings.generation_url:
        generation_client = MapGenerationClient(
            settings.generation_url, timeout=settings.request_timeout
        )
    else:
        generation_client = MapGenerationClient(
            f'http://learning-map{GENERATION_PATH}',
            timeout=settings.request_timeout,
            transport=httpx.ASGITransport(app=app),
        )
    return MapViewController(generation_client)


app.state.controller = build_controller()
app.include_router(ui_router)
