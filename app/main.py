from fastapi import APIRouter, Depends, FastAPI, HTTPException, Query, Request, status
from fastapi.responses import JSONResponse
from typing import Optional
import logging
import uvicorn

from app.config import Settings, get_settings
from app.engine import QueryEngine
from app.errors import AlreadyExists, EmptyInput, NotFound, Unrecognized
from app.filters import predicates_from_mapping, predicates_to_mapping
from app.schemas import (
    CreateStringRequest,
    InterpretedQuery,
    NaturalLanguageResponse,
    StringListResponse,
    StringResponse,
    to_responses,
)

logger = logging.getLogger(__name__)

router = APIRouter()

ERROR_RESPONSES = {
    EmptyInput: (status.HTTP_400_BAD_REQUEST, 'Invalid request body or missing "value" field'),
    AlreadyExists: (status.HTTP_409_CONFLICT, "String already exists in the system"),
    NotFound: (status.HTTP_404_NOT_FOUND, "String does not exist in the system"),
    Unrecognized: (status.HTTP_400_BAD_REQUEST, "Unable to parse natural language query"),
}


def get_engine(request: Request) -> QueryEngine:
    return request.app.state.engine


# ---------------------------
# Endpoint: Health
# ---------------------------
@router.get("/healthz")
def healthz():
    return {"status": "healthy"}


# ---------------------------
# Endpoint: Create / Analyze
# ---------------------------
@router.post("/strings", status_code=status.HTTP_201_CREATED, response_model=StringResponse)
def create_string(req: CreateStringRequest, engine: QueryEngine = Depends(get_engine)):
    if req.value is None:
        raise HTTPException(status_code=400, detail='Missing "value" field')
    if not isinstance(req.value, str):
        raise HTTPException(status_code=422, detail='"value" must be a string')
    try:
        req.value.encode("utf-8")
    except UnicodeEncodeError:
        # lone surrogates are not Unicode scalar values
        raise HTTPException(status_code=422, detail='"value" must be valid Unicode text')
    return StringResponse.from_record(engine.submit(req.value))


# ---------------------------
# Endpoint: Natural-language filtering
# ---------------------------
# registered before /strings/{string_value} so the path is not captured as a value
@router.get("/strings/filter-by-natural-language", response_model=NaturalLanguageResponse)
def filter_by_nl(query: str = Query(..., description="natural language query"),
                 engine: QueryEngine = Depends(get_engine)):
    records, parsed = engine.list_by_query(query)
    return NaturalLanguageResponse(
        data=to_responses(records),
        count=len(records),
        interpreted_query=InterpretedQuery(original=query, parsed_filters=parsed),
    )


# ---------------------------
# Endpoint: Get All with filtering
# ---------------------------
@router.get("/strings", response_model=StringListResponse)
def list_strings(
    is_palindrome: Optional[bool] = Query(None),
    min_length: Optional[int] = Query(None, ge=0),
    max_length: Optional[int] = Query(None, ge=0),
    word_count: Optional[int] = Query(None, ge=0),
    contains_character: Optional[str] = Query(None, min_length=1, max_length=1),
    engine: QueryEngine = Depends(get_engine),
):
    predicates = predicates_from_mapping({
        "is_palindrome": is_palindrome,
        "min_length": min_length,
        "max_length": max_length,
        "word_count": word_count,
        "contains_character": contains_character,
    })
    records = engine.list(predicates)
    return StringListResponse(
        data=to_responses(records),
        count=len(records),
        filters_applied=predicates_to_mapping(predicates),
    )


# ---------------------------
# Endpoint: Get specific
# ---------------------------
@router.get("/strings/{string_value}", response_model=StringResponse)
def get_string(string_value: str, engine: QueryEngine = Depends(get_engine)):
    return StringResponse.from_record(engine.get(string_value))


# ---------------------------
# Endpoint: Delete
# ---------------------------
@router.delete("/strings/{string_value}", status_code=status.HTTP_204_NO_CONTENT)
def delete_string(string_value: str, engine: QueryEngine = Depends(get_engine)):
    engine.remove(string_value)


def _error_handler(request: Request, exc: Exception):
    status_code, detail = ERROR_RESPONSES[type(exc)]
    logger.info("%s %s -> %d %s", request.method, request.url.path, status_code, type(exc).__name__)
    return JSONResponse(status_code=status_code, content={"detail": detail})


def create_app(settings: Optional[Settings] = None, engine: Optional[QueryEngine] = None) -> FastAPI:
    settings = settings or get_settings()
    logging.basicConfig(level=settings.log_level)

    application = FastAPI(title="String Analyzer Service")
    application.state.engine = engine or QueryEngine()
    application.include_router(router, prefix=settings.api_prefix)
    for exc_class in ERROR_RESPONSES:
        application.add_exception_handler(exc_class, _error_handler)
    return application


app = create_app()


def run():
    settings = get_settings()
    uvicorn.run("app.main:app", host=settings.url, port=settings.port)
