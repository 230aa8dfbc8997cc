"""
strme Main module - command line and HTTP entry points
"""

import json
import logging
import sys
import time
from typing import Any, Dict, Optional

import typer
import uvicorn
from fastapi import FastAPI, HTTPException, status
from fastapi.routing import APIRouter
from pydantic import BaseModel

from strme.errors import ALLOCATION_FAILURE, CONFIGURATION
from strme.features import Feature, FeatureRegistry, OperationResult
from strme.version import get_version

# Module-level logger
logger = logging.getLogger("strme.main")


# Create CLI app with Typer
app = typer.Typer(
    name="strme",
    help="strme - null-terminated string primitives",
    add_completion=False,
)

# Create FastAPI app for API server
api_app = FastAPI(
    title="strme API",
    description="API for null-terminated string primitives",
    version=get_version(),
)

# API router for versioned endpoints
api_router = APIRouter(prefix="/api/v1")


# Request models
class SingleStringRequest(BaseModel):
    s: Optional[str] = None


class SourceRequest(BaseModel):
    source: Optional[str] = None


class BoundedSourceRequest(BaseModel):
    source: Optional[str] = None
    n: int


class PairRequest(BaseModel):
    a: Optional[str] = None
    b: Optional[str] = None


class BoundedPairRequest(BaseModel):
    a: Optional[str] = None
    b: Optional[str] = None
    n: int


class FindByteRequest(BaseModel):
    buffer: Optional[str] = None
    target: str
    length: Optional[int] = None


class ParseIntegerRequest(BaseModel):
    s: Optional[str] = None
    base: int = 10


# ----------------- Helper Functions -----------------


class ElapsedMsFormatter(logging.Formatter):
    """Formatter that shows milliseconds since program start, right-aligned for up to 9999 seconds."""
    def __init__(self, fmt=None, datefmt=None, *args, **kwargs):
        super().__init__(fmt, datefmt, *args, **kwargs)
        self.start_time = time.monotonic()
        self.width = 8  # Enough for '9999000ms'

    def format(self, record):
        elapsed_ms = int((time.monotonic() - self.start_time) * 1000)
        if elapsed_ms < 10**7:  # up to 9999.999s
            elapsed = f"[{elapsed_ms:>{self.width}}ms]"
        else:
            elapsed = f"[{elapsed_ms}ms]"
        record.elapsed = elapsed
        return super().format(record)


VERBOSE_LEVEL = 15  # Between INFO (20) and DEBUG (10)
logging.addLevelName(VERBOSE_LEVEL, "VERBOSE")


def setup_logging(debug: bool = False, verbose: bool = False) -> None:
    """Set up logging configuration"""
    if debug:
        log_level = logging.DEBUG
    elif verbose:
        log_level = VERBOSE_LEVEL
    else:
        log_level = logging.INFO
    formatter = ElapsedMsFormatter('%(elapsed)s %(message)s')
    handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(formatter)
    root = logging.getLogger()
    root.handlers = []  # Remove any existing handlers
    root.addHandler(handler)
    root.setLevel(log_level)

    # Keep the server stack quiet unless debugging
    for logger_name in ("uvicorn", "uvicorn.error", "uvicorn.access"):
        logging.getLogger(logger_name).setLevel(logging.DEBUG if debug else logging.WARNING)


def _feature_or_exit(feature_name: str) -> Feature:
    feature = FeatureRegistry.get_feature(feature_name)
    if not feature:
        logger.error("Unknown feature: %s", feature_name)
        raise typer.Exit(code=1)
    return feature


def _handle_cli_result(feature_name: str, result: OperationResult[Any]) -> None:
    if not result.success:
        logger.error(
            "Operation %s failed [%s]: %s",
            feature_name,
            result.error_kind or "Error",
            result.error or "Unknown error",
        )
        raise typer.Exit(code=1)
    logger.log(VERBOSE_LEVEL, "Operation %s completed", feature_name)
    print(json.dumps(result.data))


def handle_cli_feature(
    feature_name: str, debug: bool = False, verbose: bool = False, **kwargs: Any
) -> None:
    """Handle a CLI feature execution"""
    setup_logging(debug, verbose)
    feature = _feature_or_exit(feature_name)
    logger.debug("Running %s with %s", feature_name, kwargs)
    _handle_cli_result(feature_name, feature.handler(**kwargs))


# ----------------- CLI Commands -----------------

DEBUG_OPTION = typer.Option(False, "--debug", help="Enable debug logging")
VERBOSE_OPTION = typer.Option(False, "--verbose", help="Enable verbose logging (between info and debug)")


@app.command()
def version() -> None:
    """Show the strme version"""
    handle_cli_feature("version")


@app.command("list-operations")
def list_operations() -> None:
    """List available string operations"""
    setup_logging(False)
    result = _feature_or_exit("list_operations").handler()
    print("Available operations:")
    for name, description in sorted(result.data["operations"].items()):
        print(f"  {name:<22} {description}")


@app.command()
def length(
    s: str = typer.Argument(..., help="Input string"),
    debug: bool = DEBUG_OPTION,
    verbose: bool = VERBOSE_OPTION,
) -> None:
    """Count the bytes of a string"""
    handle_cli_feature("length", debug, verbose, s=s)


@app.command()
def copy(
    source: str = typer.Argument(..., help="String to copy"),
    debug: bool = DEBUG_OPTION,
    verbose: bool = VERBOSE_OPTION,
) -> None:
    """Copy a string into new storage"""
    handle_cli_feature("copy", debug, verbose, source=source)


@app.command("copy-bounded")
def copy_bounded(
    source: str = typer.Argument(..., help="String to copy"),
    n: int = typer.Argument(..., help="Maximum bytes to copy"),
    debug: bool = DEBUG_OPTION,
    verbose: bool = VERBOSE_OPTION,
) -> None:
    """Copy at most N bytes of a string"""
    handle_cli_feature("copy_bounded", debug, verbose, source=source, n=n)


@app.command()
def compare(
    a: str = typer.Argument(..., help="First string"),
    b: str = typer.Argument(..., help="Second string"),
    debug: bool = DEBUG_OPTION,
    verbose: bool = VERBOSE_OPTION,
) -> None:
    """Compare two strings (positive when A sorts before B)"""
    handle_cli_feature("compare", debug, verbose, a=a, b=b)


@app.command("find-byte")
def find_byte(
    buffer: str = typer.Argument(..., help="Buffer to search"),
    target: str = typer.Argument(..., help="Single byte to find"),
    length: Optional[int] = typer.Option(None, "--length", help="Bytes to scan (default: whole buffer)"),
    debug: bool = DEBUG_OPTION,
    verbose: bool = VERBOSE_OPTION,
) -> None:
    """Find the first occurrence of a byte"""
    handle_cli_feature("find_byte", debug, verbose, buffer=buffer, target=target, length=length)


@app.command()
def concatenate(
    a: str = typer.Argument(..., help="Leading string"),
    b: str = typer.Argument(..., help="Trailing string"),
    debug: bool = DEBUG_OPTION,
    verbose: bool = VERBOSE_OPTION,
) -> None:
    """Join two strings"""
    handle_cli_feature("concatenate", debug, verbose, a=a, b=b)


@app.command("concatenate-bounded")
def concatenate_bounded(
    a: str = typer.Argument(..., help="Source of the appended bytes"),
    b: str = typer.Argument(..., help="Leading string"),
    n: int = typer.Argument(..., help="Maximum bytes taken from A"),
    debug: bool = DEBUG_OPTION,
    verbose: bool = VERBOSE_OPTION,
) -> None:
    """Append at most N bytes of A to B"""
    handle_cli_feature("concatenate_bounded", debug, verbose, a=a, b=b, n=n)


@app.command()
def swap(
    a: str = typer.Argument(..., help="First string"),
    b: str = typer.Argument(..., help="Second string"),
    debug: bool = DEBUG_OPTION,
    verbose: bool = VERBOSE_OPTION,
) -> None:
    """Exchange two strings"""
    handle_cli_feature("swap", debug, verbose, a=a, b=b)


@app.command()
def reverse(
    s: str = typer.Argument(..., help="String to reverse"),
    debug: bool = DEBUG_OPTION,
    verbose: bool = VERBOSE_OPTION,
) -> None:
    """Reverse a string"""
    handle_cli_feature("reverse", debug, verbose, s=s)


@app.command("parse-integer")
def parse_integer(
    s: str = typer.Argument(..., help="Digits to parse, optionally prefixed by '-'"),
    base: int = typer.Option(10, "--base", help="Number base (2-10)"),
    debug: bool = DEBUG_OPTION,
    verbose: bool = VERBOSE_OPTION,
) -> None:
    """Parse an integer written with decimal digits"""
    handle_cli_feature("parse_integer", debug, verbose, s=s, base=base)


@app.command()
def serve(
    host: str = typer.Option("127.0.0.1", help="Host to bind to"),
    port: int = typer.Option(8000, help="Port to listen on"),
    debug: bool = DEBUG_OPTION,
) -> None:
    """Start the strme API server"""
    setup_logging(debug)
    logger.info("Starting strme API server on http://%s:%d", host, port)
    uvicorn.run(api_app, host=host, port=port, log_level="debug" if debug else "info")


# ----------------- API Endpoints -----------------

_ERROR_STATUS = {
    ALLOCATION_FAILURE: status.HTTP_507_INSUFFICIENT_STORAGE,
    CONFIGURATION: status.HTTP_500_INTERNAL_SERVER_ERROR,
}


def _run_feature_endpoint(feature_name: str, payload: Dict[str, Any]) -> Any:
    feature = FeatureRegistry.get_feature(feature_name)
    if not feature:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=f"Feature {feature_name} not found",
        )
    try:
        result = feature.handler(**payload)
    except Exception as e:
        logger.error("Error in %s endpoint: %s", feature_name, str(e), exc_info=True)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Internal server error",
        ) from e
    if not result.success:
        if result.error_kind == CONFIGURATION:
            logger.error("Server configuration error in %s: %s", feature_name, result.error)
        raise HTTPException(
            status_code=_ERROR_STATUS.get(result.error_kind, status.HTTP_400_BAD_REQUEST),
            detail={"kind": result.error_kind, "message": result.error},
        )
    return result.data


@api_router.get("/version")
async def get_version_endpoint():
    """Get strme version"""
    return _run_feature_endpoint("version", {})


@api_router.get("/operations")
async def list_operations_endpoint():
    """List the available operations"""
    return _run_feature_endpoint("list_operations", {})


@api_router.post("/length")
async def length_endpoint(request: SingleStringRequest):
    return _run_feature_endpoint("length", request.model_dump())


@api_router.post("/copy")
async def copy_endpoint(request: SourceRequest):
    return _run_feature_endpoint("copy", request.model_dump())


@api_router.post("/copy-bounded")
async def copy_bounded_endpoint(request: BoundedSourceRequest):
    return _run_feature_endpoint("copy_bounded", request.model_dump())


@api_router.post("/compare")
async def compare_endpoint(request: PairRequest):
    return _run_feature_endpoint("compare", request.model_dump())


@api_router.post("/find-byte")
async def find_byte_endpoint(request: FindByteRequest):
    return _run_feature_endpoint("find_byte", request.model_dump())


@api_router.post("/concatenate")
async def concatenate_endpoint(request: PairRequest):
    return _run_feature_endpoint("concatenate", request.model_dump())


@api_router.post("/concatenate-bounded")
async def concatenate_bounded_endpoint(request: BoundedPairRequest):
    return _run_feature_endpoint("concatenate_bounded", request.model_dump())


@api_router.post("/swap")
async def swap_endpoint(request: PairRequest):
    return _run_feature_endpoint("swap", request.model_dump())


@api_router.post("/reverse")
async def reverse_endpoint(request: SingleStringRequest):
    return _run_feature_endpoint("reverse", request.model_dump())


@api_router.post("/parse-integer")
async def parse_integer_endpoint(request: ParseIntegerRequest):
    return _run_feature_endpoint("parse_integer", request.model_dump())


# Include the router in the FastAPI app
api_app.include_router(api_router)


if __name__ == "__main__":
    app()
