import logging
import math
import os
import threading
from typing import Optional

from fastapi import FastAPI, HTTPException, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import HTMLResponse
from pydantic import BaseModel, ValidationError

from calculator.analyzer import analyze
from calculator.ast_utils import ast_to_dict, ast_to_pretty
from calculator.calculator import Calculator
from calculator.errors import CalcError, CalculatorError
from calculator.formatting import format_value
from calculator.parser import parse_expression
from calculator.settings import get_settings
from calculator.tokens import list_functions

log = logging.getLogger(__name__)

WEB_DIR = os.path.join(os.path.dirname(__file__), "web")


class CalcBody(BaseModel):
    calc: str


FORM_TYPES = ("application/x-www-form-urlencoded", "multipart/form-data")


async def _read_body(request: Request) -> CalcBody:
    """Accept the expression as a JSON body or as a form field."""
    try:
        if request.headers.get("content-type", "").startswith(FORM_TYPES):
            data = dict(await request.form())
        else:
            data = await request.json()
        return CalcBody.model_validate(data)
    except (ValueError, ValidationError) as e:
        raise HTTPException(status_code=422, detail=str(e))


def _jsonable(value: float):
    # JSON has no inf/nan
    return value if math.isfinite(value) else format_value(value)


def _error_detail(err: CalcError):
    return {"message": str(err), "kind": err.kind}


def create_app(calculator: Optional[Calculator] = None) -> FastAPI:
    settings = get_settings()
    app = FastAPI(title="Calculator")
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_methods=["GET", "POST", "OPTIONS"],
        allow_headers=["*"],
        allow_credentials=True,
    )
    # one shared session; the engine does no locking of its own
    app.state.calculator = calculator if calculator is not None else Calculator.new()
    app.state.lock = threading.Lock()

    @app.get("/", response_class=HTMLResponse)
    def index():
        with open(os.path.join(WEB_DIR, "index.html"), "r", encoding="utf-8") as f:
            return f.read()

    @app.post("/")
    async def calculate(request: Request) -> str:
        body = await _read_body(request)
        state = request.app.state
        with state.lock:
            try:
                return format_value(state.calculator.calculate(body.calc))
            except CalculatorError as e:
                return str(e)

    @app.post("/calculate")
    def calculate_structured(body: CalcBody, request: Request):
        state = request.app.state
        with state.lock:
            try:
                value = state.calculator.calculate(body.calc)
            except CalculatorError as e:
                raise HTTPException(status_code=400, detail=_error_detail(e))
            text, _ = state.calculator.get_log()[-1]
        log.debug("calculated %r = %r", text, value)
        return {"ok": True, "input": text, "result": _jsonable(value), "display": format_value(value)}

    @app.get("/history")
    def history(request: Request):
        state = request.app.state
        with state.lock:
            frame = state.calculator.log_frame()
        return {"history": [{"input": row.input, "value": _jsonable(float(row.value))}
                            for row in frame.itertuples(index=False)]}

    @app.get("/variables")
    def variables(request: Request):
        state = request.app.state
        with state.lock:
            env = state.calculator.env
        return {"variables": {k: _jsonable(v) for k, v in sorted(env.items())}}

    @app.get("/functions")
    def functions():
        return {"functions": list_functions()}

    @app.post("/ast")
    def ast_view(body: CalcBody):
        try:
            ast = parse_expression(body.calc)
        except CalcError as e:
            raise HTTPException(status_code=400, detail=_error_detail(e))
        meta = analyze(ast)
        return {
            "ok": True,
            "pretty": ast_to_pretty(ast),
            "tree": ast_to_dict(ast),
            "variables": sorted(meta.variables),
            "assigned": sorted(meta.assigned),
            "functions": sorted(meta.functions),
        }

    return app


app = create_app()
