"""FastAPI service exposing OCR text parsing.

Endpoints:
  POST /parse/statement  (json: {"text": ...}) -> account info, transactions, summary
  POST /parse/receipt    (json: {"text": ..., "structured": bool}) -> payment record
  POST /classify         (json: {"text": ...}) -> document type, service, status
  GET  /classifier-rules, POST /classifier-rules -> custom document-type rules
  GET  /health -> simple health check

Run (dev): uvicorn statement_ocr.api:app --reload --port 8000
"""

from __future__ import annotations

import logging
import os
import re
import traceback
from typing import Optional

from fastapi import FastAPI, HTTPException, Request
from fastapi.concurrency import run_in_threadpool
from fastapi.middleware.cors import CORSMiddleware
from fastapi.middleware.gzip import GZipMiddleware
from pydantic import BaseModel

from .classify import (
    DOCUMENT_LABELS,
    classify_document,
    custom_rules,
    detect_service,
    detect_status,
    register_custom_rule,
)
from .receipt_parser import parse_payment_receipt, to_structured
from .statement_parser import parse_bank_statement
from .utils import df_to_records, records_to_frame


class TextRequest(BaseModel):
    text: str


class ReceiptRequest(TextRequest):
    structured: bool = False


class NewRule(BaseModel):
    label: str
    regex: str
    prepend: Optional[bool] = False


logging.basicConfig(level=os.getenv("API_LOG_LEVEL", "INFO"))
logger = logging.getLogger("statement_ocr.api")

app = FastAPI(title="Statement OCR API", version="0.1.0")
app.add_middleware(GZipMiddleware, minimum_size=1024)

app.add_middleware(
    CORSMiddleware,
    allow_origins=["http://localhost:5173", "http://127.0.0.1:5173"],
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.get("/")
def root():
    return {"service": "statement-ocr", "status": "ok"}


@app.get("/health")
def health() -> dict[str, str]:
    return {"status": "ok"}


def _require_text(text: str) -> None:
    if not text.strip():
        raise HTTPException(status_code=400, detail={"error": "EMPTY_TEXT"})


def _debug(request: Request) -> bool:
    return request.query_params.get("debug") == "1" or os.getenv("API_DEBUG") == "1"


async def _run_parser(request: Request, parser, *args):
    try:
        # parsers are CPU bound; keep them off the event loop
        return await run_in_threadpool(parser, *args)
    except Exception as e:
        tb = traceback.format_exc()
        logger.error("Parse failure: %s\n%s", e, tb)
        detail = {"error": "PARSE_FAILURE", "message": str(e)}
        if _debug(request):
            detail["traceback"] = tb
        raise HTTPException(status_code=500, detail=detail) from e


@app.post("/parse/statement")
async def parse_statement(request: Request, body: TextRequest):
    _require_text(body.text)
    result = await _run_parser(request, parse_bank_statement, body.text)
    frame = records_to_frame(result.transactions)
    metrics = {
        "transaction_count": int(len(frame)),
        "net_amount": float(frame["deposit"].sum() - frame["withdrawal"].sum())
        if not frame.empty
        else 0.0,
    }
    logger.info("Parsed statement: %d transactions", metrics["transaction_count"])
    return {
        "account_info": result.account_info.model_dump(),
        "transactions": df_to_records(frame),
        "summary": result.summary.model_dump(),
        "metrics": metrics,
        "raw_text": result.raw_text,
    }


@app.post("/parse/receipt")
async def parse_receipt(request: Request, body: ReceiptRequest):
    _require_text(body.text)
    payment = await _run_parser(request, parse_payment_receipt, body.text)
    response = {"payment": payment.model_dump()}
    if body.structured:
        response["structured"] = to_structured(payment, body.text)
    return response


@app.post("/classify")
def classify(body: TextRequest):
    return {
        "document_type": classify_document(body.text),
        "service": detect_service(body.text),
        "status": detect_status(body.text),
    }


@app.get("/classifier-rules")
def list_classifier_rules():
    rules = custom_rules()
    return {
        "count": len(rules),
        "rules": [{"label": r.label, "regex": r.pattern.pattern} for r in rules],
        "labels": DOCUMENT_LABELS,
    }


@app.post("/classifier-rules")
def add_classifier_rule(rule: NewRule):
    if rule.label not in DOCUMENT_LABELS:
        raise HTTPException(status_code=400, detail={"message": "Invalid label"})
    try:
        register_custom_rule(rule.label, rule.regex, prepend=bool(rule.prepend))
    except re.error as e:
        raise HTTPException(
            status_code=400, detail={"message": f"Invalid regex: {e}"}
        ) from e
    return {"registered": True, "count": len(custom_rules())}


if __name__ == "__main__":  # pragma: no cover
    import uvicorn

    uvicorn.run("statement_ocr.api:app", host="0.0.0.0", port=8000, reload=True)
