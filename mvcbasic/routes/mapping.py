"""
mvcbasic — Request Mapping Routes
===================================

What:  The ways a request is matched to a handler.
How:   Plain FastAPI routes; extra conditions come from routes.conditions.

Route Inventory:
    ANY  /hello-basic, /hello-basic/          both spellings mapped explicitly
    GET  /mapping-get-v1, /mapping-get-v2      other methods → 405
    GET  /mapping/{userId}                     path variable
    GET  /mapping/users/{userId}/orders/{orderId}   typed path variables
    GET  /mapping-param?mode=debug             query condition
    GET  /mapping-header   (mode: debug)       header condition
    POST /mapping-consume  (application/json)  content-type condition
    POST /mapping-produce  (Accept: text/html) accept condition
"""

import logging

from fastapi import APIRouter, Depends
from fastapi.responses import HTMLResponse, PlainTextResponse

from mvcbasic.routes.conditions import consumes, produces, require_header, require_param
from mvcbasic.web import ALL_METHODS

logger = logging.getLogger(__name__)

router = APIRouter(tags=["Request Mapping"], default_response_class=PlainTextResponse)


@router.api_route("/hello-basic", methods=ALL_METHODS)
@router.api_route("/hello-basic/", methods=ALL_METHODS)
async def hello_basic() -> str:
    logger.info("helloBasic")
    return "ok"


@router.api_route("/mapping-get-v1", methods=["GET"])
async def mapping_get_v1() -> str:
    logger.info("mappingGetV1")
    return "ok"


@router.get("/mapping-get-v2")
async def mapping_get_v2() -> str:
    logger.info("mapping-get-v2")
    return "ok"


@router.get("/mapping/{user_id}")
async def mapping_path(user_id: str) -> str:
    """Path variable: /mapping/userA → user_id="userA"."""
    logger.info("mappingPath userId=%s", user_id)
    return "ok"


@router.get("/mapping/users/{user_id}/orders/{order_id}")
async def mapping_path_multi(user_id: str, order_id: int) -> str:
    """Non-numeric order ids are rejected by FastAPI with 422."""
    logger.info("mappingPath userId=%s, orderId=%d", user_id, order_id)
    return "ok"


@router.get("/mapping-param", dependencies=[Depends(require_param("mode", "debug"))])
async def mapping_param() -> str:
    logger.info("mappingParam")
    return "ok"


@router.get("/mapping-header", dependencies=[Depends(require_header("mode", "debug"))])
async def mapping_header() -> str:
    logger.info("mappingHeader")
    return "ok"


@router.post("/mapping-consume", dependencies=[Depends(consumes("application/json"))])
async def mapping_consumes() -> str:
    logger.info("mappingConsumes")
    return "ok"


@router.post(
    "/mapping-produce",
    response_class=HTMLResponse,
    dependencies=[Depends(produces("text/html"))],
)
async def mapping_produces() -> str:
    logger.info("mappingProduces")
    return "ok"
