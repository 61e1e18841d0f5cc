from fastapi import FastAPI, Request
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from contextlib import asynccontextmanager
from loguru import logger
import os

from trackntoms.config import settings
from trackntoms.database import engine, Base
from trackntoms.exceptions import TrackNTomsError

from trackntoms.staff.router import router as staff_router
from trackntoms.suppliers.router import router as supplier_router
from trackntoms.stock.ingredients.router import router as ingredient_router
from trackntoms.stock.items.router import router as item_router
from trackntoms.stock.adjustments.router import router as adjustment_router
from trackntoms.pullout.router import router as pullout_router
from trackntoms.purchase.router import router as purchase_router
from trackntoms.consignment.router import router as consignment_router
from trackntoms.sales.router import router as sales_router

import uvicorn


if settings.LOG_FILE:
    logger.add(settings.LOG_FILE, rotation=settings.LOG_ROTATION, level=settings.LOG_LEVEL)


# Database startup
@asynccontextmanager
async def lifespan(app: FastAPI):
    logger.info("Application startup")
    Base.metadata.create_all(bind=engine)
    yield
    logger.info("Application shutdown")


# Create app
app = FastAPI(
    title="TrackNToms POS",
    description="Inventory ledger for purchases, pullouts and consignments.",
    version="1.0.0",
    lifespan=lifespan
)

# CORS
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.exception_handler(TrackNTomsError)
async def trackntoms_error_handler(request: Request, exc: TrackNTomsError):
    if exc.status_code >= 500:
        logger.error(f"{request.method} {request.url.path} failed: {exc.message}")
    else:
        logger.warning(f"{request.method} {request.url.path} refused: {exc.message}")
    return JSONResponse(status_code=exc.status_code, content=exc.to_dict())


@app.exception_handler(RequestValidationError)
async def request_validation_handler(request: Request, exc: RequestValidationError):
    # Missing or malformed fields are a plain 400 for the POS clients
    errors = jsonable_encoder(exc.errors())
    first = errors[0] if errors else {}
    field = ".".join(str(part) for part in first.get("loc", []) if part != "body")
    message = f"{field}: {first.get('msg')}" if field else first.get("msg", "Invalid request")
    return JSONResponse(
        status_code=400,
        content={"detail": message, "code": "validation_error", "errors": errors},
    )


# Routers
app.include_router(staff_router, prefix="/staff", tags=["Staff"])
app.include_router(supplier_router, prefix="/suppliers", tags=["Suppliers"])
app.include_router(ingredient_router, prefix="/inventory/ingredients", tags=["Inventory - Ingredients"])
app.include_router(item_router, prefix="/inventory/items", tags=["Inventory - Items"])
app.include_router(adjustment_router, prefix="/inventory/adjustments", tags=["Inventory - Adjustments"])
app.include_router(pullout_router, prefix="/inventory/pullouts", tags=["Inventory - Pullouts"])
app.include_router(purchase_router, prefix="/purchases", tags=["Purchases"])
app.include_router(consignment_router, prefix="/consignments", tags=["Consignments"])
app.include_router(sales_router, prefix="/sales", tags=["Sales"])


@app.get("/health")
def health_check():
    return {"status": "ok"}


def run():
    host = os.getenv("SERVER_IP", "127.0.0.1")
    port = int(os.getenv("SERVER_PORT", "8000"))
    logger.info(f"Running on {host}:{port}")
    uvicorn.run("trackntoms.main:app", host=host, port=port)


if __name__ == "__main__":
    run()
