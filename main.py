from __future__ import annotations
import logging
from contextlib import asynccontextmanager
from typing import Optional

from fastapi import Depends, FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

import pricing
from catalog import CatalogService
from database import DocumentStore, settings
from errors import StoreError, StorefrontError, ValidationError
from orders import OrderService
from schemas import (
    Health,
    OrderCreate,
    OrderDetail,
    PlaceOrderResponse,
    ProductOut,
    ProductUpdate,
    QuoteRequest,
    Stats,
)
from seed import seed_products

logger = logging.getLogger(__name__)


def configure_logging(level: str = settings.LOG_LEVEL) -> None:
    logging.basicConfig(level=level, format="%(asctime)s %(levelname)s %(name)s: %(message)s")


def get_store(request: Request) -> DocumentStore:
    return request.app.state.store


def get_catalog(store: DocumentStore = Depends(get_store)) -> CatalogService:
    return CatalogService(store)


def get_orders(store: DocumentStore = Depends(get_store)) -> OrderService:
    return OrderService(store)


async def storefront_error_handler(request: Request, exc: StorefrontError) -> JSONResponse:
    if isinstance(exc, StoreError):
        logger.error("%s %s failed: %s", request.method, request.url.path, exc.message, exc_info=exc)
    else:
        logger.info("%s %s -> %s: %s", request.method, request.url.path, exc.code, exc.message)
    return JSONResponse(status_code=exc.status_code, content=exc.to_dict())


async def request_validation_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    fields = sorted({".".join(str(p) for p in err["loc"] if p != "body") for err in exc.errors()})
    error = ValidationError("Invalid request: " + ", ".join(fields), fields=fields)
    return await storefront_error_handler(request, error)


def create_app(store: Optional[DocumentStore] = None, seed_on_startup: Optional[bool] = None) -> FastAPI:
    store = store or DocumentStore.from_settings()
    seed = settings.SEED_ON_STARTUP if seed_on_startup is None else seed_on_startup

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        configure_logging()
        await store.open()
        if seed:
            try:
                await seed_products(store)
            except StoreError:
                logger.exception("Seeding products failed")
        yield
        await store.close()

    app = FastAPI(title="Perfume Store API", lifespan=lifespan)
    app.state.store = store

    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )
    app.add_exception_handler(StorefrontError, storefront_error_handler)
    app.add_exception_handler(RequestValidationError, request_validation_handler)

    @app.get("/api/products", response_model=list[ProductOut])
    async def list_products(catalog: CatalogService = Depends(get_catalog)):
        return await catalog.list_all()

    @app.get("/api/products/featured/all", response_model=list[ProductOut])
    async def featured_products(catalog: CatalogService = Depends(get_catalog)):
        return await catalog.list_featured()

    @app.get("/api/products/search/{query:path}", response_model=list[ProductOut])
    async def search_products(query: str, catalog: CatalogService = Depends(get_catalog)):
        return await catalog.search(query)

    @app.get("/api/products/category/{category:path}", response_model=list[ProductOut])
    async def products_by_category(category: str, catalog: CatalogService = Depends(get_catalog)):
        return await catalog.list_by_category(category)

    @app.get("/api/products/{product_id}", response_model=ProductOut)
    async def get_product(product_id: str, catalog: CatalogService = Depends(get_catalog)):
        return await catalog.get_by_id(product_id)

    @app.put("/api/products/{product_id}", response_model=ProductOut)
    async def update_product(product_id: str, changes: ProductUpdate, catalog: CatalogService = Depends(get_catalog)):
        return await catalog.update(product_id, changes)

    @app.post("/api/orders", response_model=PlaceOrderResponse, status_code=201)
    async def create_order(payload: OrderCreate, orders: OrderService = Depends(get_orders)):
        order_id = await orders.place_order(
            customer_name=payload.customer_name,
            email=payload.email,
            phone=payload.phone,
            address=payload.address,
            items=payload.items,
            total_amount=payload.total_amount,
        )
        return PlaceOrderResponse(message="Order placed successfully!", order_id=order_id)

    @app.get("/api/orders/{order_id}", response_model=OrderDetail)
    async def get_order(order_id: str, orders: OrderService = Depends(get_orders)):
        return await orders.get_order(order_id)

    @app.get("/api/stats", response_model=Stats)
    async def stats(orders: OrderService = Depends(get_orders)):
        return await orders.stats()

    @app.post("/api/pricing/quote", response_model=pricing.Quote)
    async def price_cart(payload: QuoteRequest):
        return pricing.quote(payload.items, payload.promo_code)

    @app.get("/api/health", response_model=Health)
    async def health():
        return Health(status="OK", message="Server is running")

    return app


app = create_app()


if __name__ == "__main__":
    import uvicorn
    uvicorn.run(app, host=settings.HOST, port=settings.PORT)
