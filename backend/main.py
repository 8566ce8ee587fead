from fastapi import FastAPI
import uvicorn
from fastapi.middleware.cors import CORSMiddleware
from contextlib import asynccontextmanager

from core.config import settings
from core.deps import get_coverage_table
from core.logging import configure_logging
from routers.inventory import router as inventory_router
from routers.proxy import router as proxy_router

configure_logging()


@asynccontextmanager
async def lifespan(app: FastAPI):
    # Load the coverage table up front so a bad coverage file fails startup
    get_coverage_table()
    yield


app = FastAPI(
    title="Warehouse Availability API",
    description="Pincode-based warehouse stock lookup for the storefront",
    version="0.1.0",
    docs_url="/docs",
    redoc_url="/redoc",
    lifespan=lifespan,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


# Admin form lookup
app.include_router(inventory_router, prefix="/app/inventory", tags=["inventory"])

# Public storefront proxy
app.include_router(proxy_router, prefix="/apps/inventory", tags=["proxy"])


@app.get("/health")
async def health():
    return {"status": "ok"}


if __name__ == "__main__":
    uvicorn.run("main:app", host="0.0.0.0", port=8000, reload=True)
