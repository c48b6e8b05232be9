"""
Vitrine Marketplace - Backend API
Catálogo, clientes, fretes y pedidos asistidos por vendedor
"""
import logging
from pathlib import Path
from dotenv import load_dotenv

# Load environment variables
env_path = Path(__file__).parent.parent / '.env'
load_dotenv(env_path)

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from app.core.config import settings

# Import API routers
from app.api import products, customers, shipping, orders
from app.api.dependencies import (
    get_customer_repository,
    get_order_repository,
    get_product_repository,
    get_shipping_calculator,
)

logging.basicConfig(
    level=settings.LOG_LEVEL.upper(),
    format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
)
logger = logging.getLogger(__name__)

# Crear aplicación FastAPI
app = FastAPI(
    title=settings.API_TITLE,
    version=settings.API_VERSION,
    description=settings.API_DESCRIPTION
)

# Configurar CORS
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.get_allowed_origins(),
    allow_credentials=True,
    allow_methods=["GET", "POST", "PUT", "DELETE", "OPTIONS", "PATCH"],
    allow_headers=["*"],
)

# Include API routers
app.include_router(products.router, prefix="/api/v1/products", tags=["Products"])
app.include_router(customers.router, prefix="/api/v1/customers", tags=["Customers"])
app.include_router(shipping.router, prefix="/api/v1/shipping", tags=["Shipping"])
app.include_router(orders.router, prefix="/api/v1/orders", tags=["Orders"])


@app.get("/")
async def root():
    """Endpoint raíz - Verificación de estado de la API"""
    return {
        "message": "Vitrine API - Marketplace",
        "status": "online",
        "version": settings.API_VERSION,
        "description": settings.API_DESCRIPTION
    }


@app.get("/health")
async def health():
    """Health check endpoint - verifica que los fixtures se hayan cargado"""
    try:
        catalog = get_product_repository()
        customers_repo = get_customer_repository()
        orders_repo = get_order_repository()
        calculator = get_shipping_calculator()
    except Exception as e:
        logger.error(f"Health check failed: {e}")
        return {
            "status": "degraded",
            "service": "vitrine-api",
            "version": settings.API_VERSION,
            "data": {"status": "error", "error": str(e)}
        }

    return {
        "status": "healthy",
        "service": "vitrine-api",
        "version": settings.API_VERSION,
        "data": {
            "status": "loaded",
            "products": catalog.get_stats()['total_products'],
            "customers": len(customers_repo.find_all()),
            "orders": orders_repo.find_all(limit=1)[1],
            "regions": len(calculator.available_regions())
        }
    }
