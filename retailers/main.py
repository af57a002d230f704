# retailers/main.py
import logging

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from retailers.config import settings
from retailers.database import init_db

# Routers
from retailers.routes.auth import router as auth_router
from retailers.routes.admin import router as admin_router
from retailers.routes.logs import router as logs_router
from retailers.routes.cart import router as cart_router
from retailers.routes.orders import router as orders_router
from retailers.routes.products import router as products_router
from retailers.routes.customers import router as customers_router
from retailers.routes.legacy_orders import router as legacy_orders_router

logging.basicConfig(
    level=settings.LOG_LEVEL.upper(),
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)

# Initialisation
init_db()

app = FastAPI(title="ABC Retailers API", version="1.0.0")

# CORS Configuration
origins = [
    "http://localhost:5173",
    "http://127.0.0.1:5173",
]
if settings.FRONTEND_URL and settings.FRONTEND_URL not in origins:
    origins.append(settings.FRONTEND_URL)

app.add_middleware(
    CORSMiddleware,
    allow_origins=origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Router registration
app.include_router(auth_router)
app.include_router(admin_router)
app.include_router(logs_router)
app.include_router(cart_router)
app.include_router(orders_router)
app.include_router(products_router)
app.include_router(customers_router)
app.include_router(legacy_orders_router)

@app.get("/")
def read_root():
    return {"message": "ABC Retailers API is running"}
