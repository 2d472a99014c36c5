# backend/main.py
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from database import init_db
from config import settings
from utils.session_auth import build_session_store

# Import routerów
from routes.auth import router as auth_router
from routes.basket import router as basket_router
from routes.orders import router as orders_router
from routes.shop import router as shop_router
from routes.admin import router as admin_router

# Inicjalizacja
init_db()

app = FastAPI(title="Appliance Store API", version="1.0.0")

# One session store per process; handlers reach it through app.state
app.state.session_store = build_session_store()

# CORS Configuration
origins = [
    "http://localhost:5173",
    "http://127.0.0.1:5173"
]

if settings.FRONTEND_URL:
    origins.append(settings.FRONTEND_URL)

# Session cookie must cross origins, so origins are listed explicitly
app.add_middleware(
    CORSMiddleware,
    allow_origins=origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Rejestracja routerów
app.include_router(auth_router)
app.include_router(shop_router)
app.include_router(basket_router)
app.include_router(orders_router)
app.include_router(admin_router)

@app.get("/")
def read_root():
    return {"message": "Appliance Store API is running"}
