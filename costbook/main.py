from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
import logging

from .config import settings
from .database import engine, Base
from .routers import materials, recipe, products, wallet
from .storage import LocalStore
from .workspace import Workspace

logging.basicConfig(level=settings.LOG_LEVEL)
logger = logging.getLogger("costbook")

# Create the key-value table on first run
Base.metadata.create_all(bind=engine)

app = FastAPI(
    title=f"{settings.APP_NAME} Costing Calculator",
    description="Material, product and wallet costing for a small business",
    version="1.0.0"
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# API routes
app.include_router(materials.router, prefix="/api")
app.include_router(recipe.router, prefix="/api")
app.include_router(products.router, prefix="/api")
app.include_router(wallet.router, prefix="/api")


@app.get("/health")
def health():
    return {"status": "ok", "app": "costbook"}


@app.on_event("startup")
def load_workspace():
    """Read the stored collections once, before the first request."""
    if getattr(app.state, "workspace", None) is None:
        app.state.workspace = Workspace.load(LocalStore())
        logger.info("Workspace ready")
