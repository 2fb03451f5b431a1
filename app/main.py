"""FastAPI app: /health, /roles, /audit."""

from contextlib import asynccontextmanager

from deps import CORSMiddleware, FastAPI

from .config import get_host, get_port
from .routes import audit_router, health_router, roles_router, root_router
from .startup import validate_config


@asynccontextmanager
async def lifespan(_app):
    validate_config()
    yield


app = FastAPI(
    title="Hardcoded Text Audit API",
    description="Finds hardcoded user-facing text, maps it to roles and plans its conversion to translation keys.",
    version="0.1.0",
    lifespan=lifespan,
)
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(root_router)
app.include_router(health_router)
app.include_router(roles_router)
app.include_router(audit_router)


if __name__ == "__main__":
    import uvicorn

    uvicorn.run("app.main:app", host=get_host(), port=get_port())
