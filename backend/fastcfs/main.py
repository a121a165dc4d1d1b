import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from fastcfs.config import configure_logging, settings
from fastcfs.database import create_tables
from fastcfs.middleware.exceptions import register_exception_handlers
from fastcfs.middleware.rate_limit import RateLimitMiddleware
from fastcfs.middleware.security import SecurityHeadersMiddleware
from fastcfs.routers import (
    auth,
    blog,
    branches,
    cargo,
    contact,
    faqs,
    health,
    seo,
    testimonials,
    tracking,
)
from fastcfs.utils.cache import close_redis

logger = logging.getLogger("fastcfs")


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Configure logging; create tables in development; close Redis on shutdown."""
    configure_logging()
    if settings.environment == "development":
        await create_tables()
    logger.info("FastCFS API started (%s)", settings.environment)
    try:
        yield
    finally:
        await close_redis()
        logger.info("FastCFS API stopped")


app = FastAPI(
    title="FastCFS",
    description="Cargo tracking and website content API for FastCFS logistics",
    version="0.1.0",
    lifespan=lifespan,
)

# ── Exception Handlers ───────────────────────────────────────
register_exception_handlers(app)

# ── Middleware (outermost last) ──────────────────────────────
app.add_middleware(SecurityHeadersMiddleware)

app.add_middleware(
    RateLimitMiddleware,
    default_window=60,
    exempt_paths=["/health", "/health/ready", "/docs", "/openapi.json"],
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=[o.strip() for o in settings.allowed_origins.split(",") if o.strip()],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# ── Routers ──────────────────────────────────────────────────
app.include_router(health.router)
app.include_router(auth.router, prefix="/api/auth", tags=["auth"])

# Public site
app.include_router(tracking.router, prefix="/api/cargo", tags=["tracking"])
app.include_router(branches.router, prefix="/api/branches", tags=["branches"])
app.include_router(blog.router, prefix="/api/blog", tags=["blog"])
app.include_router(testimonials.router, prefix="/api/testimonials", tags=["testimonials"])
app.include_router(seo.router, prefix="/api/seo", tags=["seo"])
app.include_router(faqs.router, prefix="/api/faqs", tags=["faqs"])
app.include_router(contact.router, prefix="/api/contact", tags=["contact"])

# Admin dashboard (require_admin on every route)
app.include_router(cargo.router, prefix="/api/admin/cargo", tags=["admin: cargo"])
app.include_router(branches.admin_router, prefix="/api/admin/branches", tags=["admin: branches"])
app.include_router(blog.admin_router, prefix="/api/admin/blog", tags=["admin: blog"])
app.include_router(
    testimonials.admin_router, prefix="/api/admin/testimonials", tags=["admin: testimonials"]
)
app.include_router(seo.admin_router, prefix="/api/admin/seo", tags=["admin: seo"])
app.include_router(faqs.admin_router, prefix="/api/admin/faqs", tags=["admin: faqs"])
app.include_router(contact.admin_router, prefix="/api/admin/contact", tags=["admin: contact"])
