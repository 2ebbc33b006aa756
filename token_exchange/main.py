from __future__ import annotations

import logging

from fastapi import FastAPI

from token_exchange.api.health import router as health_router
from token_exchange.api.metrics_endpoint import router as metrics_router
from token_exchange.api.oauth import router as oauth_router
from token_exchange.core.config import SETTINGS
from token_exchange.core.logging import setup_logging
from token_exchange.middleware.metrics import MetricsMiddleware
from token_exchange.middleware.request_context import (
    RequestContextMiddleware,
    install_request_context_filter,
)

# Configure logging before anything else runs.
setup_logging(SETTINGS.log_level, json_format=SETTINGS.log_json)
install_request_context_filter()

logger = logging.getLogger(__name__)

app = FastAPI(
    title="oauth-token-exchange",
    docs_url="/docs" if SETTINGS.is_dev else None,
    redoc_url="/redoc" if SETTINGS.is_dev else None,
)

# Last-added runs first: RequestContext → Metrics → route handler
app.add_middleware(MetricsMiddleware)
app.add_middleware(RequestContextMiddleware)

app.include_router(metrics_router)
app.include_router(health_router)
app.include_router(oauth_router)

logger.info(
    "oauth-token-exchange started  env=%s log_level=%s port=%d docs=%s",
    SETTINGS.app_env,
    SETTINGS.log_level,
    SETTINGS.port,
    "on" if SETTINGS.is_dev else "off",
)
