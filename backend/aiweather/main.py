"""
Application FastAPI principale pour la passerelle AI Weather
Point d'entrée de l'API backend
"""
import logging
from logging.handlers import RotatingFileHandler
import sys
from contextlib import asynccontextmanager
from fastapi import Depends, FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse, RedirectResponse
from fastapi.requests import Request
from starlette.middleware.base import BaseHTTPMiddleware
import sentry_sdk

from aiweather.core.settings import Settings, get_settings
from aiweather.api.routers import router
from aiweather.api.routers._shared import PlainTextError, plain_text_error_handler

API_VERSION = "1.0.0"

settings = get_settings()

# Initialiser Sentry (uniquement si SENTRY_DSN est configure)
if settings.SENTRY_DSN:
    sentry_sdk.init(
        dsn=settings.SENTRY_DSN,
        environment=settings.ENVIRONMENT,
        traces_sample_rate=0.2 if settings.ENVIRONMENT == "production" else 1.0,
        send_default_pii=False,
    )

# Configuration du logging conditionnée par ENVIRONMENT
_log_level = getattr(logging, settings.LOG_LEVEL, logging.INFO)

_handler = logging.StreamHandler(sys.stdout)

if settings.ENVIRONMENT == "production":
    from pythonjsonlogger import jsonlogger
    _handler.setFormatter(jsonlogger.JsonFormatter(
        "%(asctime)s %(name)s %(levelname)s %(message)s",
        rename_fields={"asctime": "timestamp", "levelname": "level"},
    ))
else:
    _handler.setFormatter(logging.Formatter(
        '%(asctime)s - %(name)s - %(levelname)s - %(message)s'
    ))

_handlers: list[logging.Handler] = [_handler]
if settings.ENVIRONMENT == "development":
    _handlers.append(RotatingFileHandler(
        'aiweather.log', maxBytes=5_000_000, backupCount=3,
    ))

logging.basicConfig(
    level=_log_level,
    handlers=_handlers,
)

# En production, réduire le bruit des modules tiers
if settings.ENVIRONMENT == "production":
    logging.getLogger("uvicorn.access").setLevel(logging.WARNING)
    logging.getLogger("httpx").setLevel(logging.WARNING)

logger = logging.getLogger(__name__)


def _provider_status(current: Settings) -> dict[str, str]:
    """Etat de configuration des fournisseurs externes (sans appel reseau)."""
    return {
        "openweather": "configured" if current.OPENWEATHER_API_KEY else "missing_api_key",
        "groq": "configured" if current.GROQ_API_KEY else "missing_api_key",
    }


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Gestionnaire de cycle de vie de l'application"""
    # Startup
    logger.info(f"🚀 Démarrage d'AI Weather API v{API_VERSION}")
    logger.info(f"Environment: {settings.ENVIRONMENT}")
    logger.info(f"Debug mode: {settings.DEBUG}")

    # Les clés manquantes ne bloquent pas le démarrage : chaque appel echouera proprement
    for provider, state in _provider_status(settings).items():
        if state != "configured":
            logger.warning(f"⚠️  {provider}: clé API absente — les appels renverront une erreur de configuration")

    yield

    # Shutdown
    logger.info("🛑 Arrêt d'AI Weather API")

app = FastAPI(
    title="AI Weather API",
    description="Météo OpenWeather enrichie de descriptions et suggestions d'activités générées par IA",
    version=API_VERSION,
    docs_url="/docs" if settings.ENVIRONMENT != "production" else None,
    redoc_url="/redoc" if settings.ENVIRONMENT != "production" else None,
    lifespan=lifespan
)

# Middlewares de securite en production
if settings.ENVIRONMENT == "production":
    class HTTPSRedirectMiddleware(BaseHTTPMiddleware):
        async def dispatch(self, request: Request, call_next):
            if request.headers.get("x-forwarded-proto") == "http":
                url = request.url.replace(scheme="https")
                return RedirectResponse(url, status_code=301)
            return await call_next(request)

    class SecurityHeadersMiddleware(BaseHTTPMiddleware):
        """Ajoute les headers de securite sur toutes les reponses en production."""
        async def dispatch(self, request: Request, call_next):
            response = await call_next(request)
            response.headers["Strict-Transport-Security"] = "max-age=63072000; includeSubDomains"
            response.headers["X-Content-Type-Options"] = "nosniff"
            response.headers["X-Frame-Options"] = "DENY"
            return response

    app.add_middleware(SecurityHeadersMiddleware)
    app.add_middleware(HTTPSRedirectMiddleware)

# Configuration CORS
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.ALLOWED_ORIGINS,
    allow_credentials=True,
    allow_methods=["GET", "OPTIONS"],
    allow_headers=["*"],
)

# Erreurs renvoyees en texte brut (400 ville vide, 500 echec fournisseur)
app.add_exception_handler(PlainTextError, plain_text_error_handler)

# Inclure les routes
app.include_router(router)

@app.get("/health")
async def health_check(current: Settings = Depends(get_settings)):
    """Point de santé de l'API"""
    services = _provider_status(current)
    status = "healthy" if all(s == "configured" for s in services.values()) else "degraded"
    return JSONResponse(
        content={
            "status": status,
            "version": API_VERSION,
            "environment": current.ENVIRONMENT,
            "services": services,
        }
    )

@app.exception_handler(Exception)
async def global_exception_handler(request: Request, exc):
    """Gestionnaire global des exceptions"""
    logger.error(f"Erreur non gérée: {type(exc).__name__}: {str(exc)}", exc_info=True)
    if settings.DEBUG:
        content = {
            "detail": "Erreur interne du serveur",
            "type": type(exc).__name__,
            "message": str(exc),
        }
    else:
        content = {
            "detail": "Erreur interne du serveur",
            "message": "Une erreur s'est produite",
        }
    return JSONResponse(status_code=500, content=content)

if __name__ == "__main__":
    import uvicorn
    logger.info(f"Lancement de l'application sur le port 8000")
    uvicorn.run(
        "aiweather.main:app",
        host="0.0.0.0",
        port=8000,
        reload=settings.DEBUG,
        log_level=settings.LOG_LEVEL.lower(),
    )
