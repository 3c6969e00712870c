import logging
from fastapi import Depends, FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from slowapi import Limiter, _rate_limit_exceeded_handler
from slowapi.util import get_remote_address
from slowapi.errors import RateLimitExceeded
from supabase import Client

from g4g.config import settings
from g4g.database.supabase_client import get_supabase
from g4g.modules.auth import routes as auth_routes
from g4g.modules.profiles import routes as profiles_routes
from g4g.modules.assessments import routes as assessments_routes
from g4g.modules.workouts import routes as workouts_routes
from g4g.modules.missions import routes as missions_routes
from g4g.modules.recipes import routes as recipes_routes
from g4g.modules.meal_plans import routes as meal_plans_routes
from g4g.modules.messages import routes as messages_routes
from g4g.modules.buddies import routes as buddies_routes
from g4g.modules.leaderboard import routes as leaderboard_routes
from g4g.modules.briefings import routes as briefings_routes
from g4g.modules.challenges import routes as challenges_routes
from g4g.modules.analytics import routes as analytics_routes
from g4g.modules.badges import routes as badges_routes
from g4g.modules.posts import routes as posts_routes
from g4g.modules.records import routes as records_routes
from g4g.modules.featured_meals import routes as featured_meals_routes
from g4g.modules.coaches import routes as coaches_routes

logging.basicConfig(
    level=getattr(logging, settings.log_level.upper(), logging.INFO),
    format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
    datefmt="%Y-%m-%dT%H:%M:%SZ",
)
logger = logging.getLogger(__name__)

limiter = Limiter(key_func=get_remote_address, default_limits=[settings.rate_limit])
app = FastAPI(
    title=settings.app_name,
    debug=settings.debug,
    redirect_slashes=False,
)
app.state.limiter = limiter
app.add_exception_handler(RateLimitExceeded, _rate_limit_exceeded_handler)


@app.exception_handler(Exception)
async def global_exception_handler(request: Request, exc: Exception):
    logger.exception("Unhandled exception: %s", exc)
    if settings.is_production:
        return JSONResponse(status_code=500, content={"detail": "Internal server error"})
    return JSONResponse(status_code=500, content={"detail": str(exc)})


class SecurityHeadersMiddleware:
    def __init__(self, app):
        self.app = app

    async def __call__(self, scope, receive, send):
        if scope["type"] != "http":
            await self.app(scope, receive, send)
            return

        async def send_with_headers(message):
            if message["type"] == "http.response.start":
                message.setdefault("headers", [])
                message["headers"].extend([
                    (b"X-Content-Type-Options", b"nosniff"),
                    (b"X-Frame-Options", b"DENY"),
                    (b"Referrer-Policy", b"strict-origin-when-cross-origin"),
                ])
            await send(message)

        await self.app(scope, receive, send_with_headers)


app.add_middleware(SecurityHeadersMiddleware)
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.get_cors_origins_list(),
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Include module routes
for module_routes in (
    auth_routes,
    profiles_routes,
    assessments_routes,
    workouts_routes,
    missions_routes,
    recipes_routes,
    meal_plans_routes,
    messages_routes,
    buddies_routes,
    leaderboard_routes,
    briefings_routes,
    challenges_routes,
    analytics_routes,
    badges_routes,
    posts_routes,
    records_routes,
    featured_meals_routes,
    coaches_routes,
):
    app.include_router(module_routes.router, prefix="/api/v1")


@app.on_event("startup")
async def startup_event():
    logger.info("Application startup (%s)", settings.environment)


@app.on_event("shutdown")
async def shutdown_event():
    logger.info("Application shutdown")


@app.get("/")
async def root():
    return {"message": f"Welcome to {settings.app_name}", "status": "healthy"}


@app.get("/health")
@limiter.exempt
async def health():
    return {"status": "healthy"}


@app.get("/ready")
@limiter.exempt
async def ready(supabase: Client = Depends(get_supabase)):
    """Readiness check: the profiles table must be reachable"""
    try:
        supabase.table("profiles").select("id").limit(1).execute()
    except Exception as e:
        logger.warning("Readiness check failed: %s", e)
        return JSONResponse(status_code=503, content={"status": "unavailable"})
    return {"status": "ready"}
