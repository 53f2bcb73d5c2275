"""
FastAPI application exposing compatibility scoring over HTTP.

Endpoints:
    GET  /health         liveness check
    POST /compatibility  score two users by id
    POST /dealbreakers   hard-filter check for two users by id

Error mapping:
    400  missing or blank identifiers, malformed request body
    500  profile fetch failure or missing personality data
"""

import argparse
import logging
from datetime import datetime
from typing import Optional, Tuple

import uvicorn
from fastapi import FastAPI, HTTPException, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from pydantic import BaseModel

from .. import __version__
from ..exceptions import InvalidInput, MissingProfileData, ProfileNotFound
from ..inference import CompatibilityScorer, create_scorer, check_dealbreakers
from ..schema import UserProfile
from .store import ProfileStore, JsonProfileStore

logger = logging.getLogger(__name__)


# ============================================================================
# REQUEST MODELS
# ============================================================================

class CompatibilityRequest(BaseModel):
    """Two user identifiers; validated by the endpoint so blanks map to 400."""
    user1_id: Optional[str] = None
    user2_id: Optional[str] = None


def _validate_ids(request: CompatibilityRequest) -> Tuple[str, str]:
    """
    Raises:
        InvalidInput: If an id is missing or blank, or both ids are equal
    """
    missing = [
        name for name in ("user1_id", "user2_id")
        if not (getattr(request, name) or "").strip()
    ]
    if missing:
        raise InvalidInput(f"Missing user IDs: {', '.join(missing)}")
    user1_id = request.user1_id.strip()
    user2_id = request.user2_id.strip()
    if user1_id == user2_id:
        raise InvalidInput("user1_id and user2_id must be different users")
    return user1_id, user2_id


def create_app(store: ProfileStore, scorer: Optional[CompatibilityScorer] = None) -> FastAPI:
    """
    Build the FastAPI application.

    Args:
        store: Profile store used to resolve user ids
        scorer: Compatibility scorer (default configuration when None)

    Returns:
        FastAPI application
    """
    scorer = scorer or CompatibilityScorer()

    app = FastAPI(title="matchcore Compatibility API", version=__version__)
    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    @app.exception_handler(RequestValidationError)
    async def validation_error_handler(request: Request, exc: RequestValidationError):
        logger.warning(f"Rejected malformed request to {request.url.path}: {exc.errors()}")
        return JSONResponse(status_code=400, content={"detail": "Malformed request body"})

    def resolve(request: CompatibilityRequest) -> Tuple[UserProfile, UserProfile]:
        try:
            user1_id, user2_id = _validate_ids(request)
        except InvalidInput as e:
            raise HTTPException(status_code=400, detail=str(e))
        try:
            profile_a, profile_b = store.get_profiles([user1_id, user2_id])
        except ProfileNotFound as e:
            logger.error(f"Profile fetch failed: {e}")
            raise HTTPException(status_code=500, detail=str(e))
        return profile_a, profile_b

    # ========================================================================
    # HEALTH CHECK
    # ========================================================================

    @app.get("/health")
    async def health_check():
        """Health check endpoint for monitoring"""
        return {
            "status": "healthy",
            "service": "matchcore",
            "version": __version__,
            "timestamp": datetime.now().isoformat()
        }

    # ========================================================================
    # SCORING ENDPOINTS
    # ========================================================================

    @app.post("/compatibility")
    async def compatibility(request: CompatibilityRequest):
        """Score two users and return the full breakdown"""
        profile_a, profile_b = resolve(request)
        try:
            result = scorer.score(profile_a, profile_b)
        except MissingProfileData as e:
            logger.error(f"Cannot score {profile_a.user_id}/{profile_b.user_id}: {e}")
            raise HTTPException(status_code=500, detail=str(e))
        return result.to_dict()

    @app.post("/dealbreakers")
    async def dealbreakers(request: CompatibilityRequest):
        """Check hard filters for two users"""
        profile_a, profile_b = resolve(request)
        return check_dealbreakers(profile_a, profile_b).to_dict()

    app.state.store = store
    app.state.scorer = scorer
    return app


def main() -> None:
    """Serve the API with uvicorn using the service section of the config."""
    from ..configs import load_config, validate_config

    logging.basicConfig(
        level=logging.INFO,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s"
    )

    parser = argparse.ArgumentParser(description="Run the compatibility scoring API")
    parser.add_argument("--config", type=str, default="configs/config.yaml",
                        help="Path to configuration file")
    parser.add_argument("--host", type=str, default=None, help="Bind host (overrides config)")
    parser.add_argument("--port", type=int, default=None, help="Bind port (overrides config)")
    args = parser.parse_args()

    config = load_config(args.config)
    for issue in validate_config(config):
        logger.warning(f"Config issue: {issue}")

    service_config = config.get("service", {})
    profiles_path = service_config.get(
        "profiles_path", config.get("data", {}).get("profiles", {}).get("path")
    )
    store = JsonProfileStore(profiles_path)
    app = create_app(store, create_scorer(config))

    uvicorn.run(
        app,
        host=args.host or service_config.get("host", "0.0.0.0"),
        port=args.port or service_config.get("port", 8000)
    )


if __name__ == "__main__":
    main()
