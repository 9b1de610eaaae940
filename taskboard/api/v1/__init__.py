"""API v1 routes."""

from fastapi import APIRouter

from taskboard.api.v1 import auth, boards, cards, health, lists, permissions, roles, teams, users

router = APIRouter()
router.include_router(health.router, prefix="/health", tags=["health"])
router.include_router(auth.router, prefix="/authenticate", tags=["auth"])
router.include_router(users.router, prefix="/users", tags=["users"])
router.include_router(teams.router, prefix="/teams", tags=["teams"])
router.include_router(boards.router, prefix="/boards", tags=["boards"])
router.include_router(lists.router, prefix="/lists", tags=["lists"])
router.include_router(cards.router, prefix="/cards", tags=["cards"])
router.include_router(roles.router, prefix="/roles", tags=["roles"])
router.include_router(permissions.router, prefix="/permissions", tags=["permissions"])
