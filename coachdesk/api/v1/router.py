"""
API v1 router.

Aggregates all v1 endpoints.
"""

from fastapi import APIRouter

from coachdesk.api.v1.endpoints import athletes, auth, questionnaires, users, workouts

api_router = APIRouter()

# Include endpoint routers
api_router.include_router(
    auth.router, prefix="/auth", tags=["Authentication"]
)
api_router.include_router(
    questionnaires.router, prefix="/questionnaires", tags=["Questionnaires"]
)
api_router.include_router(
    workouts.router, prefix="/workouts", tags=["Workouts"]
)
api_router.include_router(
    athletes.router, prefix="/athletes", tags=["Roster"]
)
api_router.include_router(
    users.router, prefix="/users", tags=["User administration"]
)
